# backend/main.py

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from routers import items_router, upload_router
from services.dataset import build_services
from utils.errors import (
    ItemListError,
    NoFileError,
    NotFoundError,
    UnsupportedFormatError,
)
from utils.logger import get_logger
from utils.settings import Settings

logger = get_logger(__name__)

ERROR_STATUS = {
    NoFileError: 400,
    UnsupportedFormatError: 400,
    NotFoundError: 404,
}


def status_for(error: ItemListError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 500


# ---------------------------------------------------------
# APP INIT
# ---------------------------------------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Master Item List API", version="0.1.0")
    app.state.settings = settings
    app.state.services = build_services(settings.data_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ItemListError)
    async def item_list_error_handler(request: Request, exc: ItemListError):
        status = status_for(exc)
        if status >= 500:
            logger.error("request_failed", path=request.url.path, error=str(exc))
        else:
            logger.warning("request_rejected", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=status, content={"error": str(exc)})

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # ---------------------------------------------------------
    # ROUTERS
    # ---------------------------------------------------------

    app.include_router(items_router)
    app.include_router(upload_router)

    # Front-end files last, so API routes win.
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")

    return app


app = create_app()


if __name__ == "__main__":
    settings = app.state.settings
    logger.info(
        "server_starting",
        host=settings.host,
        port=settings.port,
        data_dir=str(settings.data_dir),
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
