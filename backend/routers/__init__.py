# backend/routers/__init__.py

from .items import router as items_router
from .upload import router as upload_router
