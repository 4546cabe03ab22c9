# backend/routers/items.py

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from models.item_models import ItemsPage, MetadataRecord
from routers.dependencies import get_services
from services.dataset import DatasetServices
from services.retrieval import parse_columns

router = APIRouter(tags=["Items"])


@router.get("/api/metadata", response_model=MetadataRecord)
def metadata(services: DatasetServices = Depends(get_services)):
    return services.metadata_store.read()


@router.get("/api/items", response_model=ItemsPage)
def list_items(
    page: Optional[str] = None,
    pageSize: Optional[str] = None,
    columns: Optional[str] = None,
    services: DatasetServices = Depends(get_services),
):
    """
    Paginated rows.
    Optional filters:
      - page=2
      - pageSize=50
      - columns=sku,name
    """
    return services.retrieval.list_items(page, pageSize, parse_columns(columns))


@router.get("/api/items/all", response_model=List[Dict[str, str]])
def list_all_items(services: DatasetServices = Depends(get_services)):
    """Every row, every column, no paging."""
    return services.retrieval.list_all()


@router.get("/item_list.csv")
def download_dataset(services: DatasetServices = Depends(get_services)):
    path = services.retrieval.dataset_file()
    return FileResponse(path, media_type="text/csv")
