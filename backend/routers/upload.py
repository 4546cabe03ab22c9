# backend/routers/upload.py

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from models.item_models import MetadataRecord
from routers.dependencies import get_services
from services.dataset import DatasetServices
from services.uploads import stage_upload

router = APIRouter(tags=["Upload"])


@router.post("/upload", response_model=MetadataRecord)
def upload_dataset(
    csv: Optional[UploadFile] = File(None),
    services: DatasetServices = Depends(get_services),
):
    """
    Accepts a CSV or DataSheet workbook in the `csv` field and replaces
    the dataset with it. Returns the committed metadata record.
    """
    incoming = None
    if csv is not None and csv.filename:
        incoming = stage_upload(csv.filename, csv.file, services.paths.data_dir)

    record = services.ingestion.ingest(incoming)

    # Old rows are stale now; free them instead of waiting for the next read.
    services.row_cache.invalidate(record.uploadedAt)
    return record
