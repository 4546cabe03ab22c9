# backend/services/ingestion.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from models.item_models import MetadataRecord
from services.csv_parser import read_rows
from services.metadata_store import MetadataStore
from services.normalizer import FormatNormalizer
from services.uploads import IncomingFile
from utils.data_store import DataPaths
from utils.errors import ItemListError, NoFileError
from utils.logger import get_logger

logger = get_logger(__name__)


def format_stamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_stamp(stamp: str) -> datetime:
    return datetime.fromisoformat(stamp.replace("Z", "+00:00"))


def next_stamp(previous: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Stamp for a new upload. Always later than `previous`, even if the
    clock has not moved, so a new upload can never reuse a cached stamp.
    """
    current = now or datetime.now(timezone.utc)
    if previous:
        try:
            last = parse_stamp(previous)
        except ValueError:
            last = None
        if last is not None and last.tzinfo is None:
            # Stamps written without an offset are UTC.
            last = last.replace(tzinfo=timezone.utc)
        if last is not None and current <= last:
            current = last + timedelta(microseconds=1)
    return format_stamp(current)


class IngestionPipeline:
    """
    upload -> normalize -> count -> metadata.

    The metadata write comes strictly after the dataset is committed, and
    it is the only thing that moves the cache stamp.
    """

    def __init__(self, paths: DataPaths, metadata_store: MetadataStore, normalizer: FormatNormalizer):
        self.paths = paths
        self.metadata_store = metadata_store
        self.normalizer = normalizer

    def ingest(self, upload: Optional[IncomingFile]) -> MetadataRecord:
        if upload is None:
            raise NoFileError("No file uploaded")

        dataset = self.paths.dataset_path
        source_format = self.normalizer.normalize(upload.temp_path, upload.original_name, dataset)

        try:
            count = len(read_rows(dataset))
            previous = self.metadata_store.read().uploadedAt
            record = MetadataRecord(uploadedAt=next_stamp(previous), count=count)
            self.metadata_store.write(record)
        except ItemListError as error:
            # Never leave a committed file without a matching metadata record.
            dataset.unlink(missing_ok=True)
            logger.error("ingestion_rolled_back", filename=upload.original_name, error=str(error))
            raise

        logger.info(
            "dataset_ingested",
            filename=upload.original_name,
            source_format=source_format,
            uploaded_at=record.uploadedAt,
            count=record.count,
        )
        return record
