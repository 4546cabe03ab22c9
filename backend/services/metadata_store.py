# backend/services/metadata_store.py

import json
from pathlib import Path

from models.item_models import MetadataRecord
from utils.data_store import write_text_atomic
from utils.logger import get_logger

logger = get_logger(__name__)


class MetadataStore:
    """
    Persists the {uploadedAt, count} record of the current dataset.
    Every retrieval reads it to decide whether the row cache is fresh.
    """

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> MetadataRecord:
        if not self.path.exists():
            return MetadataRecord()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return MetadataRecord.model_validate(data)
        except (OSError, ValueError) as error:
            # Unreadable metadata reports the same defaults as "never uploaded".
            logger.warning("metadata_unreadable", path=str(self.path), error=str(error))
            return MetadataRecord()

    def write(self, record: MetadataRecord) -> None:
        write_text_atomic(self.path, record.model_dump_json())
