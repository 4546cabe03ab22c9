# backend/services/row_cache.py

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from models.item_models import Row
from services.csv_parser import read_rows
from services.metadata_store import MetadataStore
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    rows: List[Row]
    stamp: Optional[str]


class RowCache:
    """
    Parsed dataset held in memory, tagged with the uploadedAt stamp it was
    built from. An entry is served only while its stamp equals the one in
    the metadata store; otherwise the whole file is parsed again.

    No locking: two requests may rebuild at once, and since both parse
    the same file for the same stamp, whichever writes last is equivalent.
    """

    def __init__(
        self,
        dataset_path: Path,
        metadata_store: MetadataStore,
        parser: Callable[[Path], List[Row]] = read_rows,
    ):
        self.dataset_path = dataset_path
        self.metadata_store = metadata_store
        self._parse = parser
        self._entry: Optional[CacheEntry] = None

    @property
    def stamp(self) -> Optional[str]:
        return self._entry.stamp if self._entry else None

    def get(self) -> List[Row]:
        stamp = self.metadata_store.read().uploadedAt

        entry = self._entry
        if entry is not None and entry.stamp == stamp:
            return entry.rows

        # Nothing cached while the dataset is missing, so the next upload
        # is picked up on the following call.
        if not self.dataset_path.exists():
            return []
        try:
            rows = self._parse(self.dataset_path)
        except NotFoundError:
            return []

        self._entry = CacheEntry(rows=rows, stamp=stamp)
        logger.info("row_cache_rebuilt", stamp=stamp, rows=len(rows))
        return rows

    def invalidate(self, stamp: Optional[str]) -> bool:
        """Drop the entry unless it was built from `stamp`. Returns True if dropped."""
        entry = self._entry
        if entry is None or entry.stamp == stamp:
            return False
        self._entry = None
        return True

    def clear(self) -> None:
        self._entry = None
