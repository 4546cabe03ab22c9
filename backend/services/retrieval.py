# backend/services/retrieval.py

from pathlib import Path
from typing import Iterable, List, Optional, Union

from models.item_models import ItemsPage, Row
from services.row_cache import RowCache
from utils.errors import NotFoundError

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 200

PageArg = Union[int, str, None]


def coerce_positive(raw: PageArg, default: int) -> int:
    """
    Lenient query-number parsing: missing or non-numeric values use the
    default, and anything below 1 is floored to 1. Partial numbers such
    as "10abc" count as non-numeric.
    """
    if raw is None or raw == "":
        value = default
    else:
        try:
            value = int(raw)
        except (TypeError, ValueError):
            value = default
    return max(1, value)


def parse_columns(raw: Optional[str]) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


def project(rows: List[Row], columns: Iterable[str]) -> List[Row]:
    wanted = set(columns)
    if not wanted:
        return rows
    return [{key: value for key, value in row.items() if key in wanted} for row in rows]


class RetrievalService:
    def __init__(self, dataset_path: Path, row_cache: RowCache):
        self.dataset_path = dataset_path
        self.row_cache = row_cache

    def list_items(
        self,
        page: PageArg = None,
        page_size: PageArg = None,
        columns: Optional[Iterable[str]] = None,
    ) -> ItemsPage:
        """
        One page of the dataset.
        - total counts every row, independent of the page
        - a page past the end is empty, never an error
        - columns keeps only the requested keys that exist in each row
        """
        if not self.dataset_path.exists():
            return ItemsPage(total=0, page=1, pageSize=0, rows=[])

        page = coerce_positive(page, DEFAULT_PAGE)
        page_size = coerce_positive(page_size, DEFAULT_PAGE_SIZE)

        all_rows = self.row_cache.get()
        start = (page - 1) * page_size
        rows = project(all_rows[start:start + page_size], columns or [])

        return ItemsPage(total=len(all_rows), page=page, pageSize=page_size, rows=rows)

    def list_all(self) -> List[Row]:
        """Every row with every column, unpaginated."""
        if not self.dataset_path.exists():
            return []
        return self.row_cache.get()

    def dataset_file(self) -> Path:
        if not self.dataset_path.exists():
            raise NotFoundError("File not found")
        return self.dataset_path
