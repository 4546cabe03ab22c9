from pydantic import BaseModel
from typing import Dict, List, Optional

Row = Dict[str, str]


class MetadataRecord(BaseModel):
    uploadedAt: Optional[str] = None
    count: int = 0


class ItemsPage(BaseModel):
    total: int
    page: int
    pageSize: int
    rows: List[Row]
