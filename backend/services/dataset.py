# backend/services/dataset.py

from dataclasses import dataclass
from pathlib import Path

from services.ingestion import IngestionPipeline
from services.metadata_store import MetadataStore
from services.normalizer import FormatNormalizer
from services.retrieval import RetrievalService
from services.row_cache import RowCache
from utils.data_store import DataPaths


@dataclass
class DatasetServices:
    """Everything one app instance needs, wired to a single data directory."""

    paths: DataPaths
    metadata_store: MetadataStore
    ingestion: IngestionPipeline
    row_cache: RowCache
    retrieval: RetrievalService


def build_services(data_dir: Path) -> DatasetServices:
    paths = DataPaths(data_dir).ensure()
    metadata_store = MetadataStore(paths.metadata_path)
    row_cache = RowCache(paths.dataset_path, metadata_store)

    return DatasetServices(
        paths=paths,
        metadata_store=metadata_store,
        ingestion=IngestionPipeline(paths, metadata_store, FormatNormalizer()),
        row_cache=row_cache,
        retrieval=RetrievalService(paths.dataset_path, row_cache),
    )
