# backend/utils/data_store.py

import errno
import os
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path

from utils.errors import StorageError
from utils.logger import get_logger

DATASET_FILE_NAME = "item_list.csv"
METADATA_FILE_NAME = "metadata.json"

logger = get_logger(__name__)


@dataclass(frozen=True)
class DataPaths:
    """
    On-disk layout of a deployment: one data directory holding the
    canonical dataset and its metadata record. Upload temp files are
    staged in the same directory so renames stay on one volume.
    """

    data_dir: Path

    @property
    def dataset_path(self) -> Path:
        return self.data_dir / DATASET_FILE_NAME

    @property
    def metadata_path(self) -> Path:
        return self.data_dir / METADATA_FILE_NAME

    def ensure(self) -> "DataPaths":
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise StorageError(f"Cannot create data directory {self.data_dir}: {error}") from error
        return self


def _staging_path(destination: Path, suffix: str) -> Path:
    return destination.with_name(f".{destination.name}.{uuid.uuid4().hex}.{suffix}")


def write_text_atomic(path: Path, text: str) -> None:
    """
    Write text next to `path` and rename it into place, so readers see
    either the old file or the complete new one.
    """
    staging = _staging_path(path, "tmp")
    try:
        with open(staging, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(staging, path)
    except OSError as error:
        staging.unlink(missing_ok=True)
        raise StorageError(f"Failed to write {path.name}: {error}") from error


def move_into_place(source: Path, destination: Path) -> None:
    """
    Atomically move `source` onto `destination`.

    os.replace is only atomic when both paths live on the same volume.
    When they don't (EXDEV), copy to a staging file beside the destination,
    verify its size, rename it over the destination and drop the source.
    """
    try:
        os.replace(source, destination)
        return
    except OSError as error:
        if error.errno != errno.EXDEV:
            raise StorageError(f"Failed to move {source.name} into place: {error}") from error

    logger.warning("cross_volume_move", source=str(source), destination=str(destination))
    _copy_into_place(source, destination)


def _copy_into_place(source: Path, destination: Path) -> None:
    staging = _staging_path(destination, "partial")
    try:
        shutil.copyfile(source, staging)
        expected = source.stat().st_size
        copied = staging.stat().st_size
        if copied != expected:
            raise StorageError(
                f"Copy of {source.name} is incomplete ({copied} of {expected} bytes)"
            )
        os.replace(staging, destination)
        source.unlink()
    except OSError as error:
        raise StorageError(f"Failed to copy {source.name} into place: {error}") from error
    finally:
        staging.unlink(missing_ok=True)
