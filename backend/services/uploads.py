# backend/services/uploads.py

import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from services.normalizer import ensure_supported
from utils.errors import StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IncomingFile:
    """An accepted upload sitting in a temp file inside the data directory."""

    temp_path: Path
    original_name: str


def stage_upload(filename: str, stream: BinaryIO, directory: Path) -> IncomingFile:
    """
    Copy an uploaded body into `<millis>-<name>` under `directory`.

    The extension is checked before anything touches the disk. If the body
    fails mid-read the partial temp file is removed.
    """
    original_name = Path(filename).name
    ensure_supported(original_name)

    temp_path = directory / f"{int(time.time() * 1000)}-{original_name}"
    try:
        with open(temp_path, "wb") as handle:
            shutil.copyfileobj(stream, handle)
    except OSError as error:
        temp_path.unlink(missing_ok=True)
        raise StorageError(f"Failed to receive upload {original_name}: {error}") from error
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise

    logger.info("upload_staged", filename=original_name, temp_path=str(temp_path))
    return IncomingFile(temp_path=temp_path, original_name=original_name)
