# backend/services/csv_parser.py

import csv
from pathlib import Path
from typing import List

from models.item_models import Row
from utils.errors import NotFoundError, ParseError, StorageError


def read_rows(path: Path) -> List[Row]:
    """
    Parse the dataset into a list of dict rows.

    The header line names the columns; values stay text. This is the only
    CSV reader in the service: ingestion counts with it and the row cache
    builds from it, so both always agree on the number of rows.
    """
    try:
        with open(path, newline="", encoding="utf-8-sig") as handle:
            reader = csv.reader(handle, strict=True)
            try:
                header = next(reader, None)
                if header is None:
                    return []
                return [_to_row(header, record) for record in reader if record]
            except csv.Error as error:
                raise ParseError(f"Malformed CSV at line {reader.line_num}: {error}") from error
    except FileNotFoundError as error:
        raise NotFoundError("File not found") from error
    except UnicodeDecodeError as error:
        raise ParseError(f"Dataset is not valid UTF-8: {error.reason}") from error
    except OSError as error:
        raise StorageError(f"Failed to read {path.name}: {error}") from error


def _to_row(header: List[str], record: List[str]) -> Row:
    row: Row = {}
    for index, value in enumerate(record):
        # Fields past the header get positional names.
        key = header[index] if index < len(header) else f"_{index}"
        row[key] = value

    for name in header[len(record):]:
        row[name] = ""
    return row
