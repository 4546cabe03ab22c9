# backend/services/normalizer.py

from pathlib import Path

import pandas as pd

from utils.data_store import move_into_place, write_text_atomic
from utils.errors import ParseError, SheetNotFoundError, UnsupportedFormatError

DATA_SHEET_NAME = "DataSheet"

CSV_EXTENSION = ".csv"

# Spreadsheet extension -> pandas read_excel engine
SPREADSHEET_ENGINES = {
    ".xlsb": "pyxlsb",
    ".xlsx": "openpyxl",
}

SUPPORTED_EXTENSIONS = (CSV_EXTENSION, *SPREADSHEET_ENGINES)


def extension_of(filename: str) -> str:
    return Path(filename).suffix.lower()


def ensure_supported(filename: str) -> str:
    ext = extension_of(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError("Only CSV or XLSB files are allowed")
    return ext


def spreadsheet_to_csv(path: Path, engine: str) -> str:
    """
    Convert the DataSheet sheet of a workbook to CSV text.
    - every cell is read as text, empty cells stay ""
    - rows with no content are dropped
    - the first row is written as-is and becomes the dataset header
    """
    try:
        with pd.ExcelFile(path, engine=engine) as workbook:
            if DATA_SHEET_NAME not in workbook.sheet_names:
                raise SheetNotFoundError(f'Sheet "{DATA_SHEET_NAME}" not found')
            frame = workbook.parse(DATA_SHEET_NAME, header=None, dtype=str, na_filter=False)
    except SheetNotFoundError:
        raise
    except Exception as error:
        # pandas and its engines raise a wide mix of types for corrupt files
        raise ParseError(f"Could not read spreadsheet: {error}") from error

    if frame.empty:
        return ""

    frame = frame[~(frame == "").all(axis=1)]
    return frame.to_csv(index=False, header=False, lineterminator="\n")


class FormatNormalizer:
    """
    Turns an accepted upload into the canonical CSV dataset.

    CSV uploads are renamed into place. Spreadsheets are converted and the
    CSV text is written atomically. Either way the temp upload is gone when
    normalize() returns or raises.
    """

    def normalize(self, temp_path: Path, original_name: str, destination: Path) -> str:
        try:
            ext = ensure_supported(original_name)
            if ext == CSV_EXTENSION:
                move_into_place(temp_path, destination)
            else:
                text = spreadsheet_to_csv(temp_path, SPREADSHEET_ENGINES[ext])
                write_text_atomic(destination, text)
        finally:
            temp_path.unlink(missing_ok=True)
        return ext
