import shutil

import pytest

from services.csv_parser import read_rows
from services.normalizer import FormatNormalizer, ensure_supported, spreadsheet_to_csv
from tests.samples import fixture_path, write_workbook
from utils.errors import ParseError, SheetNotFoundError, UnsupportedFormatError


@pytest.mark.parametrize("name", ["items.csv", "ITEMS.CSV", "book.xlsb", "book.xlsx"])
def test_supported_extensions(name):
    ensure_supported(name)


@pytest.mark.parametrize("name", ["data.txt", "items.csv.zip", "noextension"])
def test_unsupported_extensions(name):
    with pytest.raises(UnsupportedFormatError):
        ensure_supported(name)


def test_csv_is_moved_into_place(tmp_path):
    temp = tmp_path / "123-items.csv"
    temp.write_text("a,b\n1,2\n")
    destination = tmp_path / "item_list.csv"

    assert FormatNormalizer().normalize(temp, "items.csv", destination) == ".csv"
    assert not temp.exists()
    assert destination.read_text() == "a,b\n1,2\n"


def test_spreadsheet_datasheet_becomes_csv(tmp_path):
    book = write_workbook(
        tmp_path / "book.xlsx",
        {
            "Cover": [["ignore me"]],
            "DataSheet": [["a", "b"], [1, 2], [None, None], [3, 4]],
        },
    )
    assert spreadsheet_to_csv(book, "openpyxl") == "a,b\n1,2\n3,4\n"


def test_spreadsheet_normalize_discards_temp(tmp_path):
    temp = write_workbook(tmp_path / "123-book.xlsx", {"DataSheet": [["a", "b"], [1, 2]]})
    destination = tmp_path / "item_list.csv"

    FormatNormalizer().normalize(temp, "book.xlsx", destination)

    assert not temp.exists()
    assert read_rows(destination) == [{"a": "1", "b": "2"}]


def test_missing_datasheet(tmp_path):
    temp = write_workbook(tmp_path / "123-book.xlsx", {"Sheet1": [["a"], [1]]})
    destination = tmp_path / "item_list.csv"
    destination.write_text("a\nold\n")

    with pytest.raises(SheetNotFoundError, match="DataSheet"):
        FormatNormalizer().normalize(temp, "book.xlsx", destination)

    assert not temp.exists()
    assert destination.read_text() == "a\nold\n"


def test_corrupt_workbook_is_parse_error(tmp_path):
    temp = tmp_path / "123-book.xlsb"
    temp.write_bytes(b"definitely not a workbook")
    destination = tmp_path / "item_list.csv"

    with pytest.raises(ParseError):
        FormatNormalizer().normalize(temp, "book.xlsb", destination)

    assert not temp.exists()
    assert not destination.exists()


def test_xlsb_datasheet_becomes_csv():
    assert spreadsheet_to_csv(fixture_path("items.xlsb"), "pyxlsb") == "sku,qty\nA1,1\nB2,2.5\n"


def test_xlsb_normalize_discards_temp(tmp_path):
    temp = tmp_path / "123-items.xlsb"
    shutil.copyfile(fixture_path("items.xlsb"), temp)
    destination = tmp_path / "item_list.csv"

    assert FormatNormalizer().normalize(temp, "items.xlsb", destination) == ".xlsb"

    assert not temp.exists()
    assert read_rows(destination) == [{"sku": "A1", "qty": "1"}, {"sku": "B2", "qty": "2.5"}]


def test_xlsb_missing_datasheet(tmp_path):
    temp = tmp_path / "123-book.xlsb"
    shutil.copyfile(fixture_path("no_datasheet.xlsb"), temp)
    destination = tmp_path / "item_list.csv"
    destination.write_text("a\nold\n")

    with pytest.raises(SheetNotFoundError, match="DataSheet"):
        FormatNormalizer().normalize(temp, "book.xlsb", destination)

    assert not temp.exists()
    assert destination.read_text() == "a\nold\n"
