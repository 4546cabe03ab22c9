import pytest

from models.item_models import MetadataRecord
from services.retrieval import coerce_positive, parse_columns
from utils.errors import NotFoundError


@pytest.fixture
def loaded(services):
    rows = "\n".join(f"{i},{i * 10},x{i}" for i in range(1, 8))
    services.paths.dataset_path.write_text(f"a,b,c\n{rows}\n")
    services.metadata_store.write(MetadataRecord(uploadedAt="2026-01-01T00:00:00.000000Z", count=7))
    return services.retrieval


def test_empty_state(services):
    page = services.retrieval.list_items()
    assert page.model_dump() == {"total": 0, "page": 1, "pageSize": 0, "rows": []}
    assert services.retrieval.list_all() == []
    with pytest.raises(NotFoundError):
        services.retrieval.dataset_file()


def test_defaults(loaded):
    page = loaded.list_items()
    assert (page.total, page.page, page.pageSize) == (7, 1, 200)
    assert len(page.rows) == 7


def test_page_slices(loaded):
    page = loaded.list_items(page=2, page_size=3)
    assert page.total == 7
    assert [r["a"] for r in page.rows] == ["4", "5", "6"]

    last = loaded.list_items(page=3, page_size=3)
    assert [r["a"] for r in last.rows] == ["7"]


def test_past_last_page_is_empty(loaded):
    page = loaded.list_items(page=4, page_size=3)
    assert page.rows == []
    assert page.total == 7


def test_column_projection(loaded):
    page = loaded.list_items(page_size=2, columns=["c", "a", "missing"])
    assert page.rows == [{"a": "1", "c": "x1"}, {"a": "2", "c": "x2"}]


def test_list_all_keeps_every_column(loaded):
    rows = loaded.list_all()
    assert len(rows) == 7
    assert rows[0] == {"a": "1", "b": "10", "c": "x1"}


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 5), ("", 5), ("3", 3), (3, 3), ("0", 1), (-2, 1), ("abc", 5), ("2.5", 5), ("10abc", 5)],
)
def test_coerce_positive(raw, expected):
    assert coerce_positive(raw, 5) == expected


def test_parse_columns():
    assert parse_columns(None) == []
    assert parse_columns("") == []
    assert parse_columns(" a, b,,c ") == ["a", "b", "c"]
