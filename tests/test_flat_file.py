"""Tests for the CSV flat-file store."""

import stat

import pytest

from events_api.utils.errors import MalformedData


def test_missing_file_loads_empty(store, tmp_path):
    assert store.load(tmp_path / "absent.csv") == ([], [])


def test_round_trip_is_order_insensitive_equal(store, tmp_path):
    path = tmp_path / "table.csv"
    columns = ["id", "name", "notes"]
    rows = [
        {"id": "2", "name": "Beta", "notes": 'says "hi", twice'},
        {"id": "1", "name": "Alpha", "notes": "line one\nline two"},
        {"id": "3", "name": "Gamma", "notes": ""},
        {"id": "", "name": "", "notes": ""},
    ]

    store.save(path, columns, rows)
    loaded_columns, loaded_rows = store.load(path)

    assert loaded_columns == columns
    as_set = lambda items: {tuple(sorted(row.items())) for row in items}
    assert as_set(loaded_rows) == as_set(rows)


def test_save_drops_unknown_and_fills_missing(store, tmp_path):
    path = tmp_path / "table.csv"
    store.save(path, ["a", "b"], [{"a": "1", "extra": "x"}])

    assert path.read_text(encoding="utf-8") == "a,b\n1,\n"


def test_short_rows_padded_and_blank_lines_skipped(store, tmp_path):
    path = tmp_path / "table.csv"
    path.write_text("a,b,c\n1,2\n\n3,4,5\n", encoding="utf-8")

    columns, rows = store.load(path)
    assert columns == ["a", "b", "c"]
    assert rows == [{"a": "1", "b": "2", "c": ""}, {"a": "3", "b": "4", "c": "5"}]


def test_bom_is_ignored(store, tmp_path):
    path = tmp_path / "table.csv"
    path.write_bytes("\ufeffkey,value\nk1,v1\n".encode("utf-8"))

    columns, rows = store.load(path)
    assert columns == ["key", "value"]
    assert rows[0]["key"] == "k1"


def test_too_many_fields_is_malformed(store, tmp_path):
    path = tmp_path / "table.csv"
    path.write_text("a,b\n1,2,3\n", encoding="utf-8")

    with pytest.raises(MalformedData) as exc:
        store.load(path)
    assert exc.value.status_code == 500
    assert "too many fields" in exc.value.message


def test_bad_quoting_is_malformed(store, tmp_path):
    path = tmp_path / "table.csv"
    path.write_text('a,b\n"1"x,2\n', encoding="utf-8")

    with pytest.raises(MalformedData):
        store.load(path)


def test_save_leaves_no_temp_files(store, tmp_path):
    path = tmp_path / "nested" / "table.csv"
    store.save(path, ["a"], [{"a": "1"}])
    store.save(path, ["a"], [{"a": "2"}])

    assert sorted(p.name for p in path.parent.iterdir()) == ["table.csv"]
    assert store.load(path)[1] == [{"a": "2"}]


def test_whitespace_only_rows_are_kept(store, tmp_path):
    path = tmp_path / "table.csv"
    path.write_text("a,b\n,\n , \n1,x\n", encoding="utf-8")

    _, rows = store.load(path)
    assert rows == [{"a": "", "b": ""}, {"a": " ", "b": " "}, {"a": "1", "b": "x"}]


def test_header_is_kept_as_written(store, tmp_path):
    path = tmp_path / "table.csv"
    path.write_text(" key ,value\nk1,v1\n", encoding="utf-8")

    columns, rows = store.load(path)
    assert columns == [" key ", "value"]

    store.save(path, columns, rows)
    assert path.read_text(encoding="utf-8") == " key ,value\nk1,v1\n"


def test_save_keeps_existing_permissions(store, tmp_path):
    path = tmp_path / "table.csv"
    store.save(path, ["a"], [{"a": "1"}])
    path.chmod(0o644)

    store.save(path, ["a"], [{"a": "2"}])
    assert stat.S_IMODE(path.stat().st_mode) == 0o644

    path.chmod(0o640)
    store.save(path, ["a"], [{"a": "3"}])
    assert stat.S_IMODE(path.stat().st_mode) == 0o640
