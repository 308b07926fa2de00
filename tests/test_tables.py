"""Tests for admin table CRUD."""

import stat

import pytest

from events_api.tables.service import TableService
from events_api.utils.errors import Conflict, NotFound, ValidationError


@pytest.fixture
def service(store, tables):
    return TableService(store, tables)


# --- Service ---

def test_list_tables_reports_columns(service):
    tables = {t["id"]: t for t in service.list_tables()}
    assert set(tables) == {"students", "employers", "contacts", "events", "dates", "alumniEngagement"}
    assert tables["students"]["primaryKey"] == "student_key"
    assert tables["students"]["columns"][0] == "student_key"


def test_unknown_table_not_found(service):
    with pytest.raises(NotFound):
        service.get_table("nope")


def test_missing_backing_file_not_found(service, tables):
    tables["dates"].path.unlink()
    with pytest.raises(NotFound) as exc:
        service.get_table("dates")
    assert "does not exist" in exc.value.message


def test_insert_fills_missing_columns(service):
    row = service.insert("events", {"event_key": " EV002 ", "event_name": "  Spring Mixer ", "bogus": "x"})
    assert row == {"event_key": "EV002", "event_name": "Spring Mixer", "event_date": ""}

    rows = service.get_table("events")["rows"]
    assert rows[-1] == row


def test_insert_requires_primary_key(service):
    with pytest.raises(ValidationError):
        service.insert("events", {"event_name": "No key"})
    with pytest.raises(ValidationError):
        service.insert("events", {"event_key": "   "})


def test_insert_duplicate_leaves_file_unchanged(service, tables):
    path = tables["students"].path
    before = path.read_bytes()

    with pytest.raises(Conflict):
        service.insert("students", {"student_key": "S001", "first_name": "Dup"})

    assert path.read_bytes() == before


def test_update_keeps_primary_key(service):
    row = service.update("students", "S002", {"student_key": "S999", "first_name": "Priyanka"})
    assert row["student_key"] == "S002"
    assert row["first_name"] == "Priyanka"
    assert row["last_name"] == "Shah"

    keys = [r["student_key"] for r in service.get_table("students")["rows"]]
    assert "S999" not in keys
    assert "S002" in keys


def test_update_leaves_unsupplied_columns(service):
    row = service.update("students", "S003", {"graduation_year": "2022"})
    assert row == {
        "student_key": "S003",
        "first_name": "Marcus",
        "last_name": "Brown",
        "program_name": "BS Computer Science",
        "graduation_year": "2022",
    }


def test_insert_keeps_table_permissions(service, tables):
    path = tables["events"].path
    path.chmod(0o644)

    service.insert("events", {"event_key": "EV9"})

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_update_missing_key(service):
    with pytest.raises(NotFound):
        service.update("students", "S404", {"first_name": "Ghost"})


def test_delete_missing_key_keeps_rows(service):
    count = len(service.get_table("contacts")["rows"])
    with pytest.raises(NotFound):
        service.delete("contacts", "C404")
    assert len(service.get_table("contacts")["rows"]) == count


def test_delete_removes_row(service):
    service.delete("contacts", "C001")
    assert service.get_table("contacts")["rows"] == []


# --- HTTP ---

def test_tables_require_auth(client):
    resp = client.get("/api/admin/tables")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required."}


def test_tables_require_admin(client, alumni_header):
    resp = client.get("/api/admin/tables", headers=alumni_header)
    assert resp.status_code == 403


def test_list_tables(client, admin_header):
    resp = client.get("/api/admin/tables", headers=admin_header)
    assert resp.status_code == 200
    assert len(resp.json()) == 6


def test_get_table(client, admin_header):
    resp = client.get("/api/admin/tables/employers", headers=admin_header)
    assert resp.status_code == 200
    body = resp.json()
    assert body["primaryKey"] == "employer_key"
    assert body["rows"][1]["employer_name"] == "McKinsey & Company"


def test_get_unknown_table(client, admin_header):
    resp = client.get("/api/admin/tables/unknown", headers=admin_header)
    assert resp.status_code == 404
    assert resp.json()["error"] == 'Table "unknown" not found.'


def test_create_update_delete_record(client, admin_header):
    resp = client.post(
        "/api/admin/tables/contacts",
        json={"record": {"contact_key": "C002", "contact_name": "Sam Ortiz"}},
        headers=admin_header,
    )
    assert resp.status_code == 201
    assert resp.json()["row"] == {"contact_key": "C002", "employer_key": "", "contact_name": "Sam Ortiz"}

    resp = client.put(
        "/api/admin/tables/contacts/C002",
        json={"record": {"employer_key": "E002"}},
        headers=admin_header,
    )
    assert resp.status_code == 200
    assert resp.json()["row"]["employer_key"] == "E002"
    assert resp.json()["row"]["contact_name"] == "Sam Ortiz"

    resp = client.delete("/api/admin/tables/contacts/C002", headers=admin_header)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Record deleted successfully."}

    resp = client.delete("/api/admin/tables/contacts/C002", headers=admin_header)
    assert resp.status_code == 404


def test_create_duplicate_record(client, admin_header):
    resp = client.post("/api/admin/tables/students", json={"record": {"student_key": "S001"}}, headers=admin_header)
    assert resp.status_code == 409


def test_create_without_record(client, admin_header):
    resp = client.post("/api/admin/tables/students", json={}, headers=admin_header)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Record payload is required."


def test_create_without_primary_key(client, admin_header):
    resp = client.post("/api/admin/tables/students", json={"record": {"first_name": "Anon"}}, headers=admin_header)
    assert resp.status_code == 400
    assert "student_key" in resp.json()["error"]
