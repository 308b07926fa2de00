"""Shared test fixtures."""

import json

import pytest
from fastapi.testclient import TestClient

from events_api.config.settings import get_settings
from events_api.main import app
from events_api.storage.flat_file import FlatFileStore
from events_api.tables.registry import get_tables

USERS = [
    {"username": "Admin", "password": "SecureTestPass123", "role": "admin"},
    {"username": "alumni", "password": "AlumniPass123", "role": "alumni"},
]

TABLE_FIXTURES = {
    "Dim_Students.csv": (
        "student_key,first_name,last_name,program_name,graduation_year\n"
        "S001,Jordan,Lee,MS Data Analytics,2022\n"
        "S002,Priya,Shah,MS Data Analytics,2023\n"
        "S003,Marcus,Brown,BS Computer Science,2021\n"
        "S004,Elena,Garcia,BS Computer Science,2020\n"
    ),
    "dim_employers.csv": (
        "employer_key,employer_name,sector,hq_city,hq_state\n"
        "E001,Amazon,Technology,Seattle,Washington\n"
        "E002,McKinsey & Company,Consulting,San Francisco,California\n"
    ),
    "dim_contact.csv": "contact_key,employer_key,contact_name\nC001,E001,Taylor Reed\n",
    "dim_event.csv": "event_key,event_name,event_date\nEV001,Fall Career Fair,2024-09-18\n",
    "dim_date.csv": "date_key,full_date,year\n20240918,2024-09-18,2024\n",
    "fact_alumni_engagement.csv": (
        "fact_id,student_key,employer_key,job_role,engagement_score\n"
        "F001,S001,E001,Data Engineer,8\n"
        "F002,S003,E002,Full Stack Developer,5\n"
        "F003,S004,E002,Full Stack Engineer,0\n"
        "F004,S002,E001,Data Analyst,4\n"
    ),
}


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Isolated data and public directories seeded with users and tables."""
    data_dir = tmp_path / "data"
    public_dir = tmp_path / "public"
    data_dir.mkdir()
    public_dir.mkdir()

    (data_dir / "users.json").write_text(json.dumps(USERS), encoding="utf-8")
    for name, contents in TABLE_FIXTURES.items():
        (public_dir / name).write_text(contents, encoding="utf-8")

    monkeypatch.setenv("DATA_DIR", str(data_dir))
    monkeypatch.setenv("PUBLIC_DIR", str(public_dir))
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("AUTH_STRATEGY", "jwt")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def client(workspace):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store():
    return FlatFileStore()


@pytest.fixture
def tables(workspace):
    return get_tables()


@pytest.fixture
def admin_header(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "SecureTestPass123"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def alumni_header(client):
    resp = client.post("/api/auth/login", json={"username": "alumni", "password": "AlumniPass123"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
