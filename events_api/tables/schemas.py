"""Pydantic schemas for admin table requests and responses."""

from typing import Any

from pydantic import BaseModel


# --- Requests ---

class RecordRequest(BaseModel):
    record: dict[str, Any] | None = None


# --- Responses ---

class TableSummary(BaseModel):
    id: str
    label: str
    description: str
    primaryKey: str
    columns: list[str]


class TableDetail(BaseModel):
    label: str
    description: str
    primaryKey: str
    columns: list[str]
    rows: list[dict[str, str]]


class RecordResponse(BaseModel):
    message: str
    row: dict[str, str]
