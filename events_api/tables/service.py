"""Admin table CRUD over whole-file CSV reads and rewrites."""

import logging
from typing import Any

from events_api.storage.flat_file import FlatFileStore, Row
from events_api.tables.registry import TableDescriptor, get_descriptor
from events_api.utils.errors import Conflict, NotFound, ValidationError

logger = logging.getLogger(__name__)


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def sanitize_record(columns: list[str], record: dict[str, Any]) -> Row:
    return {column: to_text(record.get(column)) for column in columns}


class TableService:
    def __init__(self, store: FlatFileStore, tables: dict[str, TableDescriptor]):
        self._store = store
        self._tables = tables

    def _load(self, table_id: str) -> tuple[TableDescriptor, list[str], list[Row]]:
        descriptor = get_descriptor(self._tables, table_id)
        columns, rows = self._store.load(descriptor.path)
        return descriptor, columns, rows

    def _write(self, descriptor: TableDescriptor, columns: list[str], rows: list[Row]) -> None:
        self._store.save(descriptor.path, columns, rows)

    def list_tables(self) -> list[dict]:
        tables = []
        for table_id in self._tables:
            descriptor, columns, _ = self._load(table_id)
            tables.append({
                "id": descriptor.id,
                "label": descriptor.label,
                "description": descriptor.description,
                "primaryKey": descriptor.primary_key,
                "columns": columns,
            })
        return tables

    def get_table(self, table_id: str) -> dict:
        descriptor, columns, rows = self._load(table_id)
        return {
            "label": descriptor.label,
            "description": descriptor.description,
            "primaryKey": descriptor.primary_key,
            "columns": columns,
            "rows": [{column: row.get(column) or "" for column in columns} for row in rows],
        }

    def insert(self, table_id: str, record: dict[str, Any]) -> Row:
        descriptor, columns, rows = self._load(table_id)
        primary_key = descriptor.primary_key

        key = to_text(record.get(primary_key))
        if not key:
            raise ValidationError(f'Field "{primary_key}" is required for new records.')
        if any(row.get(primary_key) == key for row in rows):
            raise Conflict(f'A record with {primary_key}="{key}" already exists.')

        sanitized = sanitize_record(columns, record)
        rows.append(sanitized)
        self._write(descriptor, columns, rows)
        logger.info("Inserted %s=%s into %s", primary_key, key, table_id)
        return sanitized

    def update(self, table_id: str, key: str, record: dict[str, Any]) -> Row:
        """Merge the supplied columns into the row keyed by ``key``.

        Columns absent from ``record`` keep their stored values rather than
        being blanked; send ``""`` to clear a cell.
        """
        descriptor, columns, rows = self._load(table_id)
        primary_key = descriptor.primary_key

        index = next((i for i, row in enumerate(rows) if row.get(primary_key) == key), None)
        if index is None:
            raise NotFound(f'Record with {primary_key}="{key}" not found.')

        existing = rows[index]
        changes = {column: to_text(record[column]) for column in columns if column in record}
        updated = {**existing, **changes}
        # Primary key is immutable once created
        updated[primary_key] = existing[primary_key]

        rows[index] = updated
        self._write(descriptor, columns, rows)
        logger.info("Updated %s=%s in %s", primary_key, key, table_id)
        return updated

    def delete(self, table_id: str, key: str) -> None:
        descriptor, columns, rows = self._load(table_id)
        primary_key = descriptor.primary_key

        remaining = [row for row in rows if row.get(primary_key) != key]
        if len(remaining) == len(rows):
            raise NotFound(f'Record with {primary_key}="{key}" not found.')

        self._write(descriptor, columns, remaining)
        logger.info("Deleted %d row(s) with %s=%s from %s", len(rows) - len(remaining), primary_key, key, table_id)
