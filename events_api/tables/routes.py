"""Admin table CRUD endpoints."""

from fastapi import APIRouter, Depends

from events_api.auth.dependencies import require_admin
from events_api.storage.flat_file import get_store
from events_api.tables.registry import get_tables
from events_api.tables.schemas import RecordRequest, RecordResponse, TableDetail, TableSummary
from events_api.tables.service import TableService
from events_api.utils.errors import ValidationError

router = APIRouter(prefix="/api/admin/tables", tags=["Tables"], dependencies=[Depends(require_admin)])


def get_table_service() -> TableService:
    return TableService(get_store(), get_tables())


def _require_record(body: RecordRequest) -> dict:
    if body.record is None:
        raise ValidationError("Record payload is required.")
    return body.record


@router.get("", response_model=list[TableSummary], summary="List tables", description="List every admin table with its columns.")
async def list_all(service: TableService = Depends(get_table_service)):
    return service.list_tables()


@router.get("/{table_id}", response_model=TableDetail, summary="Get a table", description="Return a table's metadata and all of its rows.")
async def get(table_id: str, service: TableService = Depends(get_table_service)):
    return service.get_table(table_id)


@router.post("/{table_id}", status_code=201, response_model=RecordResponse, summary="Add a record")
async def create(table_id: str, body: RecordRequest, service: TableService = Depends(get_table_service)):
    row = service.insert(table_id, _require_record(body))
    return {"message": "Record added successfully.", "row": row}


@router.put("/{table_id}/{record_id}", response_model=RecordResponse, summary="Update a record", description="Merge the supplied fields into a record. The primary key never changes.")
async def update(table_id: str, record_id: str, body: RecordRequest, service: TableService = Depends(get_table_service)):
    row = service.update(table_id, record_id, _require_record(body))
    return {"message": "Record updated successfully.", "row": row}


@router.delete("/{table_id}/{record_id}", summary="Delete a record")
async def delete(table_id: str, record_id: str, service: TableService = Depends(get_table_service)):
    service.delete(table_id, record_id)
    return {"message": "Record deleted successfully."}
