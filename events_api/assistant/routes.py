"""Assistant query endpoint."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from events_api.assistant.responders import AnalyticsTables
from events_api.assistant.service import AssistantService
from events_api.storage.flat_file import get_store
from events_api.tables.registry import get_tables

router = APIRouter(prefix="/api/assistant", tags=["Assistant"])


class AssistantQuery(BaseModel):
    question: str | None = None
    role: str | None = None


def get_assistant() -> AssistantService:
    return AssistantService(AnalyticsTables(get_store(), get_tables()))


@router.post("/query", summary="Ask the analytics assistant")
async def query(body: AssistantQuery, assistant: AssistantService = Depends(get_assistant)):
    return {"message": assistant.answer(body.question, body.role)}
