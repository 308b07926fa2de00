"""Public event inquiry endpoint."""

from fastapi import APIRouter, Depends

from events_api.config.settings import get_settings
from events_api.inquiries.schemas import InquiryRequest
from events_api.inquiries.service import InquiryService
from events_api.storage.flat_file import get_store

router = APIRouter(prefix="/api/inquiries", tags=["Inquiries"])


def get_inquiry_service() -> InquiryService:
    return InquiryService(get_store(), get_settings().inquiries_path)


@router.post("", status_code=201, summary="Submit an event inquiry")
async def submit(body: InquiryRequest, service: InquiryService = Depends(get_inquiry_service)):
    service.submit(body)
    return {"message": "Inquiry stored successfully."}
