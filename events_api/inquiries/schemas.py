"""Pydantic schemas for event inquiry submissions."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class InquiryRequest(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = ""
    audience_type: str | None = None
    company_name: str | None = ""
    student_id: str | None = ""
    current_company: str | None = ""
    relationship_interest: bool | str | None = False
    applications_submitted: int | float | str | None = 0
    upcoming_event_id: str | None = ""
    notes: str | None = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)
