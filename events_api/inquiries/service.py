"""Event inquiry intake: validate, normalize, append to the inquiries CSV."""

import logging
import math
from datetime import datetime, timezone
from pathlib import Path

from events_api.inquiries.schemas import InquiryRequest
from events_api.storage.flat_file import FlatFileStore, Row
from events_api.utils.errors import ValidationError

logger = logging.getLogger(__name__)

INQUIRY_COLUMNS = [
    "submittedAt",
    "firstName",
    "lastName",
    "email",
    "phone",
    "audienceType",
    "companyName",
    "studentId",
    "currentCompany",
    "relationshipInterest",
    "applicationsSubmitted",
    "upcomingEventId",
    "notes",
]

AUDIENCE_EMPLOYER = "employer"
AUDIENCE_ALUMNI = "alumni"

_TRUTHY = {"true", "yes", "1", "on"}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _yes_no(value) -> str:
    if isinstance(value, str):
        return "Yes" if value.strip().lower() in _TRUTHY else "No"
    return "Yes" if value else "No"


def _count(value) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError("applicationsSubmitted must be a number.")
    if not math.isfinite(number):
        raise ValidationError("applicationsSubmitted must be a number.")
    return int(number)


class InquiryService:
    def __init__(self, store: FlatFileStore, path: Path):
        self._store = store
        self._path = Path(path)

    def build_record(self, inquiry: InquiryRequest) -> Row:
        if not (inquiry.first_name and inquiry.last_name and inquiry.email and inquiry.audience_type):
            raise ValidationError("firstName, lastName, email and audienceType are required.")

        audience = inquiry.audience_type
        return {
            "submittedAt": _timestamp(),
            "firstName": inquiry.first_name,
            "lastName": inquiry.last_name,
            "email": inquiry.email,
            "phone": inquiry.phone or "",
            "audienceType": audience,
            "companyName": (inquiry.company_name or "") if audience == AUDIENCE_EMPLOYER else "",
            "studentId": (inquiry.student_id or "") if audience == AUDIENCE_ALUMNI else "",
            "currentCompany": (inquiry.current_company or "") if audience == AUDIENCE_ALUMNI else "",
            "relationshipInterest": _yes_no(inquiry.relationship_interest),
            "applicationsSubmitted": str(_count(inquiry.applications_submitted)),
            "upcomingEventId": inquiry.upcoming_event_id or "",
            "notes": inquiry.notes or "",
        }

    def submit(self, inquiry: InquiryRequest) -> Row:
        record = self.build_record(inquiry)
        _, rows = self._store.load(self._path)
        rows.append(record)
        self._store.save(self._path, INQUIRY_COLUMNS, rows)
        logger.info("Stored %s inquiry from %s", record["audienceType"], record["email"])
        return record
