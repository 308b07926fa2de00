"""Static registry of the admin-editable CSV tables."""

from dataclasses import dataclass
from pathlib import Path

from events_api.config.settings import get_settings
from events_api.utils.errors import NotFound


@dataclass(frozen=True)
class TableDescriptor:
    id: str
    label: str
    description: str
    file_name: str
    primary_key: str
    directory: Path

    @property
    def path(self) -> Path:
        return self.directory / self.file_name


# id -> (label, description, file name, primary key)
TABLE_DEFINITIONS: dict[str, tuple[str, str, str, str]] = {
    "students": (
        "Students",
        "Core student roster and program details.",
        "Dim_Students.csv",
        "student_key",
    ),
    "employers": (
        "Employers",
        "Employer directory with industry and location details.",
        "dim_employers.csv",
        "employer_key",
    ),
    "contacts": (
        "Contacts",
        "Primary employer contacts engaged with SLU.",
        "dim_contact.csv",
        "contact_key",
    ),
    "events": (
        "Events",
        "Engagement events and experiential opportunities.",
        "dim_event.csv",
        "event_key",
    ),
    "dates": (
        "Dates",
        "Date dimension used for analytics across dashboards.",
        "dim_date.csv",
        "date_key",
    ),
    "alumniEngagement": (
        "Alumni Engagement Facts",
        "Fact table tracking alumni interactions and hiring outcomes.",
        "fact_alumni_engagement.csv",
        "fact_id",
    ),
}


def get_tables(directory: Path | None = None) -> dict[str, TableDescriptor]:
    directory = directory or get_settings().PUBLIC_DIR
    return {
        table_id: TableDescriptor(table_id, label, description, file_name, primary_key, directory)
        for table_id, (label, description, file_name, primary_key) in TABLE_DEFINITIONS.items()
    }


def get_descriptor(tables: dict[str, TableDescriptor], table_id: str) -> TableDescriptor:
    """Look up a table, requiring its backing file to exist."""
    descriptor = tables.get(table_id)
    if descriptor is None:
        raise NotFound(f'Table "{table_id}" not found.')
    if not descriptor.path.is_file():
        raise NotFound(f'Source file for "{table_id}" does not exist.')
    return descriptor
