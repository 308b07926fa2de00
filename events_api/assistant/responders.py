"""Canned analytics answers computed from the dashboard CSV tables."""

from decimal import ROUND_HALF_UP, Decimal

from events_api.storage.flat_file import FlatFileStore, Row
from events_api.tables.registry import TableDescriptor

ROLE_ADMIN = "admin"

FALLBACK_MESSAGE = (
    "I'm still learning that query. Try asking about alumni counts, employer trends, or predictive "
    "outlook data—or email insights@datanexus.ai for a detailed report."
)


def strip_quotes(value):
    if not isinstance(value, str):
        return value
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def percent(fraction: float) -> str:
    """Whole percent, rounding halves away from zero."""
    return str(Decimal(fraction * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_number(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


class AnalyticsTables:
    """Loads assistant tables fresh on every access, with quotes stripped."""

    def __init__(self, store: FlatFileStore, tables: dict[str, TableDescriptor]):
        self._store = store
        self._tables = tables

    def rows(self, table_id: str) -> list[Row]:
        _, rows = self._store.load(self._tables[table_id].path)
        return [
            {strip_quotes(key): strip_quotes(value) for key, value in row.items()}
            for row in rows
        ]

    def by_key(self, table_id: str, key_column: str) -> dict[str, Row]:
        return {row.get(key_column, ""): row for row in self.rows(table_id)}


def program_stats(data: AnalyticsTables, program_term: str, role: str) -> str:
    students = data.rows("students")
    engagements = data.rows("alumniEngagement")

    term = program_term.lower()
    matched = [s for s in students if term in (s.get("program_name") or "").lower()]
    matched_keys = {s.get("student_key", "") for s in matched}

    engaged = {
        row.get("student_key", "")
        for row in engagements
        if row.get("student_key", "") in matched_keys and to_number(row.get("engagement_score")) > 0
    }

    if not matched:
        return (
            f"I couldn't find alumni records for {program_term}. "
            "Try another program or check the latest roster upload."
        )

    base = (
        f"We track {len(matched)} alumni in {title_case(program_term)} "
        f"with {len(engaged)} showing active engagement recently."
    )
    if role == ROLE_ADMIN:
        sample = ", ".join(
            f"{s.get('first_name')} {s.get('last_name')} ({s.get('graduation_year')})" for s in matched[:5]
        )
        return f"{base}\nSample alumni: {sample}."
    return f"{base}\nAsk an administrator for named lists if you need direct outreach."


def role_location_employer(data: AnalyticsTables, job_term: str, location_term: str, employer_term: str, role: str) -> str:
    engagements = data.rows("alumniEngagement")
    students_by_key = data.by_key("students", "student_key")
    employers_by_key = data.by_key("employers", "employer_key")

    job = job_term.lower()
    location = location_term.lower()
    employer_name = employer_term.lower()

    def matches(engagement: Row) -> bool:
        employer = employers_by_key.get(engagement.get("employer_key", ""))
        if employer is None:
            return False
        return (
            job in (engagement.get("job_role") or "").lower()
            and employer_name in (employer.get("employer_name") or "").lower()
            and (
                location in (employer.get("hq_state") or "").lower()
                or location in (employer.get("hq_city") or "").lower()
            )
        )

    matched = [e for e in engagements if matches(e)]
    if not matched:
        return (
            f"No alumni matched {job_term} at {employer_term} in {location_term}. "
            "Try broadening the role or location filters."
        )

    students = [students_by_key[e.get("student_key", "")] for e in matched if e.get("student_key", "") in students_by_key]

    if role != ROLE_ADMIN:
        return (
            f"Found {len(students)} alumni matching {job_term} at {employer_term} in {location_term}. "
            "Contact an administrator for individual details."
        )

    listing = "\n• ".join(
        f"{s.get('first_name')} {s.get('last_name')} ({s.get('graduation_year')}, {s.get('program_name')})"
        for s in students[:5]
    )
    return f"Found {len(students)} alumni in {title_case(location_term)} at {employer_term}.\n• {listing}"


def employer_pattern(data: AnalyticsTables, role: str) -> str:
    employers = data.rows("employers")
    engagements = data.rows("alumniEngagement")
    students_by_key = data.by_key("students", "student_key")

    targets = [e for e in employers if "amazon" in (e.get("employer_name") or "").lower()]
    if not targets:
        targets = [e for e in employers if "technology" in (e.get("sector") or "").lower()]
    target_keys = {e.get("employer_key", "") for e in targets}

    relevant = [e for e in engagements if e.get("employer_key", "") in target_keys]
    if not relevant:
        return (
            "No matching hiring pattern found for Amazon. Train the model with the latest employer "
            "engagement data or upload Amazon-specific cohorts."
        )

    scores: dict[str, float] = {}
    for engagement in relevant:
        key = engagement.get("student_key", "")
        scores[key] = scores.get(key, 0.0) + to_number(engagement.get("engagement_score"))

    limit = 5 if role == ROLE_ADMIN else 3
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)[:limit]

    lines = []
    for student_key, score in ranked:
        student = students_by_key.get(student_key)
        if student is None:
            continue
        confidence = min(0.95, 0.7 + score / 20)
        lines.append(
            f"{student.get('first_name')} {student.get('last_name')} – {student.get('program_name')} "
            f"({student.get('graduation_year')}) • {percent(confidence)}% alignment"
        )

    if not lines:
        return "No students matched the Amazon hiring pattern. Encourage cloud-focused cohorts to boost alignment."

    listing = "\n".join(lines)
    return (
        f"Based on recent tech-sector hires, these students align with Amazon's pattern:\n{listing}\n\n"
        "Recommendation: invite them to the Amazon interview prep track and emphasize AWS/data engineering skills."
    )
