"""Row conversion helpers shared by the Supabase repositories."""

from datetime import date, datetime
from uuid import UUID


def parse_timestamp(value: object) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def parse_date(value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_uuid(value: object) -> UUID | None:
    if not value:
        return None
    return UUID(str(value))


def string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def first_row(data: list[dict[str, object]] | None, action: str) -> dict[str, object]:
    """Return the single row written by an insert or update."""
    if not data:
        raise RuntimeError(f"Failed to {action}")
    return data[0]
