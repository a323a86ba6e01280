"""Domain entities — public submissions and the admin activity trail."""

from dataclasses import dataclass
from typing import Any


@dataclass
class ContactSubmission:
    key: str
    name: str
    email: str
    phone: str
    description: str
    timestamp: int


@dataclass
class ActivityLogEntry:
    key: str
    action: str
    section: str
    timestamp: int


def _int(value: Any) -> int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    return 0


def contact_from_raw(key: str, raw: dict[str, Any]) -> ContactSubmission:
    return ContactSubmission(
        key=key,
        name=str(raw.get("name", "")),
        email=str(raw.get("email", "")),
        phone=str(raw.get("phone", "")),
        description=str(raw.get("description", "")),
        timestamp=_int(raw.get("timestamp")),
    )


def activity_from_raw(key: str, raw: dict[str, Any]) -> ActivityLogEntry:
    return ActivityLogEntry(
        key=key,
        action=str(raw.get("action", "")),
        section=str(raw.get("section", "")),
        timestamp=_int(raw.get("timestamp")),
    )
