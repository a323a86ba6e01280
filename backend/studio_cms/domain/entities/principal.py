"""Domain entity — the authenticated administrator."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Principal:
    """An authenticated identity as reported by the credential service."""

    uid: str
    email: str
    id_token: str | None = None
    signed_in_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
