from .ordered_record import OrderedRecord, now_ms
from .principal import Principal
from .footer import Footer, FooterLink, SocialLink, DEFAULT_FOOTER_TEXT
from .submission import (
    ContactSubmission,
    ActivityLogEntry,
    contact_from_raw,
    activity_from_raw,
)

__all__ = [
    "OrderedRecord",
    "now_ms",
    "Principal",
    "Footer",
    "FooterLink",
    "SocialLink",
    "DEFAULT_FOOTER_TEXT",
    "ContactSubmission",
    "ActivityLogEntry",
    "contact_from_raw",
    "activity_from_raw",
]
