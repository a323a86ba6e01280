from .collection import (
    OrderedRecordResponse,
    CollectionResponse,
    FieldUpdate,
    FieldUpdateResponse,
    ReorderRequest,
    ReorderResponse,
    CreatedResponse,
)
from .submission import (
    ContactCreate,
    ReviewCreate,
    ContactResponse,
    ActivityLogResponse,
    SubmissionResponse,
)
from .footer import (
    FooterLinkResponse,
    SocialLinkResponse,
    FooterResponse,
    FooterTextUpdate,
    FooterEntryUpdate,
)
from .auth import SignInRequest, ResetRequest, SessionResponse

__all__ = [
    "OrderedRecordResponse",
    "CollectionResponse",
    "FieldUpdate",
    "FieldUpdateResponse",
    "ReorderRequest",
    "ReorderResponse",
    "CreatedResponse",
    "ContactCreate",
    "ReviewCreate",
    "ContactResponse",
    "ActivityLogResponse",
    "SubmissionResponse",
    "FooterLinkResponse",
    "SocialLinkResponse",
    "FooterResponse",
    "FooterTextUpdate",
    "FooterEntryUpdate",
    "SignInRequest",
    "ResetRequest",
    "SessionResponse",
]
