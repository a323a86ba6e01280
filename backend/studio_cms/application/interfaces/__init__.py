from .record_store import RecordStore, Subscription, PendingWrite, OnChange
from .change_notifier import ChangeNotifier
from .credential_service import CredentialService

__all__ = [
    "RecordStore",
    "Subscription",
    "PendingWrite",
    "OnChange",
    "ChangeNotifier",
    "CredentialService",
]
