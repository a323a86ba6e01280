from .subscription_hub import SubscriptionHub
from .memory_store import InMemoryRecordStore
from .sql_store import SQLAlchemyRecordStore

__all__ = [
    "SubscriptionHub",
    "InMemoryRecordStore",
    "SQLAlchemyRecordStore",
]
