from .ordered_collection_view import OrderedCollectionView
from .reorder_coordinator import ReorderCoordinator, ReorderResult
from .notifications import CompositeNotifier
from .activity_log_notifier import ActivityLogNotifier
from .collection_editor import CollectionEditor, EditorMode, SyncState
from .editor_registry import EditorRegistry
from .session_context import SessionContext, SessionRegistry
from .submission_service import SubmissionService, SubmissionCooldown
from .footer_service import FooterService
from .inbox_service import InboxService
from .landing_service import LandingService
from .sse_manager import SSEManager
from .content_seeder import ContentSeeder

__all__ = [
    "OrderedCollectionView",
    "ReorderCoordinator",
    "ReorderResult",
    "CompositeNotifier",
    "ActivityLogNotifier",
    "CollectionEditor",
    "EditorMode",
    "SyncState",
    "EditorRegistry",
    "SessionContext",
    "SessionRegistry",
    "SubmissionService",
    "SubmissionCooldown",
    "FooterService",
    "InboxService",
    "LandingService",
    "SSEManager",
    "ContentSeeder",
]
