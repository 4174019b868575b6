# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .contest_service import ContestService, MediaUpload
from .event_service import EventService
from .fish_service import FishService
from .judging_service import JudgingService
from .order_service import OrderService
from .storage_service import StorageService
from .user_service import UserService

__all__ = [
    "ContestService",
    "MediaUpload",
    "EventService",
    "FishService",
    "JudgingService",
    "OrderService",
    "StorageService",
    "UserService",
]
