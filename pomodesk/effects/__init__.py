"""Side-effect package: notifications, wake lock, and their dispatcher."""

from .dispatcher import SideEffectDispatcher
from .notifications import Notifier, NotificationPermission, completion_message
from .wake_lock import WakeLock, WakeLockUnavailable

__all__ = [
    "SideEffectDispatcher",
    "Notifier",
    "NotificationPermission",
    "completion_message",
    "WakeLock",
    "WakeLockUnavailable",
]
