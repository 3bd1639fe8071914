"""
Version Store
Per-file version history with rollback, chat history and JSON snapshots
"""

from .errors import VersionNotFound
from .models import ChatMessage, FileWorkspace, Plan, Role, Version
from .repository import JsonSnapshotRepository
from .store import DEFAULT_CODE, ProjectStore

__all__ = [
    "VersionNotFound",
    "ChatMessage",
    "FileWorkspace",
    "Plan",
    "Role",
    "Version",
    "JsonSnapshotRepository",
    "DEFAULT_CODE",
    "ProjectStore",
]
