"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    GenerateRequest,
    RollbackRequest,
    SourceRequest,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import extract_json, strip_code_fences, dumps, loads, JSONParseError
from .id import VersionID, NodeID, MessageID, new_version_id, new_node_id, new_message_id


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "GenerateRequest",
    "RollbackRequest",
    "SourceRequest",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "strip_code_fences",
    "dumps",
    "loads",
    "JSONParseError",
    # IDs
    "VersionID",
    "NodeID",
    "MessageID",
    "new_version_id",
    "new_node_id",
    "new_message_id",
    # DI
    "create_container",
]
