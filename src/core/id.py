"""ID Generation.

ULID-based identifiers for tree nodes, versions and chat messages.

- Version IDs are strictly increasing within a process: when two IDs are
  minted in the same millisecond the second one is the first plus one, so
  sorting by ID equals sorting by creation order.
- Node IDs are opaque keys for UI diffing and carry no meaning.
- Prefixes (``ver_``, ``node_``, ``msg_``) keep logs readable.
"""

import threading
from typing import NewType

from ulid import ULID

VersionID = NewType("VersionID", str)
"""Version snapshot identifier"""

NodeID = NewType("NodeID", str)
"""UI tree node identifier"""

MessageID = NewType("MessageID", str)
"""Chat message identifier"""


class Prefix:
    """ID prefix constants."""

    VERSION = "ver"
    NODE = "node"
    MESSAGE = "msg"


class MonotonicGenerator:
    """ULID generator that never goes backwards.

    Thread-safe; the last emitted value is kept and bumped by one whenever
    the clock has not advanced past it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last: int = 0

    def generate(self) -> str:
        """Generate a new ULID string greater than every previous one."""
        with self._lock:
            candidate = int(ULID())
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(ULID.from_int(candidate))

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"


_generator = MonotonicGenerator()


def new_version_id() -> VersionID:
    """Generate new version ID."""
    return VersionID(_generator.generate_with_prefix(Prefix.VERSION))


def new_node_id() -> NodeID:
    """Generate new node ID."""
    return NodeID(_generator.generate_with_prefix(Prefix.NODE))


def new_message_id() -> MessageID:
    """Generate new message ID."""
    return MessageID(_generator.generate_with_prefix(Prefix.MESSAGE))
