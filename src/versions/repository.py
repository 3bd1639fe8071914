"""JSON snapshot persistence for the project store."""

import os
import tempfile
from pathlib import Path
from typing import Any

import orjson

from core import get_logger, loads

logger = get_logger(__name__)


class JsonSnapshotRepository:
    """
    Whole-store snapshot in a single JSON file.

    Writes go to a temporary file in the same directory and are moved into
    place with ``os.replace``, so readers never see a half-written file.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> dict[str, Any] | None:
        """Read the snapshot, or None when no snapshot exists yet."""
        if not self.path.exists():
            logger.info("snapshot_missing", path=str(self.path))
            return None
        data = loads(self.path.read_bytes())
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot {self.path} is not a JSON object")
        return data

    def save(self, snapshot: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = orjson.dumps(snapshot, option=orjson.OPT_INDENT_2)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("snapshot_saved", path=str(self.path), size=len(payload))
