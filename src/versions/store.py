"""
Project Store - per-file chat history, version history and rollback cursor.

Versions are append-only. Rollback only moves the cursor; a generation after
a rollback is appended at the end, so no version is ever lost.
"""

import threading
from typing import Any, Iterator
from contextlib import contextmanager

from core import get_logger
from uitree import Node
from .errors import VersionNotFound
from .models import ChatMessage, FileWorkspace, Plan, Role, Version
from .repository import JsonSnapshotRepository

logger = get_logger(__name__)

DEFAULT_CODE = """import React from 'react';

export default function App() {
  return (
    <div className="p-8">
      <h1 className="text-4xl font-bold">Hello World</h1>
      <p className="mt-4 text-gray-600">Start building your amazing project.</p>
    </div>
  );
}
"""

SNAPSHOT_FORMAT = 1


class ProjectStore:
    """
    In-memory store of file workspaces with optional JSON persistence.

    Writers to the same file are serialised by a per-file re-entrant lock;
    readers see the last committed cursor.
    """

    def __init__(
        self,
        repository: JsonSnapshotRepository | None = None,
        default_file: str = "App.tsx",
        default_code: str = DEFAULT_CODE,
    ):
        self.repository = repository
        self.default_file = default_file
        self.default_code = default_code
        self._files: dict[str, FileWorkspace] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()
        self._persist_lock = threading.Lock()
        self._closed = False

    # ------------------------------------------------------------------
    # Lifecycle

    def load(self, snapshot: dict[str, Any] | None = None) -> None:
        """Replace the contents with ``snapshot`` (or the repository's copy)."""
        if snapshot is None and self.repository is not None:
            snapshot = self.repository.load()
        files = (snapshot or {}).get("files", [])
        loaded = {}
        for record in files:
            workspace = FileWorkspace.model_validate(record)
            loaded[workspace.name] = workspace
        with self._registry_lock:
            self._files = loaded
        logger.info("store_loaded", files=len(loaded))

    def snapshot(self) -> dict[str, Any]:
        """Whole store as JSON-compatible data."""
        with self._registry_lock:
            workspaces = list(self._files.values())
        return {
            "format": SNAPSHOT_FORMAT,
            "files": [w.model_dump(mode="json") for w in workspaces],
        }

    def close(self) -> None:
        """Flush to the repository; further writes are rejected."""
        if self._closed:
            return
        self._persist()
        self._closed = True
        logger.info("store_closed")

    # ------------------------------------------------------------------
    # Internals

    def _resolve(self, file: str | None) -> str:
        return file or self.default_file

    def _lock_for(self, file: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(file)
            if lock is None:
                lock = self._locks[file] = threading.RLock()
            return lock

    @contextmanager
    def _file_lock(self, file: str) -> Iterator[None]:
        """Hold the file's lock; retry if the file was deleted while waiting."""
        while True:
            lock = self._lock_for(file)
            with lock:
                with self._registry_lock:
                    current = self._locks.get(file) is lock
                if current:
                    yield
                    return

    @contextmanager
    def _writing(self, file: str) -> Iterator[FileWorkspace]:
        if self._closed:
            raise RuntimeError("ProjectStore is closed")
        with self._file_lock(file):
            with self._registry_lock:
                workspace = self._files.get(file)
                if workspace is None:
                    workspace = self._files[file] = FileWorkspace(name=file, code=self.default_code)
            yield workspace
            self._persist()

    def _persist(self) -> None:
        # Saves land in snapshot order
        if self.repository is not None:
            with self._persist_lock:
                self.repository.save(self.snapshot())

    def _workspace(self, file: str | None) -> FileWorkspace | None:
        with self._registry_lock:
            return self._files.get(self._resolve(file))

    # ------------------------------------------------------------------
    # Versions

    def add_version(
        self,
        file: str | None,
        prompt: str,
        plan: Plan,
        code: str,
        tree: Node | None,
        explanation: str,
    ) -> Version:
        """Append a version and move the cursor to it."""
        name = self._resolve(file)
        with self._writing(name) as workspace:
            version = Version(
                file=name,
                prompt=prompt,
                plan=plan,
                code=code,
                tree=tree,
                explanation=explanation,
            )
            workspace.versions.append(version)
            workspace.cursor = version.id
            workspace.code = version.code
        logger.info("version_added", file=name, version_id=version.id, has_tree=tree is not None)
        return version

    def rollback(self, file: str | None, version_id: str) -> Version:
        """
        Move the cursor to an earlier (or later) version of ``file``.

        Raises:
            VersionNotFound: If the id is not in this file's history
        """
        name = self._resolve(file)
        with self._file_lock(name):
            workspace = self._workspace(name)
            version = workspace.find(version_id) if workspace else None
            if version is None:
                raise VersionNotFound(version_id, name)
            with self._writing(name) as workspace:
                workspace.cursor = version.id
                workspace.code = version.code
        logger.info("version_rollback", file=name, version_id=version_id)
        return version

    def current(self, file: str | None = None) -> Version | None:
        workspace = self._workspace(file)
        return workspace.current() if workspace else None

    def versions(self, file: str | None = None) -> list[Version]:
        workspace = self._workspace(file)
        return list(workspace.versions) if workspace else []

    def code(self, file: str | None = None) -> str:
        """Code at the cursor, or the starter code for a file with no versions."""
        workspace = self._workspace(file)
        return workspace.code if workspace else self.default_code

    # ------------------------------------------------------------------
    # Chat

    def add_message(self, file: str | None, role: Role | str, content: str) -> ChatMessage:
        name = self._resolve(file)
        message = ChatMessage(role=Role(role), content=content)
        with self._writing(name) as workspace:
            workspace.messages.append(message)
        return message

    def messages(self, file: str | None = None) -> list[ChatMessage]:
        workspace = self._workspace(file)
        return list(workspace.messages) if workspace else []

    # ------------------------------------------------------------------
    # Files

    def files(self) -> list[str]:
        with self._registry_lock:
            return sorted(self._files)

    def delete_file(self, file: str) -> bool:
        """Forget a file and its history. Returns False if it did not exist."""
        with self._file_lock(file):
            with self._registry_lock:
                removed = self._files.pop(file, None)
                self._locks.pop(file, None)
            if removed is not None:
                self._persist()
        if removed is not None:
            logger.info("file_deleted", file=file, versions=len(removed.versions))
        return removed is not None

    def reset(self) -> None:
        """Drop every file."""
        with self._registry_lock:
            self._files.clear()
            self._locks.clear()
        self._persist()
        logger.info("store_reset")
