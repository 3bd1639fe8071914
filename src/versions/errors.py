"""Version store errors."""


class VersionNotFound(KeyError):
    """Rollback target is not in the file's history."""

    def __init__(self, version_id: str, file: str) -> None:
        super().__init__(version_id)
        self.version_id = version_id
        self.file = file

    def __str__(self) -> str:
        return f"Version {self.version_id} not found for {self.file}"
