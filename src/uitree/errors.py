"""Parse failures raised by the structural engine.

Every error here means "this candidate has no tree"; callers keep the raw
source and carry on without structural fidelity.
"""


class ParseError(Exception):
    """Component source could not be turned into a tree."""

    def __init__(self, message: str, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position


class MalformedTag(ParseError):
    """A tag, quoted value or expression never terminates."""


class MismatchedTag(ParseError):
    """Closing tag does not match the open element, or an element never closes."""


class NoRootFound(ParseError):
    """The fragment holds no element at the top level."""


class MultipleRoots(ParseError):
    """The fragment holds more than one top-level element."""


class MissingReturn(ParseError):
    """No ``return (...)`` statement could be located in the module."""
