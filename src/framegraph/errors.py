"""Exceptions raised by frame graph operations."""


class FrameGraphError(Exception):
    """Base class for all frame graph errors."""


class InvalidPathError(FrameGraphError, KeyError):
    """A path is malformed or names a frame that does not exist."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path '{path}': {reason}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class DuplicateNameError(FrameGraphError, ValueError):
    """A frame with the requested name already exists under the parent."""


class DeletedFrameError(FrameGraphError):
    """A frame reference or relative pose points at a deleted frame."""


class InvalidReferenceError(FrameGraphError):
    """A frame reference is empty or belongs to another frame graph."""


class RootViolationError(FrameGraphError, ValueError):
    """An operation tried to delete or move the root frame."""
