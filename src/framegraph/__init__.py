"""framegraph: A tree of named coordinate frames and the poses between them."""

from framegraph.errors import (
    DeletedFrameError,
    DuplicateNameError,
    FrameGraphError,
    InvalidPathError,
    InvalidReferenceError,
    RootViolationError,
)
from framegraph.frame import FrameRef, FrameState, RelativePose
from framegraph.graph import FrameGraph

__version__ = "0.1.0"

__all__ = [
    "DeletedFrameError",
    "DuplicateNameError",
    "FrameGraph",
    "FrameGraphError",
    "FrameRef",
    "FrameState",
    "InvalidPathError",
    "InvalidReferenceError",
    "RelativePose",
    "RootViolationError",
]
