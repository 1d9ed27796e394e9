"""Path syntax and resolution over the frame tree.

Paths are ``/``-separated frame names. A leading ``/`` anchors the path at
the root; without it the path starts at the frame it is resolved from (the
root, unless a start frame is given). The empty path and ``/`` name the start
frame itself. ``.`` stays on the current frame and ``..`` steps to its parent.
"""

from typing import Protocol

from framegraph.errors import InvalidPathError

SEPARATOR = "/"
CURRENT = "."
PARENT = ".."
RESERVED_NAMES = frozenset({CURRENT, PARENT})


class _Node(Protocol):
    parent: "_Node | None"
    children: dict[str, "_Node"]


def split_path(path: str) -> tuple[bool, tuple[str, ...]]:
    """Split a path into segments without touching the tree.

    Args:
        path: The path to split.

    Returns:
        A tuple ``(anchored, segments)`` where ``anchored`` is True when the
        path starts at the root.

    Raises:
        InvalidPathError: If the path contains an empty segment.
        TypeError: If the path is not a string.
    """
    if not isinstance(path, str):
        raise TypeError(f"Expected a path string, got {type(path).__name__}")
    anchored = path.startswith(SEPARATOR)
    body = path[1:] if anchored else path
    if len(body) > 1 and body.endswith(SEPARATOR):
        body = body[:-1]
    if not body:
        return anchored, ()
    segments = tuple(body.split(SEPARATOR))
    if "" in segments:
        raise InvalidPathError(path, "empty segment")
    return anchored, segments


def join_path(*segments: str) -> str:
    """Join frame names into an absolute path: join_path('a', 'b') == '/a/b'"""
    return SEPARATOR + SEPARATOR.join(segments)


def validate_name(name: str) -> None:
    """Raise InvalidPathError unless ``name`` can be used as a frame name."""
    if not isinstance(name, str):
        raise TypeError(f"Expected a frame name string, got {type(name).__name__}")
    if not name:
        raise InvalidPathError(name, "frame names must not be empty")
    if SEPARATOR in name:
        raise InvalidPathError(name, f"frame names must not contain '{SEPARATOR}'")
    if name in RESERVED_NAMES:
        raise InvalidPathError(name, f"'{name}' is a reserved path segment")


def walk(start: _Node, segments: tuple[str, ...], path: str) -> _Node:
    """Follow ``segments`` from ``start``.

    Raises:
        InvalidPathError: Naming the first segment that does not resolve.
    """
    node = start
    for depth, segment in enumerate(segments):
        if segment == CURRENT:
            continue
        if segment == PARENT:
            if node.parent is None:
                raise InvalidPathError(path, "'..' steps above the root")
            node = node.parent
            continue
        try:
            node = node.children[segment]
        except KeyError:
            walked = SEPARATOR.join(segments[:depth]) or SEPARATOR
            raise InvalidPathError(path, f"no frame '{segment}' in '{walked}'") from None
    return node


def resolve(path: str, root: _Node, start: _Node | None = None) -> _Node:
    """Resolve ``path`` from ``start``, or from ``root`` if anchored or no start."""
    anchored, segments = split_path(path)
    origin = root if anchored or start is None else start
    return walk(origin, segments, path)
