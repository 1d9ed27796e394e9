"""Frame nodes and the non-owning handles that point at them."""

import enum
import weakref
from typing import Any

from framegraph.errors import DeletedFrameError, InvalidReferenceError
from framegraph.paths import SEPARATOR
from framegraph.transforms import Transform


class _FrameNode:
    """A frame in the tree. Owned by its parent's ``children`` dict.

    ``alive`` is cleared when the frame or one of its ancestors is deleted;
    handles test it instead of being swept.
    """

    __slots__ = ("name", "parent", "local_pose", "children", "owner", "alive", "__weakref__")

    def __init__(
        self,
        name: str,
        parent: "_FrameNode | None",
        local_pose: Transform,
        owner: object,
    ) -> None:
        self.name = name
        self.parent = parent
        self.local_pose = local_pose
        self.children: dict[str, _FrameNode] = {}
        self.owner = owner
        self.alive = True

    def ancestors(self) -> list["_FrameNode"]:
        """The chain root -> self, inclusive."""
        chain = []
        node: _FrameNode | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    def path(self) -> str:
        return SEPARATOR + SEPARATOR.join(node.name for node in self.ancestors()[1:])


class FrameState(enum.Enum):
    """Liveness of the frame behind a :class:`FrameRef`."""

    EMPTY = "empty"
    LIVE = "live"
    DELETED = "deleted"


class FrameRef:
    """Weak, non-owning handle to a frame.

    Obtained from :meth:`FrameGraph.frame` or :meth:`FrameGraph.add_frame`.
    A handle never keeps its frame alive; once the frame (or any ancestor) is
    deleted, every dereference raises :class:`DeletedFrameError`. A handle
    built with no arguments is empty and raises
    :class:`InvalidReferenceError` instead.
    """

    __slots__ = ("_ref", "_hash")

    def __init__(self, node: _FrameNode | None = None) -> None:
        self._ref = weakref.ref(node) if node is not None else None
        self._hash = hash(self._ref)

    @property
    def state(self) -> FrameState:
        if self._ref is None:
            return FrameState.EMPTY
        node = self._ref()
        if node is None or not node.alive:
            return FrameState.DELETED
        return FrameState.LIVE

    def is_live(self) -> bool:
        """Whether the referenced frame still exists."""
        return self.state is FrameState.LIVE

    def _node(self) -> _FrameNode:
        """Dereference, raising if the handle is empty or stale."""
        if self._ref is None:
            raise InvalidReferenceError("Empty frame reference")
        node = self._ref()
        if node is None or not node.alive:
            raise DeletedFrameError("Frame reference points to a deleted frame")
        return node

    @property
    def name(self) -> str:
        """The frame name; empty for the root."""
        return self._node().name

    @property
    def path(self) -> str:
        """The absolute path of the frame, derived from its ancestors."""
        return self._node().path()

    @property
    def parent(self) -> "FrameRef | None":
        """A handle to the parent frame, or None for the root."""
        parent = self._node().parent
        return FrameRef(parent) if parent is not None else None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FrameRef):
            return NotImplemented
        return self._ref == other._ref

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        state = self.state
        if state is FrameState.LIVE:
            return f"FrameRef('{self.path}')"
        return f"FrameRef(<{state.value}>)"


class RelativePose:
    """Cached destination/source frame pair for repeated pose queries.

    Created by :meth:`FrameGraph.create_relative_pose` and evaluated with
    :meth:`FrameGraph.pose`. Evaluation skips path parsing. The token is
    never repaired: once either frame is deleted it must be recreated.
    """

    __slots__ = ("_dst", "_src")

    def __init__(self, dst: FrameRef, src: FrameRef) -> None:
        self._dst = dst
        self._src = src

    @property
    def dst(self) -> FrameRef:
        """The frame whose pose is computed."""
        return self._dst

    @property
    def src(self) -> FrameRef:
        """The frame the pose is expressed in."""
        return self._src

    def is_valid(self) -> bool:
        """Whether both frames still exist."""
        return self._dst.is_live() and self._src.is_live()

    def __repr__(self) -> str:
        return f"RelativePose(dst={self._dst!r}, src={self._src!r})"
