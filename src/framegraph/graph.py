"""Frame graph: a tree of named frames and the poses between them."""

import logging
from collections.abc import Iterator
from typing import Any, NoReturn

import numpy as np
import numpy.typing as npt
from pytransform3d.transform_manager import TransformManager

from framegraph import paths, transforms
from framegraph.errors import DuplicateNameError, InvalidReferenceError, RootViolationError
from framegraph.frame import FrameRef, RelativePose, _FrameNode
from framegraph.transforms import Transform

logger = logging.getLogger(__name__)


class FrameGraph:
    """A collection of frames and their relative poses.

    Frames are addressed by absolute paths such as ``/world/robot/camera``;
    the implicit root frame (path ``/`` or ``""``) is always present, sits at
    the identity and cannot be deleted. Each frame stores its pose relative
    to its parent, and :meth:`pose` composes these along the tree to relate
    any two frames.

    Transforms are 4x4 homogeneous matrices. The graph copies every pose it
    stores or returns, so callers never alias its internal state.
    """

    def __init__(self, *, check: bool = True, strict_check: bool = True) -> None:
        """Initialize a graph holding only the root frame.

        Args:
            check: Validate transforms passed in by callers.
            strict_check: Raise on invalid rotation matrices instead of
                warning. Only used when ``check`` is True.
        """
        self._check = check
        self._strict_check = strict_check
        self._owner = object()
        self._root = _FrameNode("", None, transforms.identity(), self._owner)

    def __copy__(self) -> NoReturn:
        raise TypeError("FrameGraph cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise TypeError("FrameGraph cannot be copied")

    def _validated(self, pose: npt.ArrayLike) -> Transform:
        if self._check:
            return transforms.check(pose, strict_check=self._strict_check)
        return np.array(pose, dtype=np.float64)

    def _resolve(self, path: str, start: _FrameNode | None = None) -> _FrameNode:
        return paths.resolve(path, self._root, start)  # type: ignore[return-value]

    def _deref(self, ref: FrameRef) -> _FrameNode:
        node = ref._node()
        if node.owner is not self._owner:
            raise InvalidReferenceError("Frame reference belongs to another FrameGraph")
        return node

    def _lookup(self, frame: "str | FrameRef") -> _FrameNode:
        if isinstance(frame, FrameRef):
            return self._deref(frame)
        return self._resolve(frame)

    def add_frame(self, parent_path: str, name: str, local_pose: npt.ArrayLike) -> FrameRef:
        """Add a new frame below an existing one.

        Args:
            parent_path: Absolute path of the parent; ``""`` or ``/`` for the root.
            name: Name of the new frame, unique among its siblings.
            local_pose: Pose of the new frame relative to its parent.

        Returns:
            A weak reference to the new frame.

        Raises:
            InvalidPathError: If the parent does not exist or the name is invalid.
            DuplicateNameError: If the parent already has a child called ``name``.
            ValueError: If ``local_pose`` is not a rigid transform.
        """
        parent = self._resolve(parent_path)
        paths.validate_name(name)
        if name in parent.children:
            raise DuplicateNameError(
                f"Frame '{name}' already exists in '{parent.path()}'"
            )
        pose = self._validated(local_pose)
        node = _FrameNode(name, parent, pose, self._owner)
        parent.children[name] = node
        logger.debug("Added frame '%s' under '%s'", name, parent_path)
        return FrameRef(node)

    def delete_frame(self, path: str) -> None:
        """Remove a frame and its whole subtree.

        References and relative poses that point into the subtree become
        stale and raise DeletedFrameError on their next use.

        Raises:
            InvalidPathError: If the frame does not exist.
            RootViolationError: If ``path`` designates the root.
        """
        node = self._resolve(path)
        if node.parent is None:
            raise RootViolationError("The root frame cannot be deleted")

        del node.parent.children[node.name]
        node.parent = None
        removed = 0
        pending = [node]
        while pending:
            current = pending.pop()
            current.alive = False
            pending.extend(current.children.values())
            removed += 1
        logger.debug("Deleted frame '%s' (%d frames removed)", path, removed)

    def local_pose(self, frame: "str | FrameRef") -> Transform:
        """Get the pose of a frame relative to its parent.

        Args:
            frame: Absolute path of the frame, or a reference to it.

        Raises:
            InvalidPathError: If the path does not resolve.
            DeletedFrameError: If the reference is stale.
            InvalidReferenceError: If the reference is empty or foreign.
        """
        return self._lookup(frame).local_pose.copy()

    def set_local_pose(self, frame: "str | FrameRef", pose: npt.ArrayLike) -> None:
        """Set the pose of a frame relative to its parent.

        Raises:
            InvalidPathError: If the path does not resolve.
            DeletedFrameError: If the reference is stale.
            InvalidReferenceError: If the reference is empty or foreign.
            RootViolationError: If the frame is the root.
            ValueError: If ``pose`` is not a rigid transform.
        """
        node = self._lookup(frame)
        if node.parent is None:
            raise RootViolationError("The root frame pose is fixed at identity")
        node.local_pose = self._validated(pose)

    def frame(self, path: "str | FrameRef", relative_path: str | None = None) -> FrameRef:
        """Get a weak reference to a frame.

        ``graph.frame('/a/b')`` resolves an absolute path.
        ``graph.frame(ref, 'c/d')`` resolves ``relative_path`` starting at
        ``ref``; ``..`` steps to the parent and a leading ``/`` restarts at
        the root.

        Raises:
            InvalidPathError: If the path does not resolve.
            DeletedFrameError: If the start reference is stale.
        """
        if relative_path is None:
            if isinstance(path, FrameRef):
                self._deref(path)
                return path
            return FrameRef(self._resolve(path))
        if not isinstance(path, FrameRef):
            start = self._resolve(path)
        else:
            start = self._deref(path)
        return FrameRef(self._resolve(relative_path, start))

    def children(self, frame: "str | FrameRef") -> list[str]:
        """Sorted names of the direct children of a frame."""
        return sorted(self._lookup(frame).children)

    def __contains__(self, path: object) -> bool:
        """Check if a frame exists: '/world/a' in graph"""
        if not isinstance(path, str):
            return False
        try:
            self._resolve(path)
        except KeyError:
            return False
        return True

    def __iter__(self) -> Iterator[str]:
        """Iterate over absolute paths of all frames below the root, parents first."""
        pending = [(paths.SEPARATOR, self._root)]
        while pending:
            prefix, node = pending.pop()
            for name in sorted(node.children, reverse=True):
                pending.append((prefix + name + paths.SEPARATOR, node.children[name]))
            if node is not self._root:
                yield prefix[:-1]

    def __len__(self) -> int:
        """Number of frames below the root."""
        count = 0
        pending = [self._root]
        while pending:
            node = pending.pop()
            pending.extend(node.children.values())
            count += len(node.children)
        return count

    def pose(
        self, dst: "str | FrameRef | RelativePose", src: "str | FrameRef | None" = None
    ) -> Transform:
        """Compute the pose of ``dst`` expressed in ``src``'s frame.

        ``graph.pose('/world/a', '/world/b')`` resolves both paths.
        ``graph.pose(relative_pose)`` evaluates a token from
        :meth:`create_relative_pose` without parsing any path.

        Returns:
            The 4x4 transform mapping ``dst`` coordinates into ``src``
            coordinates.

        Raises:
            InvalidPathError: If a path does not resolve.
            DeletedFrameError: If a reference or token is stale.
            InvalidReferenceError: If a reference is empty or foreign.
        """
        if isinstance(dst, RelativePose):
            if src is not None:
                raise TypeError("pose() takes no source frame with a RelativePose")
            return _relative_transform(self._deref(dst.dst), self._deref(dst.src))
        if src is None:
            raise TypeError("pose() missing the source frame")
        return _relative_transform(self._lookup(dst), self._lookup(src))

    def create_relative_pose(self, dst_path: str, src_path: str) -> RelativePose:
        """Resolve a frame pair once for repeated pose queries.

        Raises:
            InvalidPathError: If either path does not resolve.
        """
        dst = self._resolve(dst_path)
        src = self._resolve(src_path)
        return RelativePose(FrameRef(dst), FrameRef(src))

    def as_transform_manager(self) -> TransformManager:
        """Return a snapshot of the tree as a TransformManager.

        Nodes are named by absolute path, root included as ``/``. The copy is
        independent: later changes to the graph are not reflected.
        """
        tm = TransformManager(strict_check=self._strict_check, check=self._check)
        pending = [self._root]
        while pending:
            node = pending.pop()
            for child in node.children.values():
                tm.add_transform(child.path(), node.path(), child.local_pose.copy())
                pending.append(child)
        return tm


def _relative_transform(dst: _FrameNode, src: _FrameNode) -> Transform:
    """Pose of ``dst`` in ``src`` through their lowest common ancestor."""
    if dst is src:
        return transforms.identity()

    dst_chain = dst.ancestors()
    src_chain = src.ancestors()
    common = 0
    for dst_node, src_node in zip(dst_chain, src_chain):
        if dst_node is not src_node:
            break
        common += 1

    # chains[common - 1] is the lowest common ancestor, always at least the root
    dst2lca = transforms.compose(*(node.local_pose for node in dst_chain[common:]))
    src2lca = transforms.compose(*(node.local_pose for node in src_chain[common:]))
    return transforms.invert(src2lca) @ dst2lca
