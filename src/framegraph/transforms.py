"""Rigid transform helpers.

Transforms are 4x4 homogeneous matrices in pytransform3d's ``A2B``
convention. A frame's local pose maps coordinates expressed in the frame into
coordinates expressed in its parent, so composing parent-to-child is a plain
matrix product: ``world2root @ a2world``.
"""

from typing import Any

import numpy as np
import numpy.typing as npt
from pytransform3d import transformations as pt
from scipy.spatial.transform import Rotation

Transform = npt.NDArray[np.floating[Any]]


def identity() -> Transform:
    """The identity transform."""
    return np.eye(4)


def translation(x: float, y: float, z: float) -> Transform:
    """A pure translation by ``(x, y, z)``."""
    return pt.transform_from(np.eye(3), np.array([x, y, z], dtype=np.float64))


def from_position_quaternion(
    position: npt.ArrayLike, quaternion: npt.ArrayLike
) -> Transform:
    """Build a transform from a position and a unit quaternion.

    Args:
        position: Array-like of shape (3,).
        quaternion: Array-like of shape (4,) in ``(w, x, y, z)`` order.

    Returns:
        A 4x4 homogeneous transformation matrix.
    """
    pq = np.hstack((np.asarray(position, dtype=np.float64), np.asarray(quaternion)))
    return pt.transform_from_pq(pq)


def from_position_euler(
    position: npt.ArrayLike, roll: float, pitch: float, yaw: float
) -> Transform:
    """Build a transform from a position and fixed-axis roll, pitch, yaw.

    The rotation is ``Rz(yaw) @ Ry(pitch) @ Rx(roll)``; angles are radians.
    """
    rotation = Rotation.from_euler("xyz", [roll, pitch, yaw])
    return pt.transform_from(rotation.as_matrix(), np.asarray(position, dtype=np.float64))


def position(transform: Transform) -> npt.NDArray[np.floating[Any]]:
    """The translational part of a transform, shape (3,)."""
    return np.array(transform[:3, 3], dtype=np.float64)


def quaternion(transform: Transform) -> npt.NDArray[np.floating[Any]]:
    """The rotational part of a transform as ``(w, x, y, z)``."""
    return pt.pq_from_transform(transform)[3:]


def euler(transform: Transform) -> tuple[float, float, float]:
    """The rotational part of a transform as ``(roll, pitch, yaw)``."""
    roll, pitch, yaw = Rotation.from_matrix(transform[:3, :3]).as_euler("xyz")
    return float(roll), float(pitch), float(yaw)


def compose(*transforms: Transform) -> Transform:
    """Chain transforms outermost first: ``compose(A, B) == A @ B``."""
    result = identity()
    for transform in transforms:
        result = result @ transform
    return result


def invert(transform: Transform) -> Transform:
    """The inverse of a rigid transform."""
    return pt.invert_transform(transform, check=False)


def check(transform: npt.ArrayLike, strict_check: bool = True) -> Transform:
    """Validate a rigid transform and return a private float64 copy.

    Raises:
        ValueError: If the input is not a valid homogeneous rigid transform
            (with ``strict_check=False`` rotation defects only warn).
    """
    return np.array(pt.check_transform(transform, strict_check=strict_check), copy=True)
