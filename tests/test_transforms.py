"""Tests for the transform helpers."""

import numpy as np
import pytest
from numpy.testing import assert_array_almost_equal

from framegraph import transforms


class TestConstructors:
    """Tests for building transforms."""

    def test_identity(self) -> None:
        """identity() is the 4x4 identity matrix."""
        assert_array_almost_equal(transforms.identity(), np.eye(4))

    def test_translation(self) -> None:
        """translation() moves points without rotating them."""
        t = transforms.translation(1, 2, 3)
        assert_array_almost_equal(t[:3, :3], np.eye(3))
        assert_array_almost_equal(transforms.position(t), [1, 2, 3])

    def test_from_position_quaternion(self) -> None:
        """A quarter turn about z maps x onto y."""
        half = np.sqrt(0.5)
        t = transforms.from_position_quaternion([1, 0, 0], [half, 0, 0, half])
        assert_array_almost_equal(t @ [1, 0, 0, 1], [1, 1, 0, 1])
        assert_array_almost_equal(transforms.quaternion(t), [half, 0, 0, half])

    def test_from_position_euler_yaw(self) -> None:
        """Yaw rotates about the z axis."""
        t = transforms.from_position_euler([0, 0, 0], 0, 0, np.pi / 2)
        assert_array_almost_equal(t @ [1, 0, 0, 1], [0, 1, 0, 1])

    def test_from_position_euler_order(self) -> None:
        """Roll is applied before yaw about fixed axes."""
        t = transforms.from_position_euler([0, 0, 0], np.pi / 2, 0, np.pi / 2)
        # roll takes y to z, yaw then leaves z alone
        assert_array_almost_equal(t @ [0, 1, 0, 1], [0, 0, 1, 1])
        assert transforms.euler(t) == pytest.approx((np.pi / 2, 0, np.pi / 2))


class TestAlgebra:
    """Tests for compose() and invert()."""

    def test_compose_applies_last_transform_first(self) -> None:
        """compose(A, B) applies B, then A."""
        turn = transforms.from_position_euler([0, 0, 0], 0, 0, np.pi / 2)
        shift = transforms.translation(1, 0, 0)
        assert_array_almost_equal(
            transforms.position(transforms.compose(turn, shift)), [0, 1, 0]
        )
        assert_array_almost_equal(
            transforms.position(transforms.compose(shift, turn)), [1, 0, 0]
        )

    def test_compose_nothing_is_identity(self) -> None:
        """An empty composition is the identity."""
        assert_array_almost_equal(transforms.compose(), np.eye(4))

    def test_invert(self) -> None:
        """A transform composed with its inverse is the identity."""
        t = transforms.from_position_euler([1, 2, 3], 0.1, 0.2, 0.3)
        assert_array_almost_equal(transforms.compose(t, transforms.invert(t)), np.eye(4))


class TestCheck:
    """Tests for check()."""

    def test_check_returns_copy(self) -> None:
        """check() returns a float copy of its input."""
        original = np.eye(4, dtype=int)
        checked = transforms.check(original)
        checked[0, 3] = 5
        assert original[0, 3] == 0
        assert checked.dtype == np.float64

    @pytest.mark.parametrize(
        "matrix",
        [np.eye(3), np.ones((4, 4)), np.diag([1.0, 1.0, 1.0, 2.0])],
    )
    def test_check_rejects_non_rigid(self, matrix: np.ndarray) -> None:
        """Wrong shapes, bad rotations and bad bottom rows raise ValueError."""
        with pytest.raises(ValueError):
            transforms.check(matrix)
