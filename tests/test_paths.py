"""Tests for path parsing and resolution."""

import pytest

from framegraph import InvalidPathError
from framegraph.paths import join_path, split_path, validate_name


class TestSplitPath:
    """Tests for split_path()."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("", (False, ())),
            ("/", (True, ())),
            ("world", (False, ("world",))),
            ("/world/a", (True, ("world", "a"))),
            ("/world/a/", (True, ("world", "a"))),
            ("../b", (False, ("..", "b"))),
        ],
    )
    def test_valid_paths(self, path: str, expected: tuple[bool, tuple[str, ...]]) -> None:
        """Valid paths split into an anchor flag and segments."""
        assert split_path(path) == expected

    @pytest.mark.parametrize("path", ["//", "/world//a", "world//", "/a/b//"])
    def test_empty_segment_raises(self, path: str) -> None:
        """Doubled separators raise InvalidPathError."""
        with pytest.raises(InvalidPathError, match="empty segment"):
            split_path(path)

    def test_non_string_raises(self) -> None:
        """Non-string paths raise TypeError."""
        with pytest.raises(TypeError):
            split_path(None)  # type: ignore[arg-type]

    def test_error_is_a_key_error(self) -> None:
        """InvalidPathError can be caught as KeyError."""
        with pytest.raises(KeyError):
            split_path("a//b")


class TestJoinPath:
    """Tests for join_path()."""

    def test_join(self) -> None:
        """Segments join into an absolute path."""
        assert join_path("world", "a") == "/world/a"

    def test_join_nothing_is_root(self) -> None:
        """No segments is the root path."""
        assert join_path() == "/"


class TestValidateName:
    """Tests for validate_name()."""

    def test_valid_name(self) -> None:
        """Ordinary names pass."""
        validate_name("camera_link.optical")

    @pytest.mark.parametrize("name", ["", "a/b", "/", ".", ".."])
    def test_invalid_name_raises(self, name: str) -> None:
        """Empty, nested and reserved names raise InvalidPathError."""
        with pytest.raises(InvalidPathError):
            validate_name(name)
