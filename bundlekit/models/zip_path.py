"""
Archive-relative paths.

A ZipPath is a sequence of path segments. All prefix logic compares whole
segments, so "dir1" is a prefix of "dir1/entry" but not of "dir1longer/entry".
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError

SEPARATOR = "/"
_FORBIDDEN_NAMES = frozenset({"", ".", ".."})


@dataclass(frozen=True, order=True)
class ZipPath:
    """Immutable archive path made of '/'-separated segments."""

    names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in self.names:
            if name in _FORBIDDEN_NAMES or SEPARATOR in name or "\\" in name:
                raise ValidationError(
                    message=f"Invalid path segment '{name}'",
                    field_name="path",
                    actual_value=self.names,
                )

    @classmethod
    def create(cls, path: str | ZipPath) -> ZipPath:
        """Create a path from a '/'-separated string.

        Leading and trailing separators are ignored; the empty string is the root.
        """
        if isinstance(path, ZipPath):
            return path
        stripped = path.strip(SEPARATOR)
        if not stripped:
            return ROOT
        return cls(tuple(stripped.split(SEPARATOR)))

    @property
    def name_count(self) -> int:
        return len(self.names)

    @property
    def file_name(self) -> str | None:
        """Last segment, or None for the root."""
        return self.names[-1] if self.names else None

    @property
    def parent(self) -> ZipPath | None:
        """Path without its last segment, or None for the root."""
        if not self.names:
            return None
        return ZipPath(self.names[:-1])

    def subpath(self, begin: int, end: int) -> ZipPath:
        return ZipPath(self.names[begin:end])

    def starts_with(self, prefix: str | ZipPath) -> bool:
        """Whether every segment of `prefix` equals the leading segments of this path."""
        prefix = ZipPath.create(prefix)
        count = prefix.name_count
        return count <= self.name_count and self.names[:count] == prefix.names

    def resolve(self, other: str | ZipPath) -> ZipPath:
        """Append `other` to this path."""
        return ZipPath(self.names + ZipPath.create(other).names)

    def __str__(self) -> str:
        return SEPARATOR.join(self.names)

    def __repr__(self) -> str:
        return f"ZipPath('{self}')"


ROOT = ZipPath()
