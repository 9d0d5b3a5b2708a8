"""
Module entries and the entry store.

An entry is a single (path, content) file inside a module. Entries are value
objects: two entries are equal when their paths and contents are equal,
whatever backs their content.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from ..core.exceptions import ValidationError
from .special_entries import SpecialModuleEntry
from .zip_path import ZipPath


class ModuleEntry(ABC):
    """A file or directory inside a module."""

    @property
    @abstractmethod
    def path(self) -> ZipPath:
        """Archive-relative path of the entry."""
        ...

    @abstractmethod
    def get_content(self) -> bytes:
        """Read the full content of the entry."""
        ...

    @property
    def is_directory(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleEntry):
            return NotImplemented
        return (
            self.path == other.path
            and self.is_directory == other.is_directory
            and self.get_content() == other.get_content()
        )

    def __hash__(self) -> int:
        return hash((self.path, self.is_directory, self.get_content()))

    def __repr__(self) -> str:
        kind = "directory" if self.is_directory else "file"
        return f"{type(self).__name__}({kind} '{self.path}')"


class InMemoryModuleEntry(ModuleEntry):
    """Entry whose content is held in memory."""

    def __init__(self, path: ZipPath, content: bytes, is_directory: bool = False) -> None:
        self._path = path
        self._content = bytes(content)
        self._is_directory = is_directory

    @classmethod
    def of_file(cls, path: str | ZipPath, content: bytes) -> InMemoryModuleEntry:
        return cls(ZipPath.create(path), content)

    @classmethod
    def of_directory(cls, path: str | ZipPath) -> InMemoryModuleEntry:
        return cls(ZipPath.create(path), b"", is_directory=True)

    @property
    def path(self) -> ZipPath:
        return self._path

    @property
    def is_directory(self) -> bool:
        return self._is_directory

    def get_content(self) -> bytes:
        return self._content


class ModuleEntryStore:
    """Immutable, insertion-ordered collection of the non-special entries of a module.

    Raises:
        ValidationError: If two entries share a path, or an entry sits at one
            of the reserved special paths.
    """

    def __init__(self, entries: Iterable[ModuleEntry] = ()) -> None:
        by_path: dict[ZipPath, ModuleEntry] = {}
        for entry in entries:
            if SpecialModuleEntry.for_path(entry.path) is not None:
                raise ValidationError(
                    message=f"Entry '{entry.path}' is a special file and cannot be stored as content",
                    field_name="entries",
                    actual_value=str(entry.path),
                )
            if entry.path in by_path:
                raise ValidationError(
                    message=f"Duplicate entry path '{entry.path}'",
                    field_name="entries",
                    actual_value=str(entry.path),
                )
            by_path[entry.path] = entry
        self._entries = by_path

    @property
    def entries(self) -> tuple[ModuleEntry, ...]:
        return tuple(self._entries.values())

    def get_entry(self, path: str | ZipPath) -> ModuleEntry | None:
        """Exact-path lookup; None when no entry has this path."""
        return self._entries.get(ZipPath.create(path))

    def find_entries_under_path(self, prefix: str | ZipPath) -> Iterator[ModuleEntry]:
        """Lazily yield the entries located strictly inside the `prefix` directory.

        Matching is per segment: "dir1" matches "dir1/a" but not "dir1longer/a",
        and an entry whose path equals the prefix is not inside it.
        """
        prefix = ZipPath.create(prefix)
        return (
            entry
            for entry in self._entries.values()
            if entry.path.name_count > prefix.name_count and entry.path.starts_with(prefix)
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ModuleEntry]:
        return iter(self._entries.values())

    def __contains__(self, path: object) -> bool:
        if isinstance(path, (str, ZipPath)):
            return ZipPath.create(path) in self._entries
        return False
