"""Resource table stored at resources.pb."""

from __future__ import annotations

from pydantic import Field

from ..core.serialization import Message


class ResourceEntry(Message):
    """A single named resource."""

    entry_id: int | None = Field(default=None, description="Entry part of the 0xPPTTEEEE resource id")
    name: str = ""


class ResourceType(Message):
    """Resources of one type (string, drawable, layout, ...)."""

    type_id: int | None = Field(default=None, description="Type part of the 0xPPTTEEEE resource id")
    name: str = ""
    entry: tuple[ResourceEntry, ...] = ()


class Package(Message):
    """Resource package."""

    package_id: int | None = Field(default=None, description="Package part of the resource id, 0x7f for apps")
    package_name: str = ""
    type: tuple[ResourceType, ...] = ()


class ResourceTable(Message):
    """Compiled resource table of a module."""

    package: tuple[Package, ...] = ()

    @property
    def resource_count(self) -> int:
        return sum(len(t.entry) for p in self.package for t in p.type)
