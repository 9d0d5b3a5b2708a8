"""Derived per-module metadata."""

from __future__ import annotations

from pydantic import Field

from ..core.serialization import Message
from .targeting import ModuleTargeting


class ModuleMetadata(Message):
    """Name, dependencies and targeting of a module, derived from its manifest."""

    name: str = Field(description="Module name")
    dependencies: tuple[str, ...] = Field(
        default=(), description="Modules named by <uses-split>, in declaration order"
    )
    targeting: ModuleTargeting = Field(default_factory=ModuleTargeting)
    is_instant: bool = Field(default=False, description="Module is available to instant apps")
    on_demand: bool = Field(default=False, description="Module is downloaded on request")
