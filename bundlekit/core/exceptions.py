"""
Exception hierarchy for bundlekit.

All exceptions inherit from BundleKitError. ValidationError and
DeserializationError are deliberately siblings: the first reports a caller
mistake (a structurally invalid module), the second reports corrupt input bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BundleKitError(Exception):
    """Base exception for all bundlekit errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(BundleKitError):
    """Raised when a module, entry or manifest is structurally invalid."""

    field_name: str | None = None
    expected_type: str | None = None
    actual_value: Any = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class DeserializationError(BundleKitError):
    """Raised when bytes at a special path do not parse against their schema."""

    path: str = ""
    message_type: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        where = f" at '{self.path}'" if self.path else ""
        return f"Cannot parse {self.message_type or 'message'}{where}: {base}"
