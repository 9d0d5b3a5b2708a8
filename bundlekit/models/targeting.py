"""
Module targeting.

ModuleTargeting describes the devices a module is delivered to. Targeting
values combine with merge semantics: repeated fields are concatenated and
nested messages are merged field by field.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import Field

from ..core.serialization import Message


class SdkVersion(Message):
    min: int | None = Field(default=None, description="Lowest Android API level included")


class SdkVersionTargeting(Message):
    """Supported SDK range; `alternatives` mark where the range ends."""

    value: tuple[SdkVersion, ...] = Field(default=(), description="Start of the supported range")
    alternatives: tuple[SdkVersion, ...] = Field(
        default=(), description="First SDK versions outside the supported range"
    )

    def merge(self, other: SdkVersionTargeting) -> SdkVersionTargeting:
        return SdkVersionTargeting(
            value=self.value + other.value,
            alternatives=self.alternatives + other.alternatives,
        )


class DeviceFeature(Message):
    feature_name: str = Field(default="", description="Feature name, e.g. android.hardware.camera.ar")
    feature_version: int | None = Field(default=None, description="Minimum feature version")


class DeviceFeatureTargeting(Message):
    required_feature: DeviceFeature


class UserCountriesTargeting(Message):
    """Countries a module is delivered to, or withheld from if `exclude`."""

    country_codes: tuple[str, ...] = Field(default=(), description="ISO 3166 alpha-2 codes")
    exclude: bool = Field(default=False, description="Deliver everywhere except these countries")

    def merge(self, other: UserCountriesTargeting) -> UserCountriesTargeting:
        return UserCountriesTargeting(
            country_codes=self.country_codes + other.country_codes,
            exclude=self.exclude or other.exclude,
        )


_Mergeable = TypeVar("_Mergeable", SdkVersionTargeting, UserCountriesTargeting)


class ModuleTargeting(Message):
    """Conditions under which a module is delivered."""

    sdk_version_targeting: SdkVersionTargeting | None = None
    device_feature_targeting: tuple[DeviceFeatureTargeting, ...] = Field(
        default=(), description="Features the device must have, all required"
    )
    user_countries_targeting: UserCountriesTargeting | None = None

    @property
    def is_empty(self) -> bool:
        return self == ModuleTargeting()

    def merge(self, other: ModuleTargeting) -> ModuleTargeting:
        """Combine two targeting values; neither operand is modified."""
        return ModuleTargeting(
            sdk_version_targeting=_merge_optional(
                self.sdk_version_targeting, other.sdk_version_targeting
            ),
            device_feature_targeting=self.device_feature_targeting
            + other.device_feature_targeting,
            user_countries_targeting=_merge_optional(
                self.user_countries_targeting, other.user_countries_targeting
            ),
        )


def _merge_optional(first: _Mergeable | None, second: _Mergeable | None) -> _Mergeable | None:
    if first is None:
        return second
    if second is None:
        return first
    return first.merge(second)


def merge_module_targeting(*targetings: ModuleTargeting) -> ModuleTargeting:
    """Merge targeting values in order; no arguments yields the empty targeting."""
    merged = ModuleTargeting()
    for targeting in targetings:
        merged = merged.merge(targeting)
    return merged
