"""
Android manifest model.

Wraps the compiled manifest document of a module and answers the questions
module ingestion needs: package name, <uses-split> dependencies, delivery
conditions and the dist:fusing flag.

Conditions are read from both locations the distribution schema allows:

    <dist:module>
      <dist:conditions>...</dist:conditions>
      <dist:delivery><dist:install-time><dist:conditions>...</dist:conditions>
      </dist:install-time></dist:delivery>
    </dist:module>
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import ValidationError
from .targeting import (
    DeviceFeature,
    DeviceFeatureTargeting,
    ModuleTargeting,
    SdkVersion,
    SdkVersionTargeting,
    UserCountriesTargeting,
    merge_module_targeting,
)
from .xml import XmlAttribute, XmlElement, XmlNode

ANDROID_NAMESPACE_URI = "http://schemas.android.com/apk/res/android"
DISTRIBUTION_NAMESPACE_URI = "http://schemas.android.com/apk/distribution"

MANIFEST_ELEMENT_NAME = "manifest"
USES_SPLIT_ELEMENT_NAME = "uses-split"
MODULE_ELEMENT_NAME = "module"
FUSING_ELEMENT_NAME = "fusing"
CONDITIONS_ELEMENT_NAME = "conditions"
DELIVERY_ELEMENT_NAME = "delivery"
INSTALL_TIME_ELEMENT_NAME = "install-time"
DEVICE_FEATURE_ELEMENT_NAME = "device-feature"
MIN_SDK_ELEMENT_NAME = "min-sdk"
MAX_SDK_ELEMENT_NAME = "max-sdk"
USER_COUNTRIES_ELEMENT_NAME = "user-countries"
COUNTRY_ELEMENT_NAME = "country"

PACKAGE_ATTRIBUTE_NAME = "package"
SPLIT_ATTRIBUTE_NAME = "split"
VERSION_CODE_ATTRIBUTE_NAME = "versionCode"
NAME_ATTRIBUTE_NAME = "name"
INCLUDE_ATTRIBUTE_NAME = "include"
ON_DEMAND_ATTRIBUTE_NAME = "onDemand"
INSTANT_ATTRIBUTE_NAME = "instant"
VALUE_ATTRIBUTE_NAME = "value"
VERSION_ATTRIBUTE_NAME = "version"
EXCLUDE_ATTRIBUTE_NAME = "exclude"
CODE_ATTRIBUTE_NAME = "code"


class FusingAttribute(str, Enum):
    """Value of <dist:fusing dist:include>, including its absence."""

    TRUE = "true"
    FALSE = "false"
    UNSET = "unset"

    def resolve(self, default: bool) -> bool:
        if self is FusingAttribute.UNSET:
            return default
        return self is FusingAttribute.TRUE


class SdkConditionKind(str, Enum):
    MIN = "min"
    MAX = "max"


class DeviceFeatureCondition(BaseModel):
    """<dist:device-feature>: module requires a device feature."""

    model_config = ConfigDict(frozen=True)

    feature_name: str
    feature_version: int | None = None

    def to_targeting(self) -> ModuleTargeting:
        return ModuleTargeting(
            device_feature_targeting=(
                DeviceFeatureTargeting(
                    required_feature=DeviceFeature(
                        feature_name=self.feature_name,
                        feature_version=self.feature_version,
                    )
                ),
            )
        )


class SdkVersionCondition(BaseModel):
    """<dist:min-sdk> or <dist:max-sdk>: bound on the device SDK version."""

    model_config = ConfigDict(frozen=True)

    kind: SdkConditionKind
    version: int


class UserCountriesCondition(BaseModel):
    """<dist:user-countries>: countries the module is (or is not) delivered to."""

    model_config = ConfigDict(frozen=True)

    country_codes: tuple[str, ...] = Field(default=())
    exclude: bool = False

    def to_targeting(self) -> ModuleTargeting:
        return ModuleTargeting(
            user_countries_targeting=UserCountriesTargeting(
                country_codes=self.country_codes, exclude=self.exclude
            )
        )


def _sdk_targeting(conditions: tuple[SdkVersionCondition, ...]) -> ModuleTargeting:
    """A min-sdk bound becomes a value; a max-sdk bound ends the range one version later."""
    minimums = [c.version for c in conditions if c.kind is SdkConditionKind.MIN]
    maximums = [c.version for c in conditions if c.kind is SdkConditionKind.MAX]
    return ModuleTargeting(
        sdk_version_targeting=SdkVersionTargeting(
            value=tuple(SdkVersion(min=v) for v in (minimums or [1])),
            alternatives=tuple(SdkVersion(min=v + 1) for v in maximums),
        )
    )


def _bool_value(attribute: XmlAttribute) -> bool:
    item = attribute.compiled_item
    if item is not None and item.prim is not None and item.prim.boolean_value is not None:
        return item.prim.boolean_value
    value = attribute.value.strip().lower()
    if value in ("true", "false"):
        return value == "true"
    raise ValidationError(
        message=f"Attribute '{attribute.name}' must be a boolean",
        field_name=attribute.name,
        expected_type="bool",
        actual_value=attribute.value,
    )


def _int_value(attribute: XmlAttribute) -> int:
    item = attribute.compiled_item
    if item is not None and item.prim is not None and item.prim.int_decimal_value is not None:
        return item.prim.int_decimal_value
    try:
        return int(attribute.value.strip())
    except ValueError as e:
        raise ValidationError(
            message=f"Attribute '{attribute.name}' must be an integer",
            field_name=attribute.name,
            expected_type="int",
            actual_value=attribute.value,
            cause=e,
        ) from e


def _required_attribute(element: XmlElement, namespace_uri: str, name: str) -> XmlAttribute:
    attribute = element.find_attribute(namespace_uri, name)
    if attribute is None:
        raise ValidationError(
            message=f"Element <{element.name}> is missing attribute '{name}'",
            field_name=name,
        )
    return attribute


class AndroidManifest:
    """Read-only view over a compiled AndroidManifest.xml document.

    Raises:
        ValidationError: If the document root is not a <manifest> element.
    """

    def __init__(self, manifest_root: XmlNode) -> None:
        root = manifest_root.element
        if root is None or root.name != MANIFEST_ELEMENT_NAME or root.namespace_uri:
            raise ValidationError(
                message="Manifest root must be a <manifest> element",
                field_name="androidManifest",
            )
        self._manifest_root = manifest_root
        self._root = root

    @property
    def manifest_root(self) -> XmlNode:
        """The underlying document, exactly as parsed."""
        return self._manifest_root

    @property
    def package_name(self) -> str:
        return _required_attribute(self._root, "", PACKAGE_ATTRIBUTE_NAME).value

    @property
    def split_id(self) -> str | None:
        attribute = self._root.find_attribute("", SPLIT_ATTRIBUTE_NAME)
        return attribute.value if attribute is not None else None

    @property
    def version_code(self) -> int | None:
        attribute = self._root.find_attribute(ANDROID_NAMESPACE_URI, VERSION_CODE_ATTRIBUTE_NAME)
        return _int_value(attribute) if attribute is not None else None

    @property
    def dependencies(self) -> tuple[str, ...]:
        """Names from <uses-split android:name>, in order, duplicates kept."""
        return tuple(
            _required_attribute(element, ANDROID_NAMESPACE_URI, NAME_ATTRIBUTE_NAME).value
            for element in self._root.children_named("", USES_SPLIT_ELEMENT_NAME)
        )

    @property
    def fusing_attribute(self) -> FusingAttribute:
        module = self._module_element()
        fusing = (
            module.first_child_named(DISTRIBUTION_NAMESPACE_URI, FUSING_ELEMENT_NAME)
            if module is not None
            else None
        )
        if fusing is None:
            return FusingAttribute.UNSET
        attribute = fusing.find_attribute(DISTRIBUTION_NAMESPACE_URI, INCLUDE_ATTRIBUTE_NAME)
        if attribute is None:
            return FusingAttribute.UNSET
        return FusingAttribute.TRUE if _bool_value(attribute) else FusingAttribute.FALSE

    @property
    def on_demand(self) -> bool | None:
        return self._module_bool_attribute(ON_DEMAND_ATTRIBUTE_NAME)

    @property
    def is_instant(self) -> bool | None:
        return self._module_bool_attribute(INSTANT_ATTRIBUTE_NAME)

    @property
    def feature_conditions(self) -> tuple[DeviceFeatureCondition, ...]:
        conditions = []
        for element in self._conditions_named(DEVICE_FEATURE_ELEMENT_NAME):
            name = _required_attribute(element, DISTRIBUTION_NAMESPACE_URI, NAME_ATTRIBUTE_NAME)
            version = element.find_attribute(DISTRIBUTION_NAMESPACE_URI, VERSION_ATTRIBUTE_NAME)
            conditions.append(
                DeviceFeatureCondition(
                    feature_name=name.value,
                    feature_version=_int_value(version) if version is not None else None,
                )
            )
        return tuple(conditions)

    @property
    def sdk_conditions(self) -> tuple[SdkVersionCondition, ...]:
        conditions = []
        for kind, element_name in (
            (SdkConditionKind.MIN, MIN_SDK_ELEMENT_NAME),
            (SdkConditionKind.MAX, MAX_SDK_ELEMENT_NAME),
        ):
            for element in self._conditions_named(element_name):
                value = _required_attribute(element, DISTRIBUTION_NAMESPACE_URI, VALUE_ATTRIBUTE_NAME)
                conditions.append(SdkVersionCondition(kind=kind, version=_int_value(value)))
        return tuple(conditions)

    @property
    def user_countries_conditions(self) -> tuple[UserCountriesCondition, ...]:
        conditions = []
        for element in self._conditions_named(USER_COUNTRIES_ELEMENT_NAME):
            exclude = element.find_attribute(DISTRIBUTION_NAMESPACE_URI, EXCLUDE_ATTRIBUTE_NAME)
            codes = tuple(
                _required_attribute(country, DISTRIBUTION_NAMESPACE_URI, CODE_ATTRIBUTE_NAME).value
                for country in element.children_named(
                    DISTRIBUTION_NAMESPACE_URI, COUNTRY_ELEMENT_NAME
                )
            )
            conditions.append(
                UserCountriesCondition(
                    country_codes=codes,
                    exclude=_bool_value(exclude) if exclude is not None else False,
                )
            )
        return tuple(conditions)

    def module_targeting(self) -> ModuleTargeting:
        """Merge of every declared condition; empty when none are declared."""
        targetings = [condition.to_targeting() for condition in self.feature_conditions]
        sdk_conditions = self.sdk_conditions
        if sdk_conditions:
            targetings.append(_sdk_targeting(sdk_conditions))
        targetings.extend(condition.to_targeting() for condition in self.user_countries_conditions)
        return merge_module_targeting(*targetings)

    def _module_element(self) -> XmlElement | None:
        return self._root.first_child_named(DISTRIBUTION_NAMESPACE_URI, MODULE_ELEMENT_NAME)

    def _module_bool_attribute(self, name: str) -> bool | None:
        module = self._module_element()
        if module is None:
            return None
        attribute = module.find_attribute(DISTRIBUTION_NAMESPACE_URI, name)
        return _bool_value(attribute) if attribute is not None else None

    def _conditions_elements(self) -> Iterator[XmlElement]:
        module = self._module_element()
        if module is None:
            return
        yield from module.children_named(DISTRIBUTION_NAMESPACE_URI, CONDITIONS_ELEMENT_NAME)
        for delivery in module.children_named(DISTRIBUTION_NAMESPACE_URI, DELIVERY_ELEMENT_NAME):
            for install_time in delivery.children_named(
                DISTRIBUTION_NAMESPACE_URI, INSTALL_TIME_ELEMENT_NAME
            ):
                yield from install_time.children_named(
                    DISTRIBUTION_NAMESPACE_URI, CONDITIONS_ELEMENT_NAME
                )

    def _conditions_named(self, name: str) -> Iterator[XmlElement]:
        for conditions in self._conditions_elements():
            yield from conditions.children_named(DISTRIBUTION_NAMESPACE_URI, name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AndroidManifest):
            return NotImplemented
        return self._manifest_root == other._manifest_root

    def __hash__(self) -> int:
        return hash(self._manifest_root)

    def __repr__(self) -> str:
        package = self._root.find_attribute("", PACKAGE_ATTRIBUTE_NAME)
        return f"AndroidManifest(package={package.value if package else None!r})"
