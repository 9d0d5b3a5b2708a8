"""Fixtures for building manifests and targeting values in tests."""

from .manifest import (
    android_manifest,
    dist_element,
    int_attribute,
    with_feature_condition,
    with_fusing_attribute,
    with_install_time_conditions,
    with_instant,
    with_max_sdk_condition,
    with_min_sdk_condition,
    with_on_demand,
    with_split_name,
    with_user_countries_condition,
    with_uses_split,
    with_version_code,
)
from .targeting import (
    merge_module_targeting,
    module_feature_targeting,
    module_min_max_sdk_version_targeting,
    module_min_sdk_version_targeting,
    module_user_countries_targeting,
)

__all__ = [
    "android_manifest",
    "dist_element",
    "int_attribute",
    "with_feature_condition",
    "with_fusing_attribute",
    "with_install_time_conditions",
    "with_instant",
    "with_max_sdk_condition",
    "with_min_sdk_condition",
    "with_on_demand",
    "with_split_name",
    "with_user_countries_condition",
    "with_uses_split",
    "with_version_code",
    "merge_module_targeting",
    "module_feature_targeting",
    "module_min_max_sdk_version_targeting",
    "module_min_sdk_version_targeting",
    "module_user_countries_targeting",
]
