"""Unit tests for bundle module construction."""

import pytest

from bundlekit import (
    BundleModule,
    BundleModuleName,
    DeserializationError,
    ValidationError,
    is_included_in_fusing,
)
from bundlekit.models import (
    AndroidManifest,
    Assets,
    InMemoryModuleEntry,
    NativeLibraries,
    Package,
    ResourceTable,
    TargetedAssetsDirectory,
    TargetedNativeDirectory,
    XmlElement,
    XmlNode,
    ZipPath,
)
from bundlekit.models.targeting import ModuleTargeting
from bundlekit.testing import (
    android_manifest,
    merge_module_targeting,
    module_feature_targeting,
    module_min_sdk_version_targeting,
    with_feature_condition,
    with_fusing_attribute,
    with_instant,
    with_min_sdk_condition,
    with_on_demand,
    with_uses_split,
)

BAD_BYTES = b"bad"


class TestSpecialFiles:
    """Tests for parsing the special configuration files."""

    def test_missing_assets_file_returns_none(self, minimal_module_builder):
        """Test that a module without assets.pb has no assets config."""
        module = minimal_module_builder.build()
        assert module.assets_config is None

    def test_correct_assets_file_parsed(self, minimal_module_builder):
        """Test that assets.pb content is parsed and returned unchanged."""
        assets = Assets(directory=(TargetedAssetsDirectory(path="assets/data-armv6"),))

        module = minimal_module_builder.add_entry(
            InMemoryModuleEntry.of_file("assets.pb", assets.to_bytes())
        ).build()

        assert module.assets_config == assets

    def test_incorrect_assets_file_raises_on_add(self, minimal_module_builder):
        """Test that malformed assets.pb fails when the entry is added."""
        with pytest.raises(DeserializationError) as exc_info:
            minimal_module_builder.add_entry(InMemoryModuleEntry.of_file("assets.pb", BAD_BYTES))
        assert exc_info.value.path == "assets.pb"
        assert exc_info.value.message_type == "Assets"

    def test_missing_native_file_returns_none(self, minimal_module_builder):
        """Test that a module without native.pb has no native config."""
        module = minimal_module_builder.build()
        assert module.native_config is None

    def test_correct_native_file_parsed(self, minimal_module_builder):
        """Test that native.pb content is parsed and returned unchanged."""
        native = NativeLibraries(directory=(TargetedNativeDirectory(path="native/x86"),))

        module = minimal_module_builder.add_entry(
            InMemoryModuleEntry.of_file("native.pb", native.to_bytes())
        ).build()

        assert module.native_config == native

    def test_incorrect_native_file_raises_on_add(self, minimal_module_builder):
        """Test that malformed native.pb fails when the entry is added."""
        with pytest.raises(DeserializationError):
            minimal_module_builder.add_entry(InMemoryModuleEntry.of_file("native.pb", BAD_BYTES))

    def test_missing_resource_table_returns_none(self, minimal_module_builder):
        """Test that a module without resources.pb has no resource table."""
        module = minimal_module_builder.build()
        assert module.resource_table is None

    def test_correct_resource_table_parsed(self, minimal_module_builder):
        """Test that resources.pb content is parsed and returned unchanged."""
        resource_table = ResourceTable(package=(Package(),))

        module = minimal_module_builder.add_entry(
            InMemoryModuleEntry.of_file("resources.pb", resource_table.to_bytes())
        ).build()

        assert module.resource_table == resource_table

    def test_incorrect_resource_table_raises_on_add(self, minimal_module_builder):
        """Test that malformed resources.pb fails when the entry is added."""
        with pytest.raises(DeserializationError):
            minimal_module_builder.add_entry(
                InMemoryModuleEntry.of_file("resources.pb", BAD_BYTES)
            )

    def test_default_message_is_present_not_absent(self, minimal_module_builder):
        """Test that an empty but present assets.pb is distinct from a missing one."""
        module = minimal_module_builder.add_entry(
            InMemoryModuleEntry.of_file("assets.pb", Assets().to_bytes())
        ).build()

        assert module.assets_config is not None
        assert module.assets_config == Assets()

    @pytest.mark.parametrize(
        "path,attribute,expected",
        [
            ("assets.pb", "assets_config", Assets()),
            ("native.pb", "native_config", NativeLibraries()),
            ("resources.pb", "resource_table", ResourceTable()),
        ],
    )
    def test_zero_byte_special_file_is_default(self, minimal_module_builder, path, attribute, expected):
        """Test that a zero-byte special file builds as a present, default-valued message."""
        module = minimal_module_builder.add_entry(InMemoryModuleEntry.of_file(path, b"")).build()

        assert getattr(module, attribute) is not None
        assert getattr(module, attribute) == expected

    def test_malformed_batch_adds_nothing(self, minimal_module_builder):
        """Test that a failing batch leaves the builder's entries untouched."""
        batch = [
            InMemoryModuleEntry.of_file("dex/classes.dex", b"dex"),
            InMemoryModuleEntry.of_file("native.pb", BAD_BYTES),
        ]
        with pytest.raises(DeserializationError):
            minimal_module_builder.add_entries(batch)

        module = minimal_module_builder.build()
        assert module.entries == ()


class TestManifest:
    """Tests for the required manifest."""

    def test_missing_manifest_raises(self, default_bundle_config):
        """Test that building without any manifest names the missing property."""
        builder = (
            BundleModule.builder()
            .set_name(BundleModuleName.create("testModule"))
            .set_bundle_config(default_bundle_config)
        )

        with pytest.raises(ValidationError) as exc_info:
            builder.build()

        assert "Missing required properties: androidManifest" in str(exc_info.value)
        assert exc_info.value.field_name == "androidManifest"

    def test_missing_name_and_manifest_listed_together(self):
        """Test that all missing required properties are reported in one error."""
        with pytest.raises(ValidationError, match="Missing required properties: name androidManifest"):
            BundleModule.builder().build()

    def test_manifest_entry_parsed(self, default_bundle_config):
        """Test that a manifest entry is parsed into the module's manifest."""
        manifest_xml = android_manifest("com.test.app")

        module = (
            BundleModule.builder()
            .set_name(BundleModuleName.create("testModule"))
            .set_bundle_config(default_bundle_config)
            .add_entry(
                InMemoryModuleEntry.of_file("manifest/AndroidManifest.xml", manifest_xml.to_bytes())
            )
            .build()
        )

        assert module.android_manifest.manifest_root == manifest_xml
        assert module.package_name == "com.test.app"

    def test_incorrect_manifest_raises_on_add(self):
        """Test that a malformed manifest fails at add time, before any config is set."""
        builder = BundleModule.builder().set_name(BundleModuleName.create("testModule"))

        with pytest.raises(DeserializationError) as exc_info:
            builder.add_entry(InMemoryModuleEntry.of_file("manifest/AndroidManifest.xml", BAD_BYTES))
        assert exc_info.value.path == "manifest/AndroidManifest.xml"

    def test_deserialization_error_is_not_validation_error(self):
        """Test that an unparseable manifest is a deserialization failure, not a validation one."""
        builder = BundleModule.builder()
        with pytest.raises(DeserializationError) as exc_info:
            builder.add_entry(InMemoryModuleEntry.of_file("manifest/AndroidManifest.xml", b"\xc1"))
        assert not isinstance(exc_info.value, ValidationError)

    def test_zero_byte_manifest_fails_at_build(self, default_bundle_config):
        """Test that an empty manifest parses but is rejected for lacking a <manifest> root."""
        builder = (
            BundleModule.builder()
            .set_name("testModule")
            .set_bundle_config(default_bundle_config)
            .add_entry(InMemoryModuleEntry.of_file("manifest/AndroidManifest.xml", b""))
        )

        with pytest.raises(ValidationError):
            builder.build()

    def test_last_supplied_manifest_wins(self, default_bundle_config):
        """Test that an explicit manifest replaces one parsed from an earlier entry."""
        entry_manifest = android_manifest("com.from.entry")
        explicit_manifest = android_manifest("com.explicit")

        module = (
            BundleModule.builder()
            .set_name("testModule")
            .set_bundle_config(default_bundle_config)
            .add_entry(
                InMemoryModuleEntry.of_file(
                    "manifest/AndroidManifest.xml", entry_manifest.to_bytes()
                )
            )
            .set_android_manifest_proto(explicit_manifest)
            .build()
        )

        assert module.package_name == "com.explicit"

    def test_special_files_not_stored_as_entries(self, default_bundle_config):
        """Test that none of the four special files appear among the entries."""
        module = (
            BundleModule.builder()
            .set_name(BundleModuleName.create("testModule"))
            .set_bundle_config(default_bundle_config)
            .add_entry(
                InMemoryModuleEntry.of_file(
                    "manifest/AndroidManifest.xml", android_manifest("com.test.app").to_bytes()
                )
            )
            .add_entry(InMemoryModuleEntry.of_file("assets.pb", Assets().to_bytes()))
            .add_entry(InMemoryModuleEntry.of_file("native.pb", NativeLibraries().to_bytes()))
            .add_entry(InMemoryModuleEntry.of_file("resources.pb", ResourceTable().to_bytes()))
            .build()
        )

        assert module.entries == ()
        assert module.get_entry("assets.pb") is None


class TestBuilder:
    """Tests for builder lifecycle and defaults."""

    def test_bundle_config_defaults_to_empty(self):
        """Test that a builder without a bundle config uses an empty one."""
        module = (
            BundleModule.builder()
            .set_name("testModule")
            .set_android_manifest_proto(android_manifest("com.test.app"))
            .build()
        )
        assert module.bundle_config.bundletool is None

    def test_bundle_config_passed_through(self, minimal_module_builder, default_bundle_config):
        """Test that the supplied bundle config is kept as the same object."""
        module = minimal_module_builder.build()
        assert module.bundle_config is default_bundle_config

    def test_builder_is_single_use(self, minimal_module_builder):
        """Test that a second build on the same builder fails."""
        minimal_module_builder.build()
        with pytest.raises(ValidationError):
            minimal_module_builder.build()

    def test_duplicate_entry_paths_rejected(self, minimal_module_builder):
        """Test that two entries with the same path fail the build."""
        minimal_module_builder.add_entry(InMemoryModuleEntry.of_file("dex/classes.dex", b"1"))
        minimal_module_builder.add_entry(InMemoryModuleEntry.of_file("dex/classes.dex", b"2"))

        with pytest.raises(ValidationError, match="Duplicate entry path"):
            minimal_module_builder.build()

    def test_module_is_immutable(self, minimal_module_builder):
        """Test that a built module rejects attribute assignment."""
        module = minimal_module_builder.build()
        with pytest.raises(AttributeError):
            module.is_included_in_fusing = False

    def test_non_manifest_root_rejected(self, minimal_module_builder):
        """Test that a manifest whose root is not <manifest> fails the build."""
        minimal_module_builder.set_android_manifest_proto(
            XmlNode(element=XmlElement(name="application"))
        )
        with pytest.raises(ValidationError):
            minimal_module_builder.build()


class TestFusing:
    """Tests for fusing eligibility."""

    @pytest.mark.parametrize(
        "mutators",
        [(), (with_fusing_attribute(True),), (with_fusing_attribute(False),)],
        ids=["unset", "true", "false"],
    )
    def test_base_always_included_in_fusing(self, minimal_module_builder, mutators):
        """Test that the base module is fused whatever its manifest declares."""
        module = (
            minimal_module_builder.set_name(BundleModuleName.create("base"))
            .set_android_manifest_proto(android_manifest("com.test.app", *mutators))
            .build()
        )
        assert module.is_base_module
        assert module.is_included_in_fusing

    def test_feature_module_follows_attribute(self, minimal_module_builder):
        """Test that a feature module honours an explicit fusing attribute."""
        module = minimal_module_builder.set_android_manifest_proto(
            android_manifest("com.test.app", with_fusing_attribute(False))
        ).build()
        assert not module.is_included_in_fusing

    @pytest.mark.parametrize("default", [True, False])
    def test_feature_module_without_attribute_uses_default(self, minimal_module_builder, default):
        """Test that a feature module without the attribute falls back to the default."""
        module = minimal_module_builder.set_fusing_default(default).build()
        assert module.is_included_in_fusing is default

    def test_default_taken_from_config(self, minimal_module_builder, fresh_config):
        """Test that the fallback comes from BUNDLEKIT_FUSE_BY_DEFAULT when not set on the builder."""
        fresh_config.setenv("BUNDLEKIT_FUSE_BY_DEFAULT", "false")
        module = minimal_module_builder.build()
        assert module.is_included_in_fusing is False

    def test_policy_function(self):
        """Test the standalone fusing policy for base and feature modules."""
        manifest = AndroidManifest(android_manifest("com.test.app", with_fusing_attribute(True)))
        assert is_included_in_fusing(BundleModuleName.create("feature"), manifest, default=False)
        assert is_included_in_fusing(BundleModuleName.create("base"), manifest, default=False)


class TestEntries:
    """Tests for entry queries on a built module."""

    def test_entries_under_path_skips_longer_directory(self, minimal_module_builder):
        """Test that a directory sharing a string prefix is not matched."""
        entry1 = InMemoryModuleEntry.of_file("dir1/entry1", b"")
        entry2 = InMemoryModuleEntry.of_file("dir1/entry2", b"")
        entry3 = InMemoryModuleEntry.of_file("dir1longer/entry3", b"")

        module = minimal_module_builder.add_entries([entry1, entry2, entry3]).build()

        assert list(module.find_entries_under_path(ZipPath.create("dir1"))) == [entry1, entry2]

    def test_get_entry_existing_found(self, minimal_module_builder):
        """Test that an added entry is found by its exact path."""
        entry = InMemoryModuleEntry.of_file("dir/entry", b"")

        module = minimal_module_builder.add_entries([entry]).build()

        assert module.get_entry(ZipPath.create("dir/entry")) == entry

    def test_get_entry_unknown_not_found(self, minimal_module_builder):
        """Test that an unknown path returns None."""
        module = minimal_module_builder.build()
        assert module.get_entry(ZipPath.create("unknown-entry")) is None

    def test_entries_keep_insertion_order(self, minimal_module_builder):
        """Test that entries are returned in the order they were added."""
        paths = ["res/layout/main.xml", "dex/classes.dex", "assets/a.txt"]
        module = minimal_module_builder.add_entries(
            InMemoryModuleEntry.of_file(path, b"x") for path in paths
        ).build()
        assert [str(entry.path) for entry in module.entries] == paths


class TestModuleMetadata:
    """Tests for metadata derived from the manifest."""

    def test_dependencies_parsed(self, minimal_module_builder):
        """Test that uses-split names become the module dependencies."""
        module = minimal_module_builder.set_android_manifest_proto(
            android_manifest("com.test.app", with_uses_split("feature1", "feature2"))
        ).build()

        assert module.module_metadata.dependencies == ("feature1", "feature2")

    def test_duplicate_dependencies_preserved(self, minimal_module_builder):
        """Test that repeated uses-split names are not deduplicated."""
        module = minimal_module_builder.set_android_manifest_proto(
            android_manifest("com.test.app", with_uses_split("feature1", "feature1"))
        ).build()

        assert module.module_metadata.dependencies == ("feature1", "feature1")

    def test_targeting_empty_if_no_conditions(self, minimal_module_builder):
        """Test that a manifest without conditions yields empty targeting."""
        module = minimal_module_builder.build()
        assert module.module_metadata.targeting == ModuleTargeting()
        assert module.module_metadata.targeting.is_empty

    def test_targeting_present_if_conditions_used(self, minimal_module_builder):
        """Test that feature and min-sdk conditions are merged into the targeting."""
        module = minimal_module_builder.set_android_manifest_proto(
            android_manifest(
                "com.test.app",
                with_feature_condition("com.android.hardware.feature"),
                with_min_sdk_condition(24),
            )
        ).build()

        assert module.module_metadata.targeting == merge_module_targeting(
            module_feature_targeting("com.android.hardware.feature"),
            module_min_sdk_version_targeting(24),
        )

    def test_metadata_name_and_delivery_flags(self, minimal_module_builder):
        """Test that metadata carries the module name and delivery flags."""
        module = minimal_module_builder.set_android_manifest_proto(
            android_manifest("com.test.app", with_on_demand(True), with_instant(True))
        ).build()

        metadata = module.module_metadata
        assert metadata.name == "testModule"
        assert metadata.on_demand
        assert metadata.is_instant


class TestBundleModuleName:
    """Tests for module name validation."""

    def test_base_name(self):
        """Test that only "base" is the base module name."""
        assert BundleModuleName.create("base").is_base
        assert not BundleModuleName.create("feature1").is_base

    @pytest.mark.parametrize("name", ["", "1feature", "feature/one", "feature one"])
    def test_invalid_names_rejected(self, name):
        """Test that malformed module names are rejected."""
        with pytest.raises(ValidationError):
            BundleModuleName.create(name)

    def test_str(self):
        """Test that a name renders as its plain string."""
        assert str(BundleModuleName.create("feature_1")) == "feature_1"
