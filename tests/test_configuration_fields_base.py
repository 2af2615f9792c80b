"""Tests for the configuration-fields base class and its collected checks."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from config_fields.base import ConfigurationFieldsBase

FIXTURES = Path(__file__).parent / "fixtures"


class TestSampleConfigurationFields(ConfigurationFieldsBase):
    """Collected by pytest: runs the inherited checks against the sample fixture."""

    def initialize_member_variables(self) -> None:
        self.xml_filename = "sample-default.xml"
        self.configuration_classes = (
            "tests.helpers.sample_keys.StorageKeys",
            "tests.helpers.sample_keys.ExtendedNetworkKeys",
        )
        self.xml_search_paths = (FIXTURES,)
        self.error_if_missing_config_props = True
        self.error_if_missing_xml_props = False

        # Plugin implementations are registered by the plugins themselves.
        self.xml_prefix_to_skip_compare.add("storage.plugin.")


class _StrictSampleFields(ConfigurationFieldsBase):
    def initialize_member_variables(self) -> None:
        self.xml_filename = "sample-default.xml"
        self.configuration_classes = ("tests.helpers.sample_keys.ExtendedNetworkKeys",)
        self.xml_search_paths = (FIXTURES,)
        self.error_if_missing_config_props = True
        self.error_if_missing_xml_props = True


class _LenientSampleFields(_StrictSampleFields):
    def initialize_member_variables(self) -> None:
        super().initialize_member_variables()
        self.error_if_missing_config_props = False
        self.error_if_missing_xml_props = False


def test_base_requires_initialize_member_variables() -> None:
    with pytest.raises(NotImplementedError):
        ConfigurationFieldsBase().settings()


def test_settings_start_from_empty_skip_sets_on_every_call() -> None:
    checker = TestSampleConfigurationFields()

    first = checker.settings()
    second = checker.settings()

    assert first == second
    assert first.xml_prefix_to_skip_compare == frozenset({"storage.plugin."})
    assert first.xml_props_to_skip_compare == frozenset()


def test_settings_reject_missing_xml_filename() -> None:
    class _NoFilename(ConfigurationFieldsBase):
        def initialize_member_variables(self) -> None:
            self.configuration_classes = ("tests.helpers.sample_keys.StorageKeys",)

    with pytest.raises(ValidationError):
        _NoFilename().settings()


def test_strict_class_against_xml_check_fails_for_undeclared_xml_keys() -> None:
    with pytest.raises(AssertionError, match="network.proxy.port"):
        _StrictSampleFields().test_compare_configuration_class_against_xml()


def test_strict_xml_against_class_check_lists_missing_properties() -> None:
    with pytest.raises(AssertionError) as exc_info:
        _StrictSampleFields().test_compare_xml_against_configuration_class()

    message = str(exc_info.value)
    assert "sample-default.xml has 4 properties" in message
    assert "storage.plugin.local.impl" in message


def test_lenient_checks_log_and_pass(caplog: pytest.LogCaptureFixture) -> None:
    checker = _LenientSampleFields()

    with caplog.at_level(logging.INFO, logger="config_fields.base"):
        checker.test_compare_configuration_class_against_xml()
        checker.test_compare_xml_against_configuration_class()

    assert "Ignoring 1 class properties missing from sample-default.xml" in caplog.text
    assert "Ignoring 4 properties in sample-default.xml" in caplog.text


def test_default_value_check_logs_mismatches(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "network-default.xml").write_text(
        "<configuration><property><name>network.timeout.ms</name><value>60000</value>"
        "</property></configuration>",
        encoding="utf-8",
    )

    class _NetworkFields(ConfigurationFieldsBase):
        def initialize_member_variables(self) -> None:
            self.xml_filename = "network-default.xml"
            self.configuration_classes = ("tests.helpers.sample_keys.NetworkKeys",)
            self.xml_search_paths = (tmp_path,)

    with caplog.at_level(logging.WARNING, logger="config_fields.base"):
        _NetworkFields().test_xml_against_default_values_in_configuration_class()

    assert "NetworkKeys.NETWORK_TIMEOUT_DEFAULT" in caplog.text
    assert "'60000'" in caplog.text
