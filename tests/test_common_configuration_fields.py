"""Data checks for the built-in core-default.xml reconciliation."""

from __future__ import annotations

import ast
import inspect

from config_fields import common
from config_fields.common import COMMON_CONFIGURATION_CLASSES, CommonConfigurationFields
from config_fields.settings import FieldCheckSettings


def test_common_fields_target_core_default_xml() -> None:
    settings = CommonConfigurationFields().settings()

    assert isinstance(settings, FieldCheckSettings)
    assert settings.xml_filename == "core-default.xml"
    assert settings.configuration_classes == COMMON_CONFIGURATION_CLASSES
    assert len(settings.configuration_classes) == 11


def test_common_fields_class_list_has_no_duplicates() -> None:
    assert len(set(COMMON_CONFIGURATION_CLASSES)) == len(COMMON_CONFIGURATION_CLASSES)


def test_common_fields_error_modes() -> None:
    settings = CommonConfigurationFields().settings()

    assert settings.error_if_missing_config_props is True
    assert settings.error_if_missing_xml_props is False


def test_common_fields_error_modes_are_literal_booleans() -> None:
    tree = ast.parse(inspect.getsource(common))
    flag_values = [
        node.value
        for node in ast.walk(tree)
        if isinstance(node, ast.Assign)
        for target in node.targets
        if isinstance(target, ast.Attribute)
        and target.attr in {"error_if_missing_config_props", "error_if_missing_xml_props"}
    ]

    assert len(flag_values) == 2
    assert all(
        isinstance(value, ast.Constant) and isinstance(value.value, bool) for value in flag_values
    )


def test_common_fields_skip_entries_are_non_empty_strings() -> None:
    settings = CommonConfigurationFields().settings()

    for entries in (
        settings.xml_props_to_skip_compare,
        settings.xml_prefix_to_skip_compare,
        settings.configuration_props_to_skip_compare,
    ):
        assert entries
        assert all(isinstance(entry, str) and entry.strip() for entry in entries)


def test_common_fields_skip_set_contents() -> None:
    settings = CommonConfigurationFields().settings()

    assert len(settings.xml_props_to_skip_compare) == 74
    assert len(settings.xml_prefix_to_skip_compare) == 17
    assert settings.configuration_props_to_skip_compare == frozenset(
        {"io.sort.mb", "io.sort.factor", "dr.who"}
    )
    assert "fs.viewfs.overload.scheme.target.swebhdfs.impl" in settings.xml_props_to_skip_compare
    assert "ipc.[port_number].weighted-cost.response" in settings.xml_props_to_skip_compare
    assert "hadoop.security.kms.client.authentication.retry-count" in (
        settings.xml_props_to_skip_compare
    )
    assert {"fs.s3a.", "hadoop.http.cross-origin.", "fs.client.htrace."} <= (
        settings.xml_prefix_to_skip_compare
    )
