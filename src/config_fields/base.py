"""Base class for configuration-field reconciliation checks.

Subclasses fill in the reconciliation inputs from
``initialize_member_variables``. Naming a subclass ``Test...`` lets pytest
collect the inherited ``test_*`` checks, one per comparison direction.
"""

from __future__ import annotations

import logging
from pathlib import Path

from config_fields.compare import ComparisonReport, compare_fields
from config_fields.logging import check_context
from config_fields.settings import FieldCheckSettings

LOGGER = logging.getLogger(__name__)


class ConfigurationFieldsBase:
    """Supplies a ``FieldCheckSettings`` to the comparison engine."""

    xml_filename: str | None = None
    configuration_classes: tuple[str | type, ...] = ()
    xml_props_to_skip_compare: set[str]
    xml_prefix_to_skip_compare: set[str]
    configuration_props_to_skip_compare: set[str]
    configuration_prefix_to_skip_compare: set[str]
    error_if_missing_config_props: bool = False
    error_if_missing_xml_props: bool = False
    xml_search_paths: tuple[Path, ...] = (Path("."),)

    def initialize_member_variables(self) -> None:
        """Set the XML filename, the class list, both error flags and any skip entries."""

        raise NotImplementedError

    def settings(self) -> FieldCheckSettings:
        self.xml_props_to_skip_compare = set()
        self.xml_prefix_to_skip_compare = set()
        self.configuration_props_to_skip_compare = set()
        self.configuration_prefix_to_skip_compare = set()
        self.initialize_member_variables()
        return FieldCheckSettings(
            xml_filename=self.xml_filename,
            configuration_classes=tuple(self.configuration_classes),
            xml_props_to_skip_compare=frozenset(self.xml_props_to_skip_compare),
            xml_prefix_to_skip_compare=frozenset(self.xml_prefix_to_skip_compare),
            configuration_props_to_skip_compare=frozenset(self.configuration_props_to_skip_compare),
            configuration_prefix_to_skip_compare=frozenset(
                self.configuration_prefix_to_skip_compare
            ),
            error_if_missing_config_props=self.error_if_missing_config_props,
            error_if_missing_xml_props=self.error_if_missing_xml_props,
            xml_search_paths=tuple(self.xml_search_paths),
        )

    def run_comparison(self) -> ComparisonReport:
        return compare_fields(self.settings())

    def test_compare_configuration_class_against_xml(self) -> None:
        """Every key declared in the configuration classes has an XML entry."""

        report = self.run_comparison()
        if not report.missing_in_xml:
            return
        if not report.error_if_missing_xml_props:
            LOGGER.info(
                "Ignoring %d class properties missing from %s: %s",
                len(report.missing_in_xml),
                report.xml_filename,
                ", ".join(report.missing_in_xml),
                extra=check_context(
                    xml_filename=report.xml_filename,
                    missing_properties=report.missing_in_xml,
                ),
            )
            return
        missing = "\n".join(f"  {key}" for key in report.missing_in_xml)
        raise AssertionError(
            f"Configuration classes have {len(report.missing_in_xml)} properties "
            f"missing from {report.xml_filename}:\n{missing}"
        )

    def test_compare_xml_against_configuration_class(self) -> None:
        """Every XML entry has a key declared in the configuration classes."""

        report = self.run_comparison()
        if not report.missing_in_configuration:
            return
        if not report.error_if_missing_config_props:
            LOGGER.info(
                "Ignoring %d properties in %s missing from the classes: %s",
                len(report.missing_in_configuration),
                report.xml_filename,
                ", ".join(report.missing_in_configuration),
                extra=check_context(
                    xml_filename=report.xml_filename,
                    missing_properties=report.missing_in_configuration,
                ),
            )
            return
        missing = "\n".join(f"  {key}" for key in report.missing_in_configuration)
        raise AssertionError(
            f"{report.xml_filename} has {len(report.missing_in_configuration)} properties "
            f"missing from the configuration classes:\n{missing}"
        )

    def test_xml_against_default_values_in_configuration_class(self) -> None:
        report = self.run_comparison()
        for mismatch in report.default_value_mismatches:
            LOGGER.warning(
                "%s: XML default %r differs from %s = %r",
                mismatch.property_name,
                mismatch.xml_value,
                mismatch.declared_by,
                mismatch.class_value,
                extra=check_context(
                    xml_filename=report.xml_filename,
                    property_name=mismatch.property_name,
                    declared_by=mismatch.declared_by,
                    xml_value=mismatch.xml_value,
                    class_value=mismatch.class_value,
                ),
            )
