"""Compare configuration-key constants against default XML properties."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from config_fields.class_fields import (
    extract_configuration_fields,
    extract_default_values,
    resolve_class,
)
from config_fields.logging import check_context
from config_fields.settings import FieldCheckSettings
from config_fields.xml_defaults import load_xml_properties

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultValueMismatch:
    """An XML default that disagrees with the ``*_DEFAULT`` constant in code."""

    property_name: str
    xml_value: str
    class_value: str
    declared_by: str


@dataclass(frozen=True)
class ComparisonReport:
    """Outcome of one reconciliation run."""

    xml_filename: str
    configuration_fields: dict[str, str]
    xml_properties: dict[str, str]
    missing_in_xml: tuple[str, ...]
    missing_in_configuration: tuple[str, ...]
    error_if_missing_config_props: bool
    error_if_missing_xml_props: bool
    default_value_mismatches: tuple[DefaultValueMismatch, ...] = field(default_factory=tuple)

    def failures(self) -> list[str]:
        messages: list[str] = []
        if self.error_if_missing_xml_props:
            messages.extend(
                f"{key} ({self.configuration_fields[key]}) is declared in code but missing "
                f"from {self.xml_filename}"
                for key in self.missing_in_xml
            )
        if self.error_if_missing_config_props:
            messages.extend(
                f"{key} is defined in {self.xml_filename} but missing from the configuration classes"
                for key in self.missing_in_configuration
            )
        return messages

    @property
    def ok(self) -> bool:
        return not self.failures()


def _format_default(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _default_field_candidates(attribute: str) -> list[str]:
    candidates = [f"{attribute}_DEFAULT"]
    if attribute.endswith("_KEY"):
        candidates.append(f"{attribute.removesuffix('_KEY')}_DEFAULT")
    return candidates


def _find_default_value_mismatches(
    declarations: dict[str, tuple[type, str]],
    xml_properties: dict[str, str],
) -> list[DefaultValueMismatch]:
    mismatches: list[DefaultValueMismatch] = []
    defaults_by_class: dict[type, dict[str, object]] = {}

    for property_name, (cls, attribute) in sorted(declarations.items()):
        xml_value = xml_properties.get(property_name)
        if not xml_value:
            continue
        defaults = defaults_by_class.setdefault(cls, extract_default_values(cls))
        for candidate in _default_field_candidates(attribute):
            if candidate not in defaults:
                continue
            class_value = _format_default(defaults[candidate])
            if class_value != xml_value:
                mismatches.append(
                    DefaultValueMismatch(
                        property_name=property_name,
                        xml_value=xml_value,
                        class_value=class_value,
                        declared_by=f"{cls.__qualname__}.{candidate}",
                    )
                )
            break
    return mismatches


def compare_fields(settings: FieldCheckSettings) -> ComparisonReport:
    """Run the reconciliation described by ``settings``.

    The exact and prefix XML skip sets filter both sides; the configuration
    skip sets filter the code side only.
    """

    props_to_skip = (
        settings.configuration_props_to_skip_compare | settings.xml_props_to_skip_compare
    )
    prefixes_to_skip = (
        settings.configuration_prefix_to_skip_compare | settings.xml_prefix_to_skip_compare
    )

    declarations: dict[str, tuple[type, str]] = {}
    for reference in settings.configuration_classes:
        cls = resolve_class(reference)
        fields = extract_configuration_fields(
            cls,
            props_to_skip=props_to_skip,
            prefixes_to_skip=prefixes_to_skip,
        )
        for property_name, attribute in fields.items():
            previous = declarations.get(property_name)
            if previous is not None:
                LOGGER.debug(
                    "Property %r declared by both %s.%s and %s.%s",
                    property_name,
                    previous[0].__qualname__,
                    previous[1],
                    cls.__qualname__,
                    attribute,
                )
            declarations[property_name] = (cls, attribute)

    xml_properties = load_xml_properties(settings)
    configuration_fields = {
        property_name: f"{cls.__qualname__}.{attribute}"
        for property_name, (cls, attribute) in declarations.items()
    }

    missing_in_xml = tuple(sorted(set(configuration_fields) - set(xml_properties)))
    missing_in_configuration = tuple(sorted(set(xml_properties) - set(configuration_fields)))
    LOGGER.info(
        "Compared %d configuration fields against %d properties in %s: "
        "%d missing from XML, %d missing from classes",
        len(configuration_fields),
        len(xml_properties),
        settings.xml_filename,
        len(missing_in_xml),
        len(missing_in_configuration),
        extra=check_context(xml_filename=settings.xml_filename),
    )

    return ComparisonReport(
        xml_filename=settings.xml_filename,
        configuration_fields=configuration_fields,
        xml_properties=xml_properties,
        missing_in_xml=missing_in_xml,
        missing_in_configuration=missing_in_configuration,
        error_if_missing_config_props=settings.error_if_missing_config_props,
        error_if_missing_xml_props=settings.error_if_missing_xml_props,
        default_value_mismatches=tuple(
            _find_default_value_mismatches(declarations, xml_properties)
        ),
    )
