"""Locate and parse Hadoop-style default configuration XML documents."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path

from config_fields.logging import check_context
from config_fields.settings import FieldCheckSettings

LOGGER = logging.getLogger(__name__)


class XmlResourceNotFoundError(FileNotFoundError):
    """Raised when the default XML document cannot be found on the search path."""


class XmlDefaultsError(ValueError):
    """Raised when a default XML document cannot be parsed."""


def resolve_xml_resource(filename: str | Path, search_paths: Iterable[Path]) -> Path:
    """Return the first existing ``search_path / filename``."""

    candidate = Path(filename)
    if candidate.is_absolute():
        if candidate.is_file():
            return candidate
        raise XmlResourceNotFoundError(f"Unable to find XML document '{candidate}'.")

    attempted_paths = [Path(root) / candidate for root in search_paths]
    for resolved in attempted_paths:
        if resolved.is_file():
            return resolved

    searched_locations = ", ".join(str(path) for path in attempted_paths) or "<none>"
    raise XmlResourceNotFoundError(
        f"Unable to find XML document '{candidate}'. Searched locations: {searched_locations}"
    )


def _child_text(element: ET.Element, tag: str) -> str | None:
    child = element.find(tag)
    if child is None:
        return None
    return (child.text or "").strip()


def parse_configuration_xml(path: str | Path) -> dict[str, str]:
    """Parse ``<property><name/><value/></property>`` entries in document order."""

    xml_path = Path(path)
    try:
        root = ET.parse(xml_path).getroot()
    except ET.ParseError as exc:
        raise XmlDefaultsError(f"Invalid XML in '{xml_path}': {exc}") from exc
    except OSError as exc:
        raise XmlDefaultsError(f"Unable to read XML document '{xml_path}': {exc}") from exc

    properties: dict[str, str] = {}
    for element in root.iter("property"):
        name = _child_text(element, "name")
        if not name:
            LOGGER.debug("Ignoring property without a name in %s", xml_path)
            continue
        value = _child_text(element, "value") or ""
        if name in properties:
            LOGGER.warning(
                "Duplicate property %r in %s; keeping the later value %r",
                name,
                xml_path,
                value,
                extra=check_context(
                    xml_filename=xml_path.name, property_name=name, xml_value=value
                ),
            )
        properties[name] = value
    return properties


def load_xml_properties(settings: FieldCheckSettings) -> dict[str, str]:
    """Resolve, parse and filter the XML document named by ``settings``."""

    xml_path = resolve_xml_resource(settings.xml_filename, settings.xml_search_paths)
    LOGGER.info("Reading default properties from %s", xml_path)

    prefixes = tuple(settings.xml_prefix_to_skip_compare)
    filtered: dict[str, str] = {}
    for name, value in parse_configuration_xml(xml_path).items():
        if name in settings.xml_props_to_skip_compare:
            continue
        if name.startswith(prefixes):
            continue
        filtered[name] = value
    return filtered
