"""Reconciliation settings model and YAML loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    field_validator,
)


def class_reference_name(reference: str | type) -> str:
    """Return the canonical dotted name for a class or a dotted import path."""

    if isinstance(reference, type):
        return f"{reference.__module__}.{reference.__qualname__}"
    return reference.strip().replace(":", ".")


class FieldCheckSettings(BaseModel):
    """Inputs of one configuration-key reconciliation run.

    The model is frozen: once built it is only read by the comparison engine.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    xml_filename: str = Field(min_length=1)
    configuration_classes: tuple[str | type, ...] = Field(min_length=1)
    xml_props_to_skip_compare: frozenset[str] = frozenset()
    xml_prefix_to_skip_compare: frozenset[str] = frozenset()
    configuration_props_to_skip_compare: frozenset[str] = frozenset()
    configuration_prefix_to_skip_compare: frozenset[str] = frozenset()
    error_if_missing_config_props: StrictBool = False
    error_if_missing_xml_props: StrictBool = False
    xml_search_paths: tuple[Path, ...] = (Path("."),)

    @field_validator("xml_filename")
    @classmethod
    def _validate_xml_filename(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("xml_filename cannot be blank.")
        return text

    @field_validator("configuration_classes")
    @classmethod
    def _validate_configuration_classes(
        cls, classes: tuple[str | type, ...]
    ) -> tuple[str | type, ...]:
        seen: set[str] = set()
        for reference in classes:
            name = class_reference_name(reference)
            if not name:
                raise ValueError("configuration_classes cannot contain blank references.")
            if name in seen:
                raise ValueError(f"configuration_classes contains duplicate reference: {name!r}")
            seen.add(name)
        return classes

    @field_validator(
        "xml_props_to_skip_compare",
        "xml_prefix_to_skip_compare",
        "configuration_props_to_skip_compare",
        "configuration_prefix_to_skip_compare",
    )
    @classmethod
    def _validate_skip_entries(cls, entries: frozenset[str]) -> frozenset[str]:
        for entry in entries:
            if not entry.strip():
                raise ValueError("skip sets cannot contain blank entries.")
        return entries


def _format_validation_error(error: ValidationError) -> str:
    lines = ["Field check settings validation failed:"]
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        lines.append(f"- {location}: {message}")
    return "\n".join(lines)


def load_settings(path: str | Path) -> FieldCheckSettings:
    """Load a YAML field check definition from disk.

    Relative ``xml_search_paths`` entries are resolved against the directory
    holding the YAML file.
    """

    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Unable to read settings file '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in settings file '{config_path}': {exc}") from exc

    data: Any = raw if raw is not None else {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Settings file '{config_path}' must contain a top-level mapping/object."
        )

    search_paths = data.get("xml_search_paths")
    if isinstance(search_paths, list):
        data["xml_search_paths"] = [
            entry if Path(str(entry)).is_absolute() else config_path.parent / str(entry)
            for entry in search_paths
        ]

    try:
        return FieldCheckSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(_format_validation_error(exc)) from exc
