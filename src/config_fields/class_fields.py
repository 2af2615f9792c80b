"""Reflection helpers that pull configuration-key constants out of classes."""

from __future__ import annotations

import importlib
import logging
import re
from collections.abc import Iterable, Iterator

from config_fields.settings import class_reference_name

LOGGER = logging.getLogger(__name__)

_CONSTANT_NAME_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]*$")
_PROPERTY_PATTERN = re.compile(r"[A-Za-z]+\.[A-Za-z]+")
_PARTIAL_KEY_SUFFIXES = (".xml", ".", "-")


class ClassReferenceError(LookupError):
    """Raised when a configuration class reference cannot be imported."""


def resolve_class(reference: str | type) -> type:
    """Return the class named by ``reference``.

    Dotted paths may separate the module from the attribute with ``:``
    (``pkg.mod:Keys``) or with the last ``.`` (``pkg.mod.Keys``).
    """

    if isinstance(reference, type):
        return reference

    text = reference.strip()
    if ":" in text:
        module_name, _, attribute_path = text.partition(":")
    else:
        module_name, _, attribute_path = text.rpartition(".")
    if not module_name or not attribute_path:
        raise ClassReferenceError(f"Invalid configuration class reference: {reference!r}")

    try:
        target: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise ClassReferenceError(
            f"Unable to import module '{module_name}' for configuration class {reference!r}: {exc}"
        ) from exc

    for part in attribute_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ClassReferenceError(
                f"Configuration class {reference!r} not found: '{module_name}' has no '{attribute_path}'"
            ) from exc

    if not isinstance(target, type):
        raise ClassReferenceError(f"Configuration reference {reference!r} is not a class")
    return target


def _iter_constants(cls: type) -> Iterator[tuple[str, object]]:
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if _CONSTANT_NAME_PATTERN.fullmatch(name):
                yield name, value


def _is_default_value_field(name: str) -> bool:
    return name.startswith("DEFAULT_") or name.endswith("_DEFAULT")


def _has_prefix(value: str, prefixes: Iterable[str]) -> bool:
    return any(value.startswith(prefix) for prefix in prefixes)


def extract_configuration_fields(
    cls: type,
    *,
    props_to_skip: Iterable[str] = (),
    prefixes_to_skip: Iterable[str] = (),
) -> dict[str, str]:
    """Map property names declared by ``cls`` to the attribute declaring them."""

    skipped_props = set(props_to_skip)
    skipped_prefixes = tuple(prefixes_to_skip)
    class_name = class_reference_name(cls)
    fields: dict[str, str] = {}

    for name, value in _iter_constants(cls):
        if not isinstance(value, str):
            continue
        if _is_default_value_field(name):
            continue
        if value.endswith(_PARTIAL_KEY_SUFFIXES):
            LOGGER.debug("Skipping partial key %s.%s = %r", class_name, name, value)
            continue
        if value in skipped_props:
            LOGGER.debug("Skipping configured property %s.%s = %r", class_name, name, value)
            continue
        if _has_prefix(value, skipped_prefixes):
            LOGGER.debug("Skipping configured prefix %s.%s = %r", class_name, name, value)
            continue
        if not _PROPERTY_PATTERN.search(value):
            LOGGER.debug("Ignoring non-property constant %s.%s = %r", class_name, name, value)
            continue
        fields[value] = name

    LOGGER.debug("Extracted %d configuration fields from %s", len(fields), class_name)
    return fields


def extract_default_values(cls: type) -> dict[str, object]:
    """Return the ``*_DEFAULT`` constants declared by ``cls`` keyed by attribute name."""

    return {
        name: value
        for name, value in _iter_constants(cls)
        if name.endswith("_DEFAULT") and isinstance(value, (str, bool, int, float))
    }
