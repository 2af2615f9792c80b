"""Command-line interface for configuration-field checks."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path
from typing import cast

from config_fields.class_fields import ClassReferenceError
from config_fields.common import CommonConfigurationFields
from config_fields.compare import ComparisonReport, compare_fields
from config_fields.logging import configure_logging
from config_fields.settings import class_reference_name, load_settings
from config_fields.xml_defaults import XmlDefaultsError, XmlResourceNotFoundError


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser."""

    parser = argparse.ArgumentParser(prog="config-fields")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Root log level (default: WARNING).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write JSON log lines to this file.",
    )
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser(
        "check", help="Compare configuration classes against a default XML document"
    )
    check_parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="YAML field check definition.",
    )
    check_parser.add_argument(
        "--xml-search-path",
        type=Path,
        action="append",
        default=None,
        help="Directory searched for the XML document; replaces the configured paths.",
    )
    check_parser.set_defaults(handler=_check_command)

    show_parser = subparsers.add_parser(
        "show-common", help="Print the built-in core-default.xml check definition"
    )
    show_parser.set_defaults(handler=_show_common_command)
    return parser


def _print_report(report: ComparisonReport) -> None:
    print(
        f"{report.xml_filename}: {len(report.configuration_fields)} class properties, "
        f"{len(report.xml_properties)} XML properties"
    )
    print(f"  missing from XML: {len(report.missing_in_xml)}")
    for key in report.missing_in_xml:
        print(f"    {key} ({report.configuration_fields[key]})")
    print(f"  missing from classes: {len(report.missing_in_configuration)}")
    for key in report.missing_in_configuration:
        print(f"    {key}")
    for mismatch in report.default_value_mismatches:
        print(
            f"  default differs: {mismatch.property_name} "
            f"xml={mismatch.xml_value!r} {mismatch.declared_by}={mismatch.class_value!r}"
        )


def _check_command(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(args.config)
        if args.xml_search_path:
            settings = settings.model_copy(
                update={"xml_search_paths": tuple(args.xml_search_path)}
            )
        report = compare_fields(settings)
    except (ValueError, ClassReferenceError, XmlResourceNotFoundError, XmlDefaultsError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    _print_report(report)
    failures = report.failures()
    if failures:
        print(f"FAILED: {len(failures)} mismatches", file=sys.stderr)
        for message in failures:
            print(f"  {message}", file=sys.stderr)
        return 1
    print("OK")
    return 0


def _show_common_command(args: argparse.Namespace) -> int:
    settings = CommonConfigurationFields().settings()
    print(f"xml_filename: {settings.xml_filename}")
    print(f"error_if_missing_config_props: {str(settings.error_if_missing_config_props).lower()}")
    print(f"error_if_missing_xml_props: {str(settings.error_if_missing_xml_props).lower()}")
    print("configuration_classes:")
    for reference in settings.configuration_classes:
        print(f"  - {class_reference_name(reference)}")
    for label, entries in (
        ("xml_props_to_skip_compare", settings.xml_props_to_skip_compare),
        ("xml_prefix_to_skip_compare", settings.xml_prefix_to_skip_compare),
        ("configuration_props_to_skip_compare", settings.configuration_props_to_skip_compare),
    ):
        print(f"{label}:")
        for entry in sorted(entries):
            print(f"  - {entry!r}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    try:
        configure_logging(log_level=args.log_level, log_file=args.log_file)
    except ValueError as exc:
        parser.error(str(exc))
    command_handler = cast(Callable[[argparse.Namespace], int], handler)
    return command_handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
