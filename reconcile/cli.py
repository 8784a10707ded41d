#!/usr/bin/env python3
"""Reconcile - CLI entry point for check-in reconciliation jobs.

Usage:
    python -m reconcile link --reference registration.csv --input checkin-log.csv
    python -m reconcile link --reference registration.csv --input checkin-log.csv \\
        --where "Are you camping?=Yes" --where "What city/state do you stay in?=Outside Benin"
    python -m reconcile partition --input registration.csv --output-dir uploads
    python -m reconcile roster --roster delegates.txt --reference checked-in.csv \\
        --first camper_firstName --last camper_lastName --email camper_email

Exit codes: 0 on success, 1 on a fatal error, 2 when the run finished but
an output artifact could not be written.
"""

from __future__ import annotations

import argparse
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from reconcile.core.models import FieldMap, Table
from reconcile.errors import OutputWriteError, ReconcileError
from reconcile.jobs import (
    linkage_artifacts,
    partition_artifacts,
    roster_artifacts,
    run_linkage,
    run_partition,
    run_roster,
)
from reconcile.linkage import parse_roster, parse_where
from reconcile.logging_config import configure_logging, get_logger, resolve_level
from reconcile.processing import flag_classifier
from reconcile.reporting import Artifact, RunSummary, render_report, write_artifacts, write_stats_output
from reconcile.settings import Settings, get_settings
from reconcile.tabular import read_table, read_text_file

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_ARTIFACT_FAILED = 2


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output-dir", type=str, help="Directory for CSV artifacts (default: settings.output_dir)")
    parser.add_argument("--stats-output", type=str, help="Write the run summary as JSON to this file")
    parser.add_argument("--dry-run", action="store_true", help="Compute and report but don't write CSV artifacts")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")


def _add_field_arguments(parser: argparse.ArgumentParser, prefix: str, label: str) -> None:
    parser.add_argument(f"--{prefix}first", type=str, help=f"{label} first name column")
    parser.add_argument(f"--{prefix}last", type=str, help=f"{label} last name column")
    parser.add_argument(f"--{prefix}email", type=str, help=f"{label} email column ('' to disable)")


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="reconcile", description="Reconcile check-in records with registrations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    link = subparsers.add_parser("link", help="Link check-in records to registration records")
    source = link.add_mutually_exclusive_group(required=True)
    source.add_argument("--reference", type=str, help="Registration CSV")
    source.add_argument("--reference-collection", type=str, help="Read registrations from a PocketBase collection")
    inputs = link.add_mutually_exclusive_group(required=True)
    inputs.add_argument("--input", type=str, help="Check-in CSV")
    inputs.add_argument("--input-collection", type=str, help="Read check-ins from a PocketBase collection")
    link.add_argument(
        "--collection-fields",
        type=str,
        default="",
        help="Extra comma-separated record fields to read from PocketBase collections",
    )
    link.add_argument(
        "--where",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Keep matches whose registration FIELD equals VALUE (case-insensitive, repeatable)",
    )
    _add_field_arguments(link, "ref-", "Registration")
    _add_field_arguments(link, "in-", "Check-in")
    _add_common_arguments(link)

    partition = subparsers.add_parser("partition", help="Split and deduplicate an extraction by a yes/no field")
    partition.add_argument("--input", type=str, required=True, help="CSV to partition")
    partition.add_argument("--flag-field", type=str, help="Yes/no column (default: settings.partition_flag_field)")
    partition.add_argument("--flag-value", type=str, help="Value selecting the positive partition")
    _add_field_arguments(partition, "", "Input")
    _add_common_arguments(partition)

    roster = subparsers.add_parser("roster", help="Find expected names from a roster in a table")
    roster.add_argument("--roster", type=str, required=True, help="Text file, one expected person per line")
    roster.add_argument("--reference", type=str, required=True, help="CSV to search")
    _add_field_arguments(roster, "", "Reference")
    _add_common_arguments(roster)

    return parser.parse_args(args)


def _field_map(defaults: FieldMap, first: str | None, last: str | None, email: str | None) -> FieldMap:
    """Apply CLI overrides to a FieldMap; an empty --email disables email."""
    if email is None:
        email = defaults.email
    return FieldMap(
        first_name=first or defaults.first_name,
        last_name=last or defaults.last_name,
        email=email or None,
    )


def _collection_table(settings: Settings, collection: str, fields: FieldMap, extra: str) -> Table:
    # Imported here so file-only runs never touch the PocketBase client
    from reconcile.data import connect, load_collection

    names = [fields.first_name, fields.last_name] + ([fields.email] if fields.email else [])
    names += [name.strip() for name in extra.split(",") if name.strip() and name.strip() not in names]
    pb = connect(settings.pocketbase_url, settings.pocketbase_admin_email, settings.pocketbase_admin_password)
    return load_collection(pb, collection, names)


def run_link(args: argparse.Namespace, settings: Settings) -> tuple[RunSummary, list[Artifact]]:
    reference_fields = _field_map(settings.reference_fields, args.ref_first, args.ref_last, args.ref_email)
    input_fields = _field_map(settings.input_fields, args.in_first, args.in_last, args.in_email)

    if args.reference_collection:
        reference = _collection_table(settings, args.reference_collection, reference_fields, args.collection_fields)
    else:
        reference = read_table(args.reference, role="reference")
    if args.input_collection:
        inputs = _collection_table(settings, args.input_collection, input_fields, args.collection_fields)
    else:
        inputs = read_table(args.input, role="input")

    predicate = parse_where(args.where) if args.where else None
    run = run_linkage(reference, inputs, reference_fields, input_fields, predicate=predicate)
    return run.summary, linkage_artifacts(run, args.output_dir or settings.output_dir)


def run_partition_command(args: argparse.Namespace, settings: Settings) -> tuple[RunSummary, list[Artifact]]:
    fields = _field_map(settings.reference_fields, args.first, args.last, args.email)
    table = read_table(args.input, role="input")
    classify = flag_classifier(
        args.flag_field or settings.partition_flag_field,
        truthy=args.flag_value or settings.partition_flag_value,
        positive=settings.positive_partition,
        negative=settings.negative_partition,
    )
    run = run_partition(
        table, fields, classify, partition_names=(settings.positive_partition, settings.negative_partition)
    )
    return run.summary, partition_artifacts(run, args.output_dir or settings.output_dir)


def run_roster_command(args: argparse.Namespace, settings: Settings) -> tuple[RunSummary, list[Artifact]]:
    entries = parse_roster(read_text_file(args.roster, role="roster"))
    fields = _field_map(settings.reference_fields, args.first, args.last, args.email)
    table = read_table(args.reference, role="reference")
    run = run_roster(entries, table, fields)
    return run.summary, roster_artifacts(run, args.output_dir or settings.output_dir)


COMMANDS = {
    "link": run_link,
    "partition": run_partition_command,
    "roster": run_roster_command,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    # Plain variables such as LOG_LEVEL may also live in .env
    load_dotenv()
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(args.command, debug=args.debug)
        logger.error(f"Invalid settings: {e}")
        return EXIT_FATAL
    configure_logging(args.command, resolve_level(settings.log_level, debug=args.debug))

    logger.info(f"Starting {args.command} run")
    try:
        summary, artifacts = COMMANDS[args.command](args, settings)
    except ReconcileError as e:
        logger.error(str(e))
        return EXIT_FATAL

    if args.dry_run:
        logger.info("Dry run - no artifacts written")
    else:
        summary.artifacts = write_artifacts(artifacts)

    exit_code = EXIT_OK if summary.artifacts_ok else EXIT_ARTIFACT_FAILED

    if args.stats_output:
        try:
            write_stats_output(args.stats_output, summary)
        except OutputWriteError as e:
            logger.error(str(e))
            exit_code = EXIT_ARTIFACT_FAILED

    print(render_report(summary))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
