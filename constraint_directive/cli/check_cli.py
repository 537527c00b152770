"""
Command-line interface for checking payloads against declared constraints.

Usage:
    constraint-check validate --config <fields.yaml> --input <payload.json> [options]
    constraint-check formats
"""

import argparse
import json
import sys
from pathlib import Path

from constraint_directive.core.formats import FORMATS, format_names
from constraint_directive.core.rules import (
    ConstraintConfigError,
    ConstraintConfigLoader,
    ConstraintDispatcher,
    ConstraintEngine,
    NotScalarTypeError,
)
from constraint_directive.observability.logger import get_logger, log_operation
from constraint_directive.observability.metrics import write_metrics


logger = get_logger(__name__)


def load_payloads(input_path: Path) -> list[dict]:
    """
    Read one payload (a JSON object) or several (a JSON array of objects).

    Raises:
        ValueError: If the file does not hold objects
    """
    with open(input_path) as f:
        data = json.load(f)

    payloads = data if isinstance(data, list) else [data]
    if not all(isinstance(payload, dict) for payload in payloads):
        raise ValueError("Input must be a JSON object or an array of JSON objects")
    return payloads


def validate_command(args) -> int:
    """
    Execute the validate command.

    Args:
        args: Command-line arguments

    Returns:
        Exit code: 0 when every payload passes, 1 otherwise, 2 on configuration errors
    """
    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {args.input}")
        return 2

    options = {"locale": args.locale} if args.locale else None

    try:
        fields = ConstraintConfigLoader(args.config).load_fields()
        engine = ConstraintEngine(fields, dispatcher=ConstraintDispatcher(options=options))
        payloads = load_payloads(input_path)
    except (FileNotFoundError, ConstraintConfigError, NotScalarTypeError, ValueError) as e:
        logger.error(f"Cannot validate {args.input}: {e}")
        return 2

    with log_operation("Validating payloads", logger=logger, count=len(payloads)):
        results = engine.validate_batch(payloads)

    for result in results:
        print(json.dumps(result.model_dump(), indent=2 if args.pretty else None))

    if args.metrics_file:
        write_metrics(args.metrics_file)
        logger.info(f"Metrics written to {args.metrics_file}")

    failed = sum(1 for result in results if not result.passed)
    logger.info(f"{len(results) - failed} of {len(results)} payloads passed")
    return 1 if failed else 0


def formats_command(args) -> int:
    """List accepted format names with their failure messages."""
    for name in format_names():
        print(f"{name}\t{FORMATS[name].message}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check JSON payloads against declared field constraints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate one payload
  constraint-check validate --config config/fields.yaml --input book.json

  # Validate an array of payloads with a different locale
  constraint-check validate --config config/fields.yaml --input books.json --locale de-DE

  # Leave metrics for the node_exporter textfile collector
  constraint-check validate --config config/fields.yaml --input books.json \\
      --metrics-file /var/lib/node_exporter/constraint_check.prom

  # List format names
  constraint-check formats
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate payloads")
    validate_parser.add_argument(
        "--config",
        required=True,
        help="Path to field constraints YAML file"
    )
    validate_parser.add_argument(
        "--input",
        required=True,
        help="Path to JSON payload file"
    )
    validate_parser.add_argument(
        "--locale",
        help="Locale for locale-aware formats (default: en-US)"
    )
    validate_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output"
    )
    validate_parser.add_argument(
        "--metrics-file",
        help="Write Prometheus metrics to this file after validating (textfile collector format)"
    )

    subparsers.add_parser("formats", help="List accepted format names")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    if args.command == "validate":
        return validate_command(args)
    return formats_command(args)


if __name__ == "__main__":
    sys.exit(main())
