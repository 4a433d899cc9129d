"""
flatwkt CLI - Main entry point.

Command-line access to the WKT codec and the batch conversion service.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from flatwkt_convert import ConverterConfig, WKTConverterService
from flatwkt_convert.logging import LogEvent, create_logger
from flatwkt_geom import GeometryError
from flatwkt_wkt import DEFAULT_MAX_DECIMAL_DIGITS, marshal_with_max_decimal_digits, unmarshal


def iter_records(lines: Iterable[str], comment_prefix: str = "#") -> Iterable[tuple]:
    """Yield (line_number, text) for every non-blank, non-comment line."""
    for line_number, line in enumerate(lines, start=1):
        text = line.strip()
        if text and not text.startswith(comment_prefix):
            yield line_number, text


def normalize(records: Iterable[str], max_decimal_digits: int) -> None:
    """Print each record re-encoded in canonical form."""
    for text in records:
        geometry = unmarshal(text)
        print(marshal_with_max_decimal_digits(geometry, max_decimal_digits))


def validate(path: Path) -> int:
    """
    Decode every record of a WKT file.

    Returns:
        Number of records that failed to decode
    """
    failures = 0
    count = 0
    with open(path, encoding="utf-8") as f:
        for line_number, text in iter_records(f):
            count += 1
            try:
                unmarshal(text)
            except GeometryError as e:
                failures += 1
                print(f"{path}:{line_number}: {e}")
    if not failures:
        print(f"OK: {count} records")
    return failures


def inspect(text: str) -> None:
    """Print the flat model of one record as JSON."""
    print(json.dumps(unmarshal(text).to_dict(), indent=2))


def convert(config_path: str) -> None:
    """Run the batch conversion service from a YAML config."""
    try:
        config = ConverterConfig.from_yaml(Path(config_path))
    except (ValueError, OSError) as e:
        create_logger("cli").error(
            event=LogEvent.CONFIG_ERROR,
            message="Failed to load configuration",
            metadata={'config': config_path},
            exc_info=e,
        )
        raise

    stats = WKTConverterService(config).run()
    print(
        f"Converted {stats.converted}/{stats.total} records "
        f"({stats.failed} failed, {stats.skipped} skipped) -> {config.output_path}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="flatwkt CLI - Well-Known Text encoding and decoding",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Canonicalize WKT given as arguments
  flatwkt-cli normalize "point z(1 2 3)" "LINESTRING(0 0,1 1)"

  # Canonicalize stdin at 3 decimal digits
  cat parcels.wkt | flatwkt-cli normalize --max-decimal-digits 3

  # Check a file
  flatwkt-cli validate parcels.wkt

  # Show the flat coordinate model
  flatwkt-cli inspect "POLYGON ((0 0, 4 0, 4 4, 0 0))"

  # Batch conversion from YAML config
  flatwkt-cli convert config/convert.yaml
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    normalize_cmd = subparsers.add_parser('normalize', help='Re-encode WKT canonically')
    normalize_cmd.add_argument('wkt', nargs='*', help='WKT records (default: read stdin)')
    normalize_cmd.add_argument(
        '-d', '--max-decimal-digits',
        type=int,
        default=DEFAULT_MAX_DECIMAL_DIGITS,
        help='Fractional digits per value (default: -1, full precision)'
    )

    validate_cmd = subparsers.add_parser('validate', help='Decode every record of a file')
    validate_cmd.add_argument('file', help='File with one WKT record per line')

    inspect_cmd = subparsers.add_parser('inspect', help='Print the flat model as JSON')
    inspect_cmd.add_argument('wkt', help='WKT record')

    convert_cmd = subparsers.add_parser('convert', help='Batch convert from YAML config')
    convert_cmd.add_argument('config', help='Path to converter config YAML')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'normalize':
            records = args.wkt or [text for _, text in iter_records(sys.stdin)]
            normalize(records, args.max_decimal_digits)

        elif args.command == 'validate':
            if validate(Path(args.file)):
                return 1

        elif args.command == 'inspect':
            inspect(args.wkt)

        elif args.command == 'convert':
            convert(args.config)

    except (GeometryError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
