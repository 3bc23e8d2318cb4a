from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from school_intake import __version__ as TOOL_VERSION
from school_intake.catalog import FIELD_CATALOG
from school_intake.config import default_log_level
from school_intake.contracts import build_contract, build_run_summary
from school_intake.errors import EmptyResult, IngestError, UnsupportedFormat
from school_intake.ingest import ParsedResult, ingest_file
from school_intake.mapper import map_headers

EXIT_SUCCESS = 0
EXIT_COMMAND_ERROR = 1
EXIT_PARSE_FAILED = 2
EXIT_EMPTY_RESULT = 3


class CliError(Exception):
    def __init__(self, message: str, code: int = EXIT_COMMAND_ERROR) -> None:
        super().__init__(message)
        self.code = code


class SchoolIntakeArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise CliError(message, EXIT_COMMAND_ERROR)


def eprint(message: str) -> None:
    print(message, file=sys.stderr)


def emit_human(message: str, *, quiet: bool = False) -> None:
    if not quiet:
        eprint(message)


def json_dumps(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True)


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json_dumps(payload), encoding="utf-8")


def configure_logging(args: argparse.Namespace) -> None:
    if getattr(args, "verbose", False):
        level = "DEBUG"
    elif getattr(args, "quiet", False):
        level = "ERROR"
    else:
        level = default_log_level()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def classify_ingest_exception(exc: Exception) -> int:
    if isinstance(exc, CliError):
        return exc.code
    if isinstance(exc, UnsupportedFormat):
        return EXIT_COMMAND_ERROR
    if isinstance(exc, EmptyResult):
        return EXIT_EMPTY_RESULT
    if isinstance(exc, IngestError):
        return EXIT_PARSE_FAILED
    return EXIT_COMMAND_ERROR


def build_ingest_payload(result: ParsedResult, input_path: Path) -> dict[str, Any]:
    metadata = result.metadata
    return {
        "contract": build_contract("school_intake.ingest"),
        "tool_version": TOOL_VERSION,
        "result": result.to_payload(),
        "run_summary": build_run_summary(
            tool="school-intake",
            command="ingest",
            input_path=input_path,
            metrics={
                "records": len(result),
                "columns_total": len(metadata.columns),
                "columns_mapped": len(metadata.mapped_fields),
                "columns_unmapped": len(metadata.unmapped_columns),
            },
            warnings=list(metadata.warnings),
        ),
    }


def render_ingest_text(result: ParsedResult) -> str:
    metadata = result.metadata
    lines = [
        "school-intake ingest",
        f"File: {metadata.file_name}",
        f"Type: {metadata.file_type}",
        f"Records: {len(result)}",
        f"Mapped columns: {len(metadata.mapped_fields)} of {len(metadata.columns)}",
    ]
    if metadata.delimiter is not None:
        lines.append(f"Delimiter: {metadata.delimiter!r}")
    if metadata.encoding:
        lines.append(f"Encoding: {metadata.encoding}")
    if metadata.sheet_name:
        lines.append(f"Sheet: {metadata.sheet_name}")
    if metadata.unmapped_columns:
        lines.append("Unmapped columns: " + ", ".join(metadata.unmapped_columns))
    if metadata.warnings:
        lines.append("Warnings:")
        lines.extend(f"- {warning}" for warning in metadata.warnings)
    return "\n".join(lines) + "\n"


def render_assignments_text(assignments) -> str:
    lines = ["school-intake map-headers"]
    for assignment in assignments:
        target = assignment.field if assignment.is_mapped else "[unmapped]"
        lines.append(f"{assignment.position + 1}. {assignment.header!r} -> {target} ({assignment.score:.2f})")
    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = SchoolIntakeArgumentParser(
        prog="school-intake",
        description="Map free-text spreadsheet headers onto the school record schema.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Ingest a CSV or Excel export.")
    ingest.add_argument("input", help="Input file path")
    ingest.add_argument("--output", help="Write the JSON payload to this path")
    ingest.add_argument("--json", action="store_true", help="Write machine JSON to stdout")
    ingest.add_argument("-q", "--quiet", action="store_true", help="Minimal human logs")
    ingest.add_argument("-v", "--verbose", action="store_true", help="More human logs")

    headers = subparsers.add_parser("map-headers", help="Show how headers map onto canonical fields.")
    headers.add_argument("headers", nargs="+", help="Header texts in column order")
    headers.add_argument("--json", action="store_true", help="Write machine JSON to stdout")
    headers.add_argument("-v", "--verbose", action="store_true", help="More human logs")

    fields = subparsers.add_parser("fields", help="List canonical fields and their known variations.")
    fields.add_argument("--json", action="store_true", help="Write machine JSON to stdout")

    subparsers.add_parser("version", help="Print version")
    return parser


def run_ingest(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    if not input_path.exists():
        eprint(f"File not found: {input_path}")
        return EXIT_COMMAND_ERROR

    try:
        result = ingest_file(input_path)
        payload = build_ingest_payload(result, input_path)
        if args.output:
            write_json(Path(args.output), payload)
        if args.json:
            print(json_dumps(payload))
        else:
            emit_human(render_ingest_text(result).rstrip(), quiet=args.quiet)
            if args.output:
                emit_human(f"Result written: {args.output}", quiet=args.quiet)
        return EXIT_SUCCESS
    except Exception as exc:
        eprint(str(exc))
        return classify_ingest_exception(exc)


def run_map_headers(args: argparse.Namespace) -> int:
    assignments = map_headers(args.headers)
    if args.json:
        payload = {
            "contract": build_contract("school_intake.map_headers"),
            "tool_version": TOOL_VERSION,
            "assignments": [
                {
                    "position": assignment.position,
                    "header": assignment.header,
                    "field": assignment.field,
                    "score": round(assignment.score, 4),
                }
                for assignment in assignments
            ],
        }
        print(json_dumps(payload))
    else:
        print(render_assignments_text(assignments).rstrip())
    return EXIT_SUCCESS


def run_fields(args: argparse.Namespace) -> int:
    if args.json:
        payload = {
            "contract": build_contract("school_intake.fields"),
            "tool_version": TOOL_VERSION,
            "fields": [
                {"field": d.field, "is_score": d.is_score, "variations": list(d.variations)}
                for d in FIELD_CATALOG
            ],
        }
        print(json_dumps(payload))
    else:
        for definition in FIELD_CATALOG:
            print(f"{definition.field}: {' | '.join(definition.variations)}")
    return EXIT_SUCCESS


def run_version() -> int:
    print(TOOL_VERSION)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        configure_logging(args)
        if args.command == "ingest":
            return run_ingest(args)
        if args.command == "map-headers":
            return run_map_headers(args)
        if args.command == "fields":
            return run_fields(args)
        if args.command == "version":
            return run_version()
        raise CliError(f"Unknown command: {args.command}", EXIT_COMMAND_ERROR)
    except CliError as exc:
        eprint(str(exc))
        return exc.code


if __name__ == "__main__":
    raise SystemExit(main())
