"""
Command-line interface: convert a Degree Works audit and export it to file.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .convert import AuditParseError, convert_audit_html
from .export import export, summarize_record


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _print_summary(record: dict) -> None:
    s = summarize_record(record)
    print(f"Student: {s['student'] or '(unknown)'}")
    print(f"Requirements: {s['requirements']}")
    print(f"Completed courses: {s['completed']}")
    print(f"In-progress courses: {s['inProgress']}")
    print(f"Incomplete courses: {s['incomplete']}")
    print(f"Credit progress: {s['progressPercent']}%")


def _course_count(record: dict) -> int:
    return (
        len(record["completedCourses"])
        + len(record["inProgressCourses"])
        + len(record["incompleteCourses"])
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Export a Degree Works audit to JSON / CSV.\n"
            "- Saved page mode: parse an audit saved from the browser (no login needed).\n"
            "- Fetch mode: open Chrome, sign in, and capture the audit on screen."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-o",
        "--output",
        default="degree_audit",
        help="Output path (without extension). Default: degree_audit",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Export format. Default: json",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log what the parser finds (tables, skipped rows, dropped titles).",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--audit-html",
        metavar="HTML_PATH",
        help="Use a Degree Works page saved from the browser.",
    )
    mode.add_argument(
        "--fetch-audit",
        action="store_true",
        help="Open Chrome on --url; sign in, open your audit, then press Enter in the terminal.",
    )
    parser.add_argument(
        "--url",
        help="(Fetch mode) Degree Works address of your institution.",
    )
    parser.add_argument(
        "--include-metadata",
        action="store_true",
        help="(JSON only) Wrap the audit with its source (title, url, timestamp).",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a summary of the audit and exit without writing a file.",
    )
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.fetch_audit:
        if not args.url:
            print(
                "Error: --fetch-audit requires --url (the Degree Works address of your institution).",
                file=sys.stderr,
            )
            return 1
        # Imported here so saved-page mode works without a browser driver.
        from .audit_fetch import fetch_audit_html

        try:
            print("Opening Degree Works...")
            captured = fetch_audit_html(args.url)
        except Exception as e:
            print(f"Error fetching audit: {e}", file=sys.stderr)
            return 1
        html = captured.pop("html")
        metadata = captured

    elif args.audit_html:
        p = Path(args.audit_html)
        if not p.exists():
            print(f"Error: --audit-html not found: {p}", file=sys.stderr)
            return 1
        html = p.read_text(encoding="utf-8", errors="ignore")
        metadata = {"title": p.stem, "url": p.resolve().as_uri()}
    else:
        print(
            "No mode specified. Use --audit-html for a saved page "
            "or --fetch-audit to capture it from the browser.",
            file=sys.stderr,
        )
        return 1

    try:
        record = convert_audit_html(html)
    except AuditParseError as e:
        print(f"Error parsing Degree Works HTML: {e}", file=sys.stderr)
        return 1

    if args.summary:
        _print_summary(record)
        return 0

    ext = {"json": ".json", "csv": ".csv"}[args.format]
    out_path = Path(args.output).with_suffix(ext) if Path(args.output).suffix else Path(args.output + ext)
    export(record, out_path, args.format, metadata if args.include_metadata else None)
    print(f"Exported {_course_count(record)} course(s) to {out_path}")
    _print_summary(record)
    return 0


if __name__ == "__main__":
    sys.exit(main())
