from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from mcp_log_sequence_server.core.config import resolve_diagram_config
from mcp_log_sequence_server.core.loading import read_inputs
from mcp_log_sequence_server.core.service import build_report
from mcp_log_sequence_server.server.sequence_server import configure_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="log-sequence",
        description="Turn a log file into a Mermaid sequence diagram using a CSV rule table.",
    )
    p.add_argument("rules_path", help="CSV with header title,match,src,dst")
    p.add_argument("log_path", help="Log file (plain text or .gz)")
    p.add_argument(
        "--annotations",
        dest="include_line_annotations",
        action="store_true",
        default=None,
        help="Add an 'L<n> : <line>' note after each message (default unless "
        "LOG_SEQUENCE_LINE_ANNOTATIONS=false)",
    )
    p.add_argument(
        "--no-annotations",
        dest="include_line_annotations",
        action="store_false",
        help="Emit message lines only",
    )
    p.add_argument("-o", "--output", default=None, help="Write the diagram to this file instead of stdout")
    p.add_argument(
        "--matched-lines",
        action="store_true",
        help="Print the 0-based original line numbers that matched, one per line",
    )
    p.add_argument("--json", dest="as_json", action="store_true", help="Print the full report as JSON")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    configure_logging()

    try:
        cfg = resolve_diagram_config()
        if args.include_line_annotations is not None:
            cfg = replace(cfg, include_line_annotations=args.include_line_annotations)

        rule_text, log_text = asyncio.run(
            read_inputs(args.rules_path, args.log_path, max_bytes=cfg.max_file_bytes, confine=False)
        )
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    report = build_report(rule_text, log_text, config=cfg)
    for bad in report.invalid_rules:
        print(f"Warning: rule {bad.index} ({bad.title!r}) skipped: {bad.error}", file=sys.stderr)

    if args.as_json:
        print(json.dumps(report.model_dump(), indent=2))
        return

    if args.matched_lines:
        for line_no in report.matched_lines:
            print(line_no)
        return

    if args.output:
        Path(args.output).write_text(report.diagram, encoding="utf-8")
        logger.info("Wrote %d interactions to %s", report.event_count, args.output)
    else:
        sys.stdout.write(report.diagram)

    if report.event_count == 0:
        print("No log lines matched any rule.", file=sys.stderr)


if __name__ == "__main__":
    main()
