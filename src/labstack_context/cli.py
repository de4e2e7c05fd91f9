"""CLI entry point for resolving supplement context from an app export."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .config import Config
from .legacy_compat import coerce_reports, coerce_timeline
from .logging import setup_logging
from .presentation import to_display_text
from .queries import current_inherited, resolve_all

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="labstack-context",
        description="Resolve which supplements were in effect for each lab report.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser(
        "resolve",
        help="Resolve supplement context for the reports in an exported JSON file.",
    )
    resolve.add_argument(
        "path",
        type=Path,
        help='JSON file with "reports" and "supplementTimeline" arrays.',
    )
    resolve.add_argument(
        "--report-id",
        default=None,
        help="Only print the context of this report.",
    )
    resolve.add_argument(
        "--current",
        action="store_true",
        help="Print the context a new report would inherit right now.",
    )
    return parser


def _load_export(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SystemExit(f"labstack-context: cannot read {path}: {exc.strerror}") from exc
    except json.JSONDecodeError as exc:
        raise SystemExit(f"labstack-context: {path} is not valid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise SystemExit(f"labstack-context: {path} must contain a JSON object")
    return payload


def _with_text(entry: dict[str, Any], supplements: Sequence[Any]) -> dict[str, Any]:
    entry["display_text"] = to_display_text(supplements)
    return entry


def _run(args: argparse.Namespace) -> int:
    payload = _load_export(args.path)
    reports = coerce_reports(payload.get("reports"))
    timeline = coerce_timeline(payload.get("supplementTimeline"))
    logger.info("Loaded %d reports and %d supplement periods", len(reports), len(timeline))

    if args.current:
        inherited = current_inherited(reports, timeline)
        result: Any = _with_text(inherited.to_dict(), inherited.supplements)
    else:
        resolved = resolve_all(reports, timeline)
        if args.report_id is not None:
            context = resolved.get(args.report_id)
            if context is None:
                print(f"labstack-context: unknown report id {args.report_id!r}", file=sys.stderr)
                return 1
            result = _with_text(context.to_dict(), context.supplements)
        else:
            result = {
                report_id: _with_text(context.to_dict(), context.supplements)
                for report_id, context in resolved.items()
            }

    print(json.dumps(result, indent=2, sort_keys=True))
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = Config.from_env()
    except RuntimeError as exc:
        parser.exit(2, f"labstack-context: {exc}\n")
    setup_logging(config.log_format, config.log_level)
    raise SystemExit(_run(args))


if __name__ == "__main__":
    main()
