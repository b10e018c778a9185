# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Run the analytics from a shell against the configured MongoDB.
#
# COMMANDS:
# ---------
# 1. Statistics for one form:
#    python -m form_analytics.cli form <form_id>
#
# 2. Dashboard totals for a user:
#    python -m form_analytics.cli dashboard <user_id>
#
# 3. Export a form's responses:
#    python -m form_analytics.cli export <form_id> --format csv --output responses.csv
#    (add --field-stats for per-field analytics instead of raw responses)
#
# Add --view-counter to read per-form view counters instead of raw
# view events, and -v for debug logging.
#
# ==============================================

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from form_analytics.aggregation_engine import AggregationEngine
from form_analytics.config import get_config
from form_analytics.errors import AnalyticsError
from form_analytics.service import EXPORT_FORMATS, AnalyticsService
from form_analytics.storage import MongoFormStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="form-analytics",
        description="Response analytics for published forms",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--view-counter",
        action="store_true",
        help="Use per-form view counters instead of raw view events",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    form_parser = subparsers.add_parser("form", help="Statistics for one form")
    form_parser.add_argument("form_id")

    dashboard_parser = subparsers.add_parser("dashboard", help="Totals across a user's forms")
    dashboard_parser.add_argument("user_id")

    export_parser = subparsers.add_parser("export", help="Export a form's responses")
    export_parser.add_argument("form_id")
    export_parser.add_argument("--format", choices=EXPORT_FORMATS, default="csv")
    export_parser.add_argument("--fields", nargs="*", help="Compacted field keys to include")
    export_parser.add_argument("--output", help="Write to this file instead of stdout")
    export_parser.add_argument(
        "--field-stats",
        action="store_true",
        help="Export per-field analytics instead of raw responses",
    )

    return parser


def _write_export(result, output: Optional[str]) -> None:
    if isinstance(result, dict):
        result = json.dumps(result, indent=2, default=str)

    if output:
        path = Path(output)
        if isinstance(result, bytes):
            path.write_bytes(result)
        else:
            path.write_text(result)
        print(f"Exported responses to {path}")
    elif isinstance(result, bytes):
        sys.stdout.buffer.write(result)
    else:
        print(result)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = get_config()
    try:
        with MongoFormStore.from_config(config.mongo, config.collections) as store:
            service = AnalyticsService(
                store,
                AggregationEngine(config.analytics),
                use_view_counter=args.view_counter,
            )

            if args.command == "form":
                print(json.dumps(service.form_statistics(args.form_id).to_dict(), indent=2))
            elif args.command == "dashboard":
                print(json.dumps(service.dashboard_statistics(args.user_id).to_dict(), indent=2))
            elif args.command == "export":
                if args.field_stats:
                    result = service.export_field_stats(args.form_id, args.format)
                else:
                    result = service.export_responses(args.form_id, args.format, args.fields)
                _write_export(result, args.output)
    except AnalyticsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
