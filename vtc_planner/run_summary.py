"""
CLI entry point for printing a planning summary from an exported file.

Usage:
    python -m vtc_planner.run_summary --data export.json --driver driver-1
    python -m vtc_planner.run_summary --data export.json --driver driver-1 --view month
    python -m vtc_planner.run_summary --data export.json --driver driver-1 \
        --start 2025-03-17 --end 2025-03-23 --report summary.txt
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from vtc_planner.errors import PlanningError
from vtc_planner.scheduling.calendar_range import resolve_period
from vtc_planner.tools import planning_store
from vtc_planner.tools.planning import availability_summary

logger = logging.getLogger(__name__)


def _read_export(path: Path) -> list[dict]:
    """Read a JSON export: either a list of day records or ``{"schedules": [...]}``."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("schedules", [])
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of schedules in {path}")
    return payload


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Summarize a driver's planning from an exported JSON file."
    )
    parser.add_argument("--data", type=str, required=True, help="Path to the JSON export.")
    parser.add_argument("--driver", type=str, required=True, help="Driver ID to summarize.")
    parser.add_argument("--start", type=str, default=None, help="First day (YYYY-MM-DD).")
    parser.add_argument("--end", type=str, default=None, help="Last day (YYYY-MM-DD).")
    parser.add_argument(
        "--view",
        choices=["week", "month"],
        default=None,
        help="Current week or month when no explicit range is given.",
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Path to write the report (default: stdout).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging output.")

    args = parser.parse_args()
    if args.end and not args.start:
        parser.error("--end requires --start")

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    data_path = Path(args.data)
    if not data_path.exists():
        logger.error("Export file not found: %s", data_path)
        sys.exit(1)

    try:
        records = _read_export(data_path)
        planning_store.load_records(records)
    except (PlanningError, ValueError) as exc:
        logger.error("Could not load %s: %s", data_path, exc)
        sys.exit(1)

    # With --start only, the summary spans SUMMARY_DEFAULT_DAYS days.
    start, end = args.start, args.end
    if not start:
        first, last = resolve_period(args.view)
        start, end = first.isoformat(), last.isoformat()

    result = availability_summary(args.driver, start, end)
    if not result["success"]:
        logger.error("Summary failed: %s", result["message"])
        sys.exit(1)

    output = result["data"]["report"]
    if args.report:
        report_path = Path(args.report)
        report_path.write_text(output, encoding="utf-8")
        logger.info("Report written to %s", report_path)
    else:
        sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
