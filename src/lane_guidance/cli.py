"""Command-line interface for the lane guidance validator."""

import argparse
import json
import logging
import sys
from typing import Optional

from src.lane_guidance.aggregator import LaneAggregate, aggregate
from src.lane_guidance.config import load_settings
from src.lane_guidance.loader import load_records
from src.lane_guidance.validator import ValidationResult, validate
from src.lane_guidance.viewer import create_figure, export_html, show_figure
from src.logging_config import setup_logging


def format_report(aggregates: dict[int, LaneAggregate], result: ValidationResult) -> str:
    """Render the per-lane summary and validation verdict as plain text."""
    lines = []
    for lane_number, lane in aggregates.items():
        directions = " + ".join(f"{d.icon} {d.label}" for d in lane.directions)
        line = f"Lane {lane_number}: {directions} (angles: {', '.join(map(str, lane.angles))})"
        if lane.link_ids:
            line += f" links: {', '.join(map(str, lane.link_ids))}"
        lines.append(line)

    if not aggregates:
        lines.append("No lanes referenced")

    if result.is_valid:
        lines.append("Validation passed")
    else:
        lines.append("Validation failed:")
        lines.extend(f"  - {error}" for error in result.errors)

    return "\n".join(lines)


def _report_as_dict(aggregates: dict[int, LaneAggregate], result: ValidationResult) -> dict:
    return {
        "lanes": [
            {
                "lane": lane.lane_number,
                "directions": [direction.name for direction in lane.directions],
                "angles": list(lane.angles),
                "link_ids": list(lane.link_ids),
            }
            for lane in aggregates.values()
        ],
        **result.to_dict(),
    }


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for lane guidance CLI."""
    parser = argparse.ArgumentParser(
        description="Lane Guidance - aggregate and validate lane directions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print per-lane directions and validation result
  python -m src.lane_guidance samples/five_lanes.json

  # Fail with exit code 1 when the lanes break a rule
  python -m src.lane_guidance samples/five_lanes.json --strict

  # Outline lanes leading to link 2001 and export the panel
  python -m src.lane_guidance samples/five_lanes.json --highlight 2001 --export lanes.html
        """,
    )

    parser.add_argument(
        "path",
        type=str,
        help="Path to a JSON file of maneuver records",
    )
    parser.add_argument(
        "--export",
        type=str,
        metavar="FILE",
        help="Export the lane panel to an HTML file",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open the lane panel in the browser",
    )
    parser.add_argument(
        "--highlight",
        type=int,
        nargs="+",
        metavar="LINK_ID",
        help="External link ids whose lanes should be highlighted",
    )
    parser.add_argument(
        "--no-grid",
        action="store_true",
        help="Hide the input record grid in the lane panel",
    )
    parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Custom title for the lane panel",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when validation fails",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Logs go to stderr so stdout carries only the report
    console_level = min(settings.log_level, logging.DEBUG) if args.verbose else settings.log_level
    setup_logging(console_level=console_level, log_dir=settings.log_dir, console_stream=sys.stderr)

    logger = logging.getLogger(__name__)

    try:
        logger.info(f"Loading records from {args.path}")
        records = load_records(args.path)
        aggregates = aggregate(records)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = validate(aggregates)

    if args.json:
        print(json.dumps(_report_as_dict(aggregates, result), indent=2, ensure_ascii=False))
    else:
        print(format_report(aggregates, result))

    if args.export or args.show:
        fig = create_figure(
            records,
            title=args.title or settings.title,
            highlight_links=args.highlight,
            show_input_grid=not args.no_grid,
        )
        if args.export:
            logger.info(f"Exporting to {args.export}")
            export_html(fig, args.export)
            print(f"Exported to {args.export}")
        if args.show:
            logger.info("Opening in browser")
            show_figure(fig)

    if args.strict and not result.is_valid:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
