#!/usr/bin/env python3
"""
Energy Dashboard (EDASH)

A CLI and web dashboard for the weekly energy consumption heatmap.

Usage:
    edash [options]
    python -m edash.edash [options]
"""

import argparse
import logging
import sys

from edash.config.loader import load_config
from edash.heatmap.engine import HeatmapEngine

logger = logging.getLogger("edash")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all CLI flags."""
    parser = argparse.ArgumentParser(
        prog='edash',
        description='Energy consumption heatmap analytics'
    )

    # Report views (mutually exclusive group)
    views = parser.add_mutually_exclusive_group()
    views.add_argument('--heatmap', action='store_true',
                      help='Weekly heatmap (default)')
    views.add_argument('--insights', action='store_true',
                      help='Weekday, weekend and peak-hours averages')
    views.add_argument('--cell', nargs=2, metavar=('DAY', 'HOUR'),
                      help='Show one cell, e.g. --cell Mon 7')
    views.add_argument('--legend', action='store_true',
                      help='Show the intensity legend')

    # Engine
    parser.add_argument('--seed', type=int, metavar='N',
                       help='Seed offset for the consumption surface')

    # Output options
    parser.add_argument('--json', action='store_true',
                       help='Output as JSON')
    parser.add_argument('--export', metavar='FILE',
                       help='Export grid to CSV file')
    parser.add_argument('--no-color', action='store_true',
                       help='Disable colors')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Verbose output')

    # Web dashboard
    parser.add_argument('--serve', action='store_true',
                       help='Start web dashboard server')
    parser.add_argument('--port', type=int,
                       help='Port for web dashboard (default: from config)')
    parser.add_argument('--host',
                       help='Host for web dashboard (default: from config)')
    parser.add_argument('--no-browser', action='store_true',
                       help='Don\'t open browser on serve')

    return parser


def parse_hour(value: str) -> int:
    """Parse an hour argument, raising ValueError when it is not an integer."""
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"hour must be an integer, got '{value}'") from None


def setup_logging(config, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, str(config.get("log_level", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config, args.verbose)
    color_enabled = config["display"]["color_enabled"] and not args.no_color

    if args.seed is not None:
        config["heatmap"]["seed_offset"] = args.seed

    if args.serve:
        _run_serve(config, args)
        return

    try:
        engine = HeatmapEngine.from_config(config)
    except ValueError as e:
        print(f"Error: invalid heatmap configuration: {e}")
        sys.exit(1)

    if args.export:
        from edash.output.csv_export import export_report
        print(export_report(engine, args.export))
        return

    if args.json:
        from edash.output.csv_export import to_json
        print(to_json(engine))
        return

    if args.insights:
        from edash.reports.heatmap import generate_insights
        print(generate_insights(engine, config, color_enabled))

    elif args.cell:
        from edash.reports.heatmap import generate_cell
        day, hour = args.cell
        try:
            result = generate_cell(engine, day, parse_hour(hour), config, color_enabled)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
        if result is None:
            print(f"No data for {day} {hour}")
            sys.exit(1)
        print(result)

    elif args.legend:
        from edash.reports.heatmap import generate_legend
        print(generate_legend(color_enabled))

    else:
        # Default: show heatmap
        from edash.reports.heatmap import generate_heatmap
        print(generate_heatmap(engine, config, color_enabled))


def _run_serve(config, args):
    """Start the web dashboard server."""
    import uvicorn

    from edash.server.app import create_app
    app = create_app(config=config)

    host = args.host or config["server"]["host"]
    port = args.port or config["server"]["port"]
    url = f"http://{host}:{port}"
    print(f"\nStarting EDASH Dashboard at {url}")
    print("Press Ctrl+C to stop\n")

    if not args.no_browser:
        import webbrowser
        import threading
        threading.Timer(1.0, webbrowser.open, args=[url]).start()

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == '__main__':
    main()
