#!/usr/bin/env python3
"""
ccheatmap - Claude Code usage heatmap

Renders a calendar heatmap SVG from a daily usage data.json.

Usage:
    python -m ccheatmap [options]
    ccheatmap [options]
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict

from ccheatmap.config.loader import load_config, get_data_path, build_render_config
from ccheatmap.models.themes import THEMES


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all CLI flags."""
    parser = argparse.ArgumentParser(
        prog='ccheatmap',
        description='Render a calendar heatmap of Claude Code usage'
    )

    # Input / output
    parser.add_argument('--data', metavar='PATH',
                       help='Activity data file (default: from config)')
    parser.add_argument('--output', '-o', metavar='FILE',
                       help="Write SVG to FILE ('-' for stdout)")

    # Views (mutually exclusive group)
    views = parser.add_mutually_exclusive_group()
    views.add_argument('--summary', action='store_true',
                      help='Print a text summary instead of rendering')
    views.add_argument('--json', action='store_true',
                      help='Print statistics as JSON')
    views.add_argument('--serve', action='store_true',
                      help='Start the heatmap web server')

    # Date filters
    date_filters = parser.add_argument_group('date filters')
    date_filters.add_argument('--from', dest='date_from', metavar='DATE',
                             help='Start date (YYYY-MM-DD)')
    date_filters.add_argument('--to', dest='date_to', metavar='DATE',
                             help='End date (YYYY-MM-DD)')

    # Appearance
    look = parser.add_argument_group('appearance')
    look.add_argument('--theme', choices=sorted(THEMES),
                     help='Palette override')
    look.add_argument('--color-scheme', choices=['light', 'dark'],
                     help='Base color scheme (default: light)')
    look.add_argument('--cell-size', type=float, metavar='PX',
                     help='Cell edge length')
    look.add_argument('--cell-gap', type=float, metavar='PX',
                     help='Gap between cells')
    look.add_argument('--cell-radius', type=float, metavar='PX',
                     help='Cell corner radius')
    look.add_argument('--bg', metavar='COLOR',
                     help='Background color')
    look.add_argument('--text-color', metavar='COLOR',
                     help='Text color')
    look.add_argument('--week-start', type=int, choices=range(7), metavar='0-6',
                     help='First weekday of a column (0=Sunday)')

    # Panels
    panels = parser.add_argument_group('panels')
    panels.add_argument('--no-stats', action='store_true',
                       help='Hide the statistics panel')
    panels.add_argument('--no-weekday', action='store_true',
                       help='Hide the weekday distribution panel')
    panels.add_argument('--hide-month-labels', action='store_true',
                       help='Hide month labels')
    panels.add_argument('--hide-total', action='store_true',
                       help='Hide the total line')
    panels.add_argument('--no-weekday-labels', action='store_true',
                       help='Hide Mon/Wed/Fri row labels')

    # Server
    parser.add_argument('--port', type=int,
                       help='Port for web server (default: from config)')
    parser.add_argument('--host',
                       help='Host for web server (default: from config)')

    parser.add_argument('--no-color', action='store_true',
                       help='Disable colors')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Verbose output')

    return parser


def options_from_args(args) -> Dict[str, Any]:
    """Translate CLI flags into a render option layer (unset flags stay None)."""
    return {
        'cell_size': args.cell_size,
        'cell_gap': args.cell_gap,
        'cell_radius': args.cell_radius,
        'color_scheme': args.color_scheme,
        'theme': args.theme,
        'background': args.bg,
        'text_color': args.text_color,
        'week_start': args.week_start,
        'start': args.date_from,
        'end': args.date_to,
        'stats': False if args.no_stats else None,
        'weekday': False if args.no_weekday else None,
        'hide_month_labels': True if args.hide_month_labels else None,
        'hide_total_count': True if args.hide_total else None,
        'show_weekday_labels': False if args.no_weekday_labels else None,
    }


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    config = load_config()
    if args.data:
        config['data_path'] = args.data
    color_enabled = not args.no_color

    if args.serve:
        _run_serve(config, args)
        return

    render_config = build_render_config(config['render'], options_from_args(args))

    from ccheatmap.etl.loader import load_activities

    data_path = get_data_path(config)
    try:
        data = load_activities(data_path)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        print("Generate data.json first or point --data at it.")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: Could not read {data_path}: {e}")
        sys.exit(1)

    if args.verbose:
        print(f"Loaded {len(data)} days from {data_path}", file=sys.stderr)

    if args.summary:
        from ccheatmap.reports.summary import generate_summary
        print(generate_summary(data, render_config, color_enabled))

    elif args.json:
        from ccheatmap.render.layout import compute_layout
        layout = compute_layout(data, render_config)
        payload = {
            'stats': asdict(layout.stats),
            'weekday': asdict(layout.weekday_stats),
        }
        print(json.dumps(payload, indent=2))

    else:
        from ccheatmap.render.svg import build_heatmap_svg
        svg = build_heatmap_svg(data, render_config)
        output = args.output or config['output_path']
        if output == '-':
            sys.stdout.write(svg + '\n')
        else:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(svg)
            print(f"Wrote {output}")


def _run_serve(config, args):
    """Start the heatmap web server."""
    try:
        import uvicorn
    except ImportError:
        print("Error: The web server requires additional dependencies.")
        print("Install them with: python -m pip install fastapi uvicorn[standard] pydantic")
        sys.exit(1)

    from ccheatmap.server.app import create_app
    app = create_app(config=config)

    host = args.host or config['server']['host']
    port = args.port or config['server']['port']
    print(f"\nServing heatmap at http://{host}:{port}/api/heatmap")
    print("Press Ctrl+C to stop\n")

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == '__main__':
    main()
