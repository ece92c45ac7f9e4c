"""
Command-line entry point: list and run the example apps, or prime the
local injury data cache used by ``app.py``.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .apps import APPS
from .data_manager import load_injury_data, resolve_data_dir

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m shiny_exercises",
        description="Run the Shiny example apps or fetch the injury data files.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level instead of INFO.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List the available example apps.")

    run = sub.add_parser("run", help="Run one example app.")
    run.add_argument("name", choices=sorted(APPS), help="Example app to run.")
    run.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1).")
    run.add_argument("--port", type=int, default=8000, help="Port to bind (default: 8000).")
    run.add_argument(
        "--launch-browser",
        action="store_true",
        help="Open the app in a browser once it starts.",
    )

    fetch = sub.add_parser("fetch-data", help="Download the injury data files.")
    fetch.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory for the files (default: NEISS_DATA_DIR or ./data).",
    )
    fetch.add_argument(
        "--source",
        default=None,
        help="Base URL of the remote files (default: NEISS_SOURCE or GitHub).",
    )
    fetch.add_argument(
        "--force",
        action="store_true",
        help="Download again even if local copies exist.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.command == "list":
        for name in sorted(APPS):
            print(name)
        return 0

    if args.command == "run":
        # Imported here so `list` and `fetch-data` work without starting uvicorn
        from shiny import run_app

        target = f"{APPS[args.name]}:app"
        logger.info("Starting %s on %s:%d", target, args.host, args.port)
        run_app(
            target,
            host=args.host,
            port=args.port,
            launch_browser=args.launch_browser,
        )
        return 0

    data_dir = args.data_dir or resolve_data_dir()
    tables = load_injury_data(
        data_dir, source_base=args.source, force_download=args.force
    )
    for name, df in tables.items():
        print(f"{name}: {len(df)} rows")
    print(f"\nSaved to {data_dir}/")
    return 0


if __name__ == "__main__":
    sys.exit(main())
