from __future__ import annotations

import argparse
import dataclasses
import sys
from typing import Optional

from .app import JetAssignApp
from .config import LOG_LEVELS, ConfigError, Settings
from .console import Console
from .log import configure_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="jet_assign", description="Seat assignment for a 13-row, 6-column jet (interactive).")
    p.add_argument("--no-animation", action="store_true", help="Skip the upload progress animation")
    p.add_argument("--upload-interval", type=float, help="Seconds between upload progress steps")
    p.add_argument("--cell-width", type=int, help="Cell width for the seating chart")
    p.add_argument("--show-ids", action="store_true", help="Show passport IDs instead of X in the seating chart")
    p.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper, help="Log level for stderr logging")
    return p


def load_settings(args: argparse.Namespace, environ: Optional[dict[str, str]] = None) -> Settings:
    settings = Settings.from_env(environ)
    overrides = {}
    if args.upload_interval is not None:
        overrides["upload_interval"] = args.upload_interval
    if args.no_animation:
        overrides["upload_interval"] = 0.0
    if args.cell_width is not None:
        overrides["cell_width"] = args.cell_width
    if args.show_ids:
        overrides["show_ids"] = True
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return dataclasses.replace(settings, **overrides)


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    try:
        settings = load_settings(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    app = JetAssignApp(console=Console(), settings=settings)
    try:
        return app.run()
    except (EOFError, KeyboardInterrupt):
        print()
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
