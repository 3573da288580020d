"""
typemodels CLI entry point.

Renders Jinja2 templates whose data model exposes Python classes through
``classes``, ``statics`` and ``enums``.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from typemodels import __version__

from .render import cmd_render


def _configure_logging(log_level: Optional[str]) -> None:
    """Configure the ``typemodels`` logger from the CLI or environment."""
    level_name = (log_level or os.getenv("TYPEMODELS_LOG_LEVEL", "info")).lower()
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }
    package_logger = logging.getLogger("typemodels")
    package_logger.setLevel(level_map.get(level_name, logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        package_logger.addHandler(handler)
        package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typemodels",
        description="Render Jinja2 templates against reflective models of Python classes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "warning", "error"],
        default=None,
        help="Logging level (or set TYPEMODELS_LOG_LEVEL)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the underlying cause of errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render templates to files")
    render_parser.add_argument("--config", help="TOML configuration file (pyproject.toml uses [tool.typemodels])")
    render_parser.add_argument("--template-dir", help="Directory containing templates")
    render_parser.add_argument("--template", dest="template_name", help="Render only this template")
    render_parser.add_argument(
        "--output",
        dest="output_file",
        help="Output file, or output directory when rendering several templates",
    )
    render_parser.add_argument("--output-dir", help="Default output directory (default: build)")
    render_parser.add_argument("--encoding", dest="output_encoding", help="Output encoding (default: utf-8)")
    render_parser.add_argument(
        "--define",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Add a string variable to the data model (may be repeated)",
    )
    render_parser.add_argument("--skip", action="store_true", help="Skip rendering")
    render_parser.set_defaults(func=cmd_render)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entrypoint.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Returns:
        Process exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1
    return args.func(args)


__all__ = ["build_parser", "main"]
