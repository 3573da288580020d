"""
Render command implementation.

Builds a :class:`RenderConfig` from an optional TOML file plus command-line
overrides and runs a :class:`TemplateRenderer`.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from typemodels.config import RenderConfig, load_render_config
from typemodels.errors import ConfigurationError, ModelError
from typemodels.templates import TemplateError, TemplateRenderer

_PATH_OPTIONS = ("template_dir", "output_file", "output_dir")


def parse_defines(items: List[str]) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` strings."""
    values: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"Invalid --define value {item!r}; expected KEY=VALUE")
        values[key.strip()] = value
    return values


def resolve_config(args: argparse.Namespace) -> RenderConfig:
    config = load_render_config(args.config) if args.config else RenderConfig()
    overrides: Dict[str, Any] = {}
    for option in _PATH_OPTIONS:
        value = getattr(args, option, None)
        if value:
            overrides[option] = Path(value).resolve()
    if args.template_name:
        overrides["template_name"] = args.template_name
    if args.output_encoding:
        overrides["output_encoding"] = args.output_encoding
    if args.skip:
        overrides["skip"] = True
    if args.define:
        data_model = dict(config.data_model)
        data_model.update(parse_defines(args.define))
        overrides["data_model"] = data_model
    if not overrides:
        return config
    merged = config.model_dump()
    merged.update(overrides)
    try:
        return RenderConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid command-line options: {exc}", cause=exc) from exc


def cmd_render(args: argparse.Namespace) -> int:
    """Handle ``typemodels render``."""
    try:
        config = resolve_config(args)
        written = TemplateRenderer(config).run()
    except (ModelError, TemplateError) as exc:
        print(f"Error: {exc.format()}", file=sys.stderr)
        cause = exc.__cause__
        if getattr(args, "verbose", False) and cause is not None:
            print(f"Caused by: {type(cause).__name__}: {cause}", file=sys.stderr)
        return 1

    for path in written:
        print(f"Rendered {path}")
    return 0
