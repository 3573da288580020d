"""Configuration for model registries and render jobs."""

from __future__ import annotations

import codecs
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from typemodels.errors import ConfigurationError

DEFAULT_TEMPLATE_SUFFIXES = (".j2", ".jinja", ".jinja2")

# Keys holding paths that are resolved against the configuration file's directory.
_PATH_KEYS = ("template_dir", "output_file", "output_dir")


class ModelingConfig(BaseModel):
    """Settings threaded through an :class:`~typemodels.adapters.AdapterRegistry`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    expose_private: bool = Field(
        default=False,
        description="Allow templates to read _private members of adapted objects",
    )
    include_default_adapters: bool = Field(
        default=True,
        description="Associate the type descriptor adapter with type, ABCMeta and EnumType",
    )
    adapters: Dict[str, str] = Field(
        default_factory=dict,
        description="Type name -> dotted name of an adapter class to instantiate",
    )


class RenderConfig(BaseModel):
    """Settings for one template render job."""

    model_config = ConfigDict(extra="forbid")

    template_dir: Optional[Path] = Field(None, description="Directory templates are loaded from")
    template_name: Optional[str] = Field(None, description="Render only this template")
    output_file: Optional[Path] = Field(
        None,
        description="Output file for template_name, or output directory when rendering several templates",
    )
    output_dir: Path = Field(default=Path("build"), description="Default output directory")
    output_encoding: str = Field(default="utf-8", description="Encoding of rendered files")
    template_suffixes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TEMPLATE_SUFFIXES),
        description="File suffixes marking templates; stripped from output names",
    )
    skip: bool = Field(default=False, description="Skip rendering entirely")
    strict_undefined: bool = Field(default=True, description="Fail on undefined template variables")
    autoescape: bool = Field(default=False, description="Enable Jinja2 autoescaping")
    data_model: Dict[str, Any] = Field(default_factory=dict, description="Extra template variables")
    modeling: ModelingConfig = Field(default_factory=ModelingConfig)

    @field_validator("output_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        return value

    @field_validator("template_suffixes")
    @classmethod
    def _dotted_suffixes(cls, value: List[str]) -> List[str]:
        return [suffix if suffix.startswith(".") else f".{suffix}" for suffix in value]


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _resolve_paths(section: Dict[str, Any], root: Path) -> Dict[str, Any]:
    resolved = dict(section)
    for key in _PATH_KEYS:
        raw = resolved.get(key)
        if raw is None:
            continue
        path = Path(raw)
        if not path.is_absolute():
            path = (root / path).resolve()
        resolved[key] = path
    return resolved


def load_render_config(path: str | Path) -> RenderConfig:
    """Load a :class:`RenderConfig` from a TOML file.

    A ``pyproject.toml`` contributes its ``[tool.typemodels]`` table; any
    other file is read whole. Relative paths resolve against the file's
    directory.
    """

    config_path = Path(path).resolve()
    try:
        data = _read_toml_config(config_path)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {config_path}: {exc}", cause=exc) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {exc}", cause=exc) from exc

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("typemodels", {})

    section = _resolve_paths(data, config_path.parent)
    try:
        return RenderConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}", cause=exc) from exc


__all__ = [
    "DEFAULT_TEMPLATE_SUFFIXES",
    "ModelingConfig",
    "RenderConfig",
    "load_render_config",
]
