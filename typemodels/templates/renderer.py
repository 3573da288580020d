"""Render job: discover templates, assemble the data model, write output files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from typemodels.adapters import AdapterRegistry
from typemodels.config import RenderConfig
from typemodels.errors import ConfigurationError
from typemodels.loader import ImportTypeLoader, TypeLoader
from typemodels.resolvers import EnumsResolver, LazyClassResolver, StaticsResolver
from typemodels.templates.engine import ModelTemplateEngine

logger = logging.getLogger(__name__)


def has_template_suffix(name: str, suffixes: Sequence[str]) -> bool:
    lowered = name.lower()
    return any(len(name) > len(suffix) and lowered.endswith(suffix.lower()) for suffix in suffixes)


def strip_template_suffix(name: str, suffixes: Sequence[str]) -> str:
    """``"api.py.j2"`` -> ``"api.py"``; names without a template suffix are kept."""
    lowered = name.lower()
    for suffix in suffixes:
        if len(name) > len(suffix) and lowered.endswith(suffix.lower()):
            return name[: -len(suffix)]
    return name


class TemplateRenderer:
    """Render every configured template to its output file."""

    def __init__(
        self,
        config: RenderConfig,
        *,
        registry: Optional[AdapterRegistry] = None,
        loader: Optional[TypeLoader] = None,
    ) -> None:
        self.config = config
        self.loader = loader if loader is not None else ImportTypeLoader()
        self.registry = (
            registry
            if registry is not None
            else AdapterRegistry.from_config(config.modeling, loader=self.loader)
        )

    def template_names(self) -> List[str]:
        """The configured template, or every template file in ``template_dir``."""
        if self.config.template_name:
            return [self.config.template_name]
        directory = self.config.template_dir
        if directory is None or not directory.is_dir():
            return []
        return sorted(
            path.name
            for path in directory.iterdir()
            if path.is_file() and has_template_suffix(path.name, self.config.template_suffixes)
        )

    def output_file_for(self, template_name: str) -> Path:
        """Compute (and create the parent directory of) a template's output file."""
        configured = self.config.output_file
        if template_name == self.config.template_name and configured is not None:
            output = configured
        else:
            base = configured if configured is not None else self.config.output_dir
            output = base / strip_template_suffix(template_name, self.config.template_suffixes)
        output.parent.mkdir(parents=True, exist_ok=True)
        return output

    def build_data_model(self) -> Dict[str, Any]:
        data_model: Dict[str, Any] = dict(self.config.data_model)
        data_model["statics"] = StaticsResolver(self.registry, self.loader)
        data_model["enums"] = EnumsResolver(self.registry, self.loader)
        data_model.setdefault("classes", LazyClassResolver(self.registry, self.loader))
        data_model.setdefault("config", self.config)
        return data_model

    def run(self) -> List[Path]:
        """Render all templates and return the files written.

        Raises:
            ConfigurationError: No templates, no template directory, or an
                output file that must be a directory is not one
            TemplateError: A template failed to load or render
        """
        logger.debug("Using configuration: %s", self.config)
        if self.config.skip:
            logger.info("Skipping execution by request.")
            return []

        if self.config.template_dir is None:
            raise ConfigurationError(
                "No template directory configured",
                hint="Set template_dir in the configuration or pass --template-dir",
            )
        names = self.template_names()
        if not names:
            raise ConfigurationError(
                "No templates to process",
                context={"template_dir": str(self.config.template_dir)},
            )
        output_file = self.config.output_file
        if len(names) > 1 and output_file is not None:
            # Several templates: output_file names a directory.
            if output_file.exists() and not output_file.is_dir():
                raise ConfigurationError(f"output_file was an existing non-directory: {output_file}")
            output_file.mkdir(parents=True, exist_ok=True)
        logger.debug("Using template names: %s", names)

        engine = ModelTemplateEngine(
            self.registry,
            template_dir=self.config.template_dir,
            strict_undefined=self.config.strict_undefined,
            autoescape=self.config.autoescape,
        )
        data_model = self.build_data_model()
        logger.debug("Using data model keys: %s", sorted(data_model))
        logger.debug("Using output encoding: %s", self.config.output_encoding)

        written: List[Path] = []
        for name in names:
            output = self.output_file_for(name)
            logger.debug("Loading template: %s", name)
            logger.debug("Output file: %s", output)
            text = engine.render_template(name, data_model)
            output.write_text(text, encoding=self.config.output_encoding)
            written.append(output)
            logger.debug("...processing of %s complete.", name)
        logger.debug("All template processing complete.")
        return written
