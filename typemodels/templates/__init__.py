"""Jinja2 template engine and render job for template models."""

from .engine import (
    ModelEnvironment,
    ModelTemplateEngine,
    TemplateCompilationError,
    TemplateError,
    TemplateRenderError,
)
from .renderer import TemplateRenderer, has_template_suffix, strip_template_suffix

__all__ = [
    "ModelEnvironment",
    "ModelTemplateEngine",
    "TemplateCompilationError",
    "TemplateError",
    "TemplateRenderError",
    "TemplateRenderer",
    "has_template_suffix",
    "strip_template_suffix",
]
