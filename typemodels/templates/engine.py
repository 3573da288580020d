"""
Jinja2 integration for template models.

Templates see every context value through an :class:`AdapterRegistry`, and
attribute or item lookups on a model go to the model first, so
``{{ cls.declaredFields }}`` reaches the type descriptor view rather than a
Python attribute.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    Undefined,
    UndefinedError,
)

from typemodels.adapters import AdapterRegistry
from typemodels.introspection import qualified_name
from typemodels.models import TemplateModel, unwrap_model


class TemplateError(Exception):
    """Base exception for template engine errors."""

    def __init__(
        self,
        message: str,
        *,
        template_name: Optional[str] = None,
        line_number: Optional[int] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.template_name = template_name
        self.line_number = line_number
        self.original_error = original_error

    def format(self) -> str:
        location = self.template_name or "<template>"
        if self.line_number is not None:
            location = f"{location}:{self.line_number}"
        return f"{self.message} ({location})"


class TemplateCompilationError(TemplateError):
    """Raised when a template cannot be loaded or parsed."""


class TemplateRenderError(TemplateError):
    """Raised when template rendering fails."""


class ModelEnvironment(Environment):
    """Jinja2 environment whose lookups on models go through the model.

    ``obj.name`` and ``obj["name"]`` on a :class:`TemplateModel` first ask
    the model; a ``KeyError`` falls back to Jinja's default lookup so model
    methods such as ``items()`` stay reachable. Other errors propagate.
    """

    def __init__(self, registry: AdapterRegistry, **options: Any) -> None:
        super().__init__(**options)
        self.registry = registry

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, TemplateModel):
            try:
                return obj[attribute]
            except KeyError:
                pass
        return super().getattr(obj, attribute)

    def getitem(self, obj: Any, argument: Any) -> Any:
        if isinstance(obj, TemplateModel) and isinstance(argument, str):
            try:
                return obj[argument]
            except KeyError:
                pass
        return super().getitem(obj, argument)


def _filter_qualified_name(value: Any) -> str:
    """Qualified name of a class, or of the class of any other value."""
    raw = unwrap_model(value)
    return qualified_name(raw if isinstance(raw, type) else type(raw))


class ModelTemplateEngine:
    """
    Render Jinja2 templates against adapted values.

    Args:
        registry: Registry used to adapt every context value
        template_dir: Directory for named templates (optional)
        strict_undefined: Raise errors on undefined variables (default True)
        autoescape: Enable auto-escaping (default False)
        custom_filters: Additional filters to register
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        *,
        template_dir: Optional[Path] = None,
        strict_undefined: bool = True,
        autoescape: bool = False,
        custom_filters: Optional[Dict[str, Any]] = None,
    ):
        self.registry = registry
        loader = FileSystemLoader(str(template_dir)) if template_dir is not None else None
        self.env = ModelEnvironment(
            registry,
            loader=loader,
            autoescape=autoescape,
            undefined=StrictUndefined if strict_undefined else Undefined,
            keep_trailing_newline=True,
        )
        self.env.filters["unwrap"] = unwrap_model
        self.env.filters["qualified_name"] = _filter_qualified_name
        if custom_filters:
            for name, func in custom_filters.items():
                self.env.filters[name] = func

    def adapt_context(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        return {name: self.registry.adapt(value) for name, value in variables.items()}

    def compile(self, source: str, *, name: str = "<template>") -> Template:
        """
        Compile a template from source.

        Raises:
            TemplateCompilationError: If the source has a syntax error
        """
        try:
            return self.env.from_string(source)
        except TemplateSyntaxError as e:
            raise TemplateCompilationError(
                f"Template syntax error: {e.message}",
                template_name=name,
                line_number=e.lineno,
                original_error=e,
            ) from e

    def get_template(self, name: str) -> Template:
        """
        Load a named template from the template directory.

        Raises:
            TemplateCompilationError: If the template is missing or invalid
        """
        if self.env.loader is None:
            raise TemplateCompilationError(
                "No template directory configured",
                template_name=name,
            )
        try:
            return self.env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateCompilationError(
                f"Template not found: {name}",
                template_name=name,
                original_error=e,
            ) from e
        except TemplateSyntaxError as e:
            raise TemplateCompilationError(
                f"Template syntax error: {e.message}",
                template_name=name,
                line_number=e.lineno,
                original_error=e,
            ) from e

    def render_compiled(
        self,
        template: Template,
        variables: Dict[str, Any],
        *,
        name: str = "<template>",
    ) -> str:
        """
        Render a compiled template with adapted variables.

        Raises:
            TemplateRenderError: If rendering fails; ``original_error``
                holds the underlying exception
        """
        try:
            return template.render(self.adapt_context(variables))
        except UndefinedError as e:
            raise TemplateRenderError(
                f"Undefined variable in template: {e}",
                template_name=name,
                original_error=e,
            ) from e
        except Exception as e:
            raise TemplateRenderError(
                f"Template rendering failed: {e}",
                template_name=name,
                original_error=e,
            ) from e

    def render(
        self,
        template_source: str,
        variables: Dict[str, Any],
        *,
        name: str = "<template>",
    ) -> str:
        """Compile and render template source in one step."""
        compiled = self.compile(template_source, name=name)
        return self.render_compiled(compiled, variables, name=name)

    def render_template(self, name: str, variables: Dict[str, Any]) -> str:
        """Load a named template and render it."""
        return self.render_compiled(self.get_template(name), variables, name=name)
