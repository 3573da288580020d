"""
Reflective template models for Jinja2.

The package adapts arbitrary Python values, and classes in particular, into
name-keyed models that templates can navigate:

* ``adapters`` - the :class:`AdapterRegistry`, which maps an exact runtime
  type to an adapter and falls back to a generic bean-style view, and the
  :class:`TypeDescriptorAdapter`, which exposes a class's ``annotations``,
  ``declaredFields``, ``declaredMethods``, ``fields`` and ``methods``.
* ``models`` - the views handed to templates (:class:`AttributeView`,
  :class:`TypeModel`, :class:`ObjectModel` and container views).
* ``resolvers`` - :class:`LazyClassResolver` and friends, which turn a dotted
  type name into a model on demand.
* ``templates`` - a Jinja2 environment that routes lookups through models,
  and the render job behind the ``typemodels`` command.

Example::

    registry = AdapterRegistry()
    classes = LazyClassResolver(registry)
    engine = ModelTemplateEngine(registry)
    engine.render("{{ classes['decimal.Decimal'].methods | length }}", {"classes": classes})
"""

import re
from importlib import metadata as _metadata
from pathlib import Path


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("typemodels")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

from typemodels.adapters import AdapterRegistry, BaseAdapter, DefaultAdapter, TypeDescriptorAdapter  # noqa: E402
from typemodels.config import ModelingConfig, RenderConfig, load_render_config  # noqa: E402
from typemodels.errors import AdaptationError, ConfigurationError, ModelError, ResolutionError  # noqa: E402
from typemodels.introspection import (  # noqa: E402
    FieldDescriptor,
    MethodDescriptor,
    PythonTypeIntrospector,
    TypeIntrospector,
    annotate,
    qualified_name,
)
from typemodels.loader import ImportTypeLoader, MappingTypeLoader, TypeLoader, TypeLoadError  # noqa: E402
from typemodels.models import AttributeView, ObjectModel, TemplateModel, TypeModel  # noqa: E402
from typemodels.resolvers import EnumsResolver, LazyClassResolver, StaticsResolver  # noqa: E402
from typemodels.templates import ModelTemplateEngine, TemplateRenderer  # noqa: E402

__all__ = [
    "__version__",
    "AdaptationError",
    "AdapterRegistry",
    "AttributeView",
    "BaseAdapter",
    "ConfigurationError",
    "DefaultAdapter",
    "EnumsResolver",
    "FieldDescriptor",
    "ImportTypeLoader",
    "LazyClassResolver",
    "MappingTypeLoader",
    "MethodDescriptor",
    "ModelError",
    "ModelTemplateEngine",
    "ModelingConfig",
    "ObjectModel",
    "PythonTypeIntrospector",
    "RenderConfig",
    "ResolutionError",
    "StaticsResolver",
    "TemplateModel",
    "TemplateRenderer",
    "TypeDescriptorAdapter",
    "TypeIntrospector",
    "TypeLoadError",
    "TypeLoader",
    "TypeModel",
    "annotate",
    "load_render_config",
    "qualified_name",
]
