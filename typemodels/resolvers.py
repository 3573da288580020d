"""Name-keyed resolvers that load and adapt types on demand.

Resolvers back the ``classes``, ``statics`` and ``enums`` template
variables. Nothing is cached: every lookup loads the type again and builds a
new model. The space of loadable names is unbounded, so resolvers are never
empty and cannot be iterated.
"""

from __future__ import annotations

import enum
import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any, NoReturn, Optional

from typemodels.errors import ResolutionError
from typemodels.loader import TypeLoader, TypeLoadError
from typemodels.models import AttributeView, ObjectModel, TemplateModel

if TYPE_CHECKING:  # pragma: no cover
    from typemodels.adapters.registry import AdapterRegistry

logger = logging.getLogger(__name__)


class TypeNameResolver(TemplateModel):
    """Base class: load a type by name, then build a model for it."""

    kind = "type"

    def __init__(self, registry: "AdapterRegistry", loader: Optional[TypeLoader] = None) -> None:
        self._registry = registry
        self._loader = loader if loader is not None else registry.loader

    def resolve(self, name: str) -> Any:
        """Load ``name`` and return its model.

        Raises:
            ResolutionError: ``name`` is not a string or cannot be loaded.
        """
        logger.debug("Resolving %s %s", self.kind, name)
        if not isinstance(name, str):
            raise ResolutionError(name, message=f"Type names must be strings, got {type(name).__name__}")
        try:
            loaded = self._loader.load(name)
        except TypeLoadError as exc:
            raise ResolutionError(name, cause=exc) from exc
        return self._model_for(name, loaded)

    @abstractmethod
    def _model_for(self, name: str, loaded: type) -> Any:
        """Build the model for a loaded type."""

    def get(self, name: str) -> Any:
        return self.resolve(name)

    def __getitem__(self, name: str) -> Any:
        return self.resolve(name)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            self._loader.load(name)
        except TypeLoadError:
            return False
        return True

    def __iter__(self) -> NoReturn:
        raise TypeError(f"{type(self).__name__} cannot be iterated: loadable names are unbounded")

    def is_empty(self) -> bool:
        return False

    def unwrap(self) -> TypeLoader:
        return self._loader

    def __str__(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._loader!r})"


class LazyClassResolver(TypeNameResolver):
    """``name -> model`` for any loadable class, adapted through the registry."""

    kind = "class"

    def _model_for(self, name: str, loaded: type) -> Any:
        return self._registry.adapt(loaded)


class StaticsResolver(TypeNameResolver):
    """``name -> view`` of a class's class-level attributes and static methods."""

    kind = "statics of"

    def _model_for(self, name: str, loaded: type) -> ObjectModel:
        return ObjectModel(loaded, self._registry)


class EnumsResolver(TypeNameResolver):
    """``name -> view`` of an enum's members by member name."""

    kind = "enum"

    def _model_for(self, name: str, loaded: type) -> AttributeView:
        if not issubclass(loaded, enum.Enum):
            raise ResolutionError(name, message=f"'{name}' is not an Enum class")
        return AttributeView(loaded.__members__.items(), self._registry)


__all__ = [
    "EnumsResolver",
    "LazyClassResolver",
    "StaticsResolver",
    "TypeNameResolver",
]
