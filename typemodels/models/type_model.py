"""Model of a class's declared surface."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Iterator, Tuple

from typemodels.errors import AdaptationError
from typemodels.introspection import TypeIntrospector, qualified_name
from typemodels.models.base import AttributeView, TemplateModel

if TYPE_CHECKING:  # pragma: no cover
    from typemodels.adapters.registry import AdapterRegistry


ATTRIBUTE_NAMES: Tuple[str, ...] = (
    "annotations",
    "declaredFields",
    "declaredMethods",
    "fields",
    "methods",
)


def _annotation_entries(introspector: TypeIntrospector, t: type) -> Iterable[Tuple[str, Any]]:
    for annotation in introspector.annotations(t):
        if annotation is not None:
            yield qualified_name(type(annotation)), annotation


def _member_entries(members: Iterable[Any]) -> Iterable[Tuple[str, Any]]:
    # Overloads share a name; plain insertion keeps the last one enumerated.
    for member in members:
        if member is not None:
            yield member.name, member


_VIEW_BUILDERS: Dict[str, Callable[[TypeIntrospector, type], Iterable[Tuple[str, Any]]]] = {
    "annotations": _annotation_entries,
    "declaredFields": lambda introspector, t: _member_entries(introspector.declared_fields(t)),
    "declaredMethods": lambda introspector, t: _member_entries(introspector.declared_methods(t)),
    "fields": lambda introspector, t: _member_entries(introspector.fields(t)),
    "methods": lambda introspector, t: _member_entries(introspector.methods(t)),
}


class TypeModel(TemplateModel, Mapping):
    """A class exposed to templates.

    ``annotations``, ``declaredFields``, ``declaredMethods``, ``fields`` and
    ``methods`` each produce a fresh :class:`AttributeView` per lookup; the
    views are not cached, so every lookup re-runs introspection. Any other
    name is answered by the registry's fallback view of the class itself,
    e.g. ``__name__`` or ``__bases__``.

    ``str(model)`` is the qualified name of the class and the model is never
    empty.
    """

    def __init__(self, t: type, registry: "AdapterRegistry", introspector: TypeIntrospector) -> None:
        self._type = t
        self._registry = registry
        self._introspector = introspector

    def __getitem__(self, key: str) -> Any:
        builder = _VIEW_BUILDERS.get(key) if isinstance(key, str) else None
        if builder is not None:
            return AttributeView(builder(self._introspector, self._type), self._registry)
        return self._fallback()[key]

    def _fallback(self) -> Mapping:
        fallback = self._registry.fallback.produce(self._type, self._registry)
        if not isinstance(fallback, Mapping):
            raise AdaptationError(
                f"Fallback adapter produced a {type(fallback).__name__} for {qualified_name(self._type)}; "
                "a mapping model is required",
                value=self._type,
                adapter=self._registry.fallback,
            )
        return fallback

    def __iter__(self) -> Iterator[str]:
        yield from ATTRIBUTE_NAMES
        for name in self._fallback():
            if name not in ATTRIBUTE_NAMES:
                yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, key: object) -> bool:
        return key in ATTRIBUTE_NAMES or key in self._fallback()

    def is_empty(self) -> bool:
        return False

    def unwrap(self) -> type:
        return self._type

    @property
    def introspector(self) -> TypeIntrospector:
        return self._introspector

    def __str__(self) -> str:
        return qualified_name(self._type)

    def __repr__(self) -> str:
        return f"TypeModel({qualified_name(self._type)})"
