"""Adapter exposing classes through :class:`~typemodels.models.TypeModel`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from typemodels.adapters.base import BaseAdapter
from typemodels.introspection import PythonTypeIntrospector, TypeIntrospector
from typemodels.models import TypeModel

if TYPE_CHECKING:  # pragma: no cover
    from typemodels.adapters.registry import AdapterRegistry


class TypeDescriptorAdapter(BaseAdapter):
    """Produce a :class:`TypeModel` for a class.

    Only class objects are accepted; anything else raises
    :class:`~typemodels.errors.AdaptationError`.
    """

    accepts = (type,)

    def __init__(self, introspector: Optional[TypeIntrospector] = None) -> None:
        self.introspector = introspector if introspector is not None else PythonTypeIntrospector()

    def _produce_impl(self, value: Any, registry: "AdapterRegistry") -> TypeModel:
        return TypeModel(value, registry, self.introspector)

    def __repr__(self) -> str:
        return f"TypeDescriptorAdapter({type(self.introspector).__name__})"
