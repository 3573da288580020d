"""Adapter interfaces and the generic fallback adapter."""

from __future__ import annotations

import datetime
import inspect
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Protocol, Tuple, runtime_checkable

from typemodels.errors import AdaptationError
from typemodels.models import (
    MappingModel,
    MethodModel,
    ObjectModel,
    SequenceModel,
    TemplateModel,
)

if TYPE_CHECKING:  # pragma: no cover
    from typemodels.adapters.registry import AdapterRegistry


# Values templates already know how to print and compare.
SCALAR_TYPES: Tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
)


@runtime_checkable
class Adapter(Protocol):
    """Turns one kind of value into something templates can consume."""

    def produce(self, value: Any, registry: "AdapterRegistry") -> Any:  # pragma: no cover
        ...


class BaseAdapter(ABC):
    """Base class for adapters.

    Subclasses list the kinds of value they accept in ``accepts`` and
    implement :meth:`_produce_impl`. A value outside ``accepts`` means the
    adapter was registered against the wrong type and raises
    :class:`AdaptationError`.

    Example:
        class DecimalAdapter(BaseAdapter):
            accepts = (Decimal,)

            def _produce_impl(self, value, registry):
                return format(value, "f")
    """

    accepts: Tuple[type, ...] = ()

    def produce(self, value: Any, registry: "AdapterRegistry") -> Any:
        if self.accepts and not isinstance(value, self.accepts):
            expected = ", ".join(kind.__name__ for kind in self.accepts)
            raise AdaptationError(
                f"{type(self).__name__} cannot adapt a {type(value).__name__} value; expected {expected}",
                value=value,
                adapter=self,
            )
        return self._produce_impl(value, registry)

    @abstractmethod
    def _produce_impl(self, value: Any, registry: "AdapterRegistry") -> Any:
        """Build the model for an accepted value."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DefaultAdapter(BaseAdapter):
    """Generic fallback used for every type without an exact registration.

    Models and scalars pass through unchanged, routines become callable
    :class:`MethodModel` objects, containers become lazily adapting views
    and everything else gets a bean-style :class:`ObjectModel`.
    """

    def _produce_impl(self, value: Any, registry: "AdapterRegistry") -> Any:
        if isinstance(value, TemplateModel):
            return value
        if isinstance(value, SCALAR_TYPES):
            return value
        if inspect.isroutine(value):
            return MethodModel(value, registry)
        if isinstance(value, Mapping):
            return MappingModel(value, registry)
        if isinstance(value, (Sequence, Set)):
            return SequenceModel(value, registry)
        return ObjectModel(value, registry)
