"""Template-facing models for adapted values.

Every model is a :class:`TemplateModel`: it has a string form, can report
emptiness explicitly, and gives back the value it wraps via :meth:`unwrap`.
Member values are adapted through the owning registry when they are read,
never when the model is built.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence, Sized
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Tuple

from typemodels.introspection import is_private, is_public

if TYPE_CHECKING:  # pragma: no cover
    from typemodels.adapters.registry import AdapterRegistry


class TemplateModel(ABC):
    """Base class for every model produced by an adapter."""

    @abstractmethod
    def unwrap(self) -> Any:
        """Return the underlying value."""

    def is_empty(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __eq__(self, other: object) -> bool:
        return self.unwrap() == unwrap_model(other)

    def __hash__(self) -> int:
        raw = self.unwrap()
        try:
            return hash(raw)
        except TypeError:
            # Unhashable values hash by type so equal models still hash equally.
            return hash(type(raw))


def unwrap_model(value: Any) -> Any:
    """Return the raw value behind ``value`` if it is a model."""
    if isinstance(value, TemplateModel):
        return value.unwrap()
    return value


class AttributeView(TemplateModel, Mapping):
    """Immutable ``name -> value`` view built from introspection entries.

    Entries are inserted in order, so a later entry with an already seen
    name replaces the earlier one. Values are adapted when read.

    A view never reports itself empty: the attributes a type could expose are
    open-ended, so ``bool(view)`` is always true and ``is_empty()`` always
    false. ``len(view)`` still counts the concrete entries.
    """

    def __init__(self, entries: Iterable[Tuple[str, Any]], registry: "AdapterRegistry") -> None:
        members = {}
        for name, value in entries:
            members[name] = value
        self._members = members
        self._registry = registry

    def __getitem__(self, key: str) -> Any:
        return self._registry.adapt(self._members[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, key: object) -> bool:
        return key in self._members

    def is_empty(self) -> bool:
        return False

    def unwrap(self) -> dict:
        return dict(self._members)

    def __str__(self) -> str:
        return ", ".join(str(name) for name in self._members)

    def __repr__(self) -> str:
        return f"AttributeView({list(self._members)!r})"


class ObjectModel(TemplateModel, Mapping):
    """Generic bean-style view of an arbitrary value's attributes.

    Public names and dunders can be read; private (``_name``) members only
    when the registry's configuration sets ``expose_private``. Iteration
    lists the public, non-dunder names.
    """

    def __init__(self, value: Any, registry: "AdapterRegistry") -> None:
        self._value = value
        self._registry = registry

    def _visible(self, name: Any) -> bool:
        if not isinstance(name, str):
            return False
        return not is_private(name) or self._registry.config.expose_private

    def __getitem__(self, key: str) -> Any:
        if not self._visible(key):
            raise KeyError(key)
        try:
            raw = getattr(self._value, key)
        except AttributeError as exc:
            raise KeyError(key) from exc
        return self._registry.adapt(raw)

    def __iter__(self) -> Iterator[str]:
        expose_private = self._registry.config.expose_private
        for name in dir(self._value):
            if is_public(name) or (expose_private and is_private(name)):
                yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def is_empty(self) -> bool:
        if isinstance(self._value, Sized):
            return len(self._value) == 0
        return False

    def unwrap(self) -> Any:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class MethodModel(ObjectModel):
    """Callable wrapper for functions and bound methods."""

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        raw_args = [unwrap_model(arg) for arg in args]
        raw_kwargs = {name: unwrap_model(value) for name, value in kwargs.items()}
        return self._registry.adapt(self._value(*raw_args, **raw_kwargs))

    def is_empty(self) -> bool:
        return False


class SequenceModel(TemplateModel, Sequence):
    """Sequence view adapting items on access. Sets are frozen into a tuple."""

    def __init__(self, value: Any, registry: "AdapterRegistry") -> None:
        self._value = value
        self._items = value if isinstance(value, Sequence) else tuple(value)
        self._registry = registry

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return SequenceModel(self._items[index], self._registry)
        return self._registry.adapt(self._items[index])

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return unwrap_model(item) in self._items

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def unwrap(self) -> Any:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"SequenceModel({self._value!r})"


class MappingModel(TemplateModel, Mapping):
    """Mapping view adapting values on access."""

    def __init__(self, value: Mapping, registry: "AdapterRegistry") -> None:
        self._value = value
        self._registry = registry

    def __getitem__(self, key: Any) -> Any:
        return self._registry.adapt(self._value[key])

    def __iter__(self) -> Iterator[Any]:
        return iter(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def __contains__(self, key: object) -> bool:
        return key in self._value

    def is_empty(self) -> bool:
        return len(self._value) == 0

    def unwrap(self) -> Mapping:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"MappingModel({self._value!r})"
