"""Introspection of Python classes into field, method and annotation descriptors.

The template models never call :mod:`inspect` directly; they consume the
output of a :class:`TypeIntrospector`. :class:`PythonTypeIntrospector` is the
implementation used unless a caller supplies another one.

Visibility follows Python convention: a name is private when it starts with
an underscore and is not a dunder (``__name__``).
"""

from __future__ import annotations

import functools
import inspect
import types
import typing
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

# Class attribute holding the annotations applied with ``@annotate``.
ANNOTATIONS_ATTR = "__typemodels_annotations__"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def qualified_name(obj_type: type) -> str:
    """Return ``module.QualifiedName`` for a class."""
    module = getattr(obj_type, "__module__", None) or "builtins"
    qualname = getattr(obj_type, "__qualname__", None) or obj_type.__name__
    return f"{module}.{qualname}"


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_private(name: str) -> bool:
    return name.startswith("_") and not is_dunder(name)


def is_public(name: str) -> bool:
    return not name.startswith("_")


def annotate(*annotations: Any) -> Callable[[type], type]:
    """Class decorator attaching annotation objects to a class.

    Annotations are plain objects. A base-class annotation is also reported
    for subclasses when its own class declares ``inherited = True``.

    >>> @annotate(Table("widgets"))
    ... class Widget: ...
    """

    def decorator(cls: type) -> type:
        existing = tuple(cls.__dict__.get(ANNOTATIONS_ATTR, ()))
        setattr(cls, ANNOTATIONS_ATTR, existing + tuple(annotations))
        return cls

    return decorator


@dataclass(frozen=True)
class FieldDescriptor:
    """A data member of a class."""

    name: str
    declaring_type: type
    type_hint: Any = None
    default: Any = MISSING
    kind: str = "attribute"

    @property
    def is_public(self) -> bool:
        return is_public(self.name)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def __str__(self) -> str:
        return f"{qualified_name(self.declaring_type)}.{self.name}"


@dataclass(frozen=True)
class MethodDescriptor:
    """A routine declared on a class."""

    name: str
    declaring_type: type
    function: Any
    kind: str = "instance"
    is_overload: bool = False
    signature: Optional[inspect.Signature] = field(default=None, compare=False)

    @property
    def is_public(self) -> bool:
        return is_public(self.name)

    @property
    def parameters(self) -> List[str]:
        if self.signature is None:
            return []
        names = list(self.signature.parameters)
        if self.kind in ("instance", "class") and names:
            names = names[1:]
        return names

    @property
    def return_annotation(self) -> Any:
        if self.signature is None or self.signature.return_annotation is inspect.Signature.empty:
            return None
        return self.signature.return_annotation

    def __str__(self) -> str:
        signature = str(self.signature) if self.signature is not None else "(...)"
        return f"{qualified_name(self.declaring_type)}.{self.name}{signature}"


@runtime_checkable
class TypeIntrospector(Protocol):
    """Supplies the declared surface of a class."""

    def annotations(self, t: type) -> Sequence[Any]:  # pragma: no cover - protocol stub
        ...

    def declared_fields(self, t: type) -> Sequence[FieldDescriptor]:  # pragma: no cover
        ...

    def fields(self, t: type) -> Sequence[FieldDescriptor]:  # pragma: no cover
        ...

    def declared_methods(self, t: type) -> Sequence[MethodDescriptor]:  # pragma: no cover
        ...

    def methods(self, t: type) -> Sequence[MethodDescriptor]:  # pragma: no cover
        ...


def _safe_signature(function: Any) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(function)
    except (TypeError, ValueError):
        # Some builtins expose no signature metadata.
        return None


_ROUTINE_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.MethodWrapperType,
)


def _routine_parts(value: Any) -> Optional[Tuple[Any, str]]:
    if isinstance(value, staticmethod):
        return value.__func__, "static"
    if isinstance(value, classmethod):
        return value.__func__, "class"
    if isinstance(value, types.ClassMethodDescriptorType):
        return value, "class"
    if isinstance(value, _ROUTINE_TYPES):
        return value, "instance"
    return None


def _field_kind(value: Any) -> str:
    if isinstance(value, (property, functools.cached_property)):
        return "property"
    if inspect.isdatadescriptor(value) or inspect.ismemberdescriptor(value) or inspect.isgetsetdescriptor(value):
        return "descriptor"
    return "attribute"


class PythonTypeIntrospector:
    """Introspect classes with :mod:`inspect` and :func:`typing.get_overloads`."""

    def annotations(self, t: type) -> List[Any]:
        inherited: List[Any] = []
        for base in reversed(t.__mro__[1:]):
            for annotation in base.__dict__.get(ANNOTATIONS_ATTR, ()):
                if getattr(type(annotation), "inherited", False) is True:
                    inherited.append(annotation)
        return inherited + list(t.__dict__.get(ANNOTATIONS_ATTR, ()))

    def declared_fields(self, t: type) -> List[FieldDescriptor]:
        own = t.__dict__
        hints = inspect.get_annotations(t)
        result: List[FieldDescriptor] = []
        seen = set()
        for name, hint in hints.items():
            if is_dunder(name):
                continue
            value = own.get(name, MISSING)
            kind = "attribute" if value is MISSING else _field_kind(value)
            default = value if kind == "attribute" else MISSING
            result.append(FieldDescriptor(name, t, hint, default, kind))
            seen.add(name)
        for name, value in own.items():
            if name in seen or is_dunder(name) or name == ANNOTATIONS_ATTR:
                continue
            if isinstance(value, type) or _routine_parts(value) is not None:
                continue
            kind = _field_kind(value)
            default = value if kind == "attribute" else MISSING
            result.append(FieldDescriptor(name, t, None, default, kind))
        return result

    def fields(self, t: type) -> List[FieldDescriptor]:
        visible = {}
        for klass in reversed(t.__mro__):
            for name, value in klass.__dict__.items():
                # A routine or nested class hides a base field of the same name.
                if isinstance(value, type) or _routine_parts(value) is not None:
                    visible.pop(name, None)
            for descriptor in self.declared_fields(klass):
                if descriptor.is_public:
                    visible[descriptor.name] = descriptor
        return list(visible.values())

    def declared_methods(self, t: type) -> List[MethodDescriptor]:
        result: List[MethodDescriptor] = []
        for name, value in t.__dict__.items():
            parts = _routine_parts(value)
            if parts is None:
                continue
            function, kind = parts
            result.extend(self._expand(name, t, function, kind))
        return result

    def methods(self, t: type) -> List[MethodDescriptor]:
        effective = {}
        for klass in reversed(t.__mro__):
            for name, value in klass.__dict__.items():
                if not is_public(name):
                    continue
                parts = _routine_parts(value)
                if parts is None:
                    effective.pop(name, None)
                    continue
                effective[name] = (klass, parts)
        result: List[MethodDescriptor] = []
        for name, (klass, (function, kind)) in effective.items():
            result.extend(self._expand(name, klass, function, kind))
        return result

    def _expand(self, name: str, owner: type, function: Any, kind: str) -> List[MethodDescriptor]:
        """Overload stubs in registration order, then the implementation."""
        expanded = [
            MethodDescriptor(name, owner, stub, kind, True, _safe_signature(stub))
            for stub in _overloads_of(function)
        ]
        expanded.append(MethodDescriptor(name, owner, function, kind, False, _safe_signature(function)))
        return expanded


def _overloads_of(function: Any) -> Sequence[Any]:
    if not inspect.isfunction(function):
        return ()
    return typing.get_overloads(function)


__all__ = [
    "ANNOTATIONS_ATTR",
    "MISSING",
    "FieldDescriptor",
    "MethodDescriptor",
    "PythonTypeIntrospector",
    "TypeIntrospector",
    "annotate",
    "is_dunder",
    "is_private",
    "is_public",
    "qualified_name",
]
