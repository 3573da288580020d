"""Loading Python types from dotted names."""

from __future__ import annotations

import importlib
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class TypeLoadError(LookupError):
    """Raised when a dotted name does not name a loadable type."""

    def __init__(self, name: Any, reason: str) -> None:
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


@runtime_checkable
class TypeLoader(Protocol):
    """Anything that can turn a type name into a type object."""

    def load(self, name: str) -> type:  # pragma: no cover - protocol stub
        ...


def _split_name(name: Any) -> list:
    if not isinstance(name, str):
        raise TypeLoadError(name, "type names must be strings")
    parts = name.split(".")
    if not name or any(not part for part in parts):
        raise TypeLoadError(name, "not a valid dotted name")
    return parts


def _ensure_type(name: str, candidate: Any) -> type:
    if not isinstance(candidate, type):
        raise TypeLoadError(name, f"resolves to a {type(candidate).__name__}, not a type")
    return candidate


class ImportTypeLoader:
    """Load types by importing the longest importable module prefix of a name.

    ``"pkg.mod.Outer.Inner"`` first tries to import ``pkg.mod.Outer``, then
    ``pkg.mod`` and so on, and walks the remaining segments as attributes.
    A bare name (no dots) is looked up in :mod:`builtins`.

    Importing a module runs its top-level code. Any exception raised while
    importing, other than the module prefix simply not existing, is reported
    as a :class:`TypeLoadError` for the requested name.
    """

    def load(self, name: str) -> type:
        parts = _split_name(name)
        if len(parts) == 1:
            parts = ["builtins"] + parts

        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as exc:
                missing = exc.name or ""
                if missing and (module_name == missing or module_name.startswith(missing + ".")):
                    continue
                raise TypeLoadError(name, f"importing {module_name} failed: {exc}") from exc
            except Exception as exc:
                raise TypeLoadError(name, f"importing {module_name} failed: {exc}") from exc

            candidate: Any = module
            for attribute in parts[split:]:
                try:
                    candidate = getattr(candidate, attribute)
                except AttributeError as exc:
                    raise TypeLoadError(
                        name, f"{module_name} has no attribute path {'.'.join(parts[split:])}"
                    ) from exc
            logger.debug("Loaded %s from module %s", name, module_name)
            return _ensure_type(name, candidate)

        raise TypeLoadError(name, "no importable module prefix")

    def __repr__(self) -> str:
        return "ImportTypeLoader()"


class MappingTypeLoader:
    """Load types from an explicit ``name -> type`` table."""

    def __init__(self, types: Optional[Mapping[str, type]] = None) -> None:
        self._types: Dict[str, type] = dict(types or {})

    def load(self, name: str) -> type:
        _split_name(name)
        try:
            candidate = self._types[name]
        except KeyError as exc:
            raise TypeLoadError(name, "not registered with this loader") from exc
        return _ensure_type(name, candidate)

    def __repr__(self) -> str:
        return f"MappingTypeLoader({sorted(self._types)!r})"


def load_type(name: str) -> type:
    """Load ``name`` with a fresh :class:`ImportTypeLoader`."""
    return ImportTypeLoader().load(name)


__all__ = [
    "TypeLoadError",
    "TypeLoader",
    "ImportTypeLoader",
    "MappingTypeLoader",
    "load_type",
]
