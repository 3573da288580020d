"""Exact-type registry of adapters with a single generic fallback."""

from __future__ import annotations

import abc
import enum
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from typemodels.adapters.base import Adapter, DefaultAdapter
from typemodels.adapters.type_adapter import TypeDescriptorAdapter
from typemodels.config import ModelingConfig
from typemodels.errors import ConfigurationError
from typemodels.introspection import qualified_name
from typemodels.loader import ImportTypeLoader, TypeLoader, TypeLoadError

logger = logging.getLogger(__name__)

# Metaclasses associated with TypeDescriptorAdapter unless the caller chose otherwise.
DEFAULT_TYPE_METACLASSES: Tuple[type, ...] = (type, abc.ABCMeta, enum.EnumType)

AdapterKey = Union[type, str]
AdapterAssociations = Union[Mapping, Iterable[Tuple[AdapterKey, Any]]]


class AdapterRegistry:
    """Resolve any value to a template model.

    The registry holds an immutable map from exact runtime type to adapter,
    fixed at construction, plus one fallback adapter. Lookup uses
    ``type(value)`` only: a subclass of a registered type does *not* inherit
    its adapter and goes to the fallback. The same rule applies to
    metaclasses, so classes built by a custom metaclass need their own
    association.

    Args:
        adapters: Associations of type objects or dotted type names to
            adapters. Names are loaded immediately with ``loader``.
        loader: Type loader for names; defaults to :class:`ImportTypeLoader`.
        fallback: Adapter for unregistered types; defaults to
            :class:`DefaultAdapter`.
        config: :class:`ModelingConfig`; its ``adapters`` table is loaded
            first and loses to explicit ``adapters`` entries.

    Raises:
        ConfigurationError: An association names a type or adapter class
            that cannot be loaded, or an adapter lacks ``produce``.
    """

    def __init__(
        self,
        adapters: Optional[AdapterAssociations] = None,
        *,
        loader: Optional[TypeLoader] = None,
        fallback: Optional[Adapter] = None,
        config: Optional[ModelingConfig] = None,
    ) -> None:
        self._config = config if config is not None else ModelingConfig()
        self._loader = loader if loader is not None else ImportTypeLoader()
        self._fallback = fallback if fallback is not None else DefaultAdapter()
        _check_adapter("<fallback>", self._fallback)

        resolved: Dict[type, Any] = {}
        for type_name, adapter_name in self._config.adapters.items():
            resolved[self._load_key(type_name)] = self._instantiate(type_name, adapter_name)

        if adapters is not None:
            items = adapters.items() if isinstance(adapters, Mapping) else adapters
            for key, adapter in items:
                _check_adapter(key, adapter)
                resolved[self._load_key(key)] = adapter

        if self._config.include_default_adapters:
            type_adapter = TypeDescriptorAdapter()
            for metaclass in DEFAULT_TYPE_METACLASSES:
                resolved.setdefault(metaclass, type_adapter)

        self._adapters = MappingProxyType(resolved)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Using adapters: %s",
                {qualified_name(key): adapter for key, adapter in self._adapters.items()},
            )

    @classmethod
    def from_config(cls, config: ModelingConfig, *, loader: Optional[TypeLoader] = None) -> "AdapterRegistry":
        return cls(loader=loader, config=config)

    def _load_key(self, key: Any) -> type:
        if isinstance(key, type):
            return key
        if not isinstance(key, str):
            raise ConfigurationError(
                f"Adapter associations must be keyed by type or type name, got {type(key).__name__}",
                type_name=repr(key),
            )
        try:
            return self._loader.load(key)
        except TypeLoadError as exc:
            raise ConfigurationError(
                f"Cannot load type '{key}' named in adapter configuration",
                type_name=key,
                cause=exc,
            ) from exc

    def _instantiate(self, type_name: str, adapter_name: str) -> Any:
        adapter_class = self._load_key(adapter_name)
        try:
            adapter = adapter_class()
        except TypeError as exc:
            raise ConfigurationError(
                f"Cannot instantiate adapter {adapter_name} for '{type_name}': {exc}",
                type_name=type_name,
                cause=exc,
            ) from exc
        _check_adapter(type_name, adapter)
        return adapter

    def adapt(self, value: Any) -> Any:
        """Return the model for ``value``; the fallback handles unregistered types."""
        return self.adapter_for(type(value)).produce(value, self)

    def adapter_for(self, value_type: type) -> Any:
        return self._adapters.get(value_type, self._fallback)

    @property
    def adapters(self) -> Mapping:
        return self._adapters

    @property
    def fallback(self) -> Any:
        return self._fallback

    @property
    def config(self) -> ModelingConfig:
        return self._config

    @property
    def loader(self) -> TypeLoader:
        return self._loader

    def __repr__(self) -> str:
        names = sorted(qualified_name(key) for key in self._adapters)
        return f"AdapterRegistry(adapters={names!r}, fallback={self._fallback!r})"


def _check_adapter(key: Any, adapter: Any) -> None:
    if not callable(getattr(adapter, "produce", None)):
        raise ConfigurationError(
            f"Adapter for {key!r} has no callable produce(value, registry): {adapter!r}",
            type_name=key if isinstance(key, str) else None,
        )
