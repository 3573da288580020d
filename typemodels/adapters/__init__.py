"""Adapters turning runtime values into template models."""

from .base import SCALAR_TYPES, Adapter, BaseAdapter, DefaultAdapter
from .registry import DEFAULT_TYPE_METACLASSES, AdapterRegistry
from .type_adapter import TypeDescriptorAdapter

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "BaseAdapter",
    "DEFAULT_TYPE_METACLASSES",
    "DefaultAdapter",
    "SCALAR_TYPES",
    "TypeDescriptorAdapter",
]
