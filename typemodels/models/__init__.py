"""Models exposing adapted values to templates."""

from .base import (
    AttributeView,
    MappingModel,
    MethodModel,
    ObjectModel,
    SequenceModel,
    TemplateModel,
    unwrap_model,
)
from .type_model import ATTRIBUTE_NAMES, TypeModel

__all__ = [
    "ATTRIBUTE_NAMES",
    "AttributeView",
    "MappingModel",
    "MethodModel",
    "ObjectModel",
    "SequenceModel",
    "TemplateModel",
    "TypeModel",
    "unwrap_model",
]
