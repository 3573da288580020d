"""Unified error model for typemodels."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ModelError(Exception):
    """Base class for all errors raised while building or resolving models."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        if self.code:
            meta_parts.append(self.code)
        if self.context:
            meta_parts.extend(f"{key}={value!r}" for key, value in self.context.items())
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class ConfigurationError(ModelError):
    """Raised when registry or render setup names something that cannot be loaded."""

    code = "MODEL_CONFIG"

    def __init__(
        self,
        message: str,
        *,
        type_name: Optional[str] = None,
        cause: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", None) or {}
        if type_name is not None:
            context.setdefault("type_name", type_name)
        super().__init__(message, context=context, **kwargs)
        self.type_name = type_name
        self.cause = cause


class ResolutionError(ModelError):
    """Raised when a type name cannot be resolved into a model."""

    code = "MODEL_RESOLUTION"

    def __init__(
        self,
        name: Any,
        *,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        if message is None:
            message = f"Cannot resolve type '{name}'"
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message, **kwargs)
        self.name = name
        self.cause = cause


class AdaptationError(ModelError):
    """Raised when an adapter is handed a value it was not built for."""

    code = "MODEL_ADAPTATION"

    def __init__(
        self,
        message: str,
        *,
        value: Any = None,
        adapter: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.value = value
        self.adapter = adapter


__all__ = [
    "ModelError",
    "ConfigurationError",
    "ResolutionError",
    "AdaptationError",
]
