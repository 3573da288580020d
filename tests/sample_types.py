"""Classes inspected by the test-suite.

Tests resolve these by their qualified names (``sample_types.Widget``), so
the module is importable from the ``tests`` directory.
"""

from __future__ import annotations

import abc
import enum
from decimal import Decimal
from functools import cached_property
from typing import overload

from typemodels import BaseAdapter, annotate


class Marker:
    """Annotation reported only on the class it is applied to."""

    def __init__(self, label):
        self.label = label


class Table:
    """Annotation inherited by subclasses."""

    inherited = True

    def __init__(self, name):
        self.name = name


@annotate(Table("widgets"), Marker("primary"))
class Widget:
    a: int = 1
    b: str = "b"

    def size(self) -> int:
        return self.a

    @staticmethod
    def build() -> "Widget":
        return Widget()

    @classmethod
    def named(cls, name: str) -> str:
        return f"{cls.__name__}:{name}"

    def _hidden(self):
        return "hidden"


class Gadget(Widget):
    c: float = 0.5
    _secret = "s"

    def size(self) -> int:
        return 2

    def extra(self, amount: int, *, scale: float = 1.0) -> float:
        return amount * scale


@annotate(Table("tools"))
class Tool(Widget):
    pass


class Tally:
    size = 1
    kind = "tally"
    total: int = 0


class Ledger(Tally):
    class kind:
        pass

    def size(self) -> int:
        return 3


class Basket:
    items: list = []
    label: str = "basket"


class Overloaded:
    @overload
    def foo(self, value: int) -> int: ...

    @overload
    def foo(self, value: str) -> str: ...

    def foo(self, value):
        return value


class Point:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y

    @property
    def norm(self) -> float:
        return (self.x ** 2 + self.y ** 2) ** 0.5


class Report:
    title = "quarterly"
    _draft = True

    @cached_property
    def pages(self) -> int:
        return 12


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class Shape(abc.ABC):
    sides: int = 0

    @abc.abstractmethod
    def area(self) -> float: ...


class Outer:
    class Inner:
        depth = 2


class Empty:
    pass


class Meta(type):
    pass


class WithMeta(metaclass=Meta):
    level = 3


class DecimalText(BaseAdapter):
    """Renders decimals in fixed-point notation."""

    accepts = (Decimal,)

    def _produce_impl(self, value, registry):
        return format(value, "f")


NOT_A_TYPE = 42
