"""The capability interface shared by every number base.

Each base variant (decimal, hex) subclasses NumericValue and lists the
operations it implements in ``operations``.  Dispatch goes through
``NumericValue.apply``; an operation the variant does not list is
reported as unsupported instead of being looked up.
"""

from __future__ import annotations

import keyword
from abc import ABC, abstractmethod
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, ClassVar

from errors import UnsupportedOperationError

if TYPE_CHECKING:
    from settings import EngineSettings


class NumberBase(IntEnum):
    DECIMAL = 10
    HEX = 16


class Operation(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    EXP = "exp"
    AND = "and"
    OR = "or"
    XOR = "xor"
    NOT = "not"

    @property
    def arity(self) -> int:
        return 1 if self is Operation.NOT else 2

    @property
    def method_name(self) -> str:
        """Name of the implementing method (``and`` -> ``and_``)."""
        return f"{self.value}_" if keyword.iskeyword(self.value) else self.value

    @classmethod
    def parse(cls, op: Operation | str) -> Operation:
        try:
            return cls(op)
        except ValueError:
            raise UnsupportedOperationError(str(op), "engine") from None


class NumericValue(ABC):
    """A mutable number in one base.  Binary operations update ``self``."""

    base_name: ClassVar[str]
    operations: ClassVar[frozenset[Operation]] = frozenset()

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> NumericValue:
        """Create a zero value configured by ``settings``."""
        return cls()

    @classmethod
    def supports(cls, op: Operation) -> bool:
        return op in cls.operations

    @classmethod
    @abstractmethod
    def is_valid_char(cls, c: str) -> bool:
        """Whether ``c`` is an entry character for this base."""

    @abstractmethod
    def add_char(self, c: str) -> bool:
        """Enter one character.  Returns False only for unrecognised input."""

    @abstractmethod
    def to_str(self) -> str:
        ...

    @abstractmethod
    def import_int(self, value: int) -> None:
        ...

    @abstractmethod
    def export_int(self) -> int:
        ...

    def apply(self, op: Operation, other: NumericValue | None = None) -> None:
        if not self.supports(op):
            raise UnsupportedOperationError(op.value, self.base_name)
        method = getattr(self, op.method_name)
        if op.arity == 1:
            method()
        else:
            method(other)

    def __str__(self) -> str:
        return self.to_str()
