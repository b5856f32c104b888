"""The base-agnostic operand.

An Operand owns one value per registered base and routes every
operation to the value of its active base:

    a = Operand(registry)
    for c in "12.5":
        a.feed(c)
    b = Operand(registry)
    b.feed("4")
    a.apply("mul", b)        # True; a renders "50"

Rules
-----
- Both operands of a binary operation must be in the same base.  A
  mismatch is refused before anything is touched.
- Once an operation has been dispatched, successful or not, neither
  operand accepts further digit entry.
- Switching base carries the value across through a signed 64-bit
  integer, so fractions and out-of-range magnitudes are lost.
"""

from __future__ import annotations

import logging

from errors import BaseMismatchError, OperandError, UnknownBaseError, UnsupportedOperationError
from numeric import NumberBase, NumericValue, Operation
from registry import OperationRegistry

logger = logging.getLogger(__name__)


class Operand:
    """One calculator operand, active in exactly one base at a time."""

    def __init__(self, registry: OperationRegistry, base: NumberBase = NumberBase.DECIMAL) -> None:
        self.registry = registry
        self._values: dict[NumberBase, NumericValue] = {
            b: registry.create(b) for b in registry.bases
        }
        if base not in self._values:
            raise UnknownBaseError(base)
        self._base = NumberBase(base)
        self._entry_allowed = True

    @property
    def base(self) -> NumberBase:
        return self._base

    @property
    def entry_allowed(self) -> bool:
        return self._entry_allowed

    @property
    def value(self) -> NumericValue:
        """The value of the active base."""
        return self._values[self._base]

    # -- base switching -----------------------------------------------------

    def set_base(self, base: NumberBase) -> None:
        if base not in self._values:
            raise UnknownBaseError(base)
        base = NumberBase(base)
        if base == self._base:
            return

        bridged = self.value.export_int()
        self._values[base].import_int(bridged)
        logger.debug("switched %s -> %s via %d", self._base.name, base.name, bridged)
        self._base = base

    # -- entry --------------------------------------------------------------

    def feed(self, c: str) -> bool:
        """Enter one character.  False when entry is closed or ``c`` is invalid."""
        if not self._entry_allowed:
            return False
        return self.value.add_char(c)

    # -- operations ---------------------------------------------------------

    def binary(self, op: Operation | str, other: Operand) -> None:
        """Apply ``self = self <op> other`` in the active base."""
        op = Operation.parse(op)
        if op.arity != 2:
            raise UnsupportedOperationError(op.value, "binary dispatch")
        if other._base != self._base:
            raise BaseMismatchError(self._base, other._base)
        try:
            self.value.apply(op, other.value)
        finally:
            self._entry_allowed = False
            other._entry_allowed = False

    def unary(self, op: Operation | str) -> None:
        op = Operation.parse(op)
        if op.arity != 1:
            raise UnsupportedOperationError(op.value, "unary dispatch")
        try:
            self.value.apply(op)
        finally:
            self._entry_allowed = False

    def apply(self, op: Operation | str, other: Operand | None = None) -> bool:
        """Status form of ``binary``/``unary``: True on success, False on any refusal."""
        try:
            if other is None:
                self.unary(op)
            else:
                self.binary(op, other)
        except (OperandError, ArithmeticError) as e:
            logger.debug("%s refused: %s", op, e)
            return False
        return True

    # -- rendering ----------------------------------------------------------

    def to_str(self) -> str:
        return self.value.to_str()

    def __str__(self) -> str:
        return self.to_str()

    def __repr__(self) -> str:
        return f"Operand({self._base.name}, {self.to_str()!r})"
