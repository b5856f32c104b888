"""Operand-level exceptions.

Arithmetic faults use the builtin hierarchy instead: ZeroDivisionError
for division by zero and exponent.ExponentError (an ArithmeticError) for
exponentiations without a result.
"""

from __future__ import annotations


class OperandError(Exception):
    """Base class for refused operand operations."""


class UnsupportedOperationError(OperandError):
    """Raised when an operation is unknown or absent for a number base."""

    def __init__(self, operation: str, base_name: str) -> None:
        self.operation = operation
        self.base_name = base_name
        super().__init__(f"{base_name} does not support '{operation}'")


class BaseMismatchError(OperandError):
    """Raised when a binary operation mixes operands in different bases."""

    def __init__(self, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(f"operands are in different bases ({left} and {right})")


class UnknownBaseError(OperandError):
    """Raised when a number base has no registered implementation."""

    def __init__(self, base: object) -> None:
        self.base = base
        super().__init__(f"no implementation registered for base {base!r}")
