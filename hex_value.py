"""Fixed-width hexadecimal values.

A HexValue is a single unsigned 64-bit word.  Arithmetic wraps exactly
like C ``uint64_t``; there is no fractional part and no separate sign.
"Negative" entry (the ``S`` key) is the two's complement of the word.
"""

from __future__ import annotations

import string
from typing import ClassVar

from bounds import INT64, UINT64
from numeric import NumericValue, Operation

SIGN_CHARS = frozenset("sS")
_VALID_CHARS = frozenset(string.hexdigits) | SIGN_CHARS

# Entry stops shifting once any of bits 60-62 is set.  Bit 63 is not
# checked, so a 16th digit can still land on top of an 8..F lead nibble.
ENTRY_FULL_MASK = 0x7000_0000_0000_0000


class HexValue(NumericValue):
    """An unsigned 64-bit hexadecimal number."""

    base_name: ClassVar[str] = "HEX"
    operations: ClassVar[frozenset[Operation]] = frozenset({
        Operation.ADD,
        Operation.SUB,
        Operation.MUL,
        Operation.DIV,
    })

    def __init__(self, value: int = 0) -> None:
        self.value = UINT64.wrap(value)

    # -- entry --------------------------------------------------------------

    @classmethod
    def is_valid_char(cls, c: str) -> bool:
        return c in _VALID_CHARS

    def add_char(self, c: str) -> bool:
        if not self.is_valid_char(c):
            return False

        if c in SIGN_CHARS:
            self.negate()
        elif not self.value & ENTRY_FULL_MASK:
            self.value = UINT64.apply((self.value << 4) | int(c, 16))
        return True

    def negate(self) -> None:
        self.value = UINT64.apply(-self.value)

    # -- arithmetic (in place on self) --------------------------------------

    def add(self, other: HexValue) -> None:
        self.value = UINT64.apply(self.value + other.value)

    def sub(self, other: HexValue) -> None:
        self.value = UINT64.apply(self.value - other.value)

    def mul(self, other: HexValue) -> None:
        self.value = UINT64.apply(self.value * other.value)

    def div(self, other: HexValue) -> None:
        if other.value == 0:
            raise ZeroDivisionError("hex division by zero")
        self.value //= other.value

    # -- integer bridge -----------------------------------------------------

    def import_int(self, value: int) -> None:
        """Load a signed integer.  Hex has no negatives, so those load as 0."""
        self.value = UINT64.clamp(value)

    def export_int(self) -> int:
        """The word as a signed 64-bit integer; 0 when bit 63 is set."""
        return INT64.apply(self.value)

    # -- rendering ----------------------------------------------------------

    def to_str(self) -> str:
        return format(self.value, "X")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HexValue):
            return NotImplemented
        return self.value == other.value

    def __repr__(self) -> str:
        return f"HexValue(0x{self.value:016X})"
