"""Arbitrary-precision signed decimal numbers.

A DecimalValue keeps a sign, a most-significant-first list of decimal
digits and a power of ten: the value is ``sign * digits * 10**exponent``.
Arithmetic is done digit by digit on those lists:

  add / sub   align the exponents, then carry / borrow
  mul         grade-school digit convolution
  div         long division to one digit past the working precision

and every result is rounded half away from zero to
``settings.working_precision`` significant digits, which is the display
precision plus a few guard digits.  Rounding to ``settings.precision``
happens only when the value is rendered, so chains of operations such as
exponentiation do not pile up rounding errors in the shown digits.

Canonical form after arithmetic
-------------------------------
- no leading zero digits, except the single ``[0]`` for zero
- no trailing zero digits; they move into the exponent, so 10**20 is
  stored as ``[1]`` with exponent 20
- zero is positive with exponent 0

Digit entry is looser: "1.50" keeps its trailing zero (digits 150,
exponent -2) until the value takes part in a computation.
"""

from __future__ import annotations

from typing import ClassVar

from bounds import INT64
from numeric import NumericValue, Operation
from settings import DEFAULT_SETTINGS, EngineSettings

Digits = list[int]

SIGN_CHARS = frozenset("sS")
POINT = "."
_VALID_CHARS = frozenset("0123456789") | SIGN_CHARS | {POINT}
_INT64_DIGITS = len(str(INT64.hi))


# ---------------------------------------------------------------------------
# Digit-list primitives (magnitudes only, most significant digit first)
# ---------------------------------------------------------------------------

def _strip_leading(digits: Digits) -> Digits:
    start = 0
    while start < len(digits) - 1 and digits[start] == 0:
        start += 1
    return digits[start:]


def _split_trailing_zeros(digits: Digits) -> tuple[Digits, int]:
    """Return (digits without trailing zeros, number of zeros removed)."""
    end = len(digits)
    while end > 1 and digits[end - 1] == 0:
        end -= 1
    return digits[:end], len(digits) - end


def _pad_left(digits: Digits, width: int) -> Digits:
    return [0] * (width - len(digits)) + digits


def _join(digits: Digits) -> str:
    return "".join(map(str, digits))


def _compare_magnitude(x: Digits, y: Digits) -> int:
    x = _strip_leading(x)
    y = _strip_leading(y)
    if len(x) != len(y):
        return 1 if len(x) > len(y) else -1
    return (x > y) - (x < y)


def _add_magnitude(x: Digits, y: Digits) -> Digits:
    width = max(len(x), len(y))
    x = _pad_left(x, width)
    y = _pad_left(y, width)

    result = []
    carry = 0
    for dx, dy in zip(reversed(x), reversed(y)):
        carry, digit = divmod(dx + dy + carry, 10)
        result.append(digit)
    if carry:
        result.append(carry)
    result.reverse()
    return result


def _subtract_magnitude(x: Digits, y: Digits) -> Digits:
    """x - y for magnitudes where x >= y."""
    width = max(len(x), len(y))
    x = _pad_left(x, width)
    y = _pad_left(y, width)

    result = []
    borrow = 0
    for dx, dy in zip(reversed(x), reversed(y)):
        digit = dx - dy - borrow
        if digit < 0:
            digit += 10
            borrow = 1
        else:
            borrow = 0
        result.append(digit)
    result.reverse()
    return _strip_leading(result)


def _multiply_magnitude(x: Digits, y: Digits) -> Digits:
    product = [0] * (len(x) + len(y))
    for i in range(len(x) - 1, -1, -1):
        if x[i] == 0:
            continue
        for j in range(len(y) - 1, -1, -1):
            product[i + j + 1] += x[i] * y[j]

    carry = 0
    for k in range(len(product) - 1, -1, -1):
        carry, product[k] = divmod(product[k] + carry, 10)
    return _strip_leading(product)


def _divide_magnitude(dividend: Digits, divisor: Digits, wanted: int) -> tuple[Digits, int]:
    """Long division of two magnitudes.

    Returns ``(quotient, exponent)`` where ``quotient * 10**exponent`` is
    dividend / divisor truncated after ``wanted`` significant digits (or
    exact, if the division terminates first).
    """
    quotient: Digits = []
    remainder: Digits = [0]
    significant = 0
    exponent = 0
    position = 0

    while True:
        if position < len(dividend):
            remainder = _strip_leading(remainder + [dividend[position]])
            position += 1
        elif remainder == [0] or significant >= wanted:
            break
        else:
            remainder = _strip_leading(remainder + [0])
            exponent -= 1

        digit = 0
        while _compare_magnitude(remainder, divisor) >= 0:
            remainder = _subtract_magnitude(remainder, divisor)
            digit += 1
        quotient.append(digit)
        if significant or digit:
            significant += 1

    return quotient, exponent


def _round_half_up(digits: Digits, precision: int) -> tuple[Digits, int]:
    """Round a stripped coefficient to ``precision`` digits.

    Returns the kept digits and how many low-order digits were dropped.
    A carry out of the top digit yields ``precision + 1`` digits ending
    in zero.
    """
    dropped = len(digits) - precision
    if dropped <= 0:
        return digits, 0
    kept = digits[:precision]
    if digits[precision] >= 5:
        kept = _add_magnitude(kept, [1])
    return kept, dropped



# ---------------------------------------------------------------------------
# DecimalValue
# ---------------------------------------------------------------------------

class DecimalValue(NumericValue):
    """A signed base-10 number with a fixed number of significant digits."""

    base_name: ClassVar[str] = "DEC"
    operations: ClassVar[frozenset[Operation]] = frozenset({
        Operation.ADD,
        Operation.SUB,
        Operation.MUL,
        Operation.DIV,
        Operation.EXP,
    })

    def __init__(self, settings: EngineSettings = DEFAULT_SETTINGS) -> None:
        self.settings = settings
        self._sign = 1
        self._digits: Digits = [0]
        self._exponent = 0
        # A decimal point has been entered (only meaningful during entry).
        self._point = False

    # -- construction -------------------------------------------------------

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> DecimalValue:
        return cls(settings)

    @classmethod
    def from_int(cls, value: int, settings: EngineSettings = DEFAULT_SETTINGS) -> DecimalValue:
        result = cls(settings)
        result.import_int(value)
        return result

    @classmethod
    def from_str(cls, text: str, settings: EngineSettings = DEFAULT_SETTINGS) -> DecimalValue:
        """Build a value by entering ``text`` one character at a time.

        A leading ``-`` toggles the sign once the digits are in, so
        ``"-2.5"`` and ``"2.5s"`` are the same value.
        """
        result = cls(settings)
        negative = text.startswith("-")
        for c in text[1:] if negative else text:
            if not result.add_char(c):
                raise ValueError(f"invalid decimal character {c!r} in {text!r}")
        if negative:
            result.negate()
        return result

    # -- inspection ---------------------------------------------------------

    @property
    def precision(self) -> int:
        return self.settings.precision

    @property
    def working_precision(self) -> int:
        return self.settings.working_precision

    @property
    def sign(self) -> int:
        return self._sign

    @property
    def digits(self) -> tuple[int, ...]:
        return tuple(self._digits)

    @property
    def exponent(self) -> int:
        return self._exponent

    @property
    def scale(self) -> int:
        """Number of digits right of the decimal point."""
        return max(0, -self._exponent)

    def is_zero(self) -> bool:
        return self._digits == [0]

    def is_negative(self) -> bool:
        return self._sign < 0

    # -- internal state helpers ---------------------------------------------

    def _set(self, sign: int, digits: Digits, exponent: int) -> None:
        """Store ``sign * digits * 10**exponent`` in canonical form."""
        digits = _strip_leading(digits)
        digits, dropped = _round_half_up(digits, self.working_precision)
        digits, zeros = _split_trailing_zeros(digits)
        exponent += dropped + zeros

        if digits == [0]:
            self._sign, self._digits, self._exponent = 1, [0], 0
        else:
            self._sign, self._digits, self._exponent = sign, digits, exponent
        self._point = self._exponent < 0

    def _coefficient(self) -> tuple[Digits, int]:
        """Digits without trailing zeros and the power of ten they carry."""
        digits, zeros = _split_trailing_zeros(self._digits)
        return digits, zeros + self._exponent

    def _adjusted(self) -> int:
        """Number of digit positions left of the decimal point."""
        return len(self._digits) + self._exponent

    # -- entry --------------------------------------------------------------

    @classmethod
    def is_valid_char(cls, c: str) -> bool:
        return c in _VALID_CHARS

    def add_char(self, c: str) -> bool:
        if not self.is_valid_char(c):
            return False

        if c in SIGN_CHARS:
            self.negate()
        elif c == POINT:
            self._point = True
        elif self._entered_digits() < self.precision:
            if self._exponent > 0:
                self._digits += [0] * self._exponent
                self._exponent = 0
            if self._point:
                self._exponent -= 1
            self._digits = _strip_leading(self._digits + [int(c)])
        return True

    def _entered_digits(self) -> int:
        return 0 if self.is_zero() else len(self._digits) + max(self._exponent, 0)

    def negate(self) -> None:
        if not self.is_zero():
            self._sign = -self._sign

    # -- arithmetic (in place on self) --------------------------------------

    def add(self, other: DecimalValue) -> None:
        self._add_signed(other, other._sign)

    def sub(self, other: DecimalValue) -> None:
        self._add_signed(other, -other._sign)

    def _add_signed(self, other: DecimalValue, other_sign: int) -> None:
        if other.is_zero():
            self._set(self._sign, self._digits, self._exponent)
            return
        if self.is_zero():
            self._set(other_sign, other._digits, other._exponent)
            return

        # An operand entirely below the rounding position of the other
        # cannot change the rounded sum.
        gap = self._adjusted() - other._adjusted()
        reach = self.working_precision + 2
        if gap > reach:
            self._set(self._sign, self._digits, self._exponent)
            return
        if -gap > reach:
            self._set(other_sign, other._digits, other._exponent)
            return

        exponent = min(self._exponent, other._exponent)
        x = self._digits + [0] * (self._exponent - exponent)
        y = other._digits + [0] * (other._exponent - exponent)
        if self._sign == other_sign:
            self._set(self._sign, _add_magnitude(x, y), exponent)
        elif _compare_magnitude(x, y) >= 0:
            self._set(self._sign, _subtract_magnitude(x, y), exponent)
        else:
            self._set(other_sign, _subtract_magnitude(y, x), exponent)

    def mul(self, other: DecimalValue) -> None:
        x, x_exponent = self._coefficient()
        y, y_exponent = other._coefficient()
        self._set(
            self._sign * other._sign,
            _multiply_magnitude(x, y),
            x_exponent + y_exponent,
        )

    def div(self, other: DecimalValue) -> None:
        if other.is_zero():
            raise ZeroDivisionError("decimal division by zero")

        x, x_exponent = self._coefficient()
        y, y_exponent = other._coefficient()
        quotient, q_exponent = _divide_magnitude(x, y, self.working_precision + 1)
        self._set(
            self._sign * other._sign,
            quotient,
            q_exponent + x_exponent - y_exponent,
        )

    def exp(self, other: DecimalValue) -> None:
        from exponent import ExponentJob

        self._assign(ExponentJob(self, other, settings=self.settings).calc())

    # -- comparison and copying ---------------------------------------------

    def compare(self, other: DecimalValue) -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""
        if self._sign != other._sign:
            return self._sign
        if self.is_zero() or other.is_zero():
            if self.is_zero() and other.is_zero():
                return 0
            return -1 if self.is_zero() else 1

        if self._adjusted() != other._adjusted():
            magnitude = 1 if self._adjusted() > other._adjusted() else -1
        else:
            width = max(len(self._digits), len(other._digits))
            x = self._digits + [0] * (width - len(self._digits))
            y = other._digits + [0] * (width - len(other._digits))
            magnitude = (x > y) - (x < y)
        return magnitude * self._sign

    def copy(self, dst: DecimalValue | None = None) -> DecimalValue:
        """Copy this value into ``dst`` (a new value if omitted) and return it."""
        if dst is None:
            dst = DecimalValue(self.settings)
        dst._sign = self._sign
        dst._digits = list(self._digits)
        dst._exponent = self._exponent
        dst._point = self._point
        return dst

    def _assign(self, other: DecimalValue) -> None:
        other.copy(self)

    # -- integer bridge -----------------------------------------------------

    def import_int(self, value: int) -> None:
        self._set(1 if value >= 0 else -1, [int(d) for d in str(abs(value))], 0)

    def export_int(self) -> int:
        """Integer part, truncated toward zero.

        Values outside the signed 64-bit range export as 0 (lossy
        narrowing, not an error).
        """
        whole = self._adjusted()
        if self.is_zero() or whole <= 0 or whole > _INT64_DIGITS:
            return 0
        if self._exponent >= 0:
            magnitude = int(_join(self._digits)) * 10**self._exponent
        else:
            magnitude = int(_join(self._digits[:whole]))
        return INT64.apply(self._sign * magnitude)

    # -- rendering ----------------------------------------------------------

    def _rounded(self) -> tuple[Digits, int]:
        """Digits and exponent rounded to the display precision."""
        if len(self._digits) <= self.precision:
            return self._digits, self._exponent
        digits, dropped = _round_half_up(self._digits, self.precision)
        digits, zeros = _split_trailing_zeros(digits)
        return digits, self._exponent + dropped + zeros

    def to_str(self) -> str:
        if self.is_zero():
            return "0." + "0" * self.scale if self.scale else "0"

        sign = "-" if self._sign < 0 else ""
        digits, exponent = self._rounded()
        whole = len(digits) + exponent

        # Too many integer digits, or the first significant digit is too
        # far right of the point, for fixed notation.
        if whole > self.precision or 1 - whole > self.precision:
            return sign + _scientific(digits, exponent)

        if exponent >= 0:
            integer, fraction = digits + [0] * exponent, []
        elif whole > 0:
            integer, fraction = digits[:whole], digits[whole:]
        else:
            integer, fraction = [0], [0] * -whole + digits

        text = f"{int(_join(integer)):,}"
        if fraction:
            text += POINT + _join(fraction)
        return sign + text

    # -- Python operators (return new values) -------------------------------

    def __add__(self, other: DecimalValue) -> DecimalValue:
        result = self.copy()
        result.add(other)
        return result

    def __sub__(self, other: DecimalValue) -> DecimalValue:
        result = self.copy()
        result.sub(other)
        return result

    def __mul__(self, other: DecimalValue) -> DecimalValue:
        result = self.copy()
        result.mul(other)
        return result

    def __truediv__(self, other: DecimalValue) -> DecimalValue:
        result = self.copy()
        result.div(other)
        return result

    def __neg__(self) -> DecimalValue:
        result = self.copy()
        result.negate()
        return result

    def __abs__(self) -> DecimalValue:
        return -self if self.is_negative() else self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: DecimalValue) -> bool:
        return self.compare(other) < 0

    def __repr__(self) -> str:
        sign = "-" if self._sign < 0 else "+"
        return f"DecimalValue({sign}{_join(self._digits)}e{self._exponent})"


def _scientific(digits: Digits, exponent: int) -> str:
    coefficient, zeros = _split_trailing_zeros(digits)
    power = len(coefficient) - 1 + zeros + exponent
    mantissa = str(coefficient[0])
    if len(coefficient) > 1:
        mantissa += POINT + _join(coefficient[1:])
    return f"{mantissa}e{power:+03d}"
