"""Exponentiation of decimal values.

``base ** exponent`` for any DecimalValue exponent:

  1. exponent < 0       compute base ** -exponent, then take 1 / result
  2. exponent whole     exponentiation by squaring
  3. exponent fraction  write it as p / q in lowest terms, solve
                        r = base ** (1 / q) by Newton-Raphson, then
                        raise r to the p-th power by squaring

For example 5 ** 3.4 = (5 ** (1 / 5)) ** 17, because 3.4 = 34/10 = 17/5.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction

from decimal_value import DecimalValue
from settings import DEFAULT_SETTINGS, EngineSettings

logger = logging.getLogger(__name__)

class ExponentError(ArithmeticError):
    """Raised when an exponentiation has no decimal result."""

# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

def integer_power(base: DecimalValue, exponent: int) -> DecimalValue:
    """``base ** exponent`` for a non-negative integer exponent.

    ``x ** 0`` is 1 for every x (including 0) and ``0 ** n`` is 0.
    """
    if exponent < 0:
        raise ValueError(f"integer_power needs a non-negative exponent, got {exponent}")
    if exponent == 0:
        return DecimalValue.from_int(1, base.settings)
    if base.is_zero():
        return DecimalValue.from_int(0, base.settings)

    result = DecimalValue.from_int(1, base.settings)
    square = base.copy()
    while True:
        if exponent & 1:
            result.mul(square)
        exponent >>= 1
        if not exponent:
            return result
        square.mul(square)

def exponent_to_fraction(exponent: DecimalValue, max_scale: int = 19) -> Fraction:
    """Express a non-negative decimal exponent as a reduced fraction.

    The exponent is multiplied by 10, 100, ... 10**max_scale until the
    product is whole; 3.45 becomes 345/100 and reduces to 69/20.
    """
    settings = exponent.settings
    for scale in range(1, max_scale + 1):
        denominator = 10**scale
        scaled = exponent * DecimalValue.from_int(denominator, settings)
        numerator = scaled.export_int()
        if scaled == DecimalValue.from_int(numerator, settings):
            return Fraction(numerator, denominator)
    raise ExponentError(
        f"exponent {exponent} does not reduce to a fraction over 10**{max_scale} or less"
    )

def nth_root(value: DecimalValue, n: int, max_iterations: int = 100_000) -> tuple[DecimalValue, int]:
    """Newton-Raphson n-th root of a non-negative value.

    Starting from 1, each step is::

        delta = (1 / n) * (value / root ** (n - 1) - root)
        root += delta

    The solver stops when delta repeats, when the root comes back to an
    earlier value, when ``root ** n`` equals the value exactly, or when
    the deviation ``|root ** n - value|`` repeats the best one seen so
    far.  The root with the smallest deviation is returned together with
    the number of iterations used; a solver that stops on its first step
    returns the starting guess 1.
    """
    settings = value.settings
    one = DecimalValue.from_int(1, settings)
    step = one / DecimalValue.from_int(n, settings)

    root = one.copy()
    best_root = root
    best_deviation: DecimalValue | None = None
    previous_delta = DecimalValue(settings)
    seen = {_key(root)}

    iterations = 0
    for iterations in range(1, max_iterations + 1):
        delta = step * (value / integer_power(root, n - 1) - root)
        if delta == previous_delta:
            break
        previous_delta = delta
        root = root + delta
        if _key(root) in seen:
            break
        seen.add(_key(root))

        deviation = abs(integer_power(root, n) - value)
        if deviation.is_zero():
            best_root = root
            break
        if best_deviation is None or deviation < best_deviation:
            best_root, best_deviation = root, deviation
        elif deviation == best_deviation:
            break
    else:
        logger.warning("nth_root(%s, %d) stopped after %d iterations", value, n, max_iterations)

    return abs(best_root), iterations

def _key(value: DecimalValue) -> tuple[int, tuple[int, ...], int]:
    return value.sign, value.digits, value.exponent


# ---------------------------------------------------------------------------
# The job
# ---------------------------------------------------------------------------

@dataclass
class ExponentJob:
    """One ``base ** exponent`` computation.

    The job works on copies of its operands.  After ``calc()`` it holds
    the result and, for a fractional exponent, the exponent as a reduced
    fraction and the root solver's iteration count.
    """

    base: DecimalValue
    exponent: DecimalValue
    settings: EngineSettings = DEFAULT_SETTINGS
    result: DecimalValue | None = field(default=None, init=False)
    fraction: Fraction | None = field(default=None, init=False)
    iterations: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.base = self.base.copy(DecimalValue(self.settings))
        self.exponent = self.exponent.copy(DecimalValue(self.settings))

    @property
    def numerator(self) -> int | None:
        return None if self.fraction is None else self.fraction.numerator

    @property
    def denominator(self) -> int | None:
        return None if self.fraction is None else self.fraction.denominator

    def calc(self) -> DecimalValue:
        exponent = abs(self.exponent)
        whole = exponent.export_int()

        if exponent == DecimalValue.from_int(whole, self.settings):
            result = integer_power(self.base, whole)
        else:
            result = self._fractional_power(exponent)

        if self.exponent.is_negative():
            result = DecimalValue.from_int(1, self.settings) / result

        self.result = result
        return result

    def _fractional_power(self, exponent: DecimalValue) -> DecimalValue:
        if self.base.is_negative():
            raise ExponentError(
                f"{self.base} ^ {self.exponent}: fractional exponent of a negative base"
            )

        self.fraction = exponent_to_fraction(exponent, self.settings.fraction_max_scale)
        logger.debug("exponent %s reduced to %s", exponent, self.fraction)

        if self.base.is_zero():
            return DecimalValue(self.settings)

        root, self.iterations = nth_root(
            self.base, self.fraction.denominator, self.settings.newton_max_iterations
        )
        logger.debug(
            "root %d of %s = %s after %d iterations",
            self.fraction.denominator, self.base, root, self.iterations,
        )
        return integer_power(root, self.fraction.numerator)
