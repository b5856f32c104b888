"""The capability table: which NumericValue implements which base.

An application builds one registry at start-up and passes it to every
Operand.  Nothing is registered implicitly.

    registry = default_registry()
    operand = Operand(registry, NumberBase.HEX)
"""

from __future__ import annotations

from decimal_value import DecimalValue
from errors import UnknownBaseError
from hex_value import HexValue
from numeric import NumberBase, NumericValue, Operation
from settings import DEFAULT_SETTINGS, EngineSettings


class OperationRegistry:
    """Maps each NumberBase to the NumericValue subclass that implements it."""

    def __init__(self, settings: EngineSettings = DEFAULT_SETTINGS) -> None:
        self.settings = settings
        self._types: dict[NumberBase, type[NumericValue]] = {}

    def register(self, base: NumberBase, value_type: type[NumericValue]) -> None:
        self._types[NumberBase(base)] = value_type

    @property
    def bases(self) -> tuple[NumberBase, ...]:
        return tuple(self._types)

    def value_type(self, base: NumberBase) -> type[NumericValue]:
        try:
            return self._types[base]
        except KeyError:
            raise UnknownBaseError(base) from None

    def create(self, base: NumberBase) -> NumericValue:
        """A zero value of ``base`` configured with this registry's settings."""
        return self.value_type(base).from_settings(self.settings)

    def supports(self, base: NumberBase, op: Operation) -> bool:
        return self.value_type(base).supports(op)

    def is_valid_char(self, base: NumberBase, c: str) -> bool:
        return self.value_type(base).is_valid_char(c)

    def base_name(self, base: NumberBase) -> str:
        return self.value_type(base).base_name


def default_registry(settings: EngineSettings = DEFAULT_SETTINGS) -> OperationRegistry:
    """Registry with the decimal and hexadecimal implementations."""
    registry = OperationRegistry(settings)
    registry.register(NumberBase.DECIMAL, DecimalValue)
    registry.register(NumberBase.HEX, HexValue)
    return registry
