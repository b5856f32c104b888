"""Tests for the base-agnostic operand and its registry."""

from __future__ import annotations

import logging

import pytest

from decimal_value import DecimalValue
from errors import BaseMismatchError, UnknownBaseError, UnsupportedOperationError
from exponent import ExponentError
from hex_value import HexValue
from numeric import NumberBase, Operation
from operand import Operand
from registry import OperationRegistry, default_registry
from settings import EngineSettings

DEC = NumberBase.DECIMAL
HEX = NumberBase.HEX


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_default_bases(self, registry):
        assert set(registry.bases) == {DEC, HEX}
        assert registry.value_type(DEC) is DecimalValue
        assert registry.value_type(HEX) is HexValue

    def test_capabilities(self, registry):
        assert registry.supports(DEC, Operation.EXP)
        assert not registry.supports(HEX, Operation.EXP)
        assert not registry.supports(DEC, Operation.AND)
        assert not registry.supports(HEX, Operation.NOT)

    @pytest.mark.parametrize("base, c, valid", [
        (DEC, "7", True),
        (DEC, ".", True),
        (DEC, "s", True),
        (DEC, "A", False),
        (HEX, "A", True),
        (HEX, "f", True),
        (HEX, ".", False),
        (HEX, "g", False),
    ])
    def test_is_valid_char(self, registry, base, c, valid):
        assert registry.is_valid_char(base, c) is valid

    def test_base_names(self, registry):
        assert registry.base_name(DEC) == "DEC"
        assert registry.base_name(HEX) == "HEX"

    def test_unknown_base(self):
        registry = OperationRegistry()
        with pytest.raises(UnknownBaseError):
            registry.create(DEC)

    def test_settings_reach_values(self):
        registry = default_registry(EngineSettings(precision=4))
        value = registry.create(DEC)
        assert value.precision == 4


# ---------------------------------------------------------------------------
# Construction and entry
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_defaults_to_decimal(self, registry):
        operand = Operand(registry)
        assert operand.base == DEC
        assert operand.entry_allowed
        assert operand.to_str() == "0"

    def test_honours_requested_base(self, registry):
        assert Operand(registry, HEX).base == HEX

    def test_unregistered_base_raises(self):
        registry = OperationRegistry()
        registry.register(DEC, DecimalValue)
        with pytest.raises(UnknownBaseError):
            Operand(registry, HEX)

    def test_repr(self, make_operand):
        assert repr(make_operand("12")) == "Operand(DECIMAL, '12')"


class TestEntry:
    @pytest.mark.parametrize("chars, shown", [
        ("123", "123"),
        ("123000", "123,000"),
        ("123.456", "123.456"),
    ])
    def test_decimal_entry(self, make_operand, chars, shown):
        assert str(make_operand(chars)) == shown

    def test_hex_entry(self, make_operand):
        assert make_operand("ff", HEX).to_str() == "FF"

    def test_invalid_char(self, make_operand):
        operand = make_operand("5")
        assert operand.feed("x") is False
        assert operand.to_str() == "5"


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class TestOperations:
    def test_binary_updates_left_operand(self, make_operand):
        a, b = make_operand("12.5"), make_operand("4")
        assert a.apply("mul", b)
        assert a.to_str() == "50"
        assert b.to_str() == "4"

    def test_binary_accepts_operation_enum(self, make_operand):
        a, b = make_operand("1"), make_operand("2")
        a.binary(Operation.ADD, b)
        assert a.to_str() == "3"

    def test_hex_arithmetic(self, make_operand):
        a, b = make_operand("FFFFFFFFFFFFFFFF", HEX), make_operand("1", HEX)
        assert a.apply("add", b)
        assert a.to_str() == "0"

    def test_decimal_exponent(self, make_operand):
        a, b = make_operand("2"), make_operand("3s")
        assert a.apply("exp", b)
        assert a.to_str() == "0.125"

    def test_huge_whole_exponent(self, make_operand):
        a, b = make_operand("2"), make_operand("9999999999999999")
        assert a.apply("exp", b)
        assert a.to_str().endswith("e+3010299956639811")

    def test_divide_by_zero(self, make_operand):
        a, b = make_operand("7"), make_operand("0")
        assert a.apply("div", b) is False
        assert a.to_str() == "7"
        with pytest.raises(ZeroDivisionError):
            a.binary("div", b)

    def test_fractional_exponent_of_negative_base(self, make_operand):
        a, b = make_operand("2s"), make_operand("0.5")
        assert a.apply("exp", b) is False
        with pytest.raises(ExponentError):
            a.binary("exp", b)
        assert a.to_str() == "-2"

    def test_unsupported_for_base(self, make_operand):
        a, b = make_operand("2", HEX), make_operand("3", HEX)
        assert a.apply("exp", b) is False
        with pytest.raises(UnsupportedOperationError, match="HEX does not support 'exp'"):
            a.binary("exp", b)

    def test_bitwise_not_supported_yet(self, make_operand):
        a = make_operand("F", HEX)
        assert a.apply("not") is False
        with pytest.raises(UnsupportedOperationError):
            a.unary("not")

    def test_unknown_operation_name(self, make_operand):
        a, b = make_operand("1"), make_operand("2")
        with pytest.raises(UnsupportedOperationError, match="'pow'"):
            a.binary("pow", b)

    def test_unary_op_as_binary_refused(self, make_operand):
        a, b = make_operand("1"), make_operand("2")
        with pytest.raises(UnsupportedOperationError):
            a.binary("not", b)
        with pytest.raises(UnsupportedOperationError):
            a.unary("add")

    def test_failed_apply_logs_reason(self, make_operand, caplog):
        a, b = make_operand("7"), make_operand("0")
        with caplog.at_level(logging.DEBUG, logger="operand"):
            a.apply("div", b)
        assert "division by zero" in caplog.text


# ---------------------------------------------------------------------------
# Entry-closed rule
# ---------------------------------------------------------------------------

class TestEntryClosed:
    def test_closed_after_success(self, make_operand):
        a, b = make_operand("1"), make_operand("2")
        a.apply("add", b)
        assert not a.entry_allowed
        assert not b.entry_allowed
        assert a.feed("5") is False
        assert b.feed("5") is False
        assert a.to_str() == "3"
        assert b.to_str() == "2"

    def test_closed_after_failure(self, make_operand):
        a, b = make_operand("1"), make_operand("0")
        assert a.apply("div", b) is False
        assert not a.entry_allowed
        assert not b.entry_allowed

    def test_closed_after_unsupported(self, make_operand):
        a, b = make_operand("1", HEX), make_operand("2", HEX)
        a.apply("exp", b)
        assert not a.entry_allowed

    def test_base_mismatch_changes_nothing(self, make_operand):
        a, b = make_operand("12"), make_operand("12", HEX)
        assert a.apply("add", b) is False
        with pytest.raises(BaseMismatchError):
            a.binary("add", b)
        assert a.entry_allowed
        assert b.entry_allowed
        assert a.to_str() == "12"
        assert b.to_str() == "12"


# ---------------------------------------------------------------------------
# Base switching
# ---------------------------------------------------------------------------

class TestBaseSwitch:
    def test_decimal_to_hex(self, make_operand):
        operand = make_operand("255")
        operand.set_base(HEX)
        assert operand.base == HEX
        assert operand.to_str() == "FF"

    def test_fraction_truncated(self, make_operand):
        operand = make_operand("12.7")
        operand.set_base(HEX)
        assert operand.to_str() == "C"

    def test_negative_decimal_becomes_zero(self, make_operand):
        operand = make_operand("5s")
        operand.set_base(HEX)
        assert operand.to_str() == "0"

    def test_hex_to_decimal(self, make_operand):
        operand = make_operand("FF", HEX)
        operand.set_base(DEC)
        assert operand.to_str() == "255"

    def test_hex_with_high_bit_becomes_zero(self, make_operand):
        operand = make_operand("8000000000000000", HEX)
        operand.set_base(DEC)
        assert operand.to_str() == "0"

    def test_hex_with_bit_31_survives(self, make_operand):
        operand = make_operand("80000000", HEX)
        operand.set_base(DEC)
        assert operand.to_str() == "2,147,483,648"

    def test_same_base_is_noop(self, make_operand):
        operand = make_operand("12.5")
        operand.set_base(DEC)
        assert operand.to_str() == "12.5"

    def test_round_trip(self, make_operand):
        operand = make_operand("1234567")
        operand.set_base(HEX)
        operand.set_base(DEC)
        assert operand.to_str() == "1,234,567"

    def test_unknown_base(self, make_operand):
        with pytest.raises(UnknownBaseError):
            make_operand("1").set_base(8)

    def test_switch_does_not_close_entry(self, make_operand):
        operand = make_operand("1")
        operand.set_base(HEX)
        assert operand.feed("A")
        assert operand.to_str() == "1A"

    def test_switch_logs(self, make_operand, caplog):
        operand = make_operand("10")
        with caplog.at_level(logging.DEBUG, logger="operand"):
            operand.set_base(HEX)
        assert "DECIMAL -> HEX" in caplog.text
