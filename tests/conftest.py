"""Shared fixtures for engine tests."""

from __future__ import annotations

import pytest

from numeric import NumberBase
from operand import Operand
from registry import OperationRegistry, default_registry


@pytest.fixture
def registry() -> OperationRegistry:
    return default_registry()


@pytest.fixture
def make_operand(registry):
    """Build an operand in ``base`` with ``chars`` already entered."""

    def _make(chars: str = "", base: NumberBase = NumberBase.DECIMAL) -> Operand:
        operand = Operand(registry, base)
        for c in chars:
            assert operand.feed(c), f"refused {c!r}"
        return operand

    return _make

