"""In-memory operand store.

Operands live for the lifetime of the process or until deleted.  Every
operand is built from the store's registry, so all of them share one
set of engine settings.
"""

from __future__ import annotations

import logging
import uuid

from numeric import NumberBase
from operand import Operand
from registry import OperationRegistry, default_registry

logger = logging.getLogger(__name__)


class OperandNotFoundError(Exception):
    """Raised when an operand lookup fails."""

    def __init__(self, operand_id: str) -> None:
        self.operand_id = operand_id
        super().__init__(f"Operand not found: {operand_id}")


def _new_id() -> str:
    return uuid.uuid4().hex


class OperandStore:
    """In-memory create/get/delete store for operands."""

    def __init__(self, registry: OperationRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self._operands: dict[str, Operand] = {}

    def create(self, base: NumberBase = NumberBase.DECIMAL) -> tuple[str, Operand]:
        """Create a zero operand in ``base`` and return it with its new id."""
        operand = Operand(self.registry, base)
        operand_id = _new_id()
        self._operands[operand_id] = operand
        logger.debug("created operand %s in base %s", operand_id, operand.base.name)
        return operand_id, operand

    def get(self, operand_id: str) -> Operand:
        try:
            return self._operands[operand_id]
        except KeyError:
            raise OperandNotFoundError(operand_id) from None

    def delete(self, operand_id: str) -> Operand:
        """Release an operand and return it."""
        operand = self.get(operand_id)
        del self._operands[operand_id]
        return operand

    def count(self) -> int:
        return len(self._operands)

    def clear(self) -> None:
        """Remove all operands (useful for testing)."""
        self._operands.clear()
