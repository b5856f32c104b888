"""Request and response models for the operand HTTP service.

The service keeps live Operand objects in memory (see store.py); these
models are only the wire shapes around them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from numeric import NumberBase, Operation
from operand import Operand


# ---------------------------------------------------------------------------
# Operand views
# ---------------------------------------------------------------------------

class OperandCreate(BaseModel):
    """Payload for creating a new operand."""

    base: NumberBase = NumberBase.DECIMAL


class OperandView(BaseModel):
    """An operand as returned by the API."""

    id: str
    base: NumberBase
    display: str = Field(..., description="Rendered value, e.g. '123,000' or 'FF'")
    entry_allowed: bool

    @classmethod
    def from_operand(cls, operand_id: str, operand: Operand) -> OperandView:
        return cls(
            id=operand_id,
            base=operand.base,
            display=operand.to_str(),
            entry_allowed=operand.entry_allowed,
        )


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------

class CharInput(BaseModel):
    """Characters to feed, in order."""

    chars: str = Field(..., min_length=1, max_length=256)


class FeedResult(BaseModel):
    operand: OperandView
    accepted: list[bool] = Field(
        default_factory=list,
        description="Per-character result of feeding, in input order",
    )


class CharCheck(BaseModel):
    base: NumberBase
    char: str = Field(..., min_length=1, max_length=1)


class CharValidity(BaseModel):
    base: NumberBase
    char: str
    valid: bool


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class OperationRequest(BaseModel):
    """Apply ``op`` to the operand; binary operations name the right-hand operand."""

    op: Operation
    other_id: str | None = None


class BaseUpdate(BaseModel):
    base: NumberBase
