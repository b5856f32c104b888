"""FastAPI REST endpoints over the operand engine.

Routes
------
POST   /operands                   Create an operand (decimal unless told otherwise)
POST   /operands/valid-char        Check a character against a base
GET    /operands/{id}              Render an operand
DELETE /operands/{id}              Release an operand
POST   /operands/{id}/chars        Feed characters
PUT    /operands/{id}/base         Switch base through the integer bridge
POST   /operands/{id}/operations   Apply an operation
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from errors import BaseMismatchError, OperandError
from models import (
    BaseUpdate,
    CharCheck,
    CharInput,
    CharValidity,
    FeedResult,
    OperandCreate,
    OperandView,
    OperationRequest,
)
from operand import Operand
from store import OperandNotFoundError, OperandStore

router = APIRouter(prefix="/operands", tags=["operands"])

# The store instance is injected by the app factory (see app.py).
_store: OperandStore | None = None


def set_store(store: OperandStore) -> None:
    """Inject the store instance. Called once at app startup."""
    global _store
    _store = store


def get_store() -> OperandStore:
    assert _store is not None, "Store not initialized"
    return _store


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def _not_found(operand_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Operand not found: {operand_id}")


def _lookup(operand_id: str) -> Operand:
    try:
        return get_store().get(operand_id)
    except OperandNotFoundError:
        raise _not_found(operand_id)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=OperandView, status_code=201)
def create_operand(payload: OperandCreate) -> OperandView:
    """Create a zero operand."""
    store = get_store()
    try:
        operand_id, operand = store.create(payload.base)
    except OperandError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return OperandView.from_operand(operand_id, operand)


@router.post("/valid-char", response_model=CharValidity)
def check_char(payload: CharCheck) -> CharValidity:
    """Whether a character is entry input for a base; no operand needed."""
    registry = get_store().registry
    try:
        valid = registry.is_valid_char(payload.base, payload.char)
    except OperandError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return CharValidity(base=payload.base, char=payload.char, valid=valid)


@router.get("/{operand_id}", response_model=OperandView)
def get_operand(operand_id: str) -> OperandView:
    return OperandView.from_operand(operand_id, _lookup(operand_id))


@router.delete("/{operand_id}", response_model=OperandView)
def delete_operand(operand_id: str) -> OperandView:
    """Release an operand and return its last view."""
    store = get_store()
    try:
        operand = store.delete(operand_id)
    except OperandNotFoundError:
        raise _not_found(operand_id)
    return OperandView.from_operand(operand_id, operand)


@router.post("/{operand_id}/chars", response_model=FeedResult)
def feed_chars(operand_id: str, payload: CharInput) -> FeedResult:
    """Feed characters one at a time; refused characters are reported, not fatal."""
    operand = _lookup(operand_id)
    accepted = [operand.feed(c) for c in payload.chars]
    return FeedResult(operand=OperandView.from_operand(operand_id, operand), accepted=accepted)


@router.put("/{operand_id}/base", response_model=OperandView)
def set_base(operand_id: str, payload: BaseUpdate) -> OperandView:
    operand = _lookup(operand_id)
    try:
        operand.set_base(payload.base)
    except OperandError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return OperandView.from_operand(operand_id, operand)


@router.post("/{operand_id}/operations", response_model=OperandView)
def apply_operation(operand_id: str, payload: OperationRequest) -> OperandView:
    """Apply a unary operation, or a binary one against ``other_id``."""
    operand = _lookup(operand_id)
    other = _lookup(payload.other_id) if payload.other_id is not None else None
    try:
        if other is None:
            operand.unary(payload.op)
        else:
            operand.binary(payload.op, other)
    except BaseMismatchError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except (OperandError, ArithmeticError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return OperandView.from_operand(operand_id, operand)
