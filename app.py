"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_store
from registry import default_registry
from settings import EngineSettings
from store import OperandStore


def create_app(
    store: OperandStore | None = None,
    settings: EngineSettings | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional store for testing; otherwise creates a fresh one
    whose registry uses ``settings`` (the defaults if omitted).
    """
    if store is None:
        store = OperandStore(default_registry(settings or EngineSettings()))

    set_store(store)

    app = FastAPI(
        title="Calculator Operand API",
        description=(
            "Decimal and hexadecimal calculator operands over HTTP. Operands "
            "take digit entry one character at a time, switch base through a "
            "64-bit integer bridge and combine through add, sub, mul, div and "
            "exp. Operands are kept in memory until deleted."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
