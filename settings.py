"""Engine settings.

The numeric engine has four tunable limits.  They are grouped in one
frozen, validated model so an application builds them once at start-up
and hands them to the registry (see registry.py).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EngineSettings(BaseModel):
    """Limits applied by decimal arithmetic and exponentiation."""

    model_config = ConfigDict(frozen=True)

    precision: int = Field(
        default=16,
        ge=1,
        le=64,
        description="Significant decimal digits accepted on entry and shown in results",
    )
    guard_digits: int = Field(
        default=20,
        ge=0,
        le=64,
        description="Extra significant digits carried by intermediate results",
    )
    newton_max_iterations: int = Field(
        default=100_000,
        ge=1,
        description="Iteration cap for the Newton-Raphson n-th root solver",
    )
    fraction_max_scale: int = Field(
        default=19,
        ge=1,
        le=64,
        description="Largest power of ten tried when turning an exponent into a fraction",
    )

    @property
    def working_precision(self) -> int:
        """Significant digits kept by arithmetic before display rounding."""
        return self.precision + self.guard_digits


DEFAULT_SETTINGS = EngineSettings()
