"""Engine configuration model for the mkappa package."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mkappa.scales import Scale


class EngineConfig(BaseModel):
    """Configuration for kappa computations.

    Parameters
    ----------
    default_scale : Scale
        Scale used when a computation does not name one.
    strict : bool
        Raise errors instead of returning an undefined result.
    reporter : str
        Diagnostic reporter: "logging", "console" or "none".
    precision : int
        Decimal places in reported agreement values.

    Examples
    --------
    >>> config = EngineConfig()
    >>> config.default_scale
    <Scale.NOMINAL: 'nominal'>
    >>> config.strict
    False
    >>> EngineConfig(default_scale=" Ordinal ").default_scale
    <Scale.ORDINAL: 'ordinal'>
    """

    model_config = ConfigDict(extra="forbid")

    default_scale: Scale = Field(
        default=Scale.NOMINAL, description="Scale used when none is given"
    )
    strict: bool = Field(
        default=False, description="Raise errors instead of returning NaN results"
    )
    reporter: Literal["logging", "console", "none"] = Field(
        default="logging", description="Diagnostic reporter"
    )
    precision: int = Field(
        default=3, ge=0, le=12, description="Decimal places in reported values"
    )

    @field_validator("default_scale", "reporter", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> Any:
        # scale and reporter names are matched case-insensitively
        if isinstance(value, str):
            return value.strip().lower()
        return value
