"""Kappa result model."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

from mkappa.scales import Scale


class KappaResult(BaseModel):
    """Outcome of a kappa computation.

    A failed computation yields NaN for ``kappa``, ``p_o`` and ``p_c`` and
    carries the failure message in ``error``.

    Attributes
    ----------
    kappa : float
        Chance-adjusted agreement; 1 is perfect, 0 is chance level.
    p_o : float
        Percent observed agreement.
    p_c : float
        Percent chance agreement.
    n_items : int
        Items used after dropping all-missing rows.
    n_raters : int
        Number of raters.
    categories : tuple[float, ...]
        Possible categories.
    observed_categories : tuple[float, ...]
        Categories that appear in the ratings.
    scale : Scale | None
        Scale of measurement, None if it could not be resolved.
    error : str | None
        Failure message; None when the result is defined.

    Examples
    --------
    >>> result = KappaResult(kappa=0.6, p_o=0.8, p_c=0.5, n_raters=2)
    >>> result.coefficient_name
    "Cohen's"
    >>> result.as_tuple()
    (0.6, 0.8, 0.5)
    >>> KappaResult.undefined("At least 2 raters are required.").is_defined
    False
    """

    model_config = ConfigDict(frozen=True)

    kappa: float
    p_o: float
    p_c: float
    n_items: int = Field(default=0, ge=0)
    n_raters: int = Field(default=0, ge=0)
    categories: tuple[float, ...] = ()
    observed_categories: tuple[float, ...] = ()
    scale: Scale | None = None
    error: str | None = None

    @classmethod
    def undefined(
        cls,
        error: str,
        n_items: int = 0,
        n_raters: int = 0,
        categories: tuple[float, ...] = (),
        observed_categories: tuple[float, ...] = (),
        scale: Scale | None = None,
    ) -> KappaResult:
        """Build the sentinel result for a failed computation."""
        return cls(
            kappa=math.nan,
            p_o=math.nan,
            p_c=math.nan,
            n_items=n_items,
            n_raters=n_raters,
            categories=categories,
            observed_categories=observed_categories,
            scale=scale,
            error=error,
        )

    @property
    def is_defined(self) -> bool:
        """Whether the computation produced a kappa value."""
        return self.error is None and not math.isnan(self.kappa)

    @property
    def coefficient_name(self) -> str:
        """Cohen's for two raters, Conger's for more."""
        return "Cohen's" if self.n_raters == 2 else "Conger's"

    def as_tuple(self) -> tuple[float, float, float]:
        """Return ``(kappa, p_o, p_c)``."""
        return (self.kappa, self.p_o, self.p_c)
