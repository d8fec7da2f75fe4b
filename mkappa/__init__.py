"""Chance-adjusted inter-rater agreement with generalized weighted kappa.

Computes Cohen's kappa for two raters and Conger's kappa for more, on
nominal, ordinal, interval or ratio scales, from an items × raters matrix
of numeric ratings with optional missing values.

Examples
--------
>>> from mkappa import compute_kappa
>>> result = compute_kappa([[0, 0], [1, 1], [1, 0]], categories=[0, 1])
>>> round(result.kappa, 3)
0.4
"""

from __future__ import annotations

from mkappa.agreement import chance_agreement, kappa_coefficient, observed_agreement
from mkappa.engine import KappaEngine, compute_kappa
from mkappa.errors import (
    DegenerateChanceAgreementError,
    InsufficientItemsError,
    InsufficientRatersError,
    InvalidCategoriesError,
    InvalidRatingsError,
    InvalidScaleError,
    KappaError,
    NoQualifyingItemsError,
    UnknownCategoryError,
)
from mkappa.preprocessing import (
    PreparedRatings,
    prepare_ratings,
    summarize_ratings,
    validate_ratings,
)
from mkappa.results import KappaResult
from mkappa.scales import Scale, parse_scale
from mkappa.tabulation import Tabulation, tabulate
from mkappa.weights import build_weights

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "compute_kappa",
    "KappaEngine",
    "KappaResult",
    # Stages
    "prepare_ratings",
    "summarize_ratings",
    "validate_ratings",
    "PreparedRatings",
    "build_weights",
    "tabulate",
    "Tabulation",
    "observed_agreement",
    "chance_agreement",
    "kappa_coefficient",
    # Scales
    "Scale",
    "parse_scale",
    # Errors
    "KappaError",
    "InvalidRatingsError",
    "InvalidCategoriesError",
    "InvalidScaleError",
    "InsufficientItemsError",
    "InsufficientRatersError",
    "UnknownCategoryError",
    "NoQualifyingItemsError",
    "DegenerateChanceAgreementError",
]
