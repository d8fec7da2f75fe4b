"""Preprocessing and validation of rating matrices.

Turns raw ratings into a cleaned items × raters array, resolves the category
set and scale, and rejects inputs the kappa formulas cannot handle.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from mkappa.errors import (
    InsufficientItemsError,
    InsufficientRatersError,
    InvalidCategoriesError,
    InvalidRatingsError,
    UnknownCategoryError,
)
from mkappa.scales import Scale, parse_scale

logger = logging.getLogger(__name__)

type FloatArray = npt.NDArray[np.float64]

# Anything np.asarray(..., dtype=float) can turn into a 2-D table
type RatingsLike = npt.ArrayLike

type CategoriesLike = Sequence[float] | npt.NDArray[np.floating] | None


@dataclass(frozen=True)
class PreparedRatings:
    """Cleaned input for a kappa computation.

    Built by `summarize_ratings` and checked by `validate_ratings`.

    Attributes
    ----------
    ratings : FloatArray
        Items × raters array; missing ratings are NaN. No row is all-missing.
    categories : FloatArray
        Sorted, distinct category values.
    observed : FloatArray
        Sorted, distinct finite values present in ``ratings``.
    scale : Scale
        Resolved measurement scale.
    n_dropped : int
        Number of all-missing rows removed from the input.
    """

    ratings: FloatArray
    categories: FloatArray
    observed: FloatArray
    scale: Scale
    n_dropped: int = 0

    @property
    def n_items(self) -> int:
        """Number of items kept after dropping all-missing rows."""
        return int(self.ratings.shape[0])

    @property
    def n_raters(self) -> int:
        """Number of rater columns."""
        return int(self.ratings.shape[1])

    @property
    def n_categories(self) -> int:
        """Number of categories in the resolved category set."""
        return int(self.categories.shape[0])


def as_rating_matrix(ratings: RatingsLike) -> FloatArray:
    """Convert ratings to a 2-D float array with NaN for missing values.

    ``None`` entries become NaN. Infinite values are kept here and treated
    as missing by the callers, which only look at finite entries.

    Parameters
    ----------
    ratings : RatingsLike
        Nested sequences, numpy array or data frame of ratings.

    Returns
    -------
    FloatArray
        Copy of the ratings as a float64 array.

    Raises
    ------
    InvalidRatingsError
        If the ratings are not numeric or not two-dimensional.

    Examples
    --------
    >>> as_rating_matrix([[1, None], [0, 1]])
    array([[ 1., nan],
           [ 0.,  1.]])
    """
    try:
        matrix = np.array(ratings, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidRatingsError(f"Ratings must be numeric: {e}") from e

    if matrix.ndim != 2:
        raise InvalidRatingsError(
            f"Ratings must be a 2-D items × raters table, got {matrix.ndim} dimension(s)"
        )
    return matrix


def drop_missing_items(ratings: FloatArray) -> FloatArray:
    """Remove items (rows) without a single finite rating.

    Parameters
    ----------
    ratings : FloatArray
        Items × raters array.

    Returns
    -------
    FloatArray
        The rows of ``ratings`` that hold at least one finite value.
    """
    keep = np.isfinite(ratings).any(axis=1)
    return ratings[keep]


def observed_values(ratings: FloatArray) -> FloatArray:
    """Return the sorted distinct finite values in ``ratings``."""
    return np.unique(ratings[np.isfinite(ratings)])


def resolve_categories(
    categories: CategoriesLike, observed: FloatArray
) -> FloatArray:
    """Resolve the category set.

    Parameters
    ----------
    categories : CategoriesLike
        Explicit category values, or None/empty to infer them.
    observed : FloatArray
        Distinct finite values present in the ratings.

    Returns
    -------
    FloatArray
        Sorted, distinct category values. Non-finite explicit values are
        kept here and rejected by `validate_ratings`.

    Raises
    ------
    InvalidCategoriesError
        If the explicit categories are not numeric.

    Notes
    -----
    Inferring categories from the data can underestimate reliability when
    some possible categories were never used.
    """
    if categories is None:
        return observed.copy()

    try:
        values = np.asarray(categories, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        raise InvalidCategoriesError(f"Categories must be numeric: {e}") from e

    if values.size == 0:
        return observed.copy()
    return np.unique(values)


def summarize_ratings(
    ratings: RatingsLike,
    categories: CategoriesLike = None,
    scale: Scale | str | None = None,
    default_scale: Scale = Scale.NOMINAL,
) -> PreparedRatings:
    """Clean ratings and resolve categories and scale, without validating.

    The result is what gets described to the user before any check runs,
    so it may hold no items, a single rater or unknown categories.

    Parameters
    ----------
    ratings : RatingsLike
        Items × raters table; missing ratings are NaN or None.
    categories : CategoriesLike
        Possible category values. Inferred from the ratings when omitted.
    scale : Scale | str | None
        Measurement scale. ``default_scale`` when omitted.
    default_scale : Scale
        Scale used when ``scale`` is None.

    Returns
    -------
    PreparedRatings
        Cleaned ratings with the resolved category set and scale.

    Raises
    ------
    InvalidRatingsError
        If the ratings are not a numeric 2-D table.
    InvalidScaleError
        If the scale is not recognized.
    InvalidCategoriesError
        If the explicit categories are not numeric.
    """
    matrix = as_rating_matrix(ratings)
    resolved_scale = parse_scale(scale, default=default_scale)

    cleaned = drop_missing_items(matrix)
    n_dropped = matrix.shape[0] - cleaned.shape[0]
    if n_dropped:
        logger.debug(f"Dropped {n_dropped} item(s) with no valid ratings")

    observed = observed_values(cleaned)
    return PreparedRatings(
        ratings=cleaned,
        categories=resolve_categories(categories, observed),
        observed=observed,
        scale=resolved_scale,
        n_dropped=n_dropped,
    )


def validate_ratings(prepared: PreparedRatings) -> PreparedRatings:
    """Check that summarized ratings can be fed to the kappa formulas.

    Checks run in order: item count, rater count, category values, then
    membership of every observed value in the category set.

    Parameters
    ----------
    prepared : PreparedRatings
        Output of `summarize_ratings`.

    Returns
    -------
    PreparedRatings
        ``prepared`` itself.

    Raises
    ------
    InsufficientItemsError
        If no item has a finite rating.
    InsufficientRatersError
        If fewer than two rater columns are given.
    InvalidCategoriesError
        If an explicit category is not finite.
    UnknownCategoryError
        If a rating is not a member of the category set.
    """
    if prepared.n_items < 1:
        raise InsufficientItemsError()
    if prepared.n_raters < 2:
        raise InsufficientRatersError(prepared.n_raters)
    if not np.isfinite(prepared.categories).all():
        raise InvalidCategoriesError(
            f"Categories must be finite numbers, got {prepared.categories.tolist()}"
        )

    unknown = prepared.observed[~np.isin(prepared.observed, prepared.categories)]
    if unknown.size:
        raise UnknownCategoryError(unknown.tolist())
    return prepared


def prepare_ratings(
    ratings: RatingsLike,
    categories: CategoriesLike = None,
    scale: Scale | str | None = None,
    default_scale: Scale = Scale.NOMINAL,
) -> PreparedRatings:
    """Clean and validate ratings ahead of a kappa computation.

    Equivalent to `summarize_ratings` followed by `validate_ratings`.

    Parameters
    ----------
    ratings : RatingsLike
        Items × raters table; missing ratings are NaN or None.
    categories : CategoriesLike
        Possible category values. Inferred from the ratings when omitted.
    scale : Scale | str | None
        Measurement scale. ``default_scale`` when omitted.
    default_scale : Scale
        Scale used when ``scale`` is None.

    Returns
    -------
    PreparedRatings
        Cleaned ratings with the resolved category set and scale.

    Raises
    ------
    KappaError
        Any error raised by `summarize_ratings` or `validate_ratings`.

    Examples
    --------
    >>> prepared = prepare_ratings([[1, 1], [float("nan"), float("nan")], [0, 1]])
    >>> prepared.n_items, prepared.n_raters, prepared.n_dropped
    (2, 2, 1)
    >>> prepared.categories
    array([0., 1.])
    """
    return validate_ratings(
        summarize_ratings(ratings, categories, scale, default_scale=default_scale)
    )
