"""Agreement weight matrices for the four measurement scales.

A weight matrix ``W`` is q × q, where q is the number of categories, and
``W[k, l]`` is the credit given when one rater picks category ``k`` and
another picks category ``l``. The diagonal is always 1.
"""

from __future__ import annotations

import logging
from math import comb

import numpy as np

from mkappa.errors import InvalidCategoriesError, InvalidScaleError
from mkappa.preprocessing import FloatArray
from mkappa.scales import Scale

logger = logging.getLogger(__name__)


def nominal_weights(categories: FloatArray) -> FloatArray:
    """Identity weights: only exact agreement earns credit.

    Examples
    --------
    >>> nominal_weights(np.array([0.0, 5.0]))
    array([[1., 0.],
           [0., 1.]])
    """
    return np.eye(len(categories))


def ordinal_weights(categories: FloatArray) -> FloatArray:
    """Rank-based weights for ordered categories of unequal size.

    For ranks ``k != l`` the weight is ``1 - C(|k - l| + 1, 2) / C(q, 2)``,
    the share of rank pairs in the full range not spanned by ``k`` and ``l``.
    Only rank positions matter, never the category values.

    Examples
    --------
    >>> ordinal_weights(np.array([1.0, 2.0, 3.0]))
    array([[1.        , 0.66666667, 0.        ],
           [0.66666667, 1.        , 0.66666667],
           [0.        , 0.66666667, 1.        ]])
    """
    q = len(categories)
    weights = np.eye(q)
    if q < 2:
        return weights

    max_pairs = comb(q, 2)
    for i in range(q):
        for j in range(q):
            if i != j:
                weights[i, j] = 1.0 - comb(abs(i - j) + 1, 2) / max_pairs
    return weights


def interval_weights(categories: FloatArray) -> FloatArray:
    """Linear distance weights for equally spaced categories.

    Examples
    --------
    >>> interval_weights(np.array([0.0, 1.0, 4.0]))
    array([[1.  , 0.75, 0.  ],
           [0.75, 1.  , 0.25],
           [0.  , 0.25, 1.  ]])
    """
    q = len(categories)
    if q < 2:
        return np.eye(q)

    span = categories.max() - categories.min()
    distance = np.abs(categories[:, np.newaxis] - categories[np.newaxis, :])
    weights = 1.0 - distance / span
    np.fill_diagonal(weights, 1.0)
    return weights


def ratio_weights(categories: FloatArray) -> FloatArray:
    """Weights for equally spaced categories with a true zero point.

    ``W[k, l] = 1 - ((v_k - v_l) / (v_k + v_l))**2 / ((max - min) / (max + min))**2``,
    with ``W[k, l] = 1`` when both values are zero.

    Raises
    ------
    InvalidCategoriesError
        If ``max + min`` is zero, or two distinct categories sum to zero;
        either would divide by zero.

    Examples
    --------
    >>> ratio_weights(np.array([1.0, 2.0, 3.0]))
    array([[1.        , 0.55555556, 0.        ],
           [0.55555556, 1.        , 0.84      ],
           [0.        , 0.84      , 1.        ]])
    """
    q = len(categories)
    if q < 2:
        return np.eye(q)

    low, high = categories.min(), categories.max()
    if high + low == 0:
        raise InvalidCategoriesError(
            "Ratio scale is undefined when the largest and smallest categories "
            f"sum to zero: {categories.tolist()}"
        )

    sums = categories[:, np.newaxis] + categories[np.newaxis, :]
    off_diagonal = ~np.eye(q, dtype=bool)
    both_zero = (categories[:, np.newaxis] == 0) & (categories[np.newaxis, :] == 0)
    if np.any((sums == 0) & off_diagonal & ~both_zero):
        raise InvalidCategoriesError(
            "Ratio scale is undefined when two categories sum to zero: "
            f"{categories.tolist()}"
        )

    max_ratio = ((high - low) / (high + low)) ** 2
    diffs = categories[:, np.newaxis] - categories[np.newaxis, :]
    # zero sums only remain on the diagonal or where both values are zero
    safe_sums = np.where(sums == 0, 1.0, sums)
    weights = 1.0 - (diffs / safe_sums) ** 2 / max_ratio
    weights[both_zero] = 1.0
    np.fill_diagonal(weights, 1.0)
    return weights


def build_weights(categories: FloatArray, scale: Scale) -> FloatArray:
    """Build the q × q agreement weight matrix for a category set.

    Parameters
    ----------
    categories : FloatArray
        Sorted, distinct category values.
    scale : Scale
        Measurement scale selecting the weighting rule.

    Returns
    -------
    FloatArray
        Weight matrix with ones on the diagonal.

    Raises
    ------
    InvalidScaleError
        If ``scale`` is not a `Scale` member.
    InvalidCategoriesError
        If the ratio-scale weights are undefined for ``categories``.

    Examples
    --------
    >>> build_weights(np.array([0.0, 1.0]), Scale.NOMINAL)
    array([[1., 0.],
           [0., 1.]])
    """
    categories = np.asarray(categories, dtype=np.float64)
    match scale:
        case Scale.NOMINAL:
            weights = nominal_weights(categories)
        case Scale.ORDINAL:
            weights = ordinal_weights(categories)
        case Scale.INTERVAL:
            weights = interval_weights(categories)
        case Scale.RATIO:
            weights = ratio_weights(categories)
        case _:
            raise InvalidScaleError(scale)

    logger.debug(f"Built {weights.shape[0]}x{weights.shape[1]} {scale} weight matrix")
    return weights
