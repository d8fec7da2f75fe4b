"""Category count tabulations for the agreement formulas."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from mkappa.preprocessing import FloatArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tabulation:
    """Item and rater category counts.

    Attributes
    ----------
    item_counts : FloatArray
        Items × categories; ``[i, k]`` is the number of raters who put item
        ``i`` in category ``k``.
    rater_counts : FloatArray
        Raters × categories; ``[g, k]`` is the number of items rater ``g``
        put in category ``k``.
    weighted_item_counts : FloatArray
        Items × categories; ``item_counts @ weights``, the partial credit
        each category collects from the ratings on an item.
    """

    item_counts: FloatArray
    rater_counts: FloatArray
    weighted_item_counts: FloatArray


def category_matches(ratings: FloatArray, categories: FloatArray) -> FloatArray:
    """Return an items × raters × categories indicator array.

    NaN never compares equal, so missing ratings match no category.
    """
    return (ratings[:, :, np.newaxis] == categories[np.newaxis, np.newaxis, :]).astype(
        np.float64
    )


def tabulate(
    ratings: FloatArray, categories: FloatArray, weights: FloatArray
) -> Tabulation:
    """Count ratings per item and per rater in each category.

    Parameters
    ----------
    ratings : FloatArray
        Cleaned items × raters array.
    categories : FloatArray
        Sorted category values (length q).
    weights : FloatArray
        q × q agreement weight matrix.

    Returns
    -------
    Tabulation
        The item, rater and weighted item counts.

    Examples
    --------
    >>> ratings = np.array([[1.0, 1.0], [1.0, 0.0]])
    >>> counts = tabulate(ratings, np.array([0.0, 1.0]), np.eye(2))
    >>> counts.item_counts
    array([[0., 2.],
           [1., 1.]])
    >>> counts.rater_counts
    array([[0., 2.],
           [1., 1.]])
    """
    matches = category_matches(ratings, categories)
    item_counts = matches.sum(axis=1)
    rater_counts = matches.sum(axis=0)
    weighted_item_counts = item_counts @ weights

    logger.debug(
        f"Tabulated {item_counts.shape[0]} items, {rater_counts.shape[0]} raters, "
        f"{item_counts.shape[1]} categories"
    )
    return Tabulation(
        item_counts=item_counts,
        rater_counts=rater_counts,
        weighted_item_counts=weighted_item_counts,
    )
