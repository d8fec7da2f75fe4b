"""Observed agreement, chance agreement and the kappa coefficient.

Implements the generalized formulas of Conger (1980) with the weighting
scheme of Cohen (1968), as presented by Gwet (2014). With two raters the
coefficient reduces to Cohen's kappa; with more it is Conger's kappa.

References
----------
Cohen, J. (1960). A coefficient of agreement for nominal scales.
Educational and Psychological Measurement, 20(1), 37-46.

Cohen, J. (1968). Weighted kappa: Nominal scale agreement with provision
for scaled disagreement or partial credit. Psychological Bulletin, 70(4),
213-220.

Conger, A. J. (1980). Integration and generalization of kappas for multiple
raters. Psychological Bulletin, 88(2), 322-328.

Gwet, K. L. (2014). Handbook of inter-rater reliability (4th ed.).
Gaithersburg, MD: Advanced Analytics.
"""

from __future__ import annotations

import logging

import numpy as np

from mkappa.errors import (
    DegenerateChanceAgreementError,
    InsufficientRatersError,
    NoQualifyingItemsError,
)
from mkappa.preprocessing import FloatArray
from mkappa.tabulation import Tabulation

logger = logging.getLogger(__name__)

# |1 - P_C| at or below this is treated as P_C == 1
DEGENERACY_TOLERANCE = 1e-12


def observed_agreement(
    item_counts: FloatArray, weighted_item_counts: FloatArray
) -> float:
    """Compute the weighted percent observed agreement (P_O).

    Each item rated by at least two raters contributes the weighted share of
    agreeing ordered rater pairs; P_O is the unweighted mean over those items.

    Parameters
    ----------
    item_counts : FloatArray
        Items × categories rating counts.
    weighted_item_counts : FloatArray
        ``item_counts @ weights``.

    Returns
    -------
    float
        Observed agreement, in [0, 1] when all weights are in [0, 1].

    Raises
    ------
    NoQualifyingItemsError
        If no item has two or more ratings.

    Examples
    --------
    >>> counts = np.array([[0.0, 2.0], [1.0, 1.0]])
    >>> observed_agreement(counts, counts @ np.eye(2))
    0.5
    """
    r_i = item_counts.sum(axis=1)
    qualifying = r_i >= 2
    if not qualifying.any():
        raise NoQualifyingItemsError()

    observed = (item_counts * (weighted_item_counts - 1.0)).sum(axis=1)
    possible = r_i * (r_i - 1.0)
    return float(np.mean(observed[qualifying] / possible[qualifying]))


def chance_agreement(rater_counts: FloatArray, weights: FloatArray) -> float:
    """Compute the bias-corrected percent chance agreement (P_C).

    Parameters
    ----------
    rater_counts : FloatArray
        Raters × categories rating counts.
    weights : FloatArray
        q × q agreement weight matrix.

    Returns
    -------
    float
        Chance agreement.

    Raises
    ------
    InsufficientRatersError
        If fewer than two raters rated any item.

    Notes
    -----
    With ``p[g, k]`` the share of rater ``g``'s ratings in category ``k`` and
    ``pbar`` its mean over raters::

        ssq[k, l] = (sum_g p[g, k] p[g, l] - r pbar[k] pbar[l]) / (r - 1)
        P_C = sum_kl W[k, l] (pbar[k] pbar[l] - ssq[k, l] / r)

    Raters who rated none of the items have no category distribution and
    are left out of ``r``.

    Examples
    --------
    >>> counts = np.array([[2.0, 2.0], [2.0, 2.0]])
    >>> chance_agreement(counts, np.eye(2))
    0.5
    """
    n_g = rater_counts.sum(axis=1)
    active = n_g > 0
    r = int(active.sum())
    if r < 2:
        raise InsufficientRatersError(r)
    if r < rater_counts.shape[0]:
        logger.debug(
            f"Ignoring {rater_counts.shape[0] - r} rater(s) without ratings "
            "in chance agreement"
        )

    p_gk = rater_counts[active] / n_g[active, np.newaxis]
    pbar_k = p_gk.mean(axis=0)
    pbar_outer = np.outer(pbar_k, pbar_k)
    ssq_kl = (p_gk.T @ p_gk - r * pbar_outer) / (r - 1)
    return float(np.sum(weights * (pbar_outer - ssq_kl / r)))


def kappa_coefficient(p_o: float, p_c: float) -> float:
    """Compute kappa from observed and chance agreement.

    Parameters
    ----------
    p_o : float
        Percent observed agreement.
    p_c : float
        Percent chance agreement.

    Returns
    -------
    float
        ``(p_o - p_c) / (1 - p_c)``. When chance agreement is 1 and every
        rating pair agrees (``p_o == 1``), kappa is 1.

    Raises
    ------
    DegenerateChanceAgreementError
        If chance agreement is 1 while observed agreement is not.

    Examples
    --------
    >>> kappa_coefficient(0.8, 0.5)
    0.6000000000000001
    >>> kappa_coefficient(1.0, 1.0)
    1.0
    """
    denominator = 1.0 - p_c
    if abs(denominator) <= DEGENERACY_TOLERANCE:
        if abs(1.0 - p_o) <= DEGENERACY_TOLERANCE:
            return 1.0
        raise DegenerateChanceAgreementError(p_o, p_c)
    return (p_o - p_c) / denominator


def compute_agreement(
    tabulation: Tabulation, weights: FloatArray
) -> tuple[float, float, float]:
    """Run the agreement stage on a tabulation.

    Returns
    -------
    tuple[float, float, float]
        ``(kappa, p_o, p_c)``.
    """
    p_o = observed_agreement(tabulation.item_counts, tabulation.weighted_item_counts)
    p_c = chance_agreement(tabulation.rater_counts, weights)
    logger.debug(f"Observed agreement {p_o:.6f}, chance agreement {p_c:.6f}")
    return kappa_coefficient(p_o, p_c), p_o, p_c
