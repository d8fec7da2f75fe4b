"""Kappa engine: preprocessing, weighting, tabulation and agreement.

Examples
--------
>>> from mkappa.engine import compute_kappa
>>> result = compute_kappa([[1, 1], [1, 0], [0, 0], [0, 1]], categories=[0, 1])
>>> result.as_tuple()
(0.0, 0.5, 0.5)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mkappa.agreement import compute_agreement
from mkappa.config.config import MKappaConfig
from mkappa.config.engine import EngineConfig
from mkappa.config.loader import load_config
from mkappa.config.logging import configure_logging
from mkappa.errors import KappaError
from mkappa.preprocessing import (
    CategoriesLike,
    PreparedRatings,
    RatingsLike,
    summarize_ratings,
    validate_ratings,
)
from mkappa.reporting import Reporter, make_reporter
from mkappa.results import KappaResult
from mkappa.scales import Scale
from mkappa.tabulation import tabulate
from mkappa.weights import build_weights

logger = logging.getLogger(__name__)


class KappaEngine:
    """Computes Cohen's (two raters) or Conger's (more raters) kappa.

    The engine holds no state between computations; the same instance can
    be reused for any number of rating matrices.

    Parameters
    ----------
    config : EngineConfig | None
        Engine settings. Defaults to ``EngineConfig()``.
    reporter : Reporter | None
        Receiver for descriptives, results and errors. Built from
        ``config.reporter`` when omitted.

    Examples
    --------
    >>> from mkappa.reporting import NullReporter
    >>> engine = KappaEngine(reporter=NullReporter())
    >>> engine.compute([[1, 1], [2, 2], [3, 3]], scale="ordinal").kappa
    1.0
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.reporter = reporter or make_reporter(
            self.config.reporter, precision=self.config.precision
        )

    @classmethod
    def from_config(
        cls, config: MKappaConfig, reporter: Reporter | None = None
    ) -> KappaEngine:
        """Build an engine from a full package configuration.

        Applies ``config.logging`` to the ``mkappa`` logger, then builds the
        engine from ``config.engine``.

        Parameters
        ----------
        config : MKappaConfig
            Package configuration, e.g. from `load_config` or `get_profile`.
        reporter : Reporter | None
            Overrides the reporter named by ``config.engine.reporter``.

        Returns
        -------
        KappaEngine
            Configured engine.
        """
        configure_logging(config.logging)
        logger.debug(f"Building kappa engine from the {config.profile!r} profile")
        return cls(config=config.engine, reporter=reporter)

    @classmethod
    def from_file(
        cls,
        config_path: Path | str | None = None,
        profile: str | None = None,
        *,
        reporter: Reporter | None = None,
        **overrides: Any,
    ) -> KappaEngine:
        """Build an engine from a YAML file, ``MKAPPA_`` variables and overrides.

        Parameters
        ----------
        config_path : Path | str | None
            YAML configuration file. Profile settings only when omitted.
        profile : str | None
            Base profile; see `load_config`.
        reporter : Reporter | None
            Overrides the configured reporter.
        **overrides : Any
            Setting overrides by field name, e.g. ``strict=True``.

        Returns
        -------
        KappaEngine
            Configured engine.

        Examples
        --------
        >>> engine = KappaEngine.from_file(profile="test", default_scale="ordinal")
        >>> engine.config.strict, engine.config.default_scale
        (True, <Scale.ORDINAL: 'ordinal'>)
        """
        config = load_config(config_path, profile, **overrides)
        return cls.from_config(config, reporter=reporter)

    def compute(
        self,
        ratings: RatingsLike,
        categories: CategoriesLike = None,
        scale: Scale | str | None = None,
    ) -> KappaResult:
        """Compute kappa for a rating matrix.

        Descriptives are reported before the input is validated, so they
        are available even when a check fails.

        Parameters
        ----------
        ratings : RatingsLike
            Items × raters table; missing ratings are NaN or None.
        categories : CategoriesLike
            Possible category values. Inferred from the ratings when omitted,
            which can underestimate reliability if some categories were
            never used.
        scale : Scale | str | None
            "nominal", "ordinal", "interval" or "ratio". The configured
            default scale when omitted.

        Returns
        -------
        KappaResult
            Kappa with observed and chance agreement. When the computation
            fails and the engine is not strict, all three are NaN and
            ``error`` holds the reason.

        Raises
        ------
        KappaError
            Only in strict mode, for any failed check.
        """
        prepared: PreparedRatings | None = None
        try:
            prepared = summarize_ratings(
                ratings,
                categories,
                scale,
                default_scale=self.config.default_scale,
            )
            self.reporter.report_descriptives(prepared)
            validate_ratings(prepared)
            result = self._compute_prepared(prepared)
        except KappaError as e:
            logger.debug(f"Kappa computation failed: {type(e).__name__}")
            self.reporter.report_error(e)
            if self.config.strict:
                raise
            return self._undefined(str(e), prepared)

        self.reporter.report_result(result)
        return result

    def _compute_prepared(self, prepared: PreparedRatings) -> KappaResult:
        weights = build_weights(prepared.categories, prepared.scale)
        counts = tabulate(prepared.ratings, prepared.categories, weights)
        logger.debug(
            f"Tabulated {prepared.n_items} item(s) × {prepared.n_categories} "
            f"{prepared.scale} categories"
        )
        kappa, p_o, p_c = compute_agreement(counts, weights)
        return KappaResult(
            kappa=kappa,
            p_o=p_o,
            p_c=p_c,
            n_items=prepared.n_items,
            n_raters=prepared.n_raters,
            categories=tuple(prepared.categories.tolist()),
            observed_categories=tuple(prepared.observed.tolist()),
            scale=prepared.scale,
        )

    def _undefined(
        self, message: str, prepared: PreparedRatings | None
    ) -> KappaResult:
        if prepared is None:
            return KappaResult.undefined(message)
        return KappaResult.undefined(
            message,
            n_items=prepared.n_items,
            n_raters=prepared.n_raters,
            categories=tuple(prepared.categories.tolist()),
            observed_categories=tuple(prepared.observed.tolist()),
            scale=prepared.scale,
        )


def compute_kappa(
    ratings: RatingsLike,
    categories: CategoriesLike = None,
    scale: Scale | str | None = None,
    *,
    reporter: Reporter | None = None,
    strict: bool = False,
) -> KappaResult:
    """Compute Cohen's or Conger's kappa with generalized weighted formulas.

    Parameters
    ----------
    ratings : RatingsLike
        Items × raters table; missing ratings are NaN or None.
    categories : CategoriesLike
        Possible category values; inferred from the ratings when omitted.
    scale : Scale | str | None
        Scale of measurement; nominal when omitted.
    reporter : Reporter | None
        Diagnostic reporter; logs through ``mkappa.engine`` when omitted.
    strict : bool
        Raise `KappaError` instead of returning an undefined result.

    Returns
    -------
    KappaResult
        Kappa, observed agreement and chance agreement.

    Examples
    --------
    >>> result = compute_kappa([[1, 1], [1, 1], [1, 1]], scale="interval")
    >>> result.kappa
    1.0
    >>> compute_kappa([[1], [0]]).error
    'At least 2 raters are required, got 1.'
    """
    engine = KappaEngine(EngineConfig(strict=strict), reporter=reporter)
    return engine.compute(ratings, categories, scale)
