"""Tests for the kappa engine and compute_kappa."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
import pytest
from pytest_mock import MockerFixture

from mkappa.config import MKappaConfig, get_profile
from mkappa.config.engine import EngineConfig
from mkappa.config.logging import LoggingConfig
from mkappa.engine import KappaEngine, compute_kappa
from mkappa.errors import (
    DegenerateChanceAgreementError,
    InsufficientRatersError,
    InvalidCategoriesError,
    KappaError,
    NoQualifyingItemsError,
    UnknownCategoryError,
)
from mkappa.reporting import ConsoleReporter, LoggingReporter, NullReporter
from mkappa.results import KappaResult
from mkappa.scales import Scale

ALL_SCALES = list(Scale)


class TestScenarios:
    """Test worked examples."""

    def test_chance_level_agreement(
        self, balanced_ratings: list[list[float]], null_reporter: NullReporter
    ) -> None:
        """Test two agreements and two disagreements give kappa 0."""
        result = compute_kappa(
            balanced_ratings, categories=[0, 1], scale="nominal", reporter=null_reporter
        )
        assert result.p_o == pytest.approx(0.5)
        assert result.p_c == pytest.approx(0.5)
        assert result.kappa == pytest.approx(0.0)
        assert result.is_defined
        assert result.coefficient_name == "Cohen's"

    @pytest.mark.parametrize("scale", ALL_SCALES)
    def test_single_value_everywhere(
        self, scale: Scale, null_reporter: NullReporter
    ) -> None:
        """Test identical ratings at one value give kappa 1 on every scale."""
        result = compute_kappa(
            [[3, 3, 3], [3, 3, 3], [3, 3, 3]], scale=scale, reporter=null_reporter
        )
        assert result.kappa == 1.0
        assert result.p_o == 1.0

    def test_unknown_category(self, null_reporter: NullReporter) -> None:
        """Test an excluded observed value yields an undefined result."""
        result = compute_kappa(
            [[0, 1], [2, 1]], categories=[0, 1], reporter=null_reporter
        )
        assert math.isnan(result.kappa)
        assert not result.is_defined
        assert result.error is not None
        assert "not included in the category set" in result.error

    def test_unknown_category_strict(self, null_reporter: NullReporter) -> None:
        """Test strict mode raises UnknownCategoryError."""
        with pytest.raises(UnknownCategoryError):
            compute_kappa(
                [[0, 1], [2, 1]], categories=[0, 1], reporter=null_reporter, strict=True
            )

    def test_single_rater(self, null_reporter: NullReporter) -> None:
        """Test one rater column fails with InsufficientRatersError."""
        result = compute_kappa([[1], [0]], reporter=null_reporter)
        assert math.isnan(result.kappa)
        assert math.isnan(result.p_o)
        assert math.isnan(result.p_c)
        with pytest.raises(InsufficientRatersError):
            compute_kappa([[1], [0]], reporter=null_reporter, strict=True)

    def test_no_item_with_two_ratings(self, null_reporter: NullReporter) -> None:
        """Test items each rated once cannot yield observed agreement."""
        ratings = [[1, None], [None, 0]]
        with pytest.raises(NoQualifyingItemsError):
            compute_kappa(ratings, reporter=null_reporter, strict=True)

    def test_ratio_scale_rejects_zero_sum_categories(
        self, null_reporter: NullReporter
    ) -> None:
        """Test ratio weights that would divide by zero are an error."""
        with pytest.raises(InvalidCategoriesError):
            compute_kappa(
                [[-1, 1], [1, 1]], scale="ratio", reporter=null_reporter, strict=True
            )

    def test_degenerate_chance_agreement(
        self, mocker: MockerFixture, null_reporter: NullReporter
    ) -> None:
        """Test a chance agreement of 1 without full agreement is an error."""
        mocker.patch("mkappa.agreement.chance_agreement", return_value=1.0)
        with pytest.raises(DegenerateChanceAgreementError):
            compute_kappa([[0, 1], [1, 1]], reporter=null_reporter, strict=True)


class TestProperties:
    """Test properties that hold for all valid inputs."""

    @pytest.mark.parametrize("n_raters", [2, 3, 5])
    @pytest.mark.parametrize("scale", ALL_SCALES)
    def test_perfect_agreement(
        self, n_raters: int, scale: Scale, null_reporter: NullReporter
    ) -> None:
        """Test kappa is 1 when all raters agree on every item."""
        values = [1, 2, 3, 2, 1, 3, 3]
        ratings = [[value] * n_raters for value in values]
        result = compute_kappa(ratings, scale=scale, reporter=null_reporter)
        assert result.kappa == pytest.approx(1.0)
        assert result.p_o == pytest.approx(1.0)

    def test_matches_cohens_kappa(
        self,
        two_rater_ratings: tuple[list[int], list[int]],
        null_reporter: NullReporter,
    ) -> None:
        """Test two raters on a nominal scale reproduce Cohen's kappa."""
        rater1, rater2 = two_rater_ratings
        ratings = list(zip(rater1, rater2, strict=True))
        result = compute_kappa(ratings, reporter=null_reporter)

        a, b = np.asarray(rater1), np.asarray(rater2)
        p_o = np.mean(a == b)
        p_e = sum(np.mean(a == c) * np.mean(b == c) for c in (0, 1, 2))
        assert result.p_o == pytest.approx(p_o)
        assert result.p_c == pytest.approx(p_e)
        assert result.kappa == pytest.approx((p_o - p_e) / (1 - p_e))

    @pytest.mark.parametrize("scale", ALL_SCALES)
    def test_dropping_missing_rows_is_invariant(
        self, scale: Scale, ordinal_ratings: np.ndarray, null_reporter: NullReporter
    ) -> None:
        """Test all-missing rows do not change the result."""
        padded = np.vstack(
            [ordinal_ratings[:3], np.full((2, 3), np.nan), ordinal_ratings[3:]]
        )
        base = compute_kappa(ordinal_ratings, scale=scale, reporter=null_reporter)
        with_gaps = compute_kappa(padded, scale=scale, reporter=null_reporter)
        assert with_gaps.as_tuple() == pytest.approx(base.as_tuple())
        assert with_gaps.n_items == base.n_items

    @pytest.mark.parametrize("scale", ALL_SCALES)
    def test_observed_agreement_in_unit_interval(
        self, scale: Scale, ordinal_ratings: np.ndarray, null_reporter: NullReporter
    ) -> None:
        """Test P_O lies in [0, 1]."""
        result = compute_kappa(ordinal_ratings, scale=scale, reporter=null_reporter)
        assert 0.0 <= result.p_o <= 1.0
        assert result.kappa <= 1.0

    def test_partial_credit_scales_exceed_nominal(
        self, ordinal_ratings: np.ndarray, null_reporter: NullReporter
    ) -> None:
        """Test near-miss disagreements raise observed agreement."""
        nominal = compute_kappa(ordinal_ratings, scale="nominal", reporter=null_reporter)
        interval = compute_kappa(
            ordinal_ratings, scale="interval", reporter=null_reporter
        )
        assert interval.p_o > nominal.p_o

    def test_conger_label_for_three_raters(
        self, ordinal_ratings: np.ndarray, null_reporter: NullReporter
    ) -> None:
        """Test results for more than two raters are Conger's kappa."""
        result = compute_kappa(ordinal_ratings, reporter=null_reporter)
        assert result.n_raters == 3
        assert result.coefficient_name == "Conger's"


class TestWeightedKnownValues:
    """Test hand-computed agreement for three raters and five categories.

    Rater category counts are [1 2 1 1 1], [0 2 1 0 2] and [1 1 2 1 0];
    items 4 and 6 carry two ratings each.
    """

    @pytest.mark.parametrize(
        ("scale", "p_o", "p_c", "kappa"),
        [
            (Scale.NOMINAL, 0.5, 89 / 450, 136 / 361),
            (Scale.ORDINAL, 0.95, 10161 / 13500, 296 / 371),
            (Scale.INTERVAL, 0.875, 283 / 450, 443 / 668),
            (Scale.RATIO, 15463 / 16200, 0.7705934, 0.8016891),
        ],
    )
    def test_agreement_values(
        self,
        scale: Scale,
        p_o: float,
        p_c: float,
        kappa: float,
        ordinal_ratings: np.ndarray,
        null_reporter: NullReporter,
    ) -> None:
        """Test P_O, P_C and kappa against values worked out by hand."""
        result = compute_kappa(ordinal_ratings, scale=scale, reporter=null_reporter)
        assert result.categories == (1.0, 2.0, 3.0, 4.0, 5.0)
        assert result.p_o == pytest.approx(p_o, abs=1e-7)
        assert result.p_c == pytest.approx(p_c, abs=1e-7)
        assert result.kappa == pytest.approx(kappa, abs=1e-7)

    def test_rater_without_ratings_after_dropping(
        self, null_reporter: NullReporter
    ) -> None:
        """Test a rater left with no ratings does not count toward chance agreement."""
        nan = float("nan")
        ratings = [
            [1, 1, nan],
            [nan, nan, nan],
            [0, 0, nan],
            [1, 0, nan],
            [2, 1, nan],
            [2, 2, nan],
        ]
        result = compute_kappa(ratings, scale="ordinal", reporter=null_reporter)
        pair = compute_kappa(
            [row[:2] for row in ratings], scale="ordinal", reporter=null_reporter
        )
        assert result.is_defined
        assert result.n_items == 5
        assert result.n_raters == 3
        assert result.as_tuple() == pytest.approx(pair.as_tuple())


class TestKappaEngine:
    """Test engine configuration and reporting."""

    def test_default_reporter_logs(self) -> None:
        """Test the default reporter writes through logging."""
        engine = KappaEngine()
        assert isinstance(engine.reporter, LoggingReporter)
        assert engine.config.strict is False

    def test_configured_reporter(self) -> None:
        """Test the reporter is built from the configuration."""
        engine = KappaEngine(EngineConfig(reporter="console"))
        assert isinstance(engine.reporter, ConsoleReporter)

    def test_default_scale_from_config(self, null_reporter: NullReporter) -> None:
        """Test the configured default scale is used."""
        engine = KappaEngine(
            EngineConfig(default_scale=Scale.INTERVAL), reporter=null_reporter
        )
        result = engine.compute([[1, 2], [2, 3], [3, 3]])
        assert result.scale is Scale.INTERVAL

    def test_explicit_scale_beats_config(self, null_reporter: NullReporter) -> None:
        """Test an explicit scale overrides the configured default."""
        engine = KappaEngine(
            EngineConfig(default_scale=Scale.INTERVAL), reporter=null_reporter
        )
        result = engine.compute([[1, 2], [2, 3], [3, 3]], scale="ordinal")
        assert result.scale is Scale.ORDINAL

    def test_from_config(self, restore_package_logger: logging.Logger) -> None:
        """Test building an engine from a package configuration."""
        engine = KappaEngine.from_config(get_profile("test"))
        assert engine.config.strict is True
        assert isinstance(engine.reporter, NullReporter)

    def test_from_config_applies_logging(
        self, restore_package_logger: logging.Logger
    ) -> None:
        """Test the logging section reaches the package logger."""
        KappaEngine.from_config(get_profile("dev"), reporter=NullReporter())
        assert restore_package_logger.level == logging.DEBUG
        assert len(restore_package_logger.handlers) == 1

    def test_from_config_strict_raises(
        self, restore_package_logger: logging.Logger
    ) -> None:
        """Test a strict engine propagates errors."""
        config = MKappaConfig(
            engine=EngineConfig(strict=True),
            logging=LoggingConfig(console=False),
        )
        engine = KappaEngine.from_config(config)
        with pytest.raises(KappaError):
            engine.compute([[1], [2]])

    def test_from_file(
        self, tmp_path: Path, restore_package_logger: logging.Logger
    ) -> None:
        """Test building an engine from a YAML file and overrides."""
        path = tmp_path / "mkappa.yaml"
        path.write_text(
            "profile: test\nengine:\n  default_scale: interval\nlogging:\n  level: error\n"
        )
        engine = KappaEngine.from_file(path, precision=5)
        assert engine.config.strict is True
        assert engine.config.default_scale is Scale.INTERVAL
        assert engine.config.precision == 5
        assert restore_package_logger.level == logging.ERROR
        assert engine.compute([[1, 2], [2, 2], [3, 3]]).scale is Scale.INTERVAL

    def test_from_file_reads_environment(
        self, monkeypatch: pytest.MonkeyPatch, restore_package_logger: logging.Logger
    ) -> None:
        """Test MKAPPA_ variables configure the engine."""
        monkeypatch.setenv("MKAPPA_PROFILE", "test")
        monkeypatch.setenv("MKAPPA_ENGINE__DEFAULT_SCALE", "ordinal")
        engine = KappaEngine.from_file()
        assert engine.config.strict is True
        assert engine.config.default_scale is Scale.ORDINAL

    def test_reporter_calls(self, mocker: MockerFixture) -> None:
        """Test descriptives and the result are reported once each."""
        reporter = mocker.Mock()
        engine = KappaEngine(reporter=reporter)
        result = engine.compute([[0, 0], [1, 1]])
        reporter.report_descriptives.assert_called_once()
        reporter.report_result.assert_called_once_with(result)
        reporter.report_error.assert_not_called()

    def test_reporter_error_call(self, mocker: MockerFixture) -> None:
        """Test failures are reported and no result is reported."""
        reporter = mocker.Mock()
        engine = KappaEngine(reporter=reporter)
        result = engine.compute([[0, 1], [2, 1]], categories=[0, 1])
        reporter.report_error.assert_called_once()
        (error,) = reporter.report_error.call_args.args
        assert isinstance(error, UnknownCategoryError)
        reporter.report_result.assert_not_called()
        assert isinstance(result, KappaResult)

    def test_undefined_result_keeps_descriptives(
        self, null_reporter: NullReporter
    ) -> None:
        """Test failed results still describe the prepared data."""
        engine = KappaEngine(reporter=null_reporter)
        result = engine.compute([[1, None], [None, 0]])
        assert result.error is not None
        assert result.n_items == 2
        assert result.n_raters == 2
        assert result.categories == (0.0, 1.0)

    def test_engine_is_reusable(self, null_reporter: NullReporter) -> None:
        """Test one engine gives the same answer twice."""
        engine = KappaEngine(reporter=null_reporter)
        first = engine.compute([[0, 1], [1, 1], [0, 0]])
        second = engine.compute([[0, 1], [1, 1], [0, 0]])
        assert first == second

    def test_descriptives_reported_before_checks(self, mocker: MockerFixture) -> None:
        """Test a failed category check still reports both category sets."""
        reporter = mocker.Mock()
        engine = KappaEngine(reporter=reporter)
        result = engine.compute([[0, 1], [2, 1]], categories=[0, 1])
        assert [call[0] for call in reporter.mock_calls] == [
            "report_descriptives",
            "report_error",
        ]
        (prepared,) = reporter.report_descriptives.call_args.args
        assert prepared.categories.tolist() == [0.0, 1.0]
        assert prepared.observed.tolist() == [0.0, 1.0, 2.0]
        assert result.observed_categories == (0.0, 1.0, 2.0)

    def test_descriptives_logged_for_single_rater(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test the logged descriptives precede the rater count error."""
        engine = KappaEngine()
        with caplog.at_level(logging.INFO, logger="mkappa.engine"):
            engine.compute([[1], [0], [1]])
        messages = [record.getMessage() for record in caplog.records]
        assert messages.index("Number of raters = 1") < messages.index(
            "ERROR: At least 2 raters are required, got 1."
        )

    def test_failure_logged_at_debug(
        self, caplog: pytest.LogCaptureFixture, null_reporter: NullReporter
    ) -> None:
        """Test the engine logs the failing error type."""
        engine = KappaEngine(reporter=null_reporter)
        with caplog.at_level(logging.DEBUG, logger="mkappa.engine"):
            engine.compute([[0, 1], [2, 1]], categories=[0, 1])
        assert "Kappa computation failed: UnknownCategoryError" in caplog.text
