"""Tests for KappaResult."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from mkappa.results import KappaResult
from mkappa.scales import Scale


class TestKappaResult:
    """Test the result model."""

    def test_as_tuple(self) -> None:
        """Test the (kappa, p_o, p_c) triple."""
        result = KappaResult(kappa=0.6, p_o=0.8, p_c=0.5)
        assert result.as_tuple() == (0.6, 0.8, 0.5)
        assert result.is_defined

    @pytest.mark.parametrize(
        ("n_raters", "name"), [(2, "Cohen's"), (3, "Conger's"), (10, "Conger's")]
    )
    def test_coefficient_name(self, n_raters: int, name: str) -> None:
        """Test the coefficient is named after the number of raters."""
        result = KappaResult(kappa=0.5, p_o=0.7, p_c=0.4, n_raters=n_raters)
        assert result.coefficient_name == name

    def test_undefined(self) -> None:
        """Test the failure sentinel."""
        result = KappaResult.undefined("boom", n_raters=1, scale=Scale.ORDINAL)
        assert all(math.isnan(value) for value in result.as_tuple())
        assert result.error == "boom"
        assert result.scale is Scale.ORDINAL
        assert not result.is_defined

    def test_frozen(self) -> None:
        """Test results cannot be modified."""
        result = KappaResult(kappa=0.6, p_o=0.8, p_c=0.5)
        with pytest.raises(ValidationError):
            result.kappa = 1.0  # type: ignore[misc]

    def test_scale_from_string(self) -> None:
        """Test scale names are coerced to Scale members."""
        result = KappaResult(kappa=0.0, p_o=0.5, p_c=0.5, scale="ratio")  # type: ignore[arg-type]
        assert result.scale is Scale.RATIO
