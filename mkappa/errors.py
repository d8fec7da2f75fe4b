"""Kappa computation exceptions.

Every failure that stops a kappa computation derives from `KappaError`, so
callers can catch the whole family at once. Errors caused by malformed
arguments additionally derive from `ValueError`.
"""

from __future__ import annotations

from collections.abc import Sequence


class KappaError(Exception):
    """Base exception for kappa computation errors."""

    pass


class InvalidRatingsError(KappaError, ValueError):
    """Exception raised when the ratings cannot be read as a numeric table."""

    pass


class InvalidCategoriesError(KappaError, ValueError):
    """Exception raised when a category set cannot be used.

    Raised for non-finite category values and for ratio-scale category
    sets whose weights would divide by zero.
    """

    pass


class InvalidScaleError(KappaError, ValueError):
    """Exception raised when the scale is not a recognized measurement scale.

    Parameters
    ----------
    scale
        The rejected scale value.

    Attributes
    ----------
    scale : object
        The rejected scale value.

    Examples
    --------
    >>> try:
    ...     raise InvalidScaleError("binary")
    ... except InvalidScaleError as e:
    ...     print(e.scale)
    binary
    """

    def __init__(self, scale: object) -> None:
        self.scale = scale
        super().__init__(
            f"Scale must be nominal, ordinal, interval, or ratio, got {scale!r}"
        )


class InsufficientItemsError(KappaError):
    """Exception raised when no item remains after dropping all-missing rows."""

    def __init__(self, message: str = "At least 1 item is required.") -> None:
        super().__init__(message)


class InsufficientRatersError(KappaError):
    """Exception raised when fewer than two raters are supplied.

    Parameters
    ----------
    n_raters
        Number of rater columns found.
    """

    def __init__(self, n_raters: int) -> None:
        self.n_raters = n_raters
        super().__init__(f"At least 2 raters are required, got {n_raters}.")


class UnknownCategoryError(KappaError):
    """Exception raised when ratings use values outside the category set.

    Parameters
    ----------
    unknown
        Observed values that are not members of the category set.

    Attributes
    ----------
    unknown : tuple[float, ...]
        Observed values that are not members of the category set.

    Examples
    --------
    >>> str(UnknownCategoryError([2.0]))
    'Categories were observed in the ratings that were not included in the category set: [2.0]'
    """

    def __init__(self, unknown: Sequence[float]) -> None:
        self.unknown = tuple(float(value) for value in unknown)
        super().__init__(
            "Categories were observed in the ratings that were not included "
            f"in the category set: {list(self.unknown)}"
        )


class NoQualifyingItemsError(KappaError):
    """Exception raised when no item has at least two ratings."""

    def __init__(
        self,
        message: str = "At least 1 item must be rated by 2 or more raters.",
    ) -> None:
        super().__init__(message)


class DegenerateChanceAgreementError(KappaError):
    """Exception raised when chance agreement is 1 and kappa is undefined.

    Parameters
    ----------
    p_o
        Observed agreement at the time of failure.
    p_c
        Chance agreement at the time of failure.
    """

    def __init__(self, p_o: float, p_c: float) -> None:
        self.p_o = p_o
        self.p_c = p_c
        super().__init__(
            f"Chance agreement is 1 (observed agreement {p_o:.3f}); "
            "kappa is undefined."
        )
