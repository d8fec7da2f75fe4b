"""Measurement scales for weighted agreement.

The scale decides how much partial credit a disagreement between two
categories earns. See `mkappa.weights` for the formulas.
"""

from __future__ import annotations

from enum import StrEnum

from mkappa.errors import InvalidScaleError


class Scale(StrEnum):
    """Scale of measurement for the rated categories.

    Attributes
    ----------
    NOMINAL
        Unordered categories; disagreements earn no credit.
    ORDINAL
        Ordered categories of unequal size; credit depends on rank distance.
    INTERVAL
        Ordered categories with equal spacing; credit depends on value distance.
    RATIO
        Equally spaced categories with a meaningful zero point.

    Examples
    --------
    >>> Scale("ordinal") is Scale.ORDINAL
    True
    >>> str(Scale.RATIO)
    'ratio'
    """

    NOMINAL = "nominal"
    ORDINAL = "ordinal"
    INTERVAL = "interval"
    RATIO = "ratio"


DEFAULT_SCALE = Scale.NOMINAL


def parse_scale(value: Scale | str | None, default: Scale = DEFAULT_SCALE) -> Scale:
    """Resolve a user-supplied scale to a `Scale` member.

    Parameters
    ----------
    value : Scale | str | None
        Scale member, scale name (case-insensitive) or None.
    default : Scale
        Scale returned when ``value`` is None.

    Returns
    -------
    Scale
        The resolved scale.

    Raises
    ------
    InvalidScaleError
        If ``value`` does not name one of the four scales.

    Examples
    --------
    >>> parse_scale("Interval")
    <Scale.INTERVAL: 'interval'>
    >>> parse_scale(None)
    <Scale.NOMINAL: 'nominal'>
    """
    if value is None:
        return default
    if isinstance(value, Scale):
        return value
    if isinstance(value, str):
        try:
            return Scale(value.strip().lower())
        except ValueError:
            raise InvalidScaleError(value) from None
    raise InvalidScaleError(value)
