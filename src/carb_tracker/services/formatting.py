"""Rounding and display formatting for gram amounts."""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from babel.numbers import format_decimal

from carb_tracker.domain.thresholds import ThresholdSettings

DEFAULT_LOCALE = "en_US"
WARNING_SUFFIX = " ⚠️"

_CENT = Decimal("0.01")
# Precision wide enough to quantize any finite float.
_CONTEXT = Context(prec=400)


def round_for_storage(value: float) -> float:
    """Round to two decimals, halves away from zero.

    The float is rounded from its shortest decimal representation, so
    12.555 becomes 12.56 even though its binary value sits slightly below.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value {value!r}")
    exact = Decimal(repr(float(value)))
    rounded = float(exact.quantize(_CENT, rounding=ROUND_HALF_UP, context=_CONTEXT))
    if rounded == 0:
        return 0.0
    return rounded


def format_grams(value: float, locale: str = DEFAULT_LOCALE) -> str:
    """Format a gram amount for display, e.g. ``12.56g`` or ``12,56g``."""
    rounded = Decimal(repr(round_for_storage(value)))
    text = format_decimal(rounded, format="0.##", locale=locale, group_separator=False)
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}g"


def format_day_total(
    total: float, thresholds: ThresholdSettings, locale: str = DEFAULT_LOCALE
) -> str:
    """Format the total line shown under a day in the history."""
    suffix = ""
    if thresholds.warn_enabled and total > thresholds.warn_limit:
        suffix = WARNING_SUFFIX
    return f"Total: {format_grams(total, locale)}{suffix}"


def format_spoken_grams(value: float) -> str:
    """Format grams for spoken summaries with at most one fraction digit."""
    return f"{value:.1f}".removesuffix(".0")
