"""Threshold configuration and classification models."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_WARN_LIMIT = 20.0
DEFAULT_CAUTION_LIMIT = 15.0


class DisplayClass(str, Enum):
    """How today's total should be presented."""

    NORMAL = "normal"
    CAUTION = "caution"
    WARNING = "warning"


@dataclass(frozen=True)
class ThresholdSettings:
    """The warn and caution limits with their enable flags."""

    warn_limit: float = DEFAULT_WARN_LIMIT
    caution_limit: float = DEFAULT_CAUTION_LIMIT
    warn_enabled: bool = True
    caution_enabled: bool = True


@dataclass(frozen=True)
class ThresholdStatus:
    """Result of evaluating a total against the thresholds."""

    is_exceeding_warn: bool
    is_exceeding_caution: bool
    display_class: DisplayClass
