"""Food lookup domain models."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class FoodCandidate:
    """A food returned by a lookup search."""

    fdc_id: int
    name: str
    carbs_per_100g: float
    still_loading_detail: bool = False


class LookupErrorKind(str, Enum):
    """Categories of lookup failures."""

    NETWORK_UNAVAILABLE = "network_unavailable"
    TIMEOUT = "timeout"
    NO_API_KEY = "no_api_key"
    INVALID_API_KEY = "invalid_api_key"
    SERVER_ERROR = "server_error"
    PARSE_ERROR = "parse_error"
    UNKNOWN = "unknown"


_TITLES = {
    LookupErrorKind.NETWORK_UNAVAILABLE: "No Internet Connection",
    LookupErrorKind.TIMEOUT: "Request Timed Out",
    LookupErrorKind.NO_API_KEY: "API Key Missing",
    LookupErrorKind.INVALID_API_KEY: "Invalid API Key",
    LookupErrorKind.PARSE_ERROR: "Data Format Error",
}

_RECOVERY = {
    LookupErrorKind.NETWORK_UNAVAILABLE: (
        "Check your internet connection and try again."
    ),
    LookupErrorKind.TIMEOUT: "The request took too long. Please try again.",
    LookupErrorKind.NO_API_KEY: "Please add your USDA API key in Settings.",
    LookupErrorKind.INVALID_API_KEY: "Please check your API key in Settings.",
    LookupErrorKind.SERVER_ERROR: (
        "The food database is temporarily unavailable. Please try again later."
    ),
    LookupErrorKind.PARSE_ERROR: (
        "There was a problem processing the food data. Please try again."
    ),
    LookupErrorKind.UNKNOWN: (
        "Please try again. If the problem persists, contact support."
    ),
}


class FoodLookupError(Exception):
    """Raised when a food lookup cannot be completed."""

    def __init__(
        self,
        kind: LookupErrorKind,
        detail: str = "",
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.status_code = status_code
        super().__init__(self.title)

    @property
    def title(self) -> str:
        if self.kind == LookupErrorKind.SERVER_ERROR:
            return f"Server Error ({self.status_code})"
        if self.kind == LookupErrorKind.UNKNOWN:
            return f"Unexpected Error: {self.detail}"
        return _TITLES[self.kind]

    @property
    def recovery_suggestion(self) -> str:
        return _RECOVERY[self.kind]

    @property
    def can_retry(self) -> bool:
        """API key problems need a settings change, everything else may pass."""
        return self.kind not in {
            LookupErrorKind.NO_API_KEY,
            LookupErrorKind.INVALID_API_KEY,
        }

    def as_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "recovery_suggestion": self.recovery_suggestion,
            "can_retry": self.can_retry,
        }
