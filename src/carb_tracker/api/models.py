"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from carb_tracker.services.mock_data import DEFAULT_DAYS, Scenario


class EntryCreate(BaseModel):
    """Manual carb entry in grams."""

    amount: float | None = None


class QuickAddRequest(BaseModel):
    """One of the configured quick add presets."""

    value: float


class ThresholdUpdate(BaseModel):
    """Partial update of the threshold settings."""

    warn_limit: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    caution_limit: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    warn_enabled: bool | None = None
    caution_enabled: bool | None = None


class LookupSearchRequest(BaseModel):
    query: str = ""


class LookupSelectRequest(BaseModel):
    fdc_id: int


class LookupEntryRequest(BaseModel):
    """Amount of the selected food that was eaten, in grams."""

    amount_eaten: float | None = None


class LogCarbsIntent(BaseModel):
    """Payload sent by the voice shortcut."""

    carb_amount: float | None = None


class MockDataRequest(BaseModel):
    days: int = Field(default=DEFAULT_DAYS, gt=0, le=366)
    scenario: Scenario = Scenario.RANDOM
    clear_existing: bool = True
