"""Tests for configuration helpers."""

from carb_tracker.config import Settings, parse_quick_add_values
from tests.conftest import SERVICE_KEY


def test_parse_quick_add_values_skips_junk() -> None:
    assert parse_quick_add_values("1, 2.5,,abc,-3,0,nan,inf,2.5,4") == [1.0, 2.5, 4.0]


def test_parse_quick_add_values_none() -> None:
    assert parse_quick_add_values(None) == []


def test_lookup_needs_toggle_and_api_key() -> None:
    base = {
        "supabase_url": "https://example.supabase.co",
        "supabase_service_key": SERVICE_KEY,
        "admin_token": "admin-token",
    }

    assert Settings(**base, lookup_enabled=True, fdc_api_key="key").is_lookup_available
    blank_key = Settings(**base, lookup_enabled=True, fdc_api_key=" ")
    assert not blank_key.is_lookup_available
    assert not Settings(**base, fdc_api_key="key").is_lookup_available
