"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from supabase import create_client

from carb_tracker.adapters.fdc_client import HttpxFdcClient
from carb_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from carb_tracker.adapters.supabase_threshold_repository import (
    SupabaseThresholdRepository,
)
from carb_tracker.config import Settings, parse_quick_add_values
from carb_tracker.services.cache import InMemoryCache
from carb_tracker.services.entries import EntryService
from carb_tracker.services.lookup import LookupService, LookupSession
from carb_tracker.services.mock_data import MockDataGenerator
from carb_tracker.services.refresh import RefreshNotifier
from carb_tracker.services.stats import StatsService
from carb_tracker.services.summary import SummaryService
from carb_tracker.services.thresholds import ThresholdService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    threshold_service: ThresholdService
    stats_service: StatsService
    summary_service: SummaryService
    lookup_service: LookupService
    lookup_session: LookupSession
    mock_data_generator: MockDataGenerator
    quick_add_values: list[float]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_service = EntryService(
        repository=SupabaseEntryRepository(supabase_client),
        notifier=RefreshNotifier(),
    )
    threshold_service = ThresholdService(SupabaseThresholdRepository(supabase_client))
    stats_service = StatsService(
        entry_service=entry_service,
        timezone_name=resolved_settings.timezone,
        locale=resolved_settings.locale,
        window_days=resolved_settings.statistics_window_days,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    lookup_service = LookupService(fdc_client=fdc_client, cache=InMemoryCache())

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        entry_service=entry_service,
        threshold_service=threshold_service,
        stats_service=stats_service,
        summary_service=SummaryService(stats_service, threshold_service),
        lookup_service=lookup_service,
        lookup_session=LookupSession(lookup_service, entry_service),
        mock_data_generator=MockDataGenerator(ZoneInfo(resolved_settings.timezone)),
        quick_add_values=parse_quick_add_values(resolved_settings.quick_add_values),
        close_resources=close_resources,
    )
