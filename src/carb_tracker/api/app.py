"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, Response, status

from carb_tracker.api.admin import router as admin_router
from carb_tracker.api.models import (
    EntryCreate,
    LogCarbsIntent,
    LookupEntryRequest,
    LookupSearchRequest,
    LookupSelectRequest,
    QuickAddRequest,
    ThresholdUpdate,
)
from carb_tracker.app_logging import configure_logging
from carb_tracker.containers import AppContainer
from carb_tracker.domain.entries import CarbEntry, DayGroup
from carb_tracker.domain.lookup import FoodCandidate, FoodLookupError, LookupErrorKind
from carb_tracker.domain.stats import CarbStatistics, DayExtreme
from carb_tracker.domain.thresholds import ThresholdSettings
from carb_tracker.services.formatting import format_day_total, format_grams
from carb_tracker.services.lookup import LookupSession
from carb_tracker.services.summary import logged_message

INVALID_AMOUNT = "Invalid carb amount"


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    def _require_lookup(request: Request) -> LookupSession:
        state_container = _container(request)
        if not state_container.settings.is_lookup_available:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Food lookup is disabled",
            )
        return state_container.lookup_session

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/entries")
    async def list_entries(request: Request) -> dict[str, object]:
        """Return every entry, newest first."""
        state_container = _container(request)
        entries = sorted(
            state_container.entry_service.list_entries(),
            key=lambda entry: entry.timestamp,
            reverse=True,
        )
        locale = state_container.settings.locale
        return {"entries": [_serialize_entry(entry, locale) for entry in entries]}

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def create_entry(payload: EntryCreate, request: Request) -> dict[str, object]:
        """Log a manually entered amount."""
        state_container = _container(request)
        entry = state_container.entry_service.add_carbs(payload.amount)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=INVALID_AMOUNT
            )
        return _serialize_entry(entry, state_container.settings.locale)

    @app.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entry(entry_id: UUID, request: Request) -> Response:
        """Delete a single entry."""
        if not _container(request).entry_service.delete(entry_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Entry {entry_id} not found",
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/quick-add")
    async def quick_add_presets(request: Request) -> dict[str, object]:
        """Return the quick add presets with display labels."""
        state_container = _container(request)
        locale = state_container.settings.locale
        return {
            "enabled": state_container.settings.quick_add_enabled,
            "values": [
                {"value": value, "label": format_grams(value, locale)}
                for value in state_container.quick_add_values
            ],
        }

    @app.post("/entries/quick-add", status_code=status.HTTP_201_CREATED)
    async def quick_add(
        payload: QuickAddRequest, request: Request
    ) -> dict[str, object]:
        """Log one of the preset amounts."""
        state_container = _container(request)
        if not state_container.settings.quick_add_enabled:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Quick add is disabled"
            )
        if payload.value not in state_container.quick_add_values:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{payload.value} is not a quick add preset",
            )
        entry = state_container.entry_service.quick_add(payload.value)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=INVALID_AMOUNT
            )
        return _serialize_entry(entry, state_container.settings.locale)

    @app.get("/history")
    async def history(request: Request) -> dict[str, object]:
        """Return entries grouped by day with day total lines."""
        state_container = _container(request)
        thresholds = state_container.threshold_service.get_thresholds()
        groups = state_container.stats_service.get_history()
        locale = state_container.settings.locale
        return {
            "days": [_serialize_day(group, thresholds, locale) for group in groups]
        }

    @app.get("/today")
    async def today(request: Request) -> dict[str, object]:
        """Return today's total and its classification."""
        return _container(request).summary_service.today().as_dict()

    @app.get("/statistics")
    async def statistics(request: Request) -> dict[str, object]:
        """Return the daily series, weekly series and summary figures."""
        state_container = _container(request)
        stats = state_container.stats_service.get_statistics()
        return _serialize_statistics(stats, state_container.settings.locale)

    @app.get("/settings/thresholds")
    async def get_thresholds(request: Request) -> dict[str, object]:
        thresholds = _container(request).threshold_service.get_thresholds()
        return _serialize_thresholds(thresholds)

    @app.put("/settings/thresholds")
    async def update_thresholds(
        payload: ThresholdUpdate, request: Request
    ) -> dict[str, object]:
        """Update any of the four threshold settings."""
        updated = _container(request).threshold_service.update_thresholds(
            **payload.model_dump(exclude_none=True)
        )
        logger.info("Thresholds updated: %s", updated)
        return _serialize_thresholds(updated)

    @app.get("/sync/revision")
    async def sync_revision(request: Request) -> dict[str, int]:
        """Return the entry revision clients compare to decide on a refetch."""
        return {"revision": _container(request).entry_service.notifier.revision}

    @app.get("/lookup")
    async def lookup_state(request: Request) -> dict[str, object]:
        return _serialize_lookup(_require_lookup(request))

    @app.post("/lookup/search")
    async def lookup_search(
        payload: LookupSearchRequest, request: Request
    ) -> dict[str, object]:
        """Search foods; a superseded search reports the newer state."""
        session = _require_lookup(request)
        applied = await session.search(payload.query)
        if applied and session.error is not None:
            raise HTTPException(
                status_code=_lookup_error_status(session.error),
                detail=_serialize_lookup_error(session.error),
            )
        return {**_serialize_lookup(session), "superseded": not applied}

    @app.post("/lookup/retry")
    async def lookup_retry(request: Request) -> dict[str, object]:
        """Repeat the last search, typically after a retryable failure."""
        session = _require_lookup(request)
        if not session.last_query.strip():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail="No search to retry"
            )
        applied = await session.retry()
        if applied and session.error is not None:
            raise HTTPException(
                status_code=_lookup_error_status(session.error),
                detail=_serialize_lookup_error(session.error),
            )
        return {**_serialize_lookup(session), "superseded": not applied}

    @app.post("/lookup/foods/{fdc_id}/detail")
    async def lookup_detail(fdc_id: int, request: Request) -> dict[str, object]:
        """Load carbs for a candidate the search returned without them."""
        session = _require_lookup(request)
        candidate = await session.load_detail(fdc_id)
        if candidate is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Food {fdc_id} is not in the current results",
            )
        return _serialize_candidate(candidate)

    @app.post("/lookup/select")
    async def lookup_select(
        payload: LookupSelectRequest, request: Request
    ) -> dict[str, object]:
        session = _require_lookup(request)
        candidate = session.select(payload.fdc_id)
        if candidate is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Food {payload.fdc_id} is not in the current results",
            )
        return _serialize_candidate(candidate)

    @app.post("/lookup/entries", status_code=status.HTTP_201_CREATED)
    async def lookup_entry(
        payload: LookupEntryRequest, request: Request
    ) -> dict[str, object]:
        """Log the carbs in the eaten amount of the selected food."""
        session = _require_lookup(request)
        entry = session.add_entry(payload.amount_eaten)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=INVALID_AMOUNT
            )
        return _serialize_entry(entry, _container(request).settings.locale)

    @app.delete("/lookup", status_code=status.HTTP_204_NO_CONTENT)
    async def lookup_reset(request: Request) -> Response:
        _require_lookup(request).reset()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/intents/log-carbs")
    async def log_carbs_intent(
        payload: LogCarbsIntent, request: Request
    ) -> dict[str, str]:
        """Voice shortcut: log an amount and return the spoken reply."""
        entry = _container(request).entry_service.log_shortcut(payload.carb_amount)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=INVALID_AMOUNT
            )
        return {"dialog": logged_message(entry)}

    @app.get("/intents/daily-summary")
    async def daily_summary_intent(request: Request) -> dict[str, str]:
        """Voice shortcut: spoken summary of today's intake."""
        return {"dialog": _container(request).summary_service.daily_summary_message()}

    return app


def _serialize_entry(entry: CarbEntry, locale: str) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "timestamp": entry.timestamp.isoformat(),
        "value": entry.value,
        "value_text": format_grams(entry.value, locale),
    }


def _serialize_day(
    group: DayGroup, thresholds: ThresholdSettings, locale: str
) -> dict[str, object]:
    total = group.total()
    return {
        "day": group.day.isoformat(),
        "total": total,
        "total_line": format_day_total(total, thresholds, locale),
        "entries": [_serialize_entry(entry, locale) for entry in group.entries],
    }


def _serialize_extreme(extreme: DayExtreme | None, locale: str) -> dict | None:
    if extreme is None:
        return None
    return {
        "day": extreme.day.isoformat(),
        "value": extreme.value,
        "value_text": format_grams(extreme.value, locale),
    }


def _serialize_statistics(stats: CarbStatistics, locale: str) -> dict[str, object]:
    return {
        "daily": [
            {"day": item.day.isoformat(), "total": item.total} for item in stats.daily
        ],
        "weekly": [
            {"week_start": item.week_start.isoformat(), "average": item.average}
            for item in stats.weekly
        ],
        "weekly_average": stats.weekly_average,
        "weekly_average_text": format_grams(stats.weekly_average, locale),
        "monthly_total": stats.monthly_total,
        "monthly_total_text": format_grams(stats.monthly_total, locale),
        "lowest_day": _serialize_extreme(stats.lowest_day, locale),
        "highest_day": _serialize_extreme(stats.highest_day, locale),
    }


def _serialize_thresholds(thresholds: ThresholdSettings) -> dict[str, object]:
    return {
        "warn_limit": thresholds.warn_limit,
        "caution_limit": thresholds.caution_limit,
        "warn_enabled": thresholds.warn_enabled,
        "caution_enabled": thresholds.caution_enabled,
    }


def _serialize_candidate(candidate: FoodCandidate) -> dict[str, object]:
    return {
        "fdc_id": candidate.fdc_id,
        "name": candidate.name,
        "carbs_per_100g": candidate.carbs_per_100g,
        "still_loading_detail": candidate.still_loading_detail,
    }


def _serialize_lookup(session: LookupSession) -> dict[str, object]:
    return {
        "query": session.last_query,
        "foods": [_serialize_candidate(food) for food in session.foods],
        "selected": (
            _serialize_candidate(session.selected) if session.selected else None
        ),
        "has_searched": session.has_searched,
        "is_loading": session.is_loading,
        "error": _serialize_lookup_error(session.error),
    }


def _lookup_error_status(error: FoodLookupError) -> int:
    if error.kind in {LookupErrorKind.NO_API_KEY, LookupErrorKind.INVALID_API_KEY}:
        return status.HTTP_401_UNAUTHORIZED
    return status.HTTP_502_BAD_GATEWAY


def _serialize_lookup_error(error: FoodLookupError | None) -> dict | None:
    if error is None:
        return None
    payload = error.as_dict()
    if error.kind == LookupErrorKind.SERVER_ERROR:
        payload["status_code"] = error.status_code
    return payload
