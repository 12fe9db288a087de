"""Food lookup service integrating USDA FDC."""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

import httpx

from carb_tracker.adapters.fdc_client import CARBOHYDRATE_NUTRIENT_ID, FdcClient
from carb_tracker.domain.entries import CarbEntry
from carb_tracker.domain.lookup import FoodCandidate, FoodLookupError, LookupErrorKind
from carb_tracker.services.cache import Cache
from carb_tracker.services.entries import EntryService

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class LookupService:
    """Searches foods and fetches carbohydrate details, with caching."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str) -> list[FoodCandidate]:
        """Search foods and return candidates with carbs per 100g."""
        self._require_api_key()
        cache_key = f"fdc:search:{query.strip().lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return list(cached)

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query), action="search"
        )
        candidates = _parse_candidates(payload)
        self.cache.set(cache_key, candidates, ttl_seconds=self.search_ttl_seconds)
        _logger.info("Food search: query=%s results=%s", query, len(candidates))
        return candidates

    async def detail(self, fdc_id: int) -> float | None:
        """Return carbs per 100g for a food, or None if it cannot be found."""
        self._require_api_key()
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, float):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id), action=f"detail:{fdc_id}"
        )
        if payload is None:
            return None
        try:
            carbs = _extract_carbs(payload.get("foodNutrients") or [])
        except (AttributeError, TypeError, ValueError):
            _logger.warning("Unreadable food detail for fdc_id=%s", fdc_id)
            return None
        self.cache.set(cache_key, carbs, ttl_seconds=self.food_ttl_seconds)
        return carbs

    def _require_api_key(self) -> None:
        if not self.fdc_client.api_key.strip():
            raise FoodLookupError(LookupErrorKind.NO_API_KEY)

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[object]]", *, action: str
    ) -> object:
        """Call the client, retrying errors that are worth retrying."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                error = to_lookup_error(exc)
                _logger.warning(
                    "Food lookup %s failed (attempt %s/%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    error.title,
                )
                if attempt > self.retry_attempts or not error.can_retry:
                    if error is exc:
                        raise
                    raise error from exc
                await asyncio.sleep(self.retry_delay_seconds)


def to_lookup_error(exc: Exception) -> FoodLookupError:
    """Translate a client exception into a FoodLookupError."""
    if isinstance(exc, FoodLookupError):
        return exc
    if isinstance(exc, httpx.TimeoutException):
        return FoodLookupError(LookupErrorKind.TIMEOUT)
    if isinstance(exc, httpx.NetworkError):
        return FoodLookupError(LookupErrorKind.NETWORK_UNAVAILABLE)
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        if status_code in {401, 403}:
            return FoodLookupError(
                LookupErrorKind.INVALID_API_KEY, status_code=status_code
            )
        if 400 <= status_code < 600:
            return FoodLookupError(
                LookupErrorKind.SERVER_ERROR, status_code=status_code
            )
        return FoodLookupError(LookupErrorKind.UNKNOWN, detail=f"HTTP {status_code}")
    if isinstance(exc, (KeyError, TypeError, ValueError)):
        return FoodLookupError(LookupErrorKind.PARSE_ERROR, detail=str(exc))
    return FoodLookupError(LookupErrorKind.UNKNOWN, detail=str(exc))


def _parse_candidates(payload: object) -> list[FoodCandidate]:
    foods = payload.get("foods") if isinstance(payload, dict) else None
    if not isinstance(foods, list):
        raise FoodLookupError(LookupErrorKind.PARSE_ERROR, detail="missing foods")
    try:
        candidates = []
        for food in foods:
            carbs = _extract_carbs(food.get("foodNutrients") or [])
            candidates.append(
                FoodCandidate(
                    fdc_id=int(food["fdcId"]),
                    name=str(food.get("description", "")),
                    carbs_per_100g=carbs,
                    still_loading_detail=carbs <= 0,
                )
            )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise FoodLookupError(LookupErrorKind.PARSE_ERROR, detail=str(exc)) from exc
    return candidates


def _extract_carbs(food_nutrients: list[dict[str, object]]) -> float:
    """Return the carbohydrate amount, accepting search and detail layouts."""
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        if nutrient_id != CARBOHYDRATE_NUTRIENT_ID:
            continue
        amount = nutrient.get("value", nutrient.get("amount"))
        if amount is not None:
            return float(amount)
    return 0.0


@dataclass
class LookupSession:
    """Single-user lookup state: results, selection and the last error.

    Each search takes a new generation number; a response that arrives after
    a newer search has started is discarded, so the last issued search owns
    the displayed results.
    """

    lookup_service: LookupService
    entry_service: EntryService
    foods: list[FoodCandidate] = field(default_factory=list)
    selected: FoodCandidate | None = None
    is_loading: bool = False
    has_searched: bool = False
    error: FoodLookupError | None = None
    last_query: str = ""
    _generation: int = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def search(self, query: str) -> bool:
        """Run a search; return False if a newer search superseded it."""
        self._generation += 1
        generation = self._generation
        if not query.strip():
            self.foods = []
            self.selected = None
            self.has_searched = False
            self.is_loading = False
            self.error = None
            return True

        self.last_query = query
        self.is_loading = True
        self.selected = None
        self.error = None
        try:
            results = await self.lookup_service.search(query)
        except FoodLookupError as exc:
            if generation != self._generation:
                _logger.info("Discarding stale failed search for %s", query)
                return False
            self.foods = []
            self.error = exc
        else:
            if generation != self._generation:
                _logger.info("Discarding stale search results for %s", query)
                return False
            self.foods = list(results)
        self.has_searched = True
        self.is_loading = False
        return True

    async def retry(self) -> bool:
        """Re-run the last non-blank search; False if there is none to repeat."""
        if not self.last_query.strip():
            return False
        return await self.search(self.last_query)

    async def load_detail(self, fdc_id: int) -> FoodCandidate | None:
        """Fetch carbs for a candidate whose search result had none."""
        candidate = self._find(fdc_id)
        if candidate is None or not candidate.still_loading_detail:
            return candidate
        try:
            carbs = await self.lookup_service.detail(fdc_id)
        except FoodLookupError:
            carbs = 0.0
        if carbs is None:
            return self._find(fdc_id)
        return self._replace(
            fdc_id, replace(candidate, carbs_per_100g=carbs, still_loading_detail=False)
        )

    def select(self, fdc_id: int) -> FoodCandidate | None:
        self.selected = self._find(fdc_id)
        return self.selected

    def calculated_carbs(self, amount_eaten: float | None) -> float:
        if self.selected is None or amount_eaten is None:
            return 0.0
        if self.selected.carbs_per_100g <= 0:
            return 0.0
        return self.selected.carbs_per_100g / 100.0 * amount_eaten

    def add_entry(self, amount_eaten: float | None) -> CarbEntry | None:
        """Log the selected food's carbs for the amount eaten."""
        if self.selected is None or amount_eaten is None or amount_eaten <= 0:
            return None
        entry = self.entry_service.add_from_food(
            self.selected.carbs_per_100g, amount_eaten
        )
        if entry is not None:
            self.selected = None
        return entry

    def reset(self) -> None:
        self._generation += 1
        self.foods = []
        self.selected = None
        self.is_loading = False
        self.has_searched = False
        self.error = None
        self.last_query = ""

    def _find(self, fdc_id: int) -> FoodCandidate | None:
        return next((food for food in self.foods if food.fdc_id == fdc_id), None)

    def _replace(self, fdc_id: int, updated: FoodCandidate) -> FoodCandidate | None:
        for index, food in enumerate(self.foods):
            if food.fdc_id == fdc_id:
                self.foods[index] = updated
                if self.selected is not None and self.selected.fdc_id == fdc_id:
                    self.selected = updated
                return updated
        return None
