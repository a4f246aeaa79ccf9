"""Trip optimization orchestration service."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from pydantic import ValidationError

from ...config import settings
from ...models.domain import Coordinates, Location
from ...schemas.trips import LocationModel, TripOptimizationRequest, TripOptimizationResponse
from ..geospatial import haversine_m
from ..outputs.trip_formatter import trip_result_to_response
from .cache import OptimizationCache, cache_key
from .days import classify_feasibility, locations_per_day, slice_into_days
from .models import ALGORITHM_NAME, OptimizationResult, TripMetadata
from .solver import improve_two_opt, nearest_neighbor_route, path_distance_m

logger = logging.getLogger(__name__)

result_cache = OptimizationCache(settings.result_cache_size)


def _round_meters(distance: float) -> int:
    # Halves round up rather than to even.
    return int(distance + 0.5)


def optimize_trip(
    locations: Sequence[Location],
    number_of_days: int,
    start_coordinates: Coordinates | None = None,
    *,
    max_passes: int | None = None,
    time_budget_seconds: float | None = None,
) -> OptimizationResult:
    """Order ``locations`` into a short open path and split it into days.

    With ``start_coordinates`` the candidates are stable-sorted by distance to
    that point first, which makes the closest location the starting point of
    the tour. The input sequence is never mutated.
    """
    if not locations:
        return OptimizationResult.empty()

    candidates = list(locations)
    if start_coordinates is not None:
        candidates.sort(key=lambda location: haversine_m(start_coordinates, location.coordinates))

    ordered = nearest_neighbor_route(candidates)
    ordered = improve_two_opt(
        ordered,
        max_passes=max_passes if max_passes is not None else settings.max_improvement_passes,
        time_budget_seconds=(
            time_budget_seconds if time_budget_seconds is not None else settings.improvement_time_budget_seconds
        ),
    )

    days = slice_into_days(ordered, number_of_days)
    per_day = locations_per_day(len(ordered), number_of_days)
    feasibility = classify_feasibility(
        per_day,
        comfortable_max=settings.comfortable_max_locations_per_day,
        packed_max=settings.packed_max_locations_per_day,
    )

    return OptimizationResult(
        days=days,
        ordered_locations=ordered,
        metadata=TripMetadata(
            algorithm_name=ALGORITHM_NAME,
            total_locations=len(ordered),
            locations_per_day=per_day,
            feasibility=feasibility,
            total_distance_meters=_round_meters(path_distance_m(ordered)),
        ),
    )


def _valid_locations(raw_locations: Sequence[Any]) -> list[Location]:
    valid: list[Location] = []
    dropped = 0
    for raw in raw_locations:
        try:
            valid.append(LocationModel.model_validate(raw).to_domain())
        except ValidationError:
            dropped += 1
    if dropped:
        logger.warning("Dropped %d location(s) with missing id, name or coordinates", dropped)
    return valid


def _parse_number_of_days(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Missing or invalid numberOfDays")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("Missing or invalid numberOfDays")
    number_of_days = int(value)
    if number_of_days < 1 or number_of_days > settings.max_number_of_days:
        raise ValueError("Missing or invalid numberOfDays")
    return number_of_days


def optimize_trip_request(payload: TripOptimizationRequest) -> TripOptimizationResponse:
    if not isinstance(payload.locations, list):
        raise ValueError("Missing or invalid locations array")
    number_of_days = _parse_number_of_days(payload.number_of_days)

    locations = _valid_locations(payload.locations)
    if not locations:
        raise ValueError("No valid locations provided")

    start_coordinates = payload.start_coordinates.to_domain() if payload.start_coordinates else None
    logger.info("Optimizing %d locations for %d days", len(locations), number_of_days)

    key = cache_key(locations, number_of_days, start_coordinates)
    result = result_cache.get(key)
    if result is None:
        result = optimize_trip(locations, number_of_days, start_coordinates)
        result_cache.set(key, result)
    else:
        logger.debug("Serving cached optimization %s", key[:12])

    logger.info(
        "Optimization result: %d days, %dm total, %s",
        len(result.days),
        result.metadata.total_distance_meters,
        result.metadata.feasibility,
    )
    return trip_result_to_response(result, destination=payload.destination)
