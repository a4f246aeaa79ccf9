"""Serializers for trip optimization outputs."""

from __future__ import annotations

from ..routing.models import OptimizationResult
from ...schemas.trips import DayModel, LocationModel, TripMetadataModel, TripOptimizationResponse


def trip_result_to_response(result: OptimizationResult, *, destination: str | None = None) -> TripOptimizationResponse:
    metadata = result.metadata
    return TripOptimizationResponse(
        success=True,
        destination=destination,
        days=[DayModel(day_number=day.day_number, location_ids=list(day.location_ids)) for day in result.days],
        ordered_locations=[LocationModel.from_domain(location) for location in result.ordered_locations],
        metadata=TripMetadataModel(
            algorithm_name=metadata.algorithm_name,
            total_locations=metadata.total_locations,
            locations_per_day=metadata.locations_per_day,
            feasibility=metadata.feasibility,
            total_distance_meters=metadata.total_distance_meters,
        ),
    )


def trip_result_to_json(result: OptimizationResult, *, destination: str | None = None) -> dict:
    return trip_result_to_response(result, destination=destination).model_dump(by_alias=True)
