"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from ...models.domain import Location

Feasibility = Literal["comfortable", "packed", "very_packed"]

ALGORITHM_NAME = "Global TSP + Slicing"


@dataclass(slots=True)
class Day:
    day_number: int
    location_ids: List[str] = field(default_factory=list)


@dataclass(slots=True)
class TripMetadata:
    algorithm_name: str
    total_locations: int
    locations_per_day: int
    feasibility: Feasibility
    total_distance_meters: int


@dataclass(slots=True)
class OptimizationResult:
    days: List[Day]
    ordered_locations: List[Location]
    metadata: TripMetadata

    @classmethod
    def empty(cls) -> "OptimizationResult":
        return cls(
            days=[],
            ordered_locations=[],
            metadata=TripMetadata(
                algorithm_name=ALGORITHM_NAME,
                total_locations=0,
                locations_per_day=0,
                feasibility="comfortable",
                total_distance_meters=0,
            ),
        )
