"""Trip optimization request/response schemas."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.domain import Coordinates, Location


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CoordinatesModel(CamelModel):
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    def to_domain(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng)


class LocationModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    coordinates: CoordinatesModel

    def to_domain(self) -> Location:
        return Location(id=self.id, name=self.name, coordinates=self.coordinates.to_domain())

    @classmethod
    def from_domain(cls, location: Location) -> "LocationModel":
        return cls(
            id=location.id,
            name=location.name,
            coordinates=CoordinatesModel(lat=location.coordinates.lat, lng=location.coordinates.lng),
        )


class TripOptimizationRequest(CamelModel):
    """Raw request body.

    ``locations`` and ``number_of_days`` are left loosely typed so that the
    service can drop malformed locations individually and answer with a 400
    instead of rejecting the whole body.
    """

    locations: Any = None
    number_of_days: Any = None
    start_coordinates: Optional[CoordinatesModel] = None
    destination: Optional[str] = Field(default=None, description="Free-form destination label echoed back.")


class DayModel(CamelModel):
    day_number: int = Field(..., ge=1)
    location_ids: List[str]


class TripMetadataModel(CamelModel):
    algorithm_name: str
    total_locations: int
    locations_per_day: int
    feasibility: Literal["comfortable", "packed", "very_packed"]
    total_distance_meters: int


class TripOptimizationResponse(CamelModel):
    success: bool = True
    destination: Optional[str] = None
    days: List[DayModel]
    ordered_locations: List[LocationModel]
    metadata: TripMetadataModel
