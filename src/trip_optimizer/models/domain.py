"""Domain models for points of interest on a trip."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Location:
    """A point of interest the traveller wants to visit."""

    id: str
    name: str
    coordinates: Coordinates
