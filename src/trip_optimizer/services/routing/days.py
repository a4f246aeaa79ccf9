"""Splitting an ordered tour into travel days."""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import Location
from .models import Day, Feasibility

COMFORTABLE_MAX_PER_DAY = 4
PACKED_MAX_PER_DAY = 6


def slice_into_days(ordered_locations: Sequence[Location], number_of_days: int) -> list[Day]:
    """Cut the tour into ``number_of_days`` contiguous groups.

    Sizes differ by at most one and the first ``N % D`` days take the larger
    size. When there are more days than locations the trailing days are empty.
    """
    total = len(ordered_locations)
    if total == 0 or number_of_days <= 0:
        return []

    base_per_day, extra = divmod(total, number_of_days)
    days: list[Day] = []
    cursor = 0
    for index in range(number_of_days):
        size = base_per_day + (1 if index < extra else 0)
        chunk = ordered_locations[cursor : cursor + size]
        days.append(Day(day_number=index + 1, location_ids=[location.id for location in chunk]))
        cursor += size
    return days


def locations_per_day(total_locations: int, number_of_days: int) -> int:
    if total_locations <= 0:
        return 0
    if number_of_days <= 0:
        return total_locations
    return math.ceil(total_locations / number_of_days)


def classify_feasibility(
    per_day: int,
    *,
    comfortable_max: int = COMFORTABLE_MAX_PER_DAY,
    packed_max: int = PACKED_MAX_PER_DAY,
) -> Feasibility:
    if per_day <= comfortable_max:
        return "comfortable"
    if per_day <= packed_max:
        return "packed"
    return "very_packed"
