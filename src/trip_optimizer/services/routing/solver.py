"""Heuristic tour construction and refinement over haversine distances."""

from __future__ import annotations

import logging
import math
import time
from typing import Sequence

from ...models.domain import Location
from ..geospatial import haversine_m

DEFAULT_MAX_PASSES = 100

logger = logging.getLogger(__name__)


def _distance_matrix(locations: Sequence[Location]) -> list[list[float]]:
    n = len(locations)
    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            distance = haversine_m(locations[i].coordinates, locations[j].coordinates)
            matrix[i][j] = distance
            matrix[j][i] = distance
    return matrix


def path_distance_m(locations: Sequence[Location]) -> float:
    """Sum of consecutive distances along an open path (no return leg)."""

    return sum(
        haversine_m(current.coordinates, following.coordinates)
        for current, following in zip(locations, locations[1:])
    )


def nearest_neighbor_route(locations: Sequence[Location]) -> list[Location]:
    """Greedy tour starting at the first location.

    Remaining candidates are scanned in input order and only a strictly shorter
    hop replaces the current best, so ties go to the earliest location.
    """
    if len(locations) <= 1:
        return list(locations)

    ordered = [locations[0]]
    remaining = list(locations[1:])

    while remaining:
        current = ordered[-1]
        nearest_index = 0
        nearest_distance = math.inf
        for index, candidate in enumerate(remaining):
            distance = haversine_m(current.coordinates, candidate.coordinates)
            if distance < nearest_distance:
                nearest_index = index
                nearest_distance = distance
        ordered.append(remaining.pop(nearest_index))

    return ordered


def improve_two_opt(
    locations: Sequence[Location],
    *,
    max_passes: int = DEFAULT_MAX_PASSES,
    time_budget_seconds: float | None = None,
) -> list[Location]:
    """Refine an open path with 2-opt segment reversals.

    Each pass tries every pair ``(i, j)`` with ``i + 1 < j`` and reverses
    ``i+1..j`` as soon as that shortens the path. The first location never
    moves and there is no edge from the last location back to the first.

    Stops after a pass without improvement, after ``max_passes`` passes, or
    once ``time_budget_seconds`` has elapsed. Every applied reversal shortens
    the path, so the order held at any stopping point is the best seen.
    """
    route = list(locations)
    n = len(route)
    if n <= 3:
        return route

    matrix = _distance_matrix(route)
    order = list(range(n))
    deadline = time.monotonic() + time_budget_seconds if time_budget_seconds is not None else None

    passes = 0
    reversals = 0
    improved = True
    out_of_time = False

    while improved and passes < max_passes and not out_of_time:
        improved = False
        passes += 1
        for i in range(n - 2):
            if deadline is not None and time.monotonic() >= deadline:
                out_of_time = True
                break
            for j in range(i + 2, n):
                start, segment_start, segment_end = order[i], order[i + 1], order[j]
                current = matrix[start][segment_start]
                candidate = matrix[start][segment_end]
                if j + 1 < n:
                    following = order[j + 1]
                    current += matrix[segment_end][following]
                    candidate += matrix[segment_start][following]
                if candidate < current:
                    order[i + 1 : j + 1] = order[i + 1 : j + 1][::-1]
                    improved = True
                    reversals += 1

    logger.debug(
        "2-opt finished: locations=%d passes=%d reversals=%d time_budget_hit=%s",
        n,
        passes,
        reversals,
        out_of_time,
    )
    return [route[index] for index in order]
