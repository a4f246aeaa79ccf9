import pytest

from trip_optimizer.models.domain import Coordinates, Location
from trip_optimizer.schemas.trips import TripOptimizationRequest
from trip_optimizer.services.outputs.trip_formatter import trip_result_to_json
from trip_optimizer.services.routing import service as routing_service
from trip_optimizer.services.routing.service import optimize_trip, optimize_trip_request
from trip_optimizer.services.routing.solver import nearest_neighbor_route, path_distance_m


def _location(lid: str, lat: float, lng: float) -> Location:
    return Location(id=lid, name=f"Place {lid}", coordinates=Coordinates(lat=lat, lng=lng))


def _raw_location(lid: str, lat: float, lng: float) -> dict:
    return {"id": lid, "name": f"Place {lid}", "coordinates": {"lat": lat, "lng": lng}}


@pytest.fixture(autouse=True)
def clear_result_cache():
    routing_service.result_cache.clear()
    yield
    routing_service.result_cache.clear()


def test_three_points_on_a_line_over_two_days():
    locations = [_location("A", 0, 0), _location("B", 0, 1), _location("C", 0, 2)]

    result = optimize_trip(locations, 2)

    assert [day.location_ids for day in result.days] == [["A", "B"], ["C"]]
    assert [location.id for location in result.ordered_locations] == ["A", "B", "C"]
    assert result.metadata.total_locations == 3
    assert result.metadata.locations_per_day == 2
    assert result.metadata.feasibility == "comfortable"
    assert result.metadata.total_distance_meters == round(path_distance_m(locations))


def test_empty_input_returns_zero_valued_result():
    result = optimize_trip([], 3)

    assert result.days == []
    assert result.ordered_locations == []
    assert result.metadata.total_locations == 0
    assert result.metadata.locations_per_day == 0
    assert result.metadata.total_distance_meters == 0
    assert result.metadata.feasibility == "comfortable"
    assert result.metadata.algorithm_name == "Global TSP + Slicing"


@pytest.mark.parametrize(("count", "expected"), [(8, "comfortable"), (14, "very_packed")])
def test_feasibility_reported_in_metadata(count: int, expected: str):
    locations = [_location(f"L{index}", 0, index * 0.01) for index in range(count)]

    result = optimize_trip(locations, 2)

    assert result.metadata.feasibility == expected


def test_two_clusters_are_not_interleaved():
    west = [_location(f"W{index}", 0.001 * index, 0.001 * index) for index in range(4)]
    east = [_location(f"E{index}", 0.001 * index, 10 + 0.001 * index) for index in range(4)]
    interleaved = [spot for pair in zip(west, east) for spot in pair]

    result = optimize_trip(interleaved, 2)
    clusters = [location.id[0] for location in result.ordered_locations]
    switches = sum(1 for current, following in zip(clusters, clusters[1:]) if current != following)

    assert switches == 1
    assert [{lid[0] for lid in day.location_ids} for day in result.days] == [{"W"}, {"E"}]
    assert result.metadata.total_distance_meters <= round(path_distance_m(nearest_neighbor_route(interleaved)))


def test_start_coordinates_bias_the_first_stop():
    locations = [_location("A", 0, 0), _location("B", 0, 1), _location("C", 0, 2)]

    result = optimize_trip(locations, 1, start_coordinates=Coordinates(lat=0, lng=2.1))

    assert [location.id for location in result.ordered_locations] == ["C", "B", "A"]


def test_every_location_is_assigned_exactly_once():
    locations = [_location(f"L{index}", (index * 37 % 11) * 0.01, (index * 17 % 13) * 0.01) for index in range(23)]

    result = optimize_trip(locations, 5)
    assigned = [lid for day in result.days for lid in day.location_ids]

    assert sorted(assigned) == sorted(location.id for location in locations)
    assert [day.day_number for day in result.days] == [1, 2, 3, 4, 5]
    assert sorted(location.id for location in result.ordered_locations) == sorted(assigned)


def test_input_sequence_is_not_mutated():
    locations = [_location("A", 0, 2), _location("B", 0, 0), _location("C", 0, 1)]
    snapshot = list(locations)

    optimize_trip(locations, 2, start_coordinates=Coordinates(lat=0, lng=0))

    assert locations == snapshot


def test_request_filters_invalid_locations():
    payload = TripOptimizationRequest(
        locations=[
            _raw_location("A", 0, 0),
            {"id": "B", "coordinates": {"lat": 0, "lng": 1}},
            _raw_location("C", 95, 0),
            {"id": "D", "name": "Place D"},
            _raw_location("E", 0, 2),
        ],
        number_of_days=1,
        destination="Chiang Mai",
    )

    response = optimize_trip_request(payload)

    assert response.destination == "Chiang Mai"
    assert [location.id for location in response.ordered_locations] == ["A", "E"]
    assert response.metadata.total_locations == 2


@pytest.mark.parametrize(
    ("locations", "number_of_days", "message"),
    [
        (None, 2, "Missing or invalid locations array"),
        ("not-a-list", 2, "Missing or invalid locations array"),
        ([_raw_location("A", 0, 0)], 0, "Missing or invalid numberOfDays"),
        ([_raw_location("A", 0, 0)], None, "Missing or invalid numberOfDays"),
        ([_raw_location("A", 0, 0)], 1.5, "Missing or invalid numberOfDays"),
        ([], 2, "No valid locations provided"),
        ([{"id": "A"}], 2, "No valid locations provided"),
    ],
)
def test_request_rejects_invalid_input(locations, number_of_days, message: str):
    payload = TripOptimizationRequest(locations=locations, number_of_days=number_of_days)

    with pytest.raises(ValueError, match=message):
        optimize_trip_request(payload)


def test_repeated_request_is_served_from_cache(monkeypatch):
    calls = []
    original = routing_service.optimize_trip

    def counting_optimize(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(routing_service, "optimize_trip", counting_optimize)
    payload = TripOptimizationRequest(
        locations=[_raw_location("A", 0, 0), _raw_location("B", 0, 1)],
        number_of_days=1,
    )

    first = optimize_trip_request(payload)
    second = optimize_trip_request(payload)

    assert len(calls) == 1
    assert first == second


def test_result_serializes_with_camel_case_keys():
    result = optimize_trip([_location("A", 0, 0), _location("B", 0, 1)], 1)

    document = trip_result_to_json(result)

    assert document["days"] == [{"dayNumber": 1, "locationIds": ["A", "B"]}]
    assert document["orderedLocations"][0] == {"id": "A", "name": "Place A", "coordinates": {"lat": 0.0, "lng": 0.0}}
    assert set(document["metadata"]) == {
        "algorithmName",
        "totalLocations",
        "locationsPerDay",
        "feasibility",
        "totalDistanceMeters",
    }


def test_request_rejects_number_of_days_above_configured_limit(monkeypatch):
    monkeypatch.setattr(routing_service.settings, "max_number_of_days", 3)
    locations = [_raw_location("A", 0, 0), _raw_location("B", 0, 1)]

    accepted = optimize_trip_request(TripOptimizationRequest(locations=locations, number_of_days=3))
    assert [day.day_number for day in accepted.days] == [1, 2, 3]

    with pytest.raises(ValueError, match="Missing or invalid numberOfDays"):
        optimize_trip_request(TripOptimizationRequest(locations=locations, number_of_days=4))


def test_request_rejects_huge_number_of_days_before_slicing(monkeypatch):
    def fail_slicing(*args, **kwargs):
        raise AssertionError("slicing should not run")

    monkeypatch.setattr(routing_service, "slice_into_days", fail_slicing)
    payload = TripOptimizationRequest(locations=[_raw_location("A", 0, 0)], number_of_days=3_000_000)

    with pytest.raises(ValueError, match="Missing or invalid numberOfDays"):
        optimize_trip_request(payload)
