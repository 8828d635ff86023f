"""
Tests for upstream request builders
"""

import pytest
from pydantic import ValidationError
from nbai_mcp.builders import (
    build_directions,
    build_distance_matrix,
    build_geocode,
    build_navigation,
    build_place_details,
    build_reverse_geocode,
    build_search_places,
)
from nbai_mcp.models import (
    DistanceMatrixArgs,
    GeocodeArgs,
    PlaceDetailsArgs,
    ReverseGeocodeArgs,
    RouteArgs,
    SearchPlacesArgs,
)

KEY = "test_key"

ROUTE_OPTIONALS = {
    "waypoints",
    "geometry",
    "avoid",
    "exclude",
    "approaches",
    "bearings",
    "departure_time",
    "truck_size",
    "truck_weight",
    "truck_axle_load",
    "route_type",
    "hazmat_type",
    "turn_angle_range",
    "alternatives",
    "altcount",
    "road_info",
    "cross_border",
    "drive_time_limits",
    "rest_times",
}


def test_geocode():
    request = build_geocode(GeocodeArgs(address="221B Baker Street"), KEY)

    assert request.endpoint == "/geocode"
    assert list(request.params.items()) == [("q", "221B Baker Street"), ("key", KEY)]


def test_reverse_geocode():
    request = build_reverse_geocode(ReverseGeocodeArgs(latitude=51.5, longitude=-0.15), KEY)

    assert request.endpoint == "/revgeocode"
    assert request.params == {"at": "51.5,-0.15", "key": KEY}


def test_place_details():
    request = build_place_details(PlaceDetailsArgs(place_id="here:pds:place:123"), KEY)

    assert request.endpoint == "/lookup"
    assert request.params == {"id": "here:pds:place:123", "key": KEY}


def test_search_places_query_only():
    """Without a location neither at nor in is sent"""
    request = build_search_places(SearchPlacesArgs(query="coffee"), KEY)

    assert request.endpoint == "/discover"
    assert request.params == {"q": "coffee", "key": KEY}


def test_search_places_radius_without_location():
    """A radius alone does not produce a circle filter"""
    request = build_search_places(SearchPlacesArgs(query="coffee", radius=500), KEY)

    assert "in" not in request.params
    assert "at" not in request.params


def test_search_places_location_only():
    args = SearchPlacesArgs(query="coffee", location={"latitude": 51.5, "longitude": -0.15})
    request = build_search_places(args, KEY)

    assert request.params["at"] == "51.5,-0.15"
    assert "in" not in request.params


def test_search_places_zero_radius():
    """A zero radius is treated as no radius"""
    args = SearchPlacesArgs(query="coffee", location={"latitude": 51.5, "longitude": -0.15}, radius=0)
    request = build_search_places(args, KEY)

    assert request.params["at"] == "51.5,-0.15"
    assert "in" not in request.params


def test_search_places_location_and_radius():
    args = SearchPlacesArgs(query="coffee", location={"latitude": 51.5, "longitude": -0.15}, radius=500)
    request = build_search_places(args, KEY)

    assert list(request.params) == ["q", "key", "at", "in"]
    assert request.params["in"] == "circle:51.5,-0.15;r=500"


def test_distance_matrix_required_params():
    """Required params come first, in order, and no optionals leak in"""
    args = DistanceMatrixArgs(origins=["1.0,2.0", "3.0,4.0"], destinations=["5.0,6.0"])
    request = build_distance_matrix(args, KEY)

    assert request.endpoint == "/distancematrix/json"
    assert list(request.params.items()) == [
        ("option", "flexible"),
        ("origins", "1.0,2.0|3.0,4.0"),
        ("destinations", "5.0,6.0"),
        ("mode", "car"),
        ("key", KEY),
    ]


def test_distance_matrix_empty_points_still_sent():
    """Empty origin/destination lists are sent as empty strings"""
    request = build_distance_matrix(DistanceMatrixArgs(origins=[], destinations=[]), KEY)

    assert request.params["origins"] == ""
    assert request.params["destinations"] == ""


def test_distance_matrix_optional_encodings():
    args = DistanceMatrixArgs(
        origins=["1,2"],
        destinations=["3,4"],
        mode="truck",
        bearings=[{"degree": 90, "range": 45}, {"degree": 180.5, "range": 30}],
        cross_border=False,
        departure_time=1700000000,
        avoid="toll|ferry",
        exclude="highway",
        route_type="shortest",
        hazmat_type="explosive",
        approaches="curb;;curb",
        turn_angle_range=35,
        truck_size="200,210,600",
        truck_weight=5000,
        truck_axle_load=2.5,
    )
    params = build_distance_matrix(args, KEY).params

    assert params["mode"] == "truck"
    assert params["bearings"] == "90,45|180.5,30"
    assert params["cross_border"] == "false"
    assert params["departure_time"] == "1700000000"
    assert params["avoid"] == "toll|ferry"
    assert params["exclude"] == "highway"
    assert params["route_type"] == "shortest"
    assert params["hazmat_type"] == "explosive"
    assert params["approaches"] == "curb;;curb"
    assert params["turn_angle_range"] == "35"
    assert params["truck_size"] == "200,210,600"
    assert params["truck_weight"] == "5000"
    assert params["truck_axle_load"] == "2.5"


def test_distance_matrix_accepts_stringified_origins():
    """MCP clients sometimes send arrays as JSON strings"""
    args = DistanceMatrixArgs(origins='["1,2", "3,4"]', destinations="5,6")
    params = build_distance_matrix(args, KEY).params

    assert params["origins"] == "1,2|3,4"
    assert params["destinations"] == "5,6"


def test_distance_matrix_requires_points():
    with pytest.raises(ValidationError):
        DistanceMatrixArgs(destinations=["5,6"])


@pytest.mark.parametrize(
    "builder, endpoint",
    [(build_directions, "/directions/json"), (build_navigation, "/navigation")],
)
def test_route_required_params(builder, endpoint):
    request = builder(RouteArgs(origin="1,2", destination="3,4"), KEY)

    assert request.endpoint == endpoint
    assert list(request.params.items()) == [
        ("option", "flexible"),
        ("origin", "1,2"),
        ("destination", "3,4"),
        ("mode", "car"),
        ("key", KEY),
    ]
    assert not ROUTE_OPTIONALS & set(request.params)


def test_route_optional_encodings():
    args = RouteArgs(
        origin="1,2",
        destination="3,4",
        waypoints=["5,6", "7,8"],
        geometry="polyline6",
        bearings=[{"degree": 0, "range": 180}],
        alternatives=True,
        altcount=2,
        road_info="toll_cost",
        cross_border=True,
        drive_time_limits=[3600, 1800.5],
        rest_times=[600],
        departure_time=0,
    )
    params = build_navigation(args, KEY).params

    assert params["waypoints"] == "5,6|7,8"
    assert params["geometry"] == "polyline6"
    assert params["bearings"] == "0,180"
    assert params["alternatives"] == "true"
    assert params["altcount"] == "2"
    assert params["road_info"] == "toll_cost"
    assert params["cross_border"] == "true"
    assert params["drive_time_limits"] == "3600,1800.5"
    assert params["rest_times"] == "600"
    # Zero is a supplied value, not a missing one
    assert params["departure_time"] == "0"


def test_directions_and_navigation_share_parameters():
    args = RouteArgs(origin="1,2", destination="3,4", avoid="toll", truck_weight=12000, mode="truck")

    assert build_directions(args, KEY).params == build_navigation(args, KEY).params
