"""
Request builders for the NextBillion.ai API.

Each builder is a pure function turning a typed argument model into an
UpstreamRequest. Required parameters always appear; optional parameters appear
only when the matching argument was supplied.
"""

from .models import (
    Bearing,
    DistanceMatrixArgs,
    GeocodeArgs,
    PlaceDetailsArgs,
    ReverseGeocodeArgs,
    RouteArgs,
    SearchPlacesArgs,
    UpstreamRequest,
)
from .utils import format_bool, format_number

GEOCODE_ENDPOINT = "/geocode"
REVERSE_GEOCODE_ENDPOINT = "/revgeocode"
DISCOVER_ENDPOINT = "/discover"
LOOKUP_ENDPOINT = "/lookup"
DISTANCE_MATRIX_ENDPOINT = "/distancematrix/json"
DIRECTIONS_ENDPOINT = "/directions/json"
NAVIGATION_ENDPOINT = "/navigation"


def _lat_lng(latitude: float, longitude: float) -> str:
    return f"{format_number(latitude)},{format_number(longitude)}"


def _bearings(bearings: list[Bearing]) -> str:
    return "|".join(f"{format_number(b.degree)},{format_number(b.range)}" for b in bearings)


def _add_text(params: dict[str, str], key: str, value: str | None) -> None:
    if value:
        params[key] = value


def _add_number(params: dict[str, str], key: str, value: int | float | None) -> None:
    if value is not None:
        params[key] = format_number(value)


def _add_bool(params: dict[str, str], key: str, value: bool | None) -> None:
    if value is not None:
        params[key] = format_bool(value)


# Place lookup family


def build_geocode(args: GeocodeArgs, api_key: str) -> UpstreamRequest:
    """Forward geocoding: address -> place"""
    return UpstreamRequest(endpoint=GEOCODE_ENDPOINT, params={"q": args.address, "key": api_key})


def build_reverse_geocode(args: ReverseGeocodeArgs, api_key: str) -> UpstreamRequest:
    """Reverse geocoding: coordinates -> place"""
    return UpstreamRequest(
        endpoint=REVERSE_GEOCODE_ENDPOINT,
        params={"at": _lat_lng(args.latitude, args.longitude), "key": api_key},
    )


def build_search_places(args: SearchPlacesArgs, api_key: str) -> UpstreamRequest:
    """
    Free-text place search.

    `at` biases results towards the location; `in` restricts them to a circle
    and is only sent when both a location and a radius are given.
    """
    params = {"q": args.query, "key": api_key}

    if args.location is not None:
        center = _lat_lng(args.location.latitude, args.location.longitude)
        params["at"] = center
        if args.radius:
            params["in"] = f"circle:{center};r={format_number(args.radius)}"

    return UpstreamRequest(endpoint=DISCOVER_ENDPOINT, params=params)


def build_place_details(args: PlaceDetailsArgs, api_key: str) -> UpstreamRequest:
    """Place lookup by ID"""
    return UpstreamRequest(endpoint=LOOKUP_ENDPOINT, params={"id": args.place_id, "key": api_key})


# Distance matrix family


def build_distance_matrix(args: DistanceMatrixArgs, api_key: str) -> UpstreamRequest:
    """Distance/duration for every origin-destination pair"""
    params = {
        "option": "flexible",
        "origins": "|".join(args.origins),
        "destinations": "|".join(args.destinations),
        "mode": args.mode or "car",
        "key": api_key,
    }

    if args.bearings is not None:
        params["bearings"] = _bearings(args.bearings)
    _add_text(params, "approaches", args.approaches)
    _add_bool(params, "cross_border", args.cross_border)
    _add_number(params, "departure_time", args.departure_time)
    _add_text(params, "avoid", args.avoid)
    _add_text(params, "exclude", args.exclude)
    _add_text(params, "route_type", args.route_type)
    _add_text(params, "hazmat_type", args.hazmat_type)
    _add_number(params, "turn_angle_range", args.turn_angle_range)
    _add_text(params, "truck_size", args.truck_size)
    _add_number(params, "truck_weight", args.truck_weight)
    _add_number(params, "truck_axle_load", args.truck_axle_load)

    return UpstreamRequest(endpoint=DISTANCE_MATRIX_ENDPOINT, params=params)


# Route planning family


def _route_params(args: RouteArgs, api_key: str) -> dict[str, str]:
    params = {
        "option": "flexible",
        "origin": args.origin,
        "destination": args.destination,
        "mode": args.mode or "car",
        "key": api_key,
    }

    if args.waypoints is not None:
        params["waypoints"] = "|".join(args.waypoints)
    _add_text(params, "geometry", args.geometry)
    _add_text(params, "avoid", args.avoid)
    _add_text(params, "exclude", args.exclude)
    _add_text(params, "approaches", args.approaches)
    if args.bearings is not None:
        params["bearings"] = _bearings(args.bearings)
    _add_number(params, "departure_time", args.departure_time)
    _add_text(params, "truck_size", args.truck_size)
    _add_number(params, "truck_weight", args.truck_weight)
    _add_number(params, "truck_axle_load", args.truck_axle_load)
    _add_text(params, "route_type", args.route_type)
    _add_text(params, "hazmat_type", args.hazmat_type)
    _add_number(params, "turn_angle_range", args.turn_angle_range)
    _add_bool(params, "alternatives", args.alternatives)
    _add_number(params, "altcount", args.altcount)
    _add_text(params, "road_info", args.road_info)
    _add_bool(params, "cross_border", args.cross_border)
    if args.drive_time_limits is not None:
        params["drive_time_limits"] = ",".join(format_number(v) for v in args.drive_time_limits)
    if args.rest_times is not None:
        params["rest_times"] = ",".join(format_number(v) for v in args.rest_times)

    return params


def build_directions(args: RouteArgs, api_key: str) -> UpstreamRequest:
    """Route between two points, without turn-by-turn instructions"""
    return UpstreamRequest(endpoint=DIRECTIONS_ENDPOINT, params=_route_params(args, api_key))


def build_navigation(args: RouteArgs, api_key: str) -> UpstreamRequest:
    """Turn-by-turn navigation between two points"""
    return UpstreamRequest(endpoint=NAVIGATION_ENDPOINT, params=_route_params(args, api_key))
