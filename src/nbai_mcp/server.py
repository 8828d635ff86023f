"""
NBAI MCP Server

FastMCP server exposing NextBillion.ai location services as tools.

Tools:
- geocode: Convert an address into coordinates
- reverse_geocode: Convert coordinates into an address
- search_places: Free-text place search, optionally around a point
- place_details: Look up a place by ID
- distance_matrix: Travel distance and time for many origins and destinations
- directions: Route between two points
- navigation: Turn-by-turn navigation between two points
"""

import sys
from typing import Any, Literal
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel

from .client import NbaiClient
from .config import ConfigError, load_settings
from .dispatcher import dispatch
from .logger import get_logger, setup_logging
from .models import Bearing, Coordinates, ResultEnvelope

logger = get_logger("server")

# Initialize FastMCP server
mcp = FastMCP("nbai-mcp")

# Initialize NextBillion.ai client (will be created on first use)
_nbai_client: NbaiClient | None = None


def get_nbai_client() -> NbaiClient:
    """Get or create the NextBillion.ai client singleton"""
    global _nbai_client
    if _nbai_client is None:
        _nbai_client = NbaiClient(load_settings())
    return _nbai_client


def collect_arguments(**kwargs: Any) -> dict[str, Any]:
    """
    Turn tool parameters into the argument bag passed to the dispatcher.

    Parameters left at None were not supplied and are dropped; pydantic
    models are dumped to plain dicts.
    """
    arguments = {}
    for name, value in kwargs.items():
        if value is None:
            continue
        if isinstance(value, BaseModel):
            value = value.model_dump()
        elif isinstance(value, list):
            value = [item.model_dump() if isinstance(item, BaseModel) else item for item in value]
        arguments[name] = value
    return arguments


def envelope_to_result(envelope: ResultEnvelope) -> str:
    """
    Relay an envelope to FastMCP.

    Success envelopes become the tool's text result; error envelopes raise
    ToolError so the MCP response is flagged with isError.
    """
    if envelope.is_error:
        raise ToolError(envelope.text)
    return envelope.text


async def _call(name: str, **kwargs: Any) -> str:
    envelope = await dispatch(name, collect_arguments(**kwargs), client=get_nbai_client())
    return envelope_to_result(envelope)


@mcp.tool
async def geocode(address: str) -> str:
    """
    Convert an address into geographic coordinates.

    Prefer search_places over geocode when the address is not well formatted
    and might be ambiguous.

    Args:
        address: The address to geocode

    Returns:
        JSON with id, location {latitude, longitude}, title, formatted_address,
        postal_code, categories and contact of the best match
    """
    return await _call("geocode", address=address)


@mcp.tool
async def reverse_geocode(latitude: float, longitude: float) -> str:
    """
    Convert coordinates into an address.

    Args:
        latitude: Latitude coordinate
        longitude: Longitude coordinate

    Returns:
        JSON describing the place at the coordinates
    """
    return await _call("reverse_geocode", latitude=latitude, longitude=longitude)


@mcp.tool
async def search_places(
    query: str,
    location: Coordinates | None = None,
    radius: float | None = None,
) -> str:
    """
    Search for places using the NextBillion.ai Places API.

    Prefer search_places over geocode when the address is not well formatted
    and might be ambiguous. Make multiple calls to locate more than one place.

    Args:
        query: Search query
        location: Optional center point for the search {latitude, longitude}
        radius: Search radius in meters (max 50000), used only with location

    Returns:
        JSON describing the best matching place
    """
    return await _call("search_places", query=query, location=location, radius=radius)


@mcp.tool
async def place_details(place_id: str) -> str:
    """
    Get detailed information about a specific place.

    Get the place ID from the search_places tool.

    Args:
        place_id: The place ID to get details for

    Returns:
        JSON describing the place
    """
    return await _call("place_details", place_id=place_id)


@mcp.tool
async def distance_matrix(
    origins: list[str] | str,
    destinations: list[str] | str,
    mode: Literal["car", "truck"] = "car",
    departure_time: int | None = None,
    avoid: str | None = None,
    exclude: str | None = None,
    approaches: str | None = None,
    bearings: list[Bearing] | str | None = None,
    cross_border: bool | None = None,
    truck_size: str | None = None,
    truck_weight: float | None = None,
    truck_axle_load: float | None = None,
    route_type: Literal["fastest", "shortest"] | None = None,
    hazmat_type: str | None = None,
    turn_angle_range: float | None = None,
) -> str:
    """
    Calculate travel distance and time for multiple origins and destinations.

    Prefer distance_matrix over directions when you need travel distance and
    time for several origins and destinations in one request. Distance matrix
    does not provide turn-by-turn instructions.

    Args:
        origins: Origin coordinates ("lat,lng"); must be routable land locations
        destinations: Destination coordinates ("lat,lng")
        mode: Travel mode - car or truck
        departure_time: Departure time as UNIX timestamp in seconds
        avoid: Objects to avoid (flexible filter), e.g. toll, ferry, highway
        exclude: Objects to strictly exclude (mandatory filter)
        approaches: Semicolon-separated side-of-road list for destinations
        bearings: Bearing constraints [{degree, range}] for every point
        cross_border: Allow routes crossing international borders
        truck_size: Truck dimensions in cm "height,width,length" (mode=truck)
        truck_weight: Truck weight in kg (mode=truck)
        truck_axle_load: Total load per axle in tonnes (mode=truck)
        route_type: fastest or shortest
        hazmat_type: general, circumstantial, explosive or harmful_to_water
        turn_angle_range: Turn angle range in degrees (avoid=sharp_turn)

    Returns:
        JSON {"results": [{"elements": [{"duration", "distance"}]}]} with one
        row per origin and one element per destination
    """
    return await _call(
        "distance_matrix",
        origins=origins,
        destinations=destinations,
        mode=mode,
        departure_time=departure_time,
        avoid=avoid,
        exclude=exclude,
        approaches=approaches,
        bearings=bearings,
        cross_border=cross_border,
        truck_size=truck_size,
        truck_weight=truck_weight,
        truck_axle_load=truck_axle_load,
        route_type=route_type,
        hazmat_type=hazmat_type,
        turn_angle_range=turn_angle_range,
    )


@mcp.tool
async def directions(
    origin: str,
    destination: str,
    mode: Literal["car", "truck"] = "car",
    waypoints: list[str] | str | None = None,
    geometry: Literal["polyline", "polyline6"] | None = None,
    avoid: str | None = None,
    exclude: str | None = None,
    approaches: str | None = None,
    bearings: list[Bearing] | str | None = None,
    departure_time: int | None = None,
    truck_size: str | None = None,
    truck_weight: float | None = None,
    truck_axle_load: float | None = None,
    route_type: Literal["fastest", "shortest"] | None = None,
    alternatives: bool | None = None,
    altcount: int | None = None,
    road_info: Literal["max_speed", "toll_distance", "toll_cost"] | None = None,
    cross_border: bool | None = None,
    hazmat_type: str | None = None,
    turn_angle_range: float | None = None,
    drive_time_limits: list[float] | str | None = None,
    rest_times: list[float] | str | None = None,
) -> str:
    """
    Get directions between two points.

    Prefer navigation over directions when you need turn-by-turn
    instructions or are answering questions about the route.

    Args:
        origin: Starting point coordinates ("lat,lng")
        destination: Ending point coordinates ("lat,lng")
        mode: Travel mode - car or truck
        waypoints: Waypoint coordinates along the route (max 50)
        geometry: Route geometry format - polyline or polyline6
        avoid: Objects to avoid (flexible filter)
        exclude: Objects to strictly exclude (mandatory filter)
        approaches: Side of the road to approach waypoints - unrestricted or curb
        bearings: Bearing constraints [{degree, range}] for every point
        departure_time: Departure time as UNIX timestamp in seconds
        truck_size: Truck dimensions in cm "height,width,length" (mode=truck)
        truck_weight: Truck weight in kg (mode=truck)
        truck_axle_load: Total load per axle in tonnes (mode=truck)
        route_type: fastest or shortest
        alternatives: Return alternate routes
        altcount: Number of alternative routes (alternatives=true)
        road_info: max_speed, toll_distance or toll_cost
        cross_border: Allow routes crossing international borders
        hazmat_type: general, circumstantial, explosive or harmful_to_water
        turn_angle_range: Turn angle range in degrees (avoid=sharp_turn)
        drive_time_limits: Driving durations in seconds before rest periods
        rest_times: Rest durations in seconds after driving periods

    Returns:
        JSON {"routes": [{distance, duration, legs: [{distance, duration, steps}]}]}
    """
    return await _call(
        "directions",
        origin=origin,
        destination=destination,
        mode=mode,
        waypoints=waypoints,
        geometry=geometry,
        avoid=avoid,
        exclude=exclude,
        approaches=approaches,
        bearings=bearings,
        departure_time=departure_time,
        truck_size=truck_size,
        truck_weight=truck_weight,
        truck_axle_load=truck_axle_load,
        route_type=route_type,
        alternatives=alternatives,
        altcount=altcount,
        road_info=road_info,
        cross_border=cross_border,
        hazmat_type=hazmat_type,
        turn_angle_range=turn_angle_range,
        drive_time_limits=drive_time_limits,
        rest_times=rest_times,
    )


@mcp.tool
async def navigation(
    origin: str,
    destination: str,
    mode: Literal["car", "truck"] = "car",
    waypoints: list[str] | str | None = None,
    geometry: Literal["polyline", "polyline6"] | None = None,
    avoid: str | None = None,
    exclude: str | None = None,
    approaches: str | None = None,
    bearings: list[Bearing] | str | None = None,
    departure_time: int | None = None,
    truck_size: str | None = None,
    truck_weight: float | None = None,
    truck_axle_load: float | None = None,
    route_type: Literal["fastest", "shortest"] | None = None,
    alternatives: bool | None = None,
    altcount: int | None = None,
    road_info: Literal["max_speed", "toll_distance", "toll_cost"] | None = None,
    cross_border: bool | None = None,
    hazmat_type: str | None = None,
    turn_angle_range: float | None = None,
    drive_time_limits: list[float] | str | None = None,
    rest_times: list[float] | str | None = None,
) -> str:
    """
    Get turn-by-turn navigation between two points.

    Prefer navigation over directions when you need turn-by-turn
    instructions or are answering questions about the route.

    Args:
        origin: Starting point coordinates ("lat,lng")
        destination: Ending point coordinates ("lat,lng")
        mode: Travel mode - car or truck
        waypoints: Waypoint coordinates along the route (max 50)
        geometry: Route geometry format - polyline or polyline6
        avoid: Objects to avoid (flexible filter)
        exclude: Objects to strictly exclude (mandatory filter)
        approaches: Side of the road to approach waypoints - unrestricted or curb
        bearings: Bearing constraints [{degree, range}] for every point
        departure_time: Departure time as UNIX timestamp in seconds
        truck_size: Truck dimensions in cm "height,width,length" (mode=truck)
        truck_weight: Truck weight in kg (mode=truck)
        truck_axle_load: Total load per axle in tonnes (mode=truck)
        route_type: fastest or shortest
        alternatives: Return alternate routes
        altcount: Number of alternative routes (alternatives=true)
        road_info: max_speed, toll_distance or toll_cost
        cross_border: Allow routes crossing international borders
        hazmat_type: general, circumstantial, explosive or harmful_to_water
        turn_angle_range: Turn angle range in degrees (avoid=sharp_turn)
        drive_time_limits: Driving durations in seconds before rest periods
        rest_times: Rest durations in seconds after driving periods

    Returns:
        JSON {"routes": [...]} where every step carries a maneuver with
        instruction, maneuver_type and modifier
    """
    return await _call(
        "navigation",
        origin=origin,
        destination=destination,
        mode=mode,
        waypoints=waypoints,
        geometry=geometry,
        avoid=avoid,
        exclude=exclude,
        approaches=approaches,
        bearings=bearings,
        departure_time=departure_time,
        truck_size=truck_size,
        truck_weight=truck_weight,
        truck_axle_load=truck_axle_load,
        route_type=route_type,
        alternatives=alternatives,
        altcount=altcount,
        road_info=road_info,
        cross_border=cross_border,
        hazmat_type=hazmat_type,
        turn_angle_range=turn_angle_range,
        drive_time_limits=drive_time_limits,
        rest_times=rest_times,
    )


def main():
    """Entry point for the MCP server"""
    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging()
        logger.error("Startup failed: %s", e)
        sys.exit(1)

    setup_logging(settings.log_level)

    global _nbai_client
    _nbai_client = NbaiClient(settings)

    logger.info("NBAI MCP Server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
