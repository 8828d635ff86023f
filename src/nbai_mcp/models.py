"""
Pydantic models for the NBAI MCP server.

Argument models give each tool call a typed argument bag; the remaining models
describe the upstream request and the uniform result envelope returned for
every call.
"""

import json
from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import parse_string_or_array

TravelMode = Literal["car", "truck"]


class Coordinates(BaseModel):
    """A latitude/longitude pair"""

    latitude: float = Field(..., description="Latitude coordinate")
    longitude: float = Field(..., description="Longitude coordinate")


class Bearing(BaseModel):
    """Bearing constraint for a routing point"""

    degree: float = Field(..., description="Bearing angle in degrees (0-360)")
    range: float = Field(..., description="Acceptable range around the bearing")


class GeocodeArgs(BaseModel):
    """Arguments for the geocode tool"""

    address: str = Field(..., description="The address to geocode")


class ReverseGeocodeArgs(BaseModel):
    """Arguments for the reverse_geocode tool"""

    latitude: float = Field(..., description="Latitude coordinate")
    longitude: float = Field(..., description="Longitude coordinate")


class SearchPlacesArgs(BaseModel):
    """Arguments for the search_places tool"""

    query: str = Field(..., description="Search query")
    location: Coordinates | None = Field(None, description="Optional center point for the search")
    radius: float | None = Field(None, description="Search radius in meters (max 50000)")


class PlaceDetailsArgs(BaseModel):
    """Arguments for the place_details tool"""

    place_id: str = Field(..., description="The place ID to get details for")


class RoutingArgs(BaseModel):
    """Options shared by the distance matrix and route planning tools"""

    mode: TravelMode = Field("car", description="Travel mode: car or truck")
    departure_time: int | None = Field(None, description="Departure time as UNIX timestamp in seconds")
    avoid: str | None = Field(None, description="Objects to avoid during routing (flexible filter)")
    exclude: str | None = Field(None, description="Objects to strictly exclude during routing")
    approaches: str | None = Field(None, description="Side of the road from which to approach")
    bearings: list[Bearing] | None = Field(None, description="Bearing constraints per point")
    cross_border: bool | None = Field(None, description="Allow routes crossing international borders")
    truck_size: str | None = Field(None, description="Truck dimensions in cm: height,width,length")
    truck_weight: float | None = Field(None, description="Truck weight in kg")
    truck_axle_load: float | None = Field(None, description="Total load per axle in tonnes")
    route_type: Literal["fastest", "shortest"] | None = Field(None, description="Route type to be returned")
    hazmat_type: str | None = Field(None, description="Type of hazardous materials carried")
    turn_angle_range: float | None = Field(None, description="Turn angle range in degrees")

    @field_validator("bearings", mode="before")
    @classmethod
    def coerce_bearings(cls, v):
        """Accept a JSON-stringified bearings array"""
        return parse_string_or_array(v)


class DistanceMatrixArgs(RoutingArgs):
    """Arguments for the distance_matrix tool"""

    origins: list[str] = Field(..., description="Origin coordinates")
    destinations: list[str] = Field(..., description="Destination coordinates")

    @field_validator("origins", "destinations", mode="before")
    @classmethod
    def coerce_points(cls, v):
        """Accept a single point or a JSON-stringified array"""
        return parse_string_or_array(v)


class RouteArgs(RoutingArgs):
    """Arguments for the directions and navigation tools"""

    origin: str = Field(..., description="Starting point coordinates")
    destination: str = Field(..., description="Ending point coordinates")
    waypoints: list[str] | None = Field(None, description="Waypoint coordinates along the route")
    geometry: Literal["polyline", "polyline6"] | None = Field(None, description="Route geometry format")
    alternatives: bool | None = Field(None, description="Return alternate routes")
    altcount: int | None = Field(None, description="Number of alternative routes to return")
    road_info: Literal["max_speed", "toll_distance", "toll_cost"] | None = Field(
        None, description="Additional road segment information"
    )
    drive_time_limits: list[float] | None = Field(None, description="Driving durations in seconds before rests")
    rest_times: list[float] | None = Field(None, description="Rest durations in seconds after driving")

    @field_validator("waypoints", "drive_time_limits", "rest_times", mode="before")
    @classmethod
    def coerce_sequences(cls, v):
        """Accept a single value or a JSON-stringified array"""
        return parse_string_or_array(v)


class ToolCall(BaseModel):
    """A single tool invocation: operation name plus untyped arguments"""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class UpstreamRequest(BaseModel):
    """
    A fully built GET request against the NextBillion.ai API.

    `params` keeps insertion order, which is the order the query string is
    encoded in.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(..., description="Endpoint path, e.g. /geocode")
    params: dict[str, str] = Field(..., description="Ordered query parameters")


class Classification(BaseModel):
    """Outcome of inspecting an upstream response for failure signals"""

    model_config = ConfigDict(frozen=True)

    is_error: bool
    message: str | None = None


class TextContent(BaseModel):
    """A text content block"""

    type: Literal["text"] = "text"
    text: str


class ResultEnvelope(BaseModel):
    """
    The uniform result returned for every tool call.

    Serialises to the MCP shape {"content": [...], "isError": bool}.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def success(cls, text: str) -> "ResultEnvelope":
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def failure(cls, text: str) -> "ResultEnvelope":
        return cls(content=[TextContent(text=text)], is_error=True)

    @classmethod
    def from_payload(cls, payload: Any) -> "ResultEnvelope":
        """Build a success envelope carrying `payload` as indented JSON"""
        return cls.success(json.dumps(payload, indent=2))

    @property
    def text(self) -> str:
        """All content blocks joined into one string"""
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
