"""
Operation dispatch for tool calls.

Maps each tool name to its argument model, request builder and response
normalizer. Dispatch always produces exactly one ResultEnvelope: unknown tools
and unexpected failures are reported as error envelopes, never raised.
"""

from typing import Any, Callable, NamedTuple
from pydantic import BaseModel

from .builders import (
    build_directions,
    build_distance_matrix,
    build_geocode,
    build_navigation,
    build_place_details,
    build_reverse_geocode,
    build_search_places,
)
from .client import NbaiClient
from .logger import get_logger
from .models import (
    DistanceMatrixArgs,
    GeocodeArgs,
    PlaceDetailsArgs,
    ResultEnvelope,
    ReverseGeocodeArgs,
    RouteArgs,
    SearchPlacesArgs,
    ToolCall,
    UpstreamRequest,
)
from .normalizers import (
    normalize_directions,
    normalize_distance_matrix,
    normalize_navigation,
    normalize_place,
)

logger = get_logger("dispatcher")


class Operation(NamedTuple):
    """Builder/normalizer pair for one tool"""

    args_model: type[BaseModel]
    build: Callable[[Any, str], UpstreamRequest]
    normalize: Callable[[Any], ResultEnvelope]


OPERATIONS: dict[str, Operation] = {
    "geocode": Operation(GeocodeArgs, build_geocode, normalize_place),
    "reverse_geocode": Operation(ReverseGeocodeArgs, build_reverse_geocode, normalize_place),
    "search_places": Operation(SearchPlacesArgs, build_search_places, normalize_place),
    "place_details": Operation(PlaceDetailsArgs, build_place_details, normalize_place),
    "distance_matrix": Operation(DistanceMatrixArgs, build_distance_matrix, normalize_distance_matrix),
    "directions": Operation(RouteArgs, build_directions, normalize_directions),
    "navigation": Operation(RouteArgs, build_navigation, normalize_navigation),
}


def build_request(name: str, arguments: dict[str, Any], api_key: str) -> UpstreamRequest:
    """
    Validate arguments for a tool and build its upstream request.

    Raises:
        KeyError: If the tool is unknown
        pydantic.ValidationError: If the arguments do not fit the tool
    """
    operation = OPERATIONS[name]
    args = operation.args_model.model_validate(arguments or {})
    return operation.build(args, api_key)


async def dispatch(
    call: ToolCall | str,
    arguments: dict[str, Any] | None = None,
    *,
    client: NbaiClient,
) -> ResultEnvelope:
    """
    Execute a tool call against the NextBillion.ai API.

    Args:
        call: A ToolCall, or the tool name with `arguments` given separately
        arguments: Tool arguments when `call` is a name
        client: Client used for the upstream request

    Returns:
        The result envelope for the call
    """
    if isinstance(call, str):
        call = ToolCall(name=call, arguments=arguments or {})

    operation = OPERATIONS.get(call.name)
    if operation is None:
        logger.warning("Unknown tool requested: %s", call.name)
        return ResultEnvelope.failure(f"Unknown tool: {call.name}")

    try:
        request = build_request(call.name, call.arguments, client.api_key)
        logger.debug("Dispatching %s to %s", call.name, request.endpoint)
        data = await client.fetch_json(request)
        envelope = operation.normalize(data)
    except Exception as e:
        logger.exception("Tool %s failed", call.name)
        return ResultEnvelope.failure(f"Error: {str(e)}")

    if envelope.is_error:
        logger.info("Tool %s returned an error: %s", call.name, envelope.text)
    return envelope
