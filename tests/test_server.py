"""
Tests for the MCP tool wiring
"""

import pytest
from unittest.mock import patch
from fastmcp import Client
from fastmcp.exceptions import ToolError
from nbai_mcp import server
from nbai_mcp.client import NbaiClient
from nbai_mcp.config import Settings
from nbai_mcp.models import Bearing, Coordinates, ResultEnvelope
from nbai_mcp.server import collect_arguments, envelope_to_result

ROUTE_OK = {"status": "Ok", "routes": [{"distance": 1000, "duration": 120, "legs": []}]}
MATRIX_OK = {"status": "Ok", "rows": [{"elements": [{"duration": {"value": 60}, "distance": {"value": 500}}]}]}


@pytest.fixture
def nbai_client():
    """Client installed as the server's singleton for the duration of a test"""
    client = NbaiClient(Settings(api_key="test_key"))
    with patch.object(server, "get_nbai_client", return_value=client):
        yield client


def test_collect_arguments_drops_unsupplied():
    arguments = collect_arguments(origin="1,2", destination="3,4", avoid=None, alternatives=False, altcount=0)

    assert arguments == {"origin": "1,2", "destination": "3,4", "alternatives": False, "altcount": 0}


def test_collect_arguments_dumps_models():
    arguments = collect_arguments(
        location=Coordinates(latitude=51.5, longitude=-0.15),
        bearings=[Bearing(degree=90, range=45)],
    )

    assert arguments == {
        "location": {"latitude": 51.5, "longitude": -0.15},
        "bearings": [{"degree": 90.0, "range": 45.0}],
    }


def test_success_envelope_relays_text():
    assert envelope_to_result(ResultEnvelope.success('{"id": "p1"}')) == '{"id": "p1"}'


def test_error_envelope_raises_tool_error():
    with pytest.raises(ToolError, match="No routes found"):
        envelope_to_result(ResultEnvelope.failure("No routes found"))


@pytest.mark.asyncio
async def test_navigation_accepts_stringified_sequences(nbai_client):
    """JSON-encoded arrays sent by MCP clients reach the upstream request"""
    with patch.object(nbai_client, "fetch_json", return_value=ROUTE_OK) as mock_fetch:
        async with Client(server.mcp) as mcp_client:
            await mcp_client.call_tool(
                "navigation",
                {
                    "origin": "1,2",
                    "destination": "3,4",
                    "waypoints": '["5,6", "7,8"]',
                    "bearings": '[{"degree": 0, "range": 90}]',
                    "drive_time_limits": "[3600, 1800]",
                    "rest_times": "[600]",
                },
            )

        params = mock_fetch.call_args.args[0].params

    assert params["waypoints"] == "5,6|7,8"
    assert params["bearings"] == "0,90"
    assert params["drive_time_limits"] == "3600,1800"
    assert params["rest_times"] == "600"


@pytest.mark.asyncio
async def test_distance_matrix_accepts_list_and_string_bearings(nbai_client):
    with patch.object(nbai_client, "fetch_json", return_value=MATRIX_OK) as mock_fetch:
        async with Client(server.mcp) as mcp_client:
            await mcp_client.call_tool(
                "distance_matrix",
                {"origins": ["1,2"], "destinations": '["3,4"]', "bearings": [{"degree": 45, "range": 10}]},
            )
            await mcp_client.call_tool(
                "distance_matrix",
                {"origins": "1,2", "destinations": "3,4", "bearings": '[{"degree": 45, "range": 10}]'},
            )

        first, second = (call.args[0].params for call in mock_fetch.call_args_list)

    assert first["bearings"] == second["bearings"] == "45,10"
    assert first["origins"] == second["origins"] == "1,2"
    assert first["destinations"] == second["destinations"] == "3,4"
    assert "cross_border" not in first
