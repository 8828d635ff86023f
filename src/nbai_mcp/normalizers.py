"""
Response normalizers for the NextBillion.ai API.

Each normalizer turns a raw JSON document into exactly one ResultEnvelope. The
classifier runs first; after that only the fields callers need are projected,
so geometry, debug telemetry, lane and access detail never reach the output.
Missing nested fields project to None instead of raising.
"""

from typing import Any

from .classifier import classify_place_response, classify_routing_response
from .models import ResultEnvelope
from .utils import dig

NO_PLACE_RESULTS = "No place results found"
NO_MATRIX_RESULTS = "No distance matrix results found"
NO_ROUTES = "No routes found"


def _list_of(value: Any) -> list:
    return value if isinstance(value, list) else []


# Place lookup family


def project_place(item: dict) -> dict:
    """Project a single place item to the fields exposed to callers"""
    categories = [dig(category, "name") for category in _list_of(item.get("categories"))]

    return {
        "id": item.get("id"),
        "location": {
            "latitude": dig(item, "position", "lat"),
            "longitude": dig(item, "position", "lng"),
        },
        "title": item.get("title"),
        "formatted_address": dig(item, "address", "label"),
        "postal_code": dig(item, "address", "postalCode"),
        "categories": categories,
        "contact": dig(item, "contacts", 0, "phone", 0, "value") or None,
    }


def normalize_place(data: Any) -> ResultEnvelope:
    """
    Normalize a geocode, reverse geocode, discover or lookup response.

    Only the first item is returned.
    """
    classification = classify_place_response(data)
    if classification.is_error:
        return ResultEnvelope.failure(f"Geocoding failed: {classification.message}")

    item = dig(data, "items", 0)
    if not isinstance(item, dict):
        return ResultEnvelope.failure(NO_PLACE_RESULTS)

    return ResultEnvelope.from_payload(project_place(item))


# Distance matrix family


def normalize_distance_matrix(data: Any) -> ResultEnvelope:
    """Normalize a distance matrix response to rows of {duration, distance}"""
    classification = classify_routing_response(data)
    if classification.is_error:
        return ResultEnvelope.failure(f"Distance matrix request failed: {classification.message}")

    rows = _list_of(dig(data, "rows"))
    if not rows:
        return ResultEnvelope.failure(NO_MATRIX_RESULTS)

    results = [
        {
            "elements": [
                {
                    "duration": dig(element, "duration", "value"),
                    "distance": dig(element, "distance", "value"),
                }
                for element in _list_of(dig(row, "elements"))
            ]
        }
        for row in rows
    ]

    return ResultEnvelope.from_payload({"results": results})


# Route planning family


def project_step(step: Any) -> dict:
    return {
        "distance": dig(step, "distance"),
        "duration": dig(step, "duration"),
        "maneuver": {
            "instruction": dig(step, "maneuver", "instruction"),
            "maneuver_type": dig(step, "maneuver", "maneuver_type"),
            "modifier": dig(step, "maneuver", "modifier"),
        },
    }


def project_route(route: Any) -> dict:
    """Project a route to distance, duration and its legs' steps"""
    return {
        "distance": dig(route, "distance"),
        "duration": dig(route, "duration"),
        "legs": [
            {
                "distance": dig(leg, "distance"),
                "duration": dig(leg, "duration"),
                "steps": [project_step(step) for step in _list_of(dig(leg, "steps"))],
            }
            for leg in _list_of(dig(route, "legs"))
        ],
    }


def _normalize_routes(data: Any, failure_label: str) -> ResultEnvelope:
    classification = classify_routing_response(data)
    if classification.is_error:
        return ResultEnvelope.failure(f"{failure_label} request failed: {classification.message}")

    # The upstream call succeeded but produced nothing usable
    routes = _list_of(dig(data, "routes"))
    if not routes:
        return ResultEnvelope.failure(NO_ROUTES)

    return ResultEnvelope.from_payload({"routes": [project_route(route) for route in routes]})


def normalize_directions(data: Any) -> ResultEnvelope:
    """Normalize a /directions/json response"""
    return _normalize_routes(data, "Directions")


def normalize_navigation(data: Any) -> ResultEnvelope:
    """Normalize a /navigation response"""
    return _normalize_routes(data, "Navigation")
