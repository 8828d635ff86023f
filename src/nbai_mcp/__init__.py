"""
NBAI MCP Server

An MCP server exposing NextBillion.ai geocoding, places, distance matrix,
directions and navigation APIs as tools with one uniform result shape.
"""

__version__ = "0.1.0"
