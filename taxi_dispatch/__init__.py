"""Taxi fleet dispatch simulation: greedy vs optimal assignment on a grid city."""

__version__ = "0.1.0"
