"""Threat pattern detection and Threat-Space Search for freestyle Gomoku."""

__version__ = "0.1.0"
