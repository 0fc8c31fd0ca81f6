"""Rover route-motion simulator and telemetry service."""

__version__ = "0.1.0"
