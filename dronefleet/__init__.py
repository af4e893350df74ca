"""Mini README: Core package initializer for the DroneFleet simulator.

This module exposes convenience imports that allow the shell and tests to
reach the logging helpers without needing to know the exact module
structure. Heavier subpackages (services, console) are imported explicitly
by their callers so importing ``dronefleet`` stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
