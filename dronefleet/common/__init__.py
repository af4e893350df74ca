"""Mini README: Shared primitives used across DroneFleet layers.

Currently exports the tagged ``OperationResult`` that every service and
domain operation returns for expected failures, together with the
``ResultCode`` taxonomy.
"""

from .results import OperationResult, ResultCode

__all__ = ["OperationResult", "ResultCode"]
