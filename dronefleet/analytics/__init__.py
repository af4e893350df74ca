"""Mini README: Fleet-wide statistics for the ``stats`` command."""

from .summary import FleetSummary, KindBreakdown, summarise_fleet

__all__ = ["FleetSummary", "KindBreakdown", "summarise_fleet"]
