"""Mini README: Conversions between drone entities and snapshots."""

from .snapshot_mapper import to_drone, to_snapshot

__all__ = ["to_drone", "to_snapshot"]
