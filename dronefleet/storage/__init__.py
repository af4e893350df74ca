"""Mini README: Thread-safe in-memory storage for fleet entities.

``ShardedRepository`` is the generic key-addressed store; ``DroneRepository``
specialises it for drones and tracks the highest id seen so newly created
drones never collide with imported ones.
"""

from .repository import DroneRepository, ShardedRepository

__all__ = ["DroneRepository", "ShardedRepository"]
