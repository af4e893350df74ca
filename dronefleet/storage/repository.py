"""Mini README: Sharded, lock-protected in-memory repositories.

Structure:
    * ShardedRepository - generic store keyed by a selector function.
    * DroneRepository - drone store with monotonically increasing id allocation.

Entries are spread over independently locked shards so concurrent importers
writing different ids rarely contend. ``list`` copies each shard under its
own lock and returns a new list; callers never iterate a live view.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, Hashable, List, Optional, TypeVar

from ..common import OperationResult, ResultCode
from ..configuration import get_settings
from ..logging_utils import get_logger
from ..models import Drone

LOGGER = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
E = TypeVar("E")


class _Shard(Generic[K, E]):
    __slots__ = ("lock", "items")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.items: Dict[K, E] = {}


class ShardedRepository(Generic[K, E]):
    """Key-addressed collection safe for concurrent callers."""

    def __init__(self, key_selector: Callable[[E], K], *, shard_count: int = 16) -> None:
        if key_selector is None:
            raise TypeError("key_selector is required")
        if shard_count < 1:
            raise ValueError("shard_count must be at least 1")
        self._key_selector = key_selector
        self._shards: List[_Shard[K, E]] = [_Shard() for _ in range(shard_count)]

    def _shard_for(self, key: K) -> _Shard[K, E]:
        return self._shards[hash(key) % len(self._shards)]

    def add(self, entity: E) -> OperationResult[E]:
        """Insert ``entity`` unless its key is already present."""

        if entity is None:
            raise TypeError("entity cannot be None")
        key = self._key_selector(entity)
        shard = self._shard_for(key)
        with shard.lock:
            if key in shard.items:
                return OperationResult.fail(
                    "An entity with the same key already exists.", ResultCode.DUPLICATE_KEY
                )
            shard.items[key] = entity
        LOGGER.debug("Stored entity with key %s", key)
        return OperationResult.ok(entity)

    def upsert(self, entity: E) -> OperationResult[E]:
        if entity is None:
            raise TypeError("entity cannot be None")
        key = self._key_selector(entity)
        shard = self._shard_for(key)
        with shard.lock:
            shard.items[key] = entity
        return OperationResult.ok(entity)

    def get(self, key: K) -> OperationResult[E]:
        shard = self._shard_for(key)
        with shard.lock:
            entity = shard.items.get(key)
        if entity is None:
            return OperationResult.fail("Entity not found.", ResultCode.NOT_FOUND)
        return OperationResult.ok(entity)

    def remove(self, key: K) -> OperationResult[None]:
        shard = self._shard_for(key)
        with shard.lock:
            removed = shard.items.pop(key, None)
        if removed is None:
            return OperationResult.fail("Entity not found.", ResultCode.NOT_FOUND)
        LOGGER.debug("Removed entity with key %s", key)
        return OperationResult.ok()

    def list(self) -> List[E]:
        """Return a point-in-time copy of every stored entity."""

        snapshot: List[E] = []
        for shard in self._shards:
            with shard.lock:
                snapshot.extend(shard.items.values())
        return snapshot

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.items)
        return total


class DroneRepository:
    """Drone store that also hands out fresh identifiers."""

    def __init__(self, starting_id: int = 0, *, shard_count: Optional[int] = None) -> None:
        if shard_count is None:
            shard_count = get_settings().store_shards
        self._repository: ShardedRepository[int, Drone] = ShardedRepository(
            lambda drone: drone.id, shard_count=shard_count
        )
        self._id_lock = threading.Lock()
        self._current_id = starting_id

    def add(self, drone: Drone) -> OperationResult[Drone]:
        result = self._repository.add(drone)
        if result.success:
            self._observe_id(drone.id)
        return result

    def upsert(self, drone: Drone) -> OperationResult[Drone]:
        result = self._repository.upsert(drone)
        self._observe_id(drone.id)
        return result

    def get(self, drone_id: int) -> OperationResult[Drone]:
        result = self._repository.get(drone_id)
        if not result.success:
            return OperationResult.fail(f"Drone {drone_id} not found.", ResultCode.NOT_FOUND)
        return result

    def remove(self, drone_id: int) -> OperationResult[None]:
        result = self._repository.remove(drone_id)
        if not result.success:
            return OperationResult.fail(f"Drone {drone_id} not found.", ResultCode.NOT_FOUND)
        return result

    def list(self) -> List[Drone]:
        return self._repository.list()

    def next_id(self) -> int:
        with self._id_lock:
            self._current_id += 1
            return self._current_id

    def _observe_id(self, drone_id: int) -> None:
        with self._id_lock:
            if drone_id > self._current_id:
                self._current_id = drone_id

    def __len__(self) -> int:
        return len(self._repository)
