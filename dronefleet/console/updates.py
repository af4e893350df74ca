"""Mini README: Keyword dispatch for per-drone update actions.

Structure:
    * UpdateResponse - result of a handler plus an optional success message.
    * DroneUpdateHandler - abstract action such as ``charge`` or ``capture``.
    * DroneUpdateRegistry - keyword to ``(predicate, handler)`` lists.

The same keyword may be registered several times with different
capability predicates. Resolution walks the list for a keyword in
registration order and returns the first handler whose predicate accepts
the target drone, so new drone kinds only need matching predicates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..common import OperationResult
from ..logging_utils import get_logger
from ..models import Drone
from .context import CommandContext

LOGGER = get_logger(__name__)

Predicate = Callable[[Drone], bool]


@dataclass(frozen=True, slots=True)
class UpdateResponse:
    result: OperationResult[object]
    message: Optional[str] = None


class DroneUpdateHandler(ABC):
    """Action applied to one drone through the ``action`` command."""

    keyword: str = ""
    usage: str = ""

    def supports(self, drone: Drone) -> bool:
        return drone is not None

    @abstractmethod
    def execute(self, context: CommandContext, drone: Drone, arguments: Sequence[str]) -> UpdateResponse:
        """Apply the action and describe the outcome."""


class DroneUpdateRegistry:
    """Resolve update keywords to the first handler that supports a drone."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Tuple[Predicate, DroneUpdateHandler]]] = {}

    def register(self, handler: DroneUpdateHandler, *aliases: str, supports: Optional[Predicate] = None) -> None:
        """Register ``handler`` under its keyword and ``aliases``.

        ``supports`` overrides the handler's own capability check, which lets
        one handler class be registered with a narrower predicate.
        """

        if handler is None:
            raise TypeError("handler is required")
        predicate = supports or handler.supports
        for keyword in (handler.keyword, *aliases):
            if not keyword or not keyword.strip():
                continue
            self._handlers.setdefault(keyword.strip().lower(), []).append((predicate, handler))
        LOGGER.debug("Registered update handler '%s'", handler.keyword)

    def resolve(self, keyword: str, drone: Drone) -> Optional[DroneUpdateHandler]:
        if not keyword:
            return None
        for predicate, handler in self._handlers.get(keyword.strip().lower(), ()):
            if predicate(drone):
                return handler
        return None

    def supported_keywords(self, drone: Drone) -> List[str]:
        """Sorted keywords with at least one handler accepting ``drone``."""

        return sorted(
            keyword
            for keyword, candidates in self._handlers.items()
            if any(predicate(drone) for predicate, _ in candidates)
        )

    def all_keywords(self) -> List[str]:
        return sorted(self._handlers)
