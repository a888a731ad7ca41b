"""In-memory stand-ins for the host scheduler used by the simulation harness.

:class:`InMemoryScheduler` implements :class:`SchedulerPort` directly with a
single pending slot.  :class:`MVGameTemp` and :class:`MZGameTemp` mimic the two
host ``Game_Temp`` shapes wrapped by :mod:`core.equip_events.adapters`, and
:class:`GameTempRunner` plays the role of the host loop that eventually runs
whatever those objects hold.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Deque, Mapping, Optional, Protocol

from core.events import topics
from core.event_bus import Topic
from utils.logger import get_logger

__all__ = [
    "GameTempRunner",
    "InMemoryScheduler",
    "MVGameTemp",
    "MZGameTemp",
    "TRIGGER_MENU_CLOSED",
    "TRIGGER_RUN_NOW",
]

logger = get_logger(__name__)

TRIGGER_RUN_NOW = "run_now"
TRIGGER_MENU_CLOSED = "menu_closed"


class EventBusLike(Protocol):
    def subscribe(self, topic: Topic, handler: Callable[..., None]) -> None:
        ...

    def publish(
        self, topic: Topic, payload: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> None:
        ...


class _FiringMixin(ABC):
    """Shared bookkeeping for objects that start common events."""

    _bus: EventBusLike | None
    fired: list[int]

    def bind(self, bus: EventBusLike) -> None:
        self._bus = bus
        bus.subscribe(topics.MENU_CLOSED, self._handle_menu_closed)

    def _handle_menu_closed(self, **_: Any) -> None:
        self.on_menu_closed()

    @abstractmethod
    def on_menu_closed(self) -> None:
        """Start whatever was left waiting for the menu to close."""

    def _start(self, event_id: int, trigger: str) -> None:
        self.fired.append(event_id)
        logger.debug("Common event %d started (%s)", event_id, trigger)
        if self._bus is not None:
            self._bus.publish(topics.COMMON_EVENT_STARTED, event_id=event_id, trigger=trigger)


class InMemoryScheduler(_FiringMixin):
    """Single pending-reservation slot with an operation log.

    ``calls`` records every port call as ``(operation, event_id)`` so callers
    can check the clear/set/run-now ordering.
    """

    def __init__(self, event_bus: EventBusLike | None = None) -> None:
        self._bus = None
        self.pending: Optional[int] = None
        self.fired: list[int] = []
        self.calls: list[tuple[str, Optional[int]]] = []
        if event_bus is not None:
            self.bind(event_bus)

    # SchedulerPort -----------------------------------------------------
    def clear_pending_reservation(self) -> None:
        self.calls.append(("clear", None))
        self.pending = None

    def set_pending_reservation(self, event_id: int) -> None:
        self.calls.append(("set", event_id))
        self.pending = event_id

    def run_pending_reservation_now(self) -> None:
        self.calls.append(("run_now", self.pending))
        self._fire_pending(TRIGGER_RUN_NOW)

    # Host side ---------------------------------------------------------
    def on_menu_closed(self) -> None:
        self._fire_pending(TRIGGER_MENU_CLOSED)

    def _fire_pending(self, trigger: str) -> None:
        if self.pending is None:
            return
        event_id, self.pending = self.pending, None
        self._start(event_id, trigger)


class MVGameTemp:
    """Single reserved id; a second reservation overwrites the first."""

    def __init__(self) -> None:
        self._common_event_id = 0

    def reserve_common_event(self, event_id: int) -> None:
        self._common_event_id = event_id

    def clear_common_event(self) -> None:
        self._common_event_id = 0

    def is_common_event_reserved(self) -> bool:
        return self._common_event_id > 0

    def retrieve_common_event(self) -> Optional[int]:
        if not self.is_common_event_reserved():
            return None
        event_id, self._common_event_id = self._common_event_id, 0
        return event_id


class MZGameTemp:
    """Queue of reserved ids; every queued id eventually runs unless cleared."""

    def __init__(self) -> None:
        self._common_event_queue: Deque[int] = deque()

    def reserve_common_event(self, event_id: int) -> None:
        self._common_event_queue.append(event_id)

    def clear_common_event_reservation(self) -> None:
        self._common_event_queue.clear()

    def is_common_event_reserved(self) -> bool:
        return bool(self._common_event_queue)

    def retrieve_common_event(self) -> Optional[int]:
        if not self._common_event_queue:
            return None
        return self._common_event_queue.popleft()

    @property
    def queued(self) -> tuple[int, ...]:
        return tuple(self._common_event_queue)


class GameTempRunner(_FiringMixin):
    """Runs whatever a simulated ``Game_Temp`` holds.

    ``run_now`` is the hook passed to the host adapters; ``on_menu_closed``
    mirrors the map scene picking reservations up after the menu closes.
    """

    def __init__(self, game_temp: MVGameTemp | MZGameTemp, event_bus: EventBusLike | None = None) -> None:
        self._game_temp = game_temp
        self._bus = None
        self.fired: list[int] = []
        if event_bus is not None:
            self.bind(event_bus)

    def run_now(self) -> None:
        self._drain(TRIGGER_RUN_NOW)

    def on_menu_closed(self) -> None:
        self._drain(TRIGGER_MENU_CLOSED)

    def _drain(self, trigger: str) -> None:
        while self._game_temp.is_common_event_reserved():
            event_id = self._game_temp.retrieve_common_event()
            if event_id is None:
                break
            self._start(event_id, trigger)
