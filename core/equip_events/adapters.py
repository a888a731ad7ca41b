"""Concrete :class:`SchedulerPort` adapters, one per host engine version.

The two supported hosts keep reserved common events differently:

* MV stores a single reserved id; reserving again overwrites it.
* MZ keeps a queue of reserved ids that must be emptied explicitly.

Each adapter wraps the host's temporary game state object (``game_temp``)
together with the host's "check common event" hook (``run_now``), which on
the equip screen leaves the menu when a reservation is pending.  The adapter
is chosen once at startup with :func:`create_scheduler_adapter`.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol

from core.equip_events.scheduler_port import SchedulerPort
from utils.logger import get_logger

__all__ = [
    "HostVersion",
    "MVGameTempLike",
    "MVSchedulerAdapter",
    "MZGameTempLike",
    "MZSchedulerAdapter",
    "SCHEDULER_ADAPTERS",
    "create_scheduler_adapter",
]

logger = get_logger(__name__)

RunNowHook = Callable[[], None]


class HostVersion(str, Enum):
    MV = "mv"
    MZ = "mz"


class MVGameTempLike(Protocol):
    def reserve_common_event(self, event_id: int) -> None:
        ...

    def clear_common_event(self) -> None:
        ...


class MZGameTempLike(Protocol):
    def reserve_common_event(self, event_id: int) -> None:
        ...

    def clear_common_event_reservation(self) -> None:
        ...


def _no_run_now() -> None:
    logger.debug("Host supplied no run-now hook; reservation stays pending")


class MVSchedulerAdapter:
    """Single-slot host: clearing resets the reserved id."""

    def __init__(self, game_temp: MVGameTempLike, run_now: RunNowHook | None = None) -> None:
        self._game_temp = game_temp
        self._run_now = run_now or _no_run_now

    def clear_pending_reservation(self) -> None:
        self._game_temp.clear_common_event()

    def set_pending_reservation(self, event_id: int) -> None:
        self._game_temp.reserve_common_event(event_id)

    def run_pending_reservation_now(self) -> None:
        self._run_now()


class MZSchedulerAdapter:
    """Queue-based host: clearing empties the reservation queue."""

    def __init__(self, game_temp: MZGameTempLike, run_now: RunNowHook | None = None) -> None:
        self._game_temp = game_temp
        self._run_now = run_now or _no_run_now

    def clear_pending_reservation(self) -> None:
        self._game_temp.clear_common_event_reservation()

    def set_pending_reservation(self, event_id: int) -> None:
        self._game_temp.reserve_common_event(event_id)

    def run_pending_reservation_now(self) -> None:
        self._run_now()


SCHEDULER_ADAPTERS: dict[HostVersion, type] = {
    HostVersion.MV: MVSchedulerAdapter,
    HostVersion.MZ: MZSchedulerAdapter,
}


def create_scheduler_adapter(
    host_version: HostVersion | str,
    game_temp: object,
    run_now: RunNowHook | None = None,
) -> SchedulerPort:
    """Return the adapter registered for ``host_version``.

    Raises ``ValueError`` for an unknown version.
    """

    try:
        version = HostVersion(str(getattr(host_version, "value", host_version)).lower())
    except ValueError as exc:
        known = ", ".join(v.value for v in HostVersion)
        raise ValueError(f"Unknown host version {host_version!r}; expected one of: {known}") from exc

    adapter_cls = SCHEDULER_ADAPTERS[version]
    logger.debug("Using %s for host %s", adapter_cls.__name__, version.value)
    return adapter_cls(game_temp, run_now)
