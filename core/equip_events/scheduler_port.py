"""Port definition for the host's common event reservation slot."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SchedulerPort(Protocol):
    """Minimal interface the dispatcher needs from a host scheduler.

    The host owns a single pending-reservation slot.  The dispatcher only
    writes to it, always in the order clear, set, then (for immediate timing)
    run-now.
    """

    def clear_pending_reservation(self) -> None:
        """Discard any reservation that has not fired yet."""

    def set_pending_reservation(self, event_id: int) -> None:
        """Install ``event_id`` as the pending reservation."""

    def run_pending_reservation_now(self) -> None:
        """Ask the host to run the pending reservation without waiting for menu close."""


__all__ = ["SchedulerPort"]
