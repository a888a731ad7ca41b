"""Canonical registry of event bus topics used by the equip event systems.

Each entry is declared as a :class:`~enum.Enum` member and documents the
producer, the intended consumers and the payload guarantees for the associated
event.  Importing modules should rely on the enum members (e.g.
``topics.EventTopic.EQUIP_EVENT_RESERVED``) rather than raw strings.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["EventTopic"]


class EventTopic(str, Enum):
    """Enumeration of every topic published on the event bus."""

    EQUIP_CHANGED = "EquipChanged"
    """Published by :class:`core.equip_events.session.EquipScreenSession`.

    Subscribers: logging sinks and UI mirrors.
    Guarantees: provides ``slot_index``, ``previous_item`` and ``new_item``.
    """

    EQUIP_EVENT_RESERVED = "EquipEventReserved"
    """Published by the dispatcher after the scheduler accepted a reservation.

    Subscribers: harness reporters and tests.
    Guarantees: carries ``event_id``, ``fire_timing`` and ``slot_index``.
    """

    EQUIP_EVENT_SKIPPED = "EquipEventSkipped"
    """Published by the dispatcher when an equip change resolves to no event.

    Subscribers: harness reporters and tests.
    Guarantees: carries ``slot_index`` and a short ``reason`` string.
    """

    MENU_CLOSED = "MenuClosed"
    """Published when the player leaves the menu flow.

    Subscribers: :class:`core.equip_events.simulation.InMemoryScheduler`.
    Guarantees: no payload.
    """

    COMMON_EVENT_STARTED = "CommonEventStarted"
    """Published by the in-memory scheduler when a reserved event fires.

    Subscribers: harness reporters and tests.
    Guarantees: provides ``event_id`` and the ``trigger`` that fired it.
    """


# ---------------------------------------------------------------------------
# Module-level aliases
# ---------------------------------------------------------------------------

EQUIP_CHANGED = EventTopic.EQUIP_CHANGED
EQUIP_EVENT_RESERVED = EventTopic.EQUIP_EVENT_RESERVED
EQUIP_EVENT_SKIPPED = EventTopic.EQUIP_EVENT_SKIPPED
MENU_CLOSED = EventTopic.MENU_CLOSED
COMMON_EVENT_STARTED = EventTopic.COMMON_EVENT_STARTED
