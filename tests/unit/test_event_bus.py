from __future__ import annotations

from core.event_bus import EventBus
from core.events.topics import EventTopic


def test_enum_and_string_topics_share_subscribers() -> None:
    bus = EventBus()
    received: list[dict] = []
    bus.subscribe(EventTopic.MENU_CLOSED, lambda **payload: received.append(payload))

    bus.publish("MenuClosed")
    bus.publish(EventTopic.MENU_CLOSED, {"a": 1}, a=2, b=3)

    assert received == [{}, {"a": 2, "b": 3}]


def test_duplicate_subscription_ignored_and_unsubscribe() -> None:
    bus = EventBus()
    calls: list[int] = []

    def handler(**_: object) -> None:
        calls.append(1)

    bus.subscribe(EventTopic.EQUIP_CHANGED, handler)
    bus.subscribe(EventTopic.EQUIP_CHANGED, handler)
    bus.publish(EventTopic.EQUIP_CHANGED)
    bus.unsubscribe(EventTopic.EQUIP_CHANGED, handler)
    bus.unsubscribe(EventTopic.EQUIP_CHANGED, handler)
    bus.publish(EventTopic.EQUIP_CHANGED)

    assert calls == [1]
    assert bus.get_subscribers(EventTopic.EQUIP_CHANGED) == ()


def test_subscriber_added_during_publish_runs_next_time() -> None:
    bus = EventBus()
    order: list[str] = []

    def late(**_: object) -> None:
        order.append("late")

    def first(**_: object) -> None:
        order.append("first")
        bus.subscribe(EventTopic.MENU_CLOSED, late)

    bus.subscribe(EventTopic.MENU_CLOSED, first)
    bus.publish(EventTopic.MENU_CLOSED)
    bus.publish(EventTopic.MENU_CLOSED)

    assert order == ["first", "first", "late"]


def test_clear() -> None:
    bus = EventBus()
    bus.subscribe(EventTopic.MENU_CLOSED, lambda **_: None)

    bus.clear()

    assert bus.get_subscribers(EventTopic.MENU_CLOSED) == ()
