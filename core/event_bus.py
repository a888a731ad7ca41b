"""In-process publish/subscribe bus shared by the equip event components."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, Mapping, MutableMapping, Sequence

from core.events.topics import EventTopic
from utils.logger import get_logger

__all__ = ["EventBus", "Subscriber", "Topic"]

Topic = str | EventTopic
Subscriber = Callable[..., None]

logger = get_logger(__name__)


class EventBus:
    """Synchronous event dispatcher.

    Topics may be :class:`~core.events.topics.EventTopic` members or plain
    strings.  A payload is given either as a mapping (``publish(topic, payload)``)
    or as keyword arguments; when both are supplied the keywords win.
    Subscribers run in registration order on the publishing call stack.
    """

    def __init__(self) -> None:
        self._subscribers: MutableMapping[str, list[Subscriber]] = defaultdict(list)

    @staticmethod
    def _key(topic: Topic) -> str:
        return topic.value if isinstance(topic, EventTopic) else str(topic)

    def subscribe(self, topic: Topic, callback: Subscriber) -> None:
        """Register ``callback`` for ``topic``; duplicates are ignored."""

        callbacks = self._subscribers[self._key(topic)]
        if callback not in callbacks:
            callbacks.append(callback)

    def unsubscribe(self, topic: Topic, callback: Subscriber) -> None:
        key = self._key(topic)
        callbacks = self._subscribers.get(key)
        if not callbacks or callback not in callbacks:
            return
        callbacks.remove(callback)
        if not callbacks:
            del self._subscribers[key]

    def publish(
        self,
        topic: Topic,
        payload: Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ) -> None:
        """Deliver ``topic`` to every current subscriber."""

        key = self._key(topic)
        merged: Dict[str, Any] = dict(payload or {})
        merged.update(kwargs)

        callbacks = tuple(self._subscribers.get(key, ()))
        logger.debug("publish %s to %d subscriber(s)", key, len(callbacks))
        for callback in callbacks:
            callback(**merged)

    def clear(self) -> None:
        self._subscribers.clear()

    def get_subscribers(self, topic: Topic) -> Sequence[Subscriber]:
        return tuple(self._subscribers.get(self._key(topic), ()))
