"""Event hooks — how modules react to engine lifecycle and navigation.

Event names are plain strings. There is no central list: the engine owns a few
(``BEFORE_NAVIGATION``, the ``navigate-to/<template>`` family), every module may
define its own, and anyone who knows a name can subscribe to it.

Handlers implement the protocol:

    def handle(self, event: str, context: EventContext) -> EventContext: ...

The dispatcher calls every handler subscribed to an event in subscription
order, passing each one the context returned by the previous handler.

Redirects: ``context.redirect`` is a single slot. Any handler may fill it and a
later handler overwrites an earlier one (last write wins). Whoever
dispatched the event decides what to do with the final value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from racegate.game import Game
    from racegate.models import Scene, Viewpoint

logger = logging.getLogger(__name__)

NAVIGATE_TO_PREFIX = "navigate-to/"


def navigate_to_event(template: str) -> str:
    """Name of the event fired whenever a character navigates to ``template``."""
    return NAVIGATE_TO_PREFIX + template


# ---------------------------------------------------------------------------
# Context passed through the handler chain
# ---------------------------------------------------------------------------

class EventContext:
    """Mutable state threaded through the handlers of one event."""

    def __init__(self, event: str, game: Game, data: dict[str, Any] | None = None) -> None:
        self.event = event
        self.game = game
        self._data: dict[str, Any] = dict(data or {})
        self._redirect: Scene | None = None

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    @property
    def redirect(self) -> Scene | None:
        return self._redirect

    @redirect.setter
    def redirect(self, scene: Scene | None) -> None:
        if self._redirect is not None and scene is not None:
            logger.debug(
                "event=%s redirect %s overwritten by %s",
                self.event, self._redirect.template, scene.template,
            )
        self._redirect = scene

    @property
    def viewpoint(self) -> Viewpoint | None:
        return self._data.get("viewpoint")

    @property
    def parameters(self) -> dict[str, Any]:
        return self._data.get("parameters") or {}


class EventHandler(Protocol):
    def handle(self, event: str, context: EventContext) -> EventContext: ...


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

class EventDispatcher:
    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event: str, handler: EventHandler) -> None:
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._handlers[event]

    def unsubscribe_all(self, handler: EventHandler) -> None:
        for event in list(self._handlers):
            self.unsubscribe(event, handler)

    def handlers_for(self, event: str) -> list[EventHandler]:
        return list(self._handlers.get(event, []))

    def dispatch(self, event: str, context: EventContext) -> EventContext:
        handlers = self.handlers_for(event)
        logger.debug("dispatch event=%s handlers=%d", event, len(handlers))
        for handler in handlers:
            context = handler.handle(event, context)
        return context
