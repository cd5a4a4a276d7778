"""Game — the navigation state machine for one character.

Navigation to a scene runs in two phases:

  1. ``BEFORE_NAVIGATION`` is dispatched with ``target`` set to the scene the
     engine is about to show. A redirect set here replaces the target.
  2. ``navigate-to/<template>`` is dispatched with a fresh ``viewpoint`` for the
     (possibly replaced) target and the ``parameters`` of the action that led
     there. Handlers decorate the viewpoint with action groups. A redirect set
     here discards that viewpoint and starts over at the redirect target with
     empty parameters.

When neither phase redirects, the viewpoint is committed to the character and
persisted. Redirect chains are bounded by ``MAX_REDIRECTS``.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable

from racegate.config import Settings
from racegate.events import EventContext, EventDispatcher, navigate_to_event
from racegate.models import Character, Scene, Viewpoint
from racegate.storage import SceneNotFoundError, Storage

logger = logging.getLogger(__name__)

BEFORE_NAVIGATION = "before-navigation"
MAX_REDIRECTS = 10


class ActionNotFoundError(LookupError):
    """The requested action is not part of the character's current viewpoint."""


class NavigationError(RuntimeError):
    """Navigation could not settle on a scene."""


class Game:
    def __init__(
        self,
        storage: Storage,
        dispatcher: EventDispatcher | None = None,
        settings: Settings | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self.storage = storage
        self.dispatcher = dispatcher or EventDispatcher()
        self.settings = settings or Settings()
        self._clock = clock or date.today
        self._character: Character | None = None

    # ------------------------------------------------------------------
    # Character
    # ------------------------------------------------------------------

    @property
    def character(self) -> Character:
        if self._character is None:
            raise RuntimeError("No character set; call set_character() first")
        return self._character

    def set_character(self, character: Character) -> None:
        self._character = character

    def save_character(self) -> None:
        self.storage.save_character(self.character)

    def today(self) -> date:
        return self._clock()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def dispatch(self, event: str, **data: Any) -> EventContext:
        """Dispatch ``event`` with a fresh context built from ``data``."""
        return self.dispatcher.dispatch(event, EventContext(event, self, data))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def require_scene(self, template: str) -> Scene:
        scene = self.storage.get_scene_by_template(template)
        if scene is None:
            raise SceneNotFoundError(f"No scene with template {template!r}")
        return scene

    def get_viewpoint(self) -> Viewpoint:
        """Current viewpoint; a first visit lands on the default scene."""
        if self.character.viewpoint is None:
            self.navigate(self.require_scene(self.settings.default_scene))
        return self.character.viewpoint

    def take_action(self, action_id: str) -> Viewpoint:
        action = self.get_viewpoint().find_action(action_id)
        if action is None:
            raise ActionNotFoundError(f"Action {action_id!r} is not available here")
        scene = self.storage.get_scene(action.destination_scene_id)
        if scene is None:
            raise SceneNotFoundError(
                f"Action {action.title!r} points to missing scene {action.destination_scene_id}"
            )
        return self.navigate(scene, action.parameters)

    def navigate(self, scene: Scene, parameters: dict[str, Any] | None = None) -> Viewpoint:
        parameters = dict(parameters or {})

        for _ in range(MAX_REDIRECTS + 1):
            before = self.dispatch(BEFORE_NAVIGATION, target=scene)
            if before.redirect is not None and before.redirect.template != scene.template:
                logger.debug("before-navigation redirect %s -> %s", scene.template, before.redirect.template)
                scene = before.redirect
                parameters = {}

            viewpoint = Viewpoint.for_scene(scene)
            context = self.dispatch(
                navigate_to_event(scene.template),
                scene=scene,
                viewpoint=viewpoint,
                parameters=parameters,
            )
            if context.redirect is None:
                self.character.viewpoint = viewpoint
                self.save_character()
                logger.debug("character=%s now at %s", self.character.id, scene.template)
                return viewpoint

            logger.debug("navigate-to redirect %s -> %s", scene.template, context.redirect.template)
            scene = context.redirect
            parameters = {}

        raise NavigationError(
            f"Gave up after {MAX_REDIRECTS} redirects (last target {scene.template!r})"
        )
