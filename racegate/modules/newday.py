"""New day — starts a fresh day for a character once per calendar day.

On the first navigation of a day the module marks the day as in progress and
fires ``before new day``. Any handler may redirect that event (to run its own
scenes first); without a redirect the character goes straight to the continue
scene. Reaching the continue scene completes the day.
"""

from __future__ import annotations

import logging

from racegate.config import NewDayConfig
from racegate.events import EventContext, navigate_to_event
from racegate.game import BEFORE_NAVIGATION, Game
from racegate.models import Action, ActionGroup, ModuleRecord, Scene

from .base import Module

logger = logging.getLogger(__name__)

CONTINUE_TITLE = "It is a new day!"
CONTINUE_DESCRIPTION = "You open your eyes to discover that a new day has been bestowed upon you."


class NewDayModule(Module):
    def __init__(self, config: NewDayConfig | None = None) -> None:
        self.config = config or NewDayConfig()
        self.name = self.config.module_id

    @property
    def continue_event(self) -> str:
        return navigate_to_event(self.config.continue_template)

    def subscribed_events(self) -> list[str]:
        return [BEFORE_NAVIGATION, self.continue_event]

    def handle(self, event: str, context: EventContext) -> EventContext:
        if event == BEFORE_NAVIGATION:
            return self._before_navigation(context)
        if event == self.continue_event:
            return self._continue(context)
        return context

    def is_due(self, game: Game) -> bool:
        last = game.character.get_property(self.config.last_new_day_property)
        return last != game.today().isoformat()

    def _before_navigation(self, context: EventContext) -> EventContext:
        game: Game = context.game
        character = game.character
        if character.get_property(self.config.in_progress_property, False) or not self.is_due(game):
            return context

        logger.debug("%s: starting new day for %s", self.name, character.id)
        before = game.dispatch(self.config.before_new_day_event)
        target = before.redirect or game.require_scene(self.config.continue_template)

        # only mark the day once its first scene is known
        character.set_property(self.config.in_progress_property, True)
        game.save_character()
        context.redirect = target
        return context

    def _continue(self, context: EventContext) -> EventContext:
        game: Game = context.game
        character = game.character
        character.set_property(self.config.last_new_day_property, game.today().isoformat())
        character.set_property(self.config.in_progress_property, None)
        game.save_character()

        back = game.require_scene(self.config.return_template)
        context.viewpoint.add_action_group(
            ActionGroup(
                id=self.name,
                title="Back",
                priority=10,
                actions=[Action(destination_scene_id=back.id, title="Continue")],
            )
        )
        return context

    def on_register(self, game: Game, record: ModuleRecord) -> None:
        scene = Scene(
            template=self.config.continue_template,
            title=CONTINUE_TITLE,
            description=CONTINUE_DESCRIPTION,
        )
        self.install_scenes(game, record, [scene], self.config.scene_ids_property)

    def on_unregister(self, game: Game, record: ModuleRecord) -> None:
        self.remove_scenes(game, record, self.config.scene_ids_property)
