"""Race selection — asks every new character which people they belong to.

Flow:
  before new day      → no race yet? redirect to the choose scene
  navigate-to choose  → offer one action per race, all pointing at select
  navigate-to select  → store the chosen race, continue the new day

The race is set once. A second selection (a stale or forged action) keeps the
stored value and simply moves on.
"""

from __future__ import annotations

import logging

from racegate.config import RaceConfig
from racegate.events import EventContext, navigate_to_event
from racegate.game import Game
from racegate.models import Action, ActionGroup, ModuleRecord, Scene

from .base import Module

logger = logging.getLogger(__name__)

CHOOSE_TITLE = "Which race do you belong to?"
CHOOSE_DESCRIPTION = """«To which kind of people do you belong?», a bodiless voice silently asks you.

Are you one of the humans? Agile, jack of all trades but master of none, living mostly in villages and cities.

Do you belong to the proud elven people? They live high among the trees of the forest, in elaborate but frail \
looking structures that seem ready to collapse under the slightest strain, yet have stood for centuries. They are \
careful people, always aware of their surroundings.

Or are you one of the dwarves? These noble and fierce people live deep in subterranean strongholds and value their \
privacy like no other, if only to guard their treasures from the greed of others.

Do you like swamps? As a troll you learned to fend for yourself from the moment you crept out of your leathery egg \
and went on to slay your yet unhatched siblings, feasting on their warm bones."""

SELECT_TITLE = "You have chosen your race."
SELECT_DESCRIPTION = (
    "Your shadow makes an agreeing gesture - or was it you? You don't know, you don't care. "
    "And you certainly should not see this text."
)


class RaceModule(Module):
    def __init__(self, config: RaceConfig | None = None) -> None:
        self.config = config or RaceConfig()
        self.name = self.config.module_id

    @property
    def choose_event(self) -> str:
        return navigate_to_event(self.config.choose_template)

    @property
    def select_event(self) -> str:
        return navigate_to_event(self.config.select_template)

    def subscribed_events(self) -> list[str]:
        return [self.config.before_new_day_event, self.choose_event, self.select_event]

    def handle(self, event: str, context: EventContext) -> EventContext:
        if event == self.config.before_new_day_event:
            return self._before_new_day(context)
        if event == self.choose_event:
            return self._choose(context)
        if event == self.select_event:
            return self._select(context)
        return context

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _before_new_day(self, context: EventContext) -> EventContext:
        game: Game = context.game
        if not game.character.has_property(self.config.race_property):
            context.redirect = game.require_scene(self.config.choose_template)
        return context

    def _choose(self, context: EventContext) -> EventContext:
        game: Game = context.game
        destination = game.require_scene(self.config.select_template)

        group = ActionGroup(id=self.name, title="Choose", priority=0)
        for race in self.config.races:
            group.actions.append(
                Action(destination_scene_id=destination.id, title=race, parameters={"race": race})
            )
        context.viewpoint.add_action_group(group)
        return context

    def _select(self, context: EventContext) -> EventContext:
        game: Game = context.game
        character = game.character
        race = context.parameters.get("race")

        if race not in self.config.races:
            logger.info("%s: invalid race %r for character %s", self.name, race, character.id)
            context.redirect = game.require_scene(self.config.choose_template)
            return context

        current = character.get_property(self.config.race_property)
        if current is None:
            character.set_property(self.config.race_property, race)
            game.save_character()
        elif current != race:
            logger.info(
                "%s: character %s already is %s, ignoring %s",
                self.name, character.id, current, race,
            )

        context.redirect = game.require_scene(self.config.continue_template)
        return context

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def scenes(self) -> list[Scene]:
        return [
            Scene(
                template=self.config.choose_template,
                title=CHOOSE_TITLE,
                description=CHOOSE_DESCRIPTION,
            ),
            Scene(
                template=self.config.select_template,
                title=SELECT_TITLE,
                description=SELECT_DESCRIPTION,
            ),
        ]

    def on_register(self, game: Game, record: ModuleRecord) -> None:
        self.install_scenes(game, record, self.scenes(), self.config.scene_ids_property)

    def on_unregister(self, game: Game, record: ModuleRecord) -> None:
        self.remove_scenes(game, record, self.config.scene_ids_property)
