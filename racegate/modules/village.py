"""Village — the default scene characters return to. Owns no event handlers."""

from __future__ import annotations

from racegate.config import VillageConfig
from racegate.game import Game
from racegate.models import ModuleRecord, Scene

from .base import Module

VILLAGE_TITLE = "Village Square"
VILLAGE_DESCRIPTION = "The village hustles and bustles. No one really notices that you are standing there."


class VillageModule(Module):
    def __init__(self, config: VillageConfig | None = None) -> None:
        self.config = config or VillageConfig()
        self.name = self.config.module_id

    def on_register(self, game: Game, record: ModuleRecord) -> None:
        scene = Scene(template=self.config.template, title=VILLAGE_TITLE, description=VILLAGE_DESCRIPTION)
        self.install_scenes(game, record, [scene], self.config.scene_ids_property)

    def on_unregister(self, game: Game, record: ModuleRecord) -> None:
        self.remove_scenes(game, record, self.config.scene_ids_property)
