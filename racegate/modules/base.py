"""Module base class and the lifecycle manager.

A module is an installable unit: it owns scenes, subscribes to events and keeps
a persisted ``ModuleRecord``. Installation is guarded by a single record
property, the scene-id map ``{template: scene_id}``, so both directions are
idempotent:

    on_register    map absent  → create scenes, write map
                   map present → nothing
    on_unregister  map present → delete scenes, clear map
                   map absent  → nothing

Partial failures never leave the map pointing at a scene that is gone without
raising ``ModuleLifecycleError``:

  - install: scenes created so far are deleted again, the map is not written;
  - uninstall: the map is rewritten with the entries that still exist.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from racegate.events import EventContext
from racegate.models import ModuleRecord, Scene

if TYPE_CHECKING:
    from racegate.game import Game

logger = logging.getLogger(__name__)


class ModuleLifecycleError(RuntimeError):
    """Installing or removing a module's scenes failed part-way."""


class Module:
    """Base class for content modules.

    Subclasses set ``name``, list their events in ``subscribed_events`` and
    override ``handle``. Unknown events must pass through untouched.
    """

    name: str = ""

    def subscribed_events(self) -> list[str]:
        return []

    def handle(self, event: str, context: EventContext) -> EventContext:
        return context

    def on_register(self, game: Game, record: ModuleRecord) -> None:
        pass

    def on_unregister(self, game: Game, record: ModuleRecord) -> None:
        pass

    # ------------------------------------------------------------------
    # Scene ownership helpers
    # ------------------------------------------------------------------

    def install_scenes(
        self, game: Game, record: ModuleRecord, scenes: Iterable[Scene], property_key: str
    ) -> bool:
        """Create ``scenes`` and record their ids. Returns False if already installed."""
        if record.has_property(property_key):
            return False

        created: list[Scene] = []
        try:
            for scene in scenes:
                created.append(game.storage.create_scene(scene))
        except Exception as e:
            for scene in created:
                try:
                    game.storage.delete_scene(scene)
                except Exception:
                    logger.exception(
                        "%s: rollback could not delete scene %s (%s)",
                        self.name, scene.id, scene.template,
                    )
            raise ModuleLifecycleError(
                f"{self.name}: could not create scenes, rolled back {len(created)}"
            ) from e

        record.set_property(property_key, {scene.template: scene.id for scene in created})
        game.storage.save_module(record)
        logger.info(
            "%s: added scenes (%s)",
            self.name,
            ", ".join(f"{scene.template}: {scene.id}" for scene in created),
        )
        return True

    def remove_scenes(self, game: Game, record: ModuleRecord, property_key: str) -> bool:
        """Delete recorded scenes and clear the map. Returns False if not installed."""
        scene_ids: dict[str, int] | None = record.get_property(property_key)
        if scene_ids is None:
            return False

        remaining = dict(scene_ids)
        for template, scene_id in scene_ids.items():
            scene = game.storage.get_scene(scene_id)
            if scene is None:
                logger.warning(
                    "%s: scene %s (%s) already gone, dropping it from %s",
                    self.name, scene_id, template, property_key,
                )
                del remaining[template]
                continue
            try:
                game.storage.delete_scene(scene)
            except Exception as e:
                record.set_property(property_key, remaining)
                game.storage.save_module(record)
                raise ModuleLifecycleError(
                    f"{self.name}: could not delete scene {scene_id} ({template}); "
                    f"{len(remaining)} scene(s) still recorded"
                ) from e
            del remaining[template]

        record.set_property(property_key, None)
        game.storage.save_module(record)
        logger.info("%s: removed scenes (%s)", self.name, ", ".join(map(str, scene_ids.values())))
        return True


# ---------------------------------------------------------------------------
# Lifecycle manager
# ---------------------------------------------------------------------------

class ModuleManager:
    """Installs, removes and loads modules into a game's dispatcher."""

    def __init__(self, game: Game) -> None:
        self.game = game

    def is_installed(self, module: Module) -> bool:
        return self.game.storage.get_module(module.name) is not None

    def register(self, module: Module) -> ModuleRecord:
        record = self.game.storage.get_module(module.name) or ModuleRecord(name=module.name)
        module.on_register(self.game, record)
        self.game.storage.save_module(record)
        self.load(module)
        return record

    def unregister(self, module: Module) -> None:
        self.game.dispatcher.unsubscribe_all(module)
        record = self.game.storage.get_module(module.name)
        if record is None:
            return
        module.on_unregister(self.game, record)
        self.game.storage.delete_module(module.name)

    def load(self, module: Module) -> None:
        for event in module.subscribed_events():
            self.game.dispatcher.subscribe(event, module)

    def load_installed(self, modules: Iterable[Module]) -> list[Module]:
        loaded = [m for m in modules if self.is_installed(m)]
        for module in loaded:
            self.load(module)
        return loaded
