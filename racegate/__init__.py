"""racegate — event hooks, a scene graph and a one-time race selection."""

from racegate.config import Settings
from racegate.events import EventDispatcher
from racegate.game import Game
from racegate.modules import ModuleManager, available_modules
from racegate.storage import Storage


def build_game(storage: Storage, settings: Settings | None = None, **kwargs) -> Game:
    """Create a Game with every installed module loaded into its dispatcher."""
    game = Game(storage, EventDispatcher(), settings, **kwargs)
    ModuleManager(game).load_installed(available_modules().values())
    return game
