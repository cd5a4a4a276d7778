from datetime import date
from pathlib import Path

import pytest

from racegate.game import Game
from racegate.models import Character
from racegate.modules import ModuleManager, RaceModule, available_modules
from racegate.storage import Storage

TODAY = date(2026, 10, 19)


@pytest.fixture
def storage(tmp_path: Path) -> Storage:
    """Fresh storage under a per-test directory."""
    return Storage(tmp_path / "data")


@pytest.fixture
def game(storage: Storage) -> Game:
    """Game with no modules loaded and a fixed clock."""
    return Game(storage, clock=lambda: TODAY)


@pytest.fixture
def installed_game(storage: Storage) -> Game:
    """Game with every available module installed and loaded."""
    game = Game(storage, clock=lambda: TODAY)
    manager = ModuleManager(game)
    for module in available_modules().values():
        manager.register(module)
    return game


@pytest.fixture
def race_game(installed_game: Game) -> Game:
    """All scenes installed, but only the race module listens to events."""
    game = Game(installed_game.storage, clock=lambda: TODAY)
    ModuleManager(game).load(RaceModule())
    return game


@pytest.fixture
def character(storage: Storage) -> Character:
    character = Character(id="ada", name="Ada")
    storage.save_character(character)
    return character
