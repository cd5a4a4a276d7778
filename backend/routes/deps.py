"""Request-scoped helpers shared by the route modules."""

from fastapi import HTTPException, Request

from racegate import build_game
from racegate.game import Game
from racegate.storage import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def game_for(request: Request, character_id: str) -> Game:
    """Build a Game for one request with the character loaded."""
    storage = get_storage(request)
    character = storage.get_character(character_id)
    if character is None:
        raise HTTPException(404, "Character not found")
    game = build_game(storage, request.app.state.settings)
    game.set_character(character)
    return game
