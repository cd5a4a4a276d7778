"""Character endpoints: create, inspect, current viewpoint, take action."""

from fastapi import APIRouter, HTTPException, Request

from racegate.game import ActionNotFoundError
from racegate.models import Character
from racegate.storage import SceneNotFoundError

from .deps import game_for, get_storage
from .models import CreateCharacter

router = APIRouter()


@router.post("/characters")
async def create_character(body: CreateCharacter, request: Request):
    """Create a fresh character without properties or viewpoint."""
    storage = get_storage(request)
    if storage.get_character(body.id) is not None:
        raise HTTPException(409, "Character already exists")
    character = Character(id=body.id, name=body.name)
    storage.save_character(character)
    return character


@router.get("/characters/{character_id}")
async def get_character(character_id: str, request: Request):
    """Get a character with its properties."""
    character = get_storage(request).get_character(character_id)
    if character is None:
        raise HTTPException(404, "Character not found")
    return character


@router.get("/characters/{character_id}/viewpoint")
async def get_viewpoint(character_id: str, request: Request):
    """Current viewpoint; the first visit navigates to the default scene."""
    game = game_for(request, character_id)
    try:
        viewpoint = game.get_viewpoint()
    except SceneNotFoundError as e:
        raise HTTPException(500, str(e))
    return viewpoint.model_copy(update={"action_groups": viewpoint.ordered_action_groups()})


@router.post("/characters/{character_id}/actions/{action_id}")
async def take_action(character_id: str, action_id: str, request: Request):
    """Take an action from the current viewpoint and return the new one."""
    game = game_for(request, character_id)
    try:
        viewpoint = game.take_action(action_id)
    except ActionNotFoundError:
        raise HTTPException(404, "Action not found")
    except SceneNotFoundError as e:
        raise HTTPException(500, str(e))
    return viewpoint.model_copy(update={"action_groups": viewpoint.ordered_action_groups()})
