"""Core domain models.

The scene graph, the action model and the entities carrying properties.
Pydantic is used for validation and serialisation at every data boundary.

Scenes are referenced across modules by their ``template`` string. The numeric
``id`` is only known once storage has persisted the scene.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, Field


def _new_action_id() -> str:
    return uuid.uuid4().hex


class Scene(BaseModel):
    """A navigable node in the content graph."""

    id: int | None = None  # assigned by Storage.create_scene
    template: str = Field(frozen=True)
    title: str
    description: str = ""


class Action(BaseModel):
    """A player-selectable edge to another scene.

    ``parameters`` is opaque to the graph. It is handed, unchanged, to whichever
    handler processes the destination scene's navigation event.
    """

    id: str = Field(default_factory=_new_action_id)
    destination_scene_id: int
    title: str
    parameters: dict[str, Any] = Field(default_factory=dict)


class ActionGroup(BaseModel):
    """An ordered bundle of actions contributed by one module."""

    id: str  # owning module
    title: str
    priority: int = 0  # lower sorts first
    actions: list[Action] = Field(default_factory=list)


class Viewpoint(BaseModel):
    """What the character currently sees."""

    scene_id: int | None = None
    template: str
    title: str
    description: str = ""
    action_groups: list[ActionGroup] = Field(default_factory=list)

    @classmethod
    def for_scene(cls, scene: Scene) -> Viewpoint:
        return cls(
            scene_id=scene.id,
            template=scene.template,
            title=scene.title,
            description=scene.description,
        )

    def add_action_group(self, group: ActionGroup) -> None:
        """Append a group. Groups are never replaced or removed once added."""
        self.action_groups.append(group)

    def ordered_action_groups(self) -> list[ActionGroup]:
        """Groups by priority; equal priorities keep the order they were added in."""
        return sorted(self.action_groups, key=lambda group: group.priority)

    def find_action(self, action_id: str) -> Action | None:
        for group in self.action_groups:
            for action in group.actions:
                if action.id == action_id:
                    return action
        return None


class _PropertyBag(BaseModel):
    """Key/value attributes where ``None`` means unset."""

    properties: dict[str, Any] = Field(default_factory=dict)

    def get_property(self, key: str, default: Any = None) -> Any:
        value = self.properties.get(key)
        return default if value is None else value

    def set_property(self, key: str, value: Any) -> None:
        if value is None:
            self.properties.pop(key, None)
        else:
            self.properties[key] = value

    def has_property(self, key: str) -> bool:
        return self.properties.get(key) is not None


class Character(_PropertyBag):
    """A player character."""

    id: str
    name: str
    viewpoint: Viewpoint | None = None


class ModuleRecord(_PropertyBag):
    """Persisted configuration record of an installed module."""

    name: str
