"""Tests for racegate.models."""

import pytest
from pydantic import ValidationError

from racegate.models import Action, ActionGroup, Character, ModuleRecord, Scene, Viewpoint


class TestScene:
    def test_id_unset_until_persisted(self) -> None:
        s = Scene(template="village", title="Village Square")
        assert s.id is None
        assert s.description == ""

    def test_template_is_frozen(self) -> None:
        s = Scene(template="village", title="Village Square")
        with pytest.raises(ValidationError):
            s.template = "harbor"

    def test_title_is_mutable(self) -> None:
        s = Scene(template="village", title="Village Square")
        s.title = "Market"
        assert s.title == "Market"

    def test_serialise_roundtrip(self) -> None:
        s = Scene(id=3, template="race/choose", title="Which race?", description="Pick.")
        restored = Scene.model_validate_json(s.model_dump_json())
        assert restored == s


class TestAction:
    def test_ids_are_unique(self) -> None:
        a = Action(destination_scene_id=1, title="Human")
        b = Action(destination_scene_id=1, title="Human")
        assert a.id != b.id

    def test_parameters_default_to_empty(self) -> None:
        a = Action(destination_scene_id=1, title="Continue")
        assert a.parameters == {}

    def test_parameters_survive_roundtrip(self) -> None:
        a = Action(destination_scene_id=2, title="Elf", parameters={"race": "Elf", "n": [1, 2]})
        restored = Action.model_validate(a.model_dump())
        assert restored.parameters == {"race": "Elf", "n": [1, 2]}


class TestViewpoint:
    def _viewpoint(self) -> Viewpoint:
        return Viewpoint.for_scene(Scene(id=7, template="village", title="Village Square"))

    def test_for_scene_copies_scene_fields(self) -> None:
        v = self._viewpoint()
        assert v.scene_id == 7
        assert v.template == "village"
        assert v.title == "Village Square"
        assert v.action_groups == []

    def test_groups_ordered_by_priority(self) -> None:
        v = self._viewpoint()
        v.add_action_group(ActionGroup(id="b", title="Later", priority=10))
        v.add_action_group(ActionGroup(id="a", title="First", priority=0))
        assert [g.id for g in v.ordered_action_groups()] == ["a", "b"]

    def test_equal_priority_keeps_insertion_order(self) -> None:
        v = self._viewpoint()
        for name in ("one", "two", "three"):
            v.add_action_group(ActionGroup(id=name, title=name))
        assert [g.id for g in v.ordered_action_groups()] == ["one", "two", "three"]

    def test_add_appends(self) -> None:
        v = self._viewpoint()
        v.add_action_group(ActionGroup(id="x", title="X", priority=5))
        v.add_action_group(ActionGroup(id="y", title="Y", priority=1))
        assert [g.id for g in v.action_groups] == ["x", "y"]

    def test_find_action(self) -> None:
        v = self._viewpoint()
        action = Action(destination_scene_id=1, title="Go")
        v.add_action_group(ActionGroup(id="m", title="M", actions=[action]))
        assert v.find_action(action.id) == action
        assert v.find_action("missing") is None


class TestProperties:
    def test_unset_returns_default(self) -> None:
        c = Character(id="ada", name="Ada")
        assert c.get_property("race") is None
        assert c.get_property("race", "none") == "none"
        assert not c.has_property("race")

    def test_set_and_get(self) -> None:
        c = Character(id="ada", name="Ada")
        c.set_property("race", "Elf")
        assert c.get_property("race") == "Elf"
        assert c.has_property("race")

    def test_setting_none_unsets(self) -> None:
        r = ModuleRecord(name="racegate/race")
        r.set_property("sceneIds", {"race/choose": 1})
        r.set_property("sceneIds", None)
        assert "sceneIds" not in r.properties
        assert r.get_property("sceneIds") is None

    def test_character_roundtrip_with_viewpoint(self) -> None:
        c = Character(id="ada", name="Ada", properties={"race": "Troll"})
        c.viewpoint = Viewpoint(template="village", title="Village Square")
        restored = Character.model_validate_json(c.model_dump_json())
        assert restored == c
