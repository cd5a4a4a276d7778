"""JSON file storage.

All state is stored in flat JSON files under a configurable base directory.
There is no database; every read loads the file and every write dumps it
again through the helpers below.

Directory layout:

    {base}/
      scenes.json             ← list of Scene objects, ids assigned on create
      characters/
        {id}.json             ← Character (properties + current viewpoint)
      modules/
        {slug}.json           ← ModuleRecord of an installed module

Scene ids behave like database keys: they are handed out on ``create_scene``
and never reused for another scene while the file exists.
"""

from __future__ import annotations

import json
import logging
import re
import unicodedata
from pathlib import Path
from typing import Any

from racegate.models import Character, ModuleRecord, Scene

logger = logging.getLogger(__name__)


class SceneNotFoundError(LookupError):
    """A referenced scene does not exist."""


def slugify(name: str) -> str:
    """Convert a module name or character id to a filesystem-safe slug.

    "racegate/race" → "racegate-race"
    """
    text = unicodedata.normalize("NFKD", name)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    text = text.strip("-")
    return text or "unnamed"


class Storage:
    def __init__(self, base_path: Path) -> None:
        self._base = base_path
        self._scenes_file = base_path / "scenes.json"
        self._characters_dir = base_path / "characters"
        self._modules_dir = base_path / "modules"
        self._characters_dir.mkdir(parents=True, exist_ok=True)
        self._modules_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    # ------------------------------------------------------------------
    # Internal path helpers
    # ------------------------------------------------------------------

    def _character_file(self, character_id: str) -> Path:
        return self._characters_dir / f"{slugify(character_id)}.json"

    def _module_file(self, name: str) -> Path:
        return self._modules_dir / f"{slugify(name)}.json"

    def _read_json(self, path: Path) -> Any:
        return json.loads(path.read_text())

    def _write_json(self, path: Path, data: Any) -> None:
        path.write_text(json.dumps(data, indent=2))

    # ------------------------------------------------------------------
    # Scenes
    # ------------------------------------------------------------------

    def list_scenes(self) -> list[Scene]:
        if not self._scenes_file.exists():
            return []
        return [Scene.model_validate(s) for s in self._read_json(self._scenes_file)]

    def _write_scenes(self, scenes: list[Scene]) -> None:
        self._write_json(self._scenes_file, [s.model_dump() for s in scenes])

    def get_scene(self, scene_id: int) -> Scene | None:
        for scene in self.list_scenes():
            if scene.id == scene_id:
                return scene
        return None

    def get_scene_by_template(self, template: str) -> Scene | None:
        for scene in self.list_scenes():
            if scene.template == template:
                return scene
        return None

    def create_scene(self, scene: Scene) -> Scene:
        """Persist a new scene and assign its id. Templates must be unique."""
        scenes = self.list_scenes()
        if any(s.template == scene.template for s in scenes):
            raise ValueError(f"Scene template {scene.template!r} already exists")
        scene.id = max((s.id or 0 for s in scenes), default=0) + 1
        scenes.append(scene)
        self._write_scenes(scenes)
        logger.debug("scene created id=%s template=%s", scene.id, scene.template)
        return scene

    def delete_scene(self, scene: Scene) -> None:
        scenes = self.list_scenes()
        remaining = [s for s in scenes if s.id != scene.id]
        if len(remaining) == len(scenes):
            raise SceneNotFoundError(f"Scene {scene.id} ({scene.template}) does not exist")
        self._write_scenes(remaining)
        logger.debug("scene deleted id=%s template=%s", scene.id, scene.template)

    # ------------------------------------------------------------------
    # Characters
    # ------------------------------------------------------------------

    def get_character(self, character_id: str) -> Character | None:
        path = self._character_file(character_id)
        if not path.exists():
            return None
        return Character.model_validate_json(path.read_text())

    def save_character(self, character: Character) -> None:
        """Upsert a character by id."""
        self._character_file(character.id).write_text(character.model_dump_json(indent=2))

    def list_characters(self) -> list[Character]:
        return [
            Character.model_validate_json(path.read_text())
            for path in sorted(self._characters_dir.glob("*.json"))
        ]

    # ------------------------------------------------------------------
    # Module records
    # ------------------------------------------------------------------

    def get_module(self, name: str) -> ModuleRecord | None:
        path = self._module_file(name)
        if not path.exists():
            return None
        return ModuleRecord.model_validate_json(path.read_text())

    def save_module(self, record: ModuleRecord) -> None:
        self._module_file(record.name).write_text(record.model_dump_json(indent=2))

    def delete_module(self, name: str) -> bool:
        path = self._module_file(name)
        if not path.exists():
            return False
        path.unlink()
        return True

    def list_modules(self) -> list[ModuleRecord]:
        return [
            ModuleRecord.model_validate_json(path.read_text())
            for path in sorted(self._modules_dir.glob("*.json"))
        ]
