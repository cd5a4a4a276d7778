"""Engine settings and per-module configuration.

Settings come from the environment, optionally seeded from a ``.env`` file at
the repo root:

    DATA_DIR        storage directory (default: ./data)
    DEFAULT_SCENE   template shown to characters without a viewpoint
    LOG_LEVEL       logging level name for main.py (default: INFO)

Module configs carry every identifier a module shares with the outside world
(scene templates, property keys, event names), so two installations of the
same module can be wired differently without touching its code.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

ROOT = Path(__file__).parent.parent
DEFAULT_DATA_DIR = ROOT / "data"

# Identifiers owned by the new-day collaborator. Other modules reference them
# through their own config objects.
BEFORE_NEW_DAY = "newday/before"
CONTINUE_TEMPLATE = "newday/continue"
VILLAGE_TEMPLATE = "village"


class Settings(BaseModel):
    data_dir: Path = DEFAULT_DATA_DIR
    default_scene: str = VILLAGE_TEMPLATE
    log_level: str = "INFO"


def load_settings(env_file: Path | None = None) -> Settings:
    """Read settings from the environment (after loading ``.env`` if present)."""
    load_dotenv(env_file or ROOT / ".env")
    return Settings(
        data_dir=Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR))),
        default_scene=os.getenv("DEFAULT_SCENE", VILLAGE_TEMPLATE),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


class RaceConfig(BaseModel):
    module_id: str = "racegate/race"
    choose_template: str = "race/choose"
    select_template: str = "race/select"
    race_property: str = "race"
    scene_ids_property: str = "sceneIds"
    races: tuple[str, ...] = ("Human", "Elf", "Dwarf", "Troll")
    before_new_day_event: str = BEFORE_NEW_DAY
    continue_template: str = CONTINUE_TEMPLATE


class NewDayConfig(BaseModel):
    module_id: str = "racegate/newday"
    before_new_day_event: str = BEFORE_NEW_DAY
    continue_template: str = CONTINUE_TEMPLATE
    return_template: str = VILLAGE_TEMPLATE
    last_new_day_property: str = "newday/lastNewDay"
    in_progress_property: str = "newday/inProgress"
    scene_ids_property: str = "sceneIds"


class VillageConfig(BaseModel):
    module_id: str = "racegate/village"
    template: str = VILLAGE_TEMPLATE
    scene_ids_property: str = "sceneIds"
