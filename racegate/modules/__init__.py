"""Content modules shipped with the engine.

``available_modules()`` lists them in load order: the order handlers are
subscribed, and therefore the order they see shared events in.

  village  — default scene
  newday   — once-a-day cycle, fires "before new day"
  race     — one-time race selection hooked into the new day
"""

from .base import Module, ModuleLifecycleError, ModuleManager  # noqa: F401
from .newday import NewDayModule  # noqa: F401
from .race import RaceModule  # noqa: F401
from .village import VillageModule  # noqa: F401


def available_modules() -> dict[str, Module]:
    return {
        "village": VillageModule(),
        "newday": NewDayModule(),
        "race": RaceModule(),
    }
