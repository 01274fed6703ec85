"""
Saved-game load/save.

Responsibilities:
- Write the GameState bundle to JSON when the window closes
- Read it back at start-up so a suspended game can resume
"""
import json
from pathlib import Path

from . import config as C


def load_checkpoint(path=C.STATE_PATH):
    path = Path(path)
    if not path.exists():
        return None

    try:
        with path.open() as f:
            bundle = json.load(f)
    except (OSError, ValueError) as ex:
        print(f"⚠️ Failed to load saved game from {path}: {ex}")
        return None

    if not isinstance(bundle, dict):
        print(f"⚠️ Ignoring saved game in {path}: expected an object, got {type(bundle).__name__}")
        return None
    return bundle


def save_checkpoint(bundle, path=C.STATE_PATH):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        json.dump(bundle, f, indent=2)
