"""Application configuration helpers.

The DB (``keyvalue`` table, keys prefixed with ``config:``) is always the
source of truth.

On every ``load_config()`` call the file is checked:
  - If a JSON config file exists *and* its contents differ from the DB,
    the DB is updated to match the file.
  - If the DB is empty and no file exists, built-in defaults are seeded.

This means no config file is required, and editing the JSON file then
restarting picks up the changes.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from peewee import PeeweeException

from . import kvstore
from .db import is_configured

CONFIG_PREFIX = "config:"

DEFAULT_CONFIG: dict[str, Any] = {
    "home_timezone": "UTC",
    "debug": False,
    "storage_key": "workouts",
    # [lat, lng] used by the terminal geolocation; None means "unknown"
    "home_location": None,
    "map": {
        "zoom_level": 13,
        "pan_duration": 1,
        "popup": {
            "max_width": 250,
            "min_width": 100,
            "auto_close": False,
            "close_on_click": False,
        },
    },
}

# Candidate JSON config file locations (searched in order)
_FILE_PATHS: list[Path] = [
    Path("mapty_config.json"),
    Path("../mapty_config.json"),
]

log = logging.getLogger(__name__)


def _load_from_db() -> dict[str, Any] | None:
    """Return config dict from DB rows, or ``None`` if there are none."""
    try:
        names = kvstore.keys(CONFIG_PREFIX)
        if not names:
            return None
        return {name[len(CONFIG_PREFIX) :]: json.loads(kvstore.get_item(name)) for name in names}
    except (PeeweeException, json.JSONDecodeError) as e:
        log.warning("could not read config from DB: %s", e)
        return None


def _load_from_file() -> dict[str, Any] | None:
    """Try each candidate path; return parsed JSON or ``None``."""
    for path in _FILE_PATHS:
        if path.exists():
            try:
                with open(path) as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                log.warning("ignoring config file %s: %s", path, e)
    return None


def load_config() -> dict[str, Any]:
    """Return the current configuration, using the DB as source of truth.

    An empty DB is seeded from the file (or the defaults). Otherwise only
    the top-level keys whose file value differs from the stored one are
    written back. Without a configured DB the file or the defaults are
    returned and nothing is persisted.
    """
    file_cfg = _load_from_file()
    if not is_configured():
        return file_cfg or copy.deepcopy(DEFAULT_CONFIG)

    db_cfg = _load_from_db()
    if db_cfg is None:
        seed = file_cfg if file_cfg is not None else copy.deepcopy(DEFAULT_CONFIG)
        save_config(seed)
        return seed

    changed = {key: value for key, value in (file_cfg or {}).items() if db_cfg.get(key) != value}
    if changed:
        log.debug("config file changed keys: %s", ", ".join(sorted(changed)))
        save_config(changed)
        db_cfg.update(changed)
    return db_cfg


def save_config(config: dict[str, Any]) -> None:
    """Persist every top-level key of *config* to the DB as JSON values."""
    try:
        for key, value in config.items():
            kvstore.set_item(f"{CONFIG_PREFIX}{key}", json.dumps(value))
    except PeeweeException as e:
        log.warning("could not save config to DB: %s", e)


def get_setting(config: dict[str, Any], key: str) -> Any:
    """Look up *key*, falling back to the built-in default."""
    return config.get(key, DEFAULT_CONFIG.get(key))
