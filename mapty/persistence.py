"""Persistence adapter: the whole activity collection in one storage slot.

The collection is written as a JSON array under a fixed key. Every save is
a full overwrite. ``load()`` hands back plain dict records; turning them
back into ``Activity`` objects is left to the collection store, which has
to branch on the stored ``kind`` because the records carry no behaviour.
"""

import json
import logging
from collections.abc import Iterable
from typing import Any

from peewee import PeeweeException

from . import kvstore
from .activity import Activity

DEFAULT_STORAGE_KEY = "workouts"

log = logging.getLogger(__name__)


class WorkoutStorage:
    """Reads and writes the activity collection under a single key."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY):
        self.key = key

    def save(self, activities: Iterable[Activity]) -> None:
        """Serialise every activity and overwrite the slot.

        Storage failures are logged rather than raised; the in-memory
        collection stays authoritative for the running session.
        """
        payload = json.dumps([activity.to_record() for activity in activities])
        try:
            kvstore.set_item(self.key, payload)
        except PeeweeException as e:
            log.warning("could not save activities under %r: %s", self.key, e)
            return
        log.debug("saved %d bytes under %r", len(payload), self.key)

    def load(self) -> list[dict[str, Any]]:
        """Return the stored records, or an empty list if nothing is stored."""
        try:
            raw = kvstore.get_item(self.key)
        except PeeweeException as e:
            log.warning("could not read activities under %r: %s", self.key, e)
            return []
        if raw is None:
            log.debug("no stored activities under %r", self.key)
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            log.warning("ignoring unreadable activity data under %r: %s", self.key, e)
            return []
        if not isinstance(data, list):
            log.warning("ignoring activity data under %r: expected a list, got %s", self.key, type(data).__name__)
            return []
        return data

    def clear(self) -> bool:
        """Erase the slot. Returns False if storage could not be reached."""
        try:
            kvstore.remove_item(self.key)
        except PeeweeException as e:
            log.warning("could not clear activities under %r: %s", self.key, e)
            return False
        return True
