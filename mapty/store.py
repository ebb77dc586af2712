"""Activity collection store.

Owns the ordered list of activities for the session. Activities are only
ever appended (creation order), looked up by id, or wiped all at once.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import tzinfo
from typing import Any

from .activity import Activity, ActivityKind, Coordinates
from .errors import ValidationError
from .persistence import WorkoutStorage

log = logging.getLogger(__name__)


def to_number(raw: Any) -> float:
    """Coerce a raw form value the way a numeric input field would.

    Empty values become 0.0, numeric strings are parsed and anything else
    that cannot be read as a number becomes NaN.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0.0
    try:
        return float(raw)
    except (TypeError, ValueError):
        return float("nan")


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _all_positive(*values: float) -> bool:
    return all(v > 0 for v in values)


def validate_inputs(kind: ActivityKind, distance: float, duration: float, kind_field: float) -> None:
    """Raise ValidationError unless the numbers are acceptable for *kind*.

    Everything must be finite. Distance, duration and cadence must be
    strictly positive; elevation gain is exempt from the positivity check.
    """
    if not _all_finite(distance, duration, kind_field):
        raise ValidationError()
    if kind is ActivityKind.PACED:
        if not _all_positive(distance, duration, kind_field):
            raise ValidationError()
    elif not _all_positive(distance, duration):
        raise ValidationError()


class ActivityStore:
    """In-memory ordered collection of activities backed by a storage slot."""

    def __init__(self, storage: WorkoutStorage | None = None, tz: tzinfo | None = None):
        self.storage = storage or WorkoutStorage()
        self.tz = tz
        self.activities: list[Activity] = []

    def __len__(self) -> int:
        return len(self.activities)

    def __iter__(self):
        return iter(self.activities)

    def create(
        self,
        kind: ActivityKind | str,
        coordinates: Coordinates | tuple[float, float],
        distance: Any,
        duration: Any,
        kind_field: Any,
    ) -> Activity:
        """Validate, construct, append and save a new activity.

        Raises ValidationError (and changes nothing) if the inputs are bad.
        """
        try:
            kind = ActivityKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown activity kind: {kind!r}", field="kind") from None

        distance = to_number(distance)
        duration = to_number(duration)
        kind_field = to_number(kind_field)
        validate_inputs(kind, distance, duration, kind_field)

        if kind is ActivityKind.PACED:
            activity = Activity.paced(coordinates, distance, duration, kind_field, tz=self.tz)
        else:
            activity = Activity.elevation(coordinates, distance, duration, kind_field, tz=self.tz)

        self.activities.append(activity)
        log.debug("created %r", activity)
        self.storage.save(self.activities)
        return activity

    def find_by_id(self, activity_id: str) -> Activity | None:
        return next((a for a in self.activities if a.id == activity_id), None)

    def click(self, activity_id: str) -> Activity | None:
        """Count one interaction with an activity and persist the collection."""
        activity = self.find_by_id(activity_id)
        if activity is None:
            return None
        activity.click()
        self.storage.save(self.activities)
        return activity

    def hydrate(self, records: Iterable[dict[str, Any]]) -> list[Activity]:
        """Replace the collection with activities rebuilt from stored records."""
        activities = []
        for record in records:
            try:
                activities.append(Activity.from_record(record))
            except (KeyError, TypeError, ValueError) as e:
                log.warning("skipping malformed activity record %r: %s", record, e)
        self.activities = activities
        return self.activities

    def load(self) -> list[Activity]:
        return self.hydrate(self.storage.load())

    def reset_all(self) -> bool:
        """Drop every activity, in storage and then in memory.

        If storage cannot be cleared the in-memory collection is kept and
        False is returned.
        """
        if not self.storage.clear():
            return False
        self.activities = []
        log.debug("reset all activities")
        return True
