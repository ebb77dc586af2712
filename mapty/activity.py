"""Activity model for mapty.

An activity is a tagged union: one class, with a ``kind`` discriminant that
decides which kind-specific field and derived metric it carries. Paced
activities (running style) carry cadence and pace; elevation activities
(cycling style) carry elevation gain and speed. Code that needs variant
behaviour branches on ``kind`` so that freshly created activities and
activities rebuilt from storage follow the same path.
"""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from enum import Enum
from typing import Any, NamedTuple

MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


class ActivityKind(Enum):
    PACED = "paced"
    ELEVATION = "elevation"

    @property
    def title(self) -> str:
        return f"{self.value[0].upper()}{self.value[1:]}"


class Coordinates(NamedTuple):
    lat: float
    lng: float


def make_id(timestamp: datetime) -> str:
    """Last ten digits of the millisecond epoch timestamp.

    Two activities created within the same millisecond share an id.
    """
    return str(int(timestamp.timestamp() * 1000))[-10:]


def make_label(kind: ActivityKind, timestamp: datetime) -> str:
    """Human readable label, e.g. ``"Paced on October 17"``."""
    return f"{kind.title} on {MONTHS[timestamp.month - 1]} {timestamp.day}"


class Activity:
    """A single logged exercise record.

    Inputs are read-only once constructed. Derived values (``pace`` or
    ``speed`` and ``label``) are computed exactly once, here. The only
    mutation available afterwards is ``click()``.

    Input validation is the collection store's job; constructing an
    ``Activity`` directly trusts its arguments.
    """

    def __init__(
        self,
        kind: ActivityKind,
        coordinates: Coordinates | tuple[float, float],
        distance: float,
        duration: float,
        *,
        cadence: float | None = None,
        elevation_gain: float | None = None,
        timestamp: datetime | None = None,
        tz: tzinfo | None = None,
    ):
        self._kind = ActivityKind(kind)
        self._timestamp = timestamp or datetime.now(tz or UTC)
        self._id = make_id(self._timestamp)
        self._coordinates = Coordinates(*coordinates)
        self._distance = distance  # km
        self._duration = duration  # min
        self._clicks = 0

        self._cadence = None
        self._pace = None
        self._elevation_gain = None
        self._speed = None

        if self._kind is ActivityKind.PACED:
            if cadence is None:
                raise TypeError("paced activities require a cadence")
            self._cadence = cadence
            self._pace = duration / distance  # min/km
        else:
            if elevation_gain is None:
                raise TypeError("elevation activities require an elevation_gain")
            self._elevation_gain = elevation_gain
            self._speed = distance / (duration / 60)  # km/h

        self._label = make_label(self._kind, self._timestamp)

    @classmethod
    def paced(cls, coordinates, distance, duration, cadence, **kwargs) -> Activity:
        return cls(ActivityKind.PACED, coordinates, distance, duration, cadence=cadence, **kwargs)

    @classmethod
    def elevation(cls, coordinates, distance, duration, elevation_gain, **kwargs) -> Activity:
        return cls(ActivityKind.ELEVATION, coordinates, distance, duration, elevation_gain=elevation_gain, **kwargs)

    # ---- read-only attributes ------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def kind(self) -> ActivityKind:
        return self._kind

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def coordinates(self) -> Coordinates:
        return self._coordinates

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def cadence(self) -> float | None:
        return self._cadence

    @property
    def pace(self) -> float | None:
        return self._pace

    @property
    def elevation_gain(self) -> float | None:
        return self._elevation_gain

    @property
    def speed(self) -> float | None:
        return self._speed

    @property
    def label(self) -> str:
        return self._label

    @property
    def clicks(self) -> int:
        return self._clicks

    @property
    def metric(self) -> float:
        """Pace (min/km) for paced activities, speed (km/h) for elevation ones."""
        if self._kind is ActivityKind.PACED:
            return self._pace
        return self._speed

    @property
    def kind_field(self) -> float:
        """Cadence for paced activities, elevation gain for elevation ones."""
        if self._kind is ActivityKind.PACED:
            return self._cadence
        return self._elevation_gain

    def click(self) -> None:
        self._clicks += 1

    # ---- serialisation -------------------------------------------------------

    def to_record(self) -> dict[str, Any]:
        """Return a plain JSON-compatible dict of every stored field."""
        record = {
            "id": self._id,
            "kind": self._kind.value,
            "timestamp": self._timestamp.isoformat(),
            "coords": [self._coordinates.lat, self._coordinates.lng],
            "distance": self._distance,
            "duration": self._duration,
            "clicks": self._clicks,
            "label": self._label,
        }
        if self._kind is ActivityKind.PACED:
            record["cadence"] = self._cadence
            record["pace"] = self._pace
        else:
            record["elevationGain"] = self._elevation_gain
            record["speed"] = self._speed
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Activity:
        """Rebuild an activity from a stored record.

        Stored records are plain data, so the variant is chosen from the
        stored ``kind`` value. The stored id, timestamp, label, click count
        and derived metric are restored as-is; nothing is recomputed. Numeric
        fields must hold numbers (or numeric strings).

        Raises KeyError, TypeError or ValueError for malformed records.
        """
        kind = ActivityKind(record["kind"])
        lat, lng = record["coords"]

        activity = cls.__new__(cls)
        activity._kind = kind
        activity._id = str(record["id"])
        activity._timestamp = datetime.fromisoformat(record["timestamp"])
        activity._coordinates = Coordinates(float(lat), float(lng))
        activity._distance = float(record["distance"])
        activity._duration = float(record["duration"])
        activity._clicks = int(record.get("clicks", 0))
        activity._label = record["label"]
        if not isinstance(activity._label, str):
            raise TypeError(f"label must be a string, not {type(activity._label).__name__}")
        activity._cadence = None
        activity._pace = None
        activity._elevation_gain = None
        activity._speed = None

        if kind is ActivityKind.PACED:
            activity._cadence = float(record["cadence"])
            activity._pace = float(record["pace"])
        else:
            activity._elevation_gain = float(record["elevationGain"])
            activity._speed = float(record["speed"])
        return activity

    def __repr__(self) -> str:
        return f"<Activity {self._id} {self._kind.value} {self._label!r}>"
