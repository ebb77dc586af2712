"""mapty: log workouts on a map and keep them between sessions."""

from .activity import Activity, ActivityKind, Coordinates
from .errors import GeolocationUnavailable, MaptyError, ValidationError
from .store import ActivityStore

__all__ = [
    "Activity",
    "ActivityKind",
    "ActivityStore",
    "Coordinates",
    "GeolocationUnavailable",
    "MaptyError",
    "ValidationError",
]
