"""Typed exceptions raised by the mapty core.

A missing storage slot and an unknown activity id are not errors: the
persistence adapter returns an empty list and ``find_by_id`` returns
``None``.
"""

INVALID_INPUTS_MESSAGE = "Inputs have to be positive numbers!"
NO_POSITION_MESSAGE = "Could not get your position"


class MaptyError(Exception):
    """Base class for every mapty exception."""


class ValidationError(MaptyError, ValueError):
    """Raised when activity inputs are not finite positive numbers.

    Nothing has been mutated when this is raised.
    """

    def __init__(self, message: str = INVALID_INPUTS_MESSAGE, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class GeolocationUnavailable(MaptyError):
    """Raised when the position capability fails or permission is denied."""

    def __init__(self, message: str = NO_POSITION_MESSAGE) -> None:
        super().__init__(message)
