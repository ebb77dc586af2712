"""Presentation coordinator.

Bridges the activity store to the outside world: geolocation, the map, the
activity list, the entry form and user alerts. Those are capabilities the
coordinator calls into (or is called back by); it holds no rendering state
of its own beyond whether the map is ready and where it was last clicked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NamedTuple, Protocol

from .activity import Activity, ActivityKind, Coordinates
from .errors import NO_POSITION_MESSAGE, GeolocationUnavailable, ValidationError
from .render import RenderRequest, popup_options, render_request, view_options
from .store import ActivityStore

NO_LOCATION_MESSAGE = "Click on the map to choose where the workout happened"
RESET_FAILED_MESSAGE = "Could not delete the stored workouts"

log = logging.getLogger(__name__)


# ---- capabilities ------------------------------------------------------------


class Geolocation(Protocol):
    def get_current_position(
        self,
        on_success: Callable[[Coordinates], None],
        on_failure: Callable[[], None],
    ) -> None: ...


class MapSurface(Protocol):
    def initialize(self, center: Coordinates, zoom_level: int) -> None: ...

    def add_marker(
        self,
        coordinates: Coordinates,
        popup_content: str,
        style_class: str,
        request: RenderRequest,
        options: dict[str, Any],
    ) -> None: ...

    def register_click_handler(self, callback: Callable[[Coordinates], None]) -> None: ...

    def set_view(self, coordinates: Coordinates, zoom_level: int, options: dict[str, Any]) -> None: ...


class ListSurface(Protocol):
    def render_entry(self, request: RenderRequest) -> None: ...

    def register_select(self, callback: Callable[[str], None]) -> None: ...

    def clear(self) -> None: ...


class FormSurface(Protocol):
    def show(self) -> None: ...

    def clear_and_hide(self) -> None: ...

    def show_kind_fields(self, kind: ActivityKind) -> None: ...

    def register_submit(self, callback: Callable[[FormSubmission], Activity | None]) -> None: ...

    def register_kind_change(self, callback: Callable[[str], None]) -> None: ...


Alert = Callable[[str], None]


class FormSubmission(NamedTuple):
    """Raw values from the entry form.

    ``kind_field`` is the cadence for paced activities and the elevation
    gain for elevation ones. Values are passed through unparsed.
    """

    kind: str
    distance: Any
    duration: Any
    kind_field: Any


# ---- coordinator -------------------------------------------------------------


class Coordinator:
    """Wires the store to the rendering and input capabilities."""

    def __init__(
        self,
        store: ActivityStore,
        geolocation: Geolocation,
        map_surface: MapSurface,
        list_surface: ListSurface,
        form: FormSurface,
        alert: Alert,
        config: dict[str, Any] | None = None,
    ):
        self.store = store
        self.geolocation = geolocation
        self.map = map_surface
        self.list = list_surface
        self.form = form
        self.alert = alert
        self.map_config = (config or {}).get("map", {})
        self.zoom_level = self.map_config.get("zoom_level", 13)

        self.map_ready = False
        self.last_click: Coordinates | None = None
        self._marked: set[Activity] = set()

    def start(self) -> None:
        """Geolocation, then stored activities, then event registration."""
        self._request_position()

        for activity in self.store.load():
            self._render_entry(activity)
            if self.map_ready:
                self._render_marker(activity)

        self.form.register_submit(self.submit)
        self.form.register_kind_change(self.toggle_kind_fields)
        self.list.register_select(self.select)

    # ---- geolocation / map ---------------------------------------------------

    def _request_position(self) -> None:
        try:
            self.geolocation.get_current_position(self.load_map, self._position_failed)
        except GeolocationUnavailable as e:
            self._position_failed(str(e))

    def _position_failed(self, message: str = NO_POSITION_MESSAGE) -> None:
        log.info("geolocation unavailable: %s", message)
        self.alert(message)

    def load_map(self, center: Coordinates) -> None:
        self.map.initialize(Coordinates(*center), self.zoom_level)
        self.map.register_click_handler(self.show_form)
        self.map_ready = True
        for activity in self.store:
            self._render_marker(activity)

    def show_form(self, coordinates: Coordinates) -> None:
        self.last_click = Coordinates(*coordinates)
        self.form.show()

    def toggle_kind_fields(self, kind: str) -> None:
        try:
            self.form.show_kind_fields(ActivityKind(kind))
        except ValueError:
            log.debug("ignoring unknown kind %r", kind)

    # ---- creation ------------------------------------------------------------

    def submit(self, submission: FormSubmission) -> Activity | None:
        """Create an activity at the last clicked map position."""
        if self.last_click is None:
            self.alert(NO_LOCATION_MESSAGE)
            return None

        try:
            activity = self.store.create(
                submission.kind,
                self.last_click,
                submission.distance,
                submission.duration,
                submission.kind_field,
            )
        except ValidationError as e:
            self.alert(str(e))
            return None

        self._render_marker(activity)
        self._render_entry(activity)
        self.form.clear_and_hide()
        return activity

    # ---- selection -----------------------------------------------------------

    def select(self, activity_id: str) -> Activity | None:
        """Re-centre the map on a listed activity.

        Dropped when the map is not ready yet or the id is unknown.
        """
        if not self.map_ready:
            return None
        activity = self.store.find_by_id(activity_id)
        if activity is None:
            return None
        self.map.set_view(activity.coordinates, self.zoom_level, view_options(self.map_config))
        self.store.click(activity_id)
        return activity

    def reset(self) -> bool:
        if not self.store.reset_all():
            self.alert(RESET_FAILED_MESSAGE)
            return False
        self.list.clear()
        self._marked.clear()
        return True

    # ---- rendering -----------------------------------------------------------

    def _render_marker(self, activity: Activity) -> None:
        if activity in self._marked:
            return
        request = render_request(activity)
        self.map.add_marker(
            request.coordinates,
            request.popup_content,
            request.style_class,
            request,
            popup_options(self.map_config, request),
        )
        self._marked.add(activity)

    def _render_entry(self, activity: Activity) -> None:
        self.list.render_entry(render_request(activity))
