"""Terminal implementations of the coordinator's capabilities.

These let the CLI drive the same flow a graphical front end would: a fixed
position stands in for geolocation, the "map" records markers and view
changes, and the list prints a table.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NamedTuple

from tabulate import tabulate

from .activity import Activity, ActivityKind, Coordinates
from .coordinator import Coordinator, FormSubmission
from .render import RenderRequest


class FixedGeolocation:
    """Reports a configured position, or fails if there is none."""

    def __init__(self, position: Coordinates | tuple[float, float] | list[float] | None):
        self.position = Coordinates(*position) if position else None

    def get_current_position(self, on_success, on_failure) -> None:
        if self.position is None:
            on_failure()
        else:
            on_success(self.position)


class TerminalMap:
    def __init__(self, echo: Callable[[str], None] = print):
        self.echo = echo
        self.center: Coordinates | None = None
        self.zoom_level: int | None = None
        self.markers: list[tuple[Coordinates, str, str, dict[str, Any]]] = []
        self._on_click: Callable[[Coordinates], None] | None = None

    def initialize(self, center: Coordinates, zoom_level: int) -> None:
        self.center = center
        self.zoom_level = zoom_level

    def add_marker(self, coordinates, popup_content, style_class, request, options) -> None:
        self.markers.append((coordinates, popup_content, style_class, options))

    def register_click_handler(self, callback: Callable[[Coordinates], None]) -> None:
        self._on_click = callback

    def click(self, coordinates: Coordinates) -> bool:
        """Simulate a click on the map. Returns False if the map was never initialised."""
        if self._on_click is None:
            return False
        self._on_click(Coordinates(*coordinates))
        return True

    def set_view(self, coordinates: Coordinates, zoom_level: int, options: dict[str, Any]) -> None:
        self.center = coordinates
        self.zoom_level = zoom_level
        self.echo(f"Map centred on {coordinates.lat:.5f}, {coordinates.lng:.5f} (zoom {zoom_level})")


class TerminalList:
    """Collects list entries, newest first."""

    def __init__(self):
        self.entries: list[RenderRequest] = []
        self._on_select: Callable[[str], Activity | None] | None = None

    def render_entry(self, request: RenderRequest) -> None:
        self.entries.insert(0, request)

    def register_select(self, callback: Callable[[str], Activity | None]) -> None:
        self._on_select = callback

    def select(self, activity_id: str) -> Activity | None:
        if self._on_select is None:
            return None
        return self._on_select(activity_id)

    def clear(self) -> None:
        self.entries = []

    def table(self) -> str:
        return format_table(self.entries)


class TerminalForm:
    def __init__(self):
        self.visible = False
        self.kind = ActivityKind.PACED
        self._on_submit: Callable[[FormSubmission], Activity | None] | None = None
        self._on_kind_change: Callable[[str], None] | None = None

    def show(self) -> None:
        self.visible = True

    def clear_and_hide(self) -> None:
        self.visible = False

    def show_kind_fields(self, kind: ActivityKind) -> None:
        self.kind = kind

    def register_submit(self, callback) -> None:
        self._on_submit = callback

    def register_kind_change(self, callback) -> None:
        self._on_kind_change = callback

    def submit(self, kind: str, distance: Any, duration: Any, kind_field: Any) -> Activity | None:
        if self._on_kind_change is not None:
            self._on_kind_change(kind)
        if self._on_submit is None:
            return None
        return self._on_submit(FormSubmission(kind, distance, duration, kind_field))


class AlertLog:
    """Prints alerts and remembers them."""

    def __init__(self, echo: Callable[[str], None] = print):
        self.echo = echo
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)
        self.echo(f"⚠️  {message}")


def format_table(entries: list[RenderRequest]) -> str:
    rows = [
        [
            entry.id,
            f"{entry.icon} {entry.label}",
            f"{entry.distance:g} km",
            f"{entry.duration:g} min",
            f"{entry.metric:.1f} {entry.metric_unit}",
            f"{entry.kind_field:g} {entry.kind_field_unit}",
            entry.clicks,
        ]
        for entry in entries
    ]
    return tabulate(
        rows,
        headers=["ID", "Activity", "Distance", "Duration", "Pace/Speed", "Cadence/Gain", "Clicks"],
        tablefmt="simple",
    )


class TerminalSession(NamedTuple):
    coordinator: Coordinator
    map_surface: TerminalMap
    activity_list: TerminalList
    form: TerminalForm
    alerts: AlertLog


def open_session(app, position=None, echo: Callable[[str], None] = print) -> TerminalSession:
    """Start a coordinator for *app* wired to terminal capabilities.

    The configured ``home_location`` wins over *position*; with neither,
    geolocation fails and the map stays uninitialised.
    """
    home = app.config.get("home_location") or position
    session = TerminalSession(
        coordinator=None,
        map_surface=TerminalMap(echo),
        activity_list=TerminalList(),
        form=TerminalForm(),
        alerts=AlertLog(echo),
    )
    coordinator = app.coordinator(
        FixedGeolocation(home),
        session.map_surface,
        session.activity_list,
        session.form,
        session.alerts,
    )
    coordinator.start()
    return session._replace(coordinator=coordinator)
