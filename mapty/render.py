"""Render payloads handed to the map and list surfaces.

The core does not produce markup. It only guarantees that every marker or
list request carries complete, correctly typed data about one activity.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from .activity import Activity, ActivityKind, Coordinates

ICONS = {
    ActivityKind.PACED: "🏃",
    ActivityKind.ELEVATION: "🚴",
}

METRIC_UNITS = {
    ActivityKind.PACED: "min/km",
    ActivityKind.ELEVATION: "km/h",
}

KIND_FIELD_UNITS = {
    ActivityKind.PACED: "spm",
    ActivityKind.ELEVATION: "m",
}


class RenderRequest(NamedTuple):
    id: str
    kind: ActivityKind
    coordinates: Coordinates
    distance: float
    duration: float
    metric: float
    kind_field: float
    label: str
    clicks: int

    @property
    def icon(self) -> str:
        return ICONS[self.kind]

    @property
    def metric_unit(self) -> str:
        return METRIC_UNITS[self.kind]

    @property
    def kind_field_unit(self) -> str:
        return KIND_FIELD_UNITS[self.kind]

    @property
    def popup_content(self) -> str:
        return f"{self.icon} {self.label}"

    @property
    def style_class(self) -> str:
        return f"{self.kind.value}-popup"


def render_request(activity: Activity) -> RenderRequest:
    return RenderRequest(
        id=activity.id,
        kind=activity.kind,
        coordinates=activity.coordinates,
        distance=activity.distance,
        duration=activity.duration,
        metric=activity.metric,
        kind_field=activity.kind_field,
        label=activity.label,
        clicks=activity.clicks,
    )


def popup_options(map_config: dict[str, Any], request: RenderRequest) -> dict[str, Any]:
    """Marker popup options from the ``map.popup`` config section."""
    popup = map_config.get("popup", {})
    return {
        "max_width": popup.get("max_width", 250),
        "min_width": popup.get("min_width", 100),
        "auto_close": popup.get("auto_close", False),
        "close_on_click": popup.get("close_on_click", False),
        "class_name": request.style_class,
    }


def view_options(map_config: dict[str, Any]) -> dict[str, Any]:
    """Animation options used when re-centring the map on an activity."""
    return {"animate": True, "pan": {"duration": map_config.get("pan_duration", 1)}}
