from datetime import UTC, datetime
from unittest.mock import MagicMock, call

import pytest

from mapty.activity import MONTHS, Activity, ActivityKind, Coordinates
from mapty.appconfig import DEFAULT_CONFIG
from mapty.coordinator import NO_LOCATION_MESSAGE, RESET_FAILED_MESSAGE, Coordinator, FormSubmission
from mapty.errors import INVALID_INPUTS_MESSAGE, NO_POSITION_MESSAGE, GeolocationUnavailable
from mapty.persistence import WorkoutStorage
from mapty.render import RenderRequest
from mapty.store import ActivityStore

HOME = Coordinates(38.72, -9.14)


def _geolocation(position=HOME):
    geolocation = MagicMock()
    if position is None:
        geolocation.get_current_position.side_effect = lambda on_success, on_failure: on_failure()
    else:
        geolocation.get_current_position.side_effect = lambda on_success, on_failure: on_success(position)
    return geolocation


def _records(*timestamps):
    return [
        Activity.paced([39, -12], 5, 25, 170, timestamp=timestamps[0]).to_record(),
        Activity.elevation([40, -11], 20, 60, 300, timestamp=timestamps[1]).to_record(),
    ]


@pytest.fixture
def storage():
    storage = MagicMock(spec=WorkoutStorage)
    storage.load.return_value = []
    return storage


@pytest.fixture
def surfaces():
    return {
        "map_surface": MagicMock(),
        "list_surface": MagicMock(),
        "form": MagicMock(),
        "alert": MagicMock(),
    }


def _coordinator(storage, surfaces, geolocation=None):
    return Coordinator(
        ActivityStore(storage, tz=UTC),
        geolocation or _geolocation(),
        config=DEFAULT_CONFIG,
        **surfaces,
    )


class TestStart:
    """Startup: geolocation, then stored activities, then event registration."""

    def test_initialises_map_and_registers_handlers(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)

        coordinator.start()

        surfaces["map_surface"].initialize.assert_called_once_with(HOME, 13)
        surfaces["map_surface"].register_click_handler.assert_called_once_with(coordinator.show_form)
        surfaces["form"].register_submit.assert_called_once_with(coordinator.submit)
        surfaces["form"].register_kind_change.assert_called_once_with(coordinator.toggle_kind_fields)
        surfaces["list_surface"].register_select.assert_called_once_with(coordinator.select)
        assert coordinator.map_ready

    def test_renders_restored_activities_in_order(self, storage, surfaces):
        storage.load.return_value = _records(
            datetime(2024, 6, 1, 10, tzinfo=UTC),
            datetime(2024, 6, 2, 10, tzinfo=UTC),
        )
        coordinator = _coordinator(storage, surfaces)

        coordinator.start()

        entries = [c.args[0] for c in surfaces["list_surface"].render_entry.call_args_list]
        assert [e.label for e in entries] == ["Paced on June 1", "Elevation on June 2"]
        markers = surfaces["map_surface"].add_marker.call_args_list
        assert [m.args[2] for m in markers] == ["paced-popup", "elevation-popup"]
        assert len(coordinator.store) == 2

    def test_markers_wait_for_the_map(self, storage, surfaces):
        storage.load.return_value = _records(
            datetime(2024, 6, 1, 10, tzinfo=UTC),
            datetime(2024, 6, 2, 10, tzinfo=UTC),
        )
        geolocation = MagicMock()  # never calls back during start()
        coordinator = _coordinator(storage, surfaces, geolocation)

        coordinator.start()
        assert surfaces["list_surface"].render_entry.call_count == 2
        surfaces["map_surface"].add_marker.assert_not_called()

        on_success = geolocation.get_current_position.call_args.args[0]
        on_success(HOME)

        assert surfaces["map_surface"].add_marker.call_count == 2

    def test_geolocation_failure_alerts(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces, _geolocation(None))

        coordinator.start()

        surfaces["alert"].assert_called_once_with(NO_POSITION_MESSAGE)
        surfaces["map_surface"].initialize.assert_not_called()
        assert not coordinator.map_ready
        surfaces["form"].register_submit.assert_called_once()

    def test_geolocation_exception_alerts(self, storage, surfaces):
        geolocation = MagicMock()
        geolocation.get_current_position.side_effect = GeolocationUnavailable("Permission denied")
        coordinator = _coordinator(storage, surfaces, geolocation)

        coordinator.start()

        surfaces["alert"].assert_called_once_with("Permission denied")
        assert not coordinator.map_ready


class TestSubmit:
    def test_end_to_end_paced(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)
        coordinator.start()
        coordinator.show_form(Coordinates(39, -12))
        surfaces["form"].show.assert_called_once()

        before = datetime.now(UTC)
        activity = coordinator.submit(FormSubmission("paced", "5.2", "24", "178"))
        after = datetime.now(UTC)

        assert activity.pace == pytest.approx(4.615, abs=1e-3)
        assert activity.coordinates == Coordinates(39, -12)
        assert activity.label in {f"Paced on {MONTHS[d.month - 1]} {d.day}" for d in (before, after)}
        assert len(coordinator.store) == 1
        storage.save.assert_called_once()
        assert len(storage.save.call_args.args[0]) == 1

        surfaces["map_surface"].add_marker.assert_called_once()
        coordinates, popup, style_class, request, options = surfaces["map_surface"].add_marker.call_args.args
        assert coordinates == Coordinates(39, -12)
        assert popup.endswith(activity.label)
        assert style_class == "paced-popup"
        assert options["class_name"] == "paced-popup"
        assert options["max_width"] == 250
        assert isinstance(request, RenderRequest)

        surfaces["list_surface"].render_entry.assert_called_once()
        entry = surfaces["list_surface"].render_entry.call_args.args[0]
        assert entry.kind is ActivityKind.PACED
        assert entry.distance == 5.2
        assert entry.duration == 24
        assert entry.metric == activity.pace
        assert entry.kind_field == 178
        assert entry.label == activity.label
        surfaces["form"].clear_and_hide.assert_called_once()

    def test_validation_error_alerts_and_changes_nothing(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)
        coordinator.start()
        coordinator.show_form(Coordinates(39, -12))

        result = coordinator.submit(FormSubmission("paced", "-1", "24", "178"))

        assert result is None
        surfaces["alert"].assert_called_once_with(INVALID_INPUTS_MESSAGE)
        assert len(coordinator.store) == 0
        storage.save.assert_not_called()
        surfaces["map_surface"].add_marker.assert_not_called()
        surfaces["form"].clear_and_hide.assert_not_called()

    def test_requires_a_map_click(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)
        coordinator.start()

        result = coordinator.submit(FormSubmission("paced", "5", "25", "170"))

        assert result is None
        surfaces["alert"].assert_called_once_with(NO_LOCATION_MESSAGE)
        assert len(coordinator.store) == 0

    def test_toggle_kind_fields(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)

        coordinator.toggle_kind_fields("elevation")
        coordinator.toggle_kind_fields("skating")

        surfaces["form"].show_kind_fields.assert_called_once_with(ActivityKind.ELEVATION)


class TestSelect:
    def test_recentres_map_and_counts_click(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)
        coordinator.start()
        coordinator.show_form(Coordinates(39, -12))
        activity = coordinator.submit(FormSubmission("elevation", "27", "95", "523"))
        storage.save.reset_mock()

        assert coordinator.select(activity.id) is activity

        surfaces["map_surface"].set_view.assert_called_once_with(
            Coordinates(39, -12), 13, {"animate": True, "pan": {"duration": 1}}
        )
        assert activity.clicks == 1
        storage.save.assert_called_once()

    def test_unknown_id_is_ignored(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)
        coordinator.start()

        assert coordinator.select("stale") is None

        surfaces["map_surface"].set_view.assert_not_called()
        storage.save.assert_not_called()

    def test_dropped_before_map_is_ready(self, storage, surfaces):
        storage.load.return_value = _records(
            datetime(2024, 6, 1, 10, tzinfo=UTC),
            datetime(2024, 6, 2, 10, tzinfo=UTC),
        )
        coordinator = _coordinator(storage, surfaces, _geolocation(None))
        coordinator.start()
        activity_id = coordinator.store.activities[0].id

        assert coordinator.select(activity_id) is None

        surfaces["map_surface"].set_view.assert_not_called()
        assert coordinator.store.activities[0].clicks == 0


class TestReset:
    def test_reset_clears_store_and_list(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)
        coordinator.start()
        coordinator.show_form(Coordinates(39, -12))
        coordinator.submit(FormSubmission("paced", "5", "25", "170"))

        coordinator.reset()

        assert len(coordinator.store) == 0
        storage.clear.assert_called_once()
        surfaces["list_surface"].clear.assert_called_once()

    def test_failed_storage_clear_alerts_and_keeps_list(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)
        coordinator.start()
        coordinator.show_form(Coordinates(39, -12))
        coordinator.submit(FormSubmission("paced", "5", "25", "170"))
        storage.clear.return_value = False

        assert coordinator.reset() is False

        assert len(coordinator.store) == 1
        surfaces["alert"].assert_called_with(RESET_FAILED_MESSAGE)
        surfaces["list_surface"].clear.assert_not_called()

    def test_each_activity_gets_one_marker(self, storage, surfaces):
        coordinator = _coordinator(storage, surfaces)
        coordinator.start()
        coordinator.show_form(Coordinates(39, -12))
        coordinator.submit(FormSubmission("paced", "5", "25", "170"))

        coordinator.load_map(HOME)

        assert surfaces["map_surface"].add_marker.call_count == 1
        assert surfaces["map_surface"].initialize.call_args_list == [call(HOME, 13), call(HOME, 13)]
