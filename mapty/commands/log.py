"""CLI command: log — record one activity at a map position."""

import argparse

from mapty.activity import ActivityKind, Coordinates
from mapty.core import Mapty
from mapty.terminal import open_session


def run(args=None):
    if args is None:
        args = []

    parser = argparse.ArgumentParser(description="Log a workout")
    parser.add_argument("kind", choices=[kind.value for kind in ActivityKind])
    parser.add_argument("--lat", type=float, required=True, help="Latitude of the workout")
    parser.add_argument("--lng", type=float, required=True, help="Longitude of the workout")
    parser.add_argument("--distance", required=True, help="Distance in km")
    parser.add_argument("--duration", required=True, help="Duration in minutes")
    parser.add_argument("--cadence", default="", help="Steps per minute (paced)")
    parser.add_argument("--elevation-gain", default="", help="Elevation gain in metres (elevation)")
    parsed_args = parser.parse_args(args)

    position = Coordinates(parsed_args.lat, parsed_args.lng)
    if parsed_args.kind == ActivityKind.PACED.value:
        kind_field = parsed_args.cadence
    else:
        kind_field = parsed_args.elevation_gain

    with Mapty() as app:
        session = open_session(app, position)
        if not session.map_surface.click(position):
            return None

        activity = session.form.submit(parsed_args.kind, parsed_args.distance, parsed_args.duration, kind_field)
        if activity is None:
            return None

        entry = session.activity_list.entries[0]
        print(f"Logged {activity.label} [{activity.id}]: {entry.metric:.1f} {entry.metric_unit}")
        return activity
