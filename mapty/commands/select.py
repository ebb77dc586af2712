"""CLI command: select — centre the map on an activity and count the click."""

import argparse

from mapty.activity import Coordinates
from mapty.core import Mapty
from mapty.terminal import open_session


def run(args=None):
    if args is None:
        args = []

    parser = argparse.ArgumentParser(description="Select a logged workout")
    parser.add_argument("activity_id")
    parser.add_argument("--lat", type=float, help="Current latitude, if home_location is not configured")
    parser.add_argument("--lng", type=float, help="Current longitude, if home_location is not configured")
    parsed_args = parser.parse_args(args)

    position = None
    if parsed_args.lat is not None and parsed_args.lng is not None:
        position = Coordinates(parsed_args.lat, parsed_args.lng)

    with Mapty() as app:
        session = open_session(app, position)
        activity = session.activity_list.select(parsed_args.activity_id)
        if activity is None:
            print(f"Nothing selected for {parsed_args.activity_id}.")
            return None
        print(f"{activity.label}: {activity.clicks} click(s)")
        return activity
