"""CLI command: list — show every stored activity."""

from mapty.core import Mapty
from mapty.terminal import open_session


def run() -> None:
    with Mapty() as app:
        session = open_session(app, echo=lambda message: None)
        if not session.activity_list.entries:
            print("No activities logged yet.")
            return
        print(session.activity_list.table())
