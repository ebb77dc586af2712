"""Database bootstrap command.

Ensures the storage table exists. Idempotent, safe to run on every start.
"""

from mapty.core import Mapty


def run() -> None:
    with Mapty() as app:
        print(f"✅ Database ready; storing activities under {app.storage.key!r}")
