"""Core mapty bootstrap: database, configuration and the activity store."""

import logging
import os
from zoneinfo import ZoneInfo

from .appconfig import get_setting, load_config
from .coordinator import Alert, Coordinator, FormSurface, Geolocation, ListSurface, MapSurface
from .database import get_all_models, migrate_tables
from .db import configure_db, get_db
from .persistence import WorkoutStorage
from .store import ActivityStore


class Mapty:
    """Owns the session state: config, storage and the activity store."""

    def __init__(self, db_path: str | None = None):
        configure_db(db_path)

        db = get_db()
        db.connect(reuse_if_open=True)

        # Always migrate tables on startup
        migrate_tables(get_all_models())

        self.config = load_config()
        self.debug = os.environ.get("MAPTY_DEBUG") == "1" or bool(get_setting(self.config, "debug"))
        if self.debug:
            logging.basicConfig(level=logging.DEBUG)

        self.home_tz = ZoneInfo(get_setting(self.config, "home_timezone"))
        self.storage = WorkoutStorage(get_setting(self.config, "storage_key"))
        self.store = ActivityStore(self.storage, tz=self.home_tz)

    def coordinator(
        self,
        geolocation: Geolocation,
        map_surface: MapSurface,
        list_surface: ListSurface,
        form: FormSurface,
        alert: Alert,
    ) -> Coordinator:
        """Build a coordinator bound to this session's store and config."""
        return Coordinator(self.store, geolocation, map_surface, list_surface, form, alert, self.config)

    def cleanup(self):
        """Clean up resources, close connections etc."""
        try:
            db = get_db()
            if db.is_connection_usable():
                db.close()
        except RuntimeError:
            # Database not configured, nothing to clean up
            pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.cleanup()
