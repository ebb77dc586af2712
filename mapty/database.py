from peewee import Model

from .db import get_db
from .kvstore import KeyValue


def get_all_models() -> list[type[Model]]:
    return [KeyValue]


def migrate_tables(models: list[type[Model]]) -> None:
    db = get_db()
    db.connect(reuse_if_open=True)
    db.create_tables(models, safe=True)
