"""Durable string-keyed storage slots.

A tiny ``localStorage``-style API on top of a single peewee table: every
slot is one row holding a text value. Callers serialise their own data.
"""

from peewee import CharField, Model, TextField

from .db import db


class KeyValue(Model):
    """One durable slot: a unique key and its text value."""

    key = CharField(max_length=128, unique=True)
    value = TextField()

    class Meta:
        database = db
        table_name = "keyvalue"


def get_item(key: str) -> str | None:
    """Return the value stored under *key*, or ``None`` if the slot is empty."""
    row = KeyValue.get_or_none(KeyValue.key == key)
    return row.value if row else None


def set_item(key: str, value: str) -> None:
    """Write *value* under *key*, replacing whatever was there."""
    (
        KeyValue.insert(key=key, value=value)
        .on_conflict(
            conflict_target=[KeyValue.key],
            update={KeyValue.value: value},
        )
        .execute()
    )


def remove_item(key: str) -> bool:
    """Delete the slot. Returns True if a row was removed."""
    return KeyValue.delete().where(KeyValue.key == key).execute() > 0


def keys(prefix: str = "") -> list[str]:
    query = KeyValue.select(KeyValue.key).order_by(KeyValue.key)
    if prefix:
        query = query.where(KeyValue.key.startswith(prefix))
    return [row.key for row in query]
