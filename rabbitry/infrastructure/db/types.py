from __future__ import annotations

import json

from sqlalchemy import String, Text, TypeDecorator
from sqlalchemy.dialects.postgresql import ARRAY


class StringList(TypeDecorator):
    """Stores a list of strings as ARRAY in PostgreSQL, JSON in SQLite."""

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(ARRAY(String))
        else:
            return dialect.type_descriptor(Text)

    def process_bind_param(self, value, dialect):
        if value is None:
            value = []
        if dialect.name == "postgresql":
            return list(value)
        else:
            return json.dumps(list(value))

    def process_result_value(self, value, dialect):
        if dialect.name == "postgresql":
            return list(value) if value is not None else []
        else:
            if value is None:
                return []
            return json.loads(value) if value else []
