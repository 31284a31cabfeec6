"""Shared helpers for turning ORM rows into plain records."""
import enum
from typing import Any, Dict

from sqlalchemy import Enum


def enum_column_type(enum_class: type) -> Enum:
    """String-backed Enum column that stores and accepts the member values."""
    return Enum(
        enum_class,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        length=32,
    )


class RecordMixin:
    """Adds a ``to_dict`` rendering each column as a plain value."""
    
    # Columns kept out of records handed to callers
    private_columns: tuple = ()
    
    def to_dict(self) -> Dict[str, Any]:
        record = {}
        for column in self.__table__.columns:
            if column.name in self.private_columns:
                continue
            value = getattr(self, column.name)
            if isinstance(value, enum.Enum):
                value = value.value
            record[column.name] = value
        return record
