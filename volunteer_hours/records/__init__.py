"""Record-access layer."""
from volunteer_hours.records.base import Record, RecordStore
from volunteer_hours.records.sql_store import SqlRecordStore

__all__ = [
    "Record",
    "RecordStore",
    "SqlRecordStore",
]
