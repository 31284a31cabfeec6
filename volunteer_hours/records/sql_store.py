"""SQLAlchemy-backed record store."""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from volunteer_hours.exceptions import (
    DuplicateRecordError,
    ResourceNotFoundError,
    TransientNetworkError,
)
from volunteer_hours.models import ManualLog, Profile, Shift
from volunteer_hours.records.base import Record
from volunteer_hours.records.procedures import PROCEDURES, Procedure


logger = logging.getLogger(__name__)


class SqlRecordStore:
    """Record store over a SQLAlchemy session.

    Tables are addressed by name and records returned as dicts, so the
    services never touch ORM objects. Every write commits on success and
    rolls back before an error propagates.
    """
    
    TABLES = {
        "profiles": Profile,
        "shifts": Shift,
        "manual_logs": ManualLog,
    }
    
    RESOURCE_TYPES = {
        "profiles": "profile",
        "shifts": "shift",
        "manual_logs": "manual_log",
    }
    
    # (table, embedded record kind) -> relationship attribute
    EMBEDS = {
        ("shifts", "profiles"): "profile",
        ("manual_logs", "profiles"): "profile",
    }
    
    UNIQUE_CONSTRAINTS = ("uq_shift_user_active",)
    
    def __init__(self, db: Session, procedures: Optional[Dict[str, Procedure]] = None):
        """
        Initialize record store.
        
        Args:
            db: Database session
            procedures: Named procedures available to ``call``
        """
        self.db = db
        self.procedures = PROCEDURES if procedures is None else procedures
    
    def _model(self, table: str):
        try:
            return self.TABLES[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}")
    
    def _query(self, table: str, filters: Optional[Dict[str, Any]]):
        model = self._model(table)
        query = self.db.query(model)
        for column, value in (filters or {}).items():
            query = query.filter(getattr(model, column) == value)
        return query
    
    @contextmanager
    def _translate_errors(self, table: str) -> Iterator[None]:
        """Roll back and map driver failures onto the service error types."""
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            message = str(e.orig) if e.orig is not None else str(e)
            if "UNIQUE" in message.upper() or "DUPLICATE ENTRY" in message.upper():
                constraint = next((name for name in self.UNIQUE_CONSTRAINTS if name in message), None)
                logger.warning(f"Uniqueness violation on {table}: {message}")
                raise DuplicateRecordError(table, constraint) from e
            logger.error(f"Integrity error on {table}: {message}")
            raise
        except (OperationalError, PoolTimeoutError) as e:
            self.db.rollback()
            logger.error(f"Storage unavailable while accessing {table}: {e}")
            raise TransientNetworkError(details={"table": table}) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage error on {table}: {e}")
            raise
    
    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        embed: Optional[str] = None,
    ) -> List[Record]:
        """
        Fetch all records matching equality filters.
        
        Args:
            table: Record kind
            filters: Column -> value equality filters
            order_by: Optional column to sort by
            descending: Sort direction
            embed: Optional related record kind to attach under its own key
            
        Returns:
            List of records, empty when nothing matches
        """
        model = self._model(table)
        relation = None
        if embed is not None:
            try:
                relation = self.EMBEDS[(table, embed)]
            except KeyError:
                raise ValueError(f"Cannot embed {embed} in {table}")
        
        with self._translate_errors(table):
            query = self._query(table, filters)
            if order_by:
                column = getattr(model, order_by)
                query = query.order_by(column.desc() if descending else column.asc())
            rows = query.all()
            
            records = []
            for row in rows:
                record = row.to_dict()
                if relation is not None:
                    related = getattr(row, relation)
                    record[embed] = related.to_dict() if related is not None else None
                records.append(record)
        
        return records
    
    def select_one(self, table: str, filters: Dict[str, Any]) -> Optional[Record]:
        """Fetch the first record matching the filters, or None."""
        with self._translate_errors(table):
            row = self._query(table, filters).first()
        return row.to_dict() if row is not None else None
    
    def insert(self, table: str, values: Dict[str, Any]) -> Record:
        """Create a record and return it as stored."""
        model = self._model(table)
        row = model(**values)
        row.validate()
        
        with self._translate_errors(table):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        
        return row.to_dict()
    
    def update(self, table: str, filters: Dict[str, Any], values: Dict[str, Any]) -> Record:
        """
        Apply a field-set to the record matching the filters.
        
        Raises:
            ResourceNotFoundError: If no record matches
        """
        with self._translate_errors(table):
            row = self._query(table, filters).first()
            if row is None:
                raise ResourceNotFoundError(
                    self.RESOURCE_TYPES.get(table, table),
                    str(filters.get("id", filters))
                )
            
            for column, value in values.items():
                setattr(row, column, value)
            
            self.db.commit()
            self.db.refresh(row)
        
        return row.to_dict()
    
    def call(self, procedure: str, params: Optional[Dict[str, Any]] = None) -> List[Record]:
        """Run a named aggregation procedure and return its rows."""
        try:
            func = self.procedures[procedure]
        except KeyError:
            raise ValueError(f"Unknown procedure: {procedure}")
        
        with self._translate_errors(procedure):
            return func(self.db, params or {})
