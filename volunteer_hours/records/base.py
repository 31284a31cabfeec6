"""Record-access collaborator used by the accounting services."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


Record = Dict[str, Any]


class RecordStore(Protocol):
    """Generic create/read/update/procedure access to stored records.

    Records are plain dicts keyed by column name. Implementations manage
    their own credentials and timeouts and surface failures as
    ``HoursTrackingError`` subclasses.
    """

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        embed: Optional[str] = None,
    ) -> List[Record]:
        raise NotImplementedError

    def select_one(self, table: str, filters: Dict[str, Any]) -> Optional[Record]:
        raise NotImplementedError

    def insert(self, table: str, values: Dict[str, Any]) -> Record:
        raise NotImplementedError

    def update(self, table: str, filters: Dict[str, Any], values: Dict[str, Any]) -> Record:
        raise NotImplementedError

    def call(self, procedure: str, params: Optional[Dict[str, Any]] = None) -> List[Record]:
        raise NotImplementedError
