"""Shared FastAPI dependencies and response helpers."""
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Header, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from volunteer_hours.database import get_db
from volunteer_hours.exceptions import HoursTrackingError, format_error_for_api
from volunteer_hours.models import UserRole
from volunteer_hours.records import Record, RecordStore, SqlRecordStore


logger = logging.getLogger(__name__)


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    """Record store bound to the request's database session."""
    return SqlRecordStore(db)


def get_current_profile(
    x_user_id: Optional[str] = Header(None),
    store: RecordStore = Depends(get_record_store)
) -> Record:
    """
    Resolve the caller's profile.
    
    Sign-in happens upstream; the authenticating proxy forwards the user
    id in the X-User-Id header.
    
    Raises:
        HTTPException: 401 if the header is missing or matches no profile
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    
    profile = store.select_one("profiles", filters={"id": x_user_id})
    if profile is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    
    return profile


def get_current_admin(profile: Record = Depends(get_current_profile)) -> Record:
    """
    Resolve the caller's profile and require the admin role.
    
    Raises:
        HTTPException: 403 if the caller is not an admin
    """
    if profile.get("role") != UserRole.ADMIN.value:
        raise HTTPException(status_code=403, detail="Admin access required")
    return profile


def json_response(content: Any, status_code: int = 200) -> JSONResponse:
    """JSON response for records holding datetimes and Decimals."""
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def error_response(error: Exception) -> JSONResponse:
    """Render a service error, or a generic 500 for anything unexpected."""
    if isinstance(error, HoursTrackingError):
        return JSONResponse(status_code=error.http_status, content=format_error_for_api(error))
    
    logger.exception(f"Unhandled error: {error}")
    content: Dict[str, Any] = {
        "success": False,
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "A system error occurred.",
            "details": {}
        }
    }
    return JSONResponse(status_code=500, content=content)
