"""Student routes: clocking, manual logs and personal progress."""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from volunteer_hours.api.dependencies import (
    error_response,
    get_current_profile,
    get_record_store,
    json_response,
)
from volunteer_hours.config import settings
from volunteer_hours.exceptions import ResourceNotFoundError
from volunteer_hours.models import category_label
from volunteer_hours.records import Record, RecordStore
from volunteer_hours.services import ManualLogService, ProgressService, ShiftService
from volunteer_hours.timeutils import format_duration


# Create router
router = APIRouter(prefix=settings.api_prefix, tags=["student"])


@router.get("/profile")
async def get_profile(profile: Record = Depends(get_current_profile)):
    """Return the caller's profile."""
    return json_response(profile)


@router.get("/shifts/active")
async def get_active_shift(
    profile: Record = Depends(get_current_profile),
    store: RecordStore = Depends(get_record_store)
):
    """
    Get the caller's active shift.
    
    Returns:
        JSON object with the active shift, or null when not clocked in
    """
    try:
        shift = ShiftService(store).get_active_shift(profile["id"])
        return json_response({"shift": shift})
    except Exception as e:
        return error_response(e)


@router.post("/shifts/check-in")
async def check_in(
    category: str = Body(...),
    task_description: str = Body(...),
    profile: Record = Depends(get_current_profile),
    store: RecordStore = Depends(get_record_store)
):
    """
    Start a shift.
    
    Args:
        category: Work category
        task_description: What the caller is working on
        
    Returns:
        201 with the created shift, 409 if a shift is already active
    """
    try:
        shift = ShiftService(store).check_in(profile["id"], category, task_description)
        shift["category_label"] = category_label(shift["category"])
        return json_response(shift, status_code=201)
    except Exception as e:
        return error_response(e)


@router.post("/shifts/{shift_id}/check-out")
async def check_out(
    shift_id: str,
    profile: Record = Depends(get_current_profile),
    store: RecordStore = Depends(get_record_store)
):
    """
    Close a shift.
    
    Returns:
        The completed shift with its duration and a display string; 404 if
        the shift does not belong to the caller
    """
    try:
        # Another user's shift is reported as missing
        owned = store.select_one("shifts", filters={"id": shift_id, "user_id": profile["id"]})
        if owned is None:
            raise ResourceNotFoundError("shift", shift_id)

        shift = ShiftService(store).check_out(shift_id)
        shift["duration_display"] = format_duration(shift.get("duration_minutes") or 0)
        return json_response(shift)
    except Exception as e:
        return error_response(e)


@router.get("/shifts")
async def get_shifts(
    profile: Record = Depends(get_current_profile),
    store: RecordStore = Depends(get_record_store)
):
    """List the caller's shifts, newest first."""
    try:
        return json_response(ShiftService(store).get_shifts(profile["id"]))
    except Exception as e:
        return error_response(e)


@router.post("/manual-logs")
async def submit_manual_log(
    payload: Dict[str, Any] = Body(...),
    profile: Record = Depends(get_current_profile),
    store: RecordStore = Depends(get_record_store)
):
    """
    Submit a manual hour log for review.
    
    Args:
        payload: date, duration_minutes, description and category; any
            status field is ignored
        
    Returns:
        201 with the pending log
    """
    try:
        log = ManualLogService(store).submit_manual_log(profile["id"], payload)
        return json_response(log, status_code=201)
    except Exception as e:
        return error_response(e)


@router.get("/manual-logs")
async def get_manual_logs(
    profile: Record = Depends(get_current_profile),
    store: RecordStore = Depends(get_record_store)
):
    """List the caller's manual logs, newest first."""
    try:
        return json_response(ManualLogService(store).get_manual_logs(profile["id"]))
    except Exception as e:
        return error_response(e)


@router.get("/progress")
async def get_progress(
    profile: Record = Depends(get_current_profile),
    store: RecordStore = Depends(get_record_store)
):
    """Progress snapshot against the caller's hour goal."""
    try:
        snapshot = ProgressService(store).calculate_progress_for_profile(profile)
        return json_response(snapshot.to_dict())
    except Exception as e:
        return error_response(e)
