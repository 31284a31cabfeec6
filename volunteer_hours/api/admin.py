"""Admin routes: log review and program-wide progress."""
from fastapi import APIRouter, Depends

from volunteer_hours.api.dependencies import (
    error_response,
    get_current_admin,
    get_record_store,
    json_response,
)
from volunteer_hours.records import Record, RecordStore
from volunteer_hours.services import ManualLogService, ProgressService


# Create router
router = APIRouter(prefix="/admin/api", tags=["admin"])


@router.get("/students/summary")
async def get_students_summary(
    admin: Record = Depends(get_current_admin),
    store: RecordStore = Depends(get_record_store)
):
    """
    Get hour totals for every student.
    
    Returns:
        JSON list of student summaries ordered by name
    """
    try:
        return json_response(ProgressService(store).get_all_students_summary())
    except Exception as e:
        return error_response(e)


@router.get("/manual-logs/pending")
async def get_pending_logs(
    admin: Record = Depends(get_current_admin),
    store: RecordStore = Depends(get_record_store)
):
    """
    Get all pending manual logs, oldest first.
    
    Returns:
        JSON list of logs with the submitter's user_name
    """
    try:
        logs = ManualLogService(store).get_all_pending_logs()
        for log in logs:
            log.pop("profiles", None)
        return json_response(logs)
    except Exception as e:
        return error_response(e)


@router.post("/manual-logs/{log_id}/approve")
async def approve_log(
    log_id: str,
    admin: Record = Depends(get_current_admin),
    store: RecordStore = Depends(get_record_store)
):
    """
    Approve a pending manual log.
    
    Args:
        log_id: ID of the log to approve
        
    Returns:
        JSON response with the updated log; 409 if already reviewed
    """
    try:
        log = ManualLogService(store).approve_log(log_id, admin["id"])
        return json_response(log)
    except Exception as e:
        return error_response(e)


@router.post("/manual-logs/{log_id}/reject")
async def reject_log(
    log_id: str,
    admin: Record = Depends(get_current_admin),
    store: RecordStore = Depends(get_record_store)
):
    """
    Reject a pending manual log.
    
    Args:
        log_id: ID of the log to reject
        
    Returns:
        JSON response with the updated log; 409 if already reviewed
    """
    try:
        log = ManualLogService(store).reject_log(log_id, admin["id"])
        return json_response(log)
    except Exception as e:
        return error_response(e)
