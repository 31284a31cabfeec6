"""Server-side aggregation procedures callable through the record store."""
from typing import Any, Callable, Dict, List

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from volunteer_hours.models import (
    DEFAULT_TOTAL_GOAL,
    ManualLog,
    ManualLogStatus,
    Profile,
    Shift,
    ShiftStatus,
    UserRole,
)


Procedure = Callable[[Session, Dict[str, Any]], List[Dict[str, Any]]]


def get_all_students_summary(db: Session, params: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Aggregate hours and pending logs for every student in one query.

    Returns:
        Rows with student_id, full_name, total_goal, shift_hours,
        approved_manual_hours, pending_logs, total_hours and
        progress_percent, ordered by full_name
    """
    shift_totals = (
        db.query(
            Shift.user_id.label("user_id"),
            func.sum(Shift.duration_minutes).label("shift_minutes"),
        )
        .filter(Shift.status == ShiftStatus.COMPLETED, Shift.duration_minutes > 0)
        .group_by(Shift.user_id)
        .subquery()
    )

    log_totals = (
        db.query(
            ManualLog.user_id.label("user_id"),
            func.sum(
                case(
                    (
                        (ManualLog.status == ManualLogStatus.APPROVED) & (ManualLog.duration_minutes > 0),
                        ManualLog.duration_minutes,
                    ),
                    else_=0,
                )
            ).label("approved_minutes"),
            func.sum(
                case((ManualLog.status == ManualLogStatus.PENDING, 1), else_=0)
            ).label("pending_logs"),
        )
        .group_by(ManualLog.user_id)
        .subquery()
    )

    rows = (
        db.query(
            Profile.id,
            Profile.full_name,
            Profile.total_goal,
            shift_totals.c.shift_minutes,
            log_totals.c.approved_minutes,
            log_totals.c.pending_logs,
        )
        .outerjoin(shift_totals, shift_totals.c.user_id == Profile.id)
        .outerjoin(log_totals, log_totals.c.user_id == Profile.id)
        .filter(Profile.role == UserRole.STUDENT)
        .order_by(Profile.full_name.asc())
        .all()
    )

    summary = []
    for student_id, full_name, total_goal, shift_minutes, approved_minutes, pending_logs in rows:
        goal = total_goal or DEFAULT_TOTAL_GOAL
        shift_hours = float(shift_minutes or 0) / 60
        approved_hours = float(approved_minutes or 0) / 60
        total_hours = shift_hours + approved_hours
        summary.append({
            "student_id": student_id,
            "full_name": full_name,
            "total_goal": goal,
            "shift_hours": round(shift_hours, 2),
            "approved_manual_hours": round(approved_hours, 2),
            "pending_logs": int(pending_logs or 0),
            "total_hours": round(total_hours, 2),
            "progress_percent": round(min(total_hours / goal * 100, 100), 1),
        })

    return summary


PROCEDURES: Dict[str, Procedure] = {
    "get_all_students_summary": get_all_students_summary,
}
