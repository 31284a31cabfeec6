"""Unit tests for the SQLAlchemy record store."""
import pytest
from datetime import datetime, timedelta
from unittest.mock import patch
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from volunteer_hours.exceptions import (
    DuplicateRecordError,
    ResourceNotFoundError,
    TransientNetworkError,
)
from volunteer_hours.models import Shift
from volunteer_hours.records import SqlRecordStore
from volunteer_hours.services import ShiftService
from tests.conftest import make_manual_log, make_profile


def shift_values(user_id, **overrides):
    values = {
        "user_id": user_id,
        "category": "tutoring",
        "task_description": "Math tutoring",
        "start_time": datetime(2026, 2, 17, 8, 0),
        "status": "active",
    }
    values.update(overrides)
    return values


class TestSelect:
    """Test cases for select and select_one."""

    def test_filters_and_orders(self, test_db: Session):
        """Test equality filters combined with ordering."""
        student = make_profile(test_db, "Student")
        other = make_profile(test_db, "Other")
        base = datetime(2026, 2, 1)
        for i in range(3):
            make_manual_log(test_db, student.id, 30 + i, created_at=base + timedelta(days=i))
        make_manual_log(test_db, other.id, 99)

        store = SqlRecordStore(test_db)
        newest_first = store.select("manual_logs", {"user_id": student.id}, order_by="created_at", descending=True)
        oldest_first = store.select("manual_logs", {"user_id": student.id}, order_by="created_at")

        assert [float(r["duration_minutes"]) for r in newest_first] == [32.0, 31.0, 30.0]
        assert [float(r["duration_minutes"]) for r in oldest_first] == [30.0, 31.0, 32.0]

    def test_records_are_plain_values(self, test_db: Session):
        """Test that enums come back as their string values."""
        student = make_profile(test_db)
        make_manual_log(test_db, student.id, 45, status="approved")

        record = SqlRecordStore(test_db).select("manual_logs")[0]

        assert record["status"] == "approved"
        assert record["category"] == "community_service"

    def test_no_match_gives_empty_list(self, test_db: Session):
        assert SqlRecordStore(test_db).select("shifts", {"user_id": "nobody"}) == []

    def test_embeds_related_profile(self, test_db: Session):
        """Test that an embedded profile is attached, or None without a match."""
        student = make_profile(test_db, "Noa Cohen")
        make_manual_log(test_db, student.id, 30, created_at=datetime(2026, 2, 1))
        make_manual_log(test_db, "ghost", 30, created_at=datetime(2026, 2, 2))

        records = SqlRecordStore(test_db).select("manual_logs", order_by="created_at", embed="profiles")

        assert records[0]["profiles"]["full_name"] == "Noa Cohen"
        assert records[1]["profiles"] is None

    def test_unknown_embed(self, test_db: Session):
        with pytest.raises(ValueError):
            SqlRecordStore(test_db).select("profiles", embed="shifts")

    def test_unknown_table(self, test_db: Session):
        with pytest.raises(ValueError):
            SqlRecordStore(test_db).select("requests")

    def test_select_one(self, test_db: Session):
        """Test that select_one returns a record or None."""
        student = make_profile(test_db, "Dana")
        store = SqlRecordStore(test_db)

        assert store.select_one("profiles", {"id": student.id})["full_name"] == "Dana"
        assert store.select_one("profiles", {"id": "missing"}) is None


class TestWrites:
    """Test cases for insert and update."""

    def test_insert_assigns_id_and_created_at(self, test_db: Session):
        """Test that storage fills in the generated columns."""
        student = make_profile(test_db)

        record = SqlRecordStore(test_db).insert("shifts", shift_values(student.id))

        assert record["id"]
        assert record["created_at"] is not None
        assert record["status"] == "active"
        assert record["duration_minutes"] is None
        assert "active_lock" not in record

    def test_insert_rejects_invalid_record(self, test_db: Session):
        """Test that model validation runs before anything is written."""
        student = make_profile(test_db)

        with pytest.raises(ValueError):
            SqlRecordStore(test_db).insert("shifts", shift_values(student.id, task_description=""))

        assert test_db.query(Shift).count() == 0

    def test_second_active_shift_violates_uniqueness(self, test_db: Session):
        """Test that storage refuses a second active shift for one user."""
        student = make_profile(test_db)
        store = SqlRecordStore(test_db)
        store.insert("shifts", shift_values(student.id))

        with pytest.raises(DuplicateRecordError) as exc_info:
            store.insert("shifts", shift_values(student.id, task_description="Second"))

        assert exc_info.value.details["table"] == "shifts"
        assert test_db.query(Shift).count() == 1

    def test_completed_shifts_do_not_collide(self, test_db: Session):
        """Test that many completed shifts may coexist with one active shift."""
        student = make_profile(test_db)
        store = SqlRecordStore(test_db)
        start = datetime(2026, 2, 17, 8, 0)
        for i in range(3):
            store.insert("shifts", shift_values(
                student.id,
                start_time=start + timedelta(days=i),
                end_time=start + timedelta(days=i, hours=1),
            ))
        store.insert("shifts", shift_values(student.id))

        statuses = sorted(r["status"] for r in store.select("shifts", {"user_id": student.id}))
        assert statuses == ["active", "completed", "completed", "completed"]

    def test_completed_shift_releases_active_lock(self, test_db: Session):
        """Test that a shift stored already closed leaves the user free to check in."""
        student = make_profile(test_db)
        store = SqlRecordStore(test_db)
        start = datetime(2026, 2, 17, 8, 0)
        closed = store.insert("shifts", shift_values(student.id, end_time=start + timedelta(hours=2)))

        row = test_db.query(Shift).filter(Shift.id == closed["id"]).first()
        assert row.status.value == "completed"
        assert row.active_lock is None

        shift = ShiftService(store).check_in(student.id, "tutoring", "Next shift")

        assert shift["status"] == "active"
        assert test_db.query(Shift).filter(Shift.active_lock.isnot(None)).count() == 1

    def test_end_time_completes_shift(self, test_db: Session):
        """Test that writing an end time sets status and duration in storage."""
        student = make_profile(test_db)
        store = SqlRecordStore(test_db)
        shift = store.insert("shifts", shift_values(student.id))

        updated = store.update("shifts", {"id": shift["id"]}, {"end_time": datetime(2026, 2, 17, 10, 15)})

        assert updated["status"] == "completed"
        assert float(updated["duration_minutes"]) == 135.0

    def test_update_without_match(self, test_db: Session):
        """Test that updating a missing record raises not found."""
        with pytest.raises(ResourceNotFoundError) as exc_info:
            SqlRecordStore(test_db).update("shifts", {"id": "missing"}, {"status": "completed"})

        assert exc_info.value.details == {"resource_type": "shift", "resource_id": "missing"}

    def test_conditional_update(self, test_db: Session):
        """Test that extra filters make the update conditional."""
        student = make_profile(test_db)
        log = make_manual_log(test_db, student.id, 60, status="approved")
        store = SqlRecordStore(test_db)

        with pytest.raises(ResourceNotFoundError):
            store.update("manual_logs", {"id": log.id, "status": "pending"}, {"status": "rejected"})

        assert store.select_one("manual_logs", {"id": log.id})["status"] == "approved"


class TestStorageFailures:
    """Test cases for driver failure translation."""

    def test_operational_error_is_transient(self, test_db: Session):
        """Test that a dropped connection surfaces as a retryable error."""
        error = OperationalError("SELECT 1", {}, Exception("Lost connection to MySQL server"))

        with patch.object(test_db, "query", side_effect=error):
            with pytest.raises(TransientNetworkError) as exc_info:
                SqlRecordStore(test_db).select("shifts")

        assert exc_info.value.message == "The request failed, please try again."
        assert exc_info.value.http_status == 503

    def test_pool_timeout_is_transient(self, test_db: Session):
        """Test that waiting too long for a connection surfaces as a retryable error."""
        with patch.object(test_db, "query", side_effect=PoolTimeoutError("QueuePool limit reached")):
            with pytest.raises(TransientNetworkError):
                SqlRecordStore(test_db).select_one("profiles", {"id": "x"})

    def test_failed_commit_rolls_back(self, test_db: Session):
        """Test that a failing commit is rolled back before propagating."""
        student = make_profile(test_db)
        store = SqlRecordStore(test_db)
        error = OperationalError("INSERT", {}, Exception("Lock wait timeout exceeded"))

        with patch.object(test_db, "commit", side_effect=error), \
                patch.object(test_db, "rollback", wraps=test_db.rollback) as rollback:
            with pytest.raises(TransientNetworkError):
                store.insert("shifts", shift_values(student.id))

        rollback.assert_called_once()
        assert test_db.query(Shift).count() == 0


class TestCall:
    """Test cases for named procedures."""

    def test_runs_registered_procedure(self, test_db: Session):
        """Test that call passes the session and params to the procedure."""
        seen = {}

        def echo(db, params):
            seen["db"] = db
            return [params]

        store = SqlRecordStore(test_db, procedures={"echo": echo})

        assert store.call("echo", {"a": 1}) == [{"a": 1}]
        assert seen["db"] is test_db

    def test_unknown_procedure(self, test_db: Session):
        with pytest.raises(ValueError):
            SqlRecordStore(test_db).call("drop_everything")
