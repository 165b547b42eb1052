from __future__ import annotations

import dataclasses
from datetime import datetime, time

import pytest

from src.bakery_timekeeping.bakery_timekeeping.attendance.model import AttendanceRecord, AttendanceReportRow
from src.bakery_timekeeping.bakery_timekeeping.container import wire_container
from src.bakery_timekeeping.bakery_timekeeping.corrections.model import CorrectionRequest
from src.bakery_timekeeping.bakery_timekeeping.core.enums import RequestStatus, ShiftStatus
from src.bakery_timekeeping.bakery_timekeeping.core.exceptions import FatalIOError, TransientIOError
from src.bakery_timekeeping.bakery_timekeeping.employees.model import Employee
from src.bakery_timekeeping.bakery_timekeeping.leaves.model import LeaveRequest
from src.bakery_timekeeping.bakery_timekeeping.shifts.model import LegacyShiftRow, ShiftInterval


class FakeEmployeesRepo:
    def __init__(self, employees=None):
        self._employees = {e.employee_id: e for e in (employees or [])}

    def get_by_id(self, employee_id):
        return self._employees.get(int(employee_id))


class FakeShiftRepo:
    """Shift rows kept as dicts so legacy and instant forms can coexist."""

    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, dict] = {}
        self.fail_writes_for: set[int] = set()
        self.unreachable = False
        self.writes = 0

    def _insert(self, **fields) -> int:
        sid = self._next_id
        self._next_id += 1
        row = {
            "employee_id": 1,
            "start_instant": None,
            "end_instant": None,
            "start_date": None,
            "end_date": None,
            "start_time": None,
            "end_time": None,
            "location": "Main Bakery",
            "status": "scheduled",
            "notes": None,
        }
        row.update(fields)
        self.rows[sid] = row
        return sid

    def add_legacy(self, **fields) -> int:
        return self._insert(**fields)

    def create(self, shift):
        return self._insert(
            employee_id=shift.employee_id,
            start_instant=shift.start_instant,
            end_instant=shift.end_instant,
            location=shift.location,
            status=shift.status.value,
            notes=shift.notes,
        )

    def _to_shift(self, sid, r):
        return ShiftInterval(
            shift_id=sid,
            employee_id=r["employee_id"],
            start_instant=r["start_instant"],
            end_instant=r["end_instant"],
            location=r["location"],
            status=ShiftStatus(r["status"]),
            notes=r["notes"],
        )

    def get_by_id(self, shift_id):
        r = self.rows.get(int(shift_id))
        if not r or r["start_instant"] is None or r["end_instant"] is None:
            return None
        return self._to_shift(int(shift_id), r)

    def list_range(self, *, employee_id=None, start=None, end=None, statuses=None):
        wanted = {s.value for s in (statuses or [])}
        out = []
        for sid, r in self.rows.items():
            if r["start_instant"] is None or r["end_instant"] is None:
                continue
            if employee_id is not None and r["employee_id"] != employee_id:
                continue
            if start is not None and r["start_instant"] < start:
                continue
            if end is not None and r["start_instant"] >= end:
                continue
            if wanted and r["status"] not in wanted:
                continue
            out.append(self._to_shift(sid, r))
        return sorted(out, key=lambda s: (s.start_instant, s.shift_id))

    def update_status(self, shift_id, status):
        r = self.rows.get(int(shift_id))
        if not r:
            return False
        r["status"] = status.value
        return True

    def delete(self, shift_id):
        return self.rows.pop(int(shift_id), None) is not None

    def list_raw(self):
        if self.unreachable:
            raise FatalIOError("database unreachable")
        return [
            LegacyShiftRow(
                shift_id=sid,
                employee_id=r["employee_id"],
                start_date=r["start_date"],
                end_date=r["end_date"],
                start_time=r["start_time"],
                end_time=r["end_time"],
                start_instant=r["start_instant"],
                end_instant=r["end_instant"],
            )
            for sid, r in sorted(self.rows.items())
        ]

    def save_instants(self, shift_id, *, start_instant, end_instant, clear_legacy=True):
        if self.unreachable:
            raise FatalIOError("database unreachable")
        if shift_id in self.fail_writes_for:
            raise TransientIOError(f"cannot update shift {shift_id}")
        r = self.rows.get(shift_id)
        if not r:
            return False
        r["start_instant"] = start_instant
        r["end_instant"] = end_instant
        if clear_legacy:
            r.update(start_date=None, end_date=None, start_time=None, end_time=None)
        self.writes += 1
        return True


class FakeAttendanceRepo:
    def __init__(self, employees: FakeEmployeesRepo | None = None):
        self._next_id = 1
        self.records: dict[int, AttendanceRecord] = {}
        self._employees = employees

    def get_for_employee_and_date(self, employee_id, work_date):
        for r in self.records.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def get_last_clock_out_before(self, employee_id, work_date):
        earlier = [
            r for r in self.records.values()
            if r.employee_id == employee_id and r.work_date < work_date and r.clock_out is not None
        ]
        return max(earlier, key=lambda r: r.work_date) if earlier else None

    def create(self, *, employee_id, work_date, clock_in, clock_out, status, location, notes, hours_worked):
        rid = self._next_id
        self._next_id += 1
        self.records[rid] = AttendanceRecord(
            attendance_id=rid,
            employee_id=employee_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=clock_out,
            status=status,
            location=location,
            notes=notes,
            hours_worked=hours_worked,
        )
        return rid

    def update(self, *, attendance_id, clock_in, clock_out, status, location, notes, hours_worked):
        r = self.records.get(attendance_id)
        if not r:
            return False
        self.records[attendance_id] = dataclasses.replace(
            r,
            clock_in=clock_in,
            clock_out=clock_out,
            status=status,
            location=location,
            notes=notes,
            hours_worked=hours_worked,
        )
        return True

    def list_range(self, *, start_date=None, end_date=None, employee_id=None, status=None):
        out = [
            r for r in self.records.values()
            if (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
            and (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
        ]
        return sorted(out, key=lambda r: (r.work_date, -r.employee_id), reverse=True)

    def set_correction_status(self, attendance_id, status):
        r = self.records.get(attendance_id)
        if not r:
            return False
        self.records[attendance_id] = dataclasses.replace(r, correction_status=status)
        return True

    def delete(self, *, employee_id, attendance_id):
        r = self.records.get(attendance_id)
        if not r or r.employee_id != employee_id:
            return False
        del self.records[attendance_id]
        return True

    def get_report_rows(self, *, start_date, end_date, employee_id=None):
        rows = []
        for r in self.list_range(start_date=start_date, end_date=end_date, employee_id=employee_id):
            emp = self._employees.get_by_id(r.employee_id) if self._employees else None
            rows.append(
                AttendanceReportRow(
                    employee_id=r.employee_id,
                    full_name=emp.full_name if emp else f"#{r.employee_id}",
                    work_date=r.work_date,
                    clock_in=r.clock_in,
                    clock_out=r.clock_out,
                    status=r.status,
                    hours_worked=r.hours_worked,
                    notes=r.notes,
                )
            )
        return rows


class FakeLeaveRepo:
    def __init__(self):
        self._next_id = 1
        self.leaves: dict[int, LeaveRequest] = {}

    def create(self, *, employee_id, leave_type, start_date, end_date, days, notes=None):
        lid = self._next_id
        self._next_id += 1
        self.leaves[lid] = LeaveRequest(
            leave_id=lid,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=days,
            status=RequestStatus.PENDING,
            notes=notes,
            created_at=datetime(2024, 6, 1, 9, 0, 0),
        )
        return lid

    def get_by_id(self, leave_id):
        return self.leaves.get(int(leave_id))

    def find_overlapping(self, *, employee_id, start_date, end_date):
        return [
            lv for lv in self.leaves.values()
            if lv.employee_id == employee_id
            and lv.status != RequestStatus.REJECTED
            and lv.start_date <= end_date
            and lv.end_date >= start_date
        ]

    def list_leaves(self, *, employee_id=None, status=None, leave_type=None, limit=200):
        out = [
            lv for lv in self.leaves.values()
            if (employee_id is None or lv.employee_id == employee_id)
            and (status is None or lv.status == status)
            and (leave_type is None or lv.leave_type == leave_type)
        ]
        return sorted(out, key=lambda lv: lv.leave_id, reverse=True)[:limit]

    def decide(self, *, leave_id, status):
        lv = self.leaves.get(int(leave_id))
        if not lv or lv.status != RequestStatus.PENDING:
            return False
        self.leaves[int(leave_id)] = dataclasses.replace(lv, status=status, decided_at=datetime(2024, 6, 2, 10, 0, 0))
        return True

    def delete_pending(self, leave_id):
        lv = self.leaves.get(int(leave_id))
        if not lv or lv.status != RequestStatus.PENDING:
            return False
        del self.leaves[int(leave_id)]
        return True



class FakeCorrectionRepo:
    def __init__(self):
        self._next_id = 1
        self.requests: dict[int, CorrectionRequest] = {}

    def create(self, *, employee_id, work_date, correction_type, requested_time, reason):
        rid = self._next_id
        self._next_id += 1
        self.requests[rid] = CorrectionRequest(
            request_id=rid,
            employee_id=employee_id,
            work_date=work_date,
            correction_type=correction_type,
            requested_time=requested_time,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=datetime(2024, 6, 10, 8, 0, 0),
        )
        return rid

    def get_by_id(self, request_id):
        return self.requests.get(int(request_id))

    def list_requests(self, *, employee_id=None, status=None, limit=200):
        out = [
            r for r in self.requests.values()
            if (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
        ]
        return sorted(out, key=lambda r: r.request_id, reverse=True)[:limit]

    def decide(self, *, request_id, status):
        r = self.requests.get(int(request_id))
        if not r or r.status != RequestStatus.PENDING:
            return False
        self.requests[int(request_id)] = dataclasses.replace(r, status=status, decided_at=datetime(2024, 6, 10, 12, 0, 0))
        return True

@pytest.fixture
def employees_repo():
    return FakeEmployeesRepo(
        [
            Employee(employee_id=1, full_name="Ada Okafor", position="Head Baker"),
            Employee(employee_id=2, full_name="Tunde Bello", position="Pastry Chef"),
        ]
    )


@pytest.fixture
def shifts_repo():
    return FakeShiftRepo()


@pytest.fixture
def attendance_repo(employees_repo):
    return FakeAttendanceRepo(employees_repo)


@pytest.fixture
def leaves_repo():
    return FakeLeaveRepo()


@pytest.fixture
def corrections_repo():
    return FakeCorrectionRepo()


@pytest.fixture
def container(employees_repo, shifts_repo, attendance_repo, leaves_repo, corrections_repo):
    return wire_container(
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        corrections_repo=corrections_repo,
        late_threshold=time(9, 15),
    )


@pytest.fixture
def client(container, monkeypatch):
    from src.bakery_timekeeping.bakery_timekeeping.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
