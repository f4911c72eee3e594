from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, now_local, parse_iso_date, truncate_to_millis
from ..core.constants import EMPLOYEE_FILTER_ALL
from ..core.exceptions import AlreadyCheckedOut, DuplicateCheckIn, NoCheckInFound, ValidationError
from ..users.repository import UserRepository
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Keeps one attendance record per user per calendar day.

    The day key is always taken from ``now`` (never from the caller's input),
    so the clock decides which day a check-in belongs to.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        calculator: HoursCalculator | None = None,
        clock: Clock | None = None,
        allow_checkout_overwrite: bool = False,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._calculator = calculator or StandardHoursCalculator()
        self._clock = clock or now_local
        self._allow_checkout_overwrite = bool(allow_checkout_overwrite)

    def check_in(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = truncate_to_millis(now or self._clock())
        today = now.date()

        if not self._users.get_by_id(user_id):
            raise ValidationError("User not found")

        if self._attendance.get_for_user_and_date(user_id, today):
            logger.warning("duplicate check-in user=%s date=%s", user_id, today)
            raise DuplicateCheckIn("Already checked in today")

        strategy = self._factory.for_checkin(now=now)
        decision = strategy.decide_checkin(now=now)

        # the storage UNIQUE(user_id, work_date) index rejects a concurrent duplicate
        attendance_id = self._attendance.create_checkin(
            user_id=user_id,
            work_date=today,
            check_in_time=now,
            status=decision.status,
        )
        logger.info("check-in user=%s date=%s status=%s", user_id, today, decision.status.value)

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=today,
            check_in_time=now,
            check_out_time=None,
            status=decision.status,
        )

    def check_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = truncate_to_millis(now or self._clock())
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            logger.warning("checkout without check-in user=%s date=%s", user_id, today)
            raise NoCheckInFound("You have not checked in yet")
        if not record.is_open and not self._allow_checkout_overwrite:
            raise AlreadyCheckedOut("Already checked out today")
        if now < record.check_in_time:
            raise ValidationError("Check-out time is before check-in time")

        strategy = self._factory.for_checkout(now=now)
        decision = strategy.decide_checkout(now=now, current=record.status)
        total_hours = self._calculator.total_hours(record.check_in_time, now)

        updated = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            total_hours=total_hours,
            only_if_open=not self._allow_checkout_overwrite,
        )
        if not updated:
            # lost a race with another checkout of the same record
            raise AlreadyCheckedOut("Already checked out today")
        logger.info("check-out user=%s date=%s hours=%s", user_id, today, total_hours)

        return AttendanceRecord(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            check_in_time=record.check_in_time,
            check_out_time=now,
            status=decision.status,
            total_hours=total_hours,
        )

    def get_history(self, user_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(user_id)

    def get_today_record(self, user_id: int, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        today = (now or self._clock()).date()
        return self._attendance.get_for_user_and_date(user_id, today)

    def query_filtered(
        self,
        *,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
        employee_id: str | None = None,
    ) -> Sequence[AttendanceReportRow]:
        start = _as_date(start_date)
        end = _as_date(end_date)
        if start and end and start > end:
            raise ValidationError("startDate must not be after endDate")

        employee_id = (employee_id or "").strip()
        if employee_id.lower() == EMPLOYEE_FILTER_ALL:
            employee_id = ""

        return self._attendance.get_report_rows(
            start_date=start,
            end_date=end,
            employee_id=employee_id or None,
        )

    def today_status(self, *, now: datetime | None = None) -> Sequence[AttendanceReportRow]:
        today = (now or self._clock()).date()
        return self._attendance.get_report_rows(start_date=today, end_date=today)


def _as_date(value: str | date | None) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return parse_iso_date(value.strip())
