from datetime import datetime, time

import pytest

from src.attendance_tracker.attendance_tracker.attendance.factory import AttendanceStrategyFactory
from src.attendance_tracker.attendance_tracker.attendance.strategies.late_strategy import LateStrategy
from src.attendance_tracker.attendance_tracker.attendance.strategies.normal_strategy import NormalStrategy
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2025, 1, 1, 8, 0, 0), NormalStrategy),
        (datetime(2025, 1, 1, 9, 29, 0), NormalStrategy),
        (datetime(2025, 1, 1, 9, 30, 0), NormalStrategy),
        (datetime(2025, 1, 1, 9, 30, 59), NormalStrategy),
        (datetime(2025, 1, 1, 9, 31, 0), LateStrategy),
        (datetime(2025, 1, 1, 10, 0, 0), LateStrategy),
        (datetime(2025, 1, 1, 23, 59, 0), LateStrategy),
    ],
)
def test_factory_default_cutoff(now, expected):
    strategy = AttendanceStrategyFactory().for_checkin(now=now)

    assert isinstance(strategy, expected)


def test_factory_custom_cutoff():
    factory = AttendanceStrategyFactory(late_cutoff=time(8, 0))

    assert isinstance(factory.for_checkin(now=datetime(2025, 1, 1, 8, 0, 30)), NormalStrategy)
    assert isinstance(factory.for_checkin(now=datetime(2025, 1, 1, 8, 1)), LateStrategy)


def test_checkout_keeps_current_status():
    strategy = AttendanceStrategyFactory().for_checkout(now=datetime(2025, 1, 1, 17, 0))

    decision = strategy.decide_checkout(now=datetime(2025, 1, 1, 17, 0), current=AttendanceStatus.LATE)

    assert decision.status == AttendanceStatus.LATE
