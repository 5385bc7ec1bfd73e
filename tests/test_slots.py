from datetime import date, datetime

import pytest

from salon.domain.scheduling.overlap import BookedInterval
from salon.domain.scheduling.slots import generate_slots, working_days
from salon.domain.scheduling.timevalues import WorkSchedule

MONDAY = date(2030, 6, 3)
SUNDAY = date(2030, 6, 2)


def weekday_schedule(professional_id=1, **overrides):
    values = {
        "work_days": "1,2,3,4,5",
        "work_start_time": "08:00",
        "work_end_time": "18:00",
        "lunch_start_time": "12:00",
        "lunch_end_time": "13:00",
    }
    values.update(overrides)
    return WorkSchedule.parse(professional_id, **values)


def counts(slots):
    return {str(s.time): s.available_professional_count for s in slots}


def test_weekday_scenario_with_lunch():
    slots = generate_slots(MONDAY, 60, [weekday_schedule()], [], granularity=30)
    by_time = counts(slots)

    assert [str(s.time) for s in slots][0] == "08:00"
    assert [str(s.time) for s in slots][-1] == "17:30"
    assert len(slots) == 20
    assert by_time["08:00"] == 1
    assert by_time["17:00"] == 1
    assert by_time["11:30"] == 0
    assert by_time["12:00"] == 0
    assert by_time["12:30"] == 0
    assert by_time["13:00"] == 1
    assert by_time["17:30"] == 0


def test_no_professional_on_duty_gives_empty_grid():
    assert generate_slots(SUNDAY, 60, [weekday_schedule()], []) == []


def test_counts_professionals_and_bookings():
    schedules = [weekday_schedule(1), weekday_schedule(2, lunch_start_time=None, lunch_end_time=None)]
    booked = [BookedInterval(10, 1, datetime(2030, 6, 3, 9), datetime(2030, 6, 3, 10))]

    by_time = counts(generate_slots(MONDAY, 60, schedules, booked))

    assert by_time["08:00"] == 2
    assert by_time["08:30"] == 1  # overlaps professional 1's 09:00 booking
    assert by_time["09:00"] == 1
    assert by_time["10:00"] == 2
    assert by_time["12:00"] == 1  # professional 1 at lunch


def test_cancelled_and_unassigned_bookings_do_not_reduce_counts():
    booked = [
        BookedInterval(10, 1, datetime(2030, 6, 3, 9), datetime(2030, 6, 3, 10), status="cancelled"),
        BookedInterval(11, None, datetime(2030, 6, 3, 9), datetime(2030, 6, 3, 10), status="pending"),
    ]
    assert counts(generate_slots(MONDAY, 60, [weekday_schedule()], booked))["09:00"] == 1


def test_adding_a_booking_never_increases_availability():
    schedules = [weekday_schedule(1), weekday_schedule(2)]
    before = counts(generate_slots(MONDAY, 45, schedules, []))
    booked = [BookedInterval(10, 2, datetime(2030, 6, 3, 14), datetime(2030, 6, 3, 15, 30))]
    after = counts(generate_slots(MONDAY, 45, schedules, booked))

    assert before.keys() == after.keys()
    assert all(after[t] <= before[t] for t in before)
    assert after["14:00"] < before["14:00"]


def test_grid_spans_earliest_start_to_latest_end():
    schedules = [
        weekday_schedule(1, work_start_time="09:15", work_end_time="12:00", lunch_start_time=None, lunch_end_time=None),
        weekday_schedule(2, work_start_time="13:00", work_end_time="16:00", lunch_start_time=None, lunch_end_time=None),
    ]
    slots = generate_slots(MONDAY, 30, schedules, [], granularity=30)
    by_time = counts(slots)

    assert str(slots[0].time) == "09:00"  # floored to the granularity
    assert str(slots[-1].time) == "15:30"
    assert by_time["09:00"] == 0
    assert by_time["09:30"] == 1
    assert by_time["12:00"] == 0
    assert by_time["13:00"] == 1


def test_marks_before_not_before_are_unavailable():
    slots = generate_slots(
        MONDAY, 60, [weekday_schedule()], [], not_before=datetime(2030, 6, 3, 10, 15)
    )
    by_time = counts(slots)
    assert by_time["10:00"] == 0
    assert by_time["10:30"] == 1


def test_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        generate_slots(MONDAY, 0, [weekday_schedule()], [])


def test_working_days_union():
    schedules = [
        weekday_schedule(1, work_days="1,2"),
        weekday_schedule(2, work_days="2,6"),
    ]
    assert working_days(schedules) == [1, 2, 6]
    assert working_days([]) == []
