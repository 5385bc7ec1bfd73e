from datetime import datetime

from salon.domain.scheduling.overlap import BookedInterval, find_conflict, has_conflict, intervals_overlap


def at(hour, minute=0):
    return datetime(2030, 6, 3, hour, minute)


def booking(appointment_id, professional_id, start, end, status="confirmed"):
    return BookedInterval(appointment_id, professional_id, start, end, status)


def test_touching_intervals_do_not_overlap():
    assert not intervals_overlap(at(10), at(11), at(11), at(12))
    assert not intervals_overlap(at(11), at(12), at(10), at(11))


def test_partial_and_contained_intervals_overlap():
    assert intervals_overlap(at(10), at(11), at(10, 30), at(11, 30))
    assert intervals_overlap(at(10), at(12), at(10, 30), at(11))
    assert intervals_overlap(at(10), at(11), at(10), at(11))


def test_conflict_only_for_same_professional():
    booked = [booking(1, 7, at(10), at(11))]
    assert has_conflict(7, at(10, 30), at(11, 30), booked)
    assert not has_conflict(8, at(10, 30), at(11, 30), booked)


def test_back_to_back_is_free():
    booked = [booking(1, 7, at(10), at(11))]
    assert not has_conflict(7, at(11), at(12), booked)
    assert not has_conflict(7, at(9), at(10), booked)


def test_unassigned_candidate_never_conflicts():
    booked = [booking(1, None, at(10), at(11)), booking(2, 7, at(10), at(11))]
    assert not has_conflict(None, at(10), at(11), booked)


def test_cancelled_bookings_are_ignored():
    booked = [booking(1, 7, at(10), at(11), status="cancelled")]
    assert not has_conflict(7, at(10), at(11), booked)


def test_excluded_appointment_is_ignored():
    booked = [booking(1, 7, at(10), at(11))]
    assert not has_conflict(7, at(10), at(11), booked, exclude_appointment_id=1)
    assert has_conflict(7, at(10), at(11), booked, exclude_appointment_id=2)


def test_find_conflict_returns_first_overlap():
    first = booking(1, 7, at(9), at(10, 30))
    second = booking(2, 7, at(10, 30), at(11, 30))
    assert find_conflict(7, at(10), at(11), [first, second]) is first
