from __future__ import annotations

from isspot.models import DayWindow
from isspot.query import find_current, find_upcoming
from tests.conftest import at, make_spot

SPOTS = [make_spot(at(1, 6)), make_spot(at(1, 9)), make_spot(at(1, 18)), make_spot(at(1, 22))]
DAYLIGHT = DayWindow(sunrise=at(1, 7), sunset=at(1, 21))


def test_upcoming_without_window_is_first_future_rise() -> None:
    assert find_upcoming(SPOTS, None, at(1, 13)) == SPOTS[2]
    assert find_upcoming(SPOTS, None, at(1, 5)) == SPOTS[0]


def test_upcoming_none_when_empty_or_all_risen() -> None:
    assert find_upcoming([], None, at(1, 13)) is None
    assert find_upcoming(SPOTS, None, at(1, 22)) is None
    assert find_upcoming(SPOTS, None, at(2, 0)) is None


def test_upcoming_skips_daytime_rises() -> None:
    assert find_upcoming(SPOTS, DAYLIGHT, at(1, 13)) == SPOTS[3]
    assert find_upcoming(SPOTS, DAYLIGHT, at(1, 5)) == SPOTS[0]


def test_upcoming_all_day_window_finds_nothing() -> None:
    all_day = DayWindow(sunrise=at(1, 0), sunset=at(1, 23, 59))
    assert find_upcoming(SPOTS, all_day, at(1, 13)) is None


def test_upcoming_single_night_pass() -> None:
    spots = [make_spot(at(1, 0))]
    assert find_upcoming(spots, DAYLIGHT, at(31, 13, month=5)) == spots[0]
    assert find_upcoming(spots, DAYLIGHT, at(1, 13)) is None


def test_upcoming_keeps_list_order() -> None:
    unsorted = [make_spot(at(1, 22)), make_spot(at(1, 18))]
    assert find_upcoming(unsorted, None, at(1, 13)) == unsorted[0]


def test_current_none_outside_every_pass() -> None:
    assert find_current(SPOTS, None, at(1, 13)) is None
    assert find_current([], DAYLIGHT, at(1, 13)) is None


def test_current_returns_containing_pass() -> None:
    assert find_current(SPOTS, None, at(1, 9, 5)) == SPOTS[1]
    assert find_current(SPOTS, DAYLIGHT, at(1, 22, 5)) == SPOTS[3]


def test_current_daytime_candidate_means_no_current_pass() -> None:
    assert find_current(SPOTS, DAYLIGHT, at(1, 9, 5)) is None


def test_current_stops_at_first_candidate_unlike_upcoming() -> None:
    # overlapping passes: the first containing pass rose in daylight, the second at night
    day_pass = make_spot(at(1, 20, 50), seconds=1800)
    night_pass = make_spot(at(1, 21, 5), seconds=600)
    spots = [day_pass, night_pass]
    now = at(1, 21, 10)

    assert find_current(spots, None, now) == day_pass
    assert find_current(spots, DAYLIGHT, now) is None
    assert find_upcoming(spots, DAYLIGHT, at(1, 20)) == night_pass
