import pytest

from header_fuzz import (
    ProgressState,
    format_seconds,
    get_seconds_elapsed,
    get_seconds_remain,
    get_seconds_total,
)


@pytest.mark.parametrize("seconds, expected", [
    (0, "00:00:00"),
    (45, "00:00:45"),
    (125, "00:02:05"),
    (3599, "00:59:59"),
    (3600, "1:00:00"),
    (3661, "1:01:01"),
    (36000 * 3 + 61, "30:01:01"),
    (-5, "00:00:00"),
])
def test_format_seconds(seconds, expected):
    assert format_seconds(seconds) == expected


def test_estimates():
    assert get_seconds_elapsed(100, 110) == 10
    assert get_seconds_total(elapsed=10, completed=5, total=20) == 40
    assert get_seconds_remain(total=40, elapsed=10) == 30


def test_total_truncates():
    # 7 * 10 / 3 = 23.33
    assert get_seconds_total(elapsed=10, completed=3, total=7) == 23


def test_progress_uses_placeholder_until_tenth_line():
    state = ProgressState(total=100, start=0)
    for _ in range(9):
        state.advance(now=3)
    assert state.index == 9
    assert state.total_str == "--:--:--"
    assert state.remain_str == "--:--:--"
    assert state.render().startswith("9/100 ")


def test_progress_recomputes_every_tenth_line():
    state = ProgressState(total=100, start=0)
    for _ in range(10):
        state.advance(now=5)
    assert state.render() == "10/100  elapsed 00:00:05  total 00:00:50  remaining 00:00:45"

    # lines 11..19 reuse the previous strings
    for _ in range(9):
        state.advance(now=500)
    assert state.index == 19
    assert state.total_str == "00:00:50"

    state.advance(now=10)
    assert state.elapsed_str == "00:00:10"
    assert state.total_str == "00:00:50"
    assert state.remain_str == "00:00:40"
