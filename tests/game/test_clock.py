"""Tests for Clock."""

from chessduel.core.enums import Color
from chessduel.game.clock import Clock, ClockState
from chessduel.game.interfaces import TimeControl


def _clock(seconds: int | None = 300, increment: int = 0) -> Clock:
    return Clock.from_time_control(TimeControl(seconds, increment))


class TestClockBasics:
    def test_initial_remaining(self) -> None:
        clock = _clock()
        assert clock.remaining(Color.WHITE) == 300
        assert clock.remaining(Color.BLACK) == 300

    def test_not_running_initially(self) -> None:
        clock = _clock()
        assert not clock.any_running
        assert clock.active_color is None

    def test_start_sets_running(self) -> None:
        clock = _clock().set_running(Color.WHITE, True)
        assert clock.is_running(Color.WHITE)
        assert clock.active_color == Color.WHITE

    def test_starting_one_side_stops_the_other(self) -> None:
        clock = _clock().set_running(Color.WHITE, True).set_running(Color.BLACK, True)
        assert clock.active_color == Color.BLACK
        assert not clock.is_running(Color.WHITE)

    def test_set_running_is_idempotent(self) -> None:
        once = _clock().set_running(Color.WHITE, True)
        assert once.set_running(Color.WHITE, True) == once
        stopped = once.set_running(Color.WHITE, False)
        assert stopped.set_running(Color.WHITE, False) == stopped

    def test_stop_pauses_both(self) -> None:
        clock = _clock().set_running(Color.WHITE, True).stop()
        assert not clock.any_running

    def test_immutable(self) -> None:
        clock = _clock()
        clock.set_running(Color.WHITE, True)
        assert not clock.any_running


class TestClockTick:
    def test_tick_decrements_running_side_only(self) -> None:
        clock, expired = _clock().set_running(Color.WHITE, True).tick()
        assert expired is None
        assert clock.remaining(Color.WHITE) == 299
        assert clock.remaining(Color.BLACK) == 300

    def test_tick_without_running_clock_is_noop(self) -> None:
        clock = _clock()
        ticked, expired = clock.tick()
        assert ticked == clock
        assert expired is None

    def test_expiry_fires_once(self) -> None:
        clock = _clock(2).set_running(Color.BLACK, True)
        clock, expired = clock.tick()
        assert expired is None
        clock, expired = clock.tick()
        assert expired == Color.BLACK
        assert clock.state(Color.BLACK) == ClockState(0, running=False, expired=True)
        clock, expired = clock.tick()
        assert expired is None

    def test_expired_clock_cannot_restart(self) -> None:
        clock, _ = _clock(1).set_running(Color.WHITE, True).tick()
        assert clock.set_running(Color.WHITE, True) == clock

    def test_unlimited_never_expires(self) -> None:
        clock = _clock(None).set_running(Color.WHITE, True)
        assert clock.is_unlimited
        ticked, expired = clock.tick()
        assert expired is None
        assert ticked.remaining(Color.WHITE) is None


class TestClockIncrement:
    def test_fischer_increment(self) -> None:
        clock = _clock(300, 5).add_increment(Color.WHITE)
        assert clock.remaining(Color.WHITE) == 305
        assert clock.remaining(Color.BLACK) == 300

    def test_increment_adds_up(self) -> None:
        clock = _clock(10, 2).add_increment(Color.WHITE).add_increment(Color.WHITE)
        assert clock.remaining(Color.WHITE) == 14

    def test_no_increment_is_noop(self) -> None:
        clock = _clock()
        assert clock.add_increment(Color.WHITE) == clock


class TestClockReset:
    def test_reset_both_stops_and_sets_duration(self) -> None:
        clock, _ = _clock(60).set_running(Color.WHITE, True).tick()
        reset = clock.reset_both(180)
        assert not reset.any_running
        assert reset.remaining(Color.WHITE) == 180
        assert reset.remaining(Color.BLACK) == 180
