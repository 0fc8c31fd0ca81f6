import pytest

from rover.core import motion
from rover.core.geo import Point
from rover.core.motion import MotionState, RunMode
from rover.core.route import RouteModel
from rover.errors import InvalidTickError


def test_initial_state_is_idle_at_route_start(line_route):
    state = motion.initial_state(line_route)
    assert state.mode is RunMode.IDLE
    assert state.position == Point(0, 0)
    assert state.heading_deg == 0.0
    assert state.distance_along_route == 0.0
    assert state.total_distance == 0.0
    assert state.last_tick is None


def test_half_second_tick_reaches_midpoint_heading_east(line_route):
    state = motion.start(motion.initial_state(line_route), now=10.0)
    state = motion.tick(state, line_route, 10.5, speed_mps=1.0)

    assert state.distance_along_route == pytest.approx(0.5)
    assert state.position.lat == pytest.approx(0.0)
    assert state.position.lng == pytest.approx(0.5)
    assert state.heading_deg == pytest.approx(90.0)


def test_first_tick_without_reference_only_records_time(line_route):
    state = motion.start(motion.initial_state(line_route))
    assert state.last_tick is None

    state = motion.tick(state, line_route, 100.0, speed_mps=1.0)
    assert state.last_tick == 100.0
    assert state.distance_along_route == 0.0

    state = motion.tick(state, line_route, 100.25, speed_mps=1.0)
    assert state.distance_along_route == pytest.approx(0.25)


@pytest.mark.parametrize("mode", [RunMode.IDLE, RunMode.PAUSED])
def test_tick_outside_moving_is_a_no_op(line_route, mode):
    state = MotionState(position=Point(0, 0), mode=mode, last_tick=1.0)
    assert motion.tick(state, line_route, 5.0, speed_mps=1.0) == state


def test_advance_outside_moving_raises(line_route):
    with pytest.raises(InvalidTickError):
        motion.advance(motion.initial_state(line_route), line_route, 1.0, speed_mps=1.0)


def test_start_and_pause_are_idempotent(line_route):
    s0 = motion.initial_state(line_route)
    once = motion.start(s0, now=1.0)
    assert motion.start(once, now=7.0) == once

    moved = motion.tick(once, line_route, 1.5, speed_mps=1.0)
    paused = motion.pause(moved)
    assert paused.mode is RunMode.PAUSED
    assert motion.pause(paused) == paused


def test_pause_from_idle_is_a_no_op(line_route):
    s0 = motion.initial_state(line_route)
    assert motion.pause(s0) == s0


def test_resume_after_pause_does_not_jump(line_route):
    state = motion.start(motion.initial_state(line_route), now=0.0)
    state = motion.tick(state, line_route, 0.5, speed_mps=1.0)
    state = motion.pause(state)

    # A long pause, then resume with a fresh reference
    state = motion.start(state, now=1000.0)
    state = motion.tick(state, line_route, 1000.25, speed_mps=1.0)
    assert state.distance_along_route == pytest.approx(0.75)
    assert state.total_distance == pytest.approx(0.75)


def test_wraps_around_closed_loop(line_route):
    speed = 1.0
    state = motion.start(motion.initial_state(line_route), now=0.0)
    t = 0.0
    for _ in range(20):
        t += 0.25
        state = motion.tick(state, line_route, t, speed_mps=speed)

    # 5 m travelled on a 2 m route
    assert state.total_distance == pytest.approx(speed * t)
    assert state.distance_along_route == pytest.approx((speed * t) % line_route.total_length)
    assert 0.0 <= state.distance_along_route < line_route.total_length


def test_large_step_wraps_more_than_once(line_route):
    state = motion.start(motion.initial_state(line_route), now=0.0)
    state = motion.tick(state, line_route, 7.5, speed_mps=1.0)
    assert state.distance_along_route == pytest.approx(1.5)
    assert state.total_distance == pytest.approx(7.5)


def test_reset_returns_idle_at_start(line_route):
    state = motion.start(motion.initial_state(line_route), now=0.0)
    state = motion.tick(state, line_route, 1.3, speed_mps=1.0)
    state = motion.reset(line_route)
    assert state == motion.initial_state(line_route)


def test_degenerate_route_only_tracks_time():
    route = RouteModel.build([(5, 5), (5, 5)])
    state = motion.start(motion.initial_state(route), now=0.0)
    state = motion.tick(state, route, 3.0, speed_mps=10.0)
    assert state.last_tick == 3.0
    assert state.distance_along_route == 0.0
    assert state.total_distance == 0.0
    assert state.position == Point(5, 5)


def test_heading_kept_when_position_unchanged(line_route):
    state = motion.start(motion.initial_state(line_route), now=0.0)
    state = motion.tick(state, line_route, 0.5, speed_mps=1.0)
    same = motion.tick(state, line_route, 0.5, speed_mps=1.0)
    assert same.heading_deg == state.heading_deg


def test_heading_follows_route_turn():
    # East along the equator, then north
    from conftest import planar
    route = RouteModel.build([(0, 0), (0, 1), (1, 1)], metric=planar)
    state = motion.start(motion.initial_state(route), now=0.0)
    state = motion.tick(state, route, 1.5, speed_mps=1.0)
    state = motion.tick(state, route, 1.75, speed_mps=1.0)
    assert state.heading_deg == pytest.approx(0.0, abs=1e-6)
