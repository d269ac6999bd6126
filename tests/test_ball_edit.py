import math

import pytest

from knotter.ball_edit import (
    CAPSULE_RADIUS,
    IMPULSE_SCALE,
    SPEED_MARKER_MAX_LENGTH,
    SpeedMarker,
    impulse_from_marker,
    next_delete_state,
    restore_speed,
    speed_marker,
)
from knotter.camera import AppState


def _norm(v):
    return math.sqrt(sum(c * c for c in v))


def _unit(v):
    n = _norm(v)
    return tuple(c / n for c in v)


def test_short_marker_depth_is_length_minus_caps():
    start = (1.0, 0.0, 0.0)
    end = (1.0, 0.3, 0.0)
    marker = speed_marker(start, end)
    assert marker.depth == pytest.approx(math.dist(start, end) - 2 * CAPSULE_RADIUS)
    assert marker.radius == CAPSULE_RADIUS


def test_long_marker_is_capped():
    marker = speed_marker((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    assert marker.depth == pytest.approx(SPEED_MARKER_MAX_LENGTH - 2 * CAPSULE_RADIUS)


def test_marker_points_from_start_to_end():
    start = (0.0, 0.0, 1.0)
    end = (0.2, 0.1, 1.0)
    marker = speed_marker(start, end)
    expected = _unit(tuple(e - s for s, e in zip(start, end)))
    assert marker.direction == pytest.approx(expected)


def test_marker_pointing_down_is_handled():
    marker = speed_marker((1.0, 0.3, 0.0), (1.0, -0.1, 0.0))
    assert marker.direction == pytest.approx((0.0, -1.0, 0.0), abs=1e-9)


def test_marker_is_lifted_above_surface():
    start = (1.0, 0.0, 0.0)
    end = (1.0, 0.2, 0.0)
    marker = speed_marker(start, end)
    middle = tuple((s + e) / 2 for s, e in zip(start, end))
    assert _norm(marker.translation) > _norm(middle)


def test_degenerate_marker_raises():
    with pytest.raises(ValueError):
        speed_marker((1.0, 0.0, 0.0), (1.0, 0.0, 0.0))


def test_impulse_follows_marker_direction_and_scale():
    marker = speed_marker((0.0, 0.0, 1.0), (0.3, 0.0, 1.0))
    impulse = impulse_from_marker(marker)
    assert _norm(impulse) == pytest.approx(marker.depth * IMPULSE_SCALE)
    assert _unit(impulse) == pytest.approx(marker.direction)


def test_short_marker_gives_fixed_ball():
    marker = speed_marker((0.0, 0.0, 1.0), (0.12, 0.0, 1.0))
    assert impulse_from_marker(marker) is None


def test_impulse_none_for_explicit_small_depth():
    marker = SpeedMarker(
        depth=0.05, radius=CAPSULE_RADIUS, translation=(0.0, 1.0, 0.0), rotation=(0.0, 0.0, 0.0, 1.0)
    )
    assert impulse_from_marker(marker) is None


def test_restore_speed_keeps_direction_and_sets_length():
    velocity = (3.0, 4.0, 0.0)
    result = restore_speed(velocity, 10.0)
    assert _norm(result) == pytest.approx(10.0)
    assert _unit(result) == pytest.approx(_unit(velocity))


def test_restore_speed_zero_velocity_raises():
    with pytest.raises(ValueError):
        restore_speed((0.0, 0.0, 0.0), 1.0)


@pytest.mark.parametrize(
    "requested, current, expected",
    [
        (True, AppState.EDIT_UPSERT, AppState.EDIT_DELETE),
        (True, AppState.EDIT_DELETE, None),
        (True, AppState.ORBITING, None),
        (False, AppState.EDIT_DELETE, AppState.EDIT_UPSERT),
        (False, AppState.EDIT_UPSERT, None),
        (False, AppState.ZOOMING, None),
    ],
)
def test_next_delete_state(requested, current, expected):
    assert next_delete_state(requested, current) == expected