import pytest

from joystick import Joystick, handle_offset, map_input
from maze import ConfigError


def test_inside_dead_zone_gives_no_velocity() -> None:
    assert map_input(6, 8) == (0.0, 0.0)
    assert map_input(0, 0) == (0.0, 0.0)
    assert map_input(-3, 2) == (0.0, 0.0)


def test_max_distance_gives_full_speed() -> None:
    vx, vy = map_input(40, 0)
    assert vx == pytest.approx(4.0)
    assert vy == pytest.approx(0.0)

    vx, vy = map_input(0, -80)
    assert vx == pytest.approx(0.0, abs=1e-12)
    assert vy == pytest.approx(-4.0)


def test_force_grows_linearly_past_dead_zone() -> None:
    vx, vy = map_input(25, 0)
    assert vx == pytest.approx(2.0)

    vx, vy = map_input(0, 17.5, dead_zone=10, max_distance=40, speed=8)
    assert vy == pytest.approx(2.0)


def test_handle_has_its_own_clamp() -> None:
    assert handle_offset(100, 0) == pytest.approx((70, 0))
    assert handle_offset(30, 40) == pytest.approx((30, 40))
    # Already at full speed while the handle can still travel.
    assert handle_offset(50, 0) == pytest.approx((50, 0))
    assert map_input(50, 0) == pytest.approx((4.0, 0.0))


def test_pointer_down_activates_and_maps() -> None:
    js = Joystick()

    js.pointer_down(60 + 40, 60)

    assert js.active
    assert js.velocity == pytest.approx((4.0, 0.0))
    assert js.handle == pytest.approx((100, 60))


def test_pointer_move_is_ignored_until_pressed() -> None:
    js = Joystick()

    js.pointer_move(100, 60)

    assert not js.active
    assert js.velocity == (0.0, 0.0)
    assert js.handle == (60, 60)


def test_pointer_up_resets() -> None:
    js = Joystick()
    js.pointer_down(60, 120)
    js.pointer_move(10, 60)
    assert js.velocity == pytest.approx((-4.0, 0.0))

    js.pointer_up()

    assert not js.active
    assert js.velocity == (0.0, 0.0)
    assert js.handle == (60, 60)


def test_pointer_leave_only_cancels_an_active_drag() -> None:
    js = Joystick()
    js.move_x = 1.5
    js.pointer_leave()
    assert js.move_x == 1.5

    js.pointer_down(60, 100)
    js.pointer_leave()
    assert not js.active
    assert js.velocity == (0.0, 0.0)


@pytest.mark.parametrize("dead_zone, max_distance", [(40, 40), (50, 40), (-1, 40)])
def test_bad_dead_zone_is_rejected(dead_zone, max_distance) -> None:
    with pytest.raises(ConfigError):
        Joystick(dead_zone=dead_zone, max_distance=max_distance)
