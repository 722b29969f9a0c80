from __future__ import annotations

import math

import numpy as np
import pytest

from prizewheel.model.easing import linear
from prizewheel.model.errors import ItemNotFoundError, WheelInputError
from prizewheel.model.events import CurrentIndexChangeEvent, RestEvent, SpinEvent, SpinMethod
from prizewheel.model.geometry_primitives import Point
from prizewheel.model.items import Item
from prizewheel.model.wheel import Wheel
from prizewheel.model.wheel_config import WheelConfig
from tests.conftest import point_at


class Hooks:
    def __init__(self) -> None:
        self.spins: list[SpinEvent] = []
        self.rests: list[RestEvent] = []
        self.index_changes: list[int] = []

    def on_spin(self, event: SpinEvent) -> None:
        self.spins.append(event)

    def on_rest(self, event: RestEvent) -> None:
        self.rests.append(event)

    def on_current_index_change(self, event: CurrentIndexChangeEvent) -> None:
        self.index_changes.append(event.current_index)

    def as_props(self) -> dict:
        return {
            "on_spin": self.on_spin,
            "on_rest": self.on_rest,
            "on_current_index_change": self.on_current_index_change,
        }


@pytest.fixture
def hooks() -> Hooks:
    return Hooks()


def make_wheel(hooks: Hooks, clock, weights=(1, 1, 1, 1), **props) -> Wheel:
    items = [{"label": f"item {i}", "weight": w} for i, w in enumerate(weights)]
    return Wheel.from_dict(
        {"items": items, **hooks.as_props(), **props},
        clock=clock,
        rng=np.random.default_rng(1234),
    )


def run_until_rest(wheel: Wheel, clock, step_ms: float = 16.0) -> None:
    for _ in range(100_000):
        if not wheel.is_animating:
            return
        wheel.advance(clock.tick(step_ms))
    raise AssertionError("wheel never came to rest")


# ----------------------------------------------------------------------
# Construction & current index
# ----------------------------------------------------------------------
def test_empty_wheel(clock):
    wheel = Wheel(clock=clock)
    assert wheel.items == ()
    assert wheel.get_current_index() == -1
    assert wheel.current_item is None
    assert wheel.get_item_angles() == []


def test_construction_raises_no_index_event(hooks, clock):
    wheel = make_wheel(hooks, clock)
    assert wheel.get_current_index() == 0
    assert hooks.index_changes == []


def test_initial_rotation_is_respected(hooks, clock):
    wheel = make_wheel(hooks, clock, rotation=100)
    assert wheel.rotation == 100
    # Pointer at 0 lies in [280, 370)
    assert wheel.get_current_index() == 2


def test_full_revolution_raises_one_event_per_boundary(hooks, clock):
    wheel = make_wheel(hooks, clock, weights=(1, 2, 3, 4), rotation=0.5)
    assert wheel.get_current_index() == 3

    for step in range(1, 361):
        wheel.rotation = 0.5 + step

    assert hooks.index_changes == [2, 1, 0, 3]


def test_pointer_angle_change_updates_index(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.configure(pointer_angle=90)
    assert wheel.get_current_index() == 1
    assert hooks.index_changes == [1]


def test_clearing_items_reports_minus_one(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.items = []
    assert wheel.get_current_index() == -1
    assert hooks.index_changes == [-1]


def test_replacing_items_relayouts(hooks, clock):
    wheel = make_wheel(hooks, clock, weights=(1,), pointer_angle=270)
    assert wheel.get_current_index() == 0

    wheel.items = [Item("a"), Item("b")]
    assert wheel.get_current_index() == 1
    assert wheel.current_item.label == "b"


def test_item_angles_follow_rotation(hooks, clock):
    wheel = make_wheel(hooks, clock, weights=(1, 3))
    assert [(r.start, r.end) for r in wheel.get_item_angles(10)] == [(10, 100), (100, 370)]
    assert wheel.get_start_angle(1) == 90
    assert wheel.get_end_angle(1) == 360
    assert wheel.get_center_angle(0) == 45


def test_get_item_index_matches_identity(clock):
    first, second = Item("same"), Item("same")
    wheel = Wheel(WheelConfig(items=(first, second)), clock=clock)
    assert wheel.get_item_index(second) == 1
    with pytest.raises(ItemNotFoundError):
        wheel.get_item_index(Item("same"))


def test_random_angle_stays_within_item(hooks, clock):
    wheel = make_wheel(hooks, clock, weights=(1, 2, 3))
    for _ in range(50):
        angle = wheel.get_random_angle(1)
        assert wheel.get_start_angle(1) <= angle < wheel.get_end_angle(1)


# ----------------------------------------------------------------------
# Spinning
# ----------------------------------------------------------------------
def test_spin_raises_event_and_comes_to_rest(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.spin(1000)

    (event,) = hooks.spins
    assert event.method == SpinMethod.SPIN
    assert event.rotation_speed == 300
    assert event.rotation_resistance == -35
    assert wheel.rotation_speed == 300

    run_until_rest(wheel, clock)

    (rest,) = hooks.rests
    assert rest.rotation == wheel.rotation
    assert rest.current_index == wheel.get_current_index()
    assert wheel.rotation_speed == 0


def test_spin_with_zero_speed_does_nothing(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.spin(0)
    assert hooks.spins == []
    assert not wheel.is_animating


def test_spin_to_lands_exactly(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.spin_to(450, duration=2000, easing=linear)

    (event,) = hooks.spins
    assert event.method == SpinMethod.SPIN_TO
    assert event.target_rotation == 450
    assert event.duration == 2000

    wheel.advance(clock.now + 1000)
    assert wheel.rotation == pytest.approx(225)

    wheel.advance(clock.now + 2000)
    assert wheel.rotation == 450
    assert len(hooks.rests) == 1
    assert hooks.rests[0].current_index == 3


def test_spin_to_item_centers_item_under_pointer(hooks, clock):
    wheel = make_wheel(hooks, clock, weights=(1, 3))
    wheel.spin_to_item(0, duration=0, revolutions=0)
    wheel.advance(clock.now)

    assert wheel.rotation == pytest.approx(315)
    assert wheel.get_current_index() == 0
    center = wheel.get_item_angles(wheel.rotation)[0].center
    assert center % 360 == pytest.approx(0)

    (event,) = hooks.spins
    assert event.method == SpinMethod.SPIN_TO_ITEM
    assert event.target_item_index == 0
    assert event.target_rotation == pytest.approx(315)


def test_spin_to_item_adds_revolutions_in_direction(hooks, clock):
    wheel = make_wheel(hooks, clock, weights=(1, 3))
    wheel.spin_to_item(0, duration=1000, revolutions=2, direction=-1)
    assert hooks.spins[0].target_rotation == pytest.approx(-765)


def test_spin_to_item_respects_pointer_angle(hooks, clock):
    wheel = make_wheel(hooks, clock, weights=(1, 1, 1, 1), pointer_angle=90)
    wheel.spin_to_item(2, duration=500)
    run_until_rest(wheel, clock)
    assert wheel.get_current_index() == 2
    assert hooks.rests[-1].current_index == 2


def test_spin_to_random_point_lands_in_item(hooks, clock):
    wheel = make_wheel(hooks, clock, weights=(1, 2, 3, 4))
    for index in range(4):
        wheel.spin_to_item(index, duration=300, spin_to_center=False, revolutions=3)
        run_until_rest(wheel, clock)
        assert wheel.get_current_index() == index


@pytest.mark.parametrize(
    "call, error",
    [
        (lambda w: w.spin("fast"), WheelInputError),
        (lambda w: w.spin(float("nan")), WheelInputError),
        (lambda w: w.spin_to(None), WheelInputError),
        (lambda w: w.spin_to(10, duration=-1), WheelInputError),
        (lambda w: w.spin_to(10, easing="linear"), WheelInputError),
        (lambda w: w.spin_to_item(4), ItemNotFoundError),
        (lambda w: w.spin_to_item(-1), ItemNotFoundError),
        (lambda w: w.spin_to_item(True), WheelInputError),
        (lambda w: w.spin_to_item(1.0), WheelInputError),
        (lambda w: w.spin_to_item(0, direction=0), WheelInputError),
        (lambda w: w.spin_to_item(0, revolutions="two"), WheelInputError),
        (lambda w: w.spin_to_item(0, spin_to_center=1), WheelInputError),
        (lambda w: w.spin(math.inf), WheelInputError),
        (lambda w: w.spin(-math.inf), WheelInputError),
        (lambda w: w.spin_to(math.inf, duration=1000), WheelInputError),
        (lambda w: w.spin_to(90, duration=math.inf), WheelInputError),
        (lambda w: w.spin_to_item(0, revolutions=math.inf), WheelInputError),
    ],
)
def test_invalid_spin_arguments_are_rejected(hooks, clock, call, error):
    wheel = make_wheel(hooks, clock)
    with pytest.raises(error):
        call(wheel)
    assert hooks.spins == []
    assert not wheel.is_animating


def test_stop_cancels_without_rest(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.spin(200)
    wheel.advance(clock.tick(100))
    wheel.stop()
    wheel.advance(clock.tick(100))

    assert not wheel.is_animating
    assert hooks.rests == []


def test_new_spin_replaces_running_one(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.spin(200)
    wheel.spin_to(90, duration=100)
    run_until_rest(wheel, clock)

    assert wheel.rotation == 90
    assert len(hooks.rests) == 1


def test_invalid_frame_timestamp_is_ignored(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.spin(100)
    wheel.advance(float("nan"))
    wheel.advance("later")
    assert wheel.rotation == 0


# ----------------------------------------------------------------------
# Dragging
# ----------------------------------------------------------------------
def test_drag_release_spins_wheel(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.resize(200, 200)

    assert wheel.drag_start(point_at(0))
    for angle in (10, 20, 30):
        clock.tick(50)
        wheel.drag_move(point_at(angle))
    clock.tick(50)
    assert wheel.rotation == pytest.approx(30)

    speed = wheel.drag_end()
    assert speed == pytest.approx(120)

    (event,) = hooks.spins
    assert event.method == SpinMethod.INTERACT
    assert event.rotation_speed == pytest.approx(120)


def test_drag_accepts_coordinate_pairs(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.resize(200, 200)
    wheel.drag_start((100, 50))
    assert wheel.drag_move((150, 100)) == pytest.approx(90)


def test_drag_rejects_bad_points(hooks, clock):
    wheel = make_wheel(hooks, clock)
    with pytest.raises(WheelInputError, match="point"):
        wheel.drag_start("here")


def test_non_interactive_wheel_ignores_drag(hooks, clock):
    wheel = make_wheel(hooks, clock, is_interactive=False)
    wheel.resize(200, 200)

    assert not wheel.drag_start(point_at(0))
    assert wheel.drag_move(point_at(90)) == 0.0
    assert wheel.drag_end() == 0.0
    assert wheel.rotation == 0
    assert hooks.spins == []


def test_drag_interrupts_spin_without_rest(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.resize(200, 200)
    wheel.spin_to(720, duration=4000)
    wheel.advance(clock.tick(500))

    wheel.drag_start(point_at(0))
    assert not wheel.is_animating
    clock.tick(1000)
    assert wheel.drag_end() == 0.0
    wheel.advance(clock.tick(5000))

    assert hooks.rests == []


def test_debug_caps_drag_history(hooks, clock):
    wheel = make_wheel(hooks, clock, debug=True)
    wheel.resize(200, 200)
    wheel.drag_start(point_at(0))
    for i in range(1, 60):
        wheel.drag_move(point_at(i))
    assert len(wheel.drag_events) == 40


# ----------------------------------------------------------------------
# Surface geometry
# ----------------------------------------------------------------------
def test_resize_computes_center_and_radius(clock):
    wheel = Wheel.from_dict({"radius": 0.5}, clock=clock)
    wheel.resize(400, 200)
    assert wheel.center == Point(200, 100)
    assert wheel.size == 200
    assert wheel.actual_radius == 50
    assert wheel.get_scaled_number(50) == 20


def test_resize_with_offset(clock):
    wheel = Wheel.from_dict({"offset": {"w": 0, "h": 0.1}}, clock=clock)
    wheel.resize(100, 100)
    assert wheel.center == Point(50, 60)


def test_resize_rejects_empty_surface(clock):
    wheel = Wheel(clock=clock)
    with pytest.raises(WheelInputError, match="Surface size"):
        wheel.resize(0, 100)


def test_hit_test(clock):
    wheel = Wheel(clock=clock)
    wheel.resize(200, 200)
    assert wheel.hit_test((100, 100))
    assert wheel.hit_test(Point(100, 6))
    assert not wheel.hit_test(Point(100, 4))
    assert wheel.get_angle_from_center((200, 100)) == pytest.approx(90)


def test_pixel_ratio(clock):
    wheel = Wheel(clock=clock)
    assert wheel.get_actual_pixel_ratio(2.0) == 2.0
    wheel.configure(pixel_ratio=1.5)
    assert wheel.get_actual_pixel_ratio(2.0) == 1.5


# ----------------------------------------------------------------------
# Configuration
# ----------------------------------------------------------------------
def test_configure_is_atomic(hooks, clock):
    wheel = make_wheel(hooks, clock)
    before = wheel.config

    with pytest.raises(WheelInputError, match="rotation_resistance"):
        wheel.configure(pointer_angle=90, rotation_resistance=5)

    assert wheel.config == before
    assert wheel.get_current_index() == 0


@pytest.mark.parametrize(
    "weights",
    [
        [1, math.inf],
        [1e308, 1e308],
    ],
)
def test_configure_rejects_unlayoutable_items(hooks, clock, weights):
    wheel = make_wheel(hooks, clock)
    before = wheel.items

    with pytest.raises(WheelInputError, match="weight"):
        wheel.configure(items=[{"weight": w} for w in weights])

    assert wheel.items == before
    wheel.rotation = 100
    wheel.spin_to(200, duration=100)
    wheel.advance(clock.tick(100))
    assert wheel.rotation == 200


def test_rotation_setter_rejects_infinity(hooks, clock):
    wheel = make_wheel(hooks, clock)
    with pytest.raises(WheelInputError, match="rotation must be a number"):
        wheel.rotation = -math.inf
    assert wheel.rotation == 0


def test_configure_updates_engine(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.configure(rotation_speed_max=50, rotation_resistance=-100)
    wheel.spin(1000)
    assert hooks.spins[0].rotation_speed == 50
    assert hooks.spins[0].rotation_resistance == -100


def test_configure_rotation_moves_wheel(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.configure(rotation=-100)
    assert wheel.rotation == -100
    assert wheel.get_current_index() == 1
    assert hooks.index_changes == [1]


def test_config_reports_live_rotation(hooks, clock):
    wheel = make_wheel(hooks, clock)
    wheel.rotation = 42
    assert wheel.config.rotation == 42


def test_rotation_setter_validates(clock):
    wheel = Wheel(clock=clock)
    with pytest.raises(WheelInputError, match="rotation must be a number"):
        wheel.rotation = "north"


def test_rejects_non_config(clock):
    with pytest.raises(WheelInputError, match="WheelConfig"):
        Wheel({"items": []}, clock=clock)


def test_hook_errors_propagate(clock):
    def explode(event):
        raise RuntimeError("boom")

    wheel = Wheel.from_dict({"items": [{}], "on_spin": explode}, clock=clock)
    with pytest.raises(RuntimeError, match="boom"):
        wheel.spin(10)


def test_config_copy_is_not_revalidated(hooks, clock, monkeypatch):
    wheel = make_wheel(hooks, clock)
    wheel.rotation = 15

    def fail(self):
        raise AssertionError("config was revalidated")

    monkeypatch.setattr(WheelConfig, "__post_init__", fail)

    config = wheel.config
    assert config.rotation == 15
    assert config.items == wheel.items
