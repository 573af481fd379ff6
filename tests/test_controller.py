"""Tests for mandelbrot_explorer/controller.py: view state transitions."""

import math

import pytest

from mandelbrot_explorer.compute import pixel_to_complex
from mandelbrot_explorer.config import ANCHOR_REFERENCE, ExplorerConfig
from mandelbrot_explorer.controller import ZoomPanController
from mandelbrot_explorer.events import (
    KEY_DECREASE_ITERATIONS, KEY_ESCAPE, KEY_INCREASE_ITERATIONS, KEY_RESET,
    KeyDownEvent, PointerMoveEvent, QuitEvent, WheelEvent,
)
from mandelbrot_explorer.view import ViewState


def make_controller(**overrides):
    return ZoomPanController(ExplorerConfig().with_overrides(**overrides).validate())


def key(code):
    return KeyDownEvent(code)


class TestStartup:

    def test_initial_view(self):
        c = make_controller()
        assert c.view == ViewState(zoom=1.0, center_x=400.0, center_y=300.0, max_iterations=500)
        assert c.running
        assert c.last_pointer == (0, 0)


class TestIterations:
    """Test the iteration budget transitions."""

    def test_increase(self):
        c = make_controller()
        c.handle_event(key(KEY_INCREASE_ITERATIONS))
        assert c.view.max_iterations == 600

    def test_decrease(self):
        c = make_controller()
        c.handle_event(key(KEY_DECREASE_ITERATIONS))
        assert c.view.max_iterations == 400

    def test_floor_clamp(self):
        c = make_controller(initial_max_iterations=100)
        c.handle_event(key(KEY_DECREASE_ITERATIONS))
        assert c.view.max_iterations == 100

    def test_floor_clamp_after_many_decreases(self):
        c = make_controller()
        c.handle_events([key(KEY_DECREASE_ITERATIONS)] * 20)
        assert c.view.max_iterations == 100

    def test_floor_with_off_step_budget(self):
        c = make_controller(initial_max_iterations=150)
        c.handle_event(key(KEY_DECREASE_ITERATIONS))
        assert c.view.max_iterations == 100

    def test_budget_change_keeps_geometry(self):
        c = make_controller()
        before = c.view
        c.handle_event(key(KEY_INCREASE_ITERATIONS))
        assert (c.view.zoom, c.view.center_x, c.view.center_y) == (
            before.zoom, before.center_x, before.center_y)


class TestReset:

    def test_reset_restores_defaults(self):
        c = make_controller()
        defaults = c.view
        c.handle_events([
            key(KEY_INCREASE_ITERATIONS),
            key(KEY_INCREASE_ITERATIONS),
            PointerMoveEvent(123, 45),
            WheelEvent(1),
            WheelEvent(1),
            PointerMoveEvent(700, 500),
            WheelEvent(-1),
        ])
        assert c.view != defaults
        c.handle_event(key(KEY_RESET))
        assert c.view == defaults

    def test_reset_keeps_pointer(self):
        c = make_controller()
        c.handle_events([PointerMoveEvent(10, 20), key(KEY_RESET)])
        assert c.last_pointer == (10, 20)


class TestZoom:
    """Test wheel zoom direction and anchoring."""

    def test_wheel_up_zooms_in(self):
        c = make_controller()
        c.handle_event(WheelEvent(1))
        assert c.view.zoom == pytest.approx(1.0 / 1.1)

    def test_wheel_down_zooms_out(self):
        c = make_controller()
        c.handle_event(WheelEvent(-1))
        assert c.view.zoom == pytest.approx(1.1)

    def test_wheel_zero_ignored(self):
        c = make_controller()
        before = c.view
        c.handle_event(WheelEvent(0))
        assert c.view == before

    def test_in_then_out_restores_zoom(self):
        c = make_controller()
        c.handle_events([PointerMoveEvent(250, 100), WheelEvent(1), WheelEvent(-1)])
        assert c.view.zoom == pytest.approx(1.0)
        assert c.view.center_x == pytest.approx(400.0)
        assert c.view.center_y == pytest.approx(300.0)

    @pytest.mark.parametrize("pointer", [(0, 0), (400, 300), (123, 456), (799, 1)])
    def test_exact_anchor_keeps_point_fixed(self, pointer):
        c = make_controller()
        c.handle_event(PointerMoveEvent(*pointer))
        before = pixel_to_complex(pointer[0], pointer[1], 800, 600, c.view)
        for direction in (1, 1, 1, -1, 1):
            c.handle_event(WheelEvent(direction))
            after = pixel_to_complex(pointer[0], pointer[1], 800, 600, c.view)
            assert after.re == pytest.approx(before.re, abs=1e-9)
            assert after.im == pytest.approx(before.im, abs=1e-9)

    def test_anchor_uses_last_pointer_position(self):
        c = make_controller()
        c.handle_events([PointerMoveEvent(100, 100), PointerMoveEvent(600, 400)])
        before = pixel_to_complex(600, 400, 800, 600, c.view)
        c.handle_event(WheelEvent(1))
        after = pixel_to_complex(600, 400, 800, 600, c.view)
        assert tuple(after) == pytest.approx(tuple(before))

    def test_reference_anchor_formula(self):
        c = make_controller(anchor_mode=ANCHOR_REFERENCE)
        c.handle_events([PointerMoveEvent(600, 150), WheelEvent(1)])
        factor = 1.0 / 1.1
        zoom = factor
        norm_x = (600 - 400) / 400
        norm_y = (150 - 300) / 300
        assert c.view.zoom == pytest.approx(zoom)
        assert c.view.center_x == pytest.approx(400 + norm_x * 800 * (1 - factor) / zoom)
        assert c.view.center_y == pytest.approx(300 + norm_y * 600 * (1 - factor) / zoom)

    def test_reference_anchor_at_canvas_center_keeps_center(self):
        c = make_controller(anchor_mode=ANCHOR_REFERENCE)
        c.handle_events([PointerMoveEvent(400, 300), WheelEvent(-1)])
        assert c.view.center_x == pytest.approx(400.0)
        assert c.view.center_y == pytest.approx(300.0)

    @pytest.mark.parametrize("anchor_mode", ["exact", ANCHOR_REFERENCE])
    def test_zoom_in_past_float_range_stays_finite(self, anchor_mode):
        c = make_controller(zoom_speed=5.0, anchor_mode=anchor_mode)
        c.handle_event(PointerMoveEvent(100, 100))
        for _ in range(1000):
            c.handle_event(WheelEvent(1))
            assert 0 < c.view.zoom < math.inf
            assert math.isfinite(c.view.center_x)
            assert math.isfinite(c.view.center_y)

    @pytest.mark.parametrize("anchor_mode", ["exact", ANCHOR_REFERENCE])
    def test_zoom_out_past_float_range_stays_finite(self, anchor_mode):
        c = make_controller(zoom_speed=5.0, anchor_mode=anchor_mode)
        c.handle_event(PointerMoveEvent(700, 20))
        for _ in range(1000):
            c.handle_event(WheelEvent(-1))
            assert 0 < c.view.zoom < math.inf
            assert math.isfinite(c.view.center_x)
            assert math.isfinite(c.view.center_y)

    def test_zoom_limit_is_a_no_op(self):
        c = make_controller(zoom_speed=5.0)
        c.handle_events([PointerMoveEvent(100, 100)] + [WheelEvent(1)] * 1000)
        limit = c.view
        c.handle_event(WheelEvent(1))
        assert c.view == limit
        c.handle_event(WheelEvent(-1))
        assert c.view.zoom > limit.zoom


class TestQuit:

    def test_escape_stops(self):
        c = make_controller()
        assert c.handle_event(key(KEY_ESCAPE)) is False
        assert not c.running

    def test_quit_event_stops(self):
        c = make_controller()
        assert c.handle_event(QuitEvent()) is False

    def test_events_after_quit_not_applied(self):
        c = make_controller()
        running = c.handle_events([QuitEvent(), key(KEY_INCREASE_ITERATIONS)])
        assert running is False
        assert c.view.max_iterations == 500

    def test_quit_is_terminal(self):
        c = make_controller()
        c.handle_event(QuitEvent())
        c.handle_event(key(KEY_RESET))
        assert not c.running


class TestIgnoredInput:

    def test_unknown_key_ignored(self):
        c = make_controller()
        before = c.view
        assert c.handle_event(KeyDownEvent(999)) is True
        assert c.view == before

    def test_foreign_object_ignored(self):
        c = make_controller()
        before = c.view
        assert c.handle_event(object()) is True
        assert c.view == before


class TestInvariants:

    def test_invariants_after_mixed_sequence(self):
        c = make_controller(iteration_step=50, initial_max_iterations=50)
        events = [
            key(KEY_DECREASE_ITERATIONS), WheelEvent(1), PointerMoveEvent(5, 5),
            WheelEvent(-1), key(KEY_INCREASE_ITERATIONS), key(KEY_DECREASE_ITERATIONS),
            key(KEY_DECREASE_ITERATIONS), WheelEvent(1), key(KEY_RESET),
            key(KEY_DECREASE_ITERATIONS),
        ]
        for event in events:
            c.handle_event(event)
            assert c.view.zoom > 0
            assert c.view.max_iterations >= 50
