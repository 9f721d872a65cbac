"""Tests for easing curves."""
import math
import pytest
from core.animation import EasingCurve, ease, get_easing_function, anticipate, overshoot, cubic_bezier
from core.animation.easing import accelerate_decelerate, fast_out_slow_in


@pytest.mark.parametrize("curve", list(EasingCurve))
def test_curves_start_at_zero_and_end_at_one(curve):
    assert ease(0.0, curve) == pytest.approx(0.0, abs=1e-6)
    assert ease(1.0, curve) == pytest.approx(1.0, abs=1e-6)


def test_ease_clamps_time():
    assert ease(-0.5, EasingCurve.LINEAR) == 0.0
    assert ease(1.5, EasingCurve.LINEAR) == 1.0


def test_ease_accepts_callables():
    assert ease(0.5, lambda t: t ** 3) == pytest.approx(0.125)
    fn = anticipate(1.0)
    assert get_easing_function(fn) is fn


def test_unknown_curve_raises():
    with pytest.raises(ValueError):
        get_easing_function("not-a-curve")


def test_anticipate_backs_up_before_moving_forward():
    curve = anticipate(2.0)
    # t^2 * ((T + 1) * t - T)
    assert curve(0.5) == pytest.approx(-0.125)
    assert curve(1.0) == pytest.approx(1.0)
    assert min(curve(i / 100) for i in range(101)) < 0.0


def test_overshoot_passes_the_end_before_settling():
    curve = overshoot(2.0)
    assert curve(0.0) == pytest.approx(0.0)
    assert curve(0.8) == pytest.approx(1.056)
    assert curve(1.0) == pytest.approx(1.0)


def test_tension_zero_degrades_to_cubic():
    assert anticipate(0.0)(0.5) == pytest.approx(0.125)
    assert overshoot(0.0)(0.5) == pytest.approx(0.875)


def test_accelerate_decelerate_is_symmetric():
    assert accelerate_decelerate(0.5) == pytest.approx(0.5)
    assert accelerate_decelerate(0.25) == pytest.approx(1.0 - accelerate_decelerate(0.75))
    assert accelerate_decelerate(0.25) == pytest.approx(math.cos(1.25 * math.pi) / 2 + 0.5)


def test_linear_bezier_is_identity():
    curve = cubic_bezier(0.0, 0.0, 1.0, 1.0)
    for i in range(11):
        assert curve(i / 10) == pytest.approx(i / 10, abs=1e-4)


def test_fast_out_slow_in_is_monotonic_and_front_loaded():
    samples = [fast_out_slow_in(i / 50) for i in range(51)]
    assert samples == sorted(samples)
    # Most of the travel happens in the first half
    assert fast_out_slow_in(0.5) > 0.7
