"""
Easing functions for animations.

Provides mathematical easing functions for smooth transitions.
All functions take t (time) in range [0.0, 1.0]. Most return a value in
[0.0, 1.0]; anticipate/overshoot/back curves deliberately leave that range
(backing up before the start or running past the end).

Based on standard easing equations:
- Robert Penner's Easing Functions
- https://easings.net/
- The platform view interpolators (accelerate, anticipate, overshoot,
  fast-out-slow-in)
"""
import math
from typing import Callable, Dict
from core.animation.types import EasingCurve, Easing


# Default tension of the anticipate/overshoot interpolators.
DEFAULT_TENSION = 2.0


# Linear (no easing)
def linear(t: float) -> float:
    """Linear interpolation - no easing."""
    return t


# Quadratic easing
def quad_in(t: float) -> float:
    """Quadratic ease-in - accelerating from zero velocity."""
    return t * t


def quad_out(t: float) -> float:
    """Quadratic ease-out - decelerating to zero velocity."""
    return t * (2 - t)


def quad_in_out(t: float) -> float:
    """Quadratic ease-in-out - accelerating until halfway, then decelerating."""
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


# Cubic easing
def cubic_in(t: float) -> float:
    """Cubic ease-in - accelerating from zero velocity."""
    return t * t * t


def cubic_out(t: float) -> float:
    """Cubic ease-out - decelerating to zero velocity."""
    t -= 1
    return t * t * t + 1


def cubic_in_out(t: float) -> float:
    """Cubic ease-in-out - accelerating until halfway, then decelerating."""
    if t < 0.5:
        return 4 * t * t * t
    t -= 1
    return 1 + 4 * t * t * t


# Sine easing
def sine_in(t: float) -> float:
    """Sine ease-in - accelerating using sine curve."""
    return 1 - math.cos(t * math.pi / 2)


def sine_out(t: float) -> float:
    """Sine ease-out - decelerating using sine curve."""
    return math.sin(t * math.pi / 2)


def sine_in_out(t: float) -> float:
    """Sine ease-in-out - accelerating until halfway, then decelerating."""
    return -(math.cos(math.pi * t) - 1) / 2


# Back easing
def back_in(t: float) -> float:
    """Back ease-in - backing up slightly before accelerating."""
    c = 1.70158
    return t * t * ((c + 1) * t - c)


def back_out(t: float) -> float:
    """Back ease-out - overshooting slightly before settling."""
    c = 1.70158
    t -= 1
    return t * t * ((c + 1) * t + c) + 1


# Bounce easing
def bounce_out(t: float) -> float:
    """Bounce ease-out - bouncing motion."""
    n1 = 7.5625
    d1 = 2.75

    if t < 1 / d1:
        return n1 * t * t
    elif t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    elif t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    else:
        t -= 2.625 / d1
        return n1 * t * t + 0.984375


# View interpolators
def accelerate(t: float) -> float:
    """Accelerate - starts slowly and speeds up (factor 1.0)."""
    return t * t


def accelerate_decelerate(t: float) -> float:
    """Accelerate-decelerate - starts and ends slowly, fastest in the middle."""
    return math.cos((t + 1) * math.pi) / 2.0 + 0.5


def anticipate(tension: float = DEFAULT_TENSION) -> Callable[[float], float]:
    """
    Build an anticipate curve: moves backward first, then flings forward.

    Args:
        tension: Amount of anticipation. 0.0 degrades to a plain cubic ease-in.

    Returns:
        Easing function
    """
    def _anticipate(t: float) -> float:
        return t * t * ((tension + 1) * t - tension)
    _anticipate.__name__ = f"anticipate_{tension:g}"
    return _anticipate


def overshoot(tension: float = DEFAULT_TENSION) -> Callable[[float], float]:
    """
    Build an overshoot curve: flings forward past the end, then settles back.

    Args:
        tension: Amount of overshoot. 0.0 degrades to a plain cubic ease-out.

    Returns:
        Easing function
    """
    def _overshoot(t: float) -> float:
        t -= 1.0
        return t * t * ((tension + 1) * t + tension) + 1.0
    _overshoot.__name__ = f"overshoot_{tension:g}"
    return _overshoot


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> Callable[[float], float]:
    """
    Build a CSS-style cubic bezier timing curve through (0,0), (x1,y1), (x2,y2), (1,1).

    x(s) is inverted with a few Newton steps, falling back to bisection when
    the slope is too flat for Newton to be trusted.
    """
    cx = 3.0 * x1
    bx = 3.0 * (x2 - x1) - cx
    ax = 1.0 - cx - bx
    cy = 3.0 * y1
    by = 3.0 * (y2 - y1) - cy
    ay = 1.0 - cy - by

    def _sample_x(s: float) -> float:
        return ((ax * s + bx) * s + cx) * s

    def _sample_y(s: float) -> float:
        return ((ay * s + by) * s + cy) * s

    def _slope_x(s: float) -> float:
        return (3.0 * ax * s + 2.0 * bx) * s + cx

    def _solve_s(x: float) -> float:
        s = x
        for _ in range(8):
            err = _sample_x(s) - x
            if abs(err) < 1e-6:
                return s
            slope = _slope_x(s)
            if abs(slope) < 1e-6:
                break
            s -= err / slope

        lo, hi = 0.0, 1.0
        s = x
        while lo < hi:
            value = _sample_x(s)
            if abs(value - x) < 1e-6:
                return s
            if x > value:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2.0
            if hi - lo < 1e-7:
                break
        return s

    def _bezier(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return _sample_y(_solve_s(t))

    return _bezier


# Material "standard" curve used by the pulse effect.
fast_out_slow_in = cubic_bezier(0.4, 0.0, 0.2, 1.0)


# Easing function lookup table
EASING_FUNCTIONS: Dict[EasingCurve, Callable[[float], float]] = {
    EasingCurve.LINEAR: linear,

    EasingCurve.QUAD_IN: quad_in,
    EasingCurve.QUAD_OUT: quad_out,
    EasingCurve.QUAD_IN_OUT: quad_in_out,

    EasingCurve.CUBIC_IN: cubic_in,
    EasingCurve.CUBIC_OUT: cubic_out,
    EasingCurve.CUBIC_IN_OUT: cubic_in_out,

    EasingCurve.SINE_IN: sine_in,
    EasingCurve.SINE_OUT: sine_out,
    EasingCurve.SINE_IN_OUT: sine_in_out,

    EasingCurve.BACK_IN: back_in,
    EasingCurve.BACK_OUT: back_out,

    EasingCurve.BOUNCE_OUT: bounce_out,

    EasingCurve.ACCELERATE: accelerate,
    EasingCurve.ACCELERATE_DECELERATE: accelerate_decelerate,
    EasingCurve.ANTICIPATE: anticipate(),
    EasingCurve.OVERSHOOT: overshoot(),
    EasingCurve.FAST_OUT_SLOW_IN: fast_out_slow_in,
}


def get_easing_function(curve: Easing) -> Callable[[float], float]:
    """
    Get the easing function for a given curve.

    Args:
        curve: Easing curve enum, or an easing callable (returned as-is)

    Returns:
        Easing function that takes t in [0, 1]

    Raises:
        ValueError: If curve is not found
    """
    if callable(curve) and not isinstance(curve, EasingCurve):
        return curve

    if curve not in EASING_FUNCTIONS:
        raise ValueError(f"Unknown easing curve: {curve}")

    return EASING_FUNCTIONS[curve]


def ease(t: float, curve: Easing) -> float:
    """
    Apply easing function to a time value.

    Args:
        t: Time value in range [0.0, 1.0]
        curve: Easing curve to apply

    Returns:
        Eased progress (may leave [0.0, 1.0] for anticipate/overshoot curves)
    """
    # Clamp t to [0, 1]
    t = max(0.0, min(1.0, t))

    easing_fn = get_easing_function(curve)
    return easing_fn(t)
