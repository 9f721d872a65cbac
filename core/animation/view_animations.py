"""
Ready-made view effects.

Each effect is a thin composition of property transitions run through the
AnimationManager. Durations here are in milliseconds; the manager works in
seconds. Every effect returns the handle of what it started (or None when it
started nothing); only infinite_pulse really needs it, for cancelling.
"""
from typing import Callable, Optional
from core.animation.animator import AnimationManager
from core.animation.easing import anticipate, overshoot
from core.animation.types import (
    INFINITE, Checkpoint, EasingCurve, Easing, GroupMode, RepeatMode,
    PropertyAnimationConfig, AnimationGroupConfig,
)
from core.logging.logger import get_logger
from core.logging.tags import TAG_ANIM
from core.view.view import AnimatedView
from utils.math_utils import distance

logger = get_logger(__name__)

Callback = Optional[Callable[[], None]]

DISAPPEAR_DURATION_MS = 350
DISAPPEAR_DELAY_MS = 50
APPEAR_DURATION_MS = 350
FLICKER_PERIOD_MS = 100
PULSE_SCALE = 1.1


def _seconds(milliseconds: float) -> float:
    return milliseconds / 1000.0


def _transition(view: AnimatedView, property_name: str, start_value: Optional[float],
                end_value: float, duration_ms: float, easing: Easing,
                **kwargs) -> PropertyAnimationConfig:
    return PropertyAnimationConfig(
        duration=_seconds(duration_ms),
        easing=easing,
        target=view,
        property_name=property_name,
        start_value=start_value,
        end_value=end_value,
        **kwargs
    )


class ViewAnimator:
    """View effects bound to one AnimationManager.

    All callbacks are optional and fire on the manager's (UI) thread.
    """

    def __init__(self, manager: AnimationManager):
        self._manager = manager

    @property
    def manager(self) -> AnimationManager:
        return self._manager

    @staticmethod
    def _missing(view: Optional[AnimatedView], effect: str) -> bool:
        if view is None:
            logger.debug("%s %s skipped: no view", TAG_ANIM, effect)
            return True
        return False

    def fade_in(self, view: AnimatedView, duration: int, on_end: Callback = None) -> Optional[str]:
        """Fade the view to fully opaque from its current alpha.

        To use in conjunction with fade_out.
        """
        if self._missing(view, "fade_in"):
            return None
        return self._manager.start_config(
            _transition(view, "alpha", None, 1.0, duration, EasingCurve.LINEAR, on_complete=on_end)
        )

    def fade_out(self, view: AnimatedView, duration: int, on_end: Callback = None) -> Optional[str]:
        """Make the view visible, then fade its alpha from the current value.

        The alpha target is 1.0, the same as fade_in.
        """
        if self._missing(view, "fade_out"):
            return None
        view.visible = True
        return self._manager.start_config(
            _transition(view, "alpha", None, 1.0, duration, EasingCurve.LINEAR, on_complete=on_end)
        )

    def disappear(self, view: AnimatedView, remove_from_parent: bool = False,
                  on_end: Callback = None) -> Optional[str]:
        """
        Hide the view with a shrinking animation.

        Args:
            view: View to hide; it is made invisible when the shrink ends
            remove_from_parent: Also detach the view from its container at the end
            on_end: Called after the view is hidden (and detached)
        """
        if self._missing(view, "disappear"):
            return None

        def _finished():
            view.visible = False
            if remove_from_parent:
                view.detach()
            if on_end:
                on_end()

        return self._manager.start_config(
            _transition(view, "scale_x", 1.0, 0.0, DISAPPEAR_DURATION_MS, anticipate(2.0),
                        delay=_seconds(DISAPPEAR_DELAY_MS), on_complete=_finished)
        )

    def appear(self, view: AnimatedView, on_end: Callback = None) -> Optional[str]:
        """Show the view with an enlarging animation. To use with disappear."""
        if self._missing(view, "appear"):
            return None
        view.visible = True
        return self._manager.start_config(
            _transition(view, "scale_x", 0.0, 1.0, APPEAR_DURATION_MS, overshoot(2.0),
                        on_complete=on_end)
        )

    def flip_ascend_disappear(self, view: AnimatedView, duration: int = 1500,
                              ascend_pixels: int = 100, on_end: Callback = None) -> Optional[str]:
        """
        Flicker the view while it rises, then make it disappear.

        Args:
            view: View to animate
            duration: Length of the rise in milliseconds; nothing happens if <= 0
            ascend_pixels: How far the view rises before disappearing
            on_end: Called once the trailing disappear effect finishes
        """
        if self._missing(view, "flip_ascend_disappear") or duration <= 0:
            return None

        flicker = _transition(view, "scale_x", 1.0, 0.0, FLICKER_PERIOD_MS, EasingCurve.ACCELERATE,
                              repeat_count=int(duration // FLICKER_PERIOD_MS),
                              repeat_mode=RepeatMode.REVERSE)
        start_y = view.translation_y
        ascend = _transition(view, "translation_y", start_y, start_y - ascend_pixels, duration,
                             EasingCurve.ACCELERATE_DECELERATE)

        return self._manager.start_group(
            [flicker, ascend],
            mode=GroupMode.PARALLEL,
            on_complete=lambda: self.disappear(view, on_end=on_end),
        )

    def flip(self, view: AnimatedView, duration: int = 500,
             on_middle: Callback = None, on_end: Callback = None) -> Optional[str]:
        """
        Flip the view once around its vertical axis.

        Args:
            view: View to flip
            duration: Total duration in milliseconds, split evenly between halves
            on_middle: Called when the view is edge-on, before the second half
            on_end: Called when the flip ends
        """
        if self._missing(view, "flip"):
            return None

        half = duration // 2
        return self._manager.start_group(
            [
                _transition(view, "scale_x", 1.0, 0.0, half, anticipate()),
                _transition(view, "scale_x", 0.0, 1.0, half, overshoot()),
            ],
            mode=GroupMode.SEQUENTIAL,
            checkpoints=self._middle(on_middle),
            on_complete=on_end,
        )

    def infinite_pulse(self, view: AnimatedView, pulse_duration: int = 500) -> Optional[str]:
        """
        Pulse the view between its current scale and 1.1x, forever.

        Returns:
            Handle to pass to AnimationManager.cancel() to stop the pulse
        """
        if self._missing(view, "infinite_pulse"):
            return None

        pulse = dict(repeat_count=INFINITE, repeat_mode=RepeatMode.REVERSE)
        return self._manager.start_group(
            [
                _transition(view, "scale_x", None, PULSE_SCALE, pulse_duration,
                            EasingCurve.FAST_OUT_SLOW_IN, **pulse),
                _transition(view, "scale_y", None, PULSE_SCALE, pulse_duration,
                            EasingCurve.FAST_OUT_SLOW_IN, **pulse),
            ],
            mode=GroupMode.PARALLEL,
        )

    def rotate_on_y(self, view: AnimatedView, rotation: float, duration: int = 500,
                    on_middle: Callback = None, on_end: Callback = None) -> Optional[str]:
        """
        Rotate the view around its vertical axis in two stages.

        The first stage runs for the full duration and the second for half of
        it.

        Args:
            view: View to rotate
            rotation: Final rotation_y in degrees
            duration: Duration of the first stage in milliseconds
            on_middle: Called at rotation / 2, before the second stage
            on_end: Called when the rotation ends
        """
        if self._missing(view, "rotate_on_y"):
            return None

        return self._manager.start_group(
            [
                _transition(view, "rotation_y", None, rotation / 2, duration, anticipate()),
                _transition(view, "rotation_y", rotation / 2, rotation, duration // 2, overshoot()),
            ],
            mode=GroupMode.SEQUENTIAL,
            checkpoints=self._middle(on_middle),
            on_complete=on_end,
        )

    def compress_and_expand(self, view: AnimatedView, duration: int = 1000,
                            on_middle: Callback = None, on_end: Callback = None) -> Optional[str]:
        """
        Squash the view vertically (stretching it horizontally), then restore it.

        Args:
            view: View to animate
            duration: Total duration in milliseconds, split evenly between stages
            on_middle: Called when fully compressed
            on_end: Called when fully expanded again
        """
        if self._missing(view, "compress_and_expand"):
            return None

        half = duration // 2
        compress = AnimationGroupConfig(animations=(
            _transition(view, "scale_x", 1.0, 1.3, half, anticipate(4.0)),
            _transition(view, "scale_y", 1.0, 0.3, half, anticipate(4.0)),
        ))
        expand = AnimationGroupConfig(animations=(
            _transition(view, "scale_x", 1.3, 1.0, half, overshoot()),
            _transition(view, "scale_y", 0.3, 1.0, half, overshoot()),
        ))
        return self._manager.start_group(
            [compress, expand],
            mode=GroupMode.SEQUENTIAL,
            checkpoints=self._middle(on_middle),
            on_complete=on_end,
        )

    def bounce(self, view: AnimatedView, duration: int = 1000, on_end: Callback = None) -> Optional[str]:
        """Pop the view to 1.5x and let it snap back to its normal size."""
        if self._missing(view, "bounce"):
            return None

        half = duration // 2
        return self._manager.start_group(
            [
                _transition(view, "scale_x", 1.5, 1.0, half, anticipate()),
                _transition(view, "scale_y", 1.5, 1.0, half, anticipate()),
            ],
            mode=GroupMode.PARALLEL,
            on_complete=on_end,
        )

    @staticmethod
    def move_duration(view: AnimatedView, x: float, y: float, speed: float = 1.0) -> int:
        """Milliseconds needed to travel to (x, y) at ``speed`` pixels per millisecond."""
        if speed <= 0:
            logger.warning("%s move_to_position speed must be positive (got %r); moving instantly",
                           TAG_ANIM, speed)
            return 0
        return int(distance(x, y, view.x, view.y) / speed)

    def move_to_position(self, view: AnimatedView, x: float, y: float, speed: float = 1.0,
                         on_end: Callback = None) -> Optional[str]:
        """
        Slide the view to (x, y).

        Args:
            view: View to move
            x: Final x position
            y: Final y position
            speed: Higher values mean a faster (shorter) move
            on_end: Called when the view arrives
        """
        if self._missing(view, "move_to_position"):
            return None

        duration = self.move_duration(view, x, y, speed)
        return self._manager.start_group(
            [
                _transition(view, "x", view.x, x, duration, EasingCurve.ACCELERATE_DECELERATE),
                _transition(view, "y", view.y, y, duration, EasingCurve.ACCELERATE_DECELERATE),
            ],
            mode=GroupMode.PARALLEL,
            on_complete=on_end,
        )

    @staticmethod
    def _middle(on_middle: Callback):
        if on_middle is None:
            return ()
        return ((Checkpoint.stage_complete(0), on_middle),)
