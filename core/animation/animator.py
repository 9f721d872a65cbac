"""
Centralized animation framework.

Provides the AnimationManager that owns every running transition and group.
Nothing outside this package should drive view properties with its own
timer.

FRAME PACING: the manager's QTimer measures wall-clock deltas and feeds them
to advance(). Tests (and any caller with its own clock) construct the manager
with ``timer_driven=False`` and call advance() with simulated deltas instead.
"""
import math
import time
import uuid
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union, TYPE_CHECKING
from PySide6.QtCore import QObject, QTimer, Signal, Qt
from core.animation.types import (
    INFINITE, AnimationState, EasingCurve, Easing, GroupMode, RepeatMode, Checkpoint,
    AnimationConfig, PropertyAnimationConfig, CustomAnimationConfig, AnimationGroupConfig,
)
from core.animation.easing import ease
from core.logging.logger import get_logger, is_perf_metrics_enabled, is_verbose_logging
from core.logging.tags import TAG_ANIM, TAG_FALLBACK, TAG_PERF

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from core.animation.group import AnimationGroup
    from core.settings.settings_manager import SettingsManager

logger = get_logger(__name__)


def _accessor_suffix(property_name: str) -> str:
    """'scale_x' -> 'ScaleX', 'opacity' -> 'Opacity'."""
    return "".join(part[:1].upper() + part[1:] for part in property_name.split("_") if part)


def read_property(target: Any, property_name: str) -> Any:
    """Read a named property, accepting plain attributes or Qt-style getters."""
    value = getattr(target, property_name)
    if callable(value):
        value = value()
    return value


def write_property(target: Any, property_name: str, value: Any) -> None:
    """Write a named property via a Qt-style setter or plain attribute."""
    setter = getattr(target, f"set{_accessor_suffix(property_name)}", None)
    if callable(setter):
        # Use setter method (e.g., setOpacity)
        setter(value)
    elif hasattr(target, property_name):
        # Set attribute directly
        setattr(target, property_name, value)
    else:
        logger.warning(f"Property {property_name} not found on {target}")


class Animation(QObject):
    """
    Base animation class.

    Handles the timing, repeat and easing logic for a single animation.
    Completion is reported at most once; a cancelled animation never
    reports completion.
    """

    # Signals
    started = Signal()
    progress_changed = Signal(float)  # eased progress
    repeated = Signal(int)  # iteration index
    completed = Signal()
    cancelled = Signal()

    def __init__(self, animation_id: str, duration: float, easing: Easing,
                 delay: float = 0.0, repeat_count: int = 0,
                 repeat_mode: RepeatMode = RepeatMode.RESTART):
        """
        Initialize animation.

        Args:
            animation_id: Unique ID for this animation
            duration: Duration of one iteration in seconds
            easing: Easing curve or easing callable
            delay: Delay before starting (seconds)
            repeat_count: Extra iterations after the first (INFINITE = forever)
            repeat_mode: Restart or reverse between iterations
        """
        super().__init__()

        self.animation_id = animation_id
        self.duration = duration
        self.easing = easing
        self.delay = max(0.0, delay)
        self.repeat_count = repeat_count
        self.repeat_mode = repeat_mode

        self.state = AnimationState.IDLE
        self.elapsed = 0.0
        self.delay_elapsed = 0.0
        self.iteration = 0
        # Time that ran past the final frame; sequential groups hand it on.
        self.overflow = 0.0
        self.start_time: Optional[float] = None
        self._begun = False

    @property
    def is_infinite(self) -> bool:
        return self.repeat_count == INFINITE

    @property
    def total_duration(self) -> float:
        """Delay plus every iteration, or inf for endless animations."""
        if self.is_infinite:
            return math.inf
        return self.delay + max(0.0, self.duration) * (max(0, self.repeat_count) + 1)

    def start(self) -> None:
        """Start the animation. An animation can only be started once."""
        if self.state != AnimationState.IDLE:
            logger.warning(f"Animation {self.animation_id} already started ({self.state.value})")
            return

        self.state = AnimationState.RUNNING
        self.start_time = time.time()
        self.elapsed = 0.0
        self.delay_elapsed = 0.0

        self.started.emit()
        logger.debug(f"Animation started: {self.animation_id} (duration={self.duration}s)")

    def pause(self) -> None:
        """Pause the animation."""
        if self.state == AnimationState.RUNNING:
            self.state = AnimationState.PAUSED
            logger.debug(f"Animation paused: {self.animation_id}")

    def resume(self) -> None:
        """Resume the animation."""
        if self.state == AnimationState.PAUSED:
            self.state = AnimationState.RUNNING
            logger.debug(f"Animation resumed: {self.animation_id}")

    def cancel(self) -> None:
        """Cancel the animation."""
        if self.state in (AnimationState.IDLE, AnimationState.RUNNING, AnimationState.PAUSED):
            self.state = AnimationState.CANCELLED
            self.cancelled.emit()
            logger.debug(f"Animation cancelled: {self.animation_id}")

    def _on_begin(self) -> None:
        """Hook run once, on the first frame after the delay has elapsed."""

    def update(self, delta_time: float) -> bool:
        """
        Update animation state.

        Args:
            delta_time: Time since last update in seconds

        Returns:
            True if animation is still running, False if complete/cancelled
        """
        if self.state != AnimationState.RUNNING:
            return False

        # Handle delay
        if self.delay_elapsed < self.delay:
            self.delay_elapsed += delta_time
            if self.delay_elapsed < self.delay:
                return True  # Still in delay period
            delta_time = self.delay_elapsed - self.delay

        if not self._begun:
            self._begun = True
            self._on_begin()

        self.elapsed += max(0.0, delta_time)

        finished = False
        if self.duration <= 0:
            # Nothing to interpolate. Endless animations park on the end value.
            fraction = 1.0
            finished = not self.is_infinite
            if finished:
                self.overflow = self.elapsed
        else:
            if self.elapsed >= self.duration:
                passes = int(self.elapsed // self.duration)
                if not self.is_infinite:
                    passes = min(passes, max(0, self.repeat_count) - self.iteration)
                if passes > 0:
                    self.iteration += passes
                    self.elapsed -= passes * self.duration
                    self.repeated.emit(self.iteration)
                    if self.state != AnimationState.RUNNING:
                        return False

            if self.elapsed >= self.duration:
                fraction = 1.0
                finished = True
                self.overflow = self.elapsed - self.duration
                self.elapsed = self.duration
            else:
                fraction = self.elapsed / self.duration

        if self.repeat_mode == RepeatMode.REVERSE and self.iteration % 2 == 1:
            fraction = 1.0 - fraction

        # Apply easing
        eased_progress = ease(fraction, self.easing)

        # Emit progress - PERF: measure signal emission time
        _emit_start = time.time()
        self.progress_changed.emit(eased_progress)
        _emit_elapsed = (time.time() - _emit_start) * 1000.0
        if _emit_elapsed > 30.0 and is_perf_metrics_enabled():
            logger.warning("%s %s Slow progress_changed.emit: %.2fms (anim=%s)",
                           TAG_PERF, TAG_ANIM, _emit_elapsed, self.animation_id[:8])

        if self.state != AnimationState.RUNNING:
            return False

        # Check if complete
        if finished:
            self.state = AnimationState.COMPLETE
            self.completed.emit()
            logger.debug(f"Animation completed: {self.animation_id}")
            return False

        return True

    def get_progress(self) -> float:
        """Get raw progress of the current iteration (0.0 to 1.0)."""
        if self.duration <= 0:
            return 1.0 if self._begun else 0.0
        return min(1.0, self.elapsed / self.duration)


class PropertyAnimator(Animation):
    """Animates a named scalar property on a target object."""

    def __init__(self, animation_id: str, config: PropertyAnimationConfig):
        """
        Initialize property animator.

        Args:
            animation_id: Unique ID
            config: Property animation configuration
        """
        super().__init__(animation_id, config.duration, config.easing, config.delay,
                         config.repeat_count, config.repeat_mode)

        self.target = config.target
        self.property_name = config.property_name
        self.start_value = config.start_value
        self.end_value = config.end_value

        self.on_start_callback = config.on_start
        self.on_update_callback = config.on_update
        self.on_complete_callback = config.on_complete
        self.on_cancel_callback = config.on_cancel

        # Connect signals to callbacks
        if self.on_start_callback:
            self.started.connect(self.on_start_callback)
        if self.on_complete_callback:
            self.completed.connect(self.on_complete_callback)
        if self.on_cancel_callback:
            self.cancelled.connect(self.on_cancel_callback)

        # Connect progress to property update
        self.progress_changed.connect(self._update_property)

    def _on_begin(self) -> None:
        """Resolve an implicit start value from the target's current state."""
        if self.start_value is None:
            try:
                self.start_value = read_property(self.target, self.property_name)
            except AttributeError:
                logger.warning(f"{TAG_FALLBACK} Property {self.property_name} not found on "
                               f"{self.target}; animating from end value")
                self.start_value = self.end_value
            if is_verbose_logging():
                logger.debug(f"{TAG_ANIM} {self.animation_id[:8]} {self.property_name} "
                             f"starts from current value {self.start_value!r}")

    def _update_property(self, progress: float) -> None:
        """Update the target property based on progress."""
        try:
            # Interpolate between start and end values
            if isinstance(self.start_value, (int, float)) and isinstance(self.end_value, (int, float)) \
                    and not isinstance(self.end_value, bool):
                # Numeric interpolation
                value = self.start_value + (self.end_value - self.start_value) * progress
            else:
                # For non-numeric values, just set end value when progress >= 1.0
                value = self.end_value if progress >= 1.0 else self.start_value

            write_property(self.target, self.property_name, value)
        except Exception as e:
            logger.error(f"Error updating property {self.property_name}: {e}")

        # Call update callback if provided
        if self.on_update_callback:
            self.on_update_callback(progress)


class CustomAnimator(Animation):
    """Custom animation with user-provided update callback."""

    def __init__(self, animation_id: str, config: CustomAnimationConfig):
        """
        Initialize custom animator.

        Args:
            animation_id: Unique ID
            config: Custom animation configuration
        """
        super().__init__(animation_id, config.duration, config.easing, config.delay,
                         config.repeat_count, config.repeat_mode)

        self.update_callback = config.update_callback
        self.on_start_callback = config.on_start
        self.on_complete_callback = config.on_complete
        self.on_cancel_callback = config.on_cancel

        # Connect signals to callbacks
        if self.on_start_callback:
            self.started.connect(self.on_start_callback)
        if self.on_complete_callback:
            self.completed.connect(self.on_complete_callback)
        if self.on_cancel_callback:
            self.cancelled.connect(self.on_cancel_callback)

        # Connect progress to custom update
        self.progress_changed.connect(self.update_callback)


Runnable = Union[Animation, "AnimationGroup"]


class AnimationManager(QObject):
    """
    Centralized animation manager.

    Owns every running transition and group, ticks them from one precise
    QTimer, and forgets them once they complete or are cancelled.
    """

    # Signals for global animation events
    animation_started = Signal(str)  # animation_id
    animation_completed = Signal(str)  # animation_id
    animation_cancelled = Signal(str)  # animation_id

    def __init__(self, fps: int = 60, max_frame_dt: float = 0.5, timer_driven: bool = True):
        """
        Initialize animation manager.

        Args:
            fps: Target frames per second for updates
            max_frame_dt: Largest wall-clock delta fed to animations per tick
            timer_driven: When False the QTimer never runs and the owner
                drives time through advance()
        """
        super().__init__()

        self.fps = fps
        self.frame_time = 1.0 / fps
        self.max_frame_dt = max_frame_dt
        self.timer_driven = timer_driven

        self._animations: Dict[str, Animation] = {}
        self._animation_groups: Dict[str, "AnimationGroup"] = {}
        self._last_update_time: Optional[float] = None

        # Incremented once per advance(); groups use it to tell which child
        # completions belong to the same frame.
        self.tick_count = 0

        # Lightweight profiling state for `[PERF] [ANIM]` metrics. These are
        # reset each time the manager's timer starts and logged once when it
        # stops.
        self._profile_start_ts: Optional[float] = None
        self._profile_last_ts: Optional[float] = None
        self._profile_frame_count: int = 0
        self._profile_min_dt: float = 0.0
        self._profile_max_dt: float = 0.0

        # Update timer
        self._timer = QTimer()
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(int(self.frame_time * 1000))  # Convert to milliseconds
        self._timer.timeout.connect(self._update_all)

        logger.info(f"AnimationManager initialized (fps={fps}, timer_driven={timer_driven})")

    @classmethod
    def from_settings(cls, settings: "SettingsManager", **kwargs) -> "AnimationManager":
        """Build a manager from the ``animation.*`` settings keys.

        Later changes to ``animation.fps`` retune the running manager.
        """
        fps = settings.get_int('animation.fps', 60)
        max_frame_dt = settings.get_float('animation.max_frame_dt', 0.5)
        manager = cls(fps=fps, max_frame_dt=max_frame_dt, **kwargs)
        settings.on_changed('animation.fps', lambda new, old: manager.set_target_fps(new))
        return manager

    def set_target_fps(self, fps: int) -> None:
        """Update target FPS and reconfigure the timer interval safely."""
        try:
            new_fps = max(10, min(240, int(fps)))
        except (TypeError, ValueError):
            new_fps = 60
        if new_fps == self.fps:
            return
        self.fps = new_fps
        self.frame_time = 1.0 / self.fps
        was_active = self._timer.isActive()
        if was_active:
            self._timer.stop()
        self._timer.setInterval(int(self.frame_time * 1000))
        if was_active:
            self._last_update_time = time.time()
            self._timer.start()
        logger.info(f"AnimationManager target FPS set to {self.fps}")

    def start(self) -> None:
        """Start the animation manager's update loop."""
        if not self.timer_driven:
            return
        if not self._timer.isActive():
            now = time.time()
            self._last_update_time = now
            # Reset profiling for this run so `[PERF] [ANIM]` metrics reflect a
            # single continuous active period.
            self._profile_start_ts = now
            self._profile_last_ts = None
            self._profile_frame_count = 0
            self._profile_min_dt = 0.0
            self._profile_max_dt = 0.0

            self._timer.start()
            logger.debug("AnimationManager started")

    def stop(self) -> None:
        """Stop the animation manager's update loop."""
        if self._timer.isActive():
            self._timer.stop()
            self._log_profile_summary()
            logger.debug("AnimationManager stopped")

    def cleanup(self) -> None:
        """Clean up animation manager resources."""
        logger.debug("Cleaning up AnimationManager")

        self.stop()
        self.cancel_all()

        try:
            self._timer.deleteLater()
        except RuntimeError:
            pass

        logger.info("AnimationManager cleanup complete")

    # ------------------------------------------------------------------
    # Starting work
    # ------------------------------------------------------------------

    def start_transition(self, target: Any, property_name: str, end_value: Any,
                         duration: float, easing: Easing = EasingCurve.LINEAR,
                         delay: float = 0.0, repeat_count: int = 0,
                         repeat_mode: RepeatMode = RepeatMode.RESTART,
                         start_value: Optional[float] = None,
                         on_complete: Optional[Callable[[], None]] = None,
                         on_cancel: Optional[Callable[[], None]] = None) -> str:
        """
        Transition one property of ``target`` to ``end_value``.

        Args:
            target: Object owning the property
            property_name: Property name (e.g., 'scale_x')
            end_value: Value reached at the end of each forward pass
            duration: Duration of one pass in seconds
            easing: Easing curve or callable
            delay: Delay before the first pass (seconds)
            repeat_count: Extra passes (INFINITE = forever)
            repeat_mode: Restart or reverse between passes
            start_value: Starting value; None reads the property once the delay is over
            on_complete: Called once after the last pass
            on_cancel: Called if the transition is cancelled

        Returns:
            Animation ID (the handle accepted by cancel())
        """
        return self.start_config(PropertyAnimationConfig(
            duration=duration,
            easing=easing,
            delay=delay,
            repeat_count=repeat_count,
            repeat_mode=repeat_mode,
            on_complete=on_complete,
            on_cancel=on_cancel,
            target=target,
            property_name=property_name,
            start_value=start_value,
            end_value=end_value,
        ))

    def start_config(self, config: AnimationConfig) -> str:
        """Start a prebuilt property, custom or group config and return its ID."""
        animation_id, _ = self._spawn(config)
        return animation_id

    def animate_property(self, target: Any, property_name: str, start_value: Optional[float],
                         end_value: Any, duration: float,
                         easing: Easing = EasingCurve.LINEAR,
                         on_start: Optional[Callable] = None,
                         on_update: Optional[Callable] = None,
                         on_complete: Optional[Callable] = None,
                         on_cancel: Optional[Callable] = None,
                         delay: float = 0.0,
                         repeat_count: int = 0,
                         repeat_mode: RepeatMode = RepeatMode.RESTART) -> str:
        """
        Animate a property on a target object.

        Args:
            target: Object to animate
            property_name: Property name (e.g., 'alpha')
            start_value: Starting value, or None to read it when the animation begins
            end_value: Ending value
            duration: Duration in seconds
            easing: Easing curve
            on_start: Callback when animation starts
            on_update: Callback on each update (receives eased progress)
            on_complete: Callback when animation completes
            on_cancel: Callback if the animation is cancelled
            delay: Delay before starting (seconds)
            repeat_count: Extra iterations (INFINITE = forever)
            repeat_mode: Restart or reverse between iterations

        Returns:
            Animation ID
        """
        config = PropertyAnimationConfig(
            duration=duration,
            easing=easing,
            on_start=on_start,
            on_update=on_update,
            on_complete=on_complete,
            on_cancel=on_cancel,
            delay=delay,
            repeat_count=repeat_count,
            repeat_mode=repeat_mode,
            target=target,
            property_name=property_name,
            start_value=start_value,
            end_value=end_value
        )
        return self.start_config(config)

    def animate_custom(self, duration: float, update_callback: Callable[[float], None],
                       easing: Easing = EasingCurve.LINEAR,
                       on_start: Optional[Callable] = None,
                       on_complete: Optional[Callable] = None,
                       delay: float = 0.0) -> str:
        """
        Create a custom animation with user-provided update callback.

        Args:
            duration: Duration in seconds
            update_callback: Called each frame with eased progress
            easing: Easing curve
            on_start: Callback when animation starts
            on_complete: Callback when animation completes
            delay: Delay before starting (seconds)

        Returns:
            Animation ID
        """
        config = CustomAnimationConfig(
            duration=duration,
            easing=easing,
            on_start=on_start,
            on_complete=on_complete,
            delay=delay,
            update_callback=update_callback
        )
        return self.start_config(config)

    def start_group(self, animations: Sequence[Any],
                    mode: GroupMode = GroupMode.PARALLEL,
                    checkpoints: Optional[Sequence[Tuple[Checkpoint, Callable[[], None]]]] = None,
                    on_start: Optional[Callable[[], None]] = None,
                    on_stage_complete: Optional[Callable[[int], None]] = None,
                    on_complete: Optional[Callable[[], None]] = None,
                    on_cancel: Optional[Callable[[], None]] = None) -> str:
        """
        Start a group of transitions.

        Args:
            animations: Child configs in stage order (transitions or nested groups)
            mode: PARALLEL or SEQUENTIAL
            checkpoints: (Checkpoint, callback) pairs, or None
            on_start: Called when the group starts
            on_stage_complete: Called with the index of each finished child
            on_complete: Called once, after the last child finishes
            on_cancel: Called if the group is cancelled

        Returns:
            Group ID (the handle accepted by cancel())
        """
        config = AnimationGroupConfig(
            animations=tuple(animations),
            mode=mode,
            checkpoints=tuple(checkpoints or ()),
            on_start=on_start,
            on_stage_complete=on_stage_complete,
            on_complete=on_complete,
            on_cancel=on_cancel,
        )
        return self.start_group_config(config)

    def start_group_config(self, config: AnimationGroupConfig) -> str:
        """Start a prebuilt group config and return its ID."""
        group_id, _ = self._spawn(config)
        return group_id

    def _spawn(self, config: Any) -> Tuple[str, Runnable]:
        """Instantiate, register and start the runnable for a config."""
        from core.animation.group import AnimationGroup

        animation_id = str(uuid.uuid4())
        if isinstance(config, AnimationGroupConfig):
            group = AnimationGroup(animation_id, config, self)
            self._add_group(animation_id, group)
            group.start()
            return animation_id, group

        if isinstance(config, PropertyAnimationConfig):
            animator: Animation = PropertyAnimator(animation_id, config)
        elif isinstance(config, CustomAnimationConfig):
            animator = CustomAnimator(animation_id, config)
        else:
            raise ValueError(f"Unsupported animation config: {type(config).__name__}")

        self._add_animation(animation_id, animator)
        animator.start()
        return animation_id, animator

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def pause_animation(self, animation_id: str) -> bool:
        """
        Pause an animation or group.

        Args:
            animation_id: Animation ID

        Returns:
            True if paused successfully
        """
        runnable = self._lookup(animation_id)
        if runnable is None:
            return False
        runnable.pause()
        return True

    def resume_animation(self, animation_id: str) -> bool:
        """
        Resume a paused animation or group.

        Args:
            animation_id: Animation ID

        Returns:
            True if resumed successfully
        """
        runnable = self._lookup(animation_id)
        if runnable is None:
            return False
        runnable.resume()
        return True

    def cancel_animation(self, animation_id: str) -> bool:
        """
        Cancel an animation or group.

        Cancelling a group cancels its running children. Completion callbacks
        of cancelled work never fire.

        Args:
            animation_id: Animation ID

        Returns:
            True if cancelled successfully
        """
        runnable = self._animations.pop(animation_id, None)
        if runnable is None:
            runnable = self._animation_groups.pop(animation_id, None)
        if runnable is None:
            return False

        runnable.cancel()
        self.animation_cancelled.emit(animation_id)
        self._stop_if_idle()
        return True

    def cancel(self, handle: str) -> bool:
        """Cancel the transition or group behind a handle."""
        return self.cancel_animation(handle)

    def is_running(self, animation_id: str) -> bool:
        """Check if an animation or group is currently running."""
        runnable = self._lookup(animation_id)
        return runnable is not None and runnable.state == AnimationState.RUNNING

    def get_progress(self, animation_id: str) -> Optional[float]:
        """Get the progress of an animation (0.0 to 1.0)."""
        if animation_id in self._animations:
            return self._animations[animation_id].get_progress()
        return None

    def get_active_count(self) -> int:
        """Get the number of active animations and groups."""
        return len(self._animations) + len(self._animation_groups)

    def cancel_all(self) -> None:
        """Cancel all active animations and groups."""
        for group_id in list(self._animation_groups.keys()):
            self.cancel_animation(group_id)
        for anim_id in list(self._animations.keys()):
            self.cancel_animation(anim_id)
        logger.info("All animations cancelled")

    def _lookup(self, animation_id: str) -> Optional[Runnable]:
        runnable = self._animations.get(animation_id)
        if runnable is None:
            runnable = self._animation_groups.get(animation_id)
        return runnable

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _add_animation(self, animation_id: str, animator: Animation) -> None:
        """Add an animation to the manager."""
        self._animations[animation_id] = animator

        # Use default args to capture animation_id by value (not by reference)
        animator.completed.connect(lambda aid=animation_id: self._on_animation_complete(aid))

        # Start update loop if not running
        if not self._timer.isActive():
            self.start()

        self.animation_started.emit(animation_id)

    def _add_group(self, group_id: str, group: "AnimationGroup") -> None:
        self._animation_groups[group_id] = group
        group.completed.connect(lambda gid=group_id: self._on_group_complete(gid))
        self.animation_started.emit(group_id)

    def _on_animation_complete(self, animation_id: str) -> None:
        """Handle animation completion."""
        self._animations.pop(animation_id, None)
        self.animation_completed.emit(animation_id)
        self._stop_if_idle()

    def _on_group_complete(self, group_id: str) -> None:
        self._animation_groups.pop(group_id, None)
        self.animation_completed.emit(group_id)
        self._stop_if_idle()

    def _stop_if_idle(self) -> None:
        if not self._animations and not self._animation_groups:
            self.stop()

    # ------------------------------------------------------------------
    # Ticking
    # ------------------------------------------------------------------

    def advance(self, delta_time: float) -> None:
        """
        Advance every active animation by ``delta_time`` seconds.

        Work started from a callback during this tick is first advanced on the
        next tick (or by the time a sequential group hands over).
        """
        self.tick_count += 1
        for anim_id, animator in list(self._animations.items()):
            if anim_id not in self._animations:
                # Cancelled by a callback earlier in this tick
                continue
            _anim_start = time.time()
            animator.update(delta_time)
            _anim_elapsed = (time.time() - _anim_start) * 1000.0
            if _anim_elapsed > 50.0 and is_perf_metrics_enabled():
                logger.warning("%s %s Slow animation update (%s): %.2fms",
                               TAG_PERF, TAG_ANIM, anim_id[:8], _anim_elapsed)

    def _update_all(self) -> None:
        """Update all active animations (called by timer).

        The delta is clamped to ``max_frame_dt`` so a stalled event loop does
        not make animations jump straight to their end.
        """
        current_time = time.time()

        if self._last_update_time is None:
            self._last_update_time = current_time
            return

        delta_time = current_time - self._last_update_time
        self._last_update_time = current_time

        if delta_time > self.max_frame_dt:
            if is_perf_metrics_enabled():
                logger.info(
                    "%s %s Large frame dt=%.2fms clamped to %.0fms (target=%.2fms, active=%d)",
                    TAG_PERF, TAG_ANIM,
                    delta_time * 1000.0,
                    self.max_frame_dt * 1000.0,
                    self.frame_time * 1000.0,
                    self.get_active_count(),
                )
            delta_time = self.max_frame_dt

        # Profiling: track timing characteristics without altering behaviour.
        if self._profile_start_ts is None:
            self._profile_start_ts = current_time
        if delta_time > 0.0:
            if self._profile_min_dt == 0.0 or delta_time < self._profile_min_dt:
                self._profile_min_dt = delta_time
            if delta_time > self._profile_max_dt:
                self._profile_max_dt = delta_time
        self._profile_last_ts = current_time
        self._profile_frame_count += 1

        self.advance(delta_time)

    def _log_profile_summary(self) -> None:
        """Emit a concise `[PERF] [ANIM]` summary for the last active run."""
        try:
            if (
                self._profile_start_ts is not None
                and self._profile_last_ts is not None
                and self._profile_frame_count > 0
                and is_perf_metrics_enabled()
            ):
                elapsed = max(0.0, self._profile_last_ts - self._profile_start_ts)
                if elapsed > 0.0:
                    logger.info(
                        "%s %s AnimationManager metrics: duration=%.1fms, "
                        "frames=%d, avg_fps=%.1f, dt_min=%.2fms, dt_max=%.2fms, "
                        "active_count=%d, fps_target=%d",
                        TAG_PERF, TAG_ANIM,
                        elapsed * 1000.0,
                        self._profile_frame_count,
                        self._profile_frame_count / elapsed,
                        self._profile_min_dt * 1000.0,
                        self._profile_max_dt * 1000.0,
                        self.get_active_count(),
                        self.fps,
                    )
        finally:
            self._profile_start_ts = None
            self._profile_last_ts = None
            self._profile_frame_count = 0
            self._profile_min_dt = 0.0
            self._profile_max_dt = 0.0
