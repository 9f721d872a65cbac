"""
Animation types, enums, and dataclasses.

Defines the core types used by the view animation sequencer. Configs are
frozen: a transition or group is described once, started once, and thrown
away after it finishes.
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Tuple, Union


# Repeat count meaning "repeat forever".
INFINITE = -1


class AnimationState(Enum):
    """State of an animation."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class RepeatMode(Enum):
    """What happens at the end of each iteration of a repeating animation."""
    RESTART = "restart"        # Jump back to the start value
    REVERSE = "reverse"        # Play the next iteration backwards


class GroupMode(Enum):
    """Composition policy of an animation group."""
    PARALLEL = "parallel"      # All children together; done when the slowest is
    SEQUENTIAL = "sequential"  # Each child starts after the previous completes


class CheckpointKind(Enum):
    """Points in a group's timeline where callbacks can be bound."""
    GROUP_START = "group_start"
    STAGE_COMPLETE = "stage_complete"
    GROUP_COMPLETE = "group_complete"


class EasingCurve(Enum):
    """
    Easing curve types for animations.

    Easing functions control the rate of change of the animated value over time.
    The view-style curves at the bottom take an optional tension and are built
    with the factories in core.animation.easing.
    """
    # Basic
    LINEAR = "linear"

    # Quadratic
    QUAD_IN = "quad_in"
    QUAD_OUT = "quad_out"
    QUAD_IN_OUT = "quad_in_out"

    # Cubic
    CUBIC_IN = "cubic_in"
    CUBIC_OUT = "cubic_out"
    CUBIC_IN_OUT = "cubic_in_out"

    # Sine
    SINE_IN = "sine_in"
    SINE_OUT = "sine_out"
    SINE_IN_OUT = "sine_in_out"

    # Back
    BACK_IN = "back_in"
    BACK_OUT = "back_out"

    # Bounce
    BOUNCE_OUT = "bounce_out"

    # View interpolators
    ACCELERATE = "accelerate"
    ACCELERATE_DECELERATE = "accelerate_decelerate"
    ANTICIPATE = "anticipate"
    OVERSHOOT = "overshoot"
    FAST_OUT_SLOW_IN = "fast_out_slow_in"


# An easing is either a named curve or any callable mapping t in [0, 1] to a
# progress ratio (which may leave [0, 1] for anticipate/overshoot curves).
Easing = Union[EasingCurve, Callable[[float], float]]


@dataclass(frozen=True)
class Checkpoint:
    """A named point in a group timeline.

    ``stage`` is only meaningful for STAGE_COMPLETE; -1 matches every stage.
    """
    kind: CheckpointKind
    stage: int = -1

    def matches(self, kind: CheckpointKind, stage: int = -1) -> bool:
        if self.kind is not kind:
            return False
        if kind is CheckpointKind.STAGE_COMPLETE and self.stage >= 0:
            return self.stage == stage
        return True

    @classmethod
    def group_start(cls) -> "Checkpoint":
        return cls(CheckpointKind.GROUP_START)

    @classmethod
    def stage_complete(cls, stage: int = -1) -> "Checkpoint":
        return cls(CheckpointKind.STAGE_COMPLETE, stage)

    @classmethod
    def group_complete(cls) -> "Checkpoint":
        return cls(CheckpointKind.GROUP_COMPLETE)


@dataclass(frozen=True)
class AnimationConfig:
    """Configuration for an animation."""
    duration: float                                    # Duration in seconds
    easing: Easing = EasingCurve.LINEAR                # Easing curve
    on_start: Optional[Callable[[], None]] = None      # Called when animation starts
    on_update: Optional[Callable[[float], None]] = None  # Called each frame (eased progress)
    on_complete: Optional[Callable[[], None]] = None   # Called when animation completes
    on_cancel: Optional[Callable[[], None]] = None     # Called if animation is cancelled
    delay: float = 0.0                                 # Delay before starting (seconds)
    repeat_count: int = 0                              # Extra iterations (INFINITE = forever)
    repeat_mode: RepeatMode = RepeatMode.RESTART       # Behaviour between iterations


@dataclass(frozen=True)
class PropertyAnimationConfig(AnimationConfig):
    """Configuration for property animation.

    A ``start_value`` of None means "read the property from the target when
    the animation begins", so chained animations pick up where the previous
    one left the target.
    """
    target: Any = None               # Object to animate
    property_name: str = ""          # Property name (e.g., 'alpha')
    start_value: Optional[float] = None  # Starting value (None = current)
    end_value: Any = None            # Ending value

    def __post_init__(self):
        """Validate property animation config."""
        if self.target is None:
            raise ValueError("PropertyAnimationConfig requires a target")
        if not self.property_name:
            raise ValueError("PropertyAnimationConfig requires a property_name")
        if self.end_value is None:
            raise ValueError("PropertyAnimationConfig requires an end_value")


@dataclass(frozen=True)
class CustomAnimationConfig(AnimationConfig):
    """Configuration for custom animation with update callback."""
    update_callback: Callable[[float], None] = None  # Called with eased progress

    def __post_init__(self):
        """Validate custom animation config."""
        if not self.update_callback:
            raise ValueError("CustomAnimationConfig requires an update_callback")


@dataclass(frozen=True)
class AnimationGroupConfig:
    """Configuration for animation group.

    ``animations`` holds child configs (property, custom, or nested groups);
    children are only turned into running animations when their stage begins.
    """
    animations: Sequence[Any] = ()                     # Child configs, in stage order
    mode: GroupMode = GroupMode.PARALLEL               # Composition policy
    checkpoints: Sequence[Tuple[Checkpoint, Callable[[], None]]] = field(default_factory=tuple)
    on_start: Optional[Callable[[], None]] = None      # Called when the group starts
    on_stage_complete: Optional[Callable[[int], None]] = None  # Called with the stage index
    on_complete: Optional[Callable[[], None]] = None   # Called when all animations complete
    on_cancel: Optional[Callable[[], None]] = None     # Called if group is cancelled

    def __post_init__(self):
        """Validate animation group config."""
        if not self.animations:
            raise ValueError("AnimationGroupConfig requires at least one animation")
        for child in self.animations:
            if not isinstance(child, (AnimationConfig, AnimationGroupConfig)):
                raise ValueError(
                    f"AnimationGroupConfig children must be animation configs, got {type(child).__name__}"
                )

    @property
    def parallel(self) -> bool:
        return self.mode is GroupMode.PARALLEL


# Type aliases for callbacks
AnimationStartCallback = Callable[[], None]
AnimationUpdateCallback = Callable[[float], None]  # eased progress
AnimationCompleteCallback = Callable[[], None]
AnimationCancelCallback = Callable[[], None]
StageCompleteCallback = Callable[[int], None]  # stage index
