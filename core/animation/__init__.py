"""View animation sequencing."""

from .types import (
    INFINITE,
    AnimationState,
    RepeatMode,
    GroupMode,
    CheckpointKind,
    Checkpoint,
    EasingCurve,
    AnimationConfig,
    PropertyAnimationConfig,
    CustomAnimationConfig,
    AnimationGroupConfig
)
from .easing import ease, get_easing_function, anticipate, overshoot, cubic_bezier, EASING_FUNCTIONS
from .animator import Animation, PropertyAnimator, CustomAnimator, AnimationManager
from .group import AnimationGroup
from .view_animations import ViewAnimator

__all__ = [
    # Types
    'INFINITE',
    'AnimationState',
    'RepeatMode',
    'GroupMode',
    'CheckpointKind',
    'Checkpoint',
    'EasingCurve',
    'AnimationConfig',
    'PropertyAnimationConfig',
    'CustomAnimationConfig',
    'AnimationGroupConfig',

    # Easing
    'ease',
    'get_easing_function',
    'anticipate',
    'overshoot',
    'cubic_bezier',
    'EASING_FUNCTIONS',

    # Animators
    'Animation',
    'PropertyAnimator',
    'CustomAnimator',
    'AnimationGroup',
    'AnimationManager',

    # Effects
    'ViewAnimator',
]
