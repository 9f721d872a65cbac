"""Animatable view targets and touch geometry."""

from .view import AnimatedView, ViewContainer
from .geometry import global_rect, touch_point_to_view_position, find_view_containing_point

__all__ = [
    'AnimatedView',
    'ViewContainer',
    'global_rect',
    'touch_point_to_view_position',
    'find_view_containing_point',
]
