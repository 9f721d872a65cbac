"""Touch-point geometry for views."""
from typing import Iterable, Optional, Union
from PySide6.QtCore import QPoint, QPointF, QRect
from core.view.view import AnimatedView


PointLike = Union[QPoint, QPointF]


def global_rect(view: AnimatedView) -> QRect:
    """Return the view's rectangle in screen coordinates.

    Offsets of every enclosing container are applied, as is each
    translation_y.
    """
    left = 0.0
    top = 0.0
    node: Optional[AnimatedView] = view
    while node is not None:
        left += node.x
        top += node.y + node.translation_y
        node = node.container()
    return QRect(int(left), int(top), int(view.width), int(view.height))


def _screen_position(source) -> QPointF:
    # Accept a bare point or a Qt pointer event
    if isinstance(source, (QPoint, QPointF)):
        return QPointF(source)
    if hasattr(source, "globalPosition"):
        return QPointF(source.globalPosition())
    raise TypeError(f"Expected a point or pointer event, got {type(source).__name__}")


def touch_point_to_view_position(view: AnimatedView, touch) -> QPoint:
    """
    Convert a touch in screen coordinates to a position relative to ``view``.

    Args:
        view: The view the position should be relative to
        touch: Screen point (QPoint/QPointF) or an event with globalPosition()

    Returns:
        View-local position, truncated to whole pixels
    """
    rect = global_rect(view)
    screen = _screen_position(touch)
    return QPoint(int(screen.x() - rect.left()), int(screen.y() - rect.top()))


def find_view_containing_point(views: Iterable[AnimatedView], touched_point: PointLike,
                               touch_radius: int = 1) -> Optional[AnimatedView]:
    """
    Find the first view hit by a touch.

    Args:
        views: Views to check, in priority order
        touched_point: The touched point in screen coordinates
        touch_radius: Side of the square the touch covers

    Returns:
        The first view whose screen rectangle intersects the touch, or None
    """
    touch = QRect(int(touched_point.x()), int(touched_point.y()), touch_radius, touch_radius)
    for view in views:
        if global_rect(view).intersects(touch):
            return view
    return None
