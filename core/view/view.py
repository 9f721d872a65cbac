"""
Animatable view targets.

AnimatedView is the property holder the view effects act on: plain float
properties the animators read and write by name. ViewContainer is the parent
that a view can be detached from.
"""
from typing import Iterator, List, Optional
from PySide6.QtCore import QObject, Signal
from core.logging.logger import get_logger

logger = get_logger(__name__)


def _float_property(name: str, doc: str) -> property:
    attr = f"_{name}"

    def getter(self) -> float:
        return getattr(self, attr)

    def setter(self, value: float) -> None:
        value = float(value)
        if getattr(self, attr) == value:
            return
        setattr(self, attr, value)
        self.property_changed.emit(name, value)

    return property(getter, setter, doc=doc)


class AnimatedView(QObject):
    """An on-screen element with animatable scalar properties.

    Coordinates are relative to the parent container; ``translation_y`` is
    an offset applied on top of ``y``.
    """

    property_changed = Signal(str, float)  # name, value
    visibility_changed = Signal(bool)

    x = _float_property("x", "Left edge relative to the container.")
    y = _float_property("y", "Top edge relative to the container.")
    width = _float_property("width", "Width in pixels.")
    height = _float_property("height", "Height in pixels.")
    alpha = _float_property("alpha", "Opacity, 0.0 (transparent) to 1.0 (opaque).")
    scale_x = _float_property("scale_x", "Horizontal scale factor.")
    scale_y = _float_property("scale_y", "Vertical scale factor.")
    translation_y = _float_property("translation_y", "Vertical offset from y.")
    rotation_y = _float_property("rotation_y", "Rotation around the vertical axis, degrees.")

    def __init__(self, parent: Optional[QObject] = None, *, x: float = 0.0, y: float = 0.0,
                 width: float = 0.0, height: float = 0.0, name: str = ""):
        super().__init__(None)
        self._x = float(x)
        self._y = float(y)
        self._width = float(width)
        self._height = float(height)
        self._alpha = 1.0
        self._scale_x = 1.0
        self._scale_y = 1.0
        self._translation_y = 0.0
        self._rotation_y = 0.0
        self._visible = True
        if name:
            self.setObjectName(name)
        if isinstance(parent, ViewContainer):
            parent.add_view(self)
        elif parent is not None:
            self.setParent(parent)

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        value = bool(value)
        if value == self._visible:
            return
        self._visible = value
        self.visibility_changed.emit(value)

    def container(self) -> Optional["ViewContainer"]:
        parent = self.parent()
        return parent if isinstance(parent, ViewContainer) else None

    def detach(self) -> None:
        """Remove the view from its container (no-op when it has none)."""
        container = self.container()
        if container is not None:
            container.remove_view(self)
        elif self.parent() is not None:
            self.setParent(None)

    def __repr__(self) -> str:
        name = self.objectName() or hex(id(self))
        return f"<AnimatedView {name} x={self._x:g} y={self._y:g} alpha={self._alpha:g}>"


class ViewContainer(AnimatedView):
    """A view that holds child views in insertion order."""

    child_added = Signal(object)
    child_removed = Signal(object)

    def __init__(self, parent: Optional[QObject] = None, **kwargs):
        super().__init__(parent, **kwargs)
        self._views: List[AnimatedView] = []

    def add_view(self, view: AnimatedView) -> None:
        if view in self._views:
            return
        previous = view.container()
        if previous is not None:
            previous.remove_view(view)
        view.setParent(self)
        self._views.append(view)
        self.child_added.emit(view)

    def remove_view(self, view: AnimatedView) -> bool:
        if view not in self._views:
            logger.debug("remove_view: %r is not a child of %r", view, self)
            return False
        self._views.remove(view)
        view.setParent(None)
        self.child_removed.emit(view)
        return True

    def views(self) -> Iterator[AnimatedView]:
        """Iterate over the direct children."""
        return iter(list(self._views))

    def child_count(self) -> int:
        return len(self._views)
