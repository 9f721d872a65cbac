"""
Animation groups.

A group runs child transitions (or nested groups) either all at once or one
after another. Children are only instantiated when their stage begins, so a
child without an explicit start value reads the target as the previous stage
left it.
"""
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING
from PySide6.QtCore import QObject, Signal
from core.animation.types import AnimationState, AnimationGroupConfig, CheckpointKind
from core.logging.logger import get_logger, is_verbose_logging
from core.logging.tags import TAG_ANIM

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from core.animation.animator import AnimationManager

logger = get_logger(__name__)


def carry_over(runnable: Any, delta_time: float) -> None:
    """Feed time left over from a finished stage into a freshly started one."""
    if delta_time <= 0.0:
        return
    if isinstance(runnable, AnimationGroup):
        for child in list(runnable.active_children()):
            carry_over(child, delta_time)
    else:
        runnable.update(delta_time)


class AnimationGroup(QObject):
    """
    Composite of transitions with PARALLEL or SEQUENTIAL policy.

    Completion fires exactly once: after the slowest child for PARALLEL
    groups, after the last stage for SEQUENTIAL ones. Stage callbacks fire in
    stage order, before the next stage starts.
    """

    started = Signal()
    stage_completed = Signal(int)  # stage index
    completed = Signal()
    cancelled = Signal()

    def __init__(self, group_id: str, config: AnimationGroupConfig, manager: "AnimationManager"):
        super().__init__()

        self.animation_id = group_id
        self.config = config
        self._manager = manager

        self.state = AnimationState.IDLE
        self.overflow = 0.0
        self._overflow_tick = -1
        self._active: Dict[int, tuple] = {}  # stage index -> (child id, runnable)
        self._finished_stages: List[int] = []

        if config.on_start:
            self.started.connect(config.on_start)
        if config.on_stage_complete:
            self.stage_completed.connect(config.on_stage_complete)
        if config.on_complete:
            self.completed.connect(config.on_complete)
        if config.on_cancel:
            self.cancelled.connect(config.on_cancel)

    @property
    def stage_count(self) -> int:
        return len(self.config.animations)

    def active_children(self) -> List[Any]:
        return [runnable for _, runnable in self._active.values()]

    def start(self) -> None:
        """Start the group. A group can only be started once."""
        if self.state != AnimationState.IDLE:
            logger.warning(f"Animation group {self.animation_id} already started ({self.state.value})")
            return

        self.state = AnimationState.RUNNING
        self.started.emit()
        self._fire_checkpoints(CheckpointKind.GROUP_START)
        if self.state != AnimationState.RUNNING:
            return

        logger.debug(f"Animation group started: {self.animation_id} "
                     f"({self.config.mode.value}, stages={self.stage_count})")

        if self.config.parallel:
            for index in range(self.stage_count):
                self._launch(index)
                if self.state != AnimationState.RUNNING:
                    return
        else:
            self._launch(0)

    def pause(self) -> None:
        if self.state == AnimationState.RUNNING:
            self.state = AnimationState.PAUSED
            for child in self.active_children():
                child.pause()

    def resume(self) -> None:
        if self.state == AnimationState.PAUSED:
            self.state = AnimationState.RUNNING
            for child in self.active_children():
                child.resume()

    def cancel(self) -> None:
        """Cancel the group and every running child."""
        if self.state not in (AnimationState.IDLE, AnimationState.RUNNING, AnimationState.PAUSED):
            return
        self.state = AnimationState.CANCELLED
        for child_id, _ in list(self._active.values()):
            self._manager.cancel_animation(child_id)
        self._active.clear()
        self.cancelled.emit()
        logger.debug(f"Animation group cancelled: {self.animation_id}")

    def _launch(self, index: int, carry: float = 0.0) -> None:
        child_config = self.config.animations[index]
        child_id, child = self._manager._spawn(child_config)
        if child.state == AnimationState.CANCELLED:
            # Cancelled from its own start callback
            self._cancel_via_manager()
            return
        self._active[index] = (child_id, child)
        child.completed.connect(lambda i=index, c=child: self._on_child_complete(i, c))
        child.cancelled.connect(lambda i=index: self._on_child_cancelled(i))
        if is_verbose_logging():
            logger.debug(f"{TAG_ANIM} group {self.animation_id[:8]} stage {index} -> {child_id[:8]}")
        carry_over(child, carry)

    def _on_child_complete(self, index: int, child: Any) -> None:
        if self.state != AnimationState.RUNNING or index not in self._active:
            return
        del self._active[index]
        self._finished_stages.append(index)

        self.stage_completed.emit(index)
        self._fire_checkpoints(CheckpointKind.STAGE_COMPLETE, index)
        if self.state != AnimationState.RUNNING:
            return

        if self.config.parallel:
            # The child finishing last in time has the least time left over.
            tick = self._manager.tick_count
            if tick != self._overflow_tick:
                self._overflow_tick = tick
                self.overflow = child.overflow
            else:
                self.overflow = min(self.overflow, child.overflow)
            if not self._active and len(self._finished_stages) == self.stage_count:
                self._finish(self.overflow)
        elif index + 1 < self.stage_count:
            self._launch(index + 1, child.overflow)
        else:
            self._finish(child.overflow)

    def _on_child_cancelled(self, index: int) -> None:
        # A child cancelled from outside takes the whole group down with it.
        if self.state in (AnimationState.RUNNING, AnimationState.PAUSED) and index in self._active:
            del self._active[index]
            self._cancel_via_manager()

    def _cancel_via_manager(self) -> None:
        if not self._manager.cancel_animation(self.animation_id):
            self.cancel()

    def _finish(self, overflow: float) -> None:
        self.overflow = overflow
        # Checkpoints go first: a parent reacts to completed by starting its
        # next stage.
        self._fire_checkpoints(CheckpointKind.GROUP_COMPLETE)
        if self.state != AnimationState.RUNNING:
            return
        self.state = AnimationState.COMPLETE
        self.completed.emit()
        logger.debug(f"Animation group completed: {self.animation_id}")

    def _fire_checkpoints(self, kind: CheckpointKind, stage: int = -1) -> None:
        callbacks: List[Callable[[], None]] = [
            callback for checkpoint, callback in self.config.checkpoints
            if checkpoint.matches(kind, stage)
        ]
        for callback in callbacks:
            callback()
