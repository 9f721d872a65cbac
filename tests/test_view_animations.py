"""Tests for the ready-made view effects."""
import pytest
from core.animation.view_animations import ViewAnimator, PULSE_SCALE
from core.view import AnimatedView, ViewContainer
from conftest import run_frames


def _record(view, name):
    values = []
    view.property_changed.connect(lambda prop, value: values.append(value) if prop == name else None)
    return values


class TestFades:

    def test_fade_in_reaches_full_alpha_and_stays_visible(self, animation_manager, view_animator, view):
        view.alpha = 0.0
        ended = []
        view_animator.fade_in(view, 400, on_end=lambda: ended.append(True))

        animation_manager.advance(0.2)
        assert view.alpha == pytest.approx(0.5)
        assert ended == []

        animation_manager.advance(0.2)
        assert view.alpha == pytest.approx(1.0)
        assert view.visible
        assert ended == [True]

    def test_fade_out_shows_view_and_targets_full_alpha(self, animation_manager, view_animator, view):
        view.visible = False
        view.alpha = 0.5
        ended = []
        view_animator.fade_out(view, 200, on_end=lambda: ended.append(True))
        assert view.visible

        run_frames(animation_manager, 0.25)
        assert view.alpha == pytest.approx(1.0)
        assert ended == [True]


class TestAppearDisappear:

    def test_disappear_hides_view_after_delay_and_shrink(self, animation_manager, view_animator, view):
        ended = []
        view_animator.disappear(view, on_end=lambda: ended.append(view.visible))

        animation_manager.advance(0.04)
        assert view.scale_x == 1.0
        assert view.visible

        run_frames(animation_manager, 0.4)
        assert view.scale_x == pytest.approx(0.0)
        assert not view.visible
        assert ended == [False]

    def test_disappear_can_remove_view_from_container(self, animation_manager, view_animator, qt_app):
        container = ViewContainer(width=300, height=300)
        child = AnimatedView(container, width=10, height=10)
        assert container.child_count() == 1

        view_animator.disappear(child, remove_from_parent=True)
        run_frames(animation_manager, 0.5)

        assert container.child_count() == 0
        assert child.container() is None

    def test_disappear_keeps_view_attached_by_default(self, animation_manager, view_animator, qt_app):
        container = ViewContainer()
        child = AnimatedView(container)

        view_animator.disappear(child)
        run_frames(animation_manager, 0.5)

        assert child.container() is container
        assert not child.visible

    def test_appear_shows_view_and_overshoots(self, animation_manager, view_animator, view):
        view.visible = False
        view.scale_x = 0.0
        scales = _record(view, "scale_x")
        ended = []

        view_animator.appear(view, on_end=lambda: ended.append(True))
        assert view.visible

        run_frames(animation_manager, 0.4)
        assert max(scales) > 1.0
        assert view.scale_x == pytest.approx(1.0)
        assert ended == [True]


class TestFlips:

    def test_flip_calls_middle_when_edge_on(self, animation_manager, view_animator, view):
        events = []
        view_animator.flip(
            view, 500,
            on_middle=lambda: events.append(("middle", view.scale_x)),
            on_end=lambda: events.append(("end", view.scale_x)),
        )

        animation_manager.advance(0.25)
        assert events == [("middle", pytest.approx(0.0))]

        animation_manager.advance(0.25)
        assert events[1] == ("end", pytest.approx(1.0))
        assert animation_manager.get_active_count() == 0

    def test_rotate_on_y_second_stage_runs_half_as_long(self, animation_manager, view_animator, view):
        events = []
        view_animator.rotate_on_y(
            view, 180.0, duration=500,
            on_middle=lambda: events.append(("middle", view.rotation_y)),
            on_end=lambda: events.append(("end", view.rotation_y)),
        )

        animation_manager.advance(0.5)
        assert events == [("middle", pytest.approx(90.0))]

        animation_manager.advance(0.25)
        assert events[1] == ("end", pytest.approx(180.0))

    def test_flip_ascend_disappear_rises_then_disappears(self, animation_manager, view_animator, view):
        ended = []
        handle = view_animator.flip_ascend_disappear(view, duration=1500, ascend_pixels=100,
                                                     on_end=lambda: ended.append(True))
        assert handle is not None

        run_frames(animation_manager, 1.5)
        assert view.translation_y == pytest.approx(-100.0)
        assert view.visible

        run_frames(animation_manager, 1.0)
        assert not view.visible
        assert ended == [True]
        assert animation_manager.get_active_count() == 0

    def test_flip_ascend_disappear_with_no_duration_does_nothing(self, animation_manager, view_animator, view):
        ended = []
        rises = _record(view, "translation_y")
        flickers = _record(view, "scale_x")
        before = (view.translation_y, view.scale_x, view.visible)

        assert view_animator.flip_ascend_disappear(view, duration=0, on_end=lambda: ended.append(True)) is None
        assert animation_manager.get_active_count() == 0

        run_frames(animation_manager, 1.0)
        assert ended == []
        assert rises == [] and flickers == []
        assert (view.translation_y, view.scale_x, view.visible) == before


class TestScaleEffects:

    def test_infinite_pulse_runs_until_cancelled(self, animation_manager, view_animator, view):
        scales = _record(view, "scale_x")
        handle = view_animator.infinite_pulse(view, pulse_duration=500)

        run_frames(animation_manager, 10.0)
        assert animation_manager.is_running(handle)
        assert max(scales) == pytest.approx(PULSE_SCALE, abs=0.01)
        assert min(scales) >= 1.0 - 1e-6
        assert view.scale_x == pytest.approx(view.scale_y)

        assert animation_manager.cancel(handle)
        assert animation_manager.get_active_count() == 0

    def test_compress_and_expand(self, animation_manager, view_animator, view):
        events = []
        view_animator.compress_and_expand(
            view, 1000,
            on_middle=lambda: events.append(("middle", view.scale_x, view.scale_y)),
            on_end=lambda: events.append(("end", view.scale_x, view.scale_y)),
        )

        animation_manager.advance(0.5)
        assert events == [("middle", pytest.approx(1.3), pytest.approx(0.3))]

        animation_manager.advance(0.5)
        assert events[1] == ("end", pytest.approx(1.0), pytest.approx(1.0))

    def test_bounce_snaps_back_to_normal_size(self, animation_manager, view_animator, view):
        ended = []
        view_animator.bounce(view, 1000, on_end=lambda: ended.append(True))

        animation_manager.advance(0.01)
        assert view.scale_x > 1.4

        animation_manager.advance(0.5)
        assert view.scale_x == pytest.approx(1.0)
        assert view.scale_y == pytest.approx(1.0)
        assert ended == [True]


class TestMoveToPosition:

    def test_duration_is_distance_over_speed(self, view):
        # view starts at (10, 20); (40, 60) is 50 px away
        assert ViewAnimator.move_duration(view, 40, 60, speed=1.0) == 50
        assert ViewAnimator.move_duration(view, 40, 60, speed=0.5) == 100

    def test_three_four_five_triangle(self, animation_manager, view_animator, qt_app):
        origin = AnimatedView()
        ended = []
        assert ViewAnimator.move_duration(origin, 3, 4, speed=1) == 5

        view_animator.move_to_position(origin, 3, 4, speed=1, on_end=lambda: ended.append(True))
        run_frames(animation_manager, 0.01, step=0.001)

        assert (origin.x, origin.y) == (pytest.approx(3.0), pytest.approx(4.0))
        assert ended == [True]

    def test_moves_view_to_target(self, animation_manager, view_animator, view):
        ended = []
        view_animator.move_to_position(view, 40, 60, speed=0.5, on_end=lambda: ended.append(True))

        animation_manager.advance(0.05)
        assert 10.0 < view.x < 40.0

        animation_manager.advance(0.05)
        assert (view.x, view.y) == (pytest.approx(40.0), pytest.approx(60.0))
        assert ended == [True]

    def test_non_positive_speed_moves_instantly(self, animation_manager, view_animator, view, caplog):
        with caplog.at_level("WARNING"):
            view_animator.move_to_position(view, 0, 0, speed=0)
        assert any("speed" in r.message for r in caplog.records)

        animation_manager.advance(0.016)
        assert (view.x, view.y) == (0.0, 0.0)


@pytest.mark.parametrize("effect, args", [
    ("fade_in", (100,)),
    ("fade_out", (100,)),
    ("disappear", ()),
    ("appear", ()),
    ("flip_ascend_disappear", ()),
    ("flip", ()),
    ("infinite_pulse", ()),
    ("rotate_on_y", (90.0,)),
    ("compress_and_expand", ()),
    ("bounce", ()),
    ("move_to_position", (0, 0)),
])
def test_effects_ignore_missing_view(animation_manager, view_animator, effect, args):
    assert getattr(view_animator, effect)(None, *args) is None
    assert animation_manager.get_active_count() == 0
