"""Tests for Layer 4 — candidate selection, debug overlay and release."""

# Import all transforms to trigger registration
import circlefinder.engine.layer0.t0_01_object_map
import circlefinder.engine.layer1.t1_01_object_details
import circlefinder.engine.layer1.t1_02_large_objects
import circlefinder.engine.layer2.t2_01_convex_hulls
import circlefinder.engine.layer3.t3_01_hull_dimensions
import circlefinder.engine.layer3.t3_02_circumference_error
import circlefinder.engine.layer4.t4_01_best_candidate
import circlefinder.engine.layer4.t4_02_debug_overlay
import circlefinder.engine.layer4.t4_03_release_candidates

import numpy as np

from circlefinder.engine.config import ClassifierConfig
from circlefinder.engine.context import FrameContext
from circlefinder.engine.layer4.t4_01_best_candidate import (
    convex_hull_closest_to_circle,
    select_best_candidate,
)
from circlefinder.engine.pipeline import Pipeline
from circlefinder.engine.registry import Layer, get_registry
from tests.conftest import DISC_CENTER, RECT_BOUNDS


def test_layer4_registers_3_transforms():
    assert [s.id for s in get_registry().get_layer(Layer.SELECTION)] == ["T4.01", "T4.02", "T4.03"]


class TestSelectBestCandidate:
    def test_first_minimum_wins(self):
        assert select_best_candidate([5, 3, 3, 7]) == (1, 3)

    def test_empty(self):
        assert select_best_candidate([]) == (-1, -1)

    def test_first_candidate_always_accepted(self):
        assert select_best_candidate([40]) == (0, 40)

    def test_zero_error_is_valid(self):
        assert select_best_candidate([2, 0, 0]) == (1, 0)

    def test_invalid_entries_skipped(self):
        assert select_best_candidate([None, -1, 4, 9]) == (2, 4)
        assert select_best_candidate([None, -1]) == (-1, -1)


class TestClosestToCircle:
    def test_picks_square_over_wide(self, square_hull, wide_hull):
        hull, error = convex_hull_closest_to_circle([wide_hull, square_hull])
        assert hull is square_hull
        assert error == 12

    def test_tie_keeps_earliest(self, square_hull):
        twin = square_hull.copy()
        hull, error = convex_hull_closest_to_circle([square_hull, twin])
        assert hull is square_hull

    def test_empty_list(self):
        assert convex_hull_closest_to_circle([]) == (None, -1)

    def test_missing_and_empty_hulls(self, square_hull):
        empty = np.empty((0, 2), dtype=np.int64)
        assert convex_hull_closest_to_circle([None, empty]) == (None, -1)
        hull, _ = convex_hull_closest_to_circle([None, empty, square_hull])
        assert hull is square_hull


def test_pipeline_selects_disc(scene_frame_rgb):
    ctx = FrameContext.from_image(scene_frame_rgb)
    Pipeline().run(ctx)

    assert ctx.best_index == 1
    assert ctx.best_error == 12
    assert ctx.best_dimensions.center_x == DISC_CENTER[0]
    assert ctx.best_dimensions.center_y == DISC_CENTER[1]
    assert not ctx.errors


def test_losers_are_released(scene_frame):
    ctx = FrameContext.from_image(scene_frame)
    Pipeline().run(ctx)

    assert ctx.candidate_count == 3
    assert len(ctx.convex_hulls) == 1
    assert ctx.convex_hulls[0] is ctx.best_hull


def test_no_winner_releases_everything(empty_frame):
    ctx = FrameContext.from_image(empty_frame)
    Pipeline().run(ctx)

    assert ctx.best_hull is None
    assert ctx.best_error == -1
    assert ctx.convex_hulls == []


def test_overlay_colors(scene_frame_rgb):
    config = ClassifierConfig()
    ctx = FrameContext.from_image(scene_frame_rgb)
    Pipeline(config=config).run(ctx)

    x, y = ctx.best_hull[0]
    assert tuple(scene_frame_rgb[y, x]) == config.winner_color

    rect_x, rect_y = RECT_BOUNDS[0], RECT_BOUNDS[1]
    assert tuple(scene_frame_rgb[rect_y, rect_x]) == config.candidate_color


def test_overlay_disabled_leaves_frame_untouched(scene_frame_rgb):
    original = scene_frame_rgb.copy()
    ctx = FrameContext.from_image(scene_frame_rgb)
    Pipeline(config=ClassifierConfig(debug_overlay=False)).run(ctx)

    assert "T4.02" not in ctx.completed_transforms
    assert "T4.03" in ctx.completed_transforms
    assert ctx.best_hull is not None
    np.testing.assert_array_equal(scene_frame_rgb, original)
