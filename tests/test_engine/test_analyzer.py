"""Tests for the ImageAnalyzer entry points."""

from __future__ import annotations

import numpy as np
import pytest

from circlefinder.engine.analyzer import ImageAnalyzer
from circlefinder.engine.config import ClassifierConfig
from circlefinder.engine.context import ObjectDetails
from circlefinder.main import create_analyzer
from circlefinder.models.detection import CircleDetection
from tests.conftest import DISC_CENTER, FRAME_HEIGHT, FRAME_WIDTH


@pytest.fixture
def analyzer() -> ImageAnalyzer:
    return ImageAnalyzer()


class TestObjectMeasurement:
    def test_extract_object_details(self, analyzer):
        grid = np.zeros((4, 4), dtype=np.uint16)
        grid[1:3, 1:3] = 1
        (details,) = analyzer.extract_object_details(grid, 4, 4, 1)
        assert details == ObjectDetails(id=1, area=4, width=2, height=2, center_x=1, center_y=1)

    def test_resolve_large_object_ids(self, analyzer):
        grid = np.zeros((6, 6), dtype=np.uint16)
        grid[0, 0:4] = 1
        grid[2:6, 2:6] = 2
        assert analyzer.resolve_large_object_ids(grid, 6, 6, 2, 4) == [2, 1]


class TestBestConvexHull:
    def test_returns_disc(self, analyzer, scene_frame_rgb):
        hull = analyzer.best_convex_hull(scene_frame_rgb, FRAME_WIDTH, FRAME_HEIGHT, 3)
        assert hull is not None
        assert analyzer.object_is_within_convex_hull_bounds(
            ObjectDetails(center_x=DISC_CENTER[0], center_y=DISC_CENTER[1]), hull
        )

    def test_single_candidate_wins_by_default(self, analyzer, scene_frame):
        hull = analyzer.best_convex_hull(scene_frame, FRAME_WIDTH, FRAME_HEIGHT, 1)
        details = analyzer.convex_hull_dimensions_as_object_details(hull)
        # Only the rectangle is collected
        assert (details.width, details.height) == (69, 29)

    def test_none_for_empty_frame(self, analyzer, empty_frame):
        assert analyzer.best_convex_hull(empty_frame, FRAME_WIDTH, FRAME_HEIGHT, 3) is None


class TestClosestToCircle:
    def test_error_out_value(self, analyzer, square_hull, wide_hull):
        hull, error = analyzer.convex_hull_closest_to_circle([wide_hull, square_hull])
        assert hull is square_hull
        assert error == 12

    def test_empty(self, analyzer):
        assert analyzer.convex_hull_closest_to_circle([]) == (None, -1)


class TestContainment:
    def test_hull_bounds(self, analyzer):
        hull = np.array([[45, 45], [55, 45], [55, 55], [45, 55]])
        assert analyzer.object_is_within_convex_hull_bounds(ObjectDetails(center_x=54, center_y=54), hull)
        assert not analyzer.object_is_within_convex_hull_bounds(ObjectDetails(center_x=56, center_y=56), hull)

    def test_hull_dimensions_as_object_details(self, analyzer):
        hull = np.array([[0, 0], [10, 0], [10, 20], [0, 20]])
        details = analyzer.convex_hull_dimensions_as_object_details(hull)
        assert details == ObjectDetails(id=0, area=0, width=10, height=20, center_x=5, center_y=10)

    def test_measured_object_inside_its_hull(self, analyzer, disc_frame):
        grid = analyzer.processing.create_object_map(disc_frame, FRAME_WIDTH, FRAME_HEIGHT)
        count = analyzer.processing.organize_object_map(grid, FRAME_WIDTH * FRAME_HEIGHT)
        (details,) = analyzer.extract_object_details(grid, FRAME_WIDTH, FRAME_HEIGHT, count)
        (hull,) = analyzer.extract_convex_hulls_of_largest_objects(disc_frame, FRAME_WIDTH, FRAME_HEIGHT, 3)
        assert analyzer.object_is_within_convex_hull_bounds(details, hull)


class TestDetect:
    def test_scene(self, analyzer, scene_frame):
        result = analyzer.detect(scene_frame)
        assert isinstance(result, CircleDetection)
        assert result.found
        assert (result.center_x, result.center_y) == DISC_CENTER
        assert (result.width, result.height) == (40, 40)
        assert result.error == 12
        assert result.candidate_count == 3
        assert (20, 60) in result.points
        assert result.errors == {}

    def test_mirrored_capture(self, analyzer, scene_frame):
        def mirror(x: int, y: int) -> tuple[int, int]:
            return FRAME_WIDTH - 1 - x, y

        result = analyzer.detect(scene_frame, transform_fn=mirror)
        assert result.found
        assert result.center_x == FRAME_WIDTH - 1 - DISC_CENTER[0]
        assert result.center_y == DISC_CENTER[1]

    def test_nothing_found(self, analyzer, empty_frame):
        result = analyzer.detect(empty_frame)
        assert not result.found
        assert result.error == -1
        assert result.candidate_count == 0

    def test_serializes(self, analyzer, disc_frame):
        payload = analyzer.detect(disc_frame).model_dump()
        assert payload["found"] is True
        assert payload["width"] == 40


class TestAreaError:
    def test_circle_area_error(self):
        assert ImageAnalyzer.circle_area_error(40, 1257) == pytest.approx(abs(1257 - 400 * np.pi))


def test_create_analyzer_uses_config():
    config = ClassifierConfig(max_candidates=1)
    analyzer = create_analyzer(config=config)
    assert analyzer.config is config
    assert analyzer.pipeline.config is config
