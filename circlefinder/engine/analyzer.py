"""ImageAnalyzer — call-level entry points over the transform pipeline.

Each method answers one question a downstream stage (effect renderer,
tracker) asks about a frame. The frame-level ones run the registered
transforms; the rest call the transform helpers directly.
"""

from __future__ import annotations

import logging
import time

from numpy.typing import NDArray

from circlefinder.engine.config import ClassifierConfig
from circlefinder.engine.context import ConvexHull, FrameContext, ObjectDetails, TransformFn
from circlefinder.engine.layer0 import t0_01_object_map  # noqa: F401
from circlefinder.engine.layer1.t1_01_object_details import extract_object_details
from circlefinder.engine.layer1.t1_02_large_objects import resolve_large_object_ids
from circlefinder.engine.layer2 import t2_01_convex_hulls  # noqa: F401
from circlefinder.engine.layer3 import t3_01_hull_dimensions, t3_02_circumference_error  # noqa: F401
from circlefinder.engine.layer4 import t4_02_debug_overlay, t4_03_release_candidates  # noqa: F401
from circlefinder.engine.layer4.t4_01_best_candidate import convex_hull_closest_to_circle
from circlefinder.engine.pipeline import Pipeline
from circlefinder.models.detection import CircleDetection
from circlefinder.utils.geometry import center_within_bounds, circle_area_error, hull_dimensions
from circlefinder.utils.image_processing import ImageProcessingUtils

logger = logging.getLogger(__name__)


class ImageAnalyzer:
    """Finds the most circular blob in a binary frame."""

    def __init__(
        self,
        processing: ImageProcessingUtils | None = None,
        config: ClassifierConfig | None = None,
    ) -> None:
        self.config = config or ClassifierConfig()
        self.processing = processing or ImageProcessingUtils()
        self.pipeline = Pipeline(config=self.config, processing=self.processing)

    # --- Object measurement ---

    def extract_object_details(
        self, object_map: NDArray, width: int, height: int, object_count: int
    ) -> list[ObjectDetails]:
        return extract_object_details(object_map, width, height, object_count)

    def resolve_large_object_ids(
        self, object_map: NDArray, width: int, height: int, object_count: int, min_size: int
    ) -> list[int]:
        return resolve_large_object_ids(object_map, width, height, object_count, min_size)

    # --- Frame-level ---

    def run(
        self,
        image: NDArray,
        width: int,
        height: int,
        max_candidates: int | None = None,
        transform_fn: TransformFn | None = None,
        targets: set[str] | None = None,
    ) -> FrameContext:
        ctx = FrameContext(
            image=image,
            width=width,
            height=height,
            transform_fn=transform_fn,
            max_candidates=max_candidates,
        )
        return self.pipeline.run(ctx, targets=targets)

    def extract_convex_hulls_of_largest_objects(
        self,
        image: NDArray,
        width: int,
        height: int,
        max_count: int,
        transform_fn: TransformFn | None = None,
    ) -> list[ConvexHull]:
        """Hulls of up to ``max_count`` of the largest qualifying objects, largest first."""
        ctx = self.run(image, width, height, max_count, transform_fn, targets={"T2.01"})
        return ctx.convex_hulls

    def best_convex_hull(
        self,
        image: NDArray,
        width: int,
        height: int,
        max_candidates: int | None = None,
        transform_fn: TransformFn | None = None,
    ) -> ConvexHull | None:
        """The most circular hull in the frame, or None.

        The frame is annotated in place when the debug overlay is enabled.
        """
        return self.run(image, width, height, max_candidates, transform_fn).best_hull

    def detect(
        self,
        image: NDArray,
        max_candidates: int | None = None,
        transform_fn: TransformFn | None = None,
    ) -> CircleDetection:
        start = time.perf_counter()
        height, width = image.shape[:2]
        ctx = self.run(image, int(width), int(height), max_candidates, transform_fn)
        elapsed_ms = round((time.perf_counter() - start) * 1000, 1)
        logger.debug(
            "Frame %dx%d: %d candidates, best error %d",
            width, height, ctx.candidate_count, ctx.best_error,
        )

        dims = ctx.best_dimensions
        if ctx.best_hull is None or dims is None:
            return CircleDetection(
                candidate_count=ctx.candidate_count,
                processing_time_ms=elapsed_ms,
                errors=ctx.errors,
            )

        return CircleDetection(
            found=True,
            center_x=dims.center_x,
            center_y=dims.center_y,
            width=dims.width,
            height=dims.height,
            error=ctx.best_error,
            candidate_count=ctx.candidate_count,
            points=[(int(x), int(y)) for x, y in ctx.best_hull],
            processing_time_ms=elapsed_ms,
            errors=ctx.errors,
        )

    # --- Hull helpers ---

    def convex_hull_closest_to_circle(
        self, convex_hulls: list[ConvexHull | None]
    ) -> tuple[ConvexHull | None, int]:
        """(winner, error) among the given hulls; (None, -1) if there is none."""
        return convex_hull_closest_to_circle(convex_hulls, self.config.angle_increment)

    @staticmethod
    def convex_hull_dimensions_as_object_details(convex_hull: ConvexHull) -> ObjectDetails:
        width, height, center_x, center_y = hull_dimensions(convex_hull)
        return ObjectDetails(width=width, height=height, center_x=center_x, center_y=center_y)

    def object_is_within_convex_hull_bounds(self, details: ObjectDetails, convex_hull: ConvexHull) -> bool:
        """Does the object's center fall within half the hull's width/height of its center?"""
        bounds = self.convex_hull_dimensions_as_object_details(convex_hull)
        return center_within_bounds(
            details.center_x,
            details.center_y,
            bounds.width,
            bounds.height,
            bounds.center_x,
            bounds.center_y,
        )

    @staticmethod
    def circle_area_error(measured_diameter: float, measured_area: float) -> float:
        return circle_area_error(measured_diameter, measured_area)
