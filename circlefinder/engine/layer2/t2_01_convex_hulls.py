"""T2.01 — Convex Hulls of the Largest Objects. ★★

Walk the size-ordered candidate ids and build one hull per object until the
candidate limit is reached. Objects without points are skipped and do not
count against the limit.
"""

from __future__ import annotations

import logging

from numpy.typing import NDArray

from circlefinder.engine.context import ConvexHull, FrameContext
from circlefinder.engine.registry import Layer, transform
from circlefinder.utils.image_processing import ImageProcessingUtils

logger = logging.getLogger(__name__)


def collect_convex_hulls(
    processing: ImageProcessingUtils,
    object_map: NDArray,
    width: int,
    height: int,
    object_ids: list[int],
    max_count: int,
    closed: bool = True,
) -> list[ConvexHull]:
    """At most ``max_count`` hulls, in the order of ``object_ids``."""
    hulls: list[ConvexHull] = []
    for object_id in object_ids:
        if len(hulls) >= max_count:
            break
        points = processing.extract_sorted_object_points(object_map, width, height, object_id)
        if points is None or len(points) == 0:
            continue
        hulls.append(processing.create_convex_hull(points, closed))
    return hulls


@transform(
    id="T2.01",
    layer=Layer.HULLS,
    dependencies=["T1.02"],
    description="Build convex hulls for the largest qualifying objects",
)
def convex_hulls(ctx: FrameContext) -> None:
    if ctx.object_map is None:
        ctx.convex_hulls = []
    else:
        ctx.convex_hulls = collect_convex_hulls(
            ctx.processing,
            ctx.object_map,
            ctx.width,
            ctx.height,
            ctx.large_object_ids,
            ctx.candidate_limit,
            ctx.config.hull_closed,
        )
    ctx.candidate_count = len(ctx.convex_hulls)
    logger.debug(
        "%d of %d large objects became hull candidates",
        ctx.candidate_count,
        len(ctx.large_object_ids),
    )
