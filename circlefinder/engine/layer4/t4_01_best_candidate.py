"""T4.01 — Best Candidate. ★★★

Pick the hull with the strictly smallest circumference error. The first
valid candidate is always accepted; later ones replace it only when strictly
better, so ties keep the earliest.
"""

from __future__ import annotations

import logging

from circlefinder.engine.context import ConvexHull, FrameContext
from circlefinder.engine.registry import Layer, transform
from circlefinder.utils.geometry import (
    CIRCUMFERENCE_ANGLE_INCREMENT,
    circle_circumference_error,
    hull_dimensions,
)

logger = logging.getLogger(__name__)


def select_best_candidate(errors: list[int | None]) -> tuple[int, int]:
    """(index, error) of the first minimal error; (-1, -1) when nothing is valid.

    None or negative entries are not comparable and are skipped.
    """
    best_index = -1
    best_error = -1
    for i, error in enumerate(errors):
        if error is None or error < 0:
            continue
        if best_error < 0 or error < best_error:
            best_index = i
            best_error = error
    return best_index, best_error


def convex_hull_closest_to_circle(
    convex_hulls: list[ConvexHull | None],
    angle_increment: float = CIRCUMFERENCE_ANGLE_INCREMENT,
) -> tuple[ConvexHull | None, int]:
    """Score every hull and return (winner, error), or (None, -1)."""
    errors: list[int | None] = []
    for hull in convex_hulls:
        if hull is None:
            errors.append(None)
            continue
        width, height, center_x, center_y = hull_dimensions(hull)
        errors.append(circle_circumference_error(hull, width, height, center_x, center_y, angle_increment))

    index, error = select_best_candidate(errors)
    if index < 0:
        return None, -1
    return convex_hulls[index], error


@transform(
    id="T4.01",
    layer=Layer.SELECTION,
    dependencies=["T3.02"],
    description="Select the hull closest to a circle",
)
def best_candidate(ctx: FrameContext) -> None:
    ctx.best_index, ctx.best_error = select_best_candidate(ctx.circularity_errors)
    ctx.best_hull = ctx.convex_hulls[ctx.best_index] if ctx.best_index >= 0 else None
    if ctx.best_hull is not None:
        logger.debug("Best hull #%d with error %d", ctx.best_index, ctx.best_error)
