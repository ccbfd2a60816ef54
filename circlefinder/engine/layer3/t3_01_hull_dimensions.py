"""T3.01 — Hull Dimensions.

Axis-aligned width/height and floor midpoint of every candidate hull.
"""

from __future__ import annotations

from circlefinder.engine.context import ConvexHull, FrameContext, HullDimensions
from circlefinder.engine.registry import Layer, transform
from circlefinder.utils.geometry import hull_dimensions


def calculate_hull_dimensions(hull: ConvexHull) -> HullDimensions:
    """Dimensions of a hull; all zero for fewer than 2 points."""
    return HullDimensions(*hull_dimensions(hull))


@transform(
    id="T3.01",
    layer=Layer.SCORING,
    dependencies=["T2.01"],
    description="Compute bounding dimensions and center of each hull",
)
def convex_hull_dimensions(ctx: FrameContext) -> None:
    ctx.hull_dimensions = [calculate_hull_dimensions(h) for h in ctx.convex_hulls]
