"""T3.02 — Circumference Error. ★★★ CRITICAL

Compare each hull against the ideal circle fitted to its bounds by sampling
the circumference every ~30°. Lower is rounder. See
circlefinder.utils.geometry.circle_circumference_error for the exact metric.
"""

from __future__ import annotations

from circlefinder.engine.context import FrameContext
from circlefinder.engine.registry import Layer, transform
from circlefinder.utils.geometry import circle_circumference_error


@transform(
    id="T3.02",
    layer=Layer.SCORING,
    dependencies=["T3.01"],
    description="Score each hull against an idealized circle",
)
def circumference_error(ctx: FrameContext) -> None:
    increment = ctx.config.angle_increment
    ctx.circularity_errors = [
        circle_circumference_error(hull, d.width, d.height, d.center_x, d.center_y, increment)
        for hull, d in zip(ctx.convex_hulls, ctx.hull_dimensions)
    ]
