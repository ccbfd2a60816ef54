"""T4.02 — Debug Overlay.

Draw every candidate hull in the candidate color, then redraw the winner in
the winner color. Hulls are open polylines: the closing edge is only drawn
when the hull repeats its first vertex.
"""

from __future__ import annotations

from numpy.typing import NDArray

from circlefinder.engine.context import ConvexHull, FrameContext, TransformFn
from circlefinder.engine.registry import Layer, transform
from circlefinder.utils.image_processing import ImageProcessingUtils


def draw_convex_hull(
    processing: ImageProcessingUtils,
    image: NDArray,
    width: int,
    height: int,
    hull: ConvexHull,
    transform_fn: TransformFn | None,
    thickness: int,
    color: tuple[int, ...],
) -> None:
    for i in range(len(hull) - 1):
        processing.draw_line(image, width, height, hull[i], hull[i + 1], transform_fn, thickness, *color)


@transform(
    id="T4.02",
    layer=Layer.SELECTION,
    dependencies=["T4.01"],
    description="Annotate the frame with candidate and winning hulls",
    tags={"debug"},
)
def debug_overlay(ctx: FrameContext) -> None:
    cfg = ctx.config
    for hull in ctx.convex_hulls:
        draw_convex_hull(
            ctx.processing, ctx.image, ctx.width, ctx.height, hull,
            ctx.transform_fn, cfg.line_thickness, cfg.candidate_color,
        )

    if ctx.best_hull is not None:
        draw_convex_hull(
            ctx.processing, ctx.image, ctx.width, ctx.height, ctx.best_hull,
            ctx.transform_fn, cfg.line_thickness, cfg.winner_color,
        )
