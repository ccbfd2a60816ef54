"""T0.01 — Object Map.

Label connected foreground blobs and renumber them densely into 1..object_count.
"""

from __future__ import annotations

from circlefinder.engine.context import FrameContext
from circlefinder.engine.registry import Layer, transform


@transform(
    id="T0.01",
    layer=Layer.LABELING,
    description="Build and organize the object label grid",
    tags={"always"},
)
def object_map(ctx: FrameContext) -> None:
    grid = ctx.processing.create_object_map(ctx.image, ctx.width, ctx.height, ctx.transform_fn)
    if grid is None:
        ctx.object_map = None
        ctx.object_count = 0
        return

    ctx.object_count = ctx.processing.organize_object_map(grid, ctx.pixel_count)
    ctx.object_map = grid
