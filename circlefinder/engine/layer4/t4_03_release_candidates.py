"""T4.03 — Release Candidates.

Drop every non-winning hull so only the winner outlives the frame.
"""

from __future__ import annotations

from circlefinder.engine.context import FrameContext
from circlefinder.engine.registry import Layer, transform


@transform(
    id="T4.03",
    layer=Layer.SELECTION,
    dependencies=["T4.01"],
    description="Release all hulls except the winner",
)
def release_candidates(ctx: FrameContext) -> None:
    if ctx.best_hull is None:
        ctx.convex_hulls.clear()
        return
    ctx.convex_hulls[:] = [ctx.best_hull]
