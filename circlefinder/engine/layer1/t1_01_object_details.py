"""T1.01 — Object Details. ★★★

Per-object area plus row/column density profiles in one pass over the grid:
width = most pixels in any row, height = most pixels in any column, and the
first row/column reaching those maxima as the center.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from circlefinder.engine.context import FrameContext, ObjectDetails
from circlefinder.engine.registry import Layer, transform


def label_grid(object_map: NDArray, width: int, height: int) -> NDArray:
    """View a row-major label grid as (height, width)."""
    grid = np.asarray(object_map)
    if grid.size != width * height:
        raise ValueError(f"Label grid holds {grid.size} pixels, expected {width}x{height}")
    return grid.reshape(height, width)


def extract_object_details(
    object_map: NDArray,
    width: int,
    height: int,
    object_count: int,
) -> list[ObjectDetails]:
    """One ObjectDetails per id in 1..object_count, in id order.

    Ids with no pixels get all-zero metrics.
    """
    grid = label_grid(object_map, width, height)
    details: list[ObjectDetails] = []

    for object_id in range(1, object_count + 1):
        mask = grid == object_id
        row_counts = mask.sum(axis=1)
        column_counts = mask.sum(axis=0)

        # argmax picks the first row/column with the maximum count
        center_y = int(np.argmax(row_counts)) if height else 0
        center_x = int(np.argmax(column_counts)) if width else 0

        details.append(
            ObjectDetails(
                id=object_id,
                area=int(row_counts.sum()),
                width=int(row_counts[center_y]) if height else 0,
                height=int(column_counts[center_x]) if width else 0,
                center_x=center_x,
                center_y=center_y,
            )
        )

    return details


@transform(
    id="T1.01",
    layer=Layer.MEASUREMENT,
    dependencies=["T0.01"],
    description="Extract per-object area and density-profile extents",
)
def object_details(ctx: FrameContext) -> None:
    if ctx.object_map is None:
        ctx.object_details = []
        return
    ctx.object_details = extract_object_details(ctx.object_map, ctx.width, ctx.height, ctx.object_count)
