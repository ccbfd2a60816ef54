"""T1.02 — Large Objects.

Rank objects by width × height (largest first) and keep the ids whose width
metric reaches the minimum size. Only width is checked: an object that is
wide enough but short still qualifies.
"""

from __future__ import annotations

from numpy.typing import NDArray

from circlefinder.engine.context import FrameContext, ObjectDetails
from circlefinder.engine.registry import Layer, transform
from circlefinder.engine.layer1.t1_01_object_details import extract_object_details


def sort_object_details_by_size(details: list[ObjectDetails]) -> list[ObjectDetails]:
    return sorted(details, key=lambda d: d.size, reverse=True)


def filter_large_object_ids(details: list[ObjectDetails], min_size: int) -> list[int]:
    """Ids of objects with width >= min_size, in descending width × height order."""
    return [d.id for d in sort_object_details_by_size(details) if d.width >= min_size]


def resolve_large_object_ids(
    object_map: NDArray,
    width: int,
    height: int,
    object_count: int,
    min_size: int,
) -> list[int]:
    details = extract_object_details(object_map, width, height, object_count)
    return filter_large_object_ids(details, min_size)


@transform(
    id="T1.02",
    layer=Layer.MEASUREMENT,
    dependencies=["T1.01"],
    description="Filter objects by a frame-relative minimum size",
)
def large_objects(ctx: FrameContext) -> None:
    min_size = ctx.config.min_object_size(ctx.width)
    ctx.large_object_ids = filter_large_object_ids(ctx.object_details, min_size)
