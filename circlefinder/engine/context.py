"""FrameContext — the single mutable state object flowing through all transforms.

Per-object results → ObjectDetails
Per-hull results → FrameContext.hull_dimensions / circularity_errors (index-aligned
with FrameContext.convex_hulls until T4.03 releases the losing hulls)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from circlefinder.engine.config import ClassifierConfig
from circlefinder.utils.image_processing import ImageProcessingUtils

# Opaque pixel-coordinate remapping (x, y) -> (x', y'), e.g. for mirrored capture
TransformFn = Callable[[int, int], tuple[int, int]]

# Ordered (x, y) vertices of one object's convex boundary: Nx2 int64
ConvexHull = NDArray[np.int64]


@dataclass
class ObjectDetails:
    """Size summary of one labeled object.

    ``width`` is the largest pixel count found in any single row and
    ``height`` the largest found in any single column. They are density
    profiles, not a bounding box. ``center_y`` / ``center_x`` are the row and
    column that first reached those maxima.
    """

    id: int = 0
    area: int = 0
    width: int = 0
    height: int = 0
    center_x: int = 0
    center_y: int = 0

    @property
    def size(self) -> int:
        return self.width * self.height


@dataclass
class HullDimensions:
    """Axis-aligned extent of a convex hull and its (floor) midpoint."""

    width: int = 0
    height: int = 0
    center_x: int = 0
    center_y: int = 0


@dataclass
class FrameContext:
    """Shared state flowing through the entire pipeline for one frame."""

    # Binary frame: (H, W) or (H, W, C); any non-zero channel is foreground.
    # The debug overlay draws onto it in place.
    image: NDArray
    width: int
    height: int
    transform_fn: TransformFn | None = None
    max_candidates: int | None = None

    # Injected by the pipeline
    config: ClassifierConfig = field(default_factory=ClassifierConfig)
    processing: ImageProcessingUtils = field(default_factory=ImageProcessingUtils)

    # --- Layer 0: labeling ---
    object_map: NDArray[np.uint16] | None = None
    object_count: int = 0

    # --- Layer 1: measurement ---
    object_details: list[ObjectDetails] = field(default_factory=list)
    large_object_ids: list[int] = field(default_factory=list)

    # --- Layer 2: hulls ---
    convex_hulls: list[ConvexHull] = field(default_factory=list)
    candidate_count: int = 0

    # --- Layer 3: scoring ---
    hull_dimensions: list[HullDimensions] = field(default_factory=list)
    circularity_errors: list[int] = field(default_factory=list)

    # --- Layer 4: selection ---
    best_hull: ConvexHull | None = None
    best_index: int = -1
    best_error: int = -1

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_image(
        cls,
        image: NDArray,
        transform_fn: TransformFn | None = None,
        max_candidates: int | None = None,
    ) -> FrameContext:
        height, width = image.shape[:2]
        return cls(
            image=image,
            width=int(width),
            height=int(height),
            transform_fn=transform_fn,
            max_candidates=max_candidates,
        )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def candidate_limit(self) -> int:
        if self.max_candidates is not None:
            return self.max_candidates
        return self.config.max_candidates

    @property
    def best_dimensions(self) -> HullDimensions | None:
        if self.best_index < 0 or self.best_index >= len(self.hull_dimensions):
            return None
        return self.hull_dimensions[self.best_index]
