"""Labeling, point extraction, hull construction and line drawing on raw frames.

Default implementation of the image-processing collaborator used by the
engine. No engine imports; anything with the same methods can be injected
into the pipeline instead.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import ConvexHull as QhullHull
from scipy.spatial import QhullError
from skimage.draw import line
from skimage.measure import label

logger = logging.getLogger(__name__)

# Largest object id a uint16 label grid can hold
_MAX_LABEL = int(np.iinfo(np.uint16).max)


def foreground_mask(image: NDArray) -> NDArray[np.bool_]:
    """A pixel is foreground when any of its channels is non-zero."""
    if image.ndim == 2:
        return image != 0
    return np.any(image != 0, axis=2)


class ImageProcessingUtils:
    """scikit-image / scipy backed collaborator."""

    # 8-connected labeling
    connectivity: int = 2

    def create_object_map(
        self,
        image: NDArray,
        width: int,
        height: int,
        transform_fn: Callable[[int, int], tuple[int, int]] | None = None,
    ) -> NDArray[np.uint16] | None:
        """Label connected foreground blobs. None when the frame is unusable.

        With a ``transform_fn``, grid position (x, y) reads the source pixel
        at ``transform_fn(x, y)``; positions mapped outside the frame are
        background.
        """
        if image is None or image.size == 0 or width <= 0 or height <= 0:
            return None
        if image.shape[0] != height or image.shape[1] != width:
            logger.warning(
                "Object map: frame is %dx%d, expected %dx%d",
                image.shape[1], image.shape[0], width, height,
            )
            return None

        mask = foreground_mask(image)
        if transform_fn is not None:
            mask = self._remap(mask, width, height, transform_fn)

        labels, count = label(mask, connectivity=self.connectivity, return_num=True)
        if count > _MAX_LABEL:
            logger.warning("Object map: %d objects exceed the uint16 label range", count)
            return None
        return labels.astype(np.uint16)

    @staticmethod
    def _remap(
        mask: NDArray[np.bool_],
        width: int,
        height: int,
        transform_fn: Callable[[int, int], tuple[int, int]],
    ) -> NDArray[np.bool_]:
        remapped = np.zeros_like(mask)
        for y in range(height):
            for x in range(width):
                src_x, src_y = transform_fn(x, y)
                if 0 <= src_x < width and 0 <= src_y < height:
                    remapped[y, x] = mask[src_y, src_x]
        return remapped

    def organize_object_map(self, object_map: NDArray[np.uint16], pixel_count: int) -> int:
        """Renumber labels in place into a dense 1..count range (row-major first appearance)."""
        if object_map.size != pixel_count:
            raise ValueError(f"Object map holds {object_map.size} pixels, expected {pixel_count}")

        flat = object_map.reshape(-1)
        present = flat[flat != 0]
        if present.size == 0:
            return 0

        ids, first_seen = np.unique(present, return_index=True)
        ordered_ids = ids[np.argsort(first_seen)]
        lookup = np.zeros(int(ids.max()) + 1, dtype=np.uint16)
        lookup[ordered_ids] = np.arange(1, len(ordered_ids) + 1, dtype=np.uint16)
        object_map[...] = lookup[object_map]
        return len(ordered_ids)

    def extract_sorted_object_points(
        self,
        object_map: NDArray[np.uint16],
        width: int,
        height: int,
        object_id: int,
    ) -> NDArray[np.int64] | None:
        """(x, y) points of one object sorted by x, then y. None if it has no pixels."""
        grid = np.asarray(object_map).reshape(height, width)
        ys, xs = np.nonzero(grid == object_id)
        if len(xs) == 0:
            return None
        order = np.lexsort((ys, xs))
        return np.column_stack([xs[order], ys[order]]).astype(np.int64)

    def create_convex_hull(self, points: NDArray[np.int64], closed: bool = True) -> NDArray[np.int64]:
        """Counter-clockwise hull vertices as an Nx2 int64 array.

        Collinear or tiny point sets fall back to their two extreme points.
        ``closed`` repeats the first vertex at the end.
        """
        pts = np.asarray(points, dtype=np.int64).reshape(-1, 2)
        if len(pts) == 0:
            return pts
        vertices = None
        if len(pts) >= 3:
            try:
                vertices = pts[QhullHull(pts).vertices]
            except QhullError:
                logger.debug("Degenerate hull over %d points", len(pts))

        if vertices is None:
            order = np.lexsort((pts[:, 1], pts[:, 0]))
            vertices = np.unique(pts[order[[0, -1]]], axis=0)

        if closed and len(vertices) > 0:
            vertices = np.vstack([vertices, vertices[:1]])
        return vertices

    def draw_line(
        self,
        image: NDArray,
        width: int,
        height: int,
        p1: Sequence[int],
        p2: Sequence[int],
        transform_fn: Callable[[int, int], tuple[int, int]] | None,
        thickness: int,
        *color: int,
    ) -> None:
        """Draw a thick segment into ``image`` in place.

        Color components go into the leading channels; a 2-D image receives
        the first component only.
        """
        rr, cc = line(int(p1[1]), int(p1[0]), int(p2[1]), int(p2[0]))
        half = max(thickness, 1) // 2
        offsets = np.arange(-half, max(thickness, 1) - half)
        dy, dx = np.meshgrid(offsets, offsets, indexing="ij")
        xs = (cc[:, None] + dx.ravel()[None, :]).ravel()
        ys = (rr[:, None] + dy.ravel()[None, :]).ravel()

        if transform_fn is not None:
            mapped = [transform_fn(int(x), int(y)) for x, y in zip(xs, ys)]
            xs = np.array([m[0] for m in mapped], dtype=np.int64)
            ys = np.array([m[1] for m in mapped], dtype=np.int64)

        inside = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
        xs, ys = xs[inside], ys[inside]

        if image.ndim == 2:
            image[ys, xs] = color[0]
        else:
            n = min(len(color), image.shape[2])
            image[ys, xs, :n] = color[:n]
