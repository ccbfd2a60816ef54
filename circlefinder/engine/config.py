"""Classifier configuration — named constants of the circle classification stage."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class ClassifierConfig:
    """Tunables shared by every transform of one pipeline."""

    # Angular step between samples on the ideal circle (roughly π/6, 12 samples)
    angle_increment: float = 0.1667 * math.pi

    # Minimum object size as a fraction of the frame width
    relative_object_size_threshold: float = 0.1

    # Upper bound on convex hulls evaluated per frame
    max_candidates: int = 3

    # Repeat the first hull vertex at the end so the overlay closes visually
    hull_closed: bool = True

    # Debug overlay
    debug_overlay: bool = True
    line_thickness: int = 3
    candidate_color: tuple[int, ...] = (0x80, 0x60, 0xFF)
    winner_color: tuple[int, ...] = (0x80, 0x10, 0x10)

    def min_object_size(self, image_width: int) -> int:
        """Minimum `width` metric an object needs to become a candidate."""
        return int(image_width * self.relative_object_size_threshold)
