"""Per-frame detection report."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CircleDetection(BaseModel):
    found: bool = False
    center_x: int = 0
    center_y: int = 0
    width: int = 0
    height: int = 0
    error: int = -1
    candidate_count: int = 0
    points: list[tuple[int, int]] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    errors: dict[str, str] = Field(default_factory=dict)
