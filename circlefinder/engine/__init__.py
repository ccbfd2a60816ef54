"""circlefinder circle classification engine."""

from circlefinder.engine.registry import transform, Layer, get_registry
from circlefinder.engine.context import FrameContext, ObjectDetails, HullDimensions
from circlefinder.engine.pipeline import Pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "FrameContext",
    "ObjectDetails",
    "HullDimensions",
    "Pipeline",
]
