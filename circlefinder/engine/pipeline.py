"""Pipeline orchestrator — runs transforms in dependency order on one frame."""

from __future__ import annotations

import logging
import time

from circlefinder.engine.config import ClassifierConfig
from circlefinder.engine.context import FrameContext
from circlefinder.engine.registry import Layer, TransformRegistry, get_registry
from circlefinder.utils.image_processing import ImageProcessingUtils

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the transform pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: ClassifierConfig | None = None,
        processing: ImageProcessingUtils | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or ClassifierConfig()
        self.processing = processing or ImageProcessingUtils()

    def run(self, ctx: FrameContext, targets: set[str] | None = None) -> FrameContext:
        """Run the pipeline on the given context.

        ``targets`` limits the run to those transforms plus their dependencies.
        """
        start = time.perf_counter()
        self._bind(ctx)

        skip_ids = self._adaptive_gate(ctx)
        requested = targets if targets is not None else {s.id for s in self.registry.all()}
        ordered = self.registry.resolve_order(requested - skip_ids)

        logger.info(
            "Pipeline: %d transforms queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                logger.debug("  %s completed in %.1fms", spec.id, (time.perf_counter() - t0) * 1000)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        logger.info(
            "Pipeline complete: %d/%d transforms in %.1fms",
            len(ctx.completed_transforms),
            len(ordered),
            (time.perf_counter() - start) * 1000,
        )
        return ctx

    def run_layer(self, ctx: FrameContext, layer: Layer) -> FrameContext:
        """Run only transforms in a specific layer."""
        self._bind(ctx)
        for spec in self.registry.get_layer(layer):
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx

    def _bind(self, ctx: FrameContext) -> None:
        ctx.config = self.config
        ctx.processing = self.processing

    def _adaptive_gate(self, ctx: FrameContext) -> set[str]:
        """Transforms tagged "debug" only run while the debug overlay is enabled."""
        if ctx.config.debug_overlay:
            return set()
        return {s.id for s in self.registry.all() if "debug" in s.tags}


def create_pipeline(
    config: ClassifierConfig | None = None,
    processing: ImageProcessingUtils | None = None,
) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config, processing=processing)
