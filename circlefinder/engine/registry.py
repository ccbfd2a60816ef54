"""Transform registry — every pipeline stage is a standalone function registered via decorator.

Usage:
    @transform(id="T1.01", layer=Layer.MEASUREMENT, dependencies=["T0.01"])
    def object_details(ctx: FrameContext) -> None:
        ctx.object_details = extract_object_details(ctx.object_map, ...)

Adding a new stage = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from circlefinder.engine.context import FrameContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    LABELING = 0
    MEASUREMENT = 1
    HULLS = 2
    SCORING = 3
    SELECTION = 4


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["FrameContext"], None]
    dependencies: list[str] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)
    description: str = ""


class TransformRegistry:
    """Registry of pipeline stages keyed by transform id."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return sorted((s for s in self._transforms.values() if s.layer == layer), key=lambda s: s.id)

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def _with_dependencies(self, requested_ids: set[str]) -> dict[str, TransformSpec]:
        expanded: set[str] = set()
        stack = list(requested_ids)
        while stack:
            tid = stack.pop()
            if tid in expanded:
                continue
            expanded.add(tid)
            spec = self._transforms.get(tid)
            if spec:
                stack.extend(spec.dependencies)
        return {k: v for k, v in self._transforms.items() if k in expanded}

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Topological sort respecting dependencies. If requested_ids is None, run all.

        Requested ids pull in their transitive dependencies. Ready transforms run
        in id order, so stages of one layer keep their numbering.
        """
        pool = self._transforms if requested_ids is None else self._with_dependencies(requested_ids)

        waiting: dict[str, int] = {
            tid: sum(1 for dep in spec.dependencies if dep in pool) for tid, spec in pool.items()
        }
        ready = sorted(tid for tid, n in waiting.items() if n == 0)
        ordered: list[TransformSpec] = []

        while ready:
            tid = ready.pop(0)
            ordered.append(pool[tid])
            for other_id, other_spec in pool.items():
                if tid in other_spec.dependencies:
                    waiting[other_id] -= 1
                    if waiting[other_id] == 0:
                        ready.append(other_id)
                        ready.sort()

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    tags: set[str] | None = None,
    description: str = "",
):
    """Decorator to register a pipeline stage."""

    def decorator(fn: Callable[["FrameContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                tags=tags or set(),
                description=description,
            )
        )
        return fn

    return decorator
