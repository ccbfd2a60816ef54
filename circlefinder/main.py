"""Analyzer factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from circlefinder.config import settings
from circlefinder.engine.analyzer import ImageAnalyzer
from circlefinder.engine.config import ClassifierConfig
from circlefinder.utils.image_processing import ImageProcessingUtils

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.circlefinder_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_analyzer(
    config: ClassifierConfig | None = None,
    processing: ImageProcessingUtils | None = None,
) -> ImageAnalyzer:
    # Import all transform modules to trigger registration
    _register_transforms()
    return ImageAnalyzer(processing=processing, config=config)


def _register_transforms() -> None:
    """Import all transform modules so @transform decorators fire."""
    import importlib
    import pkgutil

    for layer_name in ["layer0", "layer1", "layer2", "layer3", "layer4"]:
        package_name = f"circlefinder.engine.{layer_name}"
        try:
            package = importlib.import_module(package_name)
            for _, module_name, _ in pkgutil.iter_modules(package.__path__):
                importlib.import_module(f"{package_name}.{module_name}")
        except ModuleNotFoundError:
            pass
