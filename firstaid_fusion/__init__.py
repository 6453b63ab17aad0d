"""
First-aid detection fusion engine.

Merges object, OCR text and whole-image label annotations into a
deduplicated, prioritized set of findings.
"""

__version__ = "1.0.0"

from .config.settings import Config, load_config
from .core.entities import AnnotationResult, FusionResult, FusionSettings, Priority
from .core.catalog import categorize
from .services.fusion_service import FusionService, fuse_annotation

__all__ = [
    "Config", "load_config",
    "AnnotationResult", "FusionResult", "FusionSettings", "Priority",
    "categorize", "FusionService", "fuse_annotation",
]
