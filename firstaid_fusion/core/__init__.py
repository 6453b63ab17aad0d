"""Core domain entities, catalog and errors."""

from .entities import (
    Priority, PRIORITY_ORDER, NormalizedBox, EMPTY_BOX, CatalogItem, Detection,
    Finding, UnboxedFinding, BoxedFinding, FusionResult, FusionSettings,
    Vertex, LocalizedObject, LabelAnnotation, AnnotationResult,
)
from .exceptions import ApplicationError, ConfigError, AnnotationError, DetectorUnavailableError
from .catalog import FIRST_AID_CATALOG, categorize, get_item

__all__ = [
    "Priority", "PRIORITY_ORDER", "NormalizedBox", "EMPTY_BOX", "CatalogItem", "Detection",
    "Finding", "UnboxedFinding", "BoxedFinding", "FusionResult", "FusionSettings",
    "Vertex", "LocalizedObject", "LabelAnnotation", "AnnotationResult",
    "ApplicationError", "ConfigError", "AnnotationError", "DetectorUnavailableError",
    "FIRST_AID_CATALOG", "categorize", "get_item",
]
