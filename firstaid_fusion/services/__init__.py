"""Fusion services: source adapters, fusion pipeline and its boundary helpers."""

from .adapters import adapt_objects, adapt_text, adapt_labels
from .fusion_service import FusionService, fuse_annotation, fuse_or_mock, best_by_label
from .annotation_parser import parse_annotation, load_annotation_file
from .mock_detector import mock_fusion_result
from .summary_formatter import build_heuristic_summary, build_summary_context

__all__ = [
    "adapt_objects", "adapt_text", "adapt_labels",
    "FusionService", "fuse_annotation", "fuse_or_mock", "best_by_label",
    "parse_annotation", "load_annotation_file",
    "mock_fusion_result",
    "build_heuristic_summary", "build_summary_context",
]
