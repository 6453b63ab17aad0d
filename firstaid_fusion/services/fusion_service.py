"""Detection fusion: adapters -> thresholds -> NMS -> label dedup -> findings."""
from __future__ import annotations
import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..core.entities import (
    PRIORITY_ORDER, AnnotationResult, BoxedFinding, Detection, Finding,
    FusionResult, FusionSettings, Priority, UnboxedFinding,
)
from ..core.exceptions import DetectorUnavailableError
from ..utils.geometry import nms
from .adapters import adapt_labels, adapt_objects, adapt_text
from .mock_detector import mock_fusion_result

logger = logging.getLogger(__name__)


def best_by_label(detections: Iterable[Detection]) -> List[Detection]:
    """Keep the highest-scoring detection per canonical (or raw) label.

    Ties go to the detection seen first; output follows first-seen label order.
    """
    best: Dict[str, Detection] = {}
    for d in detections:
        curr = best.get(d.dedup_key)
        if curr is None or d.score > curr.score:
            best[d.dedup_key] = d
    return list(best.values())


class FusionService:
    """Stateless fusion engine; one ``fuse`` call per completed annotation."""

    def __init__(self, settings: Optional[FusionSettings] = None):
        self.settings = settings or FusionSettings()

    def collect_candidates(self, annotation: AnnotationResult) -> List[Detection]:
        """Run the three adapters; boxed objects first, then text, then labels."""
        s = self.settings
        return [
            *adapt_objects(annotation.objects, s, annotation.image_size),
            *adapt_text(annotation.text, s),
            *adapt_labels(annotation.labels, s),
        ]

    def fuse(self, annotation: AnnotationResult) -> FusionResult:
        candidates = self.collect_candidates(annotation)
        boxed = [c for c in candidates if c.has_box]
        unboxed = [c for c in candidates if not c.has_box]

        boxed_kept = nms(boxed, self.settings.nms_iou_threshold)
        deduped = best_by_label([*boxed_kept, *unboxed])

        prioritized: Dict[Priority, List[Finding]] = {p: [] for p in PRIORITY_ORDER}
        for d in deduped:
            prioritized[d.priority].append(Finding(label=d.label, confidence=d.score, key=d.matched_key))

        boxed_labels = {d.dedup_key for d in boxed_kept}
        unboxed_findings = [
            UnboxedFinding(label=d.label, confidence=d.score, priority=d.priority, key=d.matched_key)
            for d in deduped
            if not d.has_box and d.dedup_key not in boxed_labels
        ]

        boxed_findings = [BoxedFinding(id=f"b{i}", detection=d) for i, d in enumerate(boxed_kept)]

        logger.debug(
            f"Fusion: {len(candidates)} candidates ({len(boxed)} boxed), "
            f"{len(boxed_kept)} after NMS, {len(deduped)} unique labels, "
            f"{len(unboxed_findings)} unboxed"
        )
        return FusionResult(
            boxed_findings=boxed_findings,
            prioritized_findings=prioritized,
            unboxed_findings=unboxed_findings,
            raw_text=annotation.text or "",
        )


def fuse_annotation(annotation: AnnotationResult,
                    settings: Optional[FusionSettings] = None) -> FusionResult:
    """Convenience wrapper around ``FusionService(settings).fuse(annotation)``."""
    return FusionService(settings).fuse(annotation)


def fuse_or_mock(fetch_annotation: Callable[[], AnnotationResult],
                 settings: Optional[FusionSettings] = None) -> FusionResult:
    """Fetch an annotation and fuse it; serve the mock result if the detector is down.

    ``fetch_annotation`` signals an upstream failure by raising
    ``DetectorUnavailableError``. The engine is not invoked in that case.
    """
    try:
        annotation = fetch_annotation()
    except DetectorUnavailableError as e:
        logger.warning(f"Detector unavailable, serving mock result: {e}")
        return mock_fusion_result()
    return fuse_annotation(annotation, settings)
