"""Canned result served when the real detector is disabled or unavailable.

Keeps the dashboard usable without detector credentials. The fusion engine is
not involved on this path.
"""
from __future__ import annotations
import logging

from ..core.catalog import get_item
from ..core.entities import (
    PRIORITY_ORDER, BoxedFinding, Detection, Finding, FusionResult, NormalizedBox,
)

logger = logging.getLogger(__name__)

_MOCK_ITEMS = (
    ("clean_cloth", NormalizedBox(0.12, 0.35, 0.32, 0.55), 0.82),
    ("zip_bag", NormalizedBox(0.55, 0.40, 0.75, 0.68), 0.76),
    ("cooking_oil", NormalizedBox(0.30, 0.20, 0.42, 0.36), 0.70),
)


def mock_fusion_result() -> FusionResult:
    logger.info("Detector disabled, serving mock result")
    boxed = []
    findings = {p: [] for p in PRIORITY_ORDER}
    for i, (key, box, score) in enumerate(_MOCK_ITEMS):
        item = get_item(key)
        det = Detection(
            box=box,
            raw_label=item.label,
            score=score,
            priority=item.priority,
            matched_key=item.key,
            matched_label=item.label,
        )
        boxed.append(BoxedFinding(id=f"b{i}", detection=det))
        findings[item.priority].append(Finding(label=item.label, confidence=score, key=item.key))
    return FusionResult(boxed_findings=boxed, prioritized_findings=findings)
