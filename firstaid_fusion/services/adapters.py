"""Source adapters: one per detector modality, all emitting ``Detection`` records.

Object and label adapters match the catalog by substring (``categorize``); the
text adapter only accepts exact token or bigram hits, since a whole OCR
transcript would otherwise trigger on common words.
"""
from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from ..core.catalog import FIRST_AID_CATALOG, categorize
from ..core.entities import (
    EMPTY_BOX, Detection, FusionSettings, LabelAnnotation, LocalizedObject,
)
from ..utils.geometry import poly_to_box
from ..utils.text import token_set

logger = logging.getLogger(__name__)


def adapt_objects(objects: Iterable[LocalizedObject], settings: FusionSettings,
                  image_size: Optional[Tuple[int, int]] = None) -> List[Detection]:
    """Localized objects -> boxed detections (below ``min_object_score`` dropped)."""
    out: List[Detection] = []
    for obj in objects:
        score = float(obj.score or 0.0)
        raw_label = obj.name or "object"
        if not score >= settings.min_object_score:
            logger.debug(f"Dropping object '{raw_label}' (score {score:.3f} < {settings.min_object_score})")
            continue
        box = poly_to_box(obj.vertices, None if obj.normalized else image_size)
        priority, match = categorize(raw_label)
        out.append(Detection(
            box=box,
            raw_label=raw_label,
            score=score,
            priority=priority,
            matched_key=match.key if match else None,
            matched_label=match.label if match else None,
            source="object",
        ))
    return out


def adapt_text(text: Optional[str], settings: FusionSettings) -> List[Detection]:
    """OCR transcript -> one unboxed detection per catalog item named in it."""
    if not text:
        return []
    tokens = token_set(text)
    out: List[Detection] = []
    for it in FIRST_AID_CATALOG:
        hay = {it.label.lower(), *it.synonyms}
        if hay & tokens:
            out.append(Detection(
                box=EMPTY_BOX,
                raw_label=it.label,
                score=settings.text_hit_score,
                priority=it.priority,
                matched_key=it.key,
                matched_label=it.label,
                source="text",
            ))
    return out


def adapt_labels(labels: Iterable[LabelAnnotation], settings: FusionSettings) -> List[Detection]:
    """Whole-image labels -> unboxed detections, kept only when they hit the catalog."""
    out: List[Detection] = []
    for lab in labels:
        desc = lab.description or ""
        score = float(lab.score or 0.0)
        priority, match = categorize(desc)
        if match is None or not score >= settings.min_label_score:
            continue
        out.append(Detection(
            box=EMPTY_BOX,
            raw_label=desc,
            score=score,
            priority=priority,
            matched_key=match.key,
            matched_label=match.label,
            source="label",
        ))
    return out
