"""Domain entities (data-only structures) used across services."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import ConfigError


class Priority(str, Enum):
    """Priority tier attached to every finding."""
    GREEN = "green"     # take
    ORANGE = "orange"   # take if room
    RED = "red"         # leave / unknown


PRIORITY_ORDER: Tuple[Priority, ...] = (Priority.GREEN, Priority.ORANGE, Priority.RED)


@dataclass(slots=True, frozen=True)
class NormalizedBox:
    """Image-relative box (x0,y0,x1,y1) in [0,1]. Zero area means no location."""
    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self):
        for v in (self.x0, self.y0, self.x1, self.y1):
            if not 0.0 <= v <= 1.0:
                raise ValueError(f"Box coordinate out of [0,1]: {v}")
        if self.x0 > self.x1 or self.y0 > self.y1:
            raise ValueError(f"Box corners out of order: {self.as_tuple()}")

    def area(self) -> float:
        return max(0.0, self.x1 - self.x0) * max(0.0, self.y1 - self.y0)

    @property
    def is_located(self) -> bool:
        return self.area() > 0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x0, self.y0, self.x1, self.y1)

    def to_dict(self) -> Dict[str, float]:
        return {"x0": self.x0, "y0": self.y0, "x1": self.x1, "y1": self.y1}


EMPTY_BOX = NormalizedBox(0.0, 0.0, 0.0, 0.0)


@dataclass(slots=True, frozen=True)
class CatalogItem:
    key: str
    label: str
    priority: Priority
    synonyms: Tuple[str, ...]
    detector_hints: Tuple[str, ...] = ()
    notes: str = ""


@dataclass(slots=True, frozen=True)
class Detection:
    """Intermediate record produced by the source adapters.

    ``score`` keeps the scale of the modality that produced it; the fusion
    step compares scores from different modalities directly.
    """
    box: NormalizedBox
    raw_label: str
    score: float
    priority: Priority
    matched_key: Optional[str] = None
    matched_label: Optional[str] = None
    source: str = "object"  # object|text|label

    @property
    def label(self) -> str:
        return self.matched_label or self.raw_label

    @property
    def dedup_key(self) -> str:
        return self.label.lower()

    @property
    def has_box(self) -> bool:
        return self.box.is_located


@dataclass(slots=True, frozen=True)
class Finding:
    label: str
    confidence: float
    key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"label": self.label, "confidence": self.confidence}
        if self.key is not None:
            d["key"] = self.key
        return d


@dataclass(slots=True, frozen=True)
class UnboxedFinding:
    """Item recognized through text or labels that never received a location."""
    label: str
    confidence: float
    priority: Priority
    key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "label": self.label,
            "confidence": self.confidence,
            "priority": self.priority.value,
        }
        if self.key is not None:
            d["key"] = self.key
        return d


@dataclass(slots=True, frozen=True)
class BoxedFinding:
    id: str
    detection: Detection

    @property
    def box(self) -> NormalizedBox:
        return self.detection.box

    @property
    def label(self) -> str:
        return self.detection.label

    @property
    def score(self) -> float:
        return self.detection.score

    @property
    def priority(self) -> Priority:
        return self.detection.priority

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "box": self.box.to_dict(),
            "label": self.label,
            "score": self.score,
            "priority": self.priority.value,
        }


def _empty_findings() -> Dict[Priority, List[Finding]]:
    return {p: [] for p in PRIORITY_ORDER}


@dataclass(slots=True)
class FusionResult:
    boxed_findings: List[BoxedFinding] = field(default_factory=list)
    prioritized_findings: Dict[Priority, List[Finding]] = field(default_factory=_empty_findings)
    unboxed_findings: List[UnboxedFinding] = field(default_factory=list)
    raw_text: str = ""

    def findings_for(self, priority: Priority) -> List[Finding]:
        return self.prioritized_findings.get(priority, [])

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape consumed by the dashboard and the summarization service."""
        return {
            "ok": True,
            "boxes": [b.to_dict() for b in self.boxed_findings],
            "findings": {
                p.value: [f.to_dict() for f in self.findings_for(p)] for p in PRIORITY_ORDER
            },
            "unboxed": [u.to_dict() for u in self.unboxed_findings],
            "ocrText": self.raw_text,
        }


@dataclass(slots=True, frozen=True)
class FusionSettings:
    """The four tunables of the fusion engine, injected per call."""
    min_object_score: float = 0.55
    min_label_score: float = 0.65
    text_hit_score: float = 0.60
    nms_iou_threshold: float = 0.45

    def __post_init__(self):
        for name in ("min_object_score", "min_label_score", "text_hit_score", "nms_iou_threshold"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be within [0, 1], got {value}")


# --- Raw annotation (detector output) ---

@dataclass(slots=True, frozen=True)
class Vertex:
    x: Optional[float] = None
    y: Optional[float] = None


@dataclass(slots=True, frozen=True)
class LocalizedObject:
    name: str = "object"
    score: float = 0.0
    vertices: Tuple[Vertex, ...] = ()
    normalized: bool = True  # False when vertices are pixel coordinates


@dataclass(slots=True, frozen=True)
class LabelAnnotation:
    description: str = ""
    score: float = 0.0


@dataclass(slots=True, frozen=True)
class AnnotationResult:
    objects: Tuple[LocalizedObject, ...] = ()
    text: Optional[str] = None
    labels: Tuple[LabelAnnotation, ...] = ()
    image_size: Optional[Tuple[int, int]] = None  # (width, height)
