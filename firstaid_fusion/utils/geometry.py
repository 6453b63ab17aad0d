"""Geometry and bounding box utilities."""
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from ..core.entities import EMPTY_BOX, NormalizedBox, Vertex

IOU_EPSILON = 1e-6

T = TypeVar("T")


def area(box: NormalizedBox) -> float:
    """Area of a normalized box; degenerate boxes have zero area."""
    return box.area()


def iou(a: NormalizedBox, b: NormalizedBox) -> float:
    """Calculate Intersection over Union (IoU) for two boxes."""
    xA = max(a.x0, b.x0)
    yA = max(a.y0, b.y0)
    xB = min(a.x1, b.x1)
    yB = min(a.y1, b.y1)
    inter = max(0.0, xB - xA) * max(0.0, yB - yA)
    denom = a.area() + b.area() - inter
    return inter / max(IOU_EPSILON, denom)


def _iou_against(box: np.ndarray, kept: np.ndarray) -> np.ndarray:
    """IoU of one (4,) box against every row of a (K,4) array."""
    xA = np.maximum(box[0], kept[:, 0])
    yA = np.maximum(box[1], kept[:, 1])
    xB = np.minimum(box[2], kept[:, 2])
    yB = np.minimum(box[3], kept[:, 3])
    inter = np.clip(xB - xA, 0, None) * np.clip(yB - yA, 0, None)
    area_box = (box[2] - box[0]) * (box[3] - box[1])
    area_kept = (kept[:, 2] - kept[:, 0]) * (kept[:, 3] - kept[:, 1])
    return inter / np.maximum(IOU_EPSILON, area_box + area_kept - inter)


def nms(candidates: Sequence[T], threshold: float) -> List[T]:
    """Greedy non-max suppression over anything with ``.box`` and ``.score``.

    Candidates are visited by descending score (stable, so equal scores keep
    input order) and accepted only while their IoU with every accepted box is
    strictly below ``threshold``. Returns the accepted items, highest score first.
    """
    if not candidates:
        return []
    coords = np.array([c.box.as_tuple() for c in candidates], dtype=np.float64)
    scores = np.array([c.score for c in candidates], dtype=np.float64)
    order = np.argsort(-scores, kind="stable")
    kept_idx: List[int] = []
    for i in order:
        if kept_idx and np.any(_iou_against(coords[i], coords[kept_idx]) >= threshold):
            continue
        kept_idx.append(int(i))
    return [candidates[i] for i in kept_idx]


def poly_to_box(vertices: Sequence[Vertex],
                image_size: Optional[Tuple[int, int]] = None) -> NormalizedBox:
    """Bounding box of a vertex polygon, clamped to [0,1].

    Missing coordinates count as 0. Pixel vertices are divided by
    ``image_size`` (width, height) when it is known. An empty polygon gives a
    zero-area box.
    """
    if not vertices:
        return EMPTY_BOX
    pts = np.array(
        [[v.x if v.x is not None else 0.0, v.y if v.y is not None else 0.0] for v in vertices],
        dtype=np.float64,
    )
    pts[~np.isfinite(pts)] = 0.0
    if image_size:
        w, h = image_size
        if w > 0 and h > 0:
            pts /= np.array([w, h], dtype=np.float64)
    lo = np.clip(pts.min(axis=0), 0.0, 1.0)
    hi = np.clip(pts.max(axis=0), 0.0, 1.0)
    return NormalizedBox(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))
