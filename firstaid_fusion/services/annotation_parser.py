"""Parse a detector response (hosted vision API JSON shape) into an ``AnnotationResult``.

Both the camelCase keys of the REST/JSON response and the snake_case keys of
the Python client's ``MessageToDict(preserving_proto_field_name=True)`` output
are accepted.
"""
from __future__ import annotations
import json
import logging
import math
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from ..core.entities import AnnotationResult, LabelAnnotation, LocalizedObject, Vertex
from ..core.exceptions import AnnotationError

logger = logging.getLogger(__name__)


def _get(d: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in d:
        return d[camel]
    return d.get(snake, default)


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        result = float(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    # NaN would slip past every score floor
    return result if math.isfinite(result) else default


def _as_str(value: Any, default: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return default


def _section(doc: Mapping[str, Any], camel: str, snake: str) -> Sequence[Any]:
    value = _get(doc, camel, snake)
    if value is None:
        return []
    if not isinstance(value, list):
        raise AnnotationError(f"'{camel}' must be a list, got {type(value).__name__}")
    return value


def _parse_vertices(raw: Any) -> Tuple[Vertex, ...]:
    if not isinstance(raw, list):
        return ()
    out: List[Vertex] = []
    for v in raw:
        if not isinstance(v, Mapping):
            out.append(Vertex())
            continue
        x, y = v.get("x"), v.get("y")
        out.append(Vertex(
            x=_as_float(x) if x is not None else None,
            y=_as_float(y) if y is not None else None,
        ))
    return tuple(out)


def _parse_object(raw: Any) -> Optional[LocalizedObject]:
    if not isinstance(raw, Mapping):
        logger.debug(f"Skipping non-object entry in localized objects: {raw!r}")
        return None
    poly = _get(raw, "boundingPoly", "bounding_poly") or {}
    if not isinstance(poly, Mapping):
        poly = {}
    normalized = _get(poly, "normalizedVertices", "normalized_vertices") or []
    pixel = poly.get("vertices") or []
    return LocalizedObject(
        name=_as_str(raw.get("name"), "object"),
        score=_as_float(raw.get("score")),
        vertices=_parse_vertices(normalized if normalized else pixel),
        normalized=bool(normalized) or not pixel,
    )


def _parse_label(raw: Any) -> Optional[LabelAnnotation]:
    if not isinstance(raw, Mapping):
        return None
    return LabelAnnotation(
        description=_as_str(raw.get("description"), ""),
        score=_as_float(raw.get("score")),
    )


def parse_annotation(doc: Any, image_size: Optional[Tuple[int, int]] = None) -> AnnotationResult:
    """Convert one detector response document into typed records.

    Raises:
        AnnotationError: if ``doc`` is not a mapping or a section has the wrong type.
    """
    if not isinstance(doc, Mapping):
        raise AnnotationError(f"Annotation must be a JSON object, got {type(doc).__name__}")

    objects = [o for o in map(_parse_object, _section(doc, "localizedObjectAnnotations",
                                                       "localized_object_annotations")) if o]
    labels = [l for l in map(_parse_label, _section(doc, "labelAnnotations",
                                                     "label_annotations")) if l]

    text: Optional[str] = None
    text_annots = _section(doc, "textAnnotations", "text_annotations")
    if text_annots and isinstance(text_annots[0], Mapping):
        text = _as_str(text_annots[0].get("description"), None)
    else:
        full = _get(doc, "fullTextAnnotation", "full_text_annotation")
        if isinstance(full, Mapping):
            text = _as_str(full.get("text"), None)

    logger.debug(f"Parsed annotation: {len(objects)} objects, {len(labels)} labels, "
                 f"text={'yes' if text else 'no'}")
    return AnnotationResult(
        objects=tuple(objects),
        text=text,
        labels=tuple(labels),
        image_size=image_size,
    )


def load_annotation_file(path: Union[str, Path],
                         image_size: Optional[Tuple[int, int]] = None) -> AnnotationResult:
    """Read and parse one annotation JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = json.load(f)
    except json.JSONDecodeError as e:
        raise AnnotationError(f"Invalid JSON in annotation file '{path}': {e}") from e
    except OSError as e:
        raise AnnotationError(f"Cannot read annotation file '{path}': {e}") from e
    # The REST batch endpoint wraps results as {"responses": [...]}
    if isinstance(doc, Mapping) and isinstance(doc.get("responses"), list) and doc["responses"]:
        doc = doc["responses"][0]
    return parse_annotation(doc, image_size=image_size)
