"""Pytest configuration and shared fixtures for the fusion engine tests."""
import sys
import logging
import pytest
from pathlib import Path

# Add the project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from firstaid_fusion.core.entities import (
    AnnotationResult, FusionSettings, LabelAnnotation, LocalizedObject, Vertex,
)
from firstaid_fusion.core.logging_config import get_logging_manager

ENV_VARS = (
    "FUSION_MIN_OBJECT_SCORE", "FUSION_MIN_LABEL_SCORE", "FUSION_TEXT_HIT_SCORE",
    "FUSION_NMS_IOU_THRESHOLD", "DETECTOR", "LOG_LEVEL", "DEBUG_LOGGING",
)


def box_vertices(x0, y0, x1, y1):
    """Four-corner polygon for a normalized box."""
    return (Vertex(x0, y0), Vertex(x1, y0), Vertex(x1, y1), Vertex(x0, y1))


def make_object(name, score, box=None):
    """LocalizedObject helper; ``box=None`` gives an object with no polygon."""
    return LocalizedObject(name=name, score=score, vertices=box_vertices(*box) if box else ())


@pytest.fixture
def settings():
    """Default fusion tunables."""
    return FusionSettings()


@pytest.fixture
def annotation():
    """Factory for AnnotationResult built from short-hand tuples."""
    def _build(objects=(), text=None, labels=()):
        return AnnotationResult(
            objects=tuple(make_object(*o) for o in objects),
            text=text,
            labels=tuple(LabelAnnotation(description=d, score=s) for d, s in labels),
        )
    return _build


@pytest.fixture
def vision_response():
    """A detector response in the hosted vision API's JSON shape."""
    return {
        "localizedObjectAnnotations": [
            {
                "name": "Towel",
                "score": 0.82,
                "boundingPoly": {"normalizedVertices": [
                    {"x": 0.1, "y": 0.3}, {"x": 0.3, "y": 0.3},
                    {"x": 0.3, "y": 0.5}, {"x": 0.1, "y": 0.5},
                ]},
            },
            {
                "name": "Mouse",
                "score": 0.4,
                "boundingPoly": {"normalizedVertices": [
                    {"x": 0.6, "y": 0.6}, {"x": 0.7, "y": 0.7},
                ]},
            },
        ],
        "textAnnotations": [
            {"description": "Sterile BANDAGE\n10 pcs"},
            {"description": "Sterile"},
        ],
        "labelAnnotations": [
            {"description": "Keyboard", "score": 0.91},
            {"description": "Textile", "score": 0.95},
        ],
    }


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate config loading from the host environment and any stray .env file."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def reset_logging():
    """Undo global logging configuration done by the code under test."""
    yield
    get_logging_manager().reset()
    logging.getLogger().setLevel(logging.WARNING)
