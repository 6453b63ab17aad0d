"""Unit tests for the summary payload and the offline heuristic summary."""
from firstaid_fusion.core.catalog import get_item
from firstaid_fusion.core.entities import FusionResult
from firstaid_fusion.services.fusion_service import fuse_annotation
from firstaid_fusion.services.summary_formatter import (
    EMPTY_SUMMARY, build_heuristic_summary, build_summary_context,
)


def test_empty_result():
    assert build_heuristic_summary(FusionResult()) == EMPTY_SUMMARY


def test_sections_and_unboxed(annotation):
    result = fuse_annotation(annotation(objects=[("towel", 0.82, (0.1, 0.3, 0.3, 0.5))],
                                        text="Sterile bandage"))
    assert build_heuristic_summary(result) == (
        "**USE THESE**\n"
        "- Clean cloth / towel\n"
        "- Bandages / gauze\n"
        "**IF AVAILABLE**\n"
        "- Bandages / gauze"
    )


def test_tiers_in_priority_order(annotation):
    result = fuse_annotation(annotation(labels=[("mouse", 0.9), ("radio", 0.8), ("towel", 0.7)]))
    lines = build_heuristic_summary(result).splitlines()
    headers = [line for line in lines if line.startswith("**")]
    assert headers == ["**USE THESE**", "**NICE TO HAVE**", "**LEAVE**", "**IF AVAILABLE**"]


def test_notes_appended(annotation):
    result = fuse_annotation(annotation(labels=[("mouse", 0.9)]))
    note = get_item("mouse").notes
    assert build_heuristic_summary(result, include_notes=True) == (
        f"**LEAVE**\n- Computer mouse: {note}\n**IF AVAILABLE**\n- Computer mouse: {note}"
    )


def test_unmatched_labels_listed_without_notes(annotation):
    result = fuse_annotation(annotation(objects=[("Zebra", 0.9, (0.1, 0.1, 0.2, 0.2))]))
    assert build_heuristic_summary(result, include_notes=True) == "**LEAVE**\n- Zebra"


def test_summary_context_keys(annotation):
    result = fuse_annotation(annotation(objects=[("towel", 0.82, (0.1, 0.3, 0.3, 0.5))], text="towel"))
    context = build_summary_context(result)
    assert set(context) == {"ocrText", "boxes", "findings", "unboxed"}
    assert context["ocrText"] == "towel"
    assert context["boxes"][0]["label"] == "Clean cloth / towel"
    assert context["findings"]["green"] == [
        {"label": "Clean cloth / towel", "confidence": 0.82, "key": "clean_cloth"}
    ]
    assert context["unboxed"] == []
