"""
Findings formatter for the summarization step.

Turns a ``FusionResult`` into the payload handed to the chat/summarization
service, and into the plain heuristic summary shown when no such service is
configured.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.catalog import get_item
from ..core.entities import PRIORITY_ORDER, FusionResult, Priority

logger = logging.getLogger(__name__)

SECTION_TITLES: Dict[Priority, str] = {
    Priority.GREEN: "USE THESE",
    Priority.ORANGE: "NICE TO HAVE",
    Priority.RED: "LEAVE",
}
UNBOXED_TITLE = "IF AVAILABLE"
EMPTY_SUMMARY = "No items recognized."


def build_summary_context(result: FusionResult) -> Dict[str, Any]:
    """
    Payload for the summarization service.

    Same keys the dashboard posts to its chat endpoint: ocrText, boxes,
    findings, unboxed.
    """
    wire = result.to_dict()
    return {
        "ocrText": wire["ocrText"],
        "boxes": wire["boxes"],
        "findings": wire["findings"],
        "unboxed": wire["unboxed"],
    }


def _line(label: str, key: Optional[str], include_notes: bool) -> str:
    if include_notes and key:
        item = get_item(key)
        if item and item.notes:
            return f"- {label}: {item.notes}"
    return f"- {label}"


def build_heuristic_summary(result: FusionResult, include_notes: bool = False) -> str:
    """
    Offline summary grouped by priority tier.

    Args:
        result: Fusion output to summarize
        include_notes: Append each catalog item's usage note

    Returns:
        Markdown-ish text, or "No items recognized." when there is nothing to list
    """
    out: List[str] = []
    for p in PRIORITY_ORDER:
        items = result.findings_for(p)
        if items:
            out.append(f"**{SECTION_TITLES[p]}**")
            out.extend(_line(f.label, f.key, include_notes) for f in items)
    if result.unboxed_findings:
        out.append(f"**{UNBOXED_TITLE}**")
        out.extend(_line(u.label, u.key, include_notes) for u in result.unboxed_findings)
    summary = "\n".join(out)
    logger.debug(f"Built heuristic summary with {len(out)} lines")
    return summary or EMPTY_SUMMARY
