"""Utility functions package."""

from .geometry import area, iou, nms, poly_to_box
from .text import tokenize, bigrams, token_set

__all__ = ["area", "iou", "nms", "poly_to_box", "tokenize", "bigrams", "token_set"]
