"""Default configuration values."""

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    # Fusion tunables
    "min_object_score": 0.55,   # objectLocalization minimum score
    "min_label_score": 0.65,    # labelDetection minimum score to keep
    "text_hit_score": 0.60,     # score assigned to OCR-derived hits
    "nms_iou_threshold": 0.45,  # low threshold for recall

    # Detector selection: "vision" or "mock"
    "detector": "vision",

    # Debug and Logging Settings
    "debug": False,
    "log_level": "INFO",
    "log_dir": "logs",
    "structured_logging": False,
    "enable_file_logging": False,
}

FUSION_KEYS = ("min_object_score", "min_label_score", "text_hit_score", "nms_iou_threshold")
VALID_DETECTORS = ("vision", "mock")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
