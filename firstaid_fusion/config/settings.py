"""Configuration dataclass and loading utilities.

Provides a typed configuration object that callers inject into the fusion
service instead of relying on module-level state. Precedence, lowest first:
``DEFAULT_CONFIG``, the JSON config file, then environment variables.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional
import json, os, logging

from ..core.entities import FusionSettings
from .defaults import DEFAULT_CONFIG, FUSION_KEYS, VALID_DETECTORS, VALID_LOG_LEVELS
from .env_config import load_environment_overrides

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Config:
    # Fusion tunables
    min_object_score: float = DEFAULT_CONFIG["min_object_score"]
    min_label_score: float = DEFAULT_CONFIG["min_label_score"]
    text_hit_score: float = DEFAULT_CONFIG["text_hit_score"]
    nms_iou_threshold: float = DEFAULT_CONFIG["nms_iou_threshold"]

    detector: str = DEFAULT_CONFIG["detector"]

    # Debug and Logging Settings
    debug: bool = DEFAULT_CONFIG["debug"]
    log_level: str = DEFAULT_CONFIG["log_level"]
    log_dir: str = DEFAULT_CONFIG["log_dir"]
    structured_logging: bool = DEFAULT_CONFIG["structured_logging"]
    enable_file_logging: bool = DEFAULT_CONFIG["enable_file_logging"]

    # Arbitrary extra values retained for forward compatibility
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        # merge extra keys at top-level for saving
        extra = d.pop("extra", {})
        d.update(extra)
        return d

    def get(self, key: str, default: Any = None) -> Any:
        if key in Config.__dataclass_fields__ and key != "extra":
            return getattr(self, key)
        return self.extra.get(key, default)

    @property
    def use_mock_detector(self) -> bool:
        return self.detector == "mock"

    def fusion_settings(self) -> FusionSettings:
        """Engine tunables as the immutable value the fusion service takes."""
        return FusionSettings(
            min_object_score=self.min_object_score,
            min_label_score=self.min_label_score,
            text_hit_score=self.text_hit_score,
            nms_iou_threshold=self.nms_iou_threshold,
        )


def _read_config_file(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        logger.info(f"Configuration file '{path}' does not exist. Using defaults.")
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse JSON configuration file '{path}': {e}. Using defaults.")
        return {}
    except OSError as e:
        logger.warning(f"Cannot read configuration file '{path}': {e}. Using defaults.")
        return {}
    if not isinstance(loaded, dict):
        logger.warning(f"Configuration file '{path}' does not contain a JSON object, using defaults")
        return {}
    logger.info(f"Successfully loaded configuration from '{path}'")
    return loaded


def _validate_settings(merged: Dict[str, Any]) -> None:
    """Replace invalid values with defaults, logging each replacement."""
    for key in FUSION_KEYS:
        value = merged.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
            logger.warning(f"Setting '{key}'={value!r} is not a number in [0, 1]. Using default.")
            merged[key] = DEFAULT_CONFIG[key]
        else:
            merged[key] = float(value)

    if merged.get("detector") not in VALID_DETECTORS:
        logger.warning(f"Unknown detector '{merged.get('detector')}'. Using default.")
        merged["detector"] = DEFAULT_CONFIG["detector"]

    level = str(merged.get("log_level", "")).upper()
    if level not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown log level '{merged.get('log_level')}'. Using default.")
        level = DEFAULT_CONFIG["log_level"]
    merged["log_level"] = level


def load_config(path: str = "config.json", env_file: Optional[str] = None) -> Config:
    """Load configuration from a JSON file, then apply environment overrides.

    Args:
        path: Path to config.json file
        env_file: Path to .env file (optional)

    Returns:
        Config: Loaded and validated configuration
    """
    data = _read_config_file(path)
    merged = {**DEFAULT_CONFIG, **data, **load_environment_overrides(env_file)}
    _validate_settings(merged)

    # capture unknown keys
    field_names = [k for k in Config.__dataclass_fields__ if k != "extra"]
    extra = {k: v for k, v in merged.items() if k not in field_names}
    if extra:
        logger.info(f"Found extra configuration keys: {list(extra.keys())}")

    return Config(**{k: merged[k] for k in field_names}, extra=extra)


def save_config(cfg: Config, path: str = "config.json") -> None:
    """Save configuration to a JSON file."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(cfg.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Configuration saved successfully to '{path}'")
    except OSError as e:
        logger.error(f"OS error saving configuration file '{path}': {e}")
