"""Environment variable configuration.

Reads an optional ``.env`` file and the process environment, validates each
value and returns only the overrides that passed validation. Invalid values
are logged and ignored so a typo never takes the service down.
"""
import os
import logging
from typing import Optional, Dict, Any, Union
from pathlib import Path

from .defaults import VALID_DETECTORS, VALID_LOG_LEVELS

logger = logging.getLogger(__name__)

# env var -> config key
FUSION_ENV_VARS = {
    "FUSION_MIN_OBJECT_SCORE": "min_object_score",
    "FUSION_MIN_LABEL_SCORE": "min_label_score",
    "FUSION_TEXT_HIT_SCORE": "text_hit_score",
    "FUSION_NMS_IOU_THRESHOLD": "nms_iou_threshold",
}

_TRUE_VALUES = ('true', '1', 'yes', 'on')


class EnvironmentError(Exception):
    """Custom exception for environment configuration errors."""
    pass


class EnvironmentValidator:
    """Validates environment variable values."""

    @classmethod
    def validate_numeric_range(cls, value: Union[str, int, float],
                              min_val: Optional[Union[int, float]] = None,
                              max_val: Optional[Union[int, float]] = None,
                              value_type: type = int) -> Union[int, float]:
        """Validate numeric value within specified range.

        Raises:
            EnvironmentError: If validation fails
        """
        try:
            numeric_value = value_type(value)
        except (ValueError, TypeError):
            raise EnvironmentError(f"Invalid {value_type.__name__} value: {value}")

        if min_val is not None and numeric_value < min_val:
            raise EnvironmentError(f"Value {numeric_value} below minimum {min_val}")

        if max_val is not None and numeric_value > max_val:
            raise EnvironmentError(f"Value {numeric_value} above maximum {max_val}")

        return numeric_value

    @classmethod
    def validate_choice(cls, value: str, choices) -> str:
        if value not in choices:
            raise EnvironmentError(f"Value '{value}' not one of {', '.join(choices)}")
        return value


def load_env_file(env_path: Optional[str] = None) -> Dict[str, str]:
    """Load KEY=VALUE pairs from a .env file (defaults to ./.env)."""
    if env_path is None:
        env_path = ".env"

    env_vars: Dict[str, str] = {}
    env_file_path = Path(env_path)

    if not env_file_path.exists():
        logger.debug(f"Environment file {env_path} not found, using system environment only")
        return env_vars

    try:
        with open(env_file_path, 'r', encoding='utf-8') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()

                # Skip comments and empty lines
                if not line or line.startswith('#'):
                    continue

                if '=' in line:
                    key, value = line.split('=', 1)
                    key = key.strip()
                    value = value.strip()

                    # Remove quotes if present
                    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
                        value = value[1:-1]

                    env_vars[key] = value
                else:
                    logger.warning(f"Invalid line format in {env_path}:{line_num}: {line}")

        logger.info(f"Loaded {len(env_vars)} variables from {env_path}")

    except OSError as e:
        logger.error(f"Error reading environment file {env_path}: {e}")

    return env_vars


def get_env_var(key: str, default: Optional[str] = None,
                env_vars: Optional[Dict[str, str]] = None) -> Optional[str]:
    """Get environment variable, preferring values loaded from the .env file."""
    if env_vars and key in env_vars:
        return env_vars[key]
    return os.getenv(key, default)


def load_environment_overrides(env_file_path: Optional[str] = None) -> Dict[str, Any]:
    """Collect validated config overrides from the environment.

    Returns:
        dict of config key -> value, containing only variables that are set and valid
    """
    env_vars = load_env_file(env_file_path)
    validator = EnvironmentValidator()
    overrides: Dict[str, Any] = {}

    for env_key, cfg_key in FUSION_ENV_VARS.items():
        raw = get_env_var(env_key, env_vars=env_vars)
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[cfg_key] = validator.validate_numeric_range(raw, 0.0, 1.0, float)
        except EnvironmentError as e:
            logger.warning(f"Ignoring {env_key}: {e}")

    detector = get_env_var("DETECTOR", env_vars=env_vars)
    if detector:
        try:
            overrides["detector"] = validator.validate_choice(detector.strip().lower(), VALID_DETECTORS)
        except EnvironmentError as e:
            logger.warning(f"Ignoring DETECTOR: {e}")

    level = get_env_var("LOG_LEVEL", env_vars=env_vars)
    if level:
        try:
            overrides["log_level"] = validator.validate_choice(level.strip().upper(), VALID_LOG_LEVELS)
        except EnvironmentError as e:
            logger.warning(f"Ignoring LOG_LEVEL: {e}")

    debug = get_env_var("DEBUG_LOGGING", env_vars=env_vars)
    if debug:
        overrides["debug"] = debug.strip().lower() in _TRUE_VALUES

    if overrides:
        logger.info(f"Environment overrides applied: {sorted(overrides)}")
    return overrides


__all__ = [
    "EnvironmentError",
    "EnvironmentValidator",
    "FUSION_ENV_VARS",
    "load_environment_overrides",
    "load_env_file",
    "get_env_var",
]
