"""Unit tests for configuration loading, validation and environment overrides."""
import json
import logging

import pytest

from firstaid_fusion.config import DEFAULT_CONFIG, Config, load_config, save_config
from firstaid_fusion.config.defaults import FUSION_KEYS
from firstaid_fusion.config.env_config import (
    EnvironmentError, EnvironmentValidator, load_env_file, load_environment_overrides,
)
from firstaid_fusion.core.entities import FusionSettings


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestDefaults:

    def test_defaults_match_engine_defaults(self):
        engine = FusionSettings()
        for key in FUSION_KEYS:
            assert DEFAULT_CONFIG[key] == getattr(engine, key)

    def test_missing_file_uses_defaults(self, clean_env):
        cfg = load_config(str(clean_env / "missing.json"))
        assert cfg.min_object_score == 0.55
        assert cfg.nms_iou_threshold == 0.45
        assert cfg.detector == "vision"
        assert cfg.log_level == "INFO"
        assert cfg.extra == {}
        assert cfg.fusion_settings() == FusionSettings()


class TestConfigFile:

    def test_values_loaded(self, clean_env):
        path = write_json(clean_env / "config.json", {
            "min_object_score": 0.4, "nms_iou_threshold": 0.6, "log_level": "debug",
        })
        cfg = load_config(path)
        assert cfg.min_object_score == 0.4
        assert cfg.nms_iou_threshold == 0.6
        assert cfg.log_level == "DEBUG"
        assert cfg.fusion_settings().nms_iou_threshold == 0.6

    def test_invalid_values_fall_back(self, clean_env):
        path = write_json(clean_env / "config.json", {
            "min_object_score": 1.5,
            "min_label_score": "high",
            "text_hit_score": True,
            "detector": "camera",
            "log_level": "LOUD",
        })
        cfg = load_config(path)
        assert cfg.min_object_score == DEFAULT_CONFIG["min_object_score"]
        assert cfg.min_label_score == DEFAULT_CONFIG["min_label_score"]
        assert cfg.text_hit_score == DEFAULT_CONFIG["text_hit_score"]
        assert cfg.detector == "vision"
        assert cfg.log_level == "INFO"

    def test_broken_json_uses_defaults(self, clean_env):
        path = clean_env / "config.json"
        path.write_text("{oops", encoding="utf-8")
        assert load_config(str(path)).min_label_score == 0.65

    def test_missing_file_logged_at_info(self, clean_env, caplog):
        caplog.set_level(logging.INFO, logger="firstaid_fusion.config.settings")
        load_config(str(clean_env / "missing.json"))
        records = [r for r in caplog.records if r.name == "firstaid_fusion.config.settings"]
        assert any("does not exist" in r.getMessage() and r.levelno == logging.INFO for r in records)
        assert not any(r.levelno >= logging.WARNING for r in records)

    @pytest.mark.parametrize("content", ["{oops", "[1, 2, 3]"])
    def test_bad_file_logged_as_warning(self, clean_env, caplog, content):
        path = clean_env / "config.json"
        path.write_text(content, encoding="utf-8")
        caplog.set_level(logging.INFO, logger="firstaid_fusion.config.settings")
        load_config(str(path))
        warnings = [r for r in caplog.records
                    if r.name == "firstaid_fusion.config.settings" and r.levelno == logging.WARNING]
        assert warnings
        assert "Using defaults" in warnings[0].getMessage() or "using defaults" in warnings[0].getMessage()

    def test_non_object_json_uses_defaults(self, clean_env):
        path = write_json(clean_env / "config.json", [1, 2, 3])
        assert load_config(path).detector == "vision"

    def test_extra_keys_retained(self, clean_env):
        path = write_json(clean_env / "config.json", {"dashboard_port": 8080})
        cfg = load_config(path)
        assert cfg.extra == {"dashboard_port": 8080}
        assert cfg.get("dashboard_port") == 8080
        assert cfg.get("min_object_score") == 0.55
        assert cfg.get("nothing", "fallback") == "fallback"

    def test_save_then_load(self, clean_env):
        cfg = Config(min_label_score=0.7, detector="mock", extra={"note": "kitchen"})
        path = str(clean_env / "saved.json")
        save_config(cfg, path)
        loaded = load_config(path)
        assert loaded.min_label_score == 0.7
        assert loaded.use_mock_detector
        assert loaded.extra == {"note": "kitchen"}


class TestEnvironmentOverrides:

    def test_env_overrides_file(self, clean_env, monkeypatch):
        path = write_json(clean_env / "config.json", {"min_object_score": 0.4})
        monkeypatch.setenv("FUSION_MIN_OBJECT_SCORE", "0.7")
        monkeypatch.setenv("DETECTOR", "MOCK")
        cfg = load_config(path)
        assert cfg.min_object_score == 0.7
        assert cfg.use_mock_detector

    def test_invalid_env_ignored(self, clean_env, monkeypatch):
        monkeypatch.setenv("FUSION_NMS_IOU_THRESHOLD", "2.0")
        monkeypatch.setenv("FUSION_TEXT_HIT_SCORE", "abc")
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert load_environment_overrides() == {}

    def test_debug_flag(self, clean_env, monkeypatch):
        monkeypatch.setenv("DEBUG_LOGGING", "yes")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert load_environment_overrides() == {"debug": True, "log_level": "WARNING"}

    def test_env_file(self, clean_env):
        (clean_env / "custom.env").write_text(
            "# tuning\nFUSION_MIN_LABEL_SCORE=0.8\nFUSION_TEXT_HIT_SCORE='0.5'\nnot a pair\n",
            encoding="utf-8",
        )
        cfg = load_config(str(clean_env / "none.json"), env_file=str(clean_env / "custom.env"))
        assert cfg.min_label_score == 0.8
        assert cfg.text_hit_score == 0.5

    def test_env_file_beats_process_env(self, clean_env, monkeypatch):
        (clean_env / ".env").write_text("DETECTOR=mock\n", encoding="utf-8")
        monkeypatch.setenv("DETECTOR", "vision")
        assert load_environment_overrides()["detector"] == "mock"

    def test_load_env_file_missing(self, clean_env):
        assert load_env_file(str(clean_env / "absent.env")) == {}


class TestEnvironmentValidator:

    def test_numeric_range(self):
        assert EnvironmentValidator.validate_numeric_range("0.3", 0.0, 1.0, float) == 0.3
        with pytest.raises(EnvironmentError):
            EnvironmentValidator.validate_numeric_range("-0.1", 0.0, 1.0, float)
        with pytest.raises(EnvironmentError):
            EnvironmentValidator.validate_numeric_range("x", value_type=float)

    def test_choice(self):
        assert EnvironmentValidator.validate_choice("mock", ("vision", "mock")) == "mock"
        with pytest.raises(EnvironmentError):
            EnvironmentValidator.validate_choice("camera", ("vision", "mock"))
