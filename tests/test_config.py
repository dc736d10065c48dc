"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest

from slotbooker.config import AppConfig
from slotbooker.domain.exceptions import ConfigError
from slotbooker.domain.models import OverlapPolicy
from slotbooker.services.availability_service import UpstreamErrorPolicy


def _write(tmp_path: Path, text: str) -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(text, encoding="utf-8")
    return config_path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.duration_options == [30, 60, 120]
        assert config.defaults.duration_minutes == 60
        assert config.defaults.quantity == 2
        assert config.step_minutes == 30
        assert config.overlap_policy is OverlapPolicy.POINT
        assert config.on_upstream_error is UpstreamErrorPolicy.ABORT

    def test_load_from_yaml(self, tmp_path):
        config_path = _write(
            tmp_path,
            "api:\n"
            "  base_url: http://localhost:8000\n"
            "defaults:\n"
            "  duration_minutes: 30\n"
            "  quantity: 1\n"
            "duration_options: [30, 30, 45]\n"
            "overlap_policy: interval\n"
            "on_upstream_error: empty\n",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.api.base_url == "http://localhost:8000"
        assert config.duration_options == [30, 45]
        assert config.overlap_policy is OverlapPolicy.INTERVAL
        assert config.on_upstream_error is UpstreamErrorPolicy.EMPTY

    def test_empty_file_uses_defaults(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config == AppConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "config.yaml")

    def test_load_without_default_file(self, tmp_path, monkeypatch):
        """Without any config file the built-in defaults apply."""
        monkeypatch.chdir(tmp_path)

        assert AppConfig.load() == AppConfig()

    def test_load_prefers_default_file(self, tmp_path, monkeypatch):
        _write(tmp_path, "step_minutes: 15\n")
        monkeypatch.chdir(tmp_path)

        assert AppConfig.load().step_minutes == 15

    @pytest.mark.parametrize(
        "text",
        [
            "duration_options: [0, 60]\n",
            "duration_options: []\n",
            "defaults:\n  duration_minutes: 45\n",
            "defaults:\n  quantity: 0\n",
            "step_minutes: 0\n",
            "overlap_policy: nearest\n",
            "api:\n  timeout_seconds: -1\n",
            "- just\n- a list\n",
            "api: [unclosed\n",
        ],
    )
    def test_invalid_config(self, tmp_path, text):
        with pytest.raises(ConfigError):
            AppConfig.load_from_yaml(_write(tmp_path, text))

    def test_validate_duration(self):
        config = AppConfig()

        assert config.validate_duration(120) == 120
        with pytest.raises(ValueError, match="Choose one of: 30, 60, 120"):
            config.validate_duration(90)
