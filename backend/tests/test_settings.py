"""Tests for settings loading."""
import os
import sys

import pytest
from pydantic import ValidationError

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from settings import Settings, load_settings


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / ".env.local"
    path.write_text(
        "# local dev keys\n"
        "ANTHROPIC_API_KEY=file-key\n"
        "ANTHROPIC_MODEL=claude-test\n"
    )
    return path


class TestLoadSettings:

    def test_defaults_without_file_or_env(self, tmp_path):
        s = load_settings(tmp_path / "missing.env", environ={})
        assert s.anthropic_api_key is None
        assert s.anthropic_model == "claude-opus-4-6"
        assert s.anthropic_api_url == "https://api.anthropic.com"
        assert s.anthropic_version == "2023-06-01"
        assert s.cors_origins == "*"
        assert s.port == 8000

    def test_key_from_environment(self, tmp_path):
        s = load_settings(tmp_path / "missing.env", environ={"ANTHROPIC_API_KEY": "env-key"})
        assert s.anthropic_api_key == "env-key"

    def test_file_used_as_fallback(self, env_file):
        s = load_settings(env_file, environ={})
        assert s.anthropic_api_key == "file-key"
        assert s.anthropic_model == "claude-test"

    def test_environment_wins_over_file(self, env_file):
        s = load_settings(env_file, environ={"ANTHROPIC_API_KEY": "env-key"})
        assert s.anthropic_api_key == "env-key"
        assert s.anthropic_model == "claude-test"

    def test_blank_environment_value_does_not_mask_file(self, env_file):
        s = load_settings(env_file, environ={"ANTHROPIC_API_KEY": ""})
        assert s.anthropic_api_key == "file-key"

    def test_numeric_and_url_values(self, tmp_path):
        s = load_settings(
            tmp_path / "missing.env",
            environ={"PORT": "9001", "ANTHROPIC_TIMEOUT_S": "12.5", "ANTHROPIC_API_URL": "http://localhost:4000/"},
        )
        assert s.port == 9001
        assert s.anthropic_timeout_s == 12.5
        assert s.anthropic_api_url == "http://localhost:4000"


def test_settings_are_immutable():
    s = Settings(anthropic_api_key="k")
    with pytest.raises(ValidationError):
        s.anthropic_api_key = "other"
