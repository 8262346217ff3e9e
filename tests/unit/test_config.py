"""
Unit tests for configuration management.
"""

import os
from unittest.mock import patch

from pr_reviewer.config import Settings


def test_settings_loads_from_environment():
    """Test that settings can be loaded from environment variables."""
    with patch.dict(os.environ, {
        'GITHUB_TOKEN': 'gh_token',
        'OPENAI_API_KEY': 'sk-test',
        'OPENAI_API_MODEL': 'gpt-4o',
        'OPENAI_JSON_MODE': 'true',
        'EXCLUDE': '*.md\n*.lock',
        'ANCHOR_POLICY': 'forward',
        'MAX_CONCURRENCY': '8',
        'LOG_LEVEL': 'DEBUG',
    }, clear=True):
        settings = Settings(_env_file=None)

        assert settings.github_token == 'gh_token'
        assert settings.openai_api_key == 'sk-test'
        assert settings.openai_api_model == 'gpt-4o'
        assert settings.openai_json_mode is True
        assert settings.exclude == '*.md\n*.lock'
        assert settings.anchor_policy == 'forward'
        assert settings.max_concurrency == 8
        assert settings.log_level == 'DEBUG'


def test_settings_has_default_values():
    """Test that settings have appropriate default values."""
    with patch.dict(os.environ, {
        'GITHUB_TOKEN': 'gh_token',
        'OPENAI_API_KEY': 'sk-test',
    }, clear=True):
        settings = Settings(_env_file=None)

        assert settings.openai_api_model == 'gpt-4o-mini'
        assert settings.openai_json_mode is False
        assert settings.openai_base_url is None
        assert settings.exclude == ''
        assert settings.anchor_policy == 'drop'
        assert settings.max_concurrency == 4
        assert settings.github_api_url == 'https://api.github.com'
        assert settings.log_level == 'INFO'


def test_settings_accept_action_inputs():
    """GitHub Actions exposes inputs as INPUT_* variables."""
    with patch.dict(os.environ, {
        'INPUT_GITHUB_TOKEN': 'gh_from_input',
        'INPUT_OPENAI_API_KEY': 'sk-from-input',
        'INPUT_OPENAI_API_MODEL': 'gpt-4-1106-preview',
        'INPUT_EXCLUDE': 'dist/**',
    }, clear=True):
        settings = Settings(_env_file=None)

        assert settings.github_token == 'gh_from_input'
        assert settings.openai_api_key == 'sk-from-input'
        assert settings.openai_api_model == 'gpt-4-1106-preview'
        assert settings.exclude == 'dist/**'
