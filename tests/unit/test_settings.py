"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

from suggestion_board.config import Settings, get_settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.default_page_size == 5
        assert settings.page_size_options == (5, 10, 20)
        assert settings.api_retries == 0

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SUGGESTION_BOARD_SUGGESTION_API_BASE_URL", "http://backend:9000")
        monkeypatch.setenv("SUGGESTION_BOARD_DEFAULT_PAGE_SIZE", "10")

        settings = Settings(_env_file=None)

        assert settings.suggestion_api_base_url == "http://backend:9000"
        assert settings.default_page_size == 10

    def test_rejects_non_positive_page_sizes(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, page_size_options=(5, 0))
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_page_size=0)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
