"""
Unit tests -- settings.
"""
from src.core.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.default_limit == 10
    assert s.max_limit == 1000
    assert s.api_base_url == "http://localhost:8000"


def test_api_base_url_from_env(monkeypatch):
    monkeypatch.setenv("API_HOST", "api")
    monkeypatch.setenv("API_PORT", "9001")
    assert Settings(_env_file=None).api_base_url == "http://api:9001"


def test_provider_tag():
    assert Settings(_env_file=None, openai_api_key="").provider == "heuristic"
    assert Settings(_env_file=None, openai_api_key="sk").provider == "heuristic+openai-optional"
