from config import PLACEHOLDER_KEYS, ProviderRoute
from config.settings import Settings


def test_settings_defaults():
    settings = Settings(_env_file=None, GEMINI_API_KEY=None)
    assert settings.GEMINI_MODEL == "gemini-pro"
    assert settings.PORT == 3001
    assert settings.QUESTION_COUNT == 5
    assert settings.API_BASE_URL == "http://localhost:3001/api"
    assert settings.CORS_ORIGINS == ["*"]
    assert settings.data_path.name == "data"


def test_provider_route_built_from_settings():
    settings = Settings(_env_file=None, GEMINI_API_KEY="abcdefghijklmnop", GEMINI_MODEL="gemini-1.5-flash")
    route = settings.provider_route()
    assert route.configured
    assert route.url.endswith("/models/gemini-1.5-flash:generateContent")
    assert route.key_preview() == "abcdefghij..."


def test_placeholder_and_blank_keys_are_not_configured():
    for key in [None, "", "   ", *PLACEHOLDER_KEYS]:
        route = ProviderRoute(base_url="https://example.test/v1", model="m", timeout_s=5, api_key=key)
        assert not route.configured
    assert ProviderRoute(base_url="x", model="m", timeout_s=5).key_preview() == "Not set"
