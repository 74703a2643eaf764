import pytest

from conftest import FakeHttpClient, FakeResponse, gemini_reply
from config import ProviderRoute
from errors import ConfigurationError, UpstreamAuthError, UpstreamFormatError, UpstreamQuotaError
from llm_gateway import generate


def test_generate_posts_prompt_with_key_header(route):
    client = FakeHttpClient(gemini_reply("hello"))
    assert generate("Say hello", route=route, client=client) == "hello"

    call = client.calls[0]
    assert call["url"] == route.url
    assert call["headers"]["x-goog-api-key"] == "test-key-1234567890"
    assert call["json"]["contents"][0]["parts"][0]["text"] == "Say hello"
    assert call["timeout"] == route.timeout_s


def test_generate_makes_exactly_one_call_on_failure(route):
    client = FakeHttpClient(FakeResponse(429, {"error": {"status": "RESOURCE_EXHAUSTED"}}), gemini_reply("unused"))
    with pytest.raises(UpstreamQuotaError):
        generate("prompt", route=route, client=client)
    assert len(client.calls) == 1


def test_generate_classifies_transport_errors(route):
    client = FakeHttpClient(RuntimeError("401 Unauthorized"))
    with pytest.raises(UpstreamAuthError):
        generate("prompt", route=route, client=client)


def test_non_json_and_blocked_payloads(route):
    with pytest.raises(UpstreamFormatError):
        generate("prompt", route=route, client=FakeHttpClient(FakeResponse(200, None, text="<html>")))
    blocked = FakeResponse(200, {"promptFeedback": {"blockReason": "SAFETY"}})
    with pytest.raises(UpstreamFormatError) as excinfo:
        generate("prompt", route=route, client=FakeHttpClient(blocked))
    assert "SAFETY" in excinfo.value.message


def test_unconfigured_route_never_calls_out():
    route = ProviderRoute(base_url="https://example.test", model="m", timeout_s=1, api_key="your_gemini_api_key_here")
    client = FakeHttpClient(gemini_reply("unused"))
    with pytest.raises(ConfigurationError):
        generate("prompt", route=route, client=client)
    assert client.calls == []
