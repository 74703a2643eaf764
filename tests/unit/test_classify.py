from errors import UpstreamAuthError, UpstreamFormatError, UpstreamQuotaError, UpstreamUnknownError
from llm_gateway import classify_exception, classify_status, classify_text


def test_status_codes_take_precedence_over_text():
    assert isinstance(classify_status(401, "whatever"), UpstreamAuthError)
    assert isinstance(classify_status(403, "quota"), UpstreamAuthError)
    assert isinstance(classify_status(429, ""), UpstreamQuotaError)


def test_provider_status_string_in_body():
    body = '{"error": {"code": 400, "status": "PERMISSION_DENIED"}}'
    assert isinstance(classify_status(400, body), UpstreamAuthError)
    assert isinstance(classify_status(500, provider_status="resource_exhausted"), UpstreamQuotaError)


def test_text_heuristic_fallback():
    assert isinstance(classify_text("Quota exceeded for project"), UpstreamQuotaError)
    assert isinstance(classify_text("Rate limit hit"), UpstreamQuotaError)
    assert isinstance(classify_text("Unauthorized request"), UpstreamAuthError)
    assert isinstance(classify_text("HTTP 403 Forbidden"), UpstreamAuthError)
    unknown = classify_text("socket closed")
    assert isinstance(unknown, UpstreamUnknownError)
    assert "socket closed" in unknown.message


def test_unmapped_status_uses_text():
    assert isinstance(classify_status(500, "quota exhausted"), UpstreamQuotaError)
    assert isinstance(classify_status(500, "boom"), UpstreamUnknownError)


def test_classify_exception_keeps_upstream_errors():
    original = UpstreamFormatError("bad json")
    assert classify_exception(original) is original
    assert isinstance(classify_exception(ConnectionError("Connection refused")), UpstreamUnknownError)
    assert isinstance(classify_exception(TimeoutError()), UpstreamUnknownError)
