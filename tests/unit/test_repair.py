import pytest

from errors import UpstreamFormatError
from llm_gateway import extract_json, strip_code_fences


def test_strip_code_fences():
    assert strip_code_fences("```json\n[1, 2]\n```") == "[1, 2]"
    assert strip_code_fences("  plain  ") == "plain"


def test_extract_array_from_fenced_output():
    assert extract_json('```json\n[{"id": "a"}]\n```') == [{"id": "a"}]


def test_extract_span_from_chatty_output():
    assert extract_json("Here you go: [1, 2] hope it helps") == [1, 2]
    assert extract_json('Sure! {"score": 5} Done.', expect="object") == {"score": 5}


def test_unparsable_output_raises_format_error():
    with pytest.raises(UpstreamFormatError) as excinfo:
        extract_json("no json here")
    assert "format error" in excinfo.value.message
    with pytest.raises(UpstreamFormatError):
        extract_json("[1, 2,", expect="array")
