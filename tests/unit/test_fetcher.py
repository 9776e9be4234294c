"""
Unit tests for JsonFetcher.

Every failure mode must come back as a failed FetchResult instead of raising.
"""

from unittest.mock import Mock

import pytest
import requests

from url_comparator.api.fetcher import JsonFetcher, build_session
from url_comparator.exceptions import FetchError


def _mock_response(payload=None, status_code=200, http_error=None, json_error=None):
    response = Mock()
    response.status_code = status_code
    if http_error is not None:
        response.raise_for_status.side_effect = http_error
    else:
        response.raise_for_status.return_value = None
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def test_fetch_returns_decoded_document():
    session = Mock(spec=requests.Session)
    session.get.return_value = _mock_response({"id": 1})

    result = JsonFetcher(session=session, timeout=5).fetch("https://api.example.com/items/1")

    assert result.ok is True
    assert result.document == {"id": 1}
    assert result.error_message is None
    session.get.assert_called_once_with("https://api.example.com/items/1", timeout=5)


def test_fetch_keeps_falsy_json_documents():
    """A body of 0, false, [] or null is still a successful fetch."""
    session = Mock(spec=requests.Session)
    session.get.return_value = _mock_response([])

    result = JsonFetcher(session=session).fetch("https://api.example.com/empty")

    assert result.ok is True
    assert result.document == []


def test_fetch_network_error_is_data():
    session = Mock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("connection refused")

    result = JsonFetcher(session=session).fetch("https://down.example.com/")

    assert result.ok is False
    assert result.document is None
    assert "connection refused" in result.error_message
    assert "https://down.example.com/" in result.error_message


def test_fetch_timeout_is_data():
    session = Mock(spec=requests.Session)
    session.get.side_effect = requests.Timeout("read timed out")

    result = JsonFetcher(session=session, timeout=0.1).fetch("https://slow.example.com/")

    assert result.ok is False
    assert "timed out" in result.error_message


def test_fetch_non_success_status_is_data():
    session = Mock(spec=requests.Session)
    session.get.return_value = _mock_response(
        status_code=404, http_error=requests.HTTPError("404 Client Error: Not Found")
    )

    result = JsonFetcher(session=session).fetch("https://api.example.com/missing")

    assert result.ok is False
    assert result.status_code == 404
    assert "HTTP 404" in result.error_message


def test_fetch_invalid_json_is_data():
    session = Mock(spec=requests.Session)
    session.get.return_value = _mock_response(json_error=ValueError("Expecting value"))

    result = JsonFetcher(session=session).fetch("https://api.example.com/html")

    assert result.ok is False
    assert "not valid JSON" in result.error_message


def test_fetch_too_deeply_nested_json_is_data():
    session = Mock(spec=requests.Session)
    session.get.return_value = _mock_response(
        json_error=RecursionError("maximum recursion depth exceeded while decoding a JSON array")
    )

    result = JsonFetcher(session=session).fetch("https://api.example.com/deep")

    assert result.ok is False
    assert result.document is None
    assert "not valid JSON" in result.error_message


def test_fetch_real_response_nested_past_decoder_depth():
    depth = 200000
    response = requests.Response()
    response.status_code = 200
    response.encoding = "utf-8"
    response._content = ("[" * depth + "]" * depth).encode("utf-8")
    session = Mock(spec=requests.Session)
    session.get.return_value = response

    result = JsonFetcher(session=session).fetch("https://api.example.com/deep")

    assert result.ok is False
    assert "not valid JSON" in result.error_message


def test_fetch_does_not_retry():
    session = Mock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("boom")

    JsonFetcher(session=session).fetch("https://down.example.com/")

    assert session.get.call_count == 1


def test_fetch_document_raises_fetch_error():
    session = Mock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("boom")

    with pytest.raises(FetchError) as exc_info:
        JsonFetcher(session=session).fetch_document("https://down.example.com/")

    assert exc_info.value.url == "https://down.example.com/"
    assert exc_info.value.status_code is None


def test_build_session_applies_headers_and_pool_size():
    session = build_session(pool_size=8, headers={"Authorization": "Bearer abc123"})

    assert session.headers["Authorization"] == "Bearer abc123"
    assert session.headers["Accept"] == "application/json"
    adapter = session.get_adapter("https://api.example.com/")
    assert adapter._pool_maxsize == 8
