"""
Tests for the remote fetcher. The network is mocked.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from file_processor.core.errors import ExtractionTimeoutError, FetchError
from file_processor.ingestion.fetcher import fetch_html


def _response(status_code: int, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.content = text.encode("utf-8")
    if status_code >= 400:
        error = requests.HTTPError(f"{status_code} Client Error for url")
        error.response = response
        response.raise_for_status.side_effect = error
    else:
        response.raise_for_status.return_value = None
    return response


class TestFetchHtml:
    """Tests for fetch_html."""

    def test_returns_body_text(self):
        """Test a 200 response returns the body."""
        with patch("file_processor.ingestion.fetcher.requests.get") as mock_get:
            mock_get.return_value = _response(200, "<html><body>ok</body></html>")

            html = fetch_html("https://example.com", timeout=3)

        assert html == "<html><body>ok</body></html>"
        mock_get.assert_called_once_with("https://example.com", timeout=3)

    def test_http_404_raises_fetch_error(self):
        """Test non-2xx statuses become FetchError with the HTTP message as details."""
        with patch("file_processor.ingestion.fetcher.requests.get") as mock_get:
            mock_get.return_value = _response(404)

            with pytest.raises(FetchError) as exc_info:
                fetch_html("https://example.com/missing")

        assert exc_info.value.kind == "FetchError"
        assert "404" in exc_info.value.details

    def test_connection_error_raises_fetch_error(self):
        """Test network failures become FetchError."""
        with patch("file_processor.ingestion.fetcher.requests.get") as mock_get:
            mock_get.side_effect = requests.ConnectionError("Name or service not known")

            with pytest.raises(FetchError) as exc_info:
                fetch_html("https://unreachable.invalid")

        assert "Name or service not known" in exc_info.value.details

    def test_invalid_url_raises_fetch_error(self):
        """Test a URL without a scheme is rejected by the client as FetchError."""
        with pytest.raises(FetchError):
            fetch_html("not a url")

    def test_timeout_raises_timeout_error(self):
        """Test client timeouts get their own error kind."""
        with patch("file_processor.ingestion.fetcher.requests.get") as mock_get:
            mock_get.side_effect = requests.ReadTimeout("read timed out")

            with pytest.raises(ExtractionTimeoutError) as exc_info:
                fetch_html("https://slow.example.com", timeout=1)

        assert exc_info.value.kind == "TimeoutError"
