"""
Unit tests for the best-effort upstream client.
requests.get is mocked at the module boundary, except for one test that
connects to a closed port on 127.0.0.1 to check a refused connection.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from hashistack_hello.upstream import UpstreamBody, UpstreamClient, UpstreamError

URL = "http://vault:8200/v1/secret/data/myapp"


def _response(text="", status_code=200):
    resp = MagicMock()
    resp.text = text
    resp.status_code = status_code
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error: Forbidden for url: {URL}"
        )
    else:
        resp.raise_for_status.return_value = None
    return resp


class TestUpstreamClient:
    """Test suite for UpstreamClient.get results."""

    def test_success_returns_raw_body(self):
        """Verify a 2xx response body is returned untouched."""
        body = '{"data":{"data":{"k":"v"}}}'
        with patch("hashistack_hello.upstream.requests.get", return_value=_response(body)):
            result = UpstreamClient().get(URL)

        assert result == UpstreamBody(body)
        assert result.ok

    def test_headers_and_timeout_are_forwarded(self):
        """Verify headers and the configured timeout reach requests.get."""
        with patch(
            "hashistack_hello.upstream.requests.get", return_value=_response("ok")
        ) as mock_get:
            UpstreamClient(timeout=2.5).get(URL, headers={"X-Vault-Token": "root"})

        mock_get.assert_called_once_with(
            URL, headers={"X-Vault-Token": "root"}, timeout=2.5
        )

    def test_no_headers(self):
        """Verify a call without headers sends an empty header dict."""
        with patch(
            "hashistack_hello.upstream.requests.get", return_value=_response("ok")
        ) as mock_get:
            UpstreamClient().get(URL)

        assert mock_get.call_args.kwargs["headers"] == {}

    def test_non_2xx_is_an_error(self):
        """Verify an HTTP error status becomes an error value."""
        with patch(
            "hashistack_hello.upstream.requests.get", return_value=_response("denied", 403)
        ):
            result = UpstreamClient().get(URL)

        assert isinstance(result, UpstreamError)
        assert not result.ok
        assert "403" in result.message

    @pytest.mark.parametrize(
        "exc",
        [
            requests.ConnectionError("Failed to resolve 'vault'"),
            requests.Timeout("Read timed out"),
            requests.exceptions.ContentDecodingError("bad gzip"),
        ],
    )
    def test_transport_failures_are_captured(self, exc):
        """Verify transport failures are returned, not raised."""
        with patch("hashistack_hello.upstream.requests.get", side_effect=exc):
            result = UpstreamClient().get(URL)

        assert result == UpstreamError(str(exc))

    def test_empty_exception_message_uses_type_name(self):
        """Verify an exception without a message still yields a readable error."""
        with patch(
            "hashistack_hello.upstream.requests.get", side_effect=requests.ConnectionError()
        ):
            result = UpstreamClient().get(URL)

        assert result == UpstreamError("ConnectionError")

    def test_non_latin1_header_is_captured(self):
        """Verify a header value http.client cannot encode is returned as an error."""
        exc = UnicodeEncodeError("latin-1", "t€", 1, 2, "ordinal not in range(256)")
        with patch("hashistack_hello.upstream.requests.get", side_effect=exc):
            result = UpstreamClient().get(URL, headers={"X-Vault-Token": "t€"})

        assert isinstance(result, UpstreamError)
        assert "latin-1" in result.message

    def test_unreachable_host(self):
        """Verify a refused local connection surfaces as an error value."""
        result = UpstreamClient(timeout=1).get("http://127.0.0.1:9/")

        assert isinstance(result, UpstreamError)
        assert result.message
