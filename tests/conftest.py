"""
Pytest configuration and shared fixtures for the Ibani relay tests.
"""
import os
import sys
import pytest
import httpx
from unittest.mock import AsyncMock, patch

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ibani_relay.config import RelaySettings


@pytest.fixture
def hosted_settings():
    """Settings for the hosted inference backend with a token."""
    return RelaySettings(access_token="hf_test_token", model_id="test-org/test-model")


@pytest.fixture
def custom_settings():
    """Settings for a custom inference endpoint without a token."""
    return RelaySettings(inference_url="http://inference.test/translate")


@pytest.fixture
def make_response():
    """Build a real httpx.Response bound to a request (so raise_for_status works)."""
    def _make(status_code=200, json=None, text=None, url="http://upstream.test/"):
        request = httpx.Request("POST", url)
        if text is not None:
            return httpx.Response(status_code, text=text, request=request)
        return httpx.Response(status_code, json=json, request=request)

    return _make


@pytest.fixture
def mock_upstream():
    """
    Patch httpx.AsyncClient used by the relay.
    Yields the client instance whose .post is awaited per outbound call.
    """
    with patch('ibani_relay.relay.httpx.AsyncClient') as mock_client:
        mock_client_instance = AsyncMock()
        mock_client.return_value.__aenter__.return_value = mock_client_instance
        mock_client.return_value.__aexit__.return_value = False  # never swallow errors
        mock_client_instance.client_class = mock_client
        yield mock_client_instance
