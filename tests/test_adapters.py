"""
Tests for ibani_relay/adapters.py - External response adapters.
"""
import json
import pytest

from ibani_relay.adapters import (
    CustomEndpointAdapter,
    HostedInferenceAdapter,
    extract_translation,
    select_adapter,
)
from ibani_relay.config import RelaySettings
from ibani_relay.errors import ConfigurationError


class TestExtractTranslation:
    """Tests for extract_translation normalization order."""

    def test_list_shape_uses_first_element(self):
        data = [{"translation_text": "Indi"}, {"translation_text": "ignored"}]
        assert extract_translation(data) == "Indi"

    def test_object_shape(self):
        assert extract_translation({"translation_text": "Indi"}) == "Indi"

    def test_unknown_object_is_serialized(self):
        data = {"generated_text": "Indi", "score": 0.9}
        assert extract_translation(data) == json.dumps(data)

    def test_empty_list_is_serialized(self):
        assert extract_translation([]) == "[]"

    def test_list_without_translation_field_is_serialized(self):
        data = [{"label": "x"}]
        assert extract_translation(data) == json.dumps(data)

    def test_scalar_is_serialized(self):
        assert extract_translation("plain") == '"plain"'
        assert extract_translation(None) == "null"

    def test_non_ascii_kept_readable(self):
        data = {"unknown": "ọ́"}
        assert "ọ́" in extract_translation(data)


class TestHostedInferenceAdapter:
    """Tests for the hosted inference backend."""

    def test_target_url_includes_model(self, hosted_settings):
        adapter = HostedInferenceAdapter(hosted_settings)
        assert adapter.target_url == (
            "https://router.huggingface.co/hf-inference/models/test-org/test-model"
        )

    def test_payload_waits_for_model(self, hosted_settings):
        adapter = HostedInferenceAdapter(hosted_settings)
        assert adapter.build_payload("Hello") == {
            "inputs": "Hello",
            "parameters": {"wait_for_model": True},
        }

    def test_headers_carry_bearer_token(self, hosted_settings):
        headers = HostedInferenceAdapter(hosted_settings).build_headers()
        assert headers["Authorization"] == "Bearer hf_test_token"
        assert headers["Content-Type"] == "application/json"

    def test_headers_without_token(self):
        headers = HostedInferenceAdapter(RelaySettings()).build_headers()
        assert "Authorization" not in headers


class TestCustomEndpointAdapter:
    """Tests for the custom inference endpoint backend."""

    def test_target_url(self, custom_settings):
        adapter = CustomEndpointAdapter(custom_settings)
        assert adapter.target_url == "http://inference.test/translate"

    def test_payload_is_plain_text(self, custom_settings):
        assert CustomEndpointAdapter(custom_settings).build_payload("Hello") == {"text": "Hello"}

    def test_missing_url_raises_configuration_error(self):
        adapter = CustomEndpointAdapter(RelaySettings(inference_backend="custom"))
        with pytest.raises(ConfigurationError):
            adapter.target_url


class TestSelectAdapter:
    """Tests for adapter selection from settings."""

    def test_auto_without_url_selects_hosted(self):
        assert isinstance(select_adapter(RelaySettings()), HostedInferenceAdapter)

    def test_auto_with_url_selects_custom(self, custom_settings):
        assert isinstance(select_adapter(custom_settings), CustomEndpointAdapter)

    def test_explicit_hosted_ignores_url(self):
        settings = RelaySettings(inference_backend="hosted", inference_url="http://x.test")
        assert isinstance(select_adapter(settings), HostedInferenceAdapter)
