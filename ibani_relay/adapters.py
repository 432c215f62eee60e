import json
from typing import Any, Dict

from ibani_relay.config import RelaySettings
from ibani_relay.errors import ConfigurationError


def extract_translation(data: Any) -> str:
    """
    Normalize an upstream payload into plain translated text.
    Order: first element of a non-empty list -> object field -> raw JSON dump.
    """
    value = None
    if isinstance(data, list) and len(data) > 0:
        if isinstance(data[0], dict):
            value = data[0].get("translation_text")
    elif isinstance(data, dict):
        value = data.get("translation_text")

    if isinstance(value, str):
        return value

    # Fallback for different response formats
    return json.dumps(data, ensure_ascii=False)


class ExternalResponseAdapter:
    """
    Describes how to talk to one kind of inference backend:
    where to POST, what body to send, and how to read the answer.
    """
    name = "base"

    def __init__(self, settings: RelaySettings):
        self.settings = settings

    @property
    def target_url(self) -> str:
        raise NotImplementedError

    def build_payload(self, text: str) -> Dict[str, Any]:
        raise NotImplementedError

    def build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.access_token:
            headers["Authorization"] = f"Bearer {self.settings.access_token}"
        return headers

    def normalize(self, data: Any) -> str:
        return extract_translation(data)


class HostedInferenceAdapter(ExternalResponseAdapter):
    """Hugging Face hosted inference API (usually answers [{translation_text}])"""
    name = "hosted"

    @property
    def target_url(self) -> str:
        return f"{self.settings.hf_base_url}/{self.settings.model_id}"

    def build_payload(self, text: str) -> Dict[str, Any]:
        return {
            "inputs": text,
            "parameters": {
                "wait_for_model": True  # block through model cold start
            }
        }


class CustomEndpointAdapter(ExternalResponseAdapter):
    """Self-hosted inference endpoint (usually answers {translation_text})"""
    name = "custom"

    @property
    def target_url(self) -> str:
        if not self.settings.inference_url:
            raise ConfigurationError("INFERENCE_URL is not configured for the custom inference backend.")
        return self.settings.inference_url

    def build_payload(self, text: str) -> Dict[str, Any]:
        return {"text": text}


ADAPTERS = {
    HostedInferenceAdapter.name: HostedInferenceAdapter,
    CustomEndpointAdapter.name: CustomEndpointAdapter,
}


def select_adapter(settings: RelaySettings) -> ExternalResponseAdapter:
    return ADAPTERS[settings.backend](settings)
