import logging
from typing import Any, Optional

import httpx

from ibani_relay.adapters import ExternalResponseAdapter, select_adapter
from ibani_relay.config import RelaySettings
from ibani_relay.errors import UpstreamError
from ibani_relay.schemas import TranslationResponse

logger = logging.getLogger("IbaniRelay.Relay")

GENERIC_ERROR_MESSAGE = "Internal Server Error"


def _error_from_body(response: Optional[httpx.Response]) -> Optional[str]:
    """Most specific message the upstream put in its error body, if any."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        # non-JSON bodies (proxy HTML pages) are never forwarded to clients
        return None

    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else str(value)
    return None


def extract_error_message(exc: Exception, response: Optional[httpx.Response] = None) -> str:
    return _error_from_body(response) or str(exc) or GENERIC_ERROR_MESSAGE


class TranslationRelay:
    """
    Forwards one text to the external inference endpoint and reshapes
    the answer into a TranslationResponse. Holds no per-request state.
    """

    def __init__(self, settings: RelaySettings, adapter: Optional[ExternalResponseAdapter] = None):
        self.settings = settings
        self.adapter = adapter or select_adapter(settings)

    async def _post(self, text: str) -> Any:
        target = self.adapter.target_url
        logger.info(f'[*] Translating: "{text}" -> {target}')

        async with httpx.AsyncClient(timeout=self.settings.request_timeout) as client:
            resp = await client.post(
                target,
                json=self.adapter.build_payload(text),
                headers=self.adapter.build_headers(),
            )
            resp.raise_for_status()
            return resp.json()

    async def translate(self, text: str) -> TranslationResponse:
        try:
            data = await self._post(text)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = extract_error_message(e, e.response)
            logger.error(f"[*] Upstream Error ({status}): {message}")
            # only error statuses are forwarded; redirects surface as 500
            raise UpstreamError(message, status_code=status if status >= 400 else 500)
        except httpx.TimeoutException as e:
            message = str(e) or f"Inference request timed out after {self.settings.request_timeout:g}s"
            logger.error(f"[*] Upstream Timeout: {message}")
            raise UpstreamError(message)
        except httpx.InvalidURL as e:
            message = f"Invalid inference URL: {e}"
            logger.error(f"[*] Upstream Request Failed: {message}")
            raise UpstreamError(message)
        except httpx.HTTPError as e:
            message = extract_error_message(e)
            logger.error(f"[*] Upstream Request Failed: {message}")
            raise UpstreamError(message)
        except ValueError as e:
            # 2xx with a body that is not JSON
            message = extract_error_message(e)
            logger.error(f"[*] Upstream Returned Invalid JSON: {message}")
            raise UpstreamError(message)

        return TranslationResponse(
            original_text=text,
            translated_text=self.adapter.normalize(data),
        )
