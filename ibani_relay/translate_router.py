import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import ValidationError

from ibani_relay.errors import InvalidTranslationRequest
from ibani_relay.schemas import TranslationRequest, TranslationResponse

logger = logging.getLogger("IbaniRelay.Router")

router = APIRouter()

MISSING_TEXT_MESSAGE = 'Please provide a "text" field in the request body.'


async def _read_payload(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        # empty or malformed JSON body
        return None


def parse_translation_request(payload: Any) -> TranslationRequest:
    """Validate a raw JSON body; anything but {"text": "<non-empty str>"} is a 400."""
    try:
        return TranslationRequest.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"[*] Rejected translate request: {e.error_count()} validation error(s)")
        raise InvalidTranslationRequest(MISSING_TEXT_MESSAGE)


@router.post("/api/translate", response_model=TranslationResponse)
async def translate_endpoint(request: Request):
    """
    POST /api/translate
    Body: { text: string }
    """
    req = parse_translation_request(await _read_payload(request))
    relay = request.app.state.relay
    return await relay.translate(req.text)
