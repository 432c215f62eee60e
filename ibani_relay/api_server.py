import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ibani_relay.config import RelaySettings, load_settings
from ibani_relay.errors import RelayError
from ibani_relay.relay import TranslationRelay
from ibani_relay.schemas import ErrorResponse, HealthResponse, ServiceInfo
from ibani_relay.translate_router import router as translate_router

logger = logging.getLogger("IbaniRelay.Server")

SERVICE_NAME = "Ibani Translator API"
SERVICE_VERSION = "1.0.0"

ENDPOINTS = {
    "info": "GET /",
    "health": "GET /health",
    "translate": "POST /api/translate",
}


async def relay_error_handler(request: Request, exc: RelayError):
    body = ErrorResponse(error=exc.error, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def create_app(settings: Optional[RelaySettings] = None, relay: Optional[TranslationRelay] = None) -> FastAPI:
    """
    Build the relay application around an explicit settings value.
    A prebuilt relay can be injected (tests); otherwise one is made from settings.
    """
    settings = settings or load_settings()

    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
    app.state.settings = settings
    app.state.relay = relay or TranslationRelay(settings)

    # Origins come from configuration; the regex covers extension-style origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_origin_regex=settings.allowed_origin_regex,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RelayError, relay_error_handler)
    app.include_router(translate_router)

    @app.get("/", response_model=ServiceInfo)
    async def service_info():
        return ServiceInfo(
            name=SERVICE_NAME,
            version=SERVICE_VERSION,
            description=f"English to Ibani translation relay for {settings.model_id}",
            model=settings.model_id,
            endpoints=ENDPOINTS,
        )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(
            model=settings.model_id,
            timestamp=datetime.now(timezone.utc).isoformat(),
            using_custom_inference=settings.using_custom_inference,
        )

    logger.info(f"[*] App ready (backend={settings.backend}, origins={settings.allowed_origins})")
    return app
