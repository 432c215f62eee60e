import os
import logging
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from ibani_relay.errors import ConfigurationError

logger = logging.getLogger("IbaniRelay.Config")

DEFAULT_MODEL_ID = "williampepple1/ibani-translator"
DEFAULT_HF_BASE_URL = "https://router.huggingface.co/hf-inference/models"
BACKENDS = ("auto", "hosted", "custom")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE")


class RelaySettings(BaseModel):
    """Process-wide settings, read once at startup and never mutated."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    access_token: Optional[str] = None
    inference_url: Optional[str] = None
    inference_backend: str = "auto"
    hf_base_url: str = DEFAULT_HF_BASE_URL
    model_id: str = DEFAULT_MODEL_ID
    host: str = "0.0.0.0"
    port: int = 5000
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    allowed_origin_regex: Optional[str] = None
    request_timeout: float = 30.0
    log_level: str = "INFO"

    @property
    def backend(self) -> str:
        """Resolved backend name: 'hosted' or 'custom'."""
        if self.inference_backend == "auto":
            return "custom" if self.inference_url else "hosted"
        return self.inference_backend

    @property
    def using_custom_inference(self) -> bool:
        return self.backend == "custom"


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


def _parse_number(name: str, raw: str, cast):
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def load_settings(env_file: Optional[str] = None, **overrides) -> RelaySettings:
    """
    Build RelaySettings from the environment (.env supported).
    Keyword overrides (e.g. CLI flags) win over environment values;
    None overrides are ignored.
    """
    load_dotenv(env_file)

    backend = os.getenv("INFERENCE_BACKEND", "auto").strip().lower()
    if backend not in BACKENDS:
        raise ConfigurationError(
            f"INFERENCE_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}"
        )

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    values = {
        "access_token": os.getenv("HUGGING_FACE_ACCESS_TOKEN") or None,
        "inference_url": os.getenv("INFERENCE_URL") or None,
        "inference_backend": backend,
        "hf_base_url": os.getenv("HF_INFERENCE_BASE_URL", DEFAULT_HF_BASE_URL).rstrip("/"),
        "model_id": os.getenv("MODEL_ID", DEFAULT_MODEL_ID),
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": _parse_number("PORT", os.getenv("PORT", "5000"), int),
        "allowed_origins": _split_origins(os.getenv("ALLOWED_ORIGINS", "*")),
        "allowed_origin_regex": os.getenv("ALLOWED_ORIGIN_REGEX") or None,
        "request_timeout": _parse_number("REQUEST_TIMEOUT", os.getenv("REQUEST_TIMEOUT", "30"), float),
        "log_level": log_level,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    settings = RelaySettings(**values)
    logger.debug(f"[*] Settings loaded (backend={settings.backend}, model={settings.model_id})")
    return settings
