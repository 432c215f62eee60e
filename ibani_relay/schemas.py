from typing import Dict, Literal
from pydantic import BaseModel, Field, StrictStr

SOURCE_LANGUAGE = "English"
TARGET_LANGUAGE = "Ibani"

# -------------------------------------------------------------------------
# [Translate API Schemas]
# -------------------------------------------------------------------------

class TranslationRequest(BaseModel):
    """Client -> Relay: text to translate (no coercion of non-strings)"""
    text: StrictStr = Field(min_length=1)

class TranslationResponse(BaseModel):
    """Relay -> Client: normalized translation result"""
    original_text: str
    translated_text: str
    source_language: str = SOURCE_LANGUAGE
    target_language: str = TARGET_LANGUAGE
    success: Literal[True] = True

class ErrorResponse(BaseModel):
    error: str
    message: str
    success: Literal[False] = False

# -------------------------------------------------------------------------
# [Service Info Schemas]
# -------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "UP"
    model: str
    timestamp: str
    using_custom_inference: bool

class ServiceInfo(BaseModel):
    name: str
    version: str
    description: str
    model: str
    endpoints: Dict[str, str]
