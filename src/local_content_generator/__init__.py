"""
Local content generator package.

Provides:
- LocalContentGenerator: Gemini-style generateContent/streamGenerateContent over a local server
- decode_stream: lazy decoder for the newline-framed streaming body
"""
from local_content_generator.client.local_generator import LocalContentGenerator
from local_content_generator.client.stream import decode_stream
from local_content_generator.common.errors import (
    ContentGenerationError,
    DecodeError,
    HttpStatusError,
    LocalLLMError,
    NotSupportedError,
    TransportError,
)
from local_content_generator.common.schema import GenerationConfig, GenerationEvent, GenerationRequest
from local_content_generator.common.settings import LocalLLMSettings, load_settings

__all__ = [
    "ContentGenerationError",
    "DecodeError",
    "GenerationConfig",
    "GenerationEvent",
    "GenerationRequest",
    "HttpStatusError",
    "LocalContentGenerator",
    "LocalLLMError",
    "LocalLLMSettings",
    "NotSupportedError",
    "TransportError",
    "decode_stream",
    "load_settings",
]
