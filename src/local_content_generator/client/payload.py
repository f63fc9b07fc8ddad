"""Request body shaping for the generateContent endpoints."""
from __future__ import annotations
from typing import Any

from local_content_generator.common.schema import GenerationConfig, GenerationRequest

JSON_HEADERS = {"Content-Type": "application/json"}

_SAMPLING_FIELDS = (
    "temperature",
    "top_p",
    "top_k",
    "candidate_count",
    "max_output_tokens",
    "stop_sequences",
)


def build_payload(request: GenerationRequest) -> dict[str, Any]:
    """
    Build the JSON body for a generation call.

    Fields the caller did not set are left out rather than defaulted.

    Args:
        request: Prompt contents and optional sampling controls.
    """
    config = request.config or GenerationConfig()
    payload: dict[str, Any] = {
        "contents": [c.model_dump(by_alias=True, exclude_none=True) for c in request.contents],
    }
    if config.safety_settings is not None:
        payload["safetySettings"] = [s.model_dump(by_alias=True) for s in config.safety_settings]
    payload["generationConfig"] = config.model_dump(
        by_alias=True,
        exclude_none=True,
        include=set(_SAMPLING_FIELDS),
    )
    return payload
