"""Content generator backed by a locally hosted Gemini-compatible server.

- generate_content: one POST, whole JSON body, bounded by a timeout
- generate_content_stream: one POST, newline-framed body decoded lazily
- count_tokens / embed_content: not offered by the local server
"""
from __future__ import annotations
import json
import logging
import time
from typing import Any, Iterator

import httpx
from pydantic import ValidationError

from local_content_generator.client.payload import JSON_HEADERS, build_payload
from local_content_generator.client.stream import decode_stream
from local_content_generator.common.errors import (
    DecodeError,
    HttpStatusError,
    NotSupportedError,
    TransportError,
    wrap_errors,
)
from local_content_generator.common.schema import GenerationEvent, GenerationRequest
from local_content_generator.common.settings import LocalLLMSettings

LOGGER = logging.getLogger("localgen.client.local")

GENERATE_OPERATION = "content generation"
STREAM_OPERATION = "content generation stream"

# statuses for which HTTP defines no response body
_NULL_BODY_STATUSES = frozenset({204, 205})


def _raise_for_status(response: httpx.Response) -> None:
    if not response.is_success:
        raise HttpStatusError(response.status_code, response.reason_phrase)


def _check_deadline(deadline: float, timeout_ms: int) -> None:
    # httpx timeouts are per connect/read; this bounds the whole call
    if time.monotonic() > deadline:
        raise TransportError("timeout", f"Request timed out after {timeout_ms}ms")


class LocalContentGenerator:
    """
    Adapter from the ContentGenerator contract to a local LLM server.

    Args:
        settings: Base URL, model and single-shot timeout.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(self, settings: LocalLLMSettings, transport: httpx.BaseTransport | None = None) -> None:
        self.settings = settings
        self._transport = transport

    def _client(self, timeout: float | None) -> httpx.Client:
        return httpx.Client(timeout=timeout, transport=self._transport)

    def generate_content(self, request: GenerationRequest) -> GenerationEvent:
        url = self.settings.endpoint(stream=False).url
        payload = build_payload(request)
        timeout_ms = self.settings.timeout_ms

        start = time.time()
        deadline = time.monotonic() + timeout_ms / 1000
        with wrap_errors(GENERATE_OPERATION, "Failed to generate content from local LLM", timeout_ms):
            with self._client(timeout=timeout_ms / 1000) as client:
                with client.stream("POST", url, headers=JSON_HEADERS, json=payload) as r:
                    _check_deadline(deadline, timeout_ms)
                    _raise_for_status(r)
                    body = bytearray()
                    for chunk in r.iter_bytes():
                        body += chunk
                        _check_deadline(deadline, timeout_ms)
            try:
                data = json.loads(body)
            except (ValueError, RecursionError) as e:
                raise DecodeError(f"Response body is not valid JSON: {e}") from e
            try:
                event = GenerationEvent.model_validate(data)
            except ValidationError as e:
                raise DecodeError(f"Response body is not a generation event: {e}") from e

        LOGGER.debug("generateContent %s in %dms", self.settings.model, int((time.time() - start) * 1000))
        return event

    def generate_content_stream(self, request: GenerationRequest) -> Iterator[GenerationEvent]:
        """
        Stream events from the local server.

        Nothing is sent until the first event is requested. There is no
        timeout on this path; a server that stalls without closing the
        connection blocks the consumer. Closing the iterator early closes the
        connection.
        """
        url = self.settings.endpoint(stream=True).url
        payload = build_payload(request)

        with wrap_errors(STREAM_OPERATION, "Failed to generate content stream from local LLM"):
            with self._client(timeout=None) as client:
                with client.stream("POST", url, headers=JSON_HEADERS, json=payload) as response:
                    _raise_for_status(response)
                    if response.status_code in _NULL_BODY_STATUSES:
                        raise TransportError("empty body", "Response body is null")
                    yield from decode_stream(response.iter_bytes())

    def count_tokens(self, request: Any) -> Any:
        raise NotSupportedError("count_tokens")

    def embed_content(self, request: Any) -> Any:
        raise NotSupportedError("embed_content")
