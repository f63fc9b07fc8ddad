"""Decoder for the streamGenerateContent response body.

The local server writes one record per line, framed as ``data: <json>``
where ``<json>`` is a one-element array wrapping the event. Bytes arrive in
arbitrary chunks; records are reassembled here and handed out lazily.
"""
from __future__ import annotations
import codecs
import json
import logging
from typing import Iterable, Iterator

from pydantic import ValidationError

from local_content_generator.common.schema import GenerationEvent

LOGGER = logging.getLogger("localgen.client.stream")

DATA_PREFIX = "data: "


class DecodeBuffer:
    """Text not yet resolved into a complete newline-terminated line.

    Bytes go through an incremental UTF-8 decoder so a character split across
    two chunks is only emitted once its last byte has arrived.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        # unterminated text, kept as pieces so each chunk is scanned once
        self._parts: list[str] = []

    @property
    def pending(self) -> str:
        return "".join(self._parts)

    def feed(self, chunk: bytes) -> list[str]:
        """Append a chunk and return every line it completed, in order."""
        text = self._decoder.decode(chunk)
        if "\n" not in text:
            if text:
                self._parts.append(text)
            return []
        head, *lines, tail = text.split("\n")
        self._parts.append(head)
        lines.insert(0, "".join(self._parts))
        self._parts = [tail] if tail else []
        return lines


def parse_data_line(line: str) -> GenerationEvent | None:
    """Turn one framed line into an event, or ``None`` if it carries none.

    Non-data lines are ignored. Malformed data lines are logged and skipped.
    """
    if not line.startswith(DATA_PREFIX):
        return None
    json_str = line[len(DATA_PREFIX):]
    try:
        payload = json.loads(json_str)
    except (ValueError, RecursionError) as e:
        LOGGER.error("Failed to parse JSON stream chunk: %s | %r", e, json_str[:200])
        return None

    if not isinstance(payload, list) or not payload:
        LOGGER.warning("Unexpected stream format: %r", payload)
        return None
    if len(payload) > 1:
        LOGGER.warning("Stream record wraps %d elements; using the first", len(payload))

    try:
        return GenerationEvent.model_validate(payload[0])
    except ValidationError as e:
        LOGGER.warning("Stream record is not a generation event: %s", e)
        return None


def decode_stream(chunks: Iterable[bytes]) -> Iterator[GenerationEvent]:
    """
    Lazily decode generation events from a chunked byte stream.

    All complete lines in the buffer are processed before the next chunk is
    pulled. An unterminated trailing fragment is dropped at end of stream.

    Args:
        chunks: Raw body chunks in arrival order.
    """
    buffer = DecodeBuffer()
    for chunk in chunks:
        for line in buffer.feed(chunk):
            event = parse_data_line(line)
            if event is not None:
                yield event
    if buffer.pending:
        LOGGER.debug("Discarding %d unterminated trailing chars", len(buffer.pending))
