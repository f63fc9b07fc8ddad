"""Content-generation capability shared by remote and local backends."""
from __future__ import annotations

from typing import Any, Iterator, Protocol, runtime_checkable

from local_content_generator.common.schema import GenerationEvent, GenerationRequest


@runtime_checkable
class ContentGenerator(Protocol):
    def generate_content(self, request: GenerationRequest) -> GenerationEvent: ...

    def generate_content_stream(self, request: GenerationRequest) -> Iterator[GenerationEvent]:
        """Yield events as they arrive; a new call is needed to stream again."""
        ...

    def count_tokens(self, request: Any) -> Any: ...

    def embed_content(self, request: Any) -> Any: ...
