"""Pydantic models for generation requests and streamed/returned events.

Wire names follow the Gemini-compatible REST surface (camelCase); Python
attributes are snake_case and either spelling is accepted on input.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class Part(_WireModel):
    text: str | None = None


class Content(_WireModel):
    role: str | None = None
    parts: list[Part] = Field(default_factory=list)


class SafetySetting(_WireModel):
    category: str
    threshold: str


class GenerationConfig(_WireModel):
    """Optional sampling controls. Unset fields are never sent."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True)

    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    candidate_count: int | None = None
    max_output_tokens: int | None = None
    stop_sequences: list[str] | None = None
    safety_settings: list[SafetySetting] | None = None


class GenerationRequest(BaseModel):
    """Caller-owned prompt plus optional sampling controls."""
    model_config = ConfigDict(frozen=True)

    contents: list[Content]
    config: GenerationConfig | None = None

    @field_validator("contents", mode="before")
    @classmethod
    def _coerce_contents(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [{"role": "user", "parts": [{"text": value}]}]
        if isinstance(value, (Content, dict)):
            return [value]
        return value


class Candidate(_WireModel):
    content: Content | None = None
    finish_reason: str | None = None
    index: int | None = None


class GenerationEvent(_WireModel):
    """One decoded unit of model output.

    Keys the server sends beyond ``candidates`` (usage metadata, model
    version, ...) are kept as-is.
    """

    candidates: list[Candidate] = Field(default_factory=list)

    @property
    def text(self) -> str:
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return "".join(p.text or "" for p in self.candidates[0].content.parts)

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire names, leaving out anything the server did not send."""
        return self.model_dump(by_alias=True, exclude_unset=True)
