from __future__ import annotations

from typing import Any, Iterator

import pytest

import local_content_generator.cli as cli_mod
from local_content_generator.common.errors import ContentGenerationError, TransportError
from local_content_generator.common.schema import GenerationEvent, GenerationRequest


def _event(text: str) -> GenerationEvent:
    return GenerationEvent.model_validate(
        {"candidates": [{"index": 0, "content": {"role": "model", "parts": [{"text": text}]}}]}
    )


class _FakeGenerator:
    last_request: GenerationRequest | None = None

    def __init__(self, settings: Any) -> None:
        self.settings = settings

    def generate_content(self, request: GenerationRequest) -> GenerationEvent:
        _FakeGenerator.last_request = request
        return _event("Hello test")

    def generate_content_stream(self, request: GenerationRequest) -> Iterator[GenerationEvent]:
        _FakeGenerator.last_request = request
        yield _event("Hel")
        yield _event("lo")


class _FailingGenerator(_FakeGenerator):
    def generate_content(self, request: GenerationRequest) -> GenerationEvent:
        raise ContentGenerationError(
            "content generation", "Failed to generate content from local LLM", TransportError("refused")
        )


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_mod, "setup_logging", lambda: None)


def test_single_shot_prints_text(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(cli_mod, "LocalContentGenerator", _FakeGenerator)
    rc = cli_mod.main(["--text", "hi", "--temperature", "0.3", "--stop", "END", "--stop", "STOP"])
    assert rc == 0
    assert capsys.readouterr().out == "Hello test\n"

    req = _FakeGenerator.last_request
    assert req is not None and req.config is not None
    assert req.config.temperature == 0.3
    assert req.config.stop_sequences == ["END", "STOP"]
    assert req.config.top_k is None


def test_stream_prints_incrementally(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(cli_mod, "LocalContentGenerator", _FakeGenerator)
    assert cli_mod.main(["--text", "hi", "--stream"]) == 0
    assert capsys.readouterr().out == "Hello\n"


def test_failure_exits_nonzero(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(cli_mod, "LocalContentGenerator", _FailingGenerator)
    assert cli_mod.main(["--text", "hi"]) == 1
    assert capsys.readouterr().out == ""


def test_candidate_count_is_passed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_mod, "LocalContentGenerator", _FakeGenerator)
    assert cli_mod.main(["--text", "hi", "--candidate-count", "2"]) == 0
    req = _FakeGenerator.last_request
    assert req is not None and req.config is not None
    assert req.config.candidate_count == 2


def test_missing_config_file_exits_nonzero(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:  # noqa: ANN001
    assert cli_mod.main(["--text", "hi", "--cfg", str(tmp_path / "nope.yaml")]) == 1
    assert capsys.readouterr().out == ""
