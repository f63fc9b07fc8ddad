from __future__ import annotations

import pytest

from local_content_generator.common.errors import ConfigurationError
from local_content_generator.common.settings import Endpoint, LocalLLMSettings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("LOCAL_LLM_BASE_URL", "LOCAL_LLM_MODEL", "LOCAL_LLM_TIMEOUT_MS"):
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    s = load_settings()
    assert s == LocalLLMSettings("http://localhost:8000/v1beta", "gemini-1.5-flash", 60000)


def test_yaml_then_env_override(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:  # noqa: ANN001
    cfg = tmp_path / "local_llm.yaml"
    cfg.write_text("base_url: http://gpu-box:9000/v1beta\nmodel: gemma-3-4b-it\ntimeout_ms: 5000\n", encoding="utf-8")
    assert load_settings(str(cfg)) == LocalLLMSettings("http://gpu-box:9000/v1beta", "gemma-3-4b-it", 5000)

    monkeypatch.setenv("LOCAL_LLM_MODEL", "gemma-3-12b-it")
    monkeypatch.setenv("LOCAL_LLM_TIMEOUT_MS", "1500")
    s = load_settings(str(cfg))
    assert s.model == "gemma-3-12b-it"
    assert s.timeout_ms == 1500
    assert s.base_url == "http://gpu-box:9000/v1beta"


def test_empty_yaml_keeps_defaults(tmp_path) -> None:  # noqa: ANN001
    cfg = tmp_path / "empty.yaml"
    cfg.write_text("", encoding="utf-8")
    assert load_settings(str(cfg)) == LocalLLMSettings()


@pytest.mark.parametrize("raw", ["0", "-5", "soon"])
def test_bad_timeout_rejected(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("LOCAL_LLM_TIMEOUT_MS", raw)
    with pytest.raises(ConfigurationError):
        load_settings()


def test_non_mapping_yaml_rejected(tmp_path) -> None:  # noqa: ANN001
    cfg = tmp_path / "list.yaml"
    cfg.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(str(cfg))


def test_missing_config_file(tmp_path) -> None:  # noqa: ANN001
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "nope.yaml"))


def test_endpoint_urls() -> None:
    s = LocalLLMSettings(base_url="http://localhost:8000/v1beta/", model="gemma")
    assert s.endpoint(stream=False).url == "http://localhost:8000/v1beta/models/gemma:generateContent"
    assert s.endpoint(stream=True).url == "http://localhost:8000/v1beta/models/gemma:streamGenerateContent"
    assert Endpoint("http://h", "m").stream is False


@pytest.mark.parametrize("url", ["http://[::1/v1beta", "ftp://localhost/v1beta"])
def test_bad_base_url_rejected(monkeypatch: pytest.MonkeyPatch, url: str) -> None:
    monkeypatch.setenv("LOCAL_LLM_BASE_URL", url)
    with pytest.raises(ConfigurationError):
        load_settings()
