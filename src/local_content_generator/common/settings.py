"""Settings for reaching the local LLM server.

Values come from defaults, then an optional YAML file, then the environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

import httpx
import yaml

from local_content_generator.common.errors import ConfigurationError

DEFAULT_BASE_URL = "http://localhost:8000/v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_TIMEOUT_MS = 60000

_ENV_KEYS = {
    "base_url": "LOCAL_LLM_BASE_URL",
    "model": "LOCAL_LLM_MODEL",
    "timeout_ms": "LOCAL_LLM_TIMEOUT_MS",
}


@dataclass(frozen=True)
class LocalLLMSettings:
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def endpoint(self, stream: bool) -> "Endpoint":
        return Endpoint(base_url=self.base_url, model=self.model, stream=stream)


@dataclass(frozen=True)
class Endpoint:
    base_url: str
    model: str
    stream: bool = False

    @property
    def url(self) -> str:
        method = "streamGenerateContent" if self.stream else "generateContent"
        return f"{self.base_url.rstrip('/')}/models/{self.model}:{method}"


def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def _as_timeout(value: Any) -> int:
    try:
        timeout = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"timeout_ms must be an integer, got {value!r}") from e
    if timeout <= 0:
        raise ConfigurationError(f"timeout_ms must be positive, got {timeout}")
    return timeout


def _check_base_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"base_url {url!r} is not a valid URL: {e}") from e
    if parsed.scheme not in ("http", "https"):
        raise ConfigurationError(f"base_url must be an http(s) URL, got {url!r}")


def load_settings(cfg_path: str | None = None) -> LocalLLMSettings:
    """
    Resolve settings for the local LLM adapter.

    Args:
        cfg_path: Optional YAML file with ``base_url``, ``model`` and ``timeout_ms`` keys.
    """
    values: dict[str, Any] = {}
    if cfg_path:
        cfg = load_cfg(cfg_path)
        values.update({k: cfg[k] for k in _ENV_KEYS if cfg.get(k) is not None})
    for key, env in _ENV_KEYS.items():
        raw = os.getenv(env)
        if raw:
            values[key] = raw

    settings = LocalLLMSettings()
    if "timeout_ms" in values:
        values["timeout_ms"] = _as_timeout(values["timeout_ms"])
    for key in ("base_url", "model"):
        if key in values:
            values[key] = str(values[key]).strip()
            if not values[key]:
                raise ConfigurationError(f"{key} must not be empty")
    if "base_url" in values:
        _check_base_url(values["base_url"])
    return replace(settings, **values)
