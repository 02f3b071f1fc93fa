"""Client configuration: YAML file, then environment, then CLI flags."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import DEFAULT_API_PREFIX, DEFAULT_NAMESPACE, DEFAULT_SERVER, DEFAULT_TIMEOUT
from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".kubegen" / "config.yaml"

ENV_CONFIG = "KUBEGEN_CONFIG"
ENV_SERVER = "KUBEGEN_SERVER"
ENV_NAMESPACE = "KUBEGEN_NAMESPACE"


class ClientConfig(BaseModel):
    server: str = DEFAULT_SERVER
    api_prefix: str = DEFAULT_API_PREFIX
    namespace: str = DEFAULT_NAMESPACE
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("server")
    def ensure_http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("server must be an http:// or https:// URL")
        return value.rstrip("/")

    @field_validator("namespace")
    def ensure_namespace(cls, value: str) -> str:
        if not value:
            raise ValueError("namespace must not be empty")
        return value

    @property
    def base_url(self) -> str:
        prefix = self.api_prefix.strip("/")
        return f"{self.server}/{prefix}" if prefix else self.server


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ClientConfig:
    """Build the effective configuration.

    A missing file means defaults. Environment variables override the
    file and non-empty ``overrides`` (from CLI flags) override both.
    """
    environ = os.environ if environ is None else environ
    if path is None:
        path = Path(environ[ENV_CONFIG]) if environ.get(ENV_CONFIG) else DEFAULT_CONFIG_PATH

    data: Dict[str, Any] = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text())
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"cannot read config {path}: {exc}") from exc
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(f"config {path} must be a mapping")
        data.update(loaded or {})

    if environ.get(ENV_SERVER):
        data["server"] = environ[ENV_SERVER]
    if environ.get(ENV_NAMESPACE):
        data["namespace"] = environ[ENV_NAMESPACE]

    for key, value in (overrides or {}).items():
        if value not in (None, ""):
            data[key] = value

    try:
        return ClientConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
