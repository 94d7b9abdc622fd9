from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = DEFAULT_GEMINI_MODEL
    base_url: str = DEFAULT_GEMINI_BASE_URL
    timeout_seconds: float | None = None


@dataclass
class UploadConfig:
    max_image_kb: int = 2048


@dataclass
class OAuthConfig:
    client_id: str
    client_secret: str
    token_url: str
    scope: str | None = None


@dataclass
class ConnectionConfig:
    host: str
    http_path: str
    catalog: str | None = None
    schema: str = "public"
    access_token: str | None = None
    oauth: OAuthConfig | None = None


@dataclass
class DatabaseConfig:
    default: str
    connections: dict[str, ConnectionConfig] = field(default_factory=dict)

    def current(self) -> ConnectionConfig:
        try:
            return self.connections[self.default]
        except KeyError as exc:
            raise ConfigError(
                f"Default database connection '{self.default}' is not defined"
            ) from exc


@dataclass
class ObservabilityConfig:
    log_level: str = "info"


@dataclass
class AppConfig:
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    uploads: UploadConfig = field(default_factory=UploadConfig)
    database: DatabaseConfig | None = None
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)


_ENV_REF_RE = re.compile(r"^\$\{(?P<key>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}$")


def _resolve_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        match = _ENV_REF_RE.match(value.strip())
        if match:
            key = match.group("key")
            if key in env:
                return env[key]
            if match.group("default") is not None:
                return match.group("default")
            raise ConfigError(f"Environment variable {key} is required but not set")
        return value
    if isinstance(value, list):
        return [_resolve_env(v, env) for v in value]
    if isinstance(value, dict):
        return {k: _resolve_env(v, env) for k, v in value.items()}
    return value


def _positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name} must be an integer") from exc
    if number <= 0:
        raise ConfigError(f"{field_name} must be greater than 0")
    return number


def _optional_timeout(value: Any) -> float | None:
    if value in (None, ""):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError("gemini.timeout_seconds must be a number") from exc
    if timeout <= 0:
        raise ConfigError("gemini.timeout_seconds must be greater than 0")
    return timeout


def _load_oauth(raw: Mapping[str, Any] | None) -> OAuthConfig | None:
    if not raw:
        return None
    try:
        oauth = OAuthConfig(
            client_id=raw["client_id"],
            client_secret=raw["client_secret"],
            token_url=raw["token_url"],
            scope=raw.get("scope"),
        )
    except KeyError as exc:
        raise ConfigError(f"Missing OAuth setting: {exc.args[0]}") from exc
    if not oauth.client_id or not oauth.client_secret or not oauth.token_url:
        raise ConfigError("OAuth client_id, client_secret, and token_url are required")
    return oauth


def _load_connection(name: str, raw: Mapping[str, Any]) -> ConnectionConfig:
    try:
        connection = ConnectionConfig(
            host=raw["host"],
            http_path=raw["http_path"],
            catalog=raw.get("catalog") or None,
            schema=raw.get("schema") or "public",
            access_token=raw.get("access_token") or None,
            oauth=_load_oauth(raw.get("oauth")),
        )
    except KeyError as exc:
        raise ConfigError(
            f"Connection '{name}' is missing setting: {exc.args[0]}"
        ) from exc
    if not connection.host or not connection.http_path:
        raise ConfigError(f"Connection '{name}' requires host and http_path")
    if not connection.access_token and connection.oauth is None:
        raise ConfigError(
            f"Connection '{name}' requires an access_token or oauth credentials"
        )
    return connection


def _load_database(raw: Mapping[str, Any] | None) -> DatabaseConfig | None:
    if not raw:
        return None
    connections_raw = raw.get("connections") or {}
    if not connections_raw:
        raise ConfigError("At least one database connection must be configured")
    connections = {
        name: _load_connection(name, conn_raw)
        for name, conn_raw in connections_raw.items()
    }
    default = raw.get("default") or next(iter(connections))
    if default not in connections:
        raise ConfigError(f"Default database connection '{default}' is not defined")
    return DatabaseConfig(default=default, connections=connections)


def load_config(path: str | Path, env: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if env is None else env
    raw = yaml.safe_load(Path(path).read_text()) or {}
    resolved = _resolve_env(raw, env)

    # Optional so the schema tools can run from a database-only file.
    gemini_raw = resolved.get("gemini") or {}
    uploads_raw = resolved.get("uploads") or {}
    observability_raw = resolved.get("observability") or {}

    # An empty key is reported per request rather than at startup.
    gemini = GeminiConfig(
        api_key=str(gemini_raw.get("api_key") or ""),
        model=gemini_raw.get("model") or DEFAULT_GEMINI_MODEL,
        base_url=(gemini_raw.get("base_url") or DEFAULT_GEMINI_BASE_URL).rstrip("/"),
        timeout_seconds=_optional_timeout(gemini_raw.get("timeout_seconds")),
    )

    uploads = UploadConfig(
        max_image_kb=_positive_int(uploads_raw.get("max_image_kb", 2048), "max_image_kb"),
    )

    observability = ObservabilityConfig(
        log_level=str(observability_raw.get("log_level", "info")),
    )

    return AppConfig(
        gemini=gemini,
        uploads=uploads,
        database=_load_database(resolved.get("database")),
        observability=observability,
    )


def config_path() -> Path:
    """Get the configuration file path from environment or default."""
    return Path(os.environ.get("PLANT_IDENTIFIER_CONFIG", "config.example.yml"))
