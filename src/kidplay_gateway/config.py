"""
Configuration and environment loading for the KidPlay AI gateway.

- Loads .env (python-dotenv) and settings.yml (YAML) from repo root if present; YAML keys win over env.
- Exposes SETTINGS with the upstream credentials, rate-limit windows and server knobs.
- Missing upstream credentials (or DEMO_MODE) put the gateway in fallback-only mode instead of failing.
"""
from dataclasses import dataclass
import os
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

load_dotenv()


def _repo_root() -> str:
    # this file: src/kidplay_gateway/config.py → repo root is two levels up
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _load_yaml(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data if isinstance(data, dict) else {}


_cfg = _load_yaml(os.environ.get("KIDPLAY_SETTINGS_FILE") or os.path.join(_repo_root(), "settings.yml"))


def _get(name: str, default: Any, cast: Callable[[Any], Any] | None = None) -> Any:
    if name in _cfg:
        val = _cfg[name]
        return cast(val) if cast else val
    env = os.environ.get(name)
    if env is not None:
        return cast(env) if cast else env
    return default


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _as_list(val: Any) -> tuple[str, ...]:
    if isinstance(val, (list, tuple)):
        return tuple(str(v).strip() for v in val if str(v).strip())
    return tuple(p.strip() for p in str(val).split(",") if p.strip())


DEFAULT_ALLOWED_ORIGINS = ("http://localhost:3000", "http://localhost:5173", "https://kidplay-arcade.vercel.app")


@dataclass(frozen=True)
class Settings:
    # Upstream (Azure OpenAI-compatible chat completions)
    azure_api_key: str
    azure_endpoint: str
    ai_model: str
    ai_timeout_s: float
    demo_mode: bool

    # HTTP surface
    environment: str
    allowed_origins: tuple[str, ...]
    trust_proxy: int
    port: int

    # Rate limiting
    general_rate_limit: int
    general_rate_window_s: float
    ai_rate_limit: int
    ai_rate_window_s: float

    @property
    def ai_configured(self) -> bool:
        return bool(self.azure_api_key and self.azure_endpoint)

    @property
    def fallback_only(self) -> bool:
        """True when no upstream call should ever be attempted."""
        return self.demo_mode or not self.ai_configured

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def load_settings() -> Settings:
    return Settings(
        azure_api_key=str(_get("AZURE_API_KEY", "")),
        azure_endpoint=str(_get("AZURE_ENDPOINT", "")),
        ai_model=str(_get("AI_MODEL", "gpt-4o-mini")),
        ai_timeout_s=float(_get("AI_TIMEOUT_S", 10.0, cast=float)),
        demo_mode=_as_bool(_get("DEMO_MODE", False)),
        environment=str(_get("NODE_ENV", _get("APP_ENV", "development"))),
        allowed_origins=_as_list(_get("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)),
        trust_proxy=int(_get("TRUST_PROXY", 0, cast=int)),
        port=int(_get("PORT", 3001, cast=int)),
        general_rate_limit=int(_get("GENERAL_RATE_LIMIT", 100, cast=int)),
        general_rate_window_s=float(_get("GENERAL_RATE_WINDOW_S", 15 * 60, cast=float)),
        ai_rate_limit=int(_get("AI_RATE_LIMIT", 10, cast=int)),
        ai_rate_window_s=float(_get("AI_RATE_WINDOW_S", 60, cast=float)),
    )


SETTINGS = load_settings()
