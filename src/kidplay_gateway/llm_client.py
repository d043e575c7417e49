from __future__ import annotations
"""
Upstream AI client facade over an Azure OpenAI-compatible chat-completions endpoint.

The rest of the gateway should not care which SDK is in use. This module sends
`messages` plus per-adapter tuning and returns the raw completion text. Any
transport problem (timeout, connection refused, non-2xx) surfaces as UpstreamError;
there is exactly one attempt per call.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import parse_qsl, urlsplit, urlunsplit
import logging

import openai
from openai import OpenAI

from .config import SETTINGS, Settings
from .errors import UpstreamError

log = logging.getLogger("llm_client")

CHAT_COMPLETIONS_SUFFIX = "/chat/completions"


@dataclass(frozen=True)
class Tuning:
    """Fixed sampling knobs for one adapter."""

    max_tokens: int
    temperature: float
    top_p: float = 0.95
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0


def split_endpoint(endpoint: str) -> tuple[str, Dict[str, str]]:
    """Split a full chat-completions URL into (base_url, query params) for the SDK.

    Azure endpoints usually arrive as
    https://<res>.openai.azure.com/openai/deployments/<dep>/chat/completions?api-version=...
    while the SDK appends /chat/completions itself.
    """
    parts = urlsplit(endpoint.strip())
    path = parts.path.rstrip("/")
    if path.endswith(CHAT_COMPLETIONS_SUFFIX):
        path = path[: -len(CHAT_COMPLETIONS_SUFFIX)]
    base_url = urlunsplit((parts.scheme, parts.netloc, path, "", ""))
    return base_url, dict(parse_qsl(parts.query))


class AIClient:
    def __init__(self, settings: Settings = SETTINGS, client: Optional[OpenAI] = None):
        self.settings = settings
        self.model = settings.ai_model
        self.timeout = settings.ai_timeout_s
        self._client = client
        if self._client is None and settings.ai_configured:
            base_url, query = split_endpoint(settings.azure_endpoint)
            self._client = OpenAI(
                api_key=settings.azure_api_key,
                base_url=base_url,
                default_query=query or None,
                default_headers={
                    "api-key": settings.azure_api_key,
                    "Ocp-Apim-Subscription-Key": settings.azure_api_key,
                },
                timeout=self.timeout,
                max_retries=0,
            )

    @property
    def available(self) -> bool:
        return self._client is not None and not self.settings.demo_mode

    def complete(self, messages: List[Dict[str, str]], tuning: Tuning) -> str:
        """Single upstream attempt; returns raw completion text ('' if the model sent nothing)."""
        if not self.available:
            raise UpstreamError("AI client not configured")
        try:
            rsp = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=tuning.max_tokens,
                temperature=tuning.temperature,
                top_p=tuning.top_p,
                frequency_penalty=tuning.frequency_penalty,
                presence_penalty=tuning.presence_penalty,
                timeout=self.timeout,
            )
        except openai.APIStatusError as exc:
            log.error("AI ERROR: upstream returned %s", exc.status_code)
            raise UpstreamError(f"upstream status {exc.status_code}") from exc
        except openai.OpenAIError as exc:
            log.error("AI ERROR: %s", type(exc).__name__)
            raise UpstreamError(str(exc) or type(exc).__name__) from exc
        return _extract_text(rsp)


def _extract_text(rsp) -> str:
    if not getattr(rsp, "choices", None):
        return ""
    msg = rsp.choices[0].message
    content = getattr(msg, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for c in content:
            if isinstance(c, dict):
                if c.get("type") == "text" and isinstance(c.get("text"), str):
                    parts.append(c["text"])
                continue
            t = getattr(c, "text", None)
            if isinstance(t, str):
                parts.append(t)
        return "\n".join(parts)
    return ""
