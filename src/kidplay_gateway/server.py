"""
Flask API exposing the AI gateway to the arcade frontend.

Endpoints:
- POST /api/ask-ai   -> classify the game payload, ask the model once, return a move/content
                        (or a local fallback annotated with "error")
- GET  /api/status   -> health plus whether the upstream model is configured
- OPTIONS /api/<path> -> CORS preflight

Every /api/ route shares a general per-IP window; /api/ask-ai also has a stricter AI window.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from flask import Flask, Response, jsonify, request
from werkzeug.middleware.proxy_fix import ProxyFix

from .adapters import adapter_names
from .config import SETTINGS, Settings
from .errors import GatewayError
from .gateway import Gateway
from .llm_client import AIClient
from .rate_limiter import SlidingWindowLimiter

log = logging.getLogger("server")

GENERAL_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
AI_LIMIT_MESSAGE = "Too many AI requests from this IP, please try again later."


def _client_ip() -> str:
    return request.remote_addr or "unknown"


def _rate_limited(limiter: SlidingWindowLimiter) -> Optional[Response]:
    retry_after = limiter.hit(_client_ip())
    if retry_after is None:
        return None
    resp = jsonify({"error": limiter.message})
    resp.status_code = 429
    resp.headers["Retry-After"] = str(max(1, math.ceil(retry_after)))
    return resp


def _log_ai_mode(settings: Settings) -> None:
    if settings.demo_mode:
        log.warning("Running in DEMO MODE - AI features will use fallback responses")
    elif not settings.ai_configured:
        log.warning("Missing AZURE_API_KEY or AZURE_ENDPOINT - AI features will use fallback responses")
    else:
        log.info("Azure OpenAI credentials configured")


def create_app(settings: Settings = SETTINGS, gateway: Optional[Gateway] = None) -> Flask:
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 1024 * 1024
    if settings.trust_proxy > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=settings.trust_proxy)

    gateway = gateway or Gateway(AIClient(settings))
    general_limiter = SlidingWindowLimiter(settings.general_rate_limit, settings.general_rate_window_s, GENERAL_LIMIT_MESSAGE)
    ai_limiter = SlidingWindowLimiter(settings.ai_rate_limit, settings.ai_rate_window_s, AI_LIMIT_MESSAGE)
    _log_ai_mode(settings)

    def _allowed_origin(origin: Optional[str]) -> Optional[str]:
        if not origin:
            return None
        if settings.is_production and origin not in settings.allowed_origins:
            return None
        return origin

    @app.before_request
    def apply_general_limit():
        if request.method == "OPTIONS" or not request.path.startswith("/api/"):
            return None
        return _rate_limited(general_limiter)

    @app.route("/api/ask-ai", methods=["POST"])
    def ask_ai():
        limited = _rate_limited(ai_limiter)
        if limited is not None:
            return limited
        body = request.get_json(silent=True)
        result = gateway.handle(body)
        return jsonify(result.body), result.status

    @app.route("/api/status", methods=["GET"])
    def status():
        return jsonify(
            {
                "status": "ok",
                "ai": {
                    "configured": settings.ai_configured,
                    "fallbackOnly": settings.fallback_only,
                    "demoMode": settings.demo_mode,
                },
                "adapters": adapter_names(),
            }
        )

    @app.errorhandler(GatewayError)
    def handle_gateway_error(exc: GatewayError):
        if exc.status_code >= 500:
            log.error("Request failed: %s", exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        code = getattr(exc, "code", None)
        if isinstance(code, int) and 400 <= code < 500:
            return jsonify({"error": getattr(exc, "description", str(exc))}), code
        log.exception("API Error")
        return jsonify({"error": "Internal server error"}), 500

    @app.after_request
    def add_cors_headers(response):
        origin = _allowed_origin(request.headers.get("Origin"))
        if origin:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Cache-Control"] = "no-store, max-age=0"
        return response

    @app.route("/api/<path:path>", methods=["OPTIONS"])
    def cors_preflight(path: str):
        return app.make_response(("", 204))

    return app
