"""
KidPlay AI gateway package.

Components:
- router: shape-based classification of /api/ask-ai payloads
- adapters: per-game prompt building, answer validation and fallbacks
- parsing/validation/fallbacks: pure helpers shared by the adapters
- llm_client: single-attempt Azure OpenAI-compatible transport
- rate_limiter/server: Flask HTTP surface with per-IP sliding windows
"""
