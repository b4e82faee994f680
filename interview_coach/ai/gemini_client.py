"""
Single-attempt client for the Gemini ``generateContent`` REST endpoint
"""

import httpx
import structlog

from interview_coach.core.config import settings
from interview_coach.core.errors import UpstreamFailure

logger = structlog.get_logger(__name__)


class GeminiClient:
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_API_BASE).rstrip("/")
        self._owns_client = http_client is None
        self.client = http_client or httpx.Client(
            timeout=timeout if timeout is not None else settings.GEMINI_TIMEOUT_SECONDS
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise UpstreamFailure("Gemini API key is not configured")

        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        try:
            resp = self.client.post(
                self.endpoint,
                params={"key": self.api_key},
                json=payload,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error(
                "gemini_request_failed",
                status_code=e.response.status_code,
                error=message,
            )
            raise UpstreamFailure(f"Gemini request failed: {message}", cause=e) from e
        except httpx.HTTPError as e:
            logger.error("gemini_transport_error", error=str(e))
            raise UpstreamFailure(f"Gemini request failed: {e}", cause=e) from e

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("gemini_invalid_body", status_code=resp.status_code)
            raise UpstreamFailure("Gemini returned a non-JSON response", cause=e) from e

        text = _response_text(data)
        if not text:
            raise UpstreamFailure("Gemini returned no text")

        logger.info("gemini_response_received", model=self.model, length=len(text))
        return text

    def close(self):
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def _response_text(data) -> str:
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(
        part["text"] for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return f"{error.get('status', response.status_code)}: {error['message']}"
    return f"HTTP {response.status_code}"
