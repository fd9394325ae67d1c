"""HTTP client for the hosted chat-completion inference service."""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from typing import Any

import httpx

from billsplit.runtime.logging import get_logger

logger = get_logger(__name__)

DEFAULT_INFERENCE_URL = "https://router.huggingface.co/v1"


class InferenceServiceError(RuntimeError):
    """Base class for failures talking to the inference service."""


class InferenceConfigError(InferenceServiceError):
    """Raised when the client is missing credentials or a model id."""


class InferenceAPIError(InferenceServiceError):
    """Raised when the inference service answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Inference API error: {status_code}")
        self.status_code = status_code
        self.body = body


class InferenceResponseError(InferenceServiceError):
    """Raised when a success response lacks a ``choices[0].message`` envelope."""

    def __init__(self, message: str, raw_response: str) -> None:
        super().__init__(message)
        self.raw_response = raw_response


@dataclass(frozen=True)
class InferenceSettings:
    """Connection settings for the inference service."""

    base_url: str = DEFAULT_INFERENCE_URL
    api_key: str = ""
    model: str = ""
    # None leaves timeouts to the caller's transport
    timeout: float | None = None


def load_inference_settings() -> InferenceSettings:
    """Read inference settings from the environment.

    Environment variables:
        BILLSPLIT_INFERENCE_URL: OpenAI-compatible base URL
        BILLSPLIT_INFERENCE_API_KEY: bearer token (falls back to HF_TOKEN)
        BILLSPLIT_INFERENCE_MODEL: model id
        BILLSPLIT_INFERENCE_TIMEOUT: seconds; unset means no timeout
    """
    timeout_raw = os.environ.get("BILLSPLIT_INFERENCE_TIMEOUT", "").strip()
    timeout: float | None = None
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError:
            logger.warning("Ignoring invalid BILLSPLIT_INFERENCE_TIMEOUT=%r", timeout_raw)

    return InferenceSettings(
        base_url=os.environ.get("BILLSPLIT_INFERENCE_URL", DEFAULT_INFERENCE_URL),
        api_key=os.environ.get("BILLSPLIT_INFERENCE_API_KEY") or os.environ.get("HF_TOKEN", ""),
        model=os.environ.get("BILLSPLIT_INFERENCE_MODEL", ""),
        timeout=timeout,
    )


@dataclass(frozen=True)
class ChatCompletion:
    """Generated text plus the envelope it came in."""

    content: str
    raw_response: str


def _message_content(payload: Any) -> str | None:
    """Return ``choices[0].message.content`` if the payload has that shape."""
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


class InferenceClient:
    """Synchronous chat-completion client (one request, one response, no retry)."""

    def __init__(
        self,
        settings: InferenceSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or load_inference_settings()
        self._http = httpx.Client(
            base_url=self.settings.base_url.rstrip("/"),
            timeout=self.settings.timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> InferenceClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def chat_completion(self, messages: list[dict[str, str]]) -> ChatCompletion:
        """
        Send one chat-completion request and return the generated text.

        Raises:
            InferenceConfigError: if no API key or model is configured.
            InferenceAPIError: if the service returns a non-2xx status.
            InferenceResponseError: if the body is not a chat-completion envelope.
            httpx.HTTPError: on connection or protocol failures.
        """
        if not self.settings.api_key or not self.settings.model:
            raise InferenceConfigError("Inference API key and model id must be configured")

        logger.info("Sending chat completion request to %s (model %s)...", self.settings.base_url, self.settings.model)
        start_time = time.time()
        response = self._http.post(
            "/chat/completions",
            headers={"Authorization": f"Bearer {self.settings.api_key}"},
            json={"model": self.settings.model, "messages": messages},
        )
        logger.info("Inference service returned %s in %.2f seconds", response.status_code, time.time() - start_time)

        if not response.is_success:
            # Error bodies can echo the prompt, which contains receipt text.
            logger.error("Inference service error: %s", response.status_code)
            raise InferenceAPIError(response.status_code, response.text)

        try:
            payload = response.json()
        except json.JSONDecodeError as e:
            raise InferenceResponseError("Inference response is not JSON", response.text) from e

        content = _message_content(payload)
        if content is None:
            raise InferenceResponseError("Unexpected response format", json.dumps(payload, indent=2))
        return ChatCompletion(content=content, raw_response=json.dumps(payload, indent=2))
