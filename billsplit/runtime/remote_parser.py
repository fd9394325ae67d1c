"""Remote structured-parse fallback: OCR text -> hosted model -> receipt JSON.

Every failure resolves to a RemoteParseError value; nothing is raised to the
caller, so UI code can render one uniform "could not parse" state.
"""

from __future__ import annotations

import httpx

from billsplit.domain.receipt import RemoteParseError, RemoteParseResult, RemoteParseStatus
from billsplit.receipt.json_recovery import recover_json
from billsplit.receipt.structured_parser import build_receipt_prompt, coerce_structured_receipt
from billsplit.runtime.inference_client import (
    InferenceAPIError,
    InferenceClient,
    InferenceConfigError,
    InferenceResponseError,
    InferenceSettings,
)
from billsplit.runtime.logging import get_logger

logger = get_logger(__name__)


class RemoteReceiptParser:
    """One remote parse attempt and its lifecycle status.

    ``status`` moves NOT_SENT -> AWAITING_RESPONSE -> one of SUCCESS,
    API_ERROR, FORMAT_ERROR or NETWORK_ERROR. Use a new instance per attempt.
    """

    def __init__(self, client: InferenceClient) -> None:
        self.client = client
        self.status = RemoteParseStatus.NOT_SENT

    def _fail(self, status: RemoteParseStatus, error: str, **details: str | None) -> RemoteParseError:
        self.status = status
        return RemoteParseError(status=status, error=error, **details)

    def parse(self, ocr_text: object) -> RemoteParseResult:
        if not ocr_text or not isinstance(ocr_text, str):
            logger.warning("Invalid OCR text provided; nothing sent")
            return RemoteParseError(status=RemoteParseStatus.NOT_SENT, error="Invalid OCR text provided")

        messages = [{"role": "user", "content": build_receipt_prompt(ocr_text)}]
        self.status = RemoteParseStatus.AWAITING_RESPONSE
        try:
            completion = self.client.chat_completion(messages)
        except InferenceConfigError as e:
            logger.error("Inference client not configured: %s", e)
            return self._fail(RemoteParseStatus.API_ERROR, "API Error: not configured", message=str(e))
        except InferenceAPIError as e:
            return self._fail(
                RemoteParseStatus.API_ERROR,
                f"API Error: {e.status_code}",
                message=e.body or f"HTTP {e.status_code}",
                raw_response=e.body,
            )
        except InferenceResponseError as e:
            logger.error("Unexpected inference response format: %s", e)
            return self._fail(RemoteParseStatus.FORMAT_ERROR, str(e), raw_response=e.raw_response)
        except httpx.HTTPError as e:
            logger.error("Failed to reach inference service: %s", e)
            return self._fail(RemoteParseStatus.NETWORK_ERROR, "Network or parsing error", message=str(e))

        try:
            receipt = coerce_structured_receipt(recover_json(completion.content))
        except (ValueError, TypeError, RecursionError) as e:
            logger.error("Failed to read receipt from model response: %s", e)
            receipt = None
        if receipt is None:
            logger.warning("Could not extract a receipt from the model response")
            return self._fail(
                RemoteParseStatus.FORMAT_ERROR,
                "Could not parse JSON from response",
                raw_text=completion.content,
                raw_response=completion.raw_response,
            )

        self.status = RemoteParseStatus.SUCCESS
        logger.info("Remote parse succeeded: %d items", len(receipt.items))
        return receipt


def parse_receipt_remote(
    ocr_text: object,
    client: InferenceClient | None = None,
    settings: InferenceSettings | None = None,
) -> RemoteParseResult:
    """
    Ask the hosted model to structure ``ocr_text``; never raises.

    A client passed in is left open for the caller; otherwise one is built
    from ``settings`` (or the environment) and closed afterwards.
    """
    if client is not None:
        return RemoteReceiptParser(client).parse(ocr_text)
    with InferenceClient(settings) as owned_client:
        return RemoteReceiptParser(owned_client).parse(ocr_text)
