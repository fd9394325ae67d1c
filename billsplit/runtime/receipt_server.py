"""FastAPI adapter exposing receipt parsing to the bill-splitting app."""

import argparse
import json
import logging
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse

from billsplit.domain.receipt import ParsedItem, RemoteParseError, RemoteParseStatus
from billsplit.receipt.formatter import format_split_message
from billsplit.receipt.ocr_result_parser import ocr_text, parse_receipt, to_fragments
from billsplit.receipt.valuation import calculate_total, format_currency
from billsplit.runtime import get_logger, load_parser_config, set_log_level
from billsplit.runtime.remote_parser import parse_receipt_remote

logger = get_logger(__name__)

app = FastAPI(title="Bill Split Receipt Parser")


async def _read_json(request: Request) -> Any:
    """Return the decoded body, or None if it is not JSON."""
    body = await request.body()
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        return None


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=400)


def _fragments_from_payload(payload: Any) -> Any:
    """Accept either a bare fragment list or ``{"fragments": [...]}``."""
    if isinstance(payload, dict):
        return payload.get("fragments")
    return payload


@app.post("/parse")
async def parse(request: Request) -> JSONResponse:
    """Run the heuristic pipeline over OCR fragments."""
    payload = await _read_json(request)
    fragments = _fragments_from_payload(payload)
    if not isinstance(fragments, list):
        return _bad_request("Expected a JSON list of OCR fragments")

    items = parse_receipt(fragments, load_parser_config())
    logger.info("Parsed %d items from %d fragments", len(items), len(fragments))
    return JSONResponse({"status": "success", "items": [item.to_dict() for item in items]})


# Plain def: the remote call blocks, so FastAPI runs it in its threadpool.
@app.post("/parse/remote")
def parse_remote(payload: Any = Body(None)) -> JSONResponse:
    """Ask the hosted model for a structured receipt."""
    if isinstance(payload, dict) and isinstance(payload.get("text"), str):
        text = payload["text"]
    else:
        fragments = _fragments_from_payload(payload)
        if not isinstance(fragments, list):
            return _bad_request("Expected {'text': ...} or a list of OCR fragments")
        text = ocr_text(to_fragments(fragments))

    result = parse_receipt_remote(text)
    if isinstance(result, RemoteParseError):
        status_code = 422 if result.status in (RemoteParseStatus.FORMAT_ERROR, RemoteParseStatus.NOT_SENT) else 502
        return JSONResponse(result.to_dict(), status_code=status_code)
    return JSONResponse({"status": "success", "receipt": result.to_dict()})


@app.post("/split")
async def split(request: Request) -> JSONResponse:
    """Total the selected items and build the share message."""
    payload = await _read_json(request)
    if not isinstance(payload, dict):
        return _bad_request("Expected {'items': [...], 'selected_ids': [...]}")

    raw_items = payload.get("items")
    selected_ids = payload.get("selected_ids", [])
    if not isinstance(raw_items, list) or not isinstance(selected_ids, list):
        return _bad_request("'items' and 'selected_ids' must be lists")

    try:
        items = [ParsedItem.from_dict(raw) for raw in raw_items]
        selected = [int(item_id) for item_id in selected_ids]
    except (ValueError, TypeError) as e:
        return _bad_request(str(e))

    total = calculate_total(items, selected)
    return JSONResponse(
        {
            "status": "success",
            "total": float(total),
            "formatted_total": format_currency(total),
            "message": format_split_message(items, selected),
        }
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def main(argv: list[str] | None = None) -> None:
    """Serve the adapter with uvicorn."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Serve the receipt parsing API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--debug", action="store_true", help="Log dropped candidates and recovery attempts")
    args = parser.parse_args(argv)

    if args.debug:
        set_log_level(logging.DEBUG)

    logger.info("Starting receipt parser on %s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
