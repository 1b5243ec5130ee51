"""FastAPI app exposing the analyzer.

POST /api/analyze
    Request body: {"url": "https://polymarket.com/event/..."}
    Response: {"market": ..., "signal": ..., "warnings": [...]} or
              {"error": "..."} with 400 / 404 / 429 / 500
"""

from __future__ import annotations

import logging
from json import JSONDecodeError

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from smart_money.common.cache import MemoryCache
from smart_money.errors import SmartMoneyError
from smart_money.markets.urls import is_polymarket_url
from smart_money.pipeline import analyze_url
from smart_money.signals.formatters import result_to_dict

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Polymarket Smart Money Analyzer",
    description="Credibility-weighted trading signals from a market's top holders.",
    version="0.1.0",
)

# Shared across requests; entries expire by TTL
app.state.cache = MemoryCache()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.post("/api/analyze")
async def analyze_endpoint(request: Request) -> JSONResponse:
    try:
        body = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        body = None

    url = body.get("url") if isinstance(body, dict) else None
    if not url or not isinstance(url, str):
        return _error('Missing or invalid "url" field. Please provide a Polymarket URL.', 400)

    if not is_polymarket_url(url):
        return _error(
            "Invalid URL. Please enter a valid Polymarket URL (e.g. https://polymarket.com/event/...)",
            400,
        )

    try:
        result = await analyze_url(url, cache=request.app.state.cache)
    except SmartMoneyError as exc:
        logger.warning("[/api/analyze] %s: %s", type(exc).__name__, exc.message)
        return _error(exc.message, exc.status_code)
    except Exception:
        logger.exception("[/api/analyze] Unexpected error")
        return _error("An unexpected error occurred", 500)

    return JSONResponse(result_to_dict(result.market, result.outcome))


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
