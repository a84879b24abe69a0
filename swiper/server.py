"""
News Swiper HTTP API
====================

Endpoints:
- GET  /health               -> liveness
- GET  /api/news             -> paginated news items
- GET  /api/news/{news_id}   -> one news item
- POST /api/print-receipt    -> format and print a surveillance receipt

Usage:
    news-swiper-server --port 5001
    news-swiper-server --import-json more-news.json
    uvicorn swiper.server:app --reload
"""

from __future__ import annotations

import argparse
import json
import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from swiper.config import SERVER_HOST, SERVER_PORT
from swiper.controller import ActionSink
from swiper.models import Action, ContentItem, OutcomeKind
from swiper.persistence import add_news_items, bootstrap_schema, get_news, list_news
from swiper.printer import ReceiptSink

logger = logging.getLogger(__name__)


class NewsItemPayload(BaseModel):
    # Only presence of the item is required; missing fields print as blanks.
    id: Optional[int] = None
    title: str = ""
    content: str = ""
    image_url: Optional[str] = None
    source: Optional[str] = None
    category: Optional[str] = None
    published_at: Optional[str] = None


class PrintReceiptRequest(BaseModel):
    newsItem: Optional[NewsItemPayload] = None
    action: Action = Action.SKIP


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 1 else default


def _error(status_code: int, message: str, details: str | None = None) -> JSONResponse:
    content: dict[str, str] = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def create_app(db_path: str | None = None, sink: ActionSink | None = None) -> FastAPI:
    """Build the API; `db_path` and `sink` default to the configured store and printer."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        bootstrap_schema(db_path)
        logger.info("server_start db_path=%s", db_path or "default")
        yield
        logger.info("server_stop")

    app = FastAPI(
        title="News Swiper API",
        version="0.1.0",
        description="News cards and surveillance receipts",
        lifespan=lifespan,
    )
    app.state.db_path = db_path
    app.state.sink = sink or ReceiptSink()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        logger.warning("invalid_request path=%s errors=%s", request.url.path, len(exc.errors()))
        return _error(400, "Invalid request", "; ".join(str(error.get("msg")) for error in exc.errors()))

    @app.get("/health")
    def health_check():
        return {"status": "online"}

    @app.get("/api/news")
    def read_news(request: Request, page: Optional[str] = None, per_page: Optional[str] = None):
        # Unparseable or out-of-range paging falls back to defaults instead of failing.
        page_number = _positive_int(page, 1)
        page_size = _positive_int(per_page, 10)
        try:
            result = list_news(page=page_number, per_page=page_size, db_path=request.app.state.db_path)
        except sqlite3.Error as exc:
            logger.error("list_news_failed error=%r", exc)
            return _error(500, "Database error")
        return result.to_dict()

    @app.get("/api/news/{news_id}")
    def read_news_item(request: Request, news_id: int):
        try:
            item = get_news(news_id, db_path=request.app.state.db_path)
        except sqlite3.Error as exc:
            logger.error("get_news_failed news_id=%s error=%r", news_id, exc)
            return _error(500, "Database error")
        if item is None:
            return _error(404, "News item not found")
        return item.to_dict()

    @app.post("/api/print-receipt")
    def print_receipt(request: Request, body: Optional[PrintReceiptRequest] = None):
        if body is None or body.newsItem is None:
            return _error(400, "News item is required")

        fields = body.newsItem.model_dump()
        if fields["id"] is None:
            fields["id"] = 0
        item = ContentItem.from_mapping(fields)
        try:
            outcome = request.app.state.sink.record(item, body.action)
        except Exception as exc:
            logger.exception("print_receipt_failed item_id=%s", item.id)
            return _error(500, "Failed to print receipt", str(exc))

        if outcome.kind is OutcomeKind.FAILED:
            return _error(500, "Failed to print receipt", outcome.error)

        response: dict[str, object] = {"success": True, "message": outcome.message, "result": {}}
        if outcome.kind is OutcomeKind.DEGRADED:
            response["result"] = {"receipt": outcome.receipt}
            response["warning"] = outcome.warning
        return response

    return app


app = create_app()


def import_news_file(path: str, db_path: str | None = None) -> list[int]:
    """Load a JSON list of news rows into the store and return their new ids."""
    with open(path, encoding="utf-8") as fh:
        rows = json.load(fh)
    if not isinstance(rows, list):
        raise ValueError(f"{path}: expected a JSON list of news items")
    bootstrap_schema(db_path)
    return add_news_items(rows, db_path=db_path)


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    parser = argparse.ArgumentParser(description="News Swiper HTTP API")
    parser.add_argument("--host", default=SERVER_HOST)
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--import-json", metavar="PATH", help="Add news items from a JSON list before serving")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    if args.import_json:
        imported = import_news_file(args.import_json)
        logger.info("imported news rows=%s path=%s", len(imported), args.import_json)
    logger.info("News Swiper server running on port %s", args.port)
    uvicorn.run("swiper.server:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
