"""Where the deck's items come from and where swipe actions go when remote."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from swiper.config import API_TIMEOUT_S, PAGE_SIZE
from swiper.models import Action, ContentItem, SinkOutcome
from swiper.persistence import bootstrap_schema, list_news

logger = logging.getLogger(__name__)


class ContentLoadError(RuntimeError):
    """The content source was unreachable or returned something unusable."""


class ContentSource(Protocol):
    def fetch(self, per_page: int = PAGE_SIZE) -> list[ContentItem]: ...


class StoreContentSource:
    """Read the first page of news straight from the local SQLite store."""

    def __init__(self, db_path: str | None = None) -> None:
        self.db_path = db_path

    def fetch(self, per_page: int = PAGE_SIZE) -> list[ContentItem]:
        try:
            bootstrap_schema(self.db_path)
            page = list_news(page=1, per_page=per_page, db_path=self.db_path)
        except Exception as exc:
            raise ContentLoadError(f"News store unavailable: {exc}") from exc
        logger.debug("store_fetch rows=%s total=%s", len(page.items), page.total)
        return page.items


def _client(base_url: str, client: httpx.Client | None) -> httpx.Client:
    if client is not None:
        return client
    return httpx.Client(base_url=base_url, timeout=API_TIMEOUT_S)


class HttpContentSource:
    """Bulk-load one page of news from the HTTP API."""

    def __init__(self, base_url: str, client: httpx.Client | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = _client(self.base_url, client)

    def fetch(self, per_page: int = PAGE_SIZE) -> list[ContentItem]:
        try:
            response = self._client.get("/api/news", params={"per_page": per_page})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ContentLoadError(f"Could not load news from {self.base_url}: {exc}") from exc

        raw_items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(raw_items, list):
            raise ContentLoadError("Malformed news response: missing items list")
        try:
            items = [ContentItem.from_mapping(raw) for raw in raw_items]
        except (TypeError, ValueError) as exc:
            raise ContentLoadError(f"Malformed news item: {exc}") from exc
        logger.debug("http_fetch rows=%s url=%s", len(items), self.base_url)
        return items

    def close(self) -> None:
        self._client.close()


class HttpReceiptSink:
    """Record swipe actions through the server's receipt endpoint."""

    def __init__(self, base_url: str, client: httpx.Client | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = _client(self.base_url, client)

    def record(self, item: ContentItem, action: Action) -> SinkOutcome:
        # Transport errors propagate; the controller reports them as sink errors.
        response = self._client.post(
            "/api/print-receipt",
            json={"newsItem": item.to_dict(), "action": Action(action).value},
        )
        try:
            payload = response.json()
        except ValueError:
            return SinkOutcome.failed(f"Unexpected response ({response.status_code})")

        if payload.get("success"):
            result = payload.get("result") or {}
            return SinkOutcome(
                success=True,
                message=payload.get("message"),
                warning=payload.get("warning"),
                receipt=result.get("receipt") if isinstance(result, dict) else None,
            )
        return SinkOutcome.failed(payload.get("details") or payload.get("error") or "Receipt printing failed")

    def close(self) -> None:
        self._client.close()
