"""Tests for content sources and the HTTP receipt sink."""

from __future__ import annotations

import json

import httpx
import pytest

from swiper.constant import SAMPLE_NEWS
from swiper.models import Action, OutcomeKind
from swiper.sources import ContentLoadError, HttpContentSource, HttpReceiptSink, StoreContentSource
from tests.fakes import make_item

BASE_URL = "http://swiper.test"


def _client(handler) -> httpx.Client:
    return httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))


def test_store_source_bootstraps_and_loads(tmp_path) -> None:
    items = StoreContentSource(str(tmp_path / "news.db")).fetch(per_page=3)

    assert len(items) == 3
    assert {item.title for item in items} <= {row["title"] for row in SAMPLE_NEWS}


def test_store_source_wraps_store_errors(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")

    with pytest.raises(ContentLoadError):
        StoreContentSource(str(blocker / "news.db")).fetch()


def test_http_source_requests_page_size() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["per_page"] = request.url.params["per_page"]
        return httpx.Response(200, json={"items": [make_item(1).to_dict(), make_item(2).to_dict()]})

    items = HttpContentSource(BASE_URL, client=_client(handler)).fetch(per_page=20)

    assert seen == {"path": "/api/news", "per_page": "20"}
    assert [item.id for item in items] == [1, 2]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "Database error"}),
        httpx.Response(200, text="<html>"),
        httpx.Response(200, json={"rows": []}),
        httpx.Response(200, json={"items": [{"title": "no id"}]}),
    ],
)
def test_http_source_reports_load_failures(response: httpx.Response) -> None:
    source = HttpContentSource(BASE_URL, client=_client(lambda request: response))

    with pytest.raises(ContentLoadError):
        source.fetch()


def test_http_source_reports_unreachable_server() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ContentLoadError):
        HttpContentSource(BASE_URL, client=_client(handler)).fetch()


def test_http_sink_posts_item_and_action() -> None:
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent.update(json.loads(request.content))
        return httpx.Response(200, json={"success": True, "message": "Receipt printed successfully", "result": {}})

    outcome = HttpReceiptSink(BASE_URL, client=_client(handler)).record(make_item(5), Action.SAVE)

    assert sent["action"] == "save"
    assert sent["newsItem"]["id"] == 5
    assert outcome.kind is OutcomeKind.SUCCESS


def test_http_sink_keeps_warning() -> None:
    payload = {
        "success": True,
        "message": "Receipt format generated (printer not available)",
        "warning": "Printer not available",
        "result": {"receipt": "ATTENTION RECEIPT"},
    }
    sink = HttpReceiptSink(BASE_URL, client=_client(lambda request: httpx.Response(200, json=payload)))

    outcome = sink.record(make_item(1), Action.SKIP)

    assert outcome.kind is OutcomeKind.DEGRADED
    assert outcome.receipt == "ATTENTION RECEIPT"


def test_http_sink_failure_outcomes() -> None:
    error = {"error": "Failed to print receipt", "details": "bad template"}
    failed = HttpReceiptSink(BASE_URL, client=_client(lambda request: httpx.Response(500, json=error)))
    garbled = HttpReceiptSink(BASE_URL, client=_client(lambda request: httpx.Response(502, text="gateway")))

    assert failed.record(make_item(1), Action.SKIP).error == "bad template"
    assert garbled.record(make_item(1), Action.SKIP).kind is OutcomeKind.FAILED
