"""Entry point for the news-swiper Textual app."""

from __future__ import annotations

import argparse
import logging

from swiper.config import API_URL, DEBUG_LOG_PATH
from swiper.printer import ReceiptSink, check_printer_dependencies
from swiper.sources import HttpContentSource, HttpReceiptSink, StoreContentSource
from swiper.swiper_app import NewsSwiperApp


def configure_logging(path: str = DEBUG_LOG_PATH) -> None:
    """Send logs to a debug file; the terminal belongs to the app."""
    try:
        logging.basicConfig(
            filename=path,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    except OSError:
        logging.basicConfig(handlers=[logging.NullHandler()])


def build_app(api_url: str = "", db_path: str | None = None, receipts: bool = True) -> NewsSwiperApp:
    """Wire the app to either the HTTP API or the local store and printer."""
    if api_url:
        return NewsSwiperApp(HttpContentSource(api_url), HttpReceiptSink(api_url), recording=receipts)

    _, printer_status = check_printer_dependencies()
    logging.getLogger(__name__).info("printer_status=%r", printer_status)
    return NewsSwiperApp(StoreContentSource(db_path), ReceiptSink(), recording=receipts)


def main() -> None:
    """Run the Textual application."""
    parser = argparse.ArgumentParser(description="Swipe through news cards")
    parser.add_argument("--api-url", default=API_URL, help="Load news and print receipts through this API server")
    parser.add_argument("--db-path", default=None, help="SQLite news store (local mode)")
    parser.add_argument("--no-receipts", action="store_true", help="Start with receipt printing disabled")
    args = parser.parse_args()

    configure_logging()
    build_app(api_url=args.api_url, db_path=args.db_path, receipts=not args.no_receipts).run()


if __name__ == "__main__":
    main()
