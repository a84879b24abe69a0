"""Runtime configuration defaults for swiping, persistence and printing."""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


DB_PATH = _env_str("SWIPER_DB_PATH", "data/news.db")

# Gesture thresholds are unit-agnostic: pixels for pointer input, cells for the terminal UI.
SWIPE_THRESHOLD = _env_int("SWIPER_SWIPE_THRESHOLD", 100)
TERMINAL_SWIPE_THRESHOLD = _env_int("SWIPER_TERMINAL_SWIPE_THRESHOLD", 12)
SETTLE_DELAY_MS = _env_int("SWIPER_SETTLE_DELAY_MS", 300)
PAGE_SIZE = _env_int("SWIPER_PAGE_SIZE", 20)
NOTIFICATION_TIMEOUT_S = 3.0

API_URL = os.environ.get("SWIPER_API_URL", "").strip()
API_TIMEOUT_S = 10.0
SERVER_HOST = _env_str("SWIPER_HOST", "127.0.0.1")
SERVER_PORT = _env_int("PORT", 5001)

DEBUG_LOG_PATH = "/tmp/swiper-debug.log"

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
# When set, print through a raw device file such as /dev/usb/lp0 instead of USB ids.
PRINTER_DEVICE = os.environ.get("SWIPER_PRINTER_DEVICE", "").strip()
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 22
PRINTER_TITLE_FONT_SIZE = 40
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 8
PRINTER_TAIL_SPACER_PX = 70
