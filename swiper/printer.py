"""Thermal printer integration for surveillance receipts."""

from __future__ import annotations

import logging
import os
import random
from datetime import datetime
from pathlib import Path
from time import sleep
from typing import Callable

from swiper import config
from swiper.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_TITLE_FONT_SIZE,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from swiper.models import Action, ContentItem, SinkOutcome
from swiper.receipt import ReceiptDocument, ReceiptRow, build_receipt

logger = logging.getLogger(__name__)

# Separator tuning values.
# Keep these grouped so thermal-print behavior can be tuned in one place.
_SECTION_SEPARATOR_HEIGHT_PX = 14
_SECTION_SEPARATOR_THICKNESS_PX = 3
_SECTION_SEPARATOR_STRIPE_HEIGHT_PX = 2
_SECTION_SEPARATOR_PAUSE_SECONDS = 0.1
_RULE_HEIGHT_PX = 8
_RIGHT_GUTTER_PX = 8
_LINE_EXTRA_PX = 8
_FONT_OVERRIDE_ENV = "RECEIPT_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)

PRINTER_UNAVAILABLE_MESSAGE = "Receipt format generated (printer not available)"
PRINTER_UNAVAILABLE_WARNING = "Printer not available"


class PrinterUnavailableError(RuntimeError):
    """The printer, its driver libraries or a usable font could not be reached."""


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path with macOS default behavior preserved.

    Resolution order:
    1. RECEIPT_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise PrinterUnavailableError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer deps unavailable: {exc}")
    return (True, "Printer ready")


def _text_size(text: str, font: object) -> tuple[int, int, int]:
    """Return (width, height, top offset) of rendered text."""
    from PIL import Image, ImageDraw

    probe = Image.new("1", (1, 1), color=1)
    bbox = ImageDraw.Draw(probe).textbbox((0, 0), text, font=font)
    return (bbox[2] - bbox[0], bbox[3] - bbox[1], bbox[1])


def _fit_text_to_px(text: str, font: object, max_width_px: int) -> str:
    if _text_size(text, font)[0] <= max_width_px:
        return text
    ellipsis = "..."
    trimmed = text
    while trimmed:
        candidate = f"{trimmed}{ellipsis}"
        if _text_size(candidate, font)[0] <= max_width_px:
            return candidate
        trimmed = trimmed[:-1]
    return ellipsis


def _wrap_text_to_px(text: str, font: object, max_width_px: int) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and _text_size(candidate, font)[0] > max_width_px:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return [_fit_text_to_px(line, font, max_width_px) for line in lines] or [""]


def _render_centered(text: str, font: object) -> object:
    from PIL import Image, ImageDraw

    text = _fit_text_to_px(text, font, PRINTER_WIDTH_PX - (PRINTER_LEFT_INDENT_PX * 2))
    width, height, top = _text_size(text, font)
    canvas_height = height + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    x = (PRINTER_WIDTH_PX - width) // 2
    # Offset by bbox top so descenders (g, y, p, etc.) are not clipped.
    y = (canvas_height - height) // 2 - top
    draw.text((x, y), text, font=font, fill=0)
    return img


def _render_line(text: str, font: object) -> object:
    from PIL import Image, ImageDraw

    _, height, top = _text_size(text or " ", font)
    canvas_height = max(12, height + _LINE_EXTRA_PX)
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    y = (canvas_height - height) // 2 - top
    draw.text((PRINTER_LEFT_INDENT_PX, y), text, font=font, fill=0)
    return img


def _render_row(label: str, value: str, font: object, value_font: object) -> object:
    """Label flush left, value flush right on one line."""
    from PIL import Image, ImageDraw

    usable = PRINTER_WIDTH_PX - PRINTER_LEFT_INDENT_PX - _RIGHT_GUTTER_PX
    value = _fit_text_to_px(value, value_font, usable // 2)
    value_width, value_height, value_top = _text_size(value, value_font)
    label = _fit_text_to_px(label, font, max(10, usable - value_width - 6))
    _, label_height, label_top = _text_size(label or " ", font)

    canvas_height = max(12, max(label_height, value_height) + _LINE_EXTRA_PX)
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    draw.text((PRINTER_LEFT_INDENT_PX, (canvas_height - label_height) // 2 - label_top), label, font=font, fill=0)
    value_x = PRINTER_WIDTH_PX - _RIGHT_GUTTER_PX - value_width
    draw.text((value_x, (canvas_height - value_height) // 2 - value_top), value, font=value_font, fill=0)
    return img


def _render_rule() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _RULE_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    mid = _RULE_HEIGHT_PX // 2
    for x in range(PRINTER_LEFT_INDENT_PX, PRINTER_WIDTH_PX - _RIGHT_GUTTER_PX, 8):
        draw.line((x, mid, x + 4, mid), fill=0, width=1)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def _render_section_separator() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _SECTION_SEPARATOR_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    top = max(0, (_SECTION_SEPARATOR_HEIGHT_PX - _SECTION_SEPARATOR_THICKNESS_PX) // 2)
    bottom = min(_SECTION_SEPARATOR_HEIGHT_PX - 1, top + _SECTION_SEPARATOR_THICKNESS_PX - 1)
    draw.rectangle((0, top, PRINTER_WIDTH_PX - 1, bottom), fill=0)
    return img


def _print_section_separator(printer: object) -> None:
    """
    Print the separator in short stripes with tiny pauses.

    This intentionally reduces instantaneous heat so the line stays crisp
    instead of bleeding into adjacent dots.
    """
    separator = _render_section_separator()
    for top in range(0, separator.height, _SECTION_SEPARATOR_STRIPE_HEIGHT_PX):
        bottom = min(separator.height, top + _SECTION_SEPARATOR_STRIPE_HEIGHT_PX)
        stripe = separator.crop((0, top, PRINTER_WIDTH_PX, bottom))
        printer.image(stripe)
        if bottom < separator.height:
            sleep(_SECTION_SEPARATOR_PAUSE_SECONDS)


def render_row_images(row: ReceiptRow, font: object, emphasis_font: object) -> list[object]:
    """Render one receipt row to one or more printable images."""
    if row.rule:
        return [_render_rule()]
    if row.value is None:
        usable = PRINTER_WIDTH_PX - PRINTER_LEFT_INDENT_PX - _RIGHT_GUTTER_PX
        return [_render_line(line, font) for line in _wrap_text_to_px(row.label, font, usable)]
    return [_render_row(row.label, row.value, font, emphasis_font if row.emphasis else font)]


def open_printer() -> object:
    """Open the configured device file, or the USB printer by vendor/product id."""
    try:
        from escpos.printer import File, Usb
    except Exception as exc:
        raise PrinterUnavailableError(f"Printer dependencies unavailable: {exc}") from exc

    try:
        if config.PRINTER_DEVICE:
            return File(config.PRINTER_DEVICE)
        return Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    except Exception as exc:
        raise PrinterUnavailableError(f"Printer not reachable: {exc}") from exc


def print_receipt(document: ReceiptDocument, printer: object | None = None) -> None:
    """Print a receipt document and cut the ticket at the end."""
    try:
        from PIL import ImageFont
    except Exception as exc:
        raise PrinterUnavailableError(f"Printer dependencies unavailable: {exc}") from exc

    font_path = resolve_printer_font_path()
    font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    title_font = ImageFont.truetype(font_path, PRINTER_TITLE_FONT_SIZE)
    heading_font = ImageFont.truetype(font_path, max(PRINTER_FONT_SIZE + 6, PRINTER_TITLE_FONT_SIZE - 12))
    emphasis_font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE + 4)

    owns_printer = printer is None
    if printer is None:
        printer = open_printer()

    try:
        printer.image(_render_centered(document.title, title_font))
        printer.image(_render_centered(document.subtitle, heading_font))
        printer.image(_render_centered(document.stamp, font))
        printer.image(_render_centered(f"Session ID: {document.session_id}", font))

        for section in document.sections:
            _print_section_separator(printer)
            printer.image(_render_line(section.heading, heading_font))
            for row in section.rows:
                for img in render_row_images(row, font, emphasis_font):
                    printer.image(img)

        printer.image(_render_spacer(PRINTER_TAIL_SPACER_PX))
        printer.cut()
    finally:
        if owns_printer and hasattr(printer, "close"):
            printer.close()


class ReceiptSink:
    """
    Record a swipe by printing a surveillance receipt.

    A missing or offline printer still counts as success, with a warning and
    the formatted receipt text attached. Only a formatting failure is an error.
    """

    def __init__(
        self,
        print_fn: Callable[[ReceiptDocument], None] = print_receipt,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._print = print_fn
        self._rng = rng or random.Random()
        self._clock = clock

    def record(self, item: ContentItem, action: Action) -> SinkOutcome:
        try:
            document = build_receipt(item, action, rng=self._rng, now=self._clock())
        except Exception as exc:
            logger.exception("receipt_format_failed item_id=%s", item.id)
            return SinkOutcome.failed(str(exc))

        try:
            self._print(document)
        except Exception as exc:
            logger.warning("printer_unavailable item_id=%s error=%r", item.id, exc)
            return SinkOutcome.degraded(
                PRINTER_UNAVAILABLE_MESSAGE,
                PRINTER_UNAVAILABLE_WARNING,
                receipt=document.to_text(),
            )

        logger.info("receipt_printed item_id=%s action=%s session=%s", item.id, Action(action).value, document.session_id)
        return SinkOutcome.printed()
