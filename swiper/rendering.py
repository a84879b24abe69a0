"""Rendering helpers for cards and status lines."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text

from swiper.gesture import CardTransform
from swiper.models import ContentItem, Direction


def category_style(category: str | None) -> str:
    """Return a consistent badge style for category tags."""
    if category == "Technology":
        return "bold #ffffff on #2f6db5"
    if category == "Environment":
        return "bold #0b1f0f on #5fbf72"
    if category == "Science":
        return "bold #ffffff on #7b4bb2"
    return "bold #ffffff on #b23a48"


def format_published(published_at: str | None) -> str:
    if not published_at:
        return ""
    for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"):
        try:
            return datetime.strptime(published_at[:19], fmt).strftime("%m/%d/%Y")
        except ValueError:
            continue
    return published_at


def format_card(item: ContentItem) -> Text:
    """Render a news item as card body text."""
    text = Text()
    text.append(f" {item.category or 'News'} ", style=category_style(item.category))
    text.append("\n\n")
    text.append(item.title, style="bold")
    text.append("\n\n")
    text.append(item.content)
    text.append("\n\n")
    text.append(item.source or "Unknown source", style="italic")
    published = format_published(item.published_at)
    if published:
        text.append(f"  ·  {published}", style="dim")
    return text


def format_exhausted() -> Text:
    text = Text()
    text.append("No more news!\n\n", style="bold")
    text.append("You've seen all the available news items.\n")
    text.append("Press O to start over.", style="dim")
    return text


def format_error(message: str) -> Text:
    text = Text()
    text.append("Error\n\n", style="bold red")
    text.append(f"{message}\n")
    text.append("Press O to retry.", style="dim")
    return text


def tilt_marker(transform: CardTransform, threshold: float) -> str:
    """Describe the drag tilt as a border label; empty when the card is at rest."""
    if transform.translate_x == 0:
        return ""
    if abs(transform.translate_x) > threshold:
        return "SAVE ▶" if transform.translate_x > 0 else "◀ SKIP"
    return f"{transform.rotate_deg:+.0f}°"


def exit_label(direction: Direction) -> str:
    return "Saved" if direction is Direction.RIGHT else "Skipped"
