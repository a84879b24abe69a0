"""Domain models for news-swiper."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def action(self) -> "Action":
        return Action.SAVE if self is Direction.RIGHT else Action.SKIP


class Action(str, Enum):
    SAVE = "save"
    SKIP = "skip"


class NotifyLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class ContentItem:
    """A news item shown on one card."""

    id: int
    title: str
    content: str
    image_url: str | None = None
    source: str | None = None
    category: str | None = None
    published_at: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ContentItem":
        """Build an item from a store row or API JSON object."""
        if "id" not in data or "title" not in data:
            raise ValueError("Content item requires id and title")
        return cls(
            id=int(data["id"]),
            title=str(data["title"]),
            content=str(data.get("content") or ""),
            image_url=data.get("image_url"),
            source=data.get("source"),
            category=data.get("category"),
            published_at=data.get("published_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "image_url": self.image_url,
            "source": self.source,
            "category": self.category,
            "published_at": self.published_at,
        }


@dataclass(frozen=True)
class SinkOutcome:
    """
    Result of recording a swipe action.

    A successful outcome can still carry a warning when the side effect was
    degraded (e.g. the receipt was formatted but the printer is offline).
    """

    success: bool
    message: str | None = None
    warning: str | None = None
    error: str | None = None
    receipt: str | None = None

    @property
    def kind(self) -> OutcomeKind:
        if not self.success:
            return OutcomeKind.FAILED
        if self.warning:
            return OutcomeKind.DEGRADED
        return OutcomeKind.SUCCESS

    @classmethod
    def printed(cls, message: str = "Receipt printed successfully") -> "SinkOutcome":
        return cls(success=True, message=message)

    @classmethod
    def degraded(cls, message: str, warning: str, receipt: str | None = None) -> "SinkOutcome":
        return cls(success=True, message=message, warning=warning, receipt=receipt)

    @classmethod
    def failed(cls, error: str) -> "SinkOutcome":
        return cls(success=False, error=error)
