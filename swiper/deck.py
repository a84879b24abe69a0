"""Forward-only card deck with a single cursor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from swiper.models import ContentItem


@dataclass(frozen=True)
class CardDeck:
    """Ordered items plus a saturating cursor in [0, len(items)]."""

    items: tuple[ContentItem, ...] = ()
    cursor: int = 0

    @classmethod
    def of(cls, items: Iterable[ContentItem]) -> "CardDeck":
        return cls(items=tuple(items))

    def __len__(self) -> int:
        return len(self.items)

    @property
    def remaining(self) -> int:
        return len(self.items) - self.cursor

    def current(self) -> ContentItem | None:
        if self.cursor >= len(self.items):
            return None
        return self.items[self.cursor]

    def advance(self) -> "CardDeck":
        if self.cursor >= len(self.items):
            return self
        return replace(self, cursor=self.cursor + 1)

    def is_exhausted(self) -> bool:
        return self.cursor >= len(self.items)
