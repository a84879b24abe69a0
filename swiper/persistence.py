"""SQLite persistence for news items."""

from __future__ import annotations

import logging
import math
import sqlite3
from contextlib import closing, contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Mapping

from swiper import config
from swiper.constant import SAMPLE_NEWS
from swiper.models import ContentItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewsPage:
    """One page of news items plus paging metadata."""

    items: list[ContentItem]
    total: int
    pages: int
    current_page: int

    def to_dict(self) -> dict[str, object]:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "pages": self.pages,
            "current_page": self.current_page,
        }


@contextmanager
def _connect(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """Open the store for one unit of work: commit on success, then close."""
    db_file = Path(db_path or config.DB_PATH)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_file)
    conn.row_factory = sqlite3.Row
    with closing(conn), conn:
        yield conn


def bootstrap_schema(db_path: str | None = None, seed: bool = True) -> None:
    """Create the news table if needed and seed sample items into an empty table."""
    with _connect(db_path) as conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS news_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                image_url TEXT,
                source TEXT,
                published_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                category TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_news_items_published_at
                ON news_items(published_at);
            """
        )
        if not seed:
            return
        (count,) = conn.execute("SELECT COUNT(*) FROM news_items").fetchone()
        if count == 0:
            _insert_rows(conn, SAMPLE_NEWS)
            logger.info("seeded sample news rows=%s", len(SAMPLE_NEWS))


def _insert_rows(conn: sqlite3.Connection, rows: Iterable[Mapping[str, str | None]]) -> list[int]:
    ids: list[int] = []
    with conn:
        for row in rows:
            if not row.get("title") or not row.get("content"):
                raise ValueError("News items require a title and content")
            cur = conn.execute(
                """
                INSERT INTO news_items (title, content, image_url, source, category)
                VALUES (?, ?, ?, ?, ?)
                """,
                (row["title"], row["content"], row.get("image_url"), row.get("source"), row.get("category")),
            )
            ids.append(int(cur.lastrowid))
    return ids


def add_news_items(rows: Iterable[Mapping[str, str | None]], db_path: str | None = None) -> list[int]:
    """Insert news rows and return their new ids."""
    with _connect(db_path) as conn:
        return _insert_rows(conn, rows)


def list_news(page: int = 1, per_page: int = 10, db_path: str | None = None) -> NewsPage:
    """Return one page of news, newest first."""
    if page < 1:
        raise ValueError("page must be at least 1")
    if per_page < 1:
        raise ValueError("per_page must be at least 1")

    offset = (page - 1) * per_page
    with _connect(db_path) as conn:
        (total,) = conn.execute("SELECT COUNT(*) FROM news_items").fetchone()
        rows = conn.execute(
            """
            SELECT id, title, content, image_url, source, category, published_at
            FROM news_items
            ORDER BY published_at DESC, id ASC
            LIMIT ? OFFSET ?
            """,
            (per_page, offset),
        ).fetchall()

    return NewsPage(
        items=[ContentItem.from_mapping(dict(row)) for row in rows],
        total=total,
        pages=math.ceil(total / per_page),
        current_page=page,
    )


def get_news(news_id: int, db_path: str | None = None) -> ContentItem | None:
    with _connect(db_path) as conn:
        row = conn.execute(
            """
            SELECT id, title, content, image_url, source, category, published_at
            FROM news_items WHERE id = ?
            """,
            (news_id,),
        ).fetchone()
    if row is None:
        return None
    return ContentItem.from_mapping(dict(row))
