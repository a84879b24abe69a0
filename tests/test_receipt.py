"""Tests for surveillance receipt formatting."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

from swiper.models import Action, ContentItem
from swiper.receipt import ReceiptRow, build_receipt, format_row, to_base36, tracking_id
from tests.fakes import make_item

NOW = datetime(2024, 5, 1, 14, 30, 5)


def _section(document, heading):
    return next(section for section in document.sections if section.heading == heading)


def test_same_seed_and_clock_reproduce_receipt() -> None:
    item = make_item(7, "Markets Rally")

    first = build_receipt(item, Action.SAVE, rng=random.Random(42), now=NOW)
    second = build_receipt(item, Action.SAVE, rng=random.Random(42), now=NOW)

    assert first == second
    assert first.to_text() == second.to_text()


def test_header_carries_timestamp_and_session() -> None:
    document = build_receipt(make_item(1), Action.SKIP, rng=random.Random(1), now=NOW)

    assert document.title == "ATTENTION RECEIPT"
    assert document.stamp == "05/01/2024 | 02:30:05 PM"
    assert document.session_id.startswith(f"ATT-{to_base36(int(NOW.timestamp() * 1000))}-")
    assert len(document.session_id.rsplit("-", 1)[1]) == 4


@pytest.mark.parametrize(("action", "engagement"), [(Action.SAVE, "CAPTURED"), ("skip", "NOTED")])
def test_engagement_follows_action(action, engagement: str) -> None:
    document = build_receipt(make_item(3, "Quantum Leap"), action, rng=random.Random(3), now=NOW)

    rows = _section(document, "Content Interaction").rows
    assert rows[0].label == '"Quantum Leap"'
    assert ReceiptRow(label="Engagement", value=engagement) in rows


def test_targeted_ads_are_distinct() -> None:
    document = build_receipt(make_item(1), Action.SAVE, rng=random.Random(9), now=NOW)

    ads = [row.label for row in _section(document, "Targeted Solutions").rows[:4]]
    assert len(set(ads)) == 4


def test_unknown_action_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_receipt(make_item(1), "maybe", rng=random.Random(1), now=NOW)


def test_missing_source_and_category_print_unknown() -> None:
    item = ContentItem(id=1, title="Bare", content="")

    rows = _section(build_receipt(item, Action.SKIP, rng=random.Random(1), now=NOW), "Content Interaction").rows

    assert ReceiptRow(label="Source", value="Unknown") in rows
    assert ReceiptRow(label="Category", value="Unknown") in rows


def test_format_row_layouts() -> None:
    assert format_row(ReceiptRow(label="Focus Score", value="80/100")) == "Focus Score      | 80/100"
    assert format_row(ReceiptRow(label="Gaming", value="12% match", emphasis=True)).endswith("| 12% MATCH")
    assert format_row(ReceiptRow(label="plain line")) == "plain line"
    assert set(format_row(ReceiptRow(rule=True))) == {"-"}


def test_base36_and_tracking_id() -> None:
    assert to_base36(0) == "0"
    assert to_base36(35) == "Z"
    assert to_base36(36) == "10"
    assert tracking_id(NOW, random.Random(5)) == tracking_id(NOW, random.Random(5))
