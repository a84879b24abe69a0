"""Surveillance receipt formatting.

The decorative numbers on the receipt are random. All randomness comes from
the `random.Random` passed in, and the timestamp from `now`, so a seeded
generator and a fixed clock reproduce the same receipt.
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field
from datetime import datetime

from swiper.constant import (
    AD_CATEGORIES,
    AD_HOOKS,
    AGE_RANGES,
    CLOSING_LINES,
    EYE_TRACKING,
    INCOME_LEVELS,
    INTEREST_VECTORS,
    LOCATION_ZONES,
    MENTAL_STATES,
    NEXT_PURCHASES,
    NOTICE_LINES,
    POLITICAL_LEANINGS,
    SCROLL_PATTERNS,
    SEARCH_PATTERNS,
    SLEEP_QUALITIES,
    SOCIAL_CLASSES,
    SURVEILLANCE_NETWORK,
    VULNERABILITIES,
)
from swiper.models import Action, ContentItem

_BASE36 = string.digits + string.ascii_uppercase
_LABEL_WIDTH = 17


@dataclass(frozen=True)
class ReceiptRow:
    """A label/value pair, a free text line (no value) or a horizontal rule."""

    label: str = ""
    value: str | None = None
    emphasis: bool = False
    rule: bool = False


@dataclass(frozen=True)
class ReceiptSection:
    heading: str
    rows: list[ReceiptRow] = field(default_factory=list)


@dataclass(frozen=True)
class ReceiptDocument:
    title: str
    subtitle: str
    stamp: str
    session_id: str
    sections: list[ReceiptSection]

    def to_text(self) -> str:
        lines = [self.title, self.subtitle, self.stamp, f"Session ID: {self.session_id}"]
        for section in self.sections:
            lines.append("")
            lines.append(f"== {section.heading} ==")
            for row in section.rows:
                lines.append(format_row(row))
        return "\n".join(lines)


def format_row(row: ReceiptRow) -> str:
    if row.rule:
        return "-" * 32
    if row.value is None:
        return row.label
    value = row.value.upper() if row.emphasis else row.value
    return f"{row.label.ljust(_LABEL_WIDTH)}| {value}"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def tracking_id(now: datetime, rng: random.Random) -> str:
    millis = int(now.timestamp() * 1000)
    suffix = "".join(rng.choice(_BASE36) for _ in range(4))
    return f"ATT-{to_base36(millis)}-{suffix}"


def _pct(rng: random.Random) -> str:
    return f"{rng.randrange(100)}%"


def _row(label: str, value: object, emphasis: bool = False) -> ReceiptRow:
    return ReceiptRow(label=label, value=str(value), emphasis=emphasis)


def _text(line: str) -> ReceiptRow:
    return ReceiptRow(label=line)


def build_receipt(
    item: ContentItem,
    action: Action | str,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> ReceiptDocument:
    """Build the attention receipt for one swiped item."""
    rng = rng or random.Random()
    now = now or datetime.now()
    action = Action(action)
    session_id = tracking_id(now, rng)

    dwell_time = rng.randrange(45) + 8
    scroll_depth = rng.randrange(100) + 15
    mouse_movements = rng.randrange(200) + 50
    emotional_score = rng.random() * 0.8 + 0.2
    attention_score = rng.randrange(100) + 25
    selected_ads = rng.sample(AD_CATEGORIES, len(AD_HOOKS))

    sections = [
        ReceiptSection("Notice", [_text(line) for line in NOTICE_LINES]),
        ReceiptSection(
            "Psychological Profile",
            [
                _row("Emotional State", "Vulnerable" if emotional_score > 0.5 else "Resistant"),
                _row("Suggestibility", f"{rng.random() * 100:.0f}%"),
                _row("Anxiety Level", _pct(rng)),
                _row("Sleep Quality", rng.choice(SLEEP_QUALITIES)),
                _row("Mental State", rng.choice(MENTAL_STATES)),
            ],
        ),
        ReceiptSection(
            "Digital Shadow",
            [
                _row("Device ID", session_id),
                _row("Session Length", f"{rng.randrange(120) + 30}min"),
                _row("IP Address", f"{rng.randrange(255)}.{rng.randrange(255)}.x.x"),
                _row("Browser History", f"{rng.randrange(1000) + 500} pages indexed"),
                _row("Search Patterns", rng.choice(SEARCH_PATTERNS)),
            ],
        ),
        ReceiptSection(
            "Content Interaction",
            [
                _text(f'"{item.title}"'),
                _row("Source", item.source or "Unknown"),
                _row("Category", item.category or "Unknown"),
                _row("Engagement", "CAPTURED" if action is Action.SAVE else "NOTED"),
                _row("Interest Vector", rng.choice(INTEREST_VECTORS)),
            ],
        ),
        ReceiptSection(
            "Behavioral Metrics",
            [
                _row("Attention Span", f"{dwell_time}s ({'Above Average' if dwell_time > 20 else 'Below Average'})"),
                _row("Scroll Pattern", f"{scroll_depth}% ({rng.choice(SCROLL_PATTERNS)})"),
                _row("Mouse Movement", f"{mouse_movements} ({'Agitated' if mouse_movements > 100 else 'Focused'})"),
                _row("Eye Tracking", rng.choice(EYE_TRACKING)),
                _row("Focus Score", f"{attention_score}/100"),
            ],
        ),
        ReceiptSection(
            "Demographic Analysis",
            [
                _row("Age Bracket", f"{rng.choice(AGE_RANGES)} ({rng.randrange(99)}% confidence)"),
                _row("Income Range", f"{rng.choice(INCOME_LEVELS)} (Spending patterns analyzed)"),
                _row("Political Bias", f"{rng.choice(POLITICAL_LEANINGS)} (Based on content affinity)"),
                _row("Location", f"{rng.choice(LOCATION_ZONES)} Zone"),
                _row("Social Class", rng.choice(SOCIAL_CLASSES)),
                _row("Influence Level", f"{rng.randrange(100)}/100"),
            ],
        ),
        ReceiptSection("Vulnerability Assessment", [_row(label, _pct(rng)) for label in VULNERABILITIES]),
        ReceiptSection(
            "Targeted Solutions",
            [_row(ad, hook, emphasis=True) for ad, hook in zip(selected_ads, AD_HOOKS)]
            + [
                ReceiptRow(rule=True),
                _text("Additional Vectors:"),
                _row(rng.choice(AD_CATEGORIES), f"{rng.randrange(100)}% Match", emphasis=True),
                _row(rng.choice(AD_CATEGORIES), f"{rng.randrange(100)}% Match", emphasis=True),
            ],
        ),
        ReceiptSection(
            "Surveillance Network",
            [_row(network, rng.choice(findings)) for network, findings in SURVEILLANCE_NETWORK.items()],
        ),
        ReceiptSection(
            "Predictive Analytics",
            [
                _row("Next Purchase", rng.choice(NEXT_PURCHASES)),
                _row("Price Tolerance", f"${rng.random() * 500 + 50:.0f}", emphasis=True),
                _row("Conversion Rate", f"{rng.random() * 0.4 + 0.1:.1f}%", emphasis=True),
                _row("Manipulation", f"{rng.random() * 0.8 + 0.2:.1f}% Effective", emphasis=True),
            ],
        ),
        ReceiptSection(
            "Privacy Compromise",
            [
                _row("Active Cookies", f"{rng.randrange(15) + 8} ({rng.randrange(100)}% Tracking)"),
                _row("Live Trackers", f"{rng.randrange(12) + 5} ({rng.randrange(100)}% Active)"),
                _row("Data Brokers", f"{rng.randrange(8) + 3} ({rng.randrange(100)}% Selling)"),
                _row("Privacy Score", f"{rng.randrange(30) + 10}/100 (Critically Low)"),
            ],
        ),
        ReceiptSection(
            "Monetization Summary",
            [
                _row("Raw Data Value", f"${rng.random() * 0.01:.3f}", emphasis=True),
                _row("Profile Worth", f"${rng.random() * 0.02:.3f}", emphasis=True),
                _row("Behavior Value", f"${rng.random() * 0.03:.3f}", emphasis=True),
                _row("Prediction Value", f"${rng.random() * 0.04:.3f}", emphasis=True),
                ReceiptRow(rule=True),
                _row("Total Human Capital Value", f"${rng.random() * 0.1:.3f}", emphasis=True),
            ],
        ),
        ReceiptSection("NOTICE", [_text(line) for line in CLOSING_LINES]),
    ]

    return ReceiptDocument(
        title="ATTENTION RECEIPT",
        subtitle="SURVEILLANCE RECORD",
        stamp=f"{now.strftime('%m/%d/%Y')} | {now.strftime('%I:%M:%S %p')}",
        session_id=session_id,
        sections=sections,
    )
