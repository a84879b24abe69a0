"""Tests for the card deck cursor."""

from __future__ import annotations

from swiper.deck import CardDeck
from tests.fakes import make_item


def test_current_and_advance_walk_forward() -> None:
    deck = CardDeck.of([make_item(1), make_item(2)])

    assert deck.current().id == 1
    deck = deck.advance()
    assert deck.current().id == 2
    assert deck.remaining == 1


def test_advance_saturates_at_length() -> None:
    deck = CardDeck.of([make_item(1)]).advance()

    assert deck.is_exhausted()
    assert deck.current() is None
    assert deck.advance() is deck
    assert deck.cursor == len(deck) == 1


def test_empty_deck_is_exhausted() -> None:
    deck = CardDeck()

    assert deck.is_exhausted()
    assert deck.current() is None
    assert deck.remaining == 0
