from __future__ import annotations

from provably_fair.engine.models import Card, CardRank, CardSuit


DECK_SIZE = 52


def build_canonical_deck(deck_count: int) -> list[Card]:
    # deck number outermost, then suit, then rank
    return [
        Card(suit=suit, rank=rank, deck=deck_number)
        for deck_number in range(deck_count)
        for suit in CardSuit
        for rank in CardRank
    ]
