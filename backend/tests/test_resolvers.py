from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from conftest import HMAC_SHA256, HMAC_SHA512
from provably_fair.engine.errors import InvalidHashLengthError, MissingSeedError, UnsupportedParameterError
from provably_fair.engine.internal import SeedTriple
from provably_fair.engine.models import CardRank, CardSuit, CoinSide, GemType, PathTile, RoundResult, TowerTile
from provably_fair.engine.resolvers import (
    angle_result,
    canonical_tower_row,
    deal_initial_hands,
    keyed_hash,
    resolve_angle,
    resolve_bomb,
    resolve_coin_flips,
    resolve_gems,
    resolve_path,
    resolve_shoe,
    resolve_tower,
    resolve_tower_row,
    resolve_wheel_index,
    shoe_hashes,
    tower_row_hashes,
    turbo_segment_size,
    wheel_layout,
    wheel_legend,
)
from provably_fair.engine.tables import CHICKEN_DIFFICULTIES, TOWER_DIFFICULTIES, TowerDifficulty
from provably_fair.utils.cards import build_canonical_deck
from provably_fair.utils.hashing import HashAlgorithm


sha256_hex_text = st.text(alphabet="0123456789abcdef", min_size=64, max_size=64)


def test_keyed_hash_message_layout(seeds: SeedTriple) -> None:
    assert keyed_hash(HashAlgorithm.SHA256, seeds) == HMAC_SHA256
    assert keyed_hash(HashAlgorithm.SHA512, seeds) == HMAC_SHA512
    numeric = SeedTriple(server_seed="server", client_seed="client", nonce=1)
    assert keyed_hash(HashAlgorithm.SHA256, numeric) == HMAC_SHA256


def test_keyed_hash_requires_seeds() -> None:
    with pytest.raises(MissingSeedError):
        keyed_hash(HashAlgorithm.SHA256, SeedTriple(server_seed="", client_seed="client", nonce="1"))
    with pytest.raises(MissingSeedError):
        keyed_hash(HashAlgorithm.SHA256, SeedTriple(server_seed="server", client_seed="", nonce="1"))


def test_canonical_deck_order() -> None:
    deck = build_canonical_deck(2)
    assert len(deck) == 104
    assert (deck[0].suit, deck[0].rank, deck[0].deck) == (CardSuit.CLUBS, CardRank.TWO, 0)
    assert (deck[12].suit, deck[12].rank) == (CardSuit.CLUBS, CardRank.ACE)
    assert (deck[13].suit, deck[13].rank) == (CardSuit.DIAMONDS, CardRank.TWO)
    assert (deck[52].suit, deck[52].rank, deck[52].deck) == (CardSuit.CLUBS, CardRank.TWO, 1)


@pytest.mark.parametrize(("deck_count", "expected"), [(1, 4), (2, 7), (4, 13), (8, 26)])
def test_shoe_hash_count_covers_every_card(deck_count: int, expected: int) -> None:
    assert len(shoe_hashes(HMAC_SHA256, deck_count)) == expected


def test_single_deck_golden_order() -> None:
    hashes, cards = resolve_shoe(HMAC_SHA256, 1)
    assert hashes[0].startswith("36da23e64b91a023202e2c8f23e1fe19d93a6fc8")
    assert [(card.rank, card.suit) for card in cards[:6]] == [
        (CardRank.KING, CardSuit.CLUBS),
        (CardRank.TWO, CardSuit.DIAMONDS),
        (CardRank.EIGHT, CardSuit.HEARTS),
        (CardRank.FIVE, CardSuit.SPADES),
        (CardRank.ACE, CardSuit.HEARTS),
        (CardRank.KING, CardSuit.SPADES),
    ]

    hands = deal_initial_hands(cards, 1)
    assert hands.players == [[cards[0], cards[2]]]
    assert hands.dealer == [cards[1], cards[3]]


def test_shoe_is_a_permutation_of_the_canonical_deck() -> None:
    _, cards = resolve_shoe(HMAC_SHA256, 4)
    assert len(cards) == 208
    assert set(cards) == set(build_canonical_deck(4))


def test_deal_round_robin_for_three_seats() -> None:
    cards = build_canonical_deck(1)
    hands = deal_initial_hands(cards, 3)
    assert hands.players == [[cards[0], cards[4]], [cards[1], cards[5]], [cards[2], cards[6]]]
    assert hands.dealer == [cards[3], cards[7]]


def test_shoe_rejects_wrong_hash_length() -> None:
    with pytest.raises(InvalidHashLengthError):
        resolve_shoe(HMAC_SHA512, 1)
    with pytest.raises(UnsupportedParameterError):
        resolve_shoe(HMAC_SHA256, 0)
    with pytest.raises(UnsupportedParameterError):
        resolve_shoe(HMAC_SHA256, 9)


def test_coin_flip_golden_sequence() -> None:
    flips = resolve_coin_flips(HMAC_SHA256)
    H, T = CoinSide.HEADS, CoinSide.TAILS
    assert [flip.side for flip in flips] == [H, H, T, T, T, H, T, H, H, T]
    assert [flip.hex_chunk for flip in flips[:3]] == ["50", "04", "21"]


def test_chicken_paths() -> None:
    easy = resolve_path(HMAC_SHA512, CHICKEN_DIFFICULTIES["EASY"])
    assert len(easy) == 19
    assert all(step.tile is PathTile.SAFE for step in easy)
    assert easy[0].position == 1

    hard = resolve_path(HMAC_SHA512, CHICKEN_DIFFICULTIES["HARD"])
    S, D = PathTile.SAFE, PathTile.DANGER
    assert [step.tile for step in hard] == [D, D, D, S, D, S, D, D, D, S, S]


def test_chicken_rejects_sha256_hash() -> None:
    with pytest.raises(InvalidHashLengthError):
        resolve_path(HMAC_SHA256, CHICKEN_DIFFICULTIES["MEDIUM"])


def test_diamonds_golden_gems() -> None:
    gems = resolve_gems(HMAC_SHA512)
    assert [gem.gem for gem in gems] == [
        GemType.GEM_7,
        GemType.GEM_5,
        GemType.GEM_2,
        GemType.GEM_4,
        GemType.GEM_4,
    ]
    assert [gem.hex_chunk for gem in gems] == ["c2d4f9c6", "136164e0", "7ee8a8ae", "30bb8e85", "b05658e3"]
    assert gems[0].color == "#9C27B0"


def test_minesweeper_bomb() -> None:
    salted, bomb = resolve_bomb(HMAC_SHA256)
    assert salted == "8430ebe4dfa993010365bc5e34e8a6d6d6e2af3842ad044fd1e33e620d70bb89"
    assert bomb == 4


def test_tower_golden_rows(seeds: SeedTriple) -> None:
    easy = TOWER_DIFFICULTIES["EASY"]
    hashes = tower_row_hashes(seeds, easy)
    assert len(hashes) == 9
    assert hashes[0].startswith("88dbb41b566bc5ae")
    assert hashes[1].startswith("6436d3dff5ae18be")
    rows = resolve_tower(hashes, easy)
    T, B = TowerTile.TREASURE, TowerTile.BOMB
    assert rows[0] == [T, T, T, B]
    assert rows[1] == [B, T, T, T]


@given(row_hash=sha256_hex_text)
def test_tower_row_keeps_treasure_count(row_hash: str) -> None:
    difficulty = TowerDifficulty(row_count=1, column_count=4, treasures_count=3)
    row = resolve_tower_row(row_hash, difficulty)
    assert row.count(TowerTile.TREASURE) == 3
    assert row.count(TowerTile.BOMB) == 1


def test_canonical_tower_row() -> None:
    assert canonical_tower_row(TOWER_DIFFICULTIES["NIGHTMARE"]) == [
        TowerTile.TREASURE,
        TowerTile.BOMB,
        TowerTile.BOMB,
        TowerTile.BOMB,
    ]


def test_tower_rejects_hash_count_mismatch() -> None:
    with pytest.raises(ValueError):
        resolve_tower([HMAC_SHA256], TOWER_DIFFICULTIES["EASY"])


def test_turbo_roll_golden() -> None:
    angle = resolve_angle(HMAC_SHA256)
    assert angle == 27776
    assert turbo_segment_size(1.4, 97) == 24942
    assert angle_result(angle, 24942) is RoundResult.LOSS
    assert turbo_segment_size(1.1, 97) == 31745
    assert angle_result(angle, 31745) is RoundResult.WIN


def test_turbo_roll_boundary_is_loss() -> None:
    crafted = "000000000616e" + "0" * 51
    angle = resolve_angle(crafted)
    assert angle == turbo_segment_size(1.4, 97)
    assert angle_result(angle, angle) is RoundResult.LOSS
    assert angle_result(angle - 1, angle) is RoundResult.WIN


def test_turbo_roll_rejects_unknown_multiplier() -> None:
    with pytest.raises(UnsupportedParameterError):
        turbo_segment_size(1.45, 97)


def test_turbo_roll_rtp_is_permissive() -> None:
    assert turbo_segment_size(2.0, 150) == 27000


def test_wheel_medium_layout_tiles_pattern() -> None:
    segments = wheel_layout(30, "MEDIUM", 97)
    pattern = [0, 1.9, 0, 1.4, 0, 2, 0, 1.4, 0, 3]
    assert len(segments) == 30
    assert [segment.multiplier for segment in segments] == pattern * 3
    assert segments[9].color == "#2563EB"
    assert segments[0].color == "#737373"


def test_wheel_golden_index() -> None:
    assert resolve_wheel_index(HMAC_SHA512, 30) == 9


def test_wheel_legend_is_sorted_unique() -> None:
    assert [segment.multiplier for segment in wheel_legend("MEDIUM", 99)] == [0, 1.5, 1.9, 2, 3]
    assert [segment.color for segment in wheel_legend("LOW", 97)] == ["#737373", "#E5E5E5", "#EA580C"]


@pytest.mark.parametrize(
    ("segment_count", "risk", "rtp"),
    [(25, "MEDIUM", 97), (0, "MEDIUM", 97), (110, "MEDIUM", 97), (30, "EXTREME", 97), (30, "LOW", 95)],
)
def test_wheel_rejects_unsupported_layouts(segment_count: int, risk: str, rtp: int) -> None:
    with pytest.raises(UnsupportedParameterError):
        wheel_layout(segment_count, risk, rtp)
