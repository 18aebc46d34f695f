"""Per-game outcome derivation.

Every resolver takes an already computed keyed hash (or, for minesweeper, the
revealed game hash) and turns it into a game outcome. Modulo games share the
``ModuloSlicer`` pipeline: check the hash length, cut fixed-width hex slices,
parse them and classify. Blackjack and tower use the rate-sort permutation.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from provably_fair.engine.classifier import classify
from provably_fair.engine.errors import UnsupportedParameterError
from provably_fair.engine.internal import SeedTriple
from provably_fair.engine.models import (
    BlackjackHands,
    Card,
    CoinFlip,
    CoinSide,
    GemDraw,
    GemType,
    HexStep,
    PathStep,
    PathTile,
    RoundResult,
    TowerTile,
    WheelSegment,
)
from provably_fair.engine.permutation import NIBBLES_PER_CHUNK, permutation_from_hex
from provably_fair.engine.tables import (
    CIRCLE_SIZE,
    GEM_COLORS,
    MINESWEEPER_CIRCLES,
    MAX_DECK_COUNT,
    MAX_WHEEL_SEGMENTS,
    MINESWEEPER_SALT,
    TURBO_ROLL_MULTIPLIERS,
    WHEEL_PATTERN_SIZE,
    PathDifficulty,
    TowerDifficulty,
    wheel_color,
    wheel_pattern,
)
from provably_fair.utils.cards import DECK_SIZE, build_canonical_deck
from provably_fair.utils.hashing import HashAlgorithm, hmac_hex, sha256_hex
from provably_fair.utils.hexstream import chunks, parse_int, require_exact_length, require_length


GEM_TYPES = tuple(GemType)
COIN_FLIPS = 10
DIAMONDS_COUNT = 5
GEM_SAMPLE_CHARS = 8
WIDE_SAMPLE_CHARS = 13


@dataclass(frozen=True)
class ModuloSlicer:
    algorithm: HashAlgorithm
    width: int
    count: int
    stride: int | None = None

    @property
    def required_chars(self) -> int:
        stride = self.stride or self.width
        return stride * (self.count - 1) + self.width

    def steps(self, hex_hash: str) -> list[HexStep]:
        require_exact_length(hex_hash, self.algorithm.hex_length)
        require_length(hex_hash, self.required_chars)
        if self.stride is None:
            pieces = chunks(hex_hash[: self.required_chars], self.width)
        else:
            pieces = [
                hex_hash[index * self.stride : index * self.stride + self.width]
                for index in range(self.count)
            ]
        return [
            HexStep(index=index, hex_chunk=piece, value=parse_int(piece))
            for index, piece in enumerate(pieces)
        ]


COIN_SLICER = ModuloSlicer(HashAlgorithm.SHA256, width=2, count=COIN_FLIPS)
DIAMONDS_SLICER = ModuloSlicer(
    HashAlgorithm.SHA512,
    width=GEM_SAMPLE_CHARS,
    count=DIAMONDS_COUNT,
    stride=HashAlgorithm.SHA512.hex_length // DIAMONDS_COUNT,
)
ANGLE_SLICER = ModuloSlicer(HashAlgorithm.SHA256, width=WIDE_SAMPLE_CHARS, count=1)
WHEEL_SLICER = ModuloSlicer(HashAlgorithm.SHA512, width=WIDE_SAMPLE_CHARS, count=1)
BOMB_SLICER = ModuloSlicer(HashAlgorithm.SHA256, width=WIDE_SAMPLE_CHARS, count=1)


def path_slicer(difficulty: PathDifficulty) -> ModuloSlicer:
    return ModuloSlicer(HashAlgorithm.SHA512, width=NIBBLES_PER_CHUNK, count=difficulty.max_steps)


def keyed_hash(algorithm: HashAlgorithm, seeds: SeedTriple, *extra: object) -> str:
    seeds.require_seeds()
    return hmac_hex(algorithm, seeds.message(*extra), seeds.server_seed)


# Blackjack


def shoe_hashes(keyed: str, deck_count: int) -> list[str]:
    require_exact_length(keyed, HashAlgorithm.SHA256.hex_length)
    needed_chars = deck_count * DECK_SIZE * NIBBLES_PER_CHUNK
    count = math.ceil(needed_chars / HashAlgorithm.SHA256.hex_length)
    return [sha256_hex(f"{keyed}:{index}") for index in range(1, count + 1)]


def resolve_shoe(keyed: str, deck_count: int) -> tuple[list[str], list[Card]]:
    if deck_count < 1 or deck_count > MAX_DECK_COUNT:
        raise UnsupportedParameterError(
            f"deck_count must be between 1 and {MAX_DECK_COUNT}, got {deck_count}",
        )
    hashes = shoe_hashes(keyed, deck_count)
    joined = "".join(hashes)
    card_count = deck_count * DECK_SIZE
    require_length(joined, card_count * NIBBLES_PER_CHUNK)
    deck = build_canonical_deck(deck_count)
    return hashes, [deck[index] for index in permutation_from_hex(joined, card_count)]


def deal_initial_hands(cards: Sequence[Card], seats: int) -> BlackjackHands:
    if seats < 1:
        raise UnsupportedParameterError(f"seats must be >= 1, got {seats}")
    if len(cards) < 2 * (seats + 1):
        raise UnsupportedParameterError(f"{len(cards)} cards cannot deal {seats} seats")
    players: list[list[Card]] = [[] for _ in range(seats)]
    dealer: list[Card] = []
    position = 0
    for _ in range(2):
        for hand in players:
            hand.append(cards[position])
            position += 1
        dealer.append(cards[position])
        position += 1
    return BlackjackHands(players=players, dealer=dealer)


# Modulo games


def resolve_path(keyed: str, difficulty: PathDifficulty) -> list[PathStep]:
    path = []
    for step in path_slicer(difficulty).steps(keyed):
        position = classify(step.value, difficulty.outcomes_count)
        tile = PathTile.DANGER if position == 0 else PathTile.SAFE
        path.append(PathStep(**step.model_dump(), position=position, tile=tile))
    return path


def resolve_coin_flips(keyed: str) -> list[CoinFlip]:
    return [
        CoinFlip(
            **step.model_dump(),
            side=CoinSide.HEADS if classify(step.value, 2) == 0 else CoinSide.TAILS,
        )
        for step in COIN_SLICER.steps(keyed)
    ]


def resolve_gems(keyed: str) -> list[GemDraw]:
    draws = []
    for step in DIAMONDS_SLICER.steps(keyed):
        gem = GEM_TYPES[classify(step.value, len(GEM_TYPES))]
        draws.append(GemDraw(**step.model_dump(), gem=gem, color=GEM_COLORS[gem]))
    return draws


def salt_game_hash(game_hash: str) -> str:
    return hmac_hex(HashAlgorithm.SHA256, game_hash, MINESWEEPER_SALT)


def resolve_bomb(game_hash: str) -> tuple[str, int]:
    salted = salt_game_hash(game_hash)
    (step,) = BOMB_SLICER.steps(salted)
    return salted, classify(step.value, MINESWEEPER_CIRCLES)


def resolve_angle(keyed: str) -> int:
    (step,) = ANGLE_SLICER.steps(keyed)
    return classify(step.value, CIRCLE_SIZE)


def turbo_segment_size(multiplier: float, rtp: int) -> int:
    if multiplier not in TURBO_ROLL_MULTIPLIERS:
        raise UnsupportedParameterError(f"Unsupported target multiplier: {multiplier}")
    return math.floor(((CIRCLE_SIZE / 100) / multiplier) * rtp)


def angle_result(angle: int, segment_size: int) -> RoundResult:
    return RoundResult.WIN if angle < segment_size else RoundResult.LOSS


def wheel_layout(segment_count: int, risk: str, rtp: int) -> list[WheelSegment]:
    if (
        segment_count < WHEEL_PATTERN_SIZE
        or segment_count > MAX_WHEEL_SEGMENTS
        or segment_count % WHEEL_PATTERN_SIZE
    ):
        raise UnsupportedParameterError(
            f"segment_count must be a multiple of {WHEEL_PATTERN_SIZE} between "
            f"{WHEEL_PATTERN_SIZE} and {MAX_WHEEL_SEGMENTS}, got {segment_count}",
        )
    pattern = wheel_pattern(risk, rtp)
    return [
        WheelSegment(multiplier=multiplier, color=wheel_color(multiplier))
        for _ in range(segment_count // WHEEL_PATTERN_SIZE)
        for multiplier in pattern
    ]


def wheel_legend(risk: str, rtp: int) -> list[WheelSegment]:
    return [
        WheelSegment(multiplier=multiplier, color=wheel_color(multiplier))
        for multiplier in sorted(set(wheel_pattern(risk, rtp)))
    ]


def resolve_wheel_index(keyed: str, total_segments: int) -> int:
    (step,) = WHEEL_SLICER.steps(keyed)
    return classify(step.value, total_segments)


# Tower


def tower_row_hashes(seeds: SeedTriple, difficulty: TowerDifficulty) -> list[str]:
    return [keyed_hash(HashAlgorithm.SHA256, seeds, row) for row in range(difficulty.row_count)]


def canonical_tower_row(difficulty: TowerDifficulty) -> list[TowerTile]:
    bombs = difficulty.column_count - difficulty.treasures_count
    return [TowerTile.TREASURE] * difficulty.treasures_count + [TowerTile.BOMB] * bombs


def resolve_tower_row(row_hash: str, difficulty: TowerDifficulty) -> list[TowerTile]:
    require_exact_length(row_hash, HashAlgorithm.SHA256.hex_length)
    require_length(row_hash, difficulty.column_count * NIBBLES_PER_CHUNK)
    row = canonical_tower_row(difficulty)
    return [row[position] for position in permutation_from_hex(row_hash, difficulty.column_count)]


def resolve_tower(row_hashes: Sequence[str], difficulty: TowerDifficulty) -> list[list[TowerTile]]:
    if len(row_hashes) != difficulty.row_count:
        raise ValueError(
            f"Invalid hashes count: {len(row_hashes)}. It should be equal to {difficulty.row_count}",
        )
    return [resolve_tower_row(row_hash, difficulty) for row_hash in row_hashes]
