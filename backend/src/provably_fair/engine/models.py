from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


ENGINE_VERSION = "0.1.0"


class GameType(str, Enum):
    BLACKJACK = "blackjack"
    CHICKEN = "chicken"
    COIN_FLIP = "coin-flip"
    DIAMONDS = "diamonds"
    MINESWEEPER = "minesweeper"
    TOWER = "tower"
    TURBO_ROLL = "turbo-roll"
    WHEEL = "wheel"


class CardSuit(str, Enum):
    CLUBS = "CLUBS"
    DIAMONDS = "DIAMONDS"
    HEARTS = "HEARTS"
    SPADES = "SPADES"


class CardRank(str, Enum):
    TWO = "TWO"
    THREE = "THREE"
    FOUR = "FOUR"
    FIVE = "FIVE"
    SIX = "SIX"
    SEVEN = "SEVEN"
    EIGHT = "EIGHT"
    NINE = "NINE"
    TEN = "TEN"
    JACK = "JACK"
    QUEEN = "QUEEN"
    KING = "KING"
    ACE = "ACE"


class PathTile(str, Enum):
    SAFE = "SAFE"
    DANGER = "DANGER"


class CoinSide(str, Enum):
    HEADS = "HEADS"
    TAILS = "TAILS"


class GemType(str, Enum):
    GEM_1 = "GEM_1"
    GEM_2 = "GEM_2"
    GEM_3 = "GEM_3"
    GEM_4 = "GEM_4"
    GEM_5 = "GEM_5"
    GEM_6 = "GEM_6"
    GEM_7 = "GEM_7"


class TowerTile(str, Enum):
    TREASURE = "TREASURE"
    BOMB = "BOMB"


class RoundResult(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"


class Card(BaseModel):
    suit: CardSuit
    rank: CardRank
    deck: int

    model_config = ConfigDict(extra="forbid", frozen=True)


class BlackjackHands(BaseModel):
    players: list[list[Card]]
    dealer: list[Card]

    model_config = ConfigDict(extra="forbid")


class HexStep(BaseModel):
    index: int
    hex_chunk: str
    value: int

    model_config = ConfigDict(extra="forbid")


class PathStep(HexStep):
    position: int
    tile: PathTile


class CoinFlip(HexStep):
    side: CoinSide


class GemDraw(HexStep):
    gem: GemType
    color: str


class WheelSegment(BaseModel):
    multiplier: float
    color: str

    model_config = ConfigDict(extra="forbid")


class BlackjackParameters(BaseModel):
    deck_count: int = Field(default=4, ge=1)
    seats: int = Field(default=3, ge=1, le=7)

    model_config = ConfigDict(extra="forbid")


class ChickenParameters(BaseModel):
    difficulty: str = "EASY"

    model_config = ConfigDict(extra="forbid")


class TowerParameters(BaseModel):
    difficulty: str = "EASY"

    model_config = ConfigDict(extra="forbid")


class TurboRollParameters(BaseModel):
    target_multiplier: float = 1.4
    rtp: int | None = None

    model_config = ConfigDict(extra="forbid")


class WheelParameters(BaseModel):
    segment_count: int = 30
    risk: str = "MEDIUM"
    rtp: int | None = None

    model_config = ConfigDict(extra="forbid")


class NoParameters(BaseModel):
    model_config = ConfigDict(extra="forbid")


class Outcome(BaseModel):
    game: GameType
    commitment_hash: str
    engine_version: str = ENGINE_VERSION

    model_config = ConfigDict(extra="forbid")


class BlackjackOutcome(Outcome):
    hmac_hash: str
    deck_count: int
    shoe_hashes: list[str]
    cards: list[Card]
    hands: BlackjackHands


class ChickenOutcome(Outcome):
    hmac_hash: str
    difficulty: str
    path: list[PathStep]


class CoinFlipOutcome(Outcome):
    hmac_hash: str
    flips: list[CoinFlip]


class DiamondsOutcome(Outcome):
    hmac_hash: str
    gems: list[GemDraw]


class MinesweeperOutcome(Outcome):
    game_hash: str
    salted_hash: str
    bomb_index: int
    circle_count: int


class TowerOutcome(Outcome):
    difficulty: str
    row_hashes: list[str]
    rows: list[list[TowerTile]]


class TurboRollOutcome(Outcome):
    hmac_hash: str
    rtp: int
    target_multiplier: float
    angle: int
    segment_size: int
    result: RoundResult


class WheelOutcome(Outcome):
    hmac_hash: str
    rtp: int
    risk: str
    segments: list[WheelSegment]
    legend: list[WheelSegment]
    segment_index: int
    multiplier: float
    color: str
    result: RoundResult


class BombHistoryEntry(BaseModel):
    step: int
    game_hash: str
    bomb_index: int

    model_config = ConfigDict(extra="forbid")


class BombHistoryPage(BaseModel):
    offset: int
    limit: int
    entries: list[BombHistoryEntry]
    next_hash: str

    model_config = ConfigDict(extra="forbid")
