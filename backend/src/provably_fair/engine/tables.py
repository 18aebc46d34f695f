from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from provably_fair.engine.errors import UnsupportedParameterError
from provably_fair.engine.models import GemType


@dataclass(frozen=True)
class PathDifficulty:
    max_steps: int
    outcomes_count: int


@dataclass(frozen=True)
class TowerDifficulty:
    row_count: int
    column_count: int
    treasures_count: int


CHICKEN_DIFFICULTIES = MappingProxyType(
    {
        "EASY": PathDifficulty(max_steps=19, outcomes_count=7),
        "MEDIUM": PathDifficulty(max_steps=17, outcomes_count=3),
        "HARD": PathDifficulty(max_steps=11, outcomes_count=2),
    },
)

TOWER_DIFFICULTIES = MappingProxyType(
    {
        "EASY": TowerDifficulty(row_count=9, column_count=4, treasures_count=3),
        "MEDIUM": TowerDifficulty(row_count=9, column_count=3, treasures_count=2),
        "HARD": TowerDifficulty(row_count=9, column_count=2, treasures_count=1),
        "EXTREME": TowerDifficulty(row_count=6, column_count=3, treasures_count=1),
        "NIGHTMARE": TowerDifficulty(row_count=6, column_count=4, treasures_count=1),
    },
)

GEM_COLORS = MappingProxyType(
    {
        GemType.GEM_1: "#4CAF50",
        GemType.GEM_2: "#2196F3",
        GemType.GEM_3: "#FF9800",
        GemType.GEM_4: "#F44336",
        GemType.GEM_5: "#FFEB3B",
        GemType.GEM_6: "#E91E63",
        GemType.GEM_7: "#9C27B0",
    },
)

# Opaque salt of the minesweeper hash chain; keep as-is.
MINESWEEPER_SALT = "00000000000000000000605c3c8df155eab4e28ef65459e46616249e8e9a4705"
MINESWEEPER_CIRCLES = 5

MAX_DECK_COUNT = 8

CIRCLE_SIZE = 36_000
TURBO_ROLL_MULTIPLIERS = (
    1.1, 1.2, 1.3, 1.4, 1.5, 1.6, 1.7, 1.8, 1.9, 2.0,
    3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0, 15.0, 20.0, 25.0, 30.0,
)

WHEEL_PATTERN_SIZE = 10
MAX_WHEEL_SEGMENTS = 100
WHEEL_PATTERNS = MappingProxyType(
    {
        99: MappingProxyType(
            {
                "LOW": (1.5, 1.2, 1.2, 1.2, 0, 1.2, 1.2, 1.2, 1.2, 0),
                "MEDIUM": (0, 1.9, 0, 1.5, 0, 2, 0, 1.5, 0, 3),
                "HIGH": (0, 0, 0, 0, 0, 0, 0, 0, 0, 9.9),
            },
        ),
        98: MappingProxyType(
            {
                "LOW": (2, 1.1, 1.1, 1.1, 0, 1.1, 1.1, 1.1, 1.1, 0),
                "MEDIUM": (0, 1.9, 0, 1.4, 0, 2, 0, 1.4, 0, 3),
                "HIGH": (0, 0, 0, 0, 0, 0, 0, 0, 0, 9.8),
            },
        ),
        97: MappingProxyType(
            {
                "LOW": (2, 1.1, 1.1, 1.1, 0, 1.1, 1.1, 1.1, 1.1, 0),
                "MEDIUM": (0, 1.9, 0, 1.4, 0, 2, 0, 1.4, 0, 3),
                "HIGH": (0, 0, 0, 0, 0, 0, 0, 0, 0, 9.7),
            },
        ),
        96: MappingProxyType(
            {
                "LOW": (1.9, 1.1, 1.1, 1.1, 0, 1.1, 1.1, 1.1, 1.1, 0),
                "MEDIUM": (0, 1.8, 0, 1.4, 0, 2, 0, 1.4, 0, 3),
                "HIGH": (0, 0, 0, 0, 0, 0, 0, 0, 0, 9.6),
            },
        ),
    },
)

# (upper bound, color); first bound the multiplier is below wins
WHEEL_COLOR_THRESHOLDS = (
    (1.5, "#E5E5E5"),
    (2.0, "#16A34A"),
    (3.0, "#EA580C"),
    (4.0, "#2563EB"),
)
WHEEL_ZERO_COLOR = "#737373"
WHEEL_TOP_COLOR = "#9333EA"


def chicken_difficulty(label: str) -> PathDifficulty:
    try:
        return CHICKEN_DIFFICULTIES[label]
    except KeyError:
        raise UnsupportedParameterError(f"Unsupported chicken difficulty: {label}") from None


def tower_difficulty(label: str) -> TowerDifficulty:
    try:
        return TOWER_DIFFICULTIES[label]
    except KeyError:
        raise UnsupportedParameterError(f"Unsupported tower difficulty: {label}") from None


def wheel_pattern(risk: str, rtp: int) -> tuple[float, ...]:
    margin = 100 - rtp
    if rtp not in WHEEL_PATTERNS:
        raise UnsupportedParameterError(f"Multipliers not resolved for rtp {rtp} (margin {margin}).")
    patterns = WHEEL_PATTERNS[rtp]
    if risk not in patterns:
        raise UnsupportedParameterError(f"Unsupported wheel risk level: {risk}")
    return patterns[risk]


def wheel_color(multiplier: float) -> str:
    if multiplier == 0:
        return WHEEL_ZERO_COLOR
    for bound, color in WHEEL_COLOR_THRESHOLDS:
        if multiplier < bound:
            return color
    return WHEEL_TOP_COLOR
