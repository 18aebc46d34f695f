"""Rate-sort permutation shared by the blackjack shoe and the tower rows.

Each 4-nibble chunk is read as a base-16 fraction in ``[0, 1)``. Sorting the
chunk indices by that fraction yields the permutation; identical chunks keep
their original relative order.
"""

from __future__ import annotations

from collections.abc import Sequence

from provably_fair.utils.hexstream import chunks, nibbles


NIBBLES_PER_CHUNK = 4
POWERS_OF_16 = (16, 16 * 16, 16 * 16 * 16, 16 * 16 * 16 * 16)


def calculate_rate(digits: Sequence[int]) -> float:
    if len(digits) != NIBBLES_PER_CHUNK:
        raise ValueError(f"rate needs exactly {NIBBLES_PER_CHUNK} nibbles, got {len(digits)}")
    rate = 0.0
    for digit, power in zip(digits, POWERS_OF_16):
        rate += digit / power
    return rate


def rate_permutation(hex_chunks: Sequence[str]) -> list[int]:
    rates = [calculate_rate(nibbles(chunk)) for chunk in hex_chunks]
    # sorted() is stable, ties keep index order
    return sorted(range(len(rates)), key=lambda index: rates[index])


def permutation_from_hex(hex_text: str, count: int) -> list[int]:
    """Permute ``count`` items using the first ``count * 4`` characters of ``hex_text``."""
    return rate_permutation(chunks(hex_text[: count * NIBBLES_PER_CHUNK], NIBBLES_PER_CHUNK))
