from __future__ import annotations

from collections.abc import Iterator

from provably_fair.utils.hashing import hex_decode, sha256_hex


def previous_hash(game_hash: str) -> str:
    return sha256_hex(hex_decode(game_hash))


def walk_chain(start_hash: str, count: int) -> Iterator[str]:
    """Yield ``count`` hashes: ``start_hash`` and then each earlier round's hash."""
    current = start_hash
    for step in range(count):
        yield current
        if step + 1 < count:
            current = previous_hash(current)
