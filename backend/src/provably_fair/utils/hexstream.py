from __future__ import annotations

from provably_fair.engine.errors import InsufficientHashLengthError, InvalidHashLengthError


HEX_DIGITS = "0123456789abcdefABCDEF"


def require_length(text: str, required: int) -> None:
    if len(text) < required:
        raise InsufficientHashLengthError(
            f"Hash is too short. Required: {required}, actual: {len(text)}.",
        )


def require_exact_length(text: str, expected: int) -> None:
    if len(text) != expected:
        raise InvalidHashLengthError(
            f"Invalid hash size: {len(text)}. It should be equal to {expected}.",
        )


def chunks(text: str, size: int) -> list[str]:
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    if len(text) % size:
        raise ValueError(f"{len(text)} hex characters do not split into chunks of {size}")
    return [text[i : i + size] for i in range(0, len(text), size)]


def nibbles(chunk: str) -> list[int]:
    return [int(char, 16) for char in chunk]


def parse_int(text: str) -> int:
    if not text or any(char not in HEX_DIGITS for char in text):
        raise ValueError(f"not a hex number: {text!r}")
    return int(text, 16)
