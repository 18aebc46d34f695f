from __future__ import annotations

import binascii
import hashlib
import hmac
from enum import Enum

from provably_fair.engine.errors import InvalidInputError


class HashAlgorithm(str, Enum):
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def hex_length(self) -> int:
        return hashlib.new(self.value).digest_size * 2


def _as_bytes(data: str | bytes) -> bytes:
    if isinstance(data, bytes):
        return data
    return data.encode("utf-8")


def hmac_hex(algorithm: HashAlgorithm, message: str | bytes, key: str | bytes) -> str:
    return hmac.new(_as_bytes(key), _as_bytes(message), algorithm.value).hexdigest()


def digest_hex(algorithm: HashAlgorithm, data: str | bytes) -> str:
    return hashlib.new(algorithm.value, _as_bytes(data)).hexdigest()


def sha256_hex(data: str | bytes) -> str:
    return digest_hex(HashAlgorithm.SHA256, data)


def hex_decode(text: str) -> bytes:
    if len(text) % 2:
        raise InvalidInputError(f"Hex string has odd length {len(text)}.")
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(f"Hex string contains non-hex characters: {text!r}.") from exc
