from __future__ import annotations


class ProvablyFairError(Exception):
    code = "PROVABLY_FAIR_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code or self.code
        self.message = message


class MissingSeedError(ProvablyFairError):
    code = "MISSING_SEED"


class InvalidHashLengthError(ProvablyFairError):
    code = "INVALID_HASH_LENGTH"


class InsufficientHashLengthError(ProvablyFairError):
    code = "INSUFFICIENT_HASH_LENGTH"


class UnsupportedParameterError(ProvablyFairError):
    code = "UNSUPPORTED_PARAMETER"


class InvalidInputError(ProvablyFairError):
    code = "INVALID_INPUT"
