from __future__ import annotations

from dataclasses import dataclass

from provably_fair.engine.errors import MissingSeedError


@dataclass(frozen=True)
class SeedTriple:
    server_seed: str
    client_seed: str
    nonce: str | int = ""

    def require_seeds(self) -> None:
        if not self.server_seed:
            raise MissingSeedError("Server seed is required.")
        if not self.client_seed:
            raise MissingSeedError("Client seed is required.")

    def message(self, *extra: object) -> str:
        parts = [self.client_seed, str(self.nonce), *(str(item) for item in extra)]
        return ":".join(parts)
