from __future__ import annotations

import pytest

from provably_fair.config import Settings
from provably_fair.engine.internal import SeedTriple
from provably_fair.engine.service import VerificationService


# Reference values computed with an independent HMAC implementation for
# server_seed="server", client_seed="client", nonce="1".
SERVER_SHA256 = "b3eacd33433b31b5252351032c9b3e7a2e7aa7738d5decdf0dd6c62680853c06"
HMAC_SHA256 = "50042145df160f2c8a6d2b12dbdbb748295502e9cf687b0e0fe08db72995c50d"
HMAC_SHA512 = (
    "c2d4f9c6f4f07a59de68e159f136164e0686b02b3c8dd919877ee8a8ae45abde"
    "6b87106605e30bb8e855c864a5485ca37c29b05658e3b9e57b5c2a26d7179e32"
)


@pytest.fixture
def service() -> VerificationService:
    return VerificationService(Settings(default_rtp=97, history_page_size=50))


@pytest.fixture
def seeds() -> SeedTriple:
    return SeedTriple(server_seed="server", client_seed="client", nonce="1")
