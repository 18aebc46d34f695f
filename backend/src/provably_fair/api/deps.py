from __future__ import annotations

from provably_fair.engine.service import VerificationService


verification_service = VerificationService()
