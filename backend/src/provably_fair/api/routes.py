from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from provably_fair.api.deps import verification_service
from provably_fair.engine.errors import ProvablyFairError
from provably_fair.engine.models import BombHistoryPage


logger = logging.getLogger("provably_fair.api")

router = APIRouter(prefix="/api")


class VerifyRequest(BaseModel):
    server_seed: str
    client_seed: str = ""
    nonce: str | int = ""
    parameters: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


def _rejected(exc: ProvablyFairError) -> HTTPException:
    logger.info("rejected verification: %s %s", exc.code, exc.message)
    return HTTPException(status_code=400, detail={"code": exc.code, "message": exc.message})


@router.get("/games")
async def list_games() -> dict[str, Any]:
    return verification_service.catalog()


@router.post("/games/{game}/verify")
async def verify(game: str, request: VerifyRequest) -> dict[str, Any]:
    try:
        outcome = verification_service.derive_outcome(
            game,
            server_seed=request.server_seed,
            client_seed=request.client_seed,
            nonce=request.nonce,
            parameters=request.parameters,
        )
    except ProvablyFairError as exc:
        raise _rejected(exc) from exc
    return outcome.model_dump(mode="json")


@router.get("/minesweeper/history", response_model=BombHistoryPage)
async def minesweeper_history(
    game_hash: str = Query(alias="hash"),
    limit: int | None = None,
    offset: int = 0,
) -> BombHistoryPage:
    try:
        return verification_service.bomb_history(game_hash, limit=limit, offset=offset)
    except ProvablyFairError as exc:
        raise _rejected(exc) from exc
