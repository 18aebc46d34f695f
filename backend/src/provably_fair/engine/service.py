from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import asdict
from itertools import islice
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from provably_fair.config import Settings, settings as default_settings
from provably_fair.engine.chain import previous_hash, walk_chain
from provably_fair.engine.errors import MissingSeedError, UnsupportedParameterError
from provably_fair.engine.internal import SeedTriple
from provably_fair.engine.models import (
    BlackjackOutcome,
    BlackjackParameters,
    BombHistoryEntry,
    BombHistoryPage,
    ChickenOutcome,
    ChickenParameters,
    CoinFlipOutcome,
    DiamondsOutcome,
    GameType,
    MinesweeperOutcome,
    NoParameters,
    Outcome,
    RoundResult,
    TowerOutcome,
    TowerParameters,
    TurboRollOutcome,
    TurboRollParameters,
    WheelOutcome,
    WheelParameters,
)
from provably_fair.engine.resolvers import (
    angle_result,
    deal_initial_hands,
    keyed_hash,
    resolve_angle,
    resolve_bomb,
    resolve_coin_flips,
    resolve_gems,
    resolve_path,
    resolve_shoe,
    resolve_tower,
    resolve_wheel_index,
    tower_row_hashes,
    turbo_segment_size,
    wheel_layout,
    wheel_legend,
)
from provably_fair.engine.tables import (
    CHICKEN_DIFFICULTIES,
    MINESWEEPER_CIRCLES,
    TOWER_DIFFICULTIES,
    TURBO_ROLL_MULTIPLIERS,
    WHEEL_PATTERNS,
    chicken_difficulty,
    tower_difficulty,
)
from provably_fair.utils.hashing import HashAlgorithm, hex_decode, sha256_hex
from provably_fair.utils.hexstream import require_exact_length


logger = logging.getLogger("provably_fair.service")

ParamsT = TypeVar("ParamsT", bound=BaseModel)


def parse_parameters(model: type[ParamsT], parameters: Mapping[str, Any] | None) -> ParamsT:
    try:
        return model.model_validate(dict(parameters or {}))
    except ValidationError as exc:
        raise UnsupportedParameterError(f"Invalid parameters: {exc.errors(include_url=False)}") from exc


class VerificationService:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings
        self._handlers: dict[GameType, Callable[[SeedTriple, Mapping[str, Any] | None], Outcome]] = {
            GameType.BLACKJACK: self._blackjack,
            GameType.CHICKEN: self._chicken,
            GameType.COIN_FLIP: self._coin_flip,
            GameType.DIAMONDS: self._diamonds,
            GameType.MINESWEEPER: self._minesweeper,
            GameType.TOWER: self._tower,
            GameType.TURBO_ROLL: self._turbo_roll,
            GameType.WHEEL: self._wheel,
        }

    def derive_outcome(
        self,
        game: GameType | str,
        server_seed: str,
        client_seed: str,
        nonce: str | int = "",
        parameters: Mapping[str, Any] | None = None,
    ) -> Outcome:
        try:
            game_type = GameType(game)
        except ValueError:
            raise UnsupportedParameterError(f"Unsupported game: {game}", code="UNSUPPORTED_GAME") from None

        seeds = SeedTriple(server_seed=server_seed, client_seed=client_seed, nonce=nonce)
        if game_type is not GameType.MINESWEEPER:
            seeds.require_seeds()
        outcome = self._handlers[game_type](seeds, parameters)
        logger.debug("derived %s outcome for nonce %s", game_type.value, nonce)
        return outcome

    def bomb_history(
        self,
        game_hash: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> BombHistoryPage:
        """Walk the minesweeper chain back from ``game_hash``.

        ``offset`` entries are skipped first; pass the returned ``next_hash``
        with ``offset=0`` to continue without recomputing earlier pages.
        """
        page_size = self._settings.history_page_size if limit is None else limit
        if page_size < 1 or page_size > self._settings.history_max_limit:
            raise UnsupportedParameterError(
                f"limit must be between 1 and {self._settings.history_max_limit}, got {page_size}",
            )
        if offset < 0:
            raise UnsupportedParameterError(f"offset must be >= 0, got {offset}")
        if offset + page_size > self._settings.history_max_depth:
            raise UnsupportedParameterError(
                f"offset + limit must not exceed {self._settings.history_max_depth}, "
                f"got {offset + page_size}",
            )
        self._require_game_hash(game_hash)

        entries = []
        chain = walk_chain(game_hash, offset + page_size)
        for step, current in enumerate(islice(chain, offset, None), start=offset):
            _, bomb_index = resolve_bomb(current)
            entries.append(BombHistoryEntry(step=step, game_hash=current, bomb_index=bomb_index))
        logger.debug("bomb history offset=%s limit=%s", offset, page_size)
        return BombHistoryPage(
            offset=offset,
            limit=page_size,
            entries=entries,
            next_hash=previous_hash(entries[-1].game_hash),
        )

    def catalog(self) -> dict[str, Any]:
        return {
            "games": [game.value for game in GameType],
            "default_rtp": self._settings.default_rtp,
            "chicken": {label: asdict(config) for label, config in CHICKEN_DIFFICULTIES.items()},
            "tower": {label: asdict(config) for label, config in TOWER_DIFFICULTIES.items()},
            "turbo_roll": {"multipliers": list(TURBO_ROLL_MULTIPLIERS)},
            "wheel": {
                "rtp": sorted(WHEEL_PATTERNS),
                "risks": sorted(next(iter(WHEEL_PATTERNS.values()))),
            },
            "minesweeper": {"circles": MINESWEEPER_CIRCLES},
        }

    def _require_game_hash(self, game_hash: str) -> None:
        if not game_hash:
            raise MissingSeedError("Game hash is required.")
        require_exact_length(game_hash, HashAlgorithm.SHA256.hex_length)
        hex_decode(game_hash)

    def _rtp(self, requested: int | None) -> int:
        return self._settings.default_rtp if requested is None else requested

    def _blackjack(self, seeds: SeedTriple, parameters: Mapping[str, Any] | None) -> BlackjackOutcome:
        params = parse_parameters(BlackjackParameters, parameters)
        keyed = keyed_hash(HashAlgorithm.SHA256, seeds)
        hashes, cards = resolve_shoe(keyed, params.deck_count)
        return BlackjackOutcome(
            game=GameType.BLACKJACK,
            commitment_hash=sha256_hex(seeds.server_seed),
            hmac_hash=keyed,
            deck_count=params.deck_count,
            shoe_hashes=hashes,
            cards=cards,
            hands=deal_initial_hands(cards, params.seats),
        )

    def _chicken(self, seeds: SeedTriple, parameters: Mapping[str, Any] | None) -> ChickenOutcome:
        params = parse_parameters(ChickenParameters, parameters)
        difficulty = chicken_difficulty(params.difficulty)
        keyed = keyed_hash(HashAlgorithm.SHA512, seeds)
        return ChickenOutcome(
            game=GameType.CHICKEN,
            commitment_hash=sha256_hex(seeds.server_seed),
            hmac_hash=keyed,
            difficulty=params.difficulty,
            path=resolve_path(keyed, difficulty),
        )

    def _coin_flip(self, seeds: SeedTriple, parameters: Mapping[str, Any] | None) -> CoinFlipOutcome:
        parse_parameters(NoParameters, parameters)
        keyed = keyed_hash(HashAlgorithm.SHA256, seeds)
        return CoinFlipOutcome(
            game=GameType.COIN_FLIP,
            commitment_hash=sha256_hex(seeds.server_seed),
            hmac_hash=keyed,
            flips=resolve_coin_flips(keyed),
        )

    def _diamonds(self, seeds: SeedTriple, parameters: Mapping[str, Any] | None) -> DiamondsOutcome:
        parse_parameters(NoParameters, parameters)
        keyed = keyed_hash(HashAlgorithm.SHA512, seeds)
        return DiamondsOutcome(
            game=GameType.DIAMONDS,
            commitment_hash=sha256_hex(seeds.server_seed),
            hmac_hash=keyed,
            gems=resolve_gems(keyed),
        )

    def _minesweeper(self, seeds: SeedTriple, parameters: Mapping[str, Any] | None) -> MinesweeperOutcome:
        # The revealed game hash travels in the server seed slot.
        parse_parameters(NoParameters, parameters)
        game_hash = seeds.server_seed
        self._require_game_hash(game_hash)
        salted, bomb_index = resolve_bomb(game_hash)
        return MinesweeperOutcome(
            game=GameType.MINESWEEPER,
            commitment_hash=sha256_hex(game_hash),
            game_hash=game_hash,
            salted_hash=salted,
            bomb_index=bomb_index,
            circle_count=MINESWEEPER_CIRCLES,
        )

    def _tower(self, seeds: SeedTriple, parameters: Mapping[str, Any] | None) -> TowerOutcome:
        params = parse_parameters(TowerParameters, parameters)
        difficulty = tower_difficulty(params.difficulty)
        row_hashes = tower_row_hashes(seeds, difficulty)
        return TowerOutcome(
            game=GameType.TOWER,
            commitment_hash=sha256_hex(seeds.server_seed),
            difficulty=params.difficulty,
            row_hashes=row_hashes,
            rows=resolve_tower(row_hashes, difficulty),
        )

    def _turbo_roll(self, seeds: SeedTriple, parameters: Mapping[str, Any] | None) -> TurboRollOutcome:
        params = parse_parameters(TurboRollParameters, parameters)
        rtp = self._rtp(params.rtp)
        segment_size = turbo_segment_size(params.target_multiplier, rtp)
        keyed = keyed_hash(HashAlgorithm.SHA256, seeds)
        angle = resolve_angle(keyed)
        return TurboRollOutcome(
            game=GameType.TURBO_ROLL,
            commitment_hash=sha256_hex(seeds.server_seed),
            hmac_hash=keyed,
            rtp=rtp,
            target_multiplier=params.target_multiplier,
            angle=angle,
            segment_size=segment_size,
            result=angle_result(angle, segment_size),
        )

    def _wheel(self, seeds: SeedTriple, parameters: Mapping[str, Any] | None) -> WheelOutcome:
        params = parse_parameters(WheelParameters, parameters)
        rtp = self._rtp(params.rtp)
        segments = wheel_layout(params.segment_count, params.risk, rtp)
        keyed = keyed_hash(HashAlgorithm.SHA512, seeds)
        index = resolve_wheel_index(keyed, len(segments))
        winning = segments[index]
        return WheelOutcome(
            game=GameType.WHEEL,
            commitment_hash=sha256_hex(seeds.server_seed),
            hmac_hash=keyed,
            rtp=rtp,
            risk=params.risk,
            segments=segments,
            legend=wheel_legend(params.risk, rtp),
            segment_index=index,
            multiplier=winning.multiplier,
            color=winning.color,
            result=RoundResult.WIN if winning.multiplier > 0 else RoundResult.LOSS,
        )
