from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from provably_fair.api.deps import verification_service
from provably_fair.config import configure_logging
from provably_fair.engine.errors import ProvablyFairError
from provably_fair.engine.models import GameType


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _collect_parameters(parser: argparse.ArgumentParser, args: argparse.Namespace) -> dict[str, Any]:
    parameters: dict[str, Any] = {}
    if args.params_file is not None:
        try:
            loaded = json.loads(args.params_file.read_text())
        except OSError as exc:
            parser.error(f"cannot read --params-file: {exc}")
        except json.JSONDecodeError as exc:
            parser.error(f"--params-file is not valid JSON: {exc}")
        if not isinstance(loaded, dict):
            parser.error("--params-file must contain a JSON object")
        parameters.update(loaded)
    for item in args.param:
        key, sep, raw = item.partition("=")
        if not sep:
            parser.error(f"--param expects key=value, got {item!r}")
        parameters[key] = _parse_value(raw)
    return parameters


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Recompute a provably fair round outcome")
    parser.add_argument("game", choices=[game.value for game in GameType])
    parser.add_argument("--server-seed", required=True, help="revealed server seed (game hash for minesweeper)")
    parser.add_argument("--client-seed", default="")
    parser.add_argument("--nonce", default="")
    parser.add_argument("--param", action="append", default=[], metavar="KEY=VALUE")
    parser.add_argument("--params-file", type=Path)
    parser.add_argument("--history", type=int, metavar="LIMIT", help="minesweeper: list LIMIT chained rounds")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)
    if args.history is not None and args.game != GameType.MINESWEEPER.value:
        parser.error("--history only applies to minesweeper")

    configure_logging(args.log_level)
    try:
        if args.history is not None:
            result = verification_service.bomb_history(args.server_seed, limit=args.history)
        else:
            result = verification_service.derive_outcome(
                args.game,
                server_seed=args.server_seed,
                client_seed=args.client_seed,
                nonce=args.nonce,
                parameters=_collect_parameters(parser, args),
            )
    except ProvablyFairError as exc:
        print(json.dumps({"code": exc.code, "message": exc.message}), file=sys.stderr)
        return 2
    print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
