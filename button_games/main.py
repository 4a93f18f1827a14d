"""CLI entrypoint: a local stand-in for the chat transport."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Dict, List, Optional

from button_games.config import load_config
from button_games.protocol.errors import EngineError
from button_games.protocol.version import PROTOCOL_VERSION
from button_games.registry import load_plugins
from button_games.runtime.dispatcher import Router
from button_games.runtime.serialization import dump_model


def _parse_options(pairs: List[str]) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"--option expects KEY=VALUE, got {pair!r}")
        try:
            options[key] = json.loads(value)
        except json.JSONDecodeError:
            options[key] = value
    return options


def _print(obj: Any) -> None:
    print(json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False))


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="button-games")
    parser.add_argument("--version", action="version", version=f"%(prog)s protocol {PROTOCOL_VERSION}")
    parser.add_argument("--config", help="Path to config.toml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-games")
    play_parser = subparsers.add_parser("play")
    play_parser.add_argument("--game", required=True)
    play_parser.add_argument("--players", nargs="+", required=True)
    play_parser.add_argument("--option", action="append", default=[], help="Game option as KEY=VALUE")
    play_parser.add_argument(
        "--click",
        action="append",
        default=[],
        help='Click as "IDENTITY:ROW COLUMN", applied in order',
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    games = load_plugins(config)
    router = Router(games, config=config)

    if args.command == "list-games":
        _print(sorted(games.keys()))
        return 0

    try:
        session = router.create_session(args.game, args.players, _parse_options(args.option))
    except EngineError as exc:
        _print({"ok": False, "code": exc.code, "message": exc.message})
        return 1
    _print(dump_model(session.view()))

    for click in args.click:
        identity, _, payload = click.partition(":")
        _print(router.dispatch({"session_id": session.session_id, "identity": identity, "payload": payload}))

    _print(router.stats())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
