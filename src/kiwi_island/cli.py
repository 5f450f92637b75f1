from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import GameConfig
from .errors import LevelLoadError
from .game import Game
from .levels.loader import LEVEL_SUFFIXES, load_level
from .levels.selector import MapSelector
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def _cmd_validate(args: argparse.Namespace) -> int:
    root = Path(args.path)
    if root.is_dir():
        paths = sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in LEVEL_SUFFIXES)
    else:
        paths = [root]

    success = True
    for p in paths:
        try:
            level = load_level(p)
            print(f"OK: {p} ({level.rows}x{level.columns}, {len(level.occupants)} occupants)")
        except LevelLoadError as e:
            success = False
            print(f"INVALID: {p}\n{e.to_human()}\n")
    return 0 if success else 1


def _cmd_draw(args: argparse.Namespace) -> int:
    config = GameConfig.load(Path(args.config) if args.config else None)
    try:
        if Path(args.path).is_dir():
            path = MapSelector(Path(args.path)).select()
        else:
            path = Path(args.path)
        game = Game.from_file(path, config=config)
    except LevelLoadError as e:
        print(f"INVALID: {args.path}\n{e.to_human()}")
        return 1
    print(game.render(show_hidden=args.reveal))
    snap = game.player_values()
    print(
        f"{game.player_name}: stamina {snap.stamina:g}/{snap.maximum_stamina:g}, "
        f"kiwis {game.total_kiwis}, predators {game.total_predators}"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="kiwi-island", description="Kiwi Island level tools")
    p.add_argument("--log-level", default=None, help="Default logging level; KIWI_LOG_LEVEL takes precedence")
    sub = p.add_subparsers(dest="cmd", required=True)

    v = sub.add_parser("validate", help="Validate level files (YAML, JSON or legacy text)")
    v.add_argument("path", help="Path to a level file or a directory to scan")
    v.set_defaults(func=_cmd_validate)

    d = sub.add_parser("draw", help="Draw the starting island of a level")
    d.add_argument("path", help="Path to a level file, or a directory to pick one from")
    d.add_argument("--reveal", action="store_true", help="Show tiles the player has not seen yet")
    d.add_argument("--config", help="Optional user config YAML", default=None)
    d.set_defaults(func=_cmd_draw)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = configure_logging(args.log_level or logging.WARNING)
    logger.debug("Logging at %s", logging.getLevelName(level))
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
