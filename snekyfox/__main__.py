"""Entry point: ``python -m snekyfox``.

Supports two modes:
  - ``python -m snekyfox``             → Launch the FastAPI game server
  - ``python -m snekyfox play``        → Headless run of a scripted key sequence
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

# Headless key script: one character per tick.
_KEYS = {
    "U": dict(up=True),
    "D": dict(down=True),
    "L": dict(left=True),
    "R": dict(right=True),
    "C": dict(confirm=True),
    ".": {},
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sneky Fox: isometric stealth delivery game")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI game server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--levels-dir", type=str, default=None)
    srv.add_argument("--level", type=str, default=None, help="Start level name")
    srv.add_argument("--tps", type=float, default=30.0, help="Ticks per second")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless mode ---
    play = sub.add_parser("play", help="Run a key script headlessly and print the outcome")
    play.add_argument("--levels-dir", type=str, default=None)
    play.add_argument("--level", type=str, default=None, help="Start level name")
    play.add_argument("--keys", type=str, default="",
                      help="One key per tick: U/D/L/R move, C confirm, '.' idle")
    play.add_argument("--dt", type=float, default=0.1, help="Seconds per tick")
    play.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _make_config(args: argparse.Namespace, **extra):
    from snekyfox.config import GameConfig

    overrides = dict(log_level=args.log_level, **extra)
    if args.levels_dir:
        overrides["levels_dir"] = args.levels_dir
    if args.level:
        overrides["start_level"] = args.level
    return GameConfig(**overrides)


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from snekyfox.api.app import create_app

    config = _make_config(args, tick_rate=1.0 / args.tps)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_headless(args: argparse.Namespace) -> None:
    from snekyfox.core.enums import GameState
    from snekyfox.engine.game_state import GameStateMachine
    from snekyfox.engine.simulation import TickInput
    from snekyfox.systems.audio import RecordingAudio
    from snekyfox.systems.level_loader import TiledLevelLoader
    from snekyfox.utils.logging import setup_logging

    config = _make_config(args)
    setup_logging(config.log_level)

    audio = RecordingAudio(config.cue_lengths)
    machine = GameStateMachine(
        config, TiledLevelLoader(config.levels_dir), audio, state=GameState.RUNNING,
    )

    for ch in args.keys.upper():
        if ch not in _KEYS:
            logger.warning("Ignoring unknown key %r", ch)
            continue
        machine.update(args.dt, TickInput(**_KEYS[ch]))
        audio.advance(args.dt)

    world = machine.world
    logger.info(
        "Finished on level '%s' in state %s: fox at %s facing %s, mail=%s, %d pugs left",
        world.level_name, world.state.name, world.fox.pos, world.fox.dir.name,
        world.fox.has_mail, len(world.pugs),
    )
    logger.info("Cues played: %s", ", ".join(c.name for c in audio.played) or "none")


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])
    if args.command == "serve":
        _run_server(args)
    elif args.command == "play":
        _run_headless(args)


if __name__ == "__main__":
    main()
