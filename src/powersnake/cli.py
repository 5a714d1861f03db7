"""CLI launcher for headless Power Snake games."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="powersnake",
        description="Run Power Snake games headlessly with the autopilot.",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    for name, help_text, default_seconds in (
        ("simulate", "Play one game in model time.", 120.0),
        ("run", "Play one game in real time on asyncio.", 10.0),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--seconds", type=float, default=default_seconds)
        p.add_argument("--seed", type=int, default=None)
        p.add_argument(
            "--config", type=str, default=None,
            help="Path to a JSON engine config file.",
        )
        p.add_argument(
            "--no-autopilot", action="store_true",
            help="Keep the initial heading instead of steering.",
        )
        p.add_argument(
            "--json", action="store_true",
            help="Print the final game state as JSON.",
        )

    return parser


def _load_config(path: str | None):
    from powersnake.config import EngineConfig

    return EngineConfig.load(path) if path else EngineConfig()


def _report(result, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.state, indent=2))  # noqa: T201
    else:
        print(result.summary())  # noqa: T201


def _run_simulate(args: argparse.Namespace) -> int:
    from powersnake.runner import simulate

    result = simulate(
        args.seconds,
        config=_load_config(args.config),
        seed=args.seed,
        autopilot=not args.no_autopilot,
    )
    _report(result, args.json)
    return 0


def _run_realtime(args: argparse.Namespace) -> int:
    from powersnake.runner import run_realtime

    result = asyncio.run(
        run_realtime(
            args.seconds,
            config=_load_config(args.config),
            seed=args.seed,
            autopilot=not args.no_autopilot,
        ),
    )
    _report(result, args.json)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``powersnake`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "run": _run_realtime,
    }
    try:
        return handlers[args.command](args)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
