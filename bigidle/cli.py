from __future__ import annotations

import argparse
import logging
import sys

from bigidle.clock import SystemClock
from bigidle.config import GameConfig
from bigidle.errors import StorageError
from bigidle.formatting import format_number, format_status
from bigidle.persistence import PersistenceAdapter
from bigidle.runtime import IdleGame
from bigidle.session import GameSession
from bigidle.simulation import Simulation
from bigidle.state import GameState
from bigidle.store import FileStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idle",
        description="bigidle: an idle game with arbitrarily big numbers",
    )
    parser.add_argument(
        "--save-dir", default=None, help="Directory holding the save file"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("status", help="Show the saved game, including offline progress")

    upgrade = sub.add_parser("upgrade", help="Double production and save")
    upgrade.add_argument("--times", type=int, default=1, help="Number of upgrades")

    reset = sub.add_parser("reset", help="Start over and overwrite the save")
    reset.add_argument(
        "--delete", action="store_true", help="Delete the save instead of overwriting it"
    )

    run = sub.add_parser("run", help="Play in real time")
    run.add_argument(
        "--duration", type=float, default=None, help="Seconds to run (default: forever)"
    )
    run.add_argument(
        "--tick-interval", type=int, default=1000, help="Milliseconds per tick"
    )
    run.add_argument(
        "--autosave-interval", type=int, default=5000, help="Milliseconds between saves"
    )

    sim = sub.add_parser("simulate", help="Run a headless simulation")
    sim.add_argument("--seconds", type=float, default=3600, help="Simulated seconds")
    sim.add_argument(
        "--upgrade-every", type=float, default=None, help="Upgrade every N seconds"
    )
    sim.add_argument("--export-csv", default=None, help="CSV export path")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    return parser


def open_game(config: GameConfig) -> IdleGame:
    """Restore the game saved under the configured directory."""
    store = FileStore(config.resolve_save_dir())
    persistence = PersistenceAdapter(store, key=config.save_key)
    return IdleGame.restore(persistence)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    config = GameConfig(save_dir=args.save_dir)

    if args.command == "status":
        game = open_game(config)
        print(format_status(game.state, game.now(), title=config.name))

    elif args.command == "upgrade":
        if args.times < 1:
            parser.error("--times must be at least 1")
        game = open_game(config)
        for _ in range(args.times):
            game.upgrade()
        game.save()
        print(format_status(game.state, game.now()))

    elif args.command == "reset":
        game = open_game(config)
        game.reset()
        if args.delete:
            try:
                game.persistence.clear()
            except StorageError as e:
                logger.warning("Could not delete save: %s", e)
        else:
            game.save()
        print(format_status(game.state, game.now()))

    elif args.command == "run":
        config.tick_interval_ms = args.tick_interval
        config.autosave_interval_ms = args.autosave_interval
        _run_realtime(config, args.duration)

    elif args.command == "simulate":
        _run_simulation(config, args)


def _run_realtime(config: GameConfig, duration: float | None) -> None:
    clock = SystemClock()
    store = FileStore(config.resolve_save_dir())
    try:
        session = GameSession.open(store, clock, config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    last_counter = session.state.counter

    def _print_on_tick(state: GameState) -> None:
        nonlocal last_counter
        if state.counter != last_counter:
            last_counter = state.counter
            print(format_status(state, clock.now_ms()))

    session.game.subscribe(_print_on_tick)
    print(format_status(session.state, clock.now_ms(), title=config.name))
    session.start()
    try:
        clock.run(duration)
    except KeyboardInterrupt:
        pass
    finally:
        final = session.close()
        print(f"\nStopped. Counter: {format_number(final.counter)}")


def _run_simulation(config: GameConfig, args) -> None:
    try:
        sim = Simulation(
            config=config,
            seconds=args.seconds,
            upgrade_every=args.upgrade_every,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    report = sim.run()
    final = report.final_state

    print(f"Simulated: {report.total_time:.1f}s")
    print(f"Ticks: {report.ticks}")
    print(f"Upgrades: {report.upgrades}")
    print(f"Autosaves: {report.saves}")
    if final is not None:
        print(f"Counter: {format_number(final.counter)} ({final.counter.digit_count()} digits)")
        print(f"Production: {format_number(final.production)}")

    if args.export_csv:
        from bigidle.export import export_csv
        export_csv(report, args.export_csv)
        print(f"\nCSV exported to {args.export_csv}")

    if args.export_json:
        from bigidle.export import export_json
        export_json(report, args.export_json)
        print(f"\nJSON exported to {args.export_json}")

    if args.plot:
        from bigidle.visualization import plot_simulation
        plot_simulation(report, args.plot)
        print(f"\nPlot saved to {args.plot}")
