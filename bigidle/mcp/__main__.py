"""CLI entry point: python -m bigidle.mcp [--save-dir DIR]"""

from __future__ import annotations

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="python -m bigidle.mcp",
        description="Serve the idle game over MCP (stdio)",
    )
    parser.add_argument("--save-dir", default=None, help="Directory holding the save file")
    args = parser.parse_args(argv)

    # stdout carries the protocol; diagnostics go to stderr
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)

    from bigidle.cli import open_game
    from bigidle.config import GameConfig
    from bigidle.mcp.server import create_server

    config = GameConfig(save_dir=args.save_dir)
    server = create_server(open_game(config), config)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
