"""Maze Explorer CLI entry point.

Provides subcommands for running the web server and for generating a maze
and exploring it headlessly. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - exotic stdout replacements
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Maze Explorer

    Generate random grid mazes and walk them with depth-first search or A*,
    either through the JSON web API or directly from the command line.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 5000)
          DATABASE_URL    SQLAlchemy database URI (default: sqlite:///instance/maze.db)
          MAZE_WIDTH      Default maze width (default: 10)
          MAZE_HEIGHT     Default maze height (default: 10)
          MAZE_SEED       Default generation seed (default: random)
          MAZE_LOG_LEVEL  Structured log level: debug, info, warn, error

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Explore a 20x15 maze with both algorithms and draw it
          python run.py explore --width 20 --height 15 --seed 42 --ascii

          # A* only, machine-readable output
          python run.py explore --algorithm astar --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="maze-explorer",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Maze Explorer {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the JSON web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server exposing /api/maze endpoints",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument(
        "--db",
        dest="db_uri",
        default=None,
        help="Database URI (default: env DATABASE_URL or sqlite:///instance/maze.db)",
    )
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    explore_parser = subparsers.add_parser(
        "explore",
        help="Generate a maze and explore it from the command line",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one maze, run DFS and/or A* over it and print the statistics.",
    )
    explore_parser.add_argument("--width", type=int, default=None, help="Maze width (default: env MAZE_WIDTH or 10)")
    explore_parser.add_argument("--height", type=int, default=None, help="Maze height (default: env MAZE_HEIGHT or 10)")
    explore_parser.add_argument("--seed", type=int, default=None, help="Generation seed (default: random)")
    explore_parser.add_argument(
        "--algorithm",
        choices=["dfs", "astar", "both"],
        default="both",
        help="Explorer(s) to run (default: both)",
    )
    explore_parser.add_argument("--ascii", action="store_true", help="Draw the maze with each route")
    explore_parser.add_argument("--json", action="store_true", help="Print a JSON document instead of text")
    explore_parser.set_defaults(command="explore")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def run_explore(args: argparse.Namespace) -> int:
    from maze_explorer.maze import MazeError, generate_maze, load_config, render_ascii, render_payload, trace_payload
    from maze_explorer.search import LogStatsLogger, MemoryStatsLogger, run_explorer

    if args.json:
        # keep stdout a single JSON document
        os.environ["MAZE_LOG_LEVEL"] = "error"

    try:
        base = load_config()
        cfg = base.with_overrides(width=args.width, height=args.height, seed=args.seed)
        maze = generate_maze(cfg)
    except MazeError as e:
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return 2

    algorithms = ["dfs", "astar"] if args.algorithm == "both" else [args.algorithm]
    memory = MemoryStatsLogger()
    log_sink = LogStatsLogger()
    results = []
    for name in algorithms:
        result = run_explorer(maze, name, memory)
        log_sink.record(memory.records[-1])
        results.append(result)

    if args.json:
        doc = {
            "maze": render_payload(maze),
            "results": [trace_payload(r) for r in results],
            "runs": [rec.to_dict() for rec in memory.records],
        }
        print(json.dumps(doc))
        return 0

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {label('Size:'):12} {value(f'{maze.width}x{maze.height}')}",
        f"  {label('Seed:'):12} {value(maze.seed)}",
        f"  {label('Nodes:'):12} {value(len(maze.graph))}",
        f"  {label('Start:'):12} {value(maze.start)}",
        f"  {label('Goal:'):12} {value(maze.goal)}",
        divider,
    ]
    for result, rec in zip(results, memory.records):
        lines.append(
            f"  {label(rec.algorithm.upper() + ':'):12} found={value(rec.found)} "
            f"expansions={value(rec.expansions)} path_length={value(rec.path_length)}"
        )
        if args.ascii:
            lines.append(render_ascii(maze, result.route))
    print("\n".join(lines))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "explore":
        return run_explore(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    db_uri_cli = getattr(args, "db_uri", None)
    # Make DATABASE_URL available to the Flask app before it is created
    if db_uri_cli:
        os.environ["DATABASE_URL"] = db_uri_cli
    db_banner = db_uri_cli or os.getenv("DATABASE_URL") or "auto (instance/maze.db)"

    from maze_explorer.logging_utils import log
    from maze_explorer.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}Maze Explorer Server{Style.RESET_ALL}" if _COLOR_ENABLED else "Maze Explorer Server"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    print(
        "\n".join(
            [
                divider,
                f"  {title}",
                divider,
                f"  {label('Host:'):12} {value(host)}",
                f"  {label('Port:'):12} {value(port)}",
                f"  {label('Database:'):12} {value(db_banner)}",
                divider,
                "",
            ]
        )
    )
    log.info(event="startup", mode=mode, host=host, port=port, db=db_banner)
    start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


def _console_main():  # pragma: no cover - console_scripts shim
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
