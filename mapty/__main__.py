# pylint: disable=import-outside-toplevel
"""Main entry point for the mapty CLI.

Log paced or elevation workouts at a map position, list and select them,
and wipe the stored collection.
"""

import argparse

from dotenv import load_dotenv

load_dotenv()


def main(argv=None):
    """Main function for the mapty CLI."""
    parser = argparse.ArgumentParser(description="mapty CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    log_parser = subparsers.add_parser("log", help="Log a workout at a map position", add_help=False)
    log_parser.add_argument("log_args", nargs=argparse.REMAINDER)
    subparsers.add_parser("list", help="List all logged workouts")
    select_parser = subparsers.add_parser("select", help="Centre the map on a workout", add_help=False)
    select_parser.add_argument("select_args", nargs=argparse.REMAINDER)
    reset_parser = subparsers.add_parser("reset", help="Delete all logged workouts")
    reset_parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    subparsers.add_parser(
        "migrate",
        help="Bootstrap / migrate the database schema (safe to run on every start)",
    )
    subparsers.add_parser("help", help="Show usage and documentation")

    args = parser.parse_args(argv)

    if args.command == "log":
        from mapty.commands.log import run

        run(args.log_args)
    elif args.command == "list":
        from mapty.commands.list_cmd import run

        run()
    elif args.command == "select":
        from mapty.commands.select import run

        run(args.select_args)
    elif args.command == "reset":
        from mapty.commands.reset import run

        run(assume_yes=args.yes)
    elif args.command == "migrate":
        from mapty.commands.migrate import run

        run()
    elif args.command == "help":
        print(
            """
mapty - Log your workouts on a map.

Usage:
    python -m mapty <command>

Commands:
    log        Log a workout, e.g.
               log paced --lat 39 --lng -12 --distance 5.2 --duration 24 --cadence 178
               log elevation --lat 39 --lng -12 --distance 27 --duration 95 --elevation-gain 523
    list       List all logged workouts
    select     Centre the map on a workout by ID and count the click
    reset      Delete all logged workouts
    migrate    Bootstrap the database
    help       Show this help and usage documentation

Configuration:
    Settings live in the database and can be overridden with mapty_config.json.
    MAPTY_DB sets the SQLite path, DATABASE_URL selects another backend and
    MAPTY_DEBUG=1 turns on debug logging.
"""
        )


if __name__ == "__main__":
    main()
