"""Command-line entry point: run a job and record it, or list recorded runs."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from collections.abc import Sequence
from contextlib import closing

from crontrace.db import open_database
from crontrace.listing import list_runs
from crontrace.runner import run

DEFAULT_DB_PATH = "/var/lib/crontrace/crontrace.db"

_USAGE = """usage: crontrace [flags] <command> [args...]
       crontrace --list-all
       crontrace --list <job-name>"""


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command given in *argv*, or list runs; return the exit status."""
    parser = argparse.ArgumentParser(prog="crontrace")
    parser.add_argument("--db", default=DEFAULT_DB_PATH, help="path to SQLite database")
    parser.add_argument("--list", dest="list_job", default="", metavar="JOB", help="list runs for a job name")
    parser.add_argument("--list-all", action="store_true", help="list all recorded job runs")
    parser.add_argument("command", nargs=argparse.REMAINDER)
    options = parser.parse_args(argv)

    stage = "open database"
    try:
        with closing(open_database(options.db)) as connection:
            if options.list_all or options.list_job:
                stage = "list runs"
                list_runs(connection, "" if options.list_all else options.list_job)
                return 0
            if not options.command:
                print(_USAGE, file=sys.stderr)
                parser.print_help(sys.stderr)
                return 1
            stage = "run"
            command, *args = options.command
            return run(connection, command, command, args).exit_code
    except sqlite3.Error as exc:
        print(f"crontrace: {stage}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())