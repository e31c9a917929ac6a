"""Printing recorded job runs as a table."""

from __future__ import annotations

import json
import math
import sqlite3
import sys
from datetime import timezone
from typing import TextIO

from crontrace.db import JobRun, list_job_runs

_HEADER = ("ID", "JOB", "STARTED", "DURATION", "EXIT CODE", "STATUS")
_RULE = ("--", "---", "-------", "--------", "---------", "------")


def format_duration(seconds: float) -> str:
    """Format a duration rounded to milliseconds, e.g. ``250ms``, ``1m30.5s``, ``1h0m0s``."""
    sign = "-" if seconds < 0 else ""
    millis = math.floor(abs(seconds) * 1000 + 0.5)
    if millis == 0:
        return "0s"
    if millis < 1000:
        return f"{sign}{millis}ms"
    hours, rest = divmod(millis, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    whole, frac = divmod(rest, 1000)
    text = (f"{whole}.{frac:03d}".rstrip("0") if frac else str(whole)) + "s"
    if hours or minutes:
        text = f"{minutes}m{text}"
    if hours:
        text = f"{hours}h{text}"
    return sign + text


def _row(run: JobRun) -> tuple[str, ...]:
    duration, exit_code, status = "-", "-", "running"
    if run.finished_at is not None:
        duration = format_duration((run.finished_at - run.started_at).total_seconds())
        status = "done"
    if run.exit_code is not None:
        exit_code = str(run.exit_code)
        if run.exit_code != 0:
            status = "failed"
    started = run.started_at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return (str(run.id), run.name, started, duration, exit_code, status)


def list_runs(conn: sqlite3.Connection, job_name: str | None = None, out: TextIO | None = None) -> None:
    """Print the runs of *job_name*, or of every job when it is empty."""
    out = out or sys.stdout
    runs = list_job_runs(conn, job_name)
    if not runs:
        message = f"No runs found for job {json.dumps(job_name)}" if job_name else "No runs found."
        print(message, file=out)
        return
    rows = [_HEADER, _RULE, *map(_row, runs)]
    widths = [max(len(cell) for cell in column) + 2 for column in zip(*rows)]
    for row in rows:
        print("".join(c.ljust(w) for c, w in zip(row[:-1], widths)) + row[-1], file=out)