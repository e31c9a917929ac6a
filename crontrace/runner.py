"""Run a command and record its execution."""

from __future__ import annotations

import sqlite3
import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from crontrace.db import finish_job_run, insert_job_run


@dataclass
class RunResult:
    """The outcome of one job execution."""

    job_run_id: int
    command: str
    args: list[str] = field(default_factory=list)
    exit_code: int = 0
    duration: float = 0.0
    output: str = ""
    error: Exception | None = None


def run(conn: sqlite3.Connection, name: str, command: str, args: Sequence[str] = ()) -> RunResult:
    """Run *command* with *args* as job *name* and record it; exit code -1 if it did not exit normally."""
    argv = [command, *args]
    run_id = insert_job_run(conn, name, " ".join(argv))

    error: Exception | None = None
    output = ""
    exit_code = -1
    start = time.monotonic()
    try:
        proc = subprocess.run(argv, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, check=False)
    except OSError as exc:
        error = exc
    else:
        output = proc.stdout.decode("utf-8", errors="replace")
        exit_code = max(proc.returncode, -1)
        if proc.returncode != 0:
            error = subprocess.CalledProcessError(proc.returncode, argv, output=proc.stdout)
    duration = time.monotonic() - start

    finish_job_run(conn, run_id, exit_code, output)
    return RunResult(run_id, command, list(args), exit_code, duration, output, error)