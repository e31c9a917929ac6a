"""SQLite storage for recorded job runs."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

SCHEMA_VERSION = 1

_SCHEMA = """
CREATE TABLE IF NOT EXISTS job_runs (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT     NOT NULL,
    command     TEXT     NOT NULL,
    started_at  DATETIME NOT NULL,
    finished_at DATETIME,
    exit_code   INTEGER,
    output      TEXT     NOT NULL DEFAULT '',
    created_at  DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_job_runs_name       ON job_runs(name);
CREATE INDEX IF NOT EXISTS idx_job_runs_started_at ON job_runs(started_at);
"""

_COLUMNS = "id, name, command, started_at, finished_at, exit_code, output"


class JobRunNotFound(LookupError):
    """Raised when no job run has the requested id."""

    def __init__(self, run_id: int) -> None:
        super().__init__(f"job run {run_id} not found")
        self.run_id = run_id


@dataclass
class JobRun:
    """A single execution of a cron job."""

    id: int
    name: str
    command: str
    started_at: datetime
    finished_at: datetime | None = None
    exit_code: int | None = None
    output: str = ""

    @property
    def duration(self) -> timedelta | None:
        """Time between start and finish, or None while still running."""
        if self.finished_at is None:
            return None
        return self.finished_at - self.started_at


def open_database(path: str | os.PathLike[str]) -> sqlite3.Connection:
    """Open (or create) the database at *path* and make sure the schema exists."""
    conn = sqlite3.connect(path)
    try:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        conn.executescript(_SCHEMA)
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _parse_time(text: str) -> datetime:
    return datetime.fromisoformat(text)


def _row_to_run(row: tuple) -> JobRun:
    run_id, name, command, started, finished, exit_code, output = row
    return JobRun(
        id=run_id,
        name=name,
        command=command,
        started_at=_parse_time(started),
        finished_at=_parse_time(finished) if finished is not None else None,
        exit_code=exit_code,
        output=output if output is not None else "",
    )


def insert_job_run(
    conn: sqlite3.Connection,
    name: str,
    command: str,
    started_at: datetime | None = None,
) -> int:
    """Record the start of a job run and return its new id."""
    if started_at is None:
        started_at = datetime.now(timezone.utc)
    with conn:
        cursor = conn.execute(
            "INSERT INTO job_runs (name, command, started_at) VALUES (?, ?, ?)",
            (name, command, _format_time(started_at)),
        )
    return cursor.lastrowid


def finish_job_run(
    conn: sqlite3.Connection,
    run_id: int,
    exit_code: int,
    output: str = "",
    finished_at: datetime | None = None,
) -> None:
    """Store the finish time, exit code and output of a job run."""
    if finished_at is None:
        finished_at = datetime.now(timezone.utc)
    with conn:
        conn.execute(
            "UPDATE job_runs SET finished_at = ?, exit_code = ?, output = ? WHERE id = ?",
            (_format_time(finished_at), exit_code, output, run_id),
        )


def get_job_run(conn: sqlite3.Connection, run_id: int) -> JobRun:
    """Return the job run with the given id."""
    row = conn.execute(
        f"SELECT {_COLUMNS} FROM job_runs WHERE id = ?", (run_id,)
    ).fetchone()
    if row is None:
        raise JobRunNotFound(run_id)
    return _row_to_run(row)


def list_job_runs(conn: sqlite3.Connection, name: str | None = None) -> list[JobRun]:
    """Return recorded runs, most recent first, optionally only those of *name*."""
    if name:
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM job_runs WHERE name = ? "
            "ORDER BY started_at DESC, id DESC",
            (name,),
        )
    else:
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM job_runs ORDER BY started_at DESC, id DESC"
        )
    return [_row_to_run(row) for row in rows]