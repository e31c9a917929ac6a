import sqlite3
from contextlib import closing
from datetime import datetime, timedelta, timezone

import pytest

from crontrace.db import (
    JobRun,
    JobRunNotFound,
    finish_job_run,
    get_job_run,
    insert_job_run,
    list_job_runs,
    open_database,
)


@pytest.fixture
def conn(tmp_path):
    with closing(open_database(tmp_path / "test.db")) as connection:
        yield connection


def test_insert_and_finish_job_run(conn):
    start = datetime.now(timezone.utc).replace(microsecond=0)
    run_id = insert_job_run(conn, "backup", "tar -czf /tmp/backup.tar.gz /data", start)
    assert run_id > 0

    end = start + timedelta(seconds=3)
    finish_job_run(conn, run_id, 0, "done", end)

    run = get_job_run(conn, run_id)
    assert run.name == "backup"
    assert run.command == "tar -czf /tmp/backup.tar.gz /data"
    assert run.exit_code == 0
    assert run.finished_at is not None
    assert run.output == "done"
    assert run.started_at == start
    assert run.finished_at == end
    assert run.duration == timedelta(seconds=3)


def test_unfinished_run_has_no_end(conn):
    run_id = insert_job_run(conn, "backup", "rsync -av /src /dst")
    run = get_job_run(conn, run_id)
    assert run.finished_at is None
    assert run.exit_code is None
    assert run.duration is None
    assert run.output == ""


def test_list_job_runs(conn):
    names = ["job-a", "job-b", "job-c"]
    for name in names:
        insert_job_run(conn, name, "echo " + name, datetime.now(timezone.utc))
    runs = list_job_runs(conn)
    assert len(runs) == len(names)
    assert all(isinstance(run, JobRun) for run in runs)


def test_list_job_runs_most_recent_first(conn):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for offset, name in enumerate(["old", "mid", "new"]):
        insert_job_run(conn, name, "echo", base + timedelta(minutes=offset))
    assert [run.name for run in list_job_runs(conn)] == ["new", "mid", "old"]


def test_list_job_runs_filters_by_name(conn):
    for name in ["jobA", "jobB", "jobA"]:
        insert_job_run(conn, name, "echo " + name)
    runs = list_job_runs(conn, "jobA")
    assert len(runs) == 2
    assert {run.name for run in runs} == {"jobA"}


def test_get_job_run_not_found(conn):
    with pytest.raises(JobRunNotFound) as info:
        get_job_run(conn, 9999)
    assert info.value.run_id == 9999


def test_open_creates_database(tmp_path):
    db_path = tmp_path / "crontrace.db"
    with closing(open_database(db_path)) as connection:
        assert db_path.exists()
        (count,) = connection.execute("SELECT count(*) FROM job_runs").fetchone()
        assert count == 0


def test_open_idempotent(tmp_path):
    db_path = tmp_path / "crontrace.db"
    for _ in range(3):
        with closing(open_database(db_path)) as connection:
            insert_job_run(connection, "job", "true")
    with closing(open_database(db_path)) as connection:
        assert len(list_job_runs(connection)) == 3


def test_open_invalid_path(tmp_path):
    with pytest.raises(sqlite3.OperationalError):
        open_database(tmp_path / "nonexistent" / "directory" / "crontrace.db")


def test_open_in_memory():
    with closing(open_database(":memory:")) as connection:
        run_id = insert_job_run(connection, "job", "true")
        assert get_job_run(connection, run_id).name == "job"