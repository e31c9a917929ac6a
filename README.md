# crontrace

crontrace wraps the commands your crontab runs. It records every run in a
SQLite database. Each record holds the job name, the full command line, when
the run started and finished, the exit code, and the command's output. You can
then list the history of any job.

## Installation

```
pip install .
```

## Recording a job

Put `crontrace` in front of the command in your crontab:

```
0 3 * * * crontrace rsync -av /src /dst
```

The first word of the command is used as the job name. Here that is `rsync`.
crontrace exits with the exit code of the command it ran. If the command could
not be started, or was ended by a signal, the run is recorded with exit code
`-1`.

The command's standard output and standard error are captured together and
stored with the run. They are not printed to the terminal.

The database is kept at `/var/lib/crontrace/crontrace.db` by default. Use
`--db` to choose another file. Options must come before the command:

```
crontrace --db /tmp/jobs.db backup.sh
```

If the database cannot be opened or written to, crontrace prints
`crontrace: <stage>: <error>` to standard error and exits with status 1. It
does the same, after printing a usage message, when it is given no command.

## Listing runs

List every recorded run:

```
crontrace --list-all
```

List the runs of one job:

```
crontrace --list rsync
```

Runs are listed with the most recent first. The output is a table with one row
per run. Each row shows:

- the run id
- the job name
- the start time, in UTC (for example `2024-05-01T03:00:00Z`)
- the duration, rounded to milliseconds (for example `250ms` or `1m30.5s`)
- the exit code
- the status: `running`, `done` or `failed`

When no runs match, crontrace prints `No runs found.`, or
`No runs found for job "<name>"` when a job name was given.

## Using it from Python

```python
from crontrace.db import open_database, get_job_run, list_job_runs
from crontrace.runner import run
from crontrace.listing import list_runs, format_duration

conn = open_database("jobs.db")
result = run(conn, "echo", "echo", ["hello"])
print(result.exit_code, result.duration, result.output)

record = get_job_run(conn, result.job_run_id)
print(record.command, record.exit_code, record.duration)

for job_run in list_job_runs(conn, "echo"):
    print(job_run.id, job_run.started_at)

list_runs(conn, "echo")
print(format_duration(90.5))  # 1m30.5s
```

The main parts are these:

- `crontrace.db.open_database(path)` opens or creates the database and its
  `job_runs` table.
- `insert_job_run` and `finish_job_run` record the start and the end of a run.
- `get_job_run` returns a `JobRun`. It raises `JobRunNotFound` for an unknown
  id.
- `list_job_runs` returns `JobRun` objects, the most recent first.
- `crontrace.runner.run(conn, name, command, args)` runs a command and records
  it. It returns a `RunResult` with `job_run_id`, `exit_code`, `duration` in
  seconds, `output`, and `error`. `error` is set when the command failed or
  could not be started.
- `crontrace.listing.list_runs(conn, job_name, out)` prints the table to `out`.
  It prints to standard output when `out` is not given.

## Limitations

- The command line has no way to show a run's stored output. Read it from
  Python with `get_job_run`.
- Old runs are never pruned. Nothing alerts you when a job fails.

## Development

```
pip install -e ".[test]"
pytest
```