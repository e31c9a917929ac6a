"""Run commands as cron jobs and record and list their runs in a SQLite database."""

__version__ = "0.1.0"
__all__ = ["cli", "db", "listing", "runner"]