[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crontrace"
version = "0.1.0"
description = "Run cron jobs through a wrapper that records every run in a SQLite database"
requires-python = ">=3.10"
dependencies = []
keywords = ["cron", "jobs", "sqlite", "monitoring", "history"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
crontrace = "crontrace.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["crontrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
