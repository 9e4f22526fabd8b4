# Copyright (c) The mountinfo authors.
# All rights reserved.
import nox

SRC_DIRS = [
    "mountinfo",
]


@nox.session
def tests(session: nox.Session) -> None:
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)


@nox.session
def lint(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run(
        "flake8",
        "--max-line-length=120",
        *SRC_DIRS,
    )


@nox.session
def format(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run(
        "ufmt",
        "check",
        *SRC_DIRS,
    )


@nox.session
def typecheck(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run("mypy", *SRC_DIRS)
