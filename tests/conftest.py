"""Shared fixtures for the calendar tests."""

import io

import pytest

from almanac.calendar.clock import FixedClock
from almanac.calendar.store import CalendarStore
from almanac.core.prompter import Prompter
from almanac.core.shell import CalendarShell


@pytest.fixture
def store():
    return CalendarStore(clock=FixedClock("2025-02-01", "09:30"))


@pytest.fixture
def abc_store(store):
    """A, B, C created in that order (ids 1, 2, 3)."""
    store.create("A", "2025-02-01", "10:00", "x")
    store.create("B", "2025-02-01", "09:00", "y")
    store.create("C", "2025-01-31", "23:59", "z")
    return store


@pytest.fixture
def calendar_file(tmp_path):
    return tmp_path / "calendar.txt"


@pytest.fixture
def run_shell(store):
    """Feed `lines` to a shell over `store`; returns (exit_code, output)."""
    def _run(*lines, default_file=None):
        stdin = io.StringIO("".join(line + "\n" for line in lines))
        stdout = io.StringIO()
        shell = CalendarShell(store, Prompter(stdin=stdin, stdout=stdout, prompt="> "),
                              default_file=default_file)
        code = shell.run()
        return code, stdout.getvalue()
    return _run
