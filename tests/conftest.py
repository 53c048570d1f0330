"""Pytest configuration and fixtures for exprcc tests."""

import pytest

from exprcc import Environment
from exprcc.machine import StackMachine


@pytest.fixture
def env():
    """Create a default Environment."""
    return Environment()


@pytest.fixture
def env_wrap():
    """Create an Environment that wraps oversized literals."""
    return Environment(overflow="wrap")


@pytest.fixture
def machine():
    """Create a StackMachine for running generated assembly."""
    return StackMachine()


@pytest.fixture
def run(env, machine):
    """Compile an expression and run it, returning the signed result."""

    def _run(source: str) -> int:
        return machine.run(env.compile(source))

    return _run


def assert_instructions(assembly: str, *expected: str) -> None:
    """Assert the body instructions of ``assembly`` equal ``expected``.

    Directives, the entry label and the epilogue are stripped first.
    """
    lines = [line.strip() for line in assembly.splitlines()]
    body = lines[3:-2]
    assert body == list(expected), (
        f"Instruction mismatch:\n  Actual: {body!r}\n  Expected: {list(expected)!r}"
    )
