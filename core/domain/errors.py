"""Exceptions raised by the chaining engine."""

from __future__ import annotations


class ChainError(Exception):
    """Base class for errors raised while building or running a chain."""


class StepDefinitionError(ChainError, ValueError):
    """Raised when a step descriptor is malformed or used incorrectly."""


class DuplicateStepNameError(StepDefinitionError):
    """Raised when two steps in the same table share a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate step name: {name!r}")
        self.name = name


class ChainClosedError(ChainError, ReferenceError):
    """Raised when a call targets a plan that was already finalized."""


class UnconfiguredStepError(StepDefinitionError, AttributeError):
    """Raised when chaining past a factory step that has no configuration."""
