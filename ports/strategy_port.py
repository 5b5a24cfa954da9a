"""Combination strategy port definition."""

from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence, runtime_checkable

StepFunction = Callable[[Any], Any]
Predicate = Callable[[Any], Any]


@runtime_checkable
class CombinationStrategy(Protocol):
    """Port abstraction for running a resolved plan against an input."""

    name: str

    def run(self, functions: Sequence[StepFunction], value: Any) -> Any:
        ...
