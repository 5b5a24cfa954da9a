"""Strategies that execute a finalized plan against an input value."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from core.domain.predicates import is_non_null
from ports.strategy_port import CombinationStrategy, Predicate, StepFunction

logger = logging.getLogger(__name__)


class MapStrategy(CombinationStrategy):
    """Compose the plan left to right: ``p_n(...p_1(value))``."""

    name = "map"

    def run(self, functions: Sequence[StepFunction], value: Any) -> Any:
        current = value
        for fn in functions:
            current = fn(current)
        logger.debug("map ran %d step(s)", len(functions))
        return current


class EveryStrategy(CombinationStrategy):
    """Thread the value through every step, aborting on the first failure."""

    name = "every"

    def __init__(self, predicate: Predicate = is_non_null) -> None:
        self.predicate = predicate

    def run(self, functions: Sequence[StepFunction], value: Any) -> Any:
        if not functions:
            return None
        current = value
        for index, fn in enumerate(functions):
            current = fn(current)
            if not self.predicate(current):
                logger.debug("every stopped at step %d of %d", index + 1, len(functions))
                return None
        return current


class SomeStrategy(CombinationStrategy):
    """Try each step against the original value; first success wins."""

    name = "some"

    def __init__(self, predicate: Predicate = is_non_null) -> None:
        self.predicate = predicate

    def run(self, functions: Sequence[StepFunction], value: Any) -> Any:
        for index, fn in enumerate(functions):
            result = fn(value)
            if self.predicate(result):
                logger.debug("some matched step %d of %d", index + 1, len(functions))
                return result
        return None
