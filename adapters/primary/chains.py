"""Public entry points building dispatchers for each combination strategy."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from adapters.secondary.executor.strategies import EveryStrategy, MapStrategy, SomeStrategy
from core.application.dispatcher import Dispatcher, DispatcherConfig
from core.domain.predicates import is_non_null
from core.domain.steps import StepTable, factory
from ports.strategy_port import Predicate

StepsInput = Optional[Union[Iterable[Any], Mapping[str, Any]]]

__all__ = ["every", "factory", "map", "some"]


def every(
    steps: StepsInput,
    predicate: Predicate = is_non_null,
    *,
    config: DispatcherConfig | None = None,
) -> Dispatcher:
    """Run queued steps as a pipeline, returning ``None`` on the first failure."""
    config = _with_predicate(config, predicate)
    return Dispatcher(StepTable.from_steps(steps), EveryStrategy(config.predicate), config)


def map(  # noqa: A001 - public name mirrors the strategy
    steps: StepsInput,
    *,
    config: DispatcherConfig | None = None,
) -> Dispatcher:
    """Compose queued steps left to right without any predicate."""
    return Dispatcher(StepTable.from_steps(steps), MapStrategy(), config)


def some(
    steps: StepsInput,
    predicate: Predicate = is_non_null,
    *,
    config: DispatcherConfig | None = None,
) -> Dispatcher:
    """Try queued steps on the same input and return the first success."""
    config = _with_predicate(config, predicate)
    return Dispatcher(StepTable.from_steps(steps), SomeStrategy(config.predicate), config)


def _with_predicate(config: DispatcherConfig | None, predicate: Predicate) -> DispatcherConfig:
    if not callable(predicate):
        raise TypeError("predicate must be callable")
    if config is None:
        return DispatcherConfig(predicate=predicate)
    if predicate is is_non_null:
        return config
    return DispatcherConfig(predicate=predicate, reset_on_error=config.reset_on_error)
