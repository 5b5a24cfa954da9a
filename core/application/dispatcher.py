"""Chainable dispatcher exposing one invoker per step name.

``dispatcher.<step>`` returns a :class:`StepInvoker`. Calling it either queues
the step and hands back the dispatcher (a factory step given only its
configuration) or supplies the input value, at which point the pending plan
is finalized and executed by the configured strategy::

    chain.number.min(5, 7)      # queue number, queue min(5), run on 7
    chain.min(5).number("6")    # same plan shape, built across two calls

A dispatcher owns one mutable plan and is meant for sequential use from a
single task.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Tuple

from core.domain.errors import ChainClosedError, StepDefinitionError, UnconfiguredStepError
from core.domain.plan import PlanState, QueuedInvocation
from core.domain.predicates import is_non_null
from core.domain.steps import Step, StepTable
from ports.strategy_port import CombinationStrategy, Predicate, StepFunction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatcherConfig:
    """Configuration shared by every chain built from one dispatcher."""

    predicate: Predicate = is_non_null
    reset_on_error: bool = True


class StepInvoker:
    """Callable bound to one step of a dispatcher and one plan generation."""

    __slots__ = ("_dispatcher", "_step", "_generation")

    def __init__(self, dispatcher: "Dispatcher", step: Step, generation: int) -> None:
        self._dispatcher = dispatcher
        self._step = step
        self._generation = generation

    @property
    def step(self) -> Step:
        return self._step

    def _ensure_open(self) -> None:
        if self._generation != self._dispatcher._plan.generation:
            raise self._dispatcher._abort(
                ChainClosedError(
                    f"Step {self._step.name!r} belongs to a chain that was already executed"
                )
            )

    def __call__(self, *args: Any) -> Any:
        self._ensure_open()
        step = self._step
        if step.is_factory:
            if len(args) == 1:
                self._dispatcher._plan.queue(QueuedInvocation(step.name, args[0]))
                return self._dispatcher
            if len(args) == 2:
                config, value = args
                return self._dispatcher._execute(QueuedInvocation(step.name, config), value)
            raise self._dispatcher._abort(
                TypeError(
                    f"Factory step {step.name!r} takes a configuration and an optional "
                    f"input ({len(args)} given)"
                )
            )
        if len(args) != 1:
            raise self._dispatcher._abort(
                TypeError(f"Step {step.name!r} takes exactly one input ({len(args)} given)")
            )
        return self._dispatcher._execute(QueuedInvocation(step.name), args[0])

    def __getattr__(self, name: str) -> "StepInvoker":
        if name.startswith("_"):
            raise AttributeError(name)
        dispatcher = self._dispatcher
        if name not in dispatcher._steps:
            raise dispatcher._abort(dispatcher._unknown_step(name))
        self._ensure_open()
        if self._step.is_factory:
            raise dispatcher._abort(
                UnconfiguredStepError(
                    f"Factory step {self._step.name!r} must be called with its "
                    f"configuration before chaining {name!r}"
                )
            )
        dispatcher._plan.queue(QueuedInvocation(self._step.name))
        return StepInvoker(dispatcher, dispatcher._steps.get(name), self._generation)

    def __repr__(self) -> str:
        return f"<StepInvoker {self._step.name} ({self._step.kind.value})>"


class Dispatcher:
    """Accumulates a plan of named steps and runs it with a strategy."""

    def __init__(
        self,
        steps: StepTable,
        strategy: CombinationStrategy,
        config: DispatcherConfig | None = None,
    ) -> None:
        attributes = set(dir(type(self)))
        reserved = [step.name for step in steps if step.name in attributes]
        if reserved:
            raise StepDefinitionError(
                f"Step names clash with dispatcher attributes: {reserved}"
            )
        self._steps = steps
        self._strategy = strategy
        self._config = config or DispatcherConfig()
        self._plan = PlanState()

    @property
    def steps(self) -> StepTable:
        return self._steps

    @property
    def strategy(self) -> CombinationStrategy:
        return self._strategy

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    @property
    def pending(self) -> Tuple[QueuedInvocation, ...]:
        """Invocations queued so far in the current chain."""
        return self._plan.entries

    def reset(self) -> None:
        """Discard a partially built chain."""
        if not self._plan.is_empty:
            logger.debug("Discarding pending plan %r", self._plan.entries)
        self._plan.reset()

    def __getattr__(self, name: str) -> StepInvoker:
        if name.startswith("_"):
            raise AttributeError(name)
        step = self._steps.get(name)
        if step is None:
            raise self._abort(self._unknown_step(name))
        return StepInvoker(self, step, self._plan.generation)

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._steps.names))

    def __call__(self, value: Any) -> Any:
        if self._plan.is_empty and len(self._steps):
            raise ChainClosedError(
                "No step is queued; call a step such as "
                f"{self._steps.names[0]!r} instead of the dispatcher itself"
            )
        return self._execute(None, value)

    def __repr__(self) -> str:
        return (
            f"<Dispatcher {self._strategy.name} steps={list(self._steps.names)} "
            f"pending={list(self._plan.entries)}>"
        )

    def _unknown_step(self, name: str) -> AttributeError:
        return AttributeError(
            f"{type(self).__name__!s} has no step named {name!r}; "
            f"available: {list(self._steps.names)}"
        )

    def _abort(self, error: Exception) -> Exception:
        """Discard the chain being built and return ``error`` for raising."""
        if not self._plan.is_empty:
            logger.debug("Aborting chain %r: %s", self._plan.entries, error)
        self._plan.reset()
        return error

    def _resolve(self, plan: Tuple[QueuedInvocation, ...]) -> List[StepFunction]:
        functions = []
        for invocation in plan:
            step = self._steps.get(invocation.step_name)
            if step is None:  # pragma: no cover - invokers only queue known names
                raise StepDefinitionError(f"Unknown step: {invocation.step_name!r}")
            functions.append(step.resolve(invocation.config))
        return functions

    def _execute(self, terminal: QueuedInvocation | None, value: Any) -> Any:
        plan = self._plan.finalize_and_reset(terminal)
        try:
            result = self._strategy.run(self._resolve(plan), value)
        except Exception:
            if self._config.reset_on_error:
                logger.warning(
                    "Plan %r raised during %s; chain was reset", plan, self._strategy.name
                )
            else:
                self._plan.restore(plan)
                logger.warning(
                    "Plan %r raised during %s; plan kept pending", plan, self._strategy.name
                )
            raise
        logger.debug("Ran %s plan %r", self._strategy.name, plan)
        return result
