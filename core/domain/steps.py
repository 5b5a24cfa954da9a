"""Domain models for named chain steps."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Mapping, Tuple

from core.domain.errors import DuplicateStepNameError, StepDefinitionError


class _Missing:
    """Sentinel for an argument that was not supplied."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class StepKind(str, Enum):
    """Calling convention of a step function."""

    PLAIN = "plain"
    FACTORY = "factory"


class FactoryFunction:
    """Wrapper marking a callable as a factory step.

    A factory receives its configuration first and returns the function that
    is applied to the input. The wrapped callable is left untouched and the
    wrapper stays callable with the same signature.
    """

    def __init__(self, fn: Callable[[Any], Callable[[Any], Any]]) -> None:
        if not callable(fn):
            raise StepDefinitionError("factory() expects a callable")
        self.fn = fn
        functools.update_wrapper(self, fn)

    def __call__(self, config: Any) -> Callable[[Any], Any]:
        return self.fn(config)

    def __repr__(self) -> str:
        return f"factory({self.fn!r})"


def factory(fn: Callable[[Any], Callable[[Any], Any]]) -> FactoryFunction:
    """Mark ``fn`` as a factory step when passed inside a name mapping::

        @factory
        def gte(bound):
            return lambda value: value if value >= bound else None
    """
    return FactoryFunction(fn)


@dataclass(frozen=True)
class Step:
    """Represents a single named step and its calling convention."""

    name: str
    fn: Callable[..., Any]
    kind: StepKind = StepKind.PLAIN

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise StepDefinitionError("Step name must be a non-empty string")
        if self.name.startswith("_"):
            raise StepDefinitionError(
                f"Step name cannot start with an underscore: {self.name!r}"
            )
        if not callable(self.fn):
            raise StepDefinitionError(f"Step {self.name!r} must wrap a callable")
        if isinstance(self.fn, FactoryFunction):
            object.__setattr__(self, "fn", self.fn.fn)
            object.__setattr__(self, "kind", StepKind.FACTORY)
        try:
            object.__setattr__(self, "kind", StepKind(self.kind))
        except ValueError as exc:
            raise StepDefinitionError(
                f"Unknown step kind for {self.name!r}: {self.kind!r}"
            ) from exc

    @property
    def is_factory(self) -> bool:
        return self.kind is StepKind.FACTORY

    def resolve(self, config: Any = MISSING) -> Callable[[Any], Any]:
        """Return the one-argument callable this step applies to an input."""
        if not self.is_factory:
            return self.fn
        if config is MISSING:
            raise StepDefinitionError(
                f"Factory step {self.name!r} requires a configuration argument"
            )
        configured = self.fn(config)
        if not callable(configured):
            raise StepDefinitionError(
                f"Factory step {self.name!r} did not return a callable"
            )
        return configured


def _step_from_record(record: Any) -> Step:
    if isinstance(record, Step):
        return record
    if isinstance(record, Mapping):
        missing = [key for key in ("name", "fn") if key not in record]
        if missing:
            raise StepDefinitionError(
                f"Step descriptor is missing required keys: {missing}"
            )
        return Step(
            name=record["name"],
            fn=record["fn"],
            kind=record.get("kind", StepKind.PLAIN),
        )
    raise StepDefinitionError(f"Unsupported step descriptor: {record!r}")


def _step_from_item(name: str, value: Any) -> Step:
    if isinstance(value, Step):
        if value.name != name:
            raise StepDefinitionError(
                f"Step registered as {name!r} is named {value.name!r}"
            )
        return value
    return Step(name=name, fn=value)


@dataclass(frozen=True)
class StepTable:
    """Ordered, immutable collection of uniquely named steps."""

    steps: Tuple[Step, ...]

    def __post_init__(self) -> None:
        seen = set()
        for step in self.steps:
            if step.name in seen:
                raise DuplicateStepNameError(step.name)
            seen.add(step.name)

    @classmethod
    def empty(cls) -> "StepTable":
        return cls(steps=tuple())

    @classmethod
    def from_steps(
        cls, steps: Iterable[Any] | Mapping[str, Any] | None
    ) -> "StepTable":
        """Normalize a list of descriptors or a name mapping into a table."""
        if steps is None:
            return cls.empty()
        if isinstance(steps, StepTable):
            return steps
        if isinstance(steps, Mapping):
            return cls(tuple(_step_from_item(name, fn) for name, fn in steps.items()))
        if isinstance(steps, (str, bytes)):
            raise StepDefinitionError("Steps must be a collection, not a string")
        return cls(tuple(_step_from_record(record) for record in steps))

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(step.name for step in self.steps)

    def get(self, name: str) -> Step | None:
        for step in self.steps:
            if step.name == name:
                return step
        return None

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None if isinstance(name, str) else False

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)
