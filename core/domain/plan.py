"""Pending execution plan accumulated while a chain is being built.

A plan belongs to exactly one dispatcher. It is not synchronized: a
dispatcher shared between threads will interleave its queued steps, so build
one dispatcher per concurrent task.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Tuple

from core.domain.steps import MISSING

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueuedInvocation:
    """One step application waiting in a plan."""

    step_name: str
    config: Any = MISSING

    @property
    def has_config(self) -> bool:
        return self.config is not MISSING

    def __repr__(self) -> str:
        if self.has_config:
            return f"{self.step_name}({self.config!r})"
        return self.step_name


@dataclass
class PlanState:
    """Ordered, mutable queue of invocations for one chain-building episode."""

    _entries: List[QueuedInvocation] = field(default_factory=list)
    generation: int = 0

    @property
    def entries(self) -> Tuple[QueuedInvocation, ...]:
        return tuple(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def queue(self, invocation: QueuedInvocation) -> None:
        self._entries.append(invocation)
        logger.debug("Queued %r (plan length %d)", invocation, len(self._entries))

    def restore(self, entries: Tuple[QueuedInvocation, ...]) -> None:
        """Put previously consumed entries back in front of the plan."""
        self._entries[:0] = entries

    def reset(self) -> None:
        """Drop all queued entries and start a new generation."""
        self._entries.clear()
        self.generation += 1

    def finalize_and_reset(
        self, terminal: QueuedInvocation | None = None
    ) -> Tuple[QueuedInvocation, ...]:
        """Append ``terminal``, return the complete plan and reset the state."""
        if terminal is not None:
            self._entries.append(terminal)
        plan = tuple(self._entries)
        self.reset()
        logger.debug("Finalized plan %r", plan)
        return plan
