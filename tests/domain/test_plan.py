from core.domain.plan import PlanState, QueuedInvocation


class TestQueuedInvocation:
    def test_without_config(self) -> None:
        invocation = QueuedInvocation("number")
        assert not invocation.has_config
        assert repr(invocation) == "number"

    def test_with_config(self) -> None:
        invocation = QueuedInvocation("min", 5)
        assert invocation.has_config
        assert repr(invocation) == "min(5)"

    def test_none_counts_as_config(self) -> None:
        assert QueuedInvocation("default", None).has_config


class TestPlanState:
    def test_starts_empty(self) -> None:
        plan = PlanState()
        assert plan.is_empty
        assert len(plan) == 0
        assert plan.generation == 0

    def test_queue_keeps_order_and_duplicates(self) -> None:
        plan = PlanState()
        plan.queue(QueuedInvocation("number"))
        plan.queue(QueuedInvocation("min", 5))
        plan.queue(QueuedInvocation("number"))
        assert [entry.step_name for entry in plan.entries] == ["number", "min", "number"]

    def test_finalize_and_reset(self) -> None:
        plan = PlanState()
        plan.queue(QueuedInvocation("min", 5))
        result = plan.finalize_and_reset(QueuedInvocation("number"))
        assert result == (QueuedInvocation("min", 5), QueuedInvocation("number"))
        assert plan.is_empty
        assert plan.generation == 1

    def test_finalize_without_terminal(self) -> None:
        plan = PlanState()
        plan.queue(QueuedInvocation("min", 5))
        assert plan.finalize_and_reset() == (QueuedInvocation("min", 5),)
        assert plan.finalize_and_reset() == ()
        assert plan.generation == 2

    def test_entries_is_a_snapshot(self) -> None:
        plan = PlanState()
        plan.queue(QueuedInvocation("number"))
        snapshot = plan.entries
        plan.queue(QueuedInvocation("string"))
        assert len(snapshot) == 1

    def test_restore_prepends(self) -> None:
        plan = PlanState()
        consumed = plan.finalize_and_reset(QueuedInvocation("number"))
        plan.queue(QueuedInvocation("string"))
        plan.restore(consumed)
        assert [entry.step_name for entry in plan.entries] == ["number", "string"]
