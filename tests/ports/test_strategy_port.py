from unittest.mock import Mock

import pytest

from adapters.secondary.executor.strategies import EveryStrategy, MapStrategy, SomeStrategy
from core.domain.predicates import is_present
from ports.strategy_port import CombinationStrategy


def increment(value: int) -> int:
    return value + 1


def halve(value: int) -> float:
    return value / 2


@pytest.mark.parametrize("strategy", [MapStrategy(), EveryStrategy(), SomeStrategy()])
def test_strategies_satisfy_port(strategy: object) -> None:
    assert isinstance(strategy, CombinationStrategy)


class TestMapStrategy:
    def test_composes_left_to_right(self) -> None:
        assert MapStrategy().run([increment, halve], 5) == 3
        assert MapStrategy().run([halve, increment], 5) == 3.5

    def test_empty_plan_returns_input(self) -> None:
        marker = object()
        assert MapStrategy().run([], marker) is marker

    def test_none_is_passed_through(self) -> None:
        assert MapStrategy().run([lambda v: None, lambda v: v is None], 1) is True


class TestEveryStrategy:
    def test_threads_value(self) -> None:
        assert EveryStrategy().run([increment, increment, halve], 4) == 3

    def test_empty_plan_returns_none(self) -> None:
        assert EveryStrategy().run([], 4) is None

    def test_stops_on_first_failure(self) -> None:
        later = Mock(return_value="never")
        result = EveryStrategy().run([increment, lambda v: None, later], 1)
        assert result is None
        later.assert_not_called()

    def test_custom_predicate(self) -> None:
        strategy = EveryStrategy(predicate=lambda v: v < 10)
        assert strategy.run([increment, increment], 5) == 7
        assert strategy.run([increment, increment], 8) is None

    def test_predicate_checks_every_result(self) -> None:
        predicate = Mock(return_value=True)
        EveryStrategy(predicate).run([increment, increment], 0)
        assert [call.args[0] for call in predicate.call_args_list] == [1, 2]


class TestSomeStrategy:
    def test_each_step_gets_original_input(self) -> None:
        first = Mock(return_value=None)
        second = Mock(return_value="hit")
        assert SomeStrategy().run([first, second], "x") == "hit"
        first.assert_called_once_with("x")
        second.assert_called_once_with("x")

    def test_short_circuits_on_success(self) -> None:
        later = Mock(return_value="later")
        assert SomeStrategy().run([increment, later], 1) == 2
        later.assert_not_called()

    def test_no_success_returns_none(self) -> None:
        assert SomeStrategy().run([lambda v: None, lambda v: None], 1) is None

    def test_empty_plan_returns_none(self) -> None:
        assert SomeStrategy().run([], 1) is None

    def test_declaration_order_decides_priority(self) -> None:
        assert SomeStrategy().run([halve, increment], 4) == 2
        assert SomeStrategy().run([increment, halve], 4) == 5

    def test_missing_values_with_is_present(self) -> None:
        strategy = SomeStrategy(predicate=is_present)
        assert strategy.run([lambda v: float("nan"), increment], 1) == 2
