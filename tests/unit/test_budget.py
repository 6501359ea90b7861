"""Tests for budget accounting and budget-checked evaluators."""

from __future__ import annotations

import numpy as np
import pytest

from benchlab.budget import (
    BudgetedConstraints,
    BudgetedObjective,
    BudgetExceeded,
    Evaluation,
    EvaluationBudget,
    remaining_budget,
)
from benchlab.gateway import EvaluationGateway
from benchlab.suites import CallableProblem


@pytest.fixture
def gateway() -> EvaluationGateway:
    problem = CallableProblem(
        lambda x: float(np.sum(x)),
        lower_bounds=[0.0, 0.0],
        upper_bounds=[1.0, 1.0],
        constraints=lambda x: np.array([x[0] - x[1]]),
        number_of_constraints=1,
    )
    return EvaluationGateway(problem)


class TestRemainingBudget:
    """Tests for remaining_budget()."""

    def test_fresh_problem(self):
        assert remaining_budget(5, 100, 0) == 500

    def test_partially_spent(self):
        assert remaining_budget(2, 10, 7) == 13

    def test_can_go_negative(self):
        """Overspent problems yield a non-positive remainder."""
        assert remaining_budget(2, 10, 25) == -5


class TestEvaluationBudget:
    """Tests for EvaluationBudget."""

    def test_negative_limit_rejected(self, gateway):
        with pytest.raises(ValueError):
            EvaluationBudget(gateway, -1)

    def test_spent_counts_from_baseline(self, gateway):
        """Only evaluations after the baseline count."""
        gateway.evaluate_objective(np.zeros(2))
        budget = EvaluationBudget(gateway, 3)
        assert budget.spent == 0
        gateway.evaluate_constraints(np.zeros(2))
        assert budget.spent == 1

    def test_explicit_baseline(self, gateway):
        """A baseline taken earlier includes later evaluations."""
        budget = EvaluationBudget(gateway, 2, baseline=0)
        gateway.evaluate_objective(np.zeros(2))
        gateway.evaluate_objective(np.zeros(2))
        refused = budget.check()
        assert refused == BudgetExceeded(spent=2, limit=2)
        assert budget.exhausted

    def test_zero_limit_refuses_immediately(self, gateway):
        budget = EvaluationBudget(gateway, 0)
        assert isinstance(budget.check(), BudgetExceeded)


class TestBudgetedEvaluators:
    """Tests for BudgetedObjective and BudgetedConstraints."""

    def test_objective_evaluates_within_budget(self, gateway):
        objective = BudgetedObjective(gateway, EvaluationBudget(gateway, 5))
        outcome = objective.evaluate(np.array([0.25, 0.5]))
        assert outcome == Evaluation(value=0.75)
        assert gateway.counts().objective == 1

    def test_constraints_evaluate_within_budget(self, gateway):
        constraints = BudgetedConstraints(gateway, EvaluationBudget(gateway, 5))
        outcome = constraints.evaluate(np.array([0.25, 0.5]))
        assert isinstance(outcome, Evaluation)
        np.testing.assert_array_equal(outcome.value, [-0.25])

    def test_shared_budget_stops_both(self, gateway):
        """Objective and constraints draw from the same allowance."""
        budget = EvaluationBudget(gateway, 3)
        objective = BudgetedObjective(gateway, budget)
        constraints = BudgetedConstraints(gateway, budget)
        x = np.zeros(2)

        outcomes = [
            constraints.evaluate(x),
            objective.evaluate(x),
            constraints.evaluate(x),
            objective.evaluate(x),
            constraints.evaluate(x),
        ]

        assert [isinstance(o, Evaluation) for o in outcomes] == [True, True, True, False, False]
        assert gateway.evaluations == 3

    def test_refusal_does_not_touch_counters(self, gateway):
        objective = BudgetedObjective(gateway, EvaluationBudget(gateway, 0))
        for _ in range(10):
            assert isinstance(objective(np.zeros(2)), BudgetExceeded)
        assert gateway.evaluations == 0
