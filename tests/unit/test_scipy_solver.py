"""Tests for the SciPy-backed solver."""

from __future__ import annotations

import numpy as np
import pytest

from benchlab.budget import BudgetedConstraints, BudgetedObjective, EvaluationBudget
from benchlab.gateway import EvaluationGateway
from benchlab.solvers import ScipySolver, TerminationCriterion
from benchlab.strategies import DirectedSearch, SearchStatus
from benchlab.suites import CallableProblem


def make_problem() -> CallableProblem:
    # Minimum of the unconstrained sphere at (1, 1) is cut off by x0 + x1 <= 1
    return CallableProblem(
        lambda x: float(np.sum((x - 1.0) ** 2)),
        lower_bounds=[-3.0, -3.0],
        upper_bounds=[3.0, 3.0],
        constraints=lambda x: np.array([x[0] + x[1] - 1.0]),
        number_of_constraints=1,
    )


def make_solver(gateway: EvaluationGateway, limit: int, **kwargs) -> ScipySolver:
    budget = EvaluationBudget(gateway, limit)
    return ScipySolver(
        BudgetedObjective(gateway, budget),
        BudgetedConstraints(gateway, budget),
        gateway.lower_bounds,
        gateway.upper_bounds,
        gateway.initial_solution,
        **kwargs,
    )


class TestScipySolver:
    """Tests for ScipySolver."""

    def test_unknown_method(self):
        gateway = EvaluationGateway(make_problem())
        with pytest.raises(ValueError, match="Unknown method"):
            make_solver(gateway, 10, method="nelder-mead")

    def test_zero_budget_stops_immediately(self):
        gateway = EvaluationGateway(make_problem())
        info = make_solver(gateway, 0).run()
        assert info.termination_criterion == TerminationCriterion.BUDGET_EXHAUSTED
        assert gateway.evaluations == 0

    @pytest.mark.parametrize("limit", [1, 5, 20])
    def test_never_exceeds_budget(self, limit):
        gateway = EvaluationGateway(make_problem())
        make_solver(gateway, limit).run()
        assert gateway.evaluations <= limit

    def test_small_budget_reports_exhaustion(self):
        gateway = EvaluationGateway(make_problem())
        info = make_solver(gateway, 5).run()
        assert info.termination_criterion == TerminationCriterion.BUDGET_EXHAUSTED

    def test_finds_constrained_optimum(self):
        """With ample budget the solver approaches (0.5, 0.5)."""
        gateway = EvaluationGateway(make_problem())
        info = make_solver(gateway, 5000).run()
        assert info.termination_criterion != TerminationCriterion.BUDGET_EXHAUSTED
        assert info.best_x is not None
        np.testing.assert_allclose(info.best_x, [0.5, 0.5], atol=5e-2)
        assert info.best_f == pytest.approx(0.5, abs=5e-2)


class TestDirectedSearchWithScipy:
    """DirectedSearch driving the default solver."""

    def test_zero_budget(self):
        gateway = EvaluationGateway(make_problem())
        outcome = DirectedSearch().search(gateway, 0)
        assert outcome.status == SearchStatus.BUDGET_EXHAUSTED
        assert gateway.evaluations == 2

    def test_respects_budget(self):
        gateway = EvaluationGateway(make_problem())
        outcome = DirectedSearch().search(gateway, 30)
        assert gateway.evaluations <= 30
        assert outcome.status in (SearchStatus.BUDGET_EXHAUSTED, SearchStatus.COMPLETED)
