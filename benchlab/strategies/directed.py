"""
DirectedSearch: runs an external solver on constrained single-objective problems.

The solver does not know about the harness budget. It receives budget-checked
evaluators that refuse to evaluate once the budget is reached; running out of
budget is therefore the normal way for a directed search to end.
"""

from __future__ import annotations

import logging

from benchlab.budget import BudgetedConstraints, BudgetedObjective, EvaluationBudget
from benchlab.gateway import EvaluationGateway
from benchlab.solvers import ScipySolver, SolverFactory, TerminationCriterion
from benchlab.strategies.base import SearchOutcome, SearchStatus, check_budget

logger = logging.getLogger(__name__)


class DirectedSearch:
    """
    Solver-backed search.

    Before the solver starts, the initial solution is evaluated once
    (constraints, then objective) so that the observer logs at least one
    point even if the solver fails straight away. These warm-up evaluations
    count against the budget.

    Failures raised by the solver are reported and turned into a
    ``SOLVER_FAILED`` outcome; they never leave ``search``.

    Example:
        strategy = DirectedSearch(functools.partial(ScipySolver, method="SLSQP"))
        outcome = strategy.search(gateway, budget=200)
    """

    name = "directed_search"

    def __init__(self, solver_factory: SolverFactory = ScipySolver) -> None:
        self._solver_factory = solver_factory

    def search(self, gateway: EvaluationGateway, budget: int) -> SearchOutcome:
        budget = check_budget(budget)
        if gateway.number_of_objectives != 1 or gateway.number_of_constraints == 0:
            raise ValueError(
                "Directed search needs one objective and at least one constraint, got "
                f"{gateway.number_of_objectives} objective(s) and "
                f"{gateway.number_of_constraints} constraint(s)"
            )

        start = gateway.evaluations
        x0 = gateway.initial_solution
        gateway.evaluate_constraints(x0)
        gateway.evaluate_objective(x0)

        allowance = EvaluationBudget(gateway, budget, baseline=start)
        objective = BudgetedObjective(gateway, allowance)
        constraints = BudgetedConstraints(gateway, allowance)

        try:
            solver = self._solver_factory(
                objective,
                constraints,
                gateway.lower_bounds,
                gateway.upper_bounds,
                x0,
            )
            info = solver.run()
        except Exception as e:
            print(f"unexpected error: {e}")
            logger.debug("Solver failed on %r", gateway, exc_info=True)
            return SearchOutcome(
                status=SearchStatus.SOLVER_FAILED,
                evaluations=gateway.evaluations - start,
                message=str(e),
            )

        if allowance.exhausted or info.termination_criterion == TerminationCriterion.BUDGET_EXHAUSTED:
            return SearchOutcome(
                status=SearchStatus.BUDGET_EXHAUSTED,
                evaluations=gateway.evaluations - start,
                message=str(TerminationCriterion.BUDGET_EXHAUSTED),
            )

        print(f"Termination criterion: {info.termination_criterion}.")
        return SearchOutcome(
            status=SearchStatus.COMPLETED,
            evaluations=gateway.evaluations - start,
            message=str(info.termination_criterion),
        )
