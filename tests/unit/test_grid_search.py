"""Tests for grid search."""

from __future__ import annotations

import numpy as np
import pytest

from benchlab.gateway import EvaluationGateway
from benchlab.strategies import GridSearch, SearchStatus
from benchlab.strategies.grid import iter_grid_nodes, max_grid_nodes
from benchlab.suites import CallableProblem, RecordingObserver


def make_gateway(dimension: int = 2, low: float = -5.0, high: float = 5.0):
    observer = RecordingObserver()
    problem = CallableProblem(
        lambda x: float(np.sum(x**2)),
        lower_bounds=[low] * dimension,
        upper_bounds=[high] * dimension,
    ).observe_with(observer)
    return EvaluationGateway(problem), observer


class TestMaxGridNodes:
    """Tests for max_grid_nodes()."""

    @pytest.mark.parametrize(
        "budget,dimension,expected",
        [
            (25, 2, 4),
            (100, 2, 9),
            (30, 2, 4),
            (200, 3, 4),
            (10, 1, 9),
        ],
    )
    def test_values(self, budget, dimension, expected):
        assert max_grid_nodes(budget, dimension) == expected

    @pytest.mark.parametrize("budget,dimension", [(0, 2), (1, 1), (1, 3), (3, 2), (7, 3)])
    def test_clamped_to_one(self, budget, dimension):
        """Budgets too small for a 2-node-per-axis grid still use max_nodes=1."""
        assert max_grid_nodes(budget, dimension) == 1

    def test_invalid_dimension(self):
        with pytest.raises(ValueError):
            max_grid_nodes(10, 0)


class TestIterGridNodes:
    """Tests for odometer enumeration."""

    def test_dimension_zero_moves_fastest(self):
        assert list(iter_grid_nodes(2, 1)) == [(0, 0), (1, 0), (0, 1), (1, 1)]

    def test_node_count(self):
        assert len(list(iter_grid_nodes(3, 2))) == 27

    def test_nodes_are_distinct(self):
        nodes = list(iter_grid_nodes(3, 3))
        assert len(set(nodes)) == len(nodes)

    def test_one_dimensional(self):
        assert list(iter_grid_nodes(1, 3)) == [(0,), (1,), (2,), (3,)]


class TestGridSearch:
    """Tests for GridSearch.search()."""

    def test_five_by_five_grid(self):
        """2-D, bounds [-5, 5], budget 25: 25 points with step 2.5."""
        gateway, observer = make_gateway()
        outcome = GridSearch().search(gateway, 25)

        points = observer.points()
        assert len(points) == 25
        assert gateway.evaluations == 25
        assert outcome.evaluations == 25
        assert outcome.status == SearchStatus.BUDGET_EXHAUSTED

        np.testing.assert_allclose(points[0], [-5.0, -5.0])
        np.testing.assert_allclose(points[1], [-2.5, -5.0])
        np.testing.assert_allclose(points[4], [5.0, -5.0])
        np.testing.assert_allclose(points[5], [-5.0, -2.5])
        np.testing.assert_allclose(points[-1], [5.0, 5.0])

        xs = sorted({round(float(p[0]), 9) for p in points})
        assert xs == [-5.0, -2.5, 0.0, 2.5, 5.0]

    @pytest.mark.parametrize(
        "dimension,budget",
        [(1, 1), (1, 10), (2, 3), (2, 30), (3, 7), (3, 30), (4, 100), (5, 1000)],
    )
    def test_evaluation_count(self, dimension, budget):
        """Exactly min(budget, (max_nodes + 1) ** d) evaluations are made."""
        gateway, _ = make_gateway(dimension)
        GridSearch().search(gateway, budget)
        expected = min(budget, (max_grid_nodes(budget, dimension) + 1) ** dimension)
        assert gateway.evaluations == expected

    def test_points_within_bounds(self):
        gateway, observer = make_gateway(3, low=-1.0, high=3.0)
        GridSearch().search(gateway, 64)
        for x in observer.points():
            assert np.all(x >= -1.0 - 1e-12)
            assert np.all(x <= 3.0 + 1e-12)

    def test_completed_when_grid_smaller_than_budget(self):
        """Budget 30 in 2-D only fits a 5 x 5 grid."""
        gateway, _ = make_gateway()
        outcome = GridSearch().search(gateway, 30)
        assert outcome.evaluations == 25
        assert outcome.status == SearchStatus.COMPLETED

    def test_zero_budget(self):
        gateway, _ = make_gateway()
        outcome = GridSearch().search(gateway, 0)
        assert outcome.evaluations == 0
        assert gateway.evaluations == 0

    def test_deterministic(self):
        """Two runs with the same inputs visit the same points in the same order."""
        first_gateway, first = make_gateway(3)
        second_gateway, second = make_gateway(3)
        GridSearch().search(first_gateway, 50)
        GridSearch().search(second_gateway, 50)
        for a, b in zip(first.points(), second.points()):
            np.testing.assert_array_equal(a, b)

    def test_points_match_search(self):
        """points() yields what search() evaluates."""
        gateway, observer = make_gateway()
        GridSearch().search(gateway, 12)
        expected = list(GridSearch().points(np.full(2, -5.0), np.full(2, 5.0), 12))
        # floor(sqrt(12)) - 1 = 2 gives a 3 x 3 grid, smaller than the budget
        assert len(expected) == 9
        assert len(observer.points()) == len(expected)
        for a, b in zip(observer.points(), expected):
            np.testing.assert_array_equal(a, b)

    def test_rejects_constrained_problems(self):
        problem = CallableProblem(
            lambda x: 0.0,
            lower_bounds=[0.0, 0.0],
            upper_bounds=[1.0, 1.0],
            constraints=lambda x: np.array([x[0]]),
            number_of_constraints=1,
        )
        with pytest.raises(ValueError, match="unconstrained"):
            GridSearch().search(EvaluationGateway(problem), 10)

    def test_negative_budget(self):
        gateway, _ = make_gateway()
        with pytest.raises(ValueError):
            GridSearch().search(gateway, -1)
