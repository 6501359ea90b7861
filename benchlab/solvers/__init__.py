"""
Solvers for the directed search strategy.

Provides:

- Solver / SolverFactory: protocols a solver backend implements
- SolverInfo / TerminationCriterion: what a solver run reports
- ScipySolver: constrained minimization via scipy.optimize
"""

from benchlab.solvers.base import (
    PointEvaluator,
    Solver,
    SolverFactory,
    SolverInfo,
    TerminationCriterion,
)
from benchlab.solvers.scipy_ import ScipySolver

__all__ = [
    "PointEvaluator",
    "Solver",
    "SolverFactory",
    "SolverInfo",
    "TerminationCriterion",
    "ScipySolver",
]
