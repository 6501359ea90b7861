"""
benchlab: A benchmark-driving harness for black-box optimizers.

An Experiment walks a suite of parametrized problems (function x dimension
x instance), applies a budget-limited search strategy to each, and reports
the time spent per evaluation for every dimension.

Problems, observers and solvers are plug-ins.

Example:
    import benchlab

    config = benchlab.ExperimentConfig(
        suite_name="bbob",
        dimensions=(2, 3, 5),
        budget_multiplier=100,
    )
    strategy = benchlab.RandomSearch.from_seeds(benchlab.SeedBundle(config.random_seed))

    suite = benchlab.CocoSuite.from_config(config)
    summary = benchlab.Experiment(config, strategy, progress=True).run(suite)
    # d=2 done in 1.05e-06 seconds/evaluation
    # ...
    # Total elapsed time: 0h00m03s
"""

__version__ = "0.1.0"

# Budget
from benchlab.budget import (
    BudgetedConstraints,
    BudgetedObjective,
    BudgetExceeded,
    Evaluation,
    EvaluationBudget,
    remaining_budget,
)

# Configuration
from benchlab.config import ExperimentConfig

# Events
from benchlab.events import Event, EventCallback, EventKind

# Experiment loop
from benchlab.experiment import (
    EvaluationCountRegression,
    Experiment,
    ExperimentSummary,
    FunctionRangeFilter,
    check_monotonic,
    select_by_problem_shape,
)

# Evaluation gateway
from benchlab.gateway import EvaluationGateway

# Problems
from benchlab.problem import EvaluationCounts, Problem, ProblemIndex, Suite

# Progress
from benchlab.progress import Progress, create_progress_tracker

# Seeds
from benchlab.seeds import SeedBundle

# Solvers
from benchlab.solvers import ScipySolver, SolverInfo, TerminationCriterion

# Strategies
from benchlab.strategies import (
    DirectedSearch,
    GridSearch,
    RandomSearch,
    SearchOutcome,
    SearchStatus,
    SearchStrategy,
)

# Suites
from benchlab.suites import CallableProblem, CocoSuite, ProblemSuite, RecordingObserver

# Timing
from benchlab.timing import TimingRecorder

__all__ = [
    # Version
    "__version__",
    # Problems
    "Problem",
    "Suite",
    "ProblemIndex",
    "EvaluationCounts",
    # Gateway / budget
    "EvaluationGateway",
    "EvaluationBudget",
    "Evaluation",
    "BudgetExceeded",
    "BudgetedObjective",
    "BudgetedConstraints",
    "remaining_budget",
    # Strategies
    "SearchStrategy",
    "SearchOutcome",
    "SearchStatus",
    "RandomSearch",
    "GridSearch",
    "DirectedSearch",
    # Solvers
    "ScipySolver",
    "SolverInfo",
    "TerminationCriterion",
    # Timing
    "TimingRecorder",
    # Experiment
    "ExperimentConfig",
    "Experiment",
    "ExperimentSummary",
    "FunctionRangeFilter",
    "EvaluationCountRegression",
    "check_monotonic",
    "select_by_problem_shape",
    # Events / progress
    "Event",
    "EventKind",
    "EventCallback",
    "Progress",
    "create_progress_tracker",
    # Seeds
    "SeedBundle",
    # Suites
    "CallableProblem",
    "ProblemSuite",
    "RecordingObserver",
    "CocoSuite",
]
