"""
Minimal Working Example: grid and random search on an in-memory suite.

Usage:
    python examples/toy_suite/run.py

No benchmark library needed: problems are plain Python callables served by
a ProblemSuite. Shows the progress display and the timing report.
"""

import numpy as np

import benchlab


def sphere(x):
    return float(np.sum(x**2))


def rastrigin(x):
    return float(10 * len(x) + np.sum(x**2 - 10 * np.cos(2 * np.pi * x)))


def build_suite() -> benchlab.ProblemSuite:
    # Suite order: ascending dimension, then function, then instance
    problems = []
    for dimension in (2, 3, 5):
        for function_id, fn in enumerate((sphere, rastrigin), start=1):
            for instance in (1, 2):
                problems.append(
                    benchlab.CallableProblem(
                        fn,
                        lower_bounds=[-5.0] * dimension,
                        upper_bounds=[5.0] * dimension,
                        target=1e-8,
                        function_id=function_id,
                        instance=instance,
                        name="toy",
                    )
                )
    return benchlab.ProblemSuite(problems)


if __name__ == "__main__":
    config = benchlab.ExperimentConfig(
        suite_name="toy",
        algorithm_name="grid",
        first_function=1,
        last_function=2,
        dimensions=(2, 3, 5),
        instances_per_function=2,
        budget_multiplier=2000,
        independent_restarts=1,
    )

    # A restart lays a coarser grid over whatever budget is left
    grid = benchlab.GridSearch()
    summary = benchlab.Experiment(
        config,
        grid,
        progress=benchlab.Progress(title="Grid search", style="auto"),
    ).run(build_suite())
    print(f"{summary.problems_run} problems, {summary.evaluations} evaluations")

    # Two independent repetitions of random search
    seeds = benchlab.SeedBundle(root_seed=config.random_seed)
    for index in range(2):
        summary = benchlab.Experiment(
            config,
            benchlab.RandomSearch.from_seeds(seeds.replicate(index)),
        ).run(build_suite())
        print(f"replicate {index}: {summary.evaluations} evaluations")
