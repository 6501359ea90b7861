"""
COCO Example: directed search on the constrained suite.

Usage:
    pip install benchlab[coco]
    python examples/coco_constrained/run.py

Runs the default experiment: functions 1-48 of "bbob-constrained" in
dimensions 2-40, logged by the "bbob" observer. Settings can be overridden in
a .benchlab.toml file (see benchlab.config).

Expect this to take a long time with the default budget multiplier.
"""

import logging

import benchlab


def main() -> None:
    # Settings: dataclass defaults, overridden by .benchlab.toml if present
    config = benchlab.ExperimentConfig.load()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Constrained single-objective problems go to the solver, anything else
    # is sampled at random
    seeds = benchlab.SeedBundle(root_seed=config.random_seed)
    strategy = benchlab.select_by_problem_shape(
        unconstrained=benchlab.RandomSearch.from_seeds(seeds),
        constrained=benchlab.DirectedSearch(benchlab.ScipySolver),
    )

    print("Running the example experiment... (might take time, be patient)")
    suite = benchlab.CocoSuite.from_config(config)
    benchlab.Experiment(config, strategy).run(suite)
    print("Done!")


if __name__ == "__main__":
    main()
