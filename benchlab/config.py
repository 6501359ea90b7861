"""
ExperimentConfig: fixed configuration of a benchmark experiment.

This module provides:

- find_config_file: Walk up directories to locate .benchlab.toml
- deep_merge: Recursively merge two dicts (override wins for leaf values)
- ExperimentConfig: Typed, validated experiment settings

The experiment has no command-line surface. Settings are the dataclass
defaults, optionally overridden by the ``[experiment]`` table of
``.benchlab.toml`` and then of ``.benchlab.local.toml`` in the same directory:

    [experiment]
    algorithm_name = "grid"
    first_function = 1
    last_function = 8
    dimensions = [2, 3, 5]
    budget_multiplier = 1000

Example:
    >>> config = ExperimentConfig.load()
    >>> config.observer_options
    'result_folder: grid_on_bbob-constrained_f01_08 algorithm_name: grid ...'
"""

from __future__ import annotations

import dataclasses
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_FILENAME = ".benchlab.toml"
LOCAL_CONFIG_FILENAME = ".benchlab.local.toml"


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Walk up from *start_dir* to find `.benchlab.toml`.

    Args:
        start_dir: Directory to start searching from. Defaults to ``Path.cwd()``.

    Returns:
        Path to the config file, or ``None`` if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            return None
        current = parent


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts. *override* wins for leaf values.

    Neither input is mutated; a new dict is returned.
    """
    merged: dict[str, Any] = {}

    for key in base.keys() | override.keys():
        if key in base and key in override:
            base_val = base[key]
            over_val = override[key]
            if isinstance(base_val, dict) and isinstance(over_val, dict):
                merged[key] = deep_merge(base_val, over_val)
            else:
                merged[key] = over_val
        elif key in base:
            merged[key] = base[key]
        else:
            merged[key] = override[key]

    return merged


# ---------------------------------------------------------------------------
# Experiment configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExperimentConfig:
    """
    Settings of one benchmark experiment.

    Attributes:
        suite_name: Benchmark suite (e.g. ``"bbob"``, ``"bbob-constrained"``).
        observer_name: Observer backend logging the evaluations.
        algorithm_name: Label of the benchmarked algorithm.
        algorithm_info: Free-text description recorded by the observer.
        first_function: First function id to run (1-based, inclusive).
        last_function: Last function id to run (inclusive).
        dimensions: Dimensions to run; an empty tuple means the suite default.
        instances: Instance selection passed to the suite.
        instances_per_function: Instances of each function at one dimension.
        budget_multiplier: Evaluation budget per problem is
            ``dimension * budget_multiplier``.
        independent_restarts: Extra strategy runs allowed per problem.
        random_seed: Root seed for all random sources.
        log_level: Log level for the suite provider.
    """

    suite_name: str = "bbob-constrained"
    observer_name: str = "bbob"
    algorithm_name: str = "rayes"
    algorithm_info: str = "Evolutionary search algorithm"
    first_function: int = 1
    last_function: int = 48
    dimensions: tuple[int, ...] = (2, 3, 5, 10, 20, 40)
    instances: str = "1-15"
    instances_per_function: int = 15
    budget_multiplier: int = 100000
    independent_restarts: int = 0
    random_seed: int = 0xDEADBEEF
    log_level: str = "info"

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimensions", tuple(int(d) for d in self.dimensions))
        if self.first_function < 1:
            raise ValueError(f"first_function must be >= 1, got {self.first_function}")
        if self.last_function < self.first_function:
            raise ValueError(
                f"last_function ({self.last_function}) must be >= "
                f"first_function ({self.first_function})"
            )
        if self.instances_per_function < 1:
            raise ValueError(
                f"instances_per_function must be >= 1, got {self.instances_per_function}"
            )
        if self.budget_multiplier < 1:
            raise ValueError(f"budget_multiplier must be >= 1, got {self.budget_multiplier}")
        if self.independent_restarts < 0:
            raise ValueError(
                f"independent_restarts must be >= 0, got {self.independent_restarts}"
            )
        if any(d < 1 for d in self.dimensions):
            raise ValueError(f"dimensions must be positive, got {self.dimensions}")

    # ------------------------------------------------------------------
    # Derived option strings
    # ------------------------------------------------------------------

    @property
    def observer_options(self) -> str:
        """Options string for the observer backend."""
        return (
            f"result_folder: {self.algorithm_name}_on_{self.suite_name}"
            f"_f{self.first_function:02d}_{self.last_function:02d} "
            f"algorithm_name: {self.algorithm_name} "
            f'algorithm_info: "{self.algorithm_info}"'
        )

    @property
    def suite_instance(self) -> str:
        """Instance selection string (empty for a single explicit dimension)."""
        if len(self.dimensions) == 1:
            return ""
        return f"instances: {self.instances}" if self.instances else ""

    @property
    def suite_options(self) -> str:
        """Suite options string selecting the dimensions."""
        if not self.dimensions:
            return ""
        return "dimensions: " + ",".join(str(d) for d in self.dimensions)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExperimentConfig:
        """
        Create a config from the contents of an ``[experiment]`` table.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown experiment setting(s): {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def load(cls, start_dir: Path | None = None, required: bool = False) -> ExperimentConfig:
        """
        Find and load the experiment configuration.

        Walks up from *start_dir* (default: cwd) to locate ``.benchlab.toml``
        and deep-merges ``.benchlab.local.toml`` from the same directory.

        Args:
            start_dir: Directory to start searching from.
            required: Raise if no config file is found instead of returning
                the defaults.

        Raises:
            FileNotFoundError: If *required* and no ``.benchlab.toml`` exists.
        """
        config_path = find_config_file(start_dir)
        if config_path is None:
            if required:
                raise FileNotFoundError(
                    f"Could not find {CONFIG_FILENAME} in {start_dir or Path.cwd()} "
                    f"or any parent directory"
                )
            return cls()

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        local_path = config_path.parent / LOCAL_CONFIG_FILENAME
        if local_path.is_file():
            with open(local_path, "rb") as f:
                data = deep_merge(data, tomllib.load(f))

        return cls.from_dict(data.get("experiment", {}))
