"""
YAML-based experiment configuration loader.

Example config_default.yaml
----------------------------
n_jobs: [100, 1000, 5000]
strategies:
  - baseline
  - optimized
seeds: [1, 2, 3]
arrival_rates: [0.2, 0.5, 0.9]
duration_mean: 4.0
outdir: experiments/out
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import List


@dataclass
class ExperimentConfig:
    """Configuration for a full experiment sweep."""

    n_jobs: List[int] = field(default_factory=lambda: [100, 1000, 5000])
    strategies: List[str] = field(default_factory=lambda: ["baseline", "optimized"])
    seeds: List[int] = field(default_factory=lambda: [1, 2, 3])
    arrival_rates: List[float] = field(default_factory=lambda: [0.2, 0.5, 0.9])
    duration_mean: float = 4.0
    outdir: str = "experiments/out"

    @classmethod
    def from_yaml(cls, path: str) -> "ExperimentConfig":
        """Load an ExperimentConfig from a YAML file."""
        try:
            import yaml
        except ImportError as exc:
            raise ImportError(
                "pyyaml is required to load YAML configs. "
                "Install it with: pip install pyyaml"
            ) from exc

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
