import logging
from dataclasses import dataclass

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from smallworld.metrics import METRIC_FIELDS, MetricsParams
from smallworld.networks import WattsStrogatzParams
from smallworld.utils.aggregate import AggregateState, aggregate_std, update_aggregate
from smallworld.utils.steps import analyze

logger = logging.getLogger(__name__)

DEFAULT_P_VALUES = [0.0, 0.001, 0.003, 0.01, 0.03, 0.1, 0.3, 1.0]


class SweepParams(BaseModel):
    model_config = ConfigDict(extra="forbid")
    p_values: list[float] = Field(default_factory=lambda: list(DEFAULT_P_VALUES))
    realizations: int = Field(10, ge=1)
    seed: int | None = None

    @field_validator("p_values")
    @classmethod
    def _check_probabilities(cls, v: list[float]):
        if not v:
            raise ValueError("p_values must be non-empty")
        bad = [x for x in v if not 0.0 <= x <= 1.0]
        if bad:
            raise ValueError(f"p_values must lie in [0, 1], got {bad}")
        return v


@dataclass
class SweepResult:
    p_values: np.ndarray
    mean: np.ndarray
    std: np.ndarray
    count: int
    baseline: np.ndarray
    exhausted: np.ndarray
    fieldnames: tuple[str, ...] = METRIC_FIELDS

    def column(self, name: str) -> np.ndarray:
        return self.mean[:, self.fieldnames.index(name)]

    def normalized(self) -> dict[str, np.ndarray]:
        """Clustering and path length relative to the p = 0 lattice.

        A ratio whose lattice value is zero (clustering at k = 2) is NaN.
        """

        def ratio(name: str) -> np.ndarray:
            idx = self.fieldnames.index(name)
            base = self.baseline[idx]
            out = np.full(self.mean.shape[0], np.nan)
            if base != 0:
                out = self.mean[:, idx] / base
            return out

        return {
            "clustering_ratio": ratio("avg_clustering_coef"),
            "path_length_ratio": ratio("avg_path_length"),
        }


def run_sweep(
    p_net: WattsStrogatzParams,
    p_sweep: SweepParams,
    p_metrics: MetricsParams | None = None,
) -> SweepResult:
    seed_seq = np.random.SeedSequence(p_sweep.seed)
    # The same child seeds are reused for every p so curves share realizations.
    realization_seqs = seed_seq.spawn(p_sweep.realizations)

    lattice = p_net.model_copy(update={"p": 0.0})
    _, base_metrics = analyze(lattice, p_metrics)
    baseline = np.asarray([getattr(base_metrics, f) for f in METRIC_FIELDS])

    means = []
    stds = []
    exhausted = []
    for p in p_sweep.p_values:
        params = p_net.model_copy(update={"p": float(p)})
        state = AggregateState()
        n_exhausted = 0
        for seq in realization_seqs:
            network, metrics = analyze(params, p_metrics, np.random.default_rng(seq))
            n_exhausted += network.exhausted_count
            update_aggregate(
                state, np.asarray([getattr(metrics, f) for f in METRIC_FIELDS])
            )
        means.append(state.mean)
        stds.append(aggregate_std(state))
        exhausted.append(n_exhausted)
        logger.info(
            "p=%.4g: clustering=%.4f index=%.4f (%d realizations)",
            p,
            state.mean[METRIC_FIELDS.index("avg_clustering_coef")],
            state.mean[METRIC_FIELDS.index("small_world_index")],
            state.count,
        )

    return SweepResult(
        p_values=np.asarray(p_sweep.p_values, dtype=np.float64),
        mean=np.vstack(means),
        std=np.vstack(stds),
        count=p_sweep.realizations,
        baseline=baseline,
        exhausted=np.asarray(exhausted, dtype=np.int64),
    )
