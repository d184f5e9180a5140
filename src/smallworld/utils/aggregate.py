from dataclasses import dataclass

import numpy as np


@dataclass
class AggregateState:
    mean: np.ndarray | None = None
    m2: np.ndarray | None = None
    count: int = 0


def update_aggregate(state: AggregateState, values: np.ndarray) -> None:
    state.count += 1
    if state.mean is None:
        state.mean = values.astype(np.float64, copy=True)
        state.m2 = np.zeros_like(state.mean)
        return
    delta = values - state.mean
    state.mean += delta / state.count
    state.m2 += delta * (values - state.mean)


def aggregate_std(state: AggregateState) -> np.ndarray:
    if state.mean is None:
        raise ValueError("Aggregate is empty.")
    if state.count < 2:
        return np.zeros_like(state.mean)
    return np.sqrt(state.m2 / (state.count - 1))
