import secrets

import numpy as np

from smallworld.metrics import MetricsParams, NetworkMetrics, compute_metrics
from smallworld.networks import Network, WattsStrogatzParams, build


def prepare_network_params(config: dict) -> WattsStrogatzParams:
    return WattsStrogatzParams.model_validate(config.get("network", {}))


def prepare_metrics_params(config: dict) -> MetricsParams:
    return MetricsParams.model_validate(config.get("metrics", {}))


def ensure_seed(config: dict, section: str) -> int:
    # Record a seed drawn from OS entropy so the run can be reproduced.
    params = config.setdefault(section, {})
    if params.get("seed") is None:
        params["seed"] = int(secrets.randbits(32))
    return int(params["seed"])


def analyze(
    p_net: WattsStrogatzParams,
    p_metrics: MetricsParams | None = None,
    rng: np.random.Generator | None = None,
) -> tuple[Network, NetworkMetrics]:
    if p_metrics is None:
        p_metrics = MetricsParams()
    network = build(p_net, rng)
    metrics = compute_metrics(
        network.nodes,
        network.edges,
        p_net.n,
        p_net.k,
        p_net.p,
        path_length=p_metrics.path_length,
    )
    return network, metrics
