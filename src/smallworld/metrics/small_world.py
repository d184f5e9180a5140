from collections import Counter
from dataclasses import asdict, dataclass
from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict

from smallworld.networks.types import Edge, Network, Node

from .clustering import average_clustering
from .path_length import approximate_path_length, exact_path_length, random_path_length

PathLengthMode = Literal["approximate", "exact"]

METRIC_FIELDS = ("avg_path_length", "avg_clustering_coef", "small_world_index")


class MetricsParams(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path_length: PathLengthMode = "approximate"


@dataclass(frozen=True)
class NetworkMetrics:
    avg_path_length: float
    avg_clustering_coef: float
    small_world_index: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def random_clustering(n: int, k: int) -> float:
    return k / n


def small_world_index(
    clustering: float, path_length: float, n: int, k: int
) -> float:
    # Normalised against an equivalent random graph: C_r = k/n, L_r = ln n / ln k.
    c_ratio = clustering / random_clustering(n, k)
    l_ratio = path_length / random_path_length(n, k)
    return c_ratio / l_ratio


def compute_metrics(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    n: int,
    k: int,
    p: float,
    *,
    path_length: PathLengthMode = "approximate",
) -> NetworkMetrics:
    clustering = average_clustering(nodes, edges)
    if path_length == "approximate":
        length = approximate_path_length(n, k, p)
    elif path_length == "exact":
        length = exact_path_length(Network(nodes=tuple(nodes), edges=tuple(edges)))
    else:
        raise ValueError(f"Unknown path length mode '{path_length}'.")
    return NetworkMetrics(
        avg_path_length=length,
        avg_clustering_coef=clustering,
        small_world_index=small_world_index(clustering, length, n, k),
    )


def degree_histogram(nodes: Sequence[Node]) -> dict[int, int]:
    counts = Counter(node.degree for node in nodes)
    return dict(sorted(counts.items()))
