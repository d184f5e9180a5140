from .clustering import average_clustering, local_clustering
from .path_length import approximate_path_length, exact_path_length, random_path_length
from .small_world import (
    METRIC_FIELDS,
    MetricsParams,
    NetworkMetrics,
    compute_metrics,
    degree_histogram,
    random_clustering,
    small_world_index,
)

__all__ = [
    "average_clustering",
    "local_clustering",
    "approximate_path_length",
    "exact_path_length",
    "random_path_length",
    "METRIC_FIELDS",
    "MetricsParams",
    "NetworkMetrics",
    "compute_metrics",
    "degree_histogram",
    "random_clustering",
    "small_world_index",
]
