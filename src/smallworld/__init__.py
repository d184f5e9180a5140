from smallworld.metrics import NetworkMetrics, compute_metrics, degree_histogram
from smallworld.networks import Edge, Network, Node, WattsStrogatzParams, generate
from smallworld.utils.steps import analyze

__all__ = [
    "Edge",
    "Network",
    "NetworkMetrics",
    "Node",
    "WattsStrogatzParams",
    "analyze",
    "compute_metrics",
    "degree_histogram",
    "generate",
]
