from .types import Edge, Network, Node, adjacency_matrix
from .watts_strogatz import (
    MAX_REWIRE_ATTEMPTS,
    WattsStrogatzParams,
    build,
    generate,
    ring_lattice,
)

__all__ = [
    "Edge",
    "Network",
    "Node",
    "adjacency_matrix",
    "MAX_REWIRE_ATTEMPTS",
    "WattsStrogatzParams",
    "build",
    "generate",
    "ring_lattice",
]
