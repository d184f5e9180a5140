from typing import Sequence

import numpy as np

from smallworld.networks.types import Edge, Node, adjacency_matrix


def local_clustering(nodes: Sequence[Node], edges: Sequence[Edge]) -> np.ndarray:
    """Local clustering coefficient of every node, indexed by node id.

    Nodes with fewer than two neighbours get 0.
    """
    n = len(nodes)
    if n == 0:
        return np.zeros(0, dtype=float)
    A = adjacency_matrix(n, edges)
    deg = np.asarray(A.sum(axis=1)).ravel().astype(float)
    # Each connected neighbour pair closes a triangle: diag(A^3) / 2.
    links = np.asarray((A @ A).multiply(A).sum(axis=1)).ravel() / 2.0
    pairs = deg * (deg - 1.0) / 2.0
    out = np.zeros(n, dtype=float)
    mask = deg >= 2
    out[mask] = links[mask] / pairs[mask]
    return out


def average_clustering(nodes: Sequence[Node], edges: Sequence[Edge]) -> float:
    if not nodes:
        return 0.0
    return float(local_clustering(nodes, edges).mean())
