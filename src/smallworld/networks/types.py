from dataclasses import asdict, dataclass

import networkx as nx
import numpy as np
from scipy import sparse


@dataclass(frozen=True)
class Node:
    id: int
    angle: float
    degree: int


@dataclass(frozen=True)
class Edge:
    source: int
    target: int
    original: bool = True


def adjacency_matrix(n: int, edges) -> sparse.csr_matrix:
    """Symmetric 0/1 adjacency; either orientation of a pair counts once."""
    rows = [e.source for e in edges if e.source != e.target]
    cols = [e.target for e in edges if e.source != e.target]
    data = np.ones(len(rows), dtype=np.int64)
    A = sparse.csr_matrix((data, (rows, cols)), shape=(n, n))
    A = (A + A.T).tocsr()
    A.data[:] = 1
    return A


@dataclass(frozen=True)
class Network:
    """Result of one generation run.

    ``rewired_count`` is the number of edges that received a new target and
    ``exhausted_count`` the number of rewiring draws that ran out of retries
    and kept their lattice target.
    """

    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]
    rewired_count: int = 0
    exhausted_count: int = 0

    @property
    def n(self) -> int:
        return len(self.nodes)

    def adjacency(self) -> sparse.csr_matrix:
        return adjacency_matrix(self.n, self.edges)

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        for node in self.nodes:
            G.add_node(node.id, angle=node.angle)
        for edge in self.edges:
            G.add_edge(edge.source, edge.target, original=edge.original)
        return G

    def to_dict(self) -> dict:
        return {
            "nodes": [asdict(node) for node in self.nodes],
            "edges": [asdict(edge) for edge in self.edges],
            "rewired_count": self.rewired_count,
            "exhausted_count": self.exhausted_count,
        }
