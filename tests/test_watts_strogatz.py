import math

import numpy as np
import pytest
from pydantic import ValidationError

from smallworld.networks import (
    Edge,
    Network,
    Node,
    WattsStrogatzParams,
    adjacency_matrix,
    build,
    generate,
    ring_lattice,
)


def _pairs(network: Network) -> list[tuple[int, int]]:
    return [tuple(sorted((e.source, e.target))) for e in network.edges]


def _assert_simple_graph(network: Network, n: int, k: int) -> None:
    assert [node.id for node in network.nodes] == list(range(n))
    assert len(network.edges) == n * k // 2
    assert all(e.source != e.target for e in network.edges)
    pairs = _pairs(network)
    assert len(set(pairs)) == len(pairs)
    assert sum(node.degree for node in network.nodes) == 2 * len(network.edges)


class TestRingLattice:
    def test_lattice_edges_in_source_major_order(self):
        edges, degree = ring_lattice(6, 4)
        assert [(e.source, e.target) for e in edges] == [
            (0, 1), (0, 2), (1, 2), (1, 3), (2, 3), (2, 4),
            (3, 4), (3, 5), (4, 5), (4, 0), (5, 0), (5, 1),
        ]
        assert degree.tolist() == [4] * 6

    @pytest.mark.parametrize("n,k", [(3, 2), (10, 2), (30, 4), (31, 6), (100, 10)])
    def test_p_zero_keeps_the_lattice(self, n, k):
        network = generate(n, k, 0.0, seed=1)
        _assert_simple_graph(network, n, k)
        assert all(node.degree == k for node in network.nodes)
        assert all(e.original for e in network.edges)
        assert network.rewired_count == 0
        assert network.exhausted_count == 0

    def test_node_angles(self):
        network = generate(30, 4, 0.0)
        for node in network.nodes:
            assert node.angle == pytest.approx(node.id * 2 * math.pi / 30)


class TestRewiring:
    @pytest.mark.parametrize("seed", range(25))
    def test_full_rewiring_keeps_a_simple_graph(self, seed):
        network = generate(30, 4, 1.0, seed=seed)
        _assert_simple_graph(network, 30, 4)

    @pytest.mark.parametrize("p", [0.05, 0.2, 0.5, 0.9])
    def test_edge_count_and_degree_sum_are_preserved(self, p):
        for seed in range(5):
            network = generate(40, 6, p, seed=seed)
            _assert_simple_graph(network, 40, 6)

    def test_rewired_edges_are_flagged(self):
        network = generate(30, 4, 1.0, seed=3)
        rewired = [e for e in network.edges if not e.original]
        assert len(rewired) == network.rewired_count
        assert network.rewired_count + network.exhausted_count == len(network.edges)

    def test_sources_keep_lattice_order(self):
        network = generate(30, 4, 0.6, seed=11)
        assert [e.source for e in network.edges] == [i for i in range(30) for _ in range(2)]

    def test_complete_lattice_exhausts_every_rewire(self):
        # n=5, k=4 is already the complete graph: no valid new target exists.
        network = generate(5, 4, 1.0, seed=0)
        assert network.exhausted_count == 10
        assert network.rewired_count == 0
        assert all(e.original for e in network.edges)
        assert all(node.degree == 4 for node in network.nodes)

    def test_same_seed_is_reproducible(self):
        a = generate(30, 4, 0.3, seed=42)
        b = generate(30, 4, 0.3, seed=42)
        assert a == b

    def test_injected_rng_matches_seed(self):
        a = generate(30, 4, 0.3, seed=7)
        b = generate(30, 4, 0.3, rng=np.random.default_rng(7))
        assert a == b

    def test_different_seeds_differ(self):
        a = generate(30, 4, 0.5, seed=1)
        b = generate(30, 4, 0.5, seed=2)
        assert a.edges != b.edges

    def test_build_uses_params_seed(self):
        params = WattsStrogatzParams(n=20, k=4, p=0.4, seed=5)
        assert build(params) == build(params)


class TestParams:
    @pytest.mark.parametrize(
        "n,k,p",
        [
            (4, 4, 0.1),   # k == n
            (4, 6, 0.1),   # k > n
            (30, 0, 0.1),
            (30, 1, 0.1),
            (30, 3, 0.1),  # odd k
            (30, 4, -0.1),
            (30, 4, 1.5),
        ],
    )
    def test_invalid_parameters_are_rejected(self, n, k, p):
        with pytest.raises(ValidationError):
            generate(n, k, p)

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            WattsStrogatzParams(n=10, k=5)

    def test_unknown_fields_are_forbidden(self):
        with pytest.raises(ValidationError):
            WattsStrogatzParams.model_validate({"n": 10, "k": 4, "beta": 0.2})


class TestExports:
    def test_adjacency_is_symmetric(self):
        network = generate(30, 4, 0.4, seed=9)
        A = network.adjacency()
        assert A.shape == (30, 30)
        assert (A != A.T).nnz == 0
        degrees = np.asarray(A.sum(axis=1)).ravel()
        assert degrees.tolist() == [node.degree for node in network.nodes]

    def test_to_networkx(self):
        network = generate(30, 4, 0.4, seed=9)
        G = network.to_networkx()
        assert G.number_of_nodes() == 30
        assert G.number_of_edges() == 60
        assert dict(G.degree()) == {node.id: node.degree for node in network.nodes}
        flags = [G.edges[e.source, e.target]["original"] for e in network.edges]
        assert flags == [e.original for e in network.edges]

    def test_to_dict(self):
        doc = generate(6, 2, 0.0).to_dict()
        assert doc["nodes"][1] == {"id": 1, "angle": pytest.approx(math.pi / 3), "degree": 2}
        assert doc["edges"][0] == {"source": 0, "target": 1, "original": True}
        assert doc["exhausted_count"] == 0


def test_adjacency_counts_each_pair_once():
    nodes = tuple(Node(id=i, angle=0.0, degree=0) for i in range(3))
    edges = (Edge(0, 1), Edge(1, 0), Edge(1, 2))
    A = Network(nodes=nodes, edges=edges).adjacency()
    assert A.toarray().tolist() == [[0, 1, 0], [1, 0, 1], [0, 1, 0]]
    assert (A != adjacency_matrix(3, edges)).nnz == 0
