import logging
import math

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .types import Edge, Network, Node

logger = logging.getLogger(__name__)

MAX_REWIRE_ATTEMPTS = 50


class WattsStrogatzParams(BaseModel):
    model_config = ConfigDict(extra="forbid")
    n: int = Field(30, ge=3)
    k: int = Field(4, ge=2)
    p: float = Field(0.0, ge=0.0, le=1.0)
    seed: int | None = None

    @model_validator(mode="after")
    def _check_lattice(self):
        if self.k >= self.n:
            raise ValueError("watts_strogatz requires k < n")
        if self.k % 2 != 0:
            raise ValueError("watts_strogatz requires even k")
        return self


def _pair(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


def ring_lattice(n: int, k: int) -> tuple[list[Edge], np.ndarray]:
    edges: list[Edge] = []
    degree = np.zeros(n, dtype=np.int64)
    for i in range(n):
        for j in range(1, k // 2 + 1):
            target = (i + j) % n
            edges.append(Edge(source=i, target=target, original=True))
            degree[i] += 1
            degree[target] += 1
    return edges, degree


def _rewire(
    lattice: list[Edge],
    degree: np.ndarray,
    p: float,
    rng: np.random.Generator,
) -> tuple[list[Edge], int, int]:
    n = degree.size
    # Unordered pairs of the edge set as it stands while edges are processed.
    present = {_pair(e.source, e.target) for e in lattice}
    out: list[Edge] = []
    rewired = 0
    exhausted = 0

    for edge in lattice:
        if rng.random() >= p:
            out.append(edge)
            continue

        new_target = None
        for _ in range(MAX_REWIRE_ATTEMPTS):
            candidate = int(rng.integers(0, n))
            if candidate == edge.source:
                continue
            if _pair(edge.source, candidate) in present:
                continue
            new_target = candidate
            break

        if new_target is None:
            exhausted += 1
            logger.debug(
                "Rewire exhausted for edge (%d, %d) after %d attempts; keeping it",
                edge.source,
                edge.target,
                MAX_REWIRE_ATTEMPTS,
            )
            out.append(edge)
            continue

        present.discard(_pair(edge.source, edge.target))
        present.add(_pair(edge.source, new_target))
        degree[edge.target] -= 1
        degree[new_target] += 1
        out.append(Edge(source=edge.source, target=new_target, original=False))
        rewired += 1

    return out, rewired, exhausted


def build(p: WattsStrogatzParams, rng: np.random.Generator | None = None) -> Network:
    if rng is None:
        rng = np.random.default_rng(p.seed)
    edges, degree = ring_lattice(p.n, p.k)
    rewired = exhausted = 0
    if p.p > 0:
        edges, rewired, exhausted = _rewire(edges, degree, p.p, rng)

    nodes = tuple(
        Node(id=i, angle=i * 2 * math.pi / p.n, degree=int(degree[i]))
        for i in range(p.n)
    )
    return Network(
        nodes=nodes,
        edges=tuple(edges),
        rewired_count=rewired,
        exhausted_count=exhausted,
    )


def generate(
    n: int,
    k: int,
    p: float,
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> Network:
    params = WattsStrogatzParams(n=n, k=k, p=p, seed=seed)
    return build(params, rng)
