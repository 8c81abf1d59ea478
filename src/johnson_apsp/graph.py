from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import MalformedInput


INF = float("inf")


class VirtualSource:
    """Auxiliary vertex with a zero-cost edge to every real vertex.

    There is exactly one instance, ``VIRTUAL_SOURCE``. It is not an integer, so
    it can never be mistaken for a real vertex id.
    """

    _instance: Optional["VirtualSource"] = None

    def __new__(cls) -> "VirtualSource":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "VIRTUAL_SOURCE"


VIRTUAL_SOURCE = VirtualSource()

Vertex = Union[int, VirtualSource]


@dataclass(frozen=True)
class Edge:
    tail: Vertex
    head: Vertex


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class GraphModel:
    """Directed graph with integer edge costs over vertices ``1..num_vertices``.

    - forward: tail -> heads, in input order; a pair listed twice appears twice
    - reverse: head -> tails, always the exact inverse of forward
    - cost: Edge -> cost; the last cost given for an ordered pair wins

    Instances are treated as immutable once built: ``add_virtual_source`` and
    ``reweight`` return new models.
    """

    def __init__(self, num_vertices: int):
        self.num_vertices = num_vertices
        self.has_virtual_source = False
        self._forward: Dict[Vertex, List[Vertex]] = {}
        self._reverse: Dict[Vertex, List[Vertex]] = {}
        self._cost: Dict[Edge, int] = {}

    @classmethod
    def build(cls, num_vertices: int, num_edges: int, edges: Iterable[Tuple[int, int, int]]) -> "GraphModel":
        if not _is_int(num_vertices) or num_vertices < 1:
            raise MalformedInput(f"num_vertices must be a positive integer, got {num_vertices!r}")
        if not _is_int(num_edges) or num_edges < 0:
            raise MalformedInput(f"num_edges must be a non-negative integer, got {num_edges!r}")

        graph = cls(num_vertices)
        supplied = 0
        for triple in edges:
            try:
                tail, head, cost = triple
            except (TypeError, ValueError):
                raise MalformedInput(f"edge {triple!r} is not a (tail, head, cost) triple") from None
            if not (_is_int(tail) and _is_int(head) and _is_int(cost)):
                raise MalformedInput(f"edge {triple!r} must contain integers only")
            for v in (tail, head):
                if not 1 <= v <= num_vertices:
                    raise MalformedInput(f"edge ({tail}, {head}) references vertex {v} outside 1..{num_vertices}")
            graph._add_edge(tail, head, cost)
            supplied += 1

        if supplied != num_edges:
            raise MalformedInput(f"declared {num_edges} edges but {supplied} were supplied")
        return graph

    def _add_edge(self, tail: Vertex, head: Vertex, cost: int) -> None:
        # forward and reverse are only ever extended together
        self._forward.setdefault(tail, []).append(head)
        self._reverse.setdefault(head, []).append(tail)
        self._cost[Edge(tail, head)] = cost

    def _copy_structure(self) -> "GraphModel":
        clone = GraphModel(self.num_vertices)
        clone.has_virtual_source = self.has_virtual_source
        clone._forward = {t: list(hs) for t, hs in self._forward.items()}
        clone._reverse = {h: list(ts) for h, ts in self._reverse.items()}
        clone._cost = dict(self._cost)
        return clone

    # ------------------------------------------------------------------ views

    def vertices(self) -> range:
        """Real vertices, ``1..num_vertices``."""
        return range(1, self.num_vertices + 1)

    def all_vertices(self) -> List[Vertex]:
        """Real vertices plus the virtual source when present."""
        head: List[Vertex] = [VIRTUAL_SOURCE] if self.has_virtual_source else []
        return head + list(self.vertices())

    def __contains__(self, vertex: object) -> bool:
        if vertex is VIRTUAL_SOURCE:
            return self.has_virtual_source
        return _is_int(vertex) and 1 <= vertex <= self.num_vertices  # type: ignore[operator]

    def cost(self, tail: Vertex, head: Vertex) -> int:
        return self._cost[Edge(tail, head)]

    def heads(self, tail: Vertex) -> List[Vertex]:
        return list(self._forward.get(tail, ()))

    def tails(self, head: Vertex) -> List[Vertex]:
        return list(self._reverse.get(head, ()))

    def out_edges(self, tail: Vertex) -> Iterator[Tuple[Vertex, int]]:
        for head in self._forward.get(tail, ()):
            yield head, self._cost[Edge(tail, head)]

    def in_edges(self, head: Vertex) -> Iterator[Tuple[Vertex, int]]:
        for tail in self._reverse.get(head, ()):
            yield tail, self._cost[Edge(tail, head)]

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Real edges as (tail, head, cost); virtual-source edges are skipped."""
        for tail, heads in self._forward.items():
            if tail is VIRTUAL_SOURCE:
                continue
            for head in heads:
                yield tail, head, self._cost[Edge(tail, head)]  # type: ignore[misc]

    @property
    def num_edges(self) -> int:
        return sum(1 for _ in self.edges())

    # ------------------------------------------------------------- transforms

    def add_virtual_source(self) -> "GraphModel":
        """Return a copy with ``VIRTUAL_SOURCE`` and a zero-cost edge to every real vertex."""
        if self.has_virtual_source:
            raise ValueError("graph already has a virtual source")
        augmented = self._copy_structure()
        augmented.has_virtual_source = True
        for v in self.vertices():
            augmented._add_edge(VIRTUAL_SOURCE, v, 0)
        return augmented

    def reweight(self, potentials: Mapping[Vertex, int]) -> "GraphModel":
        """Return a new model, without the virtual source, costed ``c(u,v) + p(u) - p(v)``.

        Only meaningful when ``potentials`` come from a Bellman-Ford run from the
        virtual source that found no negative cycle.
        """
        missing = [v for v in self.vertices() if v not in potentials]
        if missing:
            raise ValueError(f"missing potentials for vertices {missing[:10]}")
        reweighted = GraphModel(self.num_vertices)
        for tail, head, cost in self.edges():
            reweighted._add_edge(tail, head, cost + potentials[tail] - potentials[head])
        return reweighted

    def __repr__(self) -> str:
        extra = ", virtual source" if self.has_virtual_source else ""
        return f"GraphModel(num_vertices={self.num_vertices}, num_edges={self.num_edges}{extra})"
