from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .errors import NegativeCycleDetected, SourceNotFound
from .graph import INF, VIRTUAL_SOURCE, GraphModel, Vertex
from .logger import Observer, null_observer


Row = Dict[Vertex, float]


def _relax(graph: GraphModel, vertices: List[Vertex], prev: Row) -> Tuple[Row, int]:
    """One DP step: A[i][v] = min(A[i-1][v], min over (u,v) of A[i-1][u] + c(u,v)).

    Returns the new row and how many labels strictly improved.
    """
    row = dict(prev)
    updated = 0
    for v in vertices:
        best = prev[v]
        for u, c in graph.in_edges(v):
            du = prev[u]
            if du == INF:
                continue
            candidate = du + c
            if candidate < best:
                best = candidate
        if best < prev[v]:
            row[v] = best
            updated += 1
    return row, updated


def bellman_ford(graph: GraphModel, source: Vertex, observer: Optional[Observer] = None) -> Dict[Vertex, float]:
    """Shortest-path labels from ``source`` over at most ``n - 1`` edges.

    ``n`` counts every vertex of the model, the virtual source included. After
    the last row an extra probe pass is made; any label it still improves means
    a negative cycle is reachable from ``source`` and NegativeCycleDetected is
    raised. Labels are returned for the real vertices only; unreachable
    vertices keep INF.
    """
    if source not in graph:
        raise SourceNotFound(source)
    notify = observer or null_observer

    vertices = graph.all_vertices()
    n = len(vertices)
    row: Row = {v: INF for v in vertices}
    row[source] = 0

    stable = False
    for i in range(1, n):
        row_next, updated = _relax(graph, vertices, row)
        notify("bellman_ford_iteration", source=source, iteration=i, updated=updated)
        row = row_next
        if updated == 0:
            # every later row equals this one, so the probe cannot improve anything
            stable = True
            break

    if not stable:
        _, improved = _relax(graph, vertices, row)
        if improved:
            notify("bellman_ford_negative_cycle", source=source, improved=improved)
            raise NegativeCycleDetected(source)

    notify("bellman_ford_done", source=source, rows=n)
    return {v: row[v] for v in graph.vertices()}


def potentials(graph: GraphModel, observer: Optional[Observer] = None) -> Dict[Vertex, float]:
    """Vertex potentials: Bellman-Ford labels from the virtual source.

    Every real vertex is reachable from the virtual source, so every potential
    is finite and at most 0.
    """
    augmented = graph if graph.has_virtual_source else graph.add_virtual_source()
    return bellman_ford(augmented, VIRTUAL_SOURCE, observer)
