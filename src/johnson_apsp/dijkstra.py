from __future__ import annotations

from typing import Dict, Mapping, Optional

from .errors import SourceNotFound
from .graph import INF, VIRTUAL_SOURCE, GraphModel, Vertex
from .heap import IndexedMinHeap
from .logger import Observer, null_observer


def dijkstra(graph: GraphModel, source: Vertex, observer: Optional[Observer] = None) -> Dict[Vertex, float]:
    """Distances from ``source`` to every real vertex.

    Edge costs must be non-negative; this is not checked. A vertex's distance
    is final once it leaves the heap. Unreachable vertices keep INF.
    """
    if source is VIRTUAL_SOURCE or source not in graph:
        raise SourceNotFound(source)
    notify = observer or null_observer

    heap = IndexedMinHeap()
    for v in graph.vertices():
        heap.push(v, 0 if v == source else INF)

    dist: Dict[Vertex, float] = {}
    while heap:
        entry = heap.pop()
        v, d = entry.vertex, entry.score
        dist[v] = d
        notify("dijkstra_extract", source=source, vertex=v, distance=d)
        if d == INF:
            # everything left is unreachable
            continue
        for w, c in graph.out_edges(v):
            if w not in heap:
                continue
            candidate = d + c
            if candidate < heap.score(w):
                heap.decrease_key(w, candidate)
    return dist


def translate(distances: Mapping[Vertex, float], source: Vertex, potentials: Mapping[Vertex, float]) -> Dict[Vertex, float]:
    """Undo reweighting: d(s, v) - p(s) + p(v) for finite entries."""
    offset = potentials[source]
    return {
        v: (d if d == INF else d - offset + potentials[v])
        for v, d in distances.items()
    }
