from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from multiprocessing import Pool
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .bellman_ford import potentials as compute_potentials
from .dijkstra import dijkstra, translate
from .errors import MalformedInput, NegativeCycleDetected
from .graph import INF, GraphModel, Vertex
from .loader import load_graph
from .logger import Observer, null_observer


DistanceTable = Dict[Vertex, float]
AllPairs = Dict[Vertex, DistanceTable]


def _solve_source(source: Vertex, graph: GraphModel, potentials: Mapping[Vertex, float]) -> Tuple[Vertex, DistanceTable]:
    return source, translate(dijkstra(graph, source), source, potentials)


def johnson(graph: GraphModel, observer: Optional[Observer] = None, workers: int = 1) -> AllPairs:
    """All-pairs shortest paths: ``result[s][v]`` is the true distance from s to v.

    Raises NegativeCycleDetected (source is the virtual source) when the graph
    has a negative cycle; no Dijkstra run is attempted in that case.

    With ``workers > 1`` the per-source Dijkstra runs go to a process pool. They
    only read the reweighted model, so no coordination is needed beyond
    collecting the rows. The observer then sees one event per finished source
    instead of per-extraction events.
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")
    notify = observer or null_observer

    pots = compute_potentials(graph, observer)
    notify("johnson_potentials", potentials=pots)
    reweighted = graph.reweight(pots)

    sources = list(graph.vertices())
    table: AllPairs = {}
    if workers == 1 or len(sources) < 2:
        for s in sources:
            table[s] = translate(dijkstra(reweighted, s, observer), s, pots)
            notify("johnson_source_done", source=s)
    else:
        task = partial(_solve_source, graph=reweighted, potentials=pots)
        with Pool(min(workers, len(sources))) as p:
            for s, row in p.imap_unordered(task, sources):
                table[s] = row
                notify("johnson_source_done", source=s)
        table = {s: table[s] for s in sources}
    return table


def shortest_distance(table: Mapping[Vertex, Mapping[Vertex, float]]) -> Optional[float]:
    """Minimum finite distance over all ordered pairs (s, v) with s != v."""
    best: Optional[float] = None
    for s, row in table.items():
        for v, d in row.items():
            if v == s or d == INF:
                continue
            if best is None or d < best:
                best = d
    return best


@dataclass
class GraphResult:
    name: str
    ok: bool
    negative_cycle: bool = False
    shortest: Optional[float] = None
    distances: Optional[AllPairs] = None
    reason: str = ""


@dataclass
class BatchResult:
    graphs: List[GraphResult] = field(default_factory=list)

    @property
    def shortest(self) -> Optional[float]:
        values = [g.shortest for g in self.graphs if g.ok and g.shortest is not None]
        return min(values) if values else None

    @property
    def negative_cycles(self) -> List[str]:
        return [g.name for g in self.graphs if g.negative_cycle]


def solve_graph(
    name: str,
    graph: GraphModel,
    observer: Optional[Observer] = None,
    workers: int = 1,
    keep_distances: bool = True,
) -> GraphResult:
    """Run Johnson on one graph, reporting a negative cycle as a result instead of raising."""
    notify = observer or null_observer
    try:
        table = johnson(graph, observer, workers=workers)
    except NegativeCycleDetected as exc:
        exc.name = name
        notify("graph_negative_cycle", graph=name, source=exc.source)
        return GraphResult(name, ok=False, negative_cycle=True, reason=f"negative cycle detected in {name}")
    return GraphResult(
        name,
        ok=True,
        shortest=shortest_distance(table),
        distances=table if keep_distances else None,
        reason="ok",
    )


def solve_batch(
    paths: Iterable[str],
    observer: Optional[Observer] = None,
    workers: int = 1,
) -> BatchResult:
    """Solve every graph file; malformed files and negative cycles are recorded, not raised."""
    notify = observer or null_observer
    batch = BatchResult()
    for path in paths:
        try:
            graph = load_graph(path)
        except (MalformedInput, OSError) as exc:
            notify("graph_load_failed", graph=str(path), error=str(exc))
            batch.graphs.append(GraphResult(str(path), ok=False, reason=f"load failed: {exc}"))
            continue
        result = solve_graph(str(path), graph, observer, workers=workers, keep_distances=False)
        batch.graphs.append(result)
    return batch


def render_table(table: Mapping[Vertex, Mapping[Vertex, float]]) -> Dict[str, Dict[str, Optional[float]]]:
    """JSON-friendly copy of a distance table: string keys, None for unreachable."""
    return {
        str(s): {str(v): (None if d == INF else d) for v, d in row.items()}
        for s, row in table.items()
    }
