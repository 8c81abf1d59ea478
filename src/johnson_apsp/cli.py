from __future__ import annotations

import argparse
from typing import List, Optional

from .bellman_ford import potentials
from .config import Settings, load_settings
from .errors import MalformedInput, NegativeCycleDetected, SourceNotFound
from .graph import INF
from .johnson import johnson, render_table, shortest_distance, solve_batch
from .loader import load_graph
from .logger import Observer, log_event


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="johnson-apsp", description="All-pairs shortest paths with Johnson's algorithm")
    sub = p.add_subparsers(dest="cmd", required=True)

    apsp = sub.add_parser("apsp", help="Shortest paths between every pair of vertices of one graph")
    apsp.add_argument("path", help="Graph file (adjacency list or .json)")
    apsp.add_argument("--source", type=int, help="Only report distances from this vertex")
    _add_run_options(apsp)

    shortest = sub.add_parser("shortest", help="Shortest shortest path (over distinct vertex pairs) across one or more graph files")
    shortest.add_argument("paths", nargs="+", help="Graph files")
    _add_run_options(shortest)

    pots = sub.add_parser("potentials", help="Bellman-Ford potentials from the virtual source")
    pots.add_argument("path", help="Graph file")
    pots.add_argument("--trace", action="store_true", default=None, help="Log every Bellman-Ford iteration")

    return p


def _add_run_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--workers", type=int, default=None, help="Processes for the per-source Dijkstra runs")
    p.add_argument("--trace", action="store_true", default=None, help="Log engine iterations")


def _observer(args: argparse.Namespace, settings: Settings) -> Optional[Observer]:
    trace = settings.trace if args.trace is None else args.trace
    return log_event if trace else None


def _workers(args: argparse.Namespace, settings: Settings) -> int:
    workers = settings.workers if args.workers is None else args.workers
    if workers < 1:
        raise SystemExit("--workers must be >= 1")
    return workers


def cmd_apsp(args: argparse.Namespace, settings: Settings) -> int:
    try:
        graph = load_graph(args.path)
    except (MalformedInput, OSError) as exc:
        log_event("error", action="load_graph", path=args.path, error=str(exc))
        return 2
    if args.source is not None and args.source not in graph:
        log_event("error", action="apsp", path=args.path, error=str(SourceNotFound(args.source)))
        return 2
    try:
        table = johnson(graph, _observer(args, settings), workers=_workers(args, settings))
    except NegativeCycleDetected:
        log_event("apsp", path=args.path, ok=False, negative_cycle=True, reason="negative cycle detected")
        return 2

    if args.source is not None:
        table = {args.source: table[args.source]}
    log_event("apsp", path=args.path, ok=True, negative_cycle=False,
              shortest=shortest_distance(table), distances=render_table(table))
    return 0


def cmd_shortest(args: argparse.Namespace, settings: Settings) -> int:
    batch = solve_batch(args.paths, _observer(args, settings), workers=_workers(args, settings))
    for g in batch.graphs:
        log_event("graph_result", graph=g.name, ok=g.ok, negative_cycle=g.negative_cycle,
                  shortest=g.shortest, reason=g.reason)
    log_event("batch_result", shortest=batch.shortest, graphs=len(batch.graphs),
              negative_cycles=batch.negative_cycles)
    return 0 if batch.shortest is not None else 2


def cmd_potentials(args: argparse.Namespace, settings: Settings) -> int:
    try:
        graph = load_graph(args.path)
    except (MalformedInput, OSError) as exc:
        log_event("error", action="load_graph", path=args.path, error=str(exc))
        return 2
    try:
        pots = potentials(graph, _observer(args, settings))
    except NegativeCycleDetected:
        log_event("potentials", path=args.path, ok=False, negative_cycle=True)
        return 2
    log_event("potentials", path=args.path, ok=True, negative_cycle=False,
              potentials={str(v): (None if p == INF else p) for v, p in pots.items()})
    return 0


def main(argv: List[str] | None = None) -> int:
    p = build_arg_parser()
    args = p.parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as exc:
        log_event("error", action="load_settings", error=str(exc))
        return 2
    if args.cmd == "apsp":
        return cmd_apsp(args, settings)
    if args.cmd == "shortest":
        return cmd_shortest(args, settings)
    if args.cmd == "potentials":
        return cmd_potentials(args, settings)
    return 0

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
