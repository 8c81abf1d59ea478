from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import GraphFormatError
from .graph import GraphModel


def _parse_ints(line: str, expected: int, lineno: int) -> List[int]:
    parts = line.split()
    if len(parts) != expected:
        raise GraphFormatError(f"expected {expected} integers, got {len(parts)}", lineno)
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise GraphFormatError(f"non-integer value in {line.strip()!r}", lineno) from None


def parse_graph_text(text: str) -> GraphModel:
    """Parse the adjacency-list format.

    First line: ``num_vertices num_edges``; then one ``tail head cost`` line per
    edge. Blank lines and ``#`` comments are ignored.
    """
    header: Optional[List[int]] = None
    edges: List[Tuple[int, int, int]] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        if header is None:
            header = _parse_ints(line, 2, lineno)
            continue
        tail, head, cost = _parse_ints(line, 3, lineno)
        edges.append((tail, head, cost))

    if header is None:
        raise GraphFormatError("missing 'num_vertices num_edges' header")
    num_vertices, num_edges = header
    return GraphModel.build(num_vertices, num_edges, edges)


def graph_from_payload(data: Dict[str, Any]) -> GraphModel:
    """Build a graph from ``{"num_vertices": n, "num_edges": m, "edges": [[t, h, c], ...]}``.

    ``num_edges`` is optional and defaults to the number of edges given.
    """
    if not isinstance(data, dict):
        raise GraphFormatError("graph payload must be a JSON object")
    edges = data.get("edges", [])
    if not isinstance(edges, list):
        raise GraphFormatError("edges must be a list of [tail, head, cost] triples")
    triples = []
    for e in edges:
        if not isinstance(e, (list, tuple)) or len(e) != 3:
            raise GraphFormatError(f"edge {e!r} is not a [tail, head, cost] triple")
        triples.append(tuple(e))
    num_vertices = data.get("num_vertices")
    num_edges = data.get("num_edges", len(triples))
    return GraphModel.build(num_vertices, num_edges, triples)  # type: ignore[arg-type]


def load_graph(path: Union[str, Path]) -> GraphModel:
    p = Path(path)
    with open(p, "rb") as f:
        raw = f.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"not valid UTF-8: {exc}") from exc
    if p.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise GraphFormatError(f"invalid JSON: {exc.msg}", exc.lineno) from exc
        return graph_from_payload(data)
    return parse_graph_text(text)
