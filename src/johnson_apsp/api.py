from __future__ import annotations

import os
import platform
import uuid
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from .bellman_ford import potentials
from .errors import MalformedInput, NegativeCycleDetected
from .johnson import johnson, render_table, shortest_distance
from .loader import graph_from_payload
from .logger import log_event


APP_VERSION = "0.1.0"
RUN_ID = os.environ.get("JOHNSON_RUN_ID", str(uuid.uuid4()))
app = FastAPI(title="Johnson APSP API", version=APP_VERSION)

# Summary of the last computation, reported by /api/status
LAST_RESULT: Dict[str, Any] | None = None


class GraphPayload(BaseModel):
    num_vertices: int
    num_edges: Optional[int] = None
    edges: List[List[int]] = []
    source: Optional[int] = None


class ApspResponse(BaseModel):
    ok: bool
    negative_cycle: bool
    reason: str
    shortest: Optional[int] = None
    distances: Optional[Dict[str, Dict[str, Optional[int]]]] = None


class PotentialsResponse(BaseModel):
    ok: bool
    negative_cycle: bool
    potentials: Optional[Dict[str, int]] = None


def _build(payload: GraphPayload):
    data = payload.model_dump(exclude_none=True)
    data.pop("source", None)
    try:
        return graph_from_payload(data)
    except MalformedInput as exc:
        log_event("api_error", error=str(exc))
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/api/apsp", response_model=ApspResponse)
def api_apsp(payload: GraphPayload):
    global LAST_RESULT
    graph = _build(payload)
    if payload.source is not None and payload.source not in graph:
        raise HTTPException(status_code=404, detail=f"source vertex {payload.source} not in graph")

    try:
        table = johnson(graph)
    except NegativeCycleDetected:
        log_event("api_apsp", ok=False, negative_cycle=True, num_vertices=graph.num_vertices)
        LAST_RESULT = {"ok": False, "negative_cycle": True, "num_vertices": graph.num_vertices, "num_edges": graph.num_edges}
        return ApspResponse(ok=False, negative_cycle=True, reason="negative cycle detected")

    if payload.source is not None:
        table = {payload.source: table[payload.source]}
    shortest = shortest_distance(table)
    log_event("api_apsp", ok=True, negative_cycle=False, num_vertices=graph.num_vertices, shortest=shortest)
    LAST_RESULT = {"ok": True, "negative_cycle": False, "shortest": shortest,
                   "num_vertices": graph.num_vertices, "num_edges": graph.num_edges, "source": payload.source}
    return ApspResponse(ok=True, negative_cycle=False, reason="ok", shortest=shortest, distances=render_table(table))


@app.post("/api/potentials", response_model=PotentialsResponse)
def api_potentials(payload: GraphPayload):
    graph = _build(payload)
    try:
        pots = potentials(graph)
    except NegativeCycleDetected:
        log_event("api_potentials", ok=False, negative_cycle=True)
        return PotentialsResponse(ok=False, negative_cycle=True)
    log_event("api_potentials", ok=True, negative_cycle=False)
    return PotentialsResponse(ok=True, negative_cycle=False, potentials={str(v): p for v, p in pots.items()})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    req_id = str(uuid.uuid4())
    log_event("http_request", method=request.method, path=request.url.path, request_id=req_id, run_id=RUN_ID)
    response = await call_next(request)
    response.headers["X-Request-Id"] = req_id
    response.headers["X-Run-Id"] = RUN_ID
    log_event("http_response", path=request.url.path, status=response.status_code, request_id=req_id, run_id=RUN_ID)
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/status")
def status():
    info: Dict[str, Any] = {
        "status": "ok",
        "version": APP_VERSION,
        "run_id": RUN_ID,
        "python": platform.python_version(),
    }
    if LAST_RESULT is not None:
        info["last_result"] = LAST_RESULT
    return info
