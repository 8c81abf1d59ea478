import pytest

from johnson_apsp.graph import GraphModel


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("JOHNSON_LOG_DIR", str(tmp_path / "logs"))
    for name in ("JOHNSON_TRACE", "JOHNSON_WORKERS", "JOHNSON_LOG_STDOUT", "JOHNSON_LOG_MAX_BYTES", "JOHNSON_LOG_BACKUPS"):
        monkeypatch.delenv(name, raising=False)


def make_graph(n, edges):
    return GraphModel.build(n, len(edges), edges)


@pytest.fixture
def graph_a():
    # negative edge, no cycle
    return make_graph(4, [(1, 2, 1), (2, 3, 2), (2, 4, -3)])


@pytest.fixture
def graph_b():
    # potentials from the virtual source: {1: -1, 2: -3, 3: 0, 4: 0}
    return make_graph(4, [(3, 1, -1), (1, 2, -2), (2, 4, 4), (4, 3, 1)])


@pytest.fixture
def graph_cycle():
    # 1 -> 2 -> 3 -> 1 weighs -1; vertex 4 cannot reach the cycle
    return make_graph(4, [(1, 2, 1), (2, 3, -3), (3, 1, 1), (1, 4, 2)])


@pytest.fixture
def graph_d():
    # non-negative costs
    return make_graph(4, [(1, 2, 1), (2, 3, 5), (2, 4, 11), (3, 4, 7), (4, 2, 3), (4, 1, 2)])
