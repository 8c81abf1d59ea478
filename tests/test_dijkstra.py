import pytest

from johnson_apsp.dijkstra import dijkstra, translate
from johnson_apsp.errors import SourceNotFound
from johnson_apsp.graph import INF, VIRTUAL_SOURCE

from conftest import make_graph


def test_shortest_path_lengths(graph_d):
    assert dijkstra(graph_d, 1) == {1: 0, 2: 1, 3: 6, 4: 12}


def test_shortest_path_lengths_other_source(graph_d):
    assert dijkstra(graph_d, 2) == {1: 13, 2: 0, 3: 5, 4: 11}
    assert dijkstra(graph_d, 4) == {1: 2, 2: 3, 3: 8, 4: 0}


def test_decrease_key_finds_longer_but_cheaper_path():
    g = make_graph(5, [(5, 1, 100), (5, 4, 10), (4, 2, 9), (2, 3, 11), (3, 1, 20), (4, 1, 50)])
    assert dijkstra(g, 5) == {1: 50, 2: 19, 3: 30, 4: 10, 5: 0}


def test_unreachable_vertices():
    g = make_graph(5, [(1, 2, 3), (3, 4, 1)])
    assert dijkstra(g, 1) == {1: 0, 2: 3, 3: INF, 4: INF, 5: INF}


def test_parallel_edges_use_last_cost():
    g = make_graph(2, [(1, 2, 9), (1, 2, 4)])
    assert dijkstra(g, 1) == {1: 0, 2: 4}


def test_unknown_source(graph_d):
    with pytest.raises(SourceNotFound):
        dijkstra(graph_d, 9)
    with pytest.raises(SourceNotFound):
        dijkstra(graph_d.add_virtual_source(), VIRTUAL_SOURCE)


def test_extraction_order_is_non_decreasing(graph_d):
    seen = []
    dijkstra(graph_d, 1, observer=lambda event, **f: seen.append(f["distance"]))
    assert seen == sorted(seen)
    assert len(seen) == 4


def test_translate_undoes_reweighting():
    pots = {1: -1, 2: -3, 3: 0, 4: 0}
    reweighted = {1: 0, 2: 0, 3: 2, 4: INF}
    assert translate(reweighted, 1, pots) == {1: 0, 2: -2, 3: 3, 4: INF}
