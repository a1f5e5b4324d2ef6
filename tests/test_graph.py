import json
from glenn2vcf import Graph, NodeTraversal, reverse_complement
from glenn2vcf.exceptions import GraphFormatError
import pytest


def simple_graph():
    return Graph.from_dicts(
        {1: "ACTG", 2: "A", 3: "G", 4: "AAAT"},
        {1: [2, 3],
         2: [4],
         3: [4]},
        [1, 2, 4]
    )


def test_reverse_complement_twice_is_identity():
    sequence = "ACCTGANNGT"
    assert reverse_complement(sequence) == "ACNNTCAGGT"
    assert reverse_complement(reverse_complement(sequence)) == sequence


def test_forward_edges():
    graph = simple_graph()
    assert set(graph.nodes_next(NodeTraversal(1))) == {NodeTraversal(2), NodeTraversal(3)}
    assert graph.nodes_prev(NodeTraversal(4)) == [NodeTraversal(2), NodeTraversal(3)]
    assert graph.nodes_next(NodeTraversal(4)) == []


def test_edges_seen_from_reverse_traversals():
    graph = simple_graph()
    # reading node 4 backward we leave through its start, into nodes 2 and 3 backward
    assert graph.nodes_next(NodeTraversal(4, True)) == [NodeTraversal(2, True), NodeTraversal(3, True)]
    assert graph.nodes_prev(NodeTraversal(1, True)) == [NodeTraversal(2, True), NodeTraversal(3, True)]


def test_reversing_edge():
    # end of 1 joined to end of 2
    graph = Graph.from_dicts({1: "AC", 2: "GT"}, {1: [(2, False, True)]})
    assert graph.nodes_next(NodeTraversal(1)) == [NodeTraversal(2, True)]
    assert graph.nodes_prev(NodeTraversal(2)) == []
    assert graph.nodes_next(NodeTraversal(2)) == [NodeTraversal(1, True)]


def test_traversal_sequence():
    graph = simple_graph()
    assert graph.get_traversal_sequence(NodeTraversal(1)) == "ACTG"
    assert graph.get_traversal_sequence(NodeTraversal(1, True)) == "CAGT"


def test_from_vg_json(tmp_path):
    data = {
        "node": [{"id": "1", "sequence": "ACT"}, {"id": "2", "sequence": "G"}, {"id": "3", "sequence": "TT"}],
        "edge": [{"from": "1", "to": "2"}, {"from": "2", "to": "3", "to_end": True}],
        "path": [{"name": "ref", "mapping": [
            {"position": {"node_id": "1"}, "edit": [{"from_length": 3, "to_length": 3}]},
            {"position": {"node_id": "2"}},
            {"position": {"node_id": "3", "is_reverse": True}},
        ]}]
    }
    file_name = str(tmp_path / "graph.json")
    with open(file_name, "w") as f:
        json.dump(data, f)

    graph = Graph.from_file(file_name)
    assert sorted(graph.nodes()) == [1, 2, 3]
    assert graph.get_node_sequence(3) == "TT"
    assert graph.nodes_next(NodeTraversal(2)) == [NodeTraversal(3, True)]
    path = graph.get_path("ref")
    assert [m.node for m in path] == [1, 2, 3]
    assert [m.is_reverse for m in path] == [False, False, True]
    assert path[0].edits[0].from_length == 3
    assert path[0].edits[0].sequence == ""


def test_from_gfa(tmp_path):
    file_name = str(tmp_path / "graph.gfa")
    with open(file_name, "w") as f:
        f.write("H\tVN:Z:1.0\n")
        f.write("S\t1\tACT\n")
        f.write("S\t2\tG\n")
        f.write("L\t1\t+\t2\t-\t0M\n")
        f.write("P\tref\t1+,2-\t*\n")

    graph = Graph.from_file(file_name)
    assert graph.n_nodes() == 2
    assert graph.nodes_next(NodeTraversal(1)) == [NodeTraversal(2, True)]
    assert [(m.node, m.is_reverse) for m in graph.get_path("ref")] == [(1, False), (2, True)]


def test_unsupported_graph_format():
    with pytest.raises(GraphFormatError):
        Graph.from_file("graph.vg")
