import pytest
from glenn2vcf import Graph, NodeTraversal
from glenn2vcf.graph import Mapping, Edit
from glenn2vcf.reference_path import trace_reference, mapping_is_perfect_match
from glenn2vcf.exceptions import ReferencePathError


def test_linear_reference():
    sequences = {1: "ACTG", 2: "A", 3: "GGT", 4: "AAAT"}
    graph = Graph.from_dicts(sequences, {1: [2], 2: [3], 3: [4]}, [1, 2, 3, 4])

    reference = trace_reference(graph)
    assert reference.sequence == "ACTGAGGTAAAT"
    assert len(reference) == sum(len(s) for s in sequences.values())

    coordinates = [reference.placement.coordinate(node) for node in [1, 2, 3, 4]]
    assert coordinates == [0, 4, 5, 8]
    assert coordinates == sorted(coordinates)
    for node, coordinate in zip([1, 2, 3, 4], coordinates):
        assert reference.sequence[coordinate:coordinate + len(sequences[node])] == sequences[node]
        assert not reference.placement.is_reverse(node)


def test_coordinate_index_finds_covering_node():
    graph = Graph.from_dicts({1: "ACTG", 2: "A", 3: "GGT"}, {1: [2], 2: [3]}, [1, 2, 3])
    index = trace_reference(graph).coordinate_index

    assert index.find(0) == NodeTraversal(1)
    assert index.find(3) == NodeTraversal(1)
    assert index.find(4) == NodeTraversal(2)
    assert index.find(6) == NodeTraversal(3)
    assert index.find(100) == NodeTraversal(3)


def test_reverse_node_in_reference():
    graph = Graph.from_dicts({1: "AA", 2: "GGTCAA", 3: "C"}, {1: [(2, False, True)], 2: [(3, True, False)]},
                             [1, (2, True), 3])
    reference = trace_reference(graph)
    assert reference.sequence == "AATTGACCC"
    assert reference.placement.get(2) == (2, True)
    assert reference.coordinate_index.find(3) == NodeTraversal(2, True)


def test_revisited_node_keeps_first_placement():
    graph = Graph.from_dicts({1: "ACTG", 2: "A"}, {1: [2], 2: [1]}, [1, 2, 1])
    reference = trace_reference(graph)
    assert reference.placement.coordinate(1) == 0
    assert reference.placement.coordinate(2) == 4
    assert reference.sequence == "ACTGAACTG"
    assert reference.coordinate_index.find(6) == NodeTraversal(1)


def test_non_reference_nodes_are_not_placed():
    graph = Graph.from_dicts({1: "ACTG", 2: "A", 3: "G", 4: "AAAT"}, {1: [2, 3], 2: [4], 3: [4]}, [1, 2, 4])
    reference = trace_reference(graph)
    assert 3 not in reference.placement
    assert len(reference.placement) == 3


def test_missing_reference_path():
    graph = Graph.from_dicts({1: "ACTG"}, {}, [1])
    with pytest.raises(ReferencePathError):
        trace_reference(graph, "chr1")


def test_perfect_match():
    assert mapping_is_perfect_match(Mapping(1, False, []))
    assert mapping_is_perfect_match(Mapping(1, False, [Edit(4, 4, "")]))
    assert not mapping_is_perfect_match(Mapping(1, False, [Edit(1, 1, "T")]))
    assert not mapping_is_perfect_match(Mapping(1, False, [Edit(2, 0, "")]))


def test_reference_with_edits_is_rejected():
    graph = Graph.from_dicts({1: "ACTG", 2: "A"}, {1: [2]})
    graph.paths["ref"] = [Mapping(1, False, [Edit(4, 4, "")]), Mapping(2, False, [Edit(1, 1, "T")])]
    with pytest.raises(ReferencePathError):
        trace_reference(graph, "ref")
