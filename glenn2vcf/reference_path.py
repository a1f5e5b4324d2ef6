import logging
from sortedcontainers import SortedDict
from .exceptions import ReferencePathError
from .graph import NodeTraversal


def mapping_is_perfect_match(mapping):
    # a mapping without edits covers the whole node
    for edit in mapping.edits:
        if edit.from_length != edit.to_length or edit.sequence:
            return False
    return True


class ReferencePlacement:
    """
    Canonical reference placement of every node on the reference path.

    The first base of a node read along the reference is at the stored coordinate.
    For nodes that are backward in the reference, that is the node's last base.
    """
    def __init__(self, placements):
        self._placements = placements

    def __contains__(self, node):
        return node in self._placements

    def __len__(self):
        return len(self._placements)

    def get(self, node):
        return self._placements.get(node)

    def coordinate(self, node):
        return self._placements[node][0]

    def is_reverse(self, node):
        return self._placements[node][1]


class CoordinateIndex:
    """Finds the reference node covering a reference coordinate"""
    def __init__(self, traversals_by_coordinate):
        self._index = traversals_by_coordinate

    def __len__(self):
        return len(self._index)

    def find(self, coordinate):
        """Traversal stored at the greatest start coordinate not greater than the given one"""
        i = self._index.bisect_right(coordinate)
        if i == 0:
            return None
        return self._index.peekitem(i - 1)[1]


class ReferencePath:
    def __init__(self, name, placement, coordinate_index, sequence):
        self.name = name
        self.placement = placement
        self.coordinate_index = coordinate_index
        self.sequence = sequence

    def __len__(self):
        return len(self.sequence)

    @classmethod
    def from_graph(cls, graph, path_name="ref"):
        if not graph.has_path(path_name):
            raise ReferencePathError("Reference path %s is not in the graph. Paths found: %s"
                                     % (path_name, ", ".join(graph.paths)))

        placements = {}
        traversals_by_coordinate = SortedDict()
        sequences = []
        reference_base = 0

        for i, mapping in enumerate(graph.get_path(path_name)):
            if not mapping_is_perfect_match(mapping):
                raise ReferencePathError("Mapping %d (node %d) on reference path %s is not a perfect match"
                                         % (i, mapping.node, path_name))

            if mapping.node not in placements:
                placements[mapping.node] = (reference_base, mapping.is_reverse)

            traversal = NodeTraversal(mapping.node, mapping.is_reverse)
            sequence = graph.get_traversal_sequence(traversal)
            sequences.append(sequence)
            traversals_by_coordinate[reference_base] = traversal

            # revisited nodes keep their first placement but still take up reference bases
            reference_base += len(sequence)

        reference_sequence = "".join(sequences)
        logging.info("Traced %d bp reference path %s." % (reference_base, path_name))
        if len(reference_sequence) < 100:
            logging.info("Reference sequence: %s" % reference_sequence)

        return cls(path_name, ReferencePlacement(placements), CoordinateIndex(traversals_by_coordinate), reference_sequence)


def trace_reference(graph, path_name="ref"):
    return ReferencePath.from_graph(graph, path_name)
