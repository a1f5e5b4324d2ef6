import json
import logging
from collections import defaultdict, namedtuple
from Bio.Seq import Seq
from .exceptions import GraphFormatError


NodeTraversal = namedtuple("NodeTraversal", ["node", "backward"], defaults=[False])

Edit = namedtuple("Edit", ["from_length", "to_length", "sequence"])
Mapping = namedtuple("Mapping", ["node", "is_reverse", "edits"])


def reverse_complement(sequence):
    return str(Seq(sequence).reverse_complement())


def flip(traversal):
    return NodeTraversal(traversal.node, not traversal.backward)


class Graph:
    """
    Bidirected sequence graph with named paths.

    Edges join node sides. A side is (node, is_end): leaving a node read forward
    happens through its end side, leaving it read backward through its start side.
    """

    def __init__(self, node_sequences, sides, paths):
        self._node_sequences = node_sequences
        self._sides = sides
        self.paths = paths

    @classmethod
    def from_dicts(cls, node_sequences, edges, reference_path=None, reference_name="ref"):
        """
        Edges are given as {from_node: [to, ...]}. A plain node id is an ordinary
        end-to-start edge, a tuple (to, from_start, to_end) gives the sides explicitly.
        Path steps are node ids or (node, is_reverse) tuples.
        """
        graph = cls({int(node): sequence for node, sequence in node_sequences.items()}, defaultdict(list), {})
        for from_node, to_nodes in edges.items():
            for to in to_nodes:
                if isinstance(to, tuple):
                    graph.add_edge(from_node, *to)
                else:
                    graph.add_edge(from_node, to)

        if reference_path is not None:
            steps = []
            for step in reference_path:
                if isinstance(step, tuple):
                    steps.append(Mapping(step[0], step[1], []))
                else:
                    steps.append(Mapping(step, False, []))
            graph.paths[reference_name] = steps

        return graph

    @classmethod
    def from_file(cls, file_name):
        if file_name.endswith(".gfa"):
            return cls.from_gfa(file_name)
        elif file_name.endswith(".json"):
            return cls.from_vg_json(file_name)

        raise GraphFormatError("Unsupported graph file %s. Use vg json (.json) or GFA (.gfa)" % file_name)

    @classmethod
    def from_vg_json(cls, file_name):
        try:
            with open(file_name) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise GraphFormatError("Could not read %s: %s" % (file_name, e))

        graph = cls({}, defaultdict(list), {})
        for node in data.get("node", []):
            graph._node_sequences[int(node["id"])] = node.get("sequence", "")

        for edge in data.get("edge", []):
            graph.add_edge(int(edge["from"]), int(edge["to"]),
                           edge.get("from_start", False), edge.get("to_end", False))

        for path in data.get("path", []):
            mappings = []
            for mapping in path.get("mapping", []):
                position = mapping["position"]
                edits = [Edit(int(edit.get("from_length", 0)), int(edit.get("to_length", 0)), edit.get("sequence", ""))
                         for edit in mapping.get("edit", [])]
                mappings.append(Mapping(int(position["node_id"]), position.get("is_reverse", False), edits))
            graph.paths[path["name"]] = mappings

        logging.info("Loaded graph with %d nodes and %d paths from %s" % (len(graph._node_sequences), len(graph.paths), file_name))
        return graph

    @classmethod
    def from_gfa(cls, file_name):
        graph = cls({}, defaultdict(list), {})
        try:
            with open(file_name) as f:
                for line in f:
                    fields = line.rstrip("\n").split("\t")
                    if fields[0] == "S":
                        graph._node_sequences[int(fields[1])] = "" if fields[2] == "*" else fields[2]
                    elif fields[0] == "L":
                        graph.add_edge(int(fields[1]), int(fields[3]), fields[2] == "-", fields[4] == "-")
                    elif fields[0] == "P":
                        graph.paths[fields[1]] = [Mapping(int(step[:-1]), step[-1] == "-", [])
                                                  for step in fields[2].split(",") if step != ""]
        except (OSError, ValueError, IndexError) as e:
            raise GraphFormatError("Could not read %s: %s" % (file_name, e))

        logging.info("Loaded graph with %d nodes and %d paths from %s" % (len(graph._node_sequences), len(graph.paths), file_name))
        return graph

    def add_edge(self, from_node, to_node, from_start=False, to_end=False):
        from_side = (from_node, not from_start)
        to_side = (to_node, to_end)
        if to_side not in self._sides[from_side]:
            self._sides[from_side].append(to_side)
        if from_side not in self._sides[to_side]:
            self._sides[to_side].append(from_side)

    def nodes(self):
        return iter(self._node_sequences)

    def n_nodes(self):
        return len(self._node_sequences)

    def get_node_sequence(self, node):
        return self._node_sequences[node]

    def get_node_size(self, node):
        return len(self._node_sequences[node])

    def get_traversal_sequence(self, traversal):
        sequence = self._node_sequences[traversal.node]
        if traversal.backward:
            return reverse_complement(sequence)
        return sequence

    def reverse_complement(self, sequence):
        return reverse_complement(sequence)

    def has_path(self, name):
        return name in self.paths

    def get_path(self, name):
        return self.paths[name]

    def nodes_next(self, traversal):
        # we leave through the end side when reading forward, the start side otherwise
        exit_side = (traversal.node, not traversal.backward)
        # entering a neighbour at its end side means reading it backward
        return [NodeTraversal(node, is_end) for node, is_end in self._sides.get(exit_side, [])]

    def nodes_prev(self, traversal):
        return [flip(t) for t in self.nodes_next(flip(traversal))]
