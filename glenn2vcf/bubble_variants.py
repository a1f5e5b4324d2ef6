import logging
from .exceptions import SkippedNode, VariantError
from .graph import NodeTraversal
from .vcf import Variant


class BubbleVariantFinder:
    """
    Calls variants for non-reference nodes that are present in the sample.

    A node gives a variant when it sits in a bubble: it is attached on both
    sides to reference nodes, so that we can read along the reference, into the
    node and back out onto the reference further along in the same direction.
    The reference bases between the two anchors are the ref allele and the
    node's own sequence is the alt allele.
    """

    def __init__(self, graph, reference_path, call_table):
        self.graph = graph
        self.reference = reference_path
        self.placement = reference_path.placement
        self.calls = call_table

    def _leftmost_reference_traversal(self, candidates):
        leftmost = None
        leftmost_position = None
        for candidate in candidates:
            if candidate.node not in self.placement:
                continue

            position = self.placement.coordinate(candidate.node)
            # reference coordinates are unique per node, so orientation does not matter here
            if leftmost_position is None or position < leftmost_position:
                leftmost = candidate
                leftmost_position = position

        return leftmost

    def _reads_forward(self, anchor):
        return anchor.backward == self.placement.is_reverse(anchor.node)

    def find_bubble(self, node):
        """
        Returns (in anchor, out anchor, alt traversal) with the anchors ordered along the reference.
        Raises SkippedNode if the node is not in a well-formed bubble.
        """
        in_anchor = self._leftmost_reference_traversal(self.graph.nodes_prev(NodeTraversal(node)))
        out_anchor = self._leftmost_reference_traversal(self.graph.nodes_next(NodeTraversal(node)))

        if in_anchor is None or out_anchor is None:
            raise SkippedNode(node, "not anchored to reference.")

        read_in_forward = self._reads_forward(in_anchor)
        read_out_forward = self._reads_forward(out_anchor)
        if read_in_forward != read_out_forward:
            raise SkippedNode(node, "inverts reference path.")

        alt_traversal = NodeTraversal(node, False)
        if not read_in_forward:
            # consistent orientation, but we are backward along the reference
            alt_traversal = NodeTraversal(node, True)
            in_anchor, out_anchor = out_anchor, in_anchor

        if self.placement.coordinate(out_anchor.node) <= self.placement.coordinate(in_anchor.node):
            # leaving before we arrived
            raise SkippedNode(node, "allows duplication.")

        return in_anchor, out_anchor, alt_traversal

    def reference_interval(self, in_anchor, out_anchor):
        start = self.placement.coordinate(in_anchor.node) + self.graph.get_node_size(in_anchor.node)
        end = self.placement.coordinate(out_anchor.node)
        if end < start:
            raise VariantError("Reference interval ends at %d before it starts at %d" % (end, start))
        return start, end

    def reference_is_observed(self, start, end):
        """True if any reference node covering [start, end) has a base called present or with an alt"""
        position = start
        while position < end:
            traversal = self.reference.coordinate_index.find(position)
            if traversal is None:
                raise VariantError("No reference node at position %d" % position)
            node_size = self.graph.get_node_size(traversal.node)
            for offset in range(node_size):
                call = self.calls.get_call(traversal.node, offset)
                if call.graph_base_present or call.n_alts > 0:
                    return True

            # reference nodes follow each other back to back
            position += node_size

        return False

    def call_node(self, node):
        """Returns a Variant, or None if the node is not used in the sample. Raises SkippedNode."""
        in_anchor, out_anchor, alt_traversal = self.find_bubble(node)
        start, end = self.reference_interval(in_anchor, out_anchor)

        fully_present, partly_present, max_alts_present = self.calls.presence_summary(node)
        if not partly_present:
            return None

        if not fully_present:
            # not even heterozygous for this alt
            raise SkippedNode(node, "is nonreference attached to reference, but only partially present. Skipping!")

        if max_alts_present > 0:
            # TODO: the node is called as present, but a modified copy of it may be what makes it look homozygous
            logging.warning("Node %d is nonreference attached to reference, and present, but has additional novel alts!" % node)

        genotype = "1/0" if self.reference_is_observed(start, end) else "1/1"

        ref_allele = self.reference.sequence[start:end]
        alt_allele = self.graph.get_traversal_sequence(alt_traversal)

        if len(ref_allele) == 0:
            # insertions need an anchoring base before the inserted sequence
            if start == 0:
                raise VariantError("Cannot anchor insertion of node %d at the start of the reference" % node)
            start -= 1
            ref_allele = self.reference.sequence[start] + ref_allele
            alt_allele = self.reference.sequence[start] + alt_allele

        variant = Variant(self.reference.name, start + 1, ref_allele, [alt_allele], genotype)
        logging.info("Found variant %s -> %s caused by node %d at 1-based reference position %d"
                     % (ref_allele, alt_allele, node, variant.position))
        return variant

    def find_variants(self, nodes):
        for node in nodes:
            if node in self.placement:
                continue

            try:
                variant = self.call_node(node)
            except SkippedNode as e:
                logging.warning(str(e))
                continue

            if variant is not None:
                yield variant
