import logging
from .exceptions import VariantError
from .vcf import Variant


class ReferenceSnpFinder:
    """Calls point variants from alt bases called on reference nodes"""

    def __init__(self, graph, reference_path, call_table):
        self.graph = graph
        self.reference = reference_path
        self.placement = reference_path.placement
        self.calls = call_table

    def reference_coordinate(self, node, offset):
        coordinate = self.placement.coordinate(node)
        if self.placement.is_reverse(node):
            # offsets run towards the start of the reference
            return coordinate + self.graph.get_node_size(node) - offset - 1
        return coordinate + offset

    @staticmethod
    def genotype(call):
        if call.graph_base_present:
            return "1/0"
        elif call.n_alts == 1:
            return "1/1"
        elif call.n_alts == 2:
            return "1/2"

        raise VariantError("Semantically invalid base call %s" % call)

    def call_node(self, node):
        is_reverse = self.placement.is_reverse(node)
        for offset in range(self.graph.get_node_size(node)):
            call = self.calls.get_call(node, offset)
            if call.n_alts == 0:
                continue

            coordinate = self.reference_coordinate(node, offset)
            ref_allele = self.reference.sequence[coordinate]
            alts = call.alts
            if is_reverse:
                alts = [self.graph.reverse_complement(alt) for alt in alts]

            variant = Variant(self.reference.name, coordinate + 1, ref_allele, alts, self.genotype(call))
            logging.info("Found variant %s -> %s on node %d at 1-based reference position %d"
                         % (ref_allele, ",".join(alts), node, variant.position))
            yield variant

    def find_variants(self, nodes):
        for node in nodes:
            if node not in self.placement:
                continue
            yield from self.call_node(node)
