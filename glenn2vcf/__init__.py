from .graph import Graph, NodeTraversal, reverse_complement
from .reference_path import ReferencePath, trace_reference
from .base_calls import BaseCall, CallTable
from .bubble_variants import BubbleVariantFinder
from .snp_variants import ReferenceSnpFinder
from .variant_caller import VariantCaller
from .vcf import Variant, VcfWriter
from .exceptions import Glenn2VcfError, SkippedNode
