import logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s')
import sys
import argparse
from .graph import Graph
from .reference_path import trace_reference
from .base_calls import CallTable
from .variant_caller import VariantCaller
from .vcf import VcfWriter
from .exceptions import Glenn2VcfError


description = ("Convert a Glenn-format graph and variant file pair to a VCF. "
               "There are three objects in play: the reference (a single path), the graph (containing the "
               "reference as a path) and the sample (which is a set of calls on the graph, with some "
               "substitutions, defined by the Glenn file).")


def main():
    run_argument_parser(sys.argv[1:])


def convert(args):
    graph = Graph.from_file(args.graph_file_name)
    reference = trace_reference(graph, args.ref)
    calls = CallTable.from_file(args.glenn_file_name)

    variants = VariantCaller(graph, reference, calls).call(threads=args.threads, sort=args.sort)

    with VcfWriter.open(args.out_file_name, args.sample_name) as writer:
        writer.write_all(variants)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_help(sys.stderr)
        sys.stderr.write("%s: error: %s\n" % (self.prog, message))
        sys.exit(1)


class _HelpAction(argparse.Action):
    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, default=argparse.SUPPRESS, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help(sys.stderr)
        sys.exit(1)


def run_argument_parser(args):
    parser = _ArgumentParser(
        description=description,
        prog='glenn2vcf',
        add_help=False,
        formatter_class=lambda prog: argparse.HelpFormatter(prog, max_help_position=50, width=100))

    parser.add_argument("graph_file_name", help="Graph with the reference as a path (vg json or GFA)")
    parser.add_argument("glenn_file_name", help="Per base calls on the graph")
    parser.add_argument("-r", "--ref", required=False, default="ref", help="Use the given path name as the reference path")
    parser.add_argument("-s", "--sample-name", required=False, default="SAMPLE")
    parser.add_argument("-o", "--out-file-name", required=False, default=None, help="Defaults to stdout")
    parser.add_argument("-t", "--threads", required=False, type=int, default=1)
    parser.add_argument("--sort", required=False, action="store_true", help="Sort variants by position")
    parser.add_argument("-v", "--verbose", required=False, action="store_true")
    parser.add_argument("-h", "--help", action=_HelpAction, help="Print this help message")

    if len(args) == 0:
        parser.print_help(sys.stderr)
        sys.exit(1)

    args = parser.parse_args(args)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        convert(args)
    except Glenn2VcfError as e:
        logging.error(str(e))
        sys.exit(1)
