import logging
import time
import numpy as np
from tqdm import tqdm
from pathos.multiprocessing import Pool
from .bubble_variants import BubbleVariantFinder
from .snp_variants import ReferenceSnpFinder


_worker_caller = None


def _init_worker(caller):
    global _worker_caller
    _worker_caller = caller


def _call_chunk(nodes):
    return _worker_caller.call_nodes(nodes)


class VariantCaller:
    """
    Runs the bubble and reference SNP finders over graph nodes.

    Every node is handled independently from read-only tables, so nodes can be
    split in chunks and processed in separate processes.
    """

    def __init__(self, graph, reference_path, call_table):
        self.graph = graph
        self.reference = reference_path
        self.call_table = call_table
        self.bubble_finder = BubbleVariantFinder(graph, reference_path, call_table)
        self.snp_finder = ReferenceSnpFinder(graph, reference_path, call_table)

    def call_nodes(self, nodes):
        nodes = list(nodes)
        variants = list(self.bubble_finder.find_variants(nodes))
        variants.extend(self.snp_finder.find_variants(nodes))
        return variants

    def _node_chunks(self, n_chunks):
        nodes = np.array(list(self.graph.nodes()), dtype=np.int64)
        return [[int(node) for node in chunk] for chunk in np.array_split(nodes, n_chunks) if len(chunk) > 0]

    def call(self, threads=1, sort=False):
        t = time.perf_counter()
        chunks = self._node_chunks(max(threads, 1) * 10)
        if threads <= 1:
            variants = []
            for chunk in tqdm(chunks, desc="Calling node chunks"):
                variants.extend(self.call_nodes(chunk))
        else:
            logging.info("Making pool with %d workers for %d chunks of nodes" % (threads, len(chunks)))
            # each worker gets the caller once, chunks only carry node ids
            pool = Pool(threads, initializer=_init_worker, initargs=(self,))
            try:
                variants = []
                for chunk_variants in tqdm(pool.imap(_call_chunk, chunks), total=len(chunks), desc="Calling node chunks"):
                    variants.extend(chunk_variants)
            finally:
                pool.close()
                pool.join()

        logging.info("Found %d variants in %.2f sec" % (len(variants), time.perf_counter() - t))
        if sort:
            variants.sort(key=lambda variant: variant.position)
        return variants
