import logging
import numpy as np
from .exceptions import BaseCallError, CallFileError


class BaseCall:
    """
    Our opinion of one base of one node in the sample.

    Made from the call tokens of a Glenn file line: "." means the graph's own
    base is present, "-" is a placeholder meaning nothing, and any other token
    is a substitute base seen instead of (or as well as) the graph base.
    """
    max_alts = 2

    def __init__(self, tokens=()):
        self.graph_base_present = False
        self.alts = []
        for token in tokens:
            if token == "-":
                continue
            elif token == ".":
                self.graph_base_present = True
                continue

            if len(token) != 1:
                raise BaseCallError("Alt call %s is not a single base" % token)
            if len(self.alts) >= self.max_alts:
                raise BaseCallError("More than %d alts in calls %s" % (self.max_alts, ",".join(tokens)))
            self.alts.append(token)

    @property
    def n_alts(self):
        return len(self.alts)

    def __eq__(self, other):
        if not isinstance(other, BaseCall):
            return NotImplemented
        return self.graph_base_present == other.graph_base_present and self.alts == other.alts

    def __repr__(self):
        return "BaseCall(present=%s, alts=%s)" % (self.graph_base_present, self.alts)


_empty_call = BaseCall()


class CallTable:
    def __init__(self, calls_by_node=None):
        if calls_by_node is None:
            calls_by_node = {}
        self._calls = calls_by_node

    def __contains__(self, node):
        return node in self._calls

    def __len__(self):
        return len(self._calls)

    def set_call(self, node, offset, call):
        calls = self._calls.setdefault(node, [])
        if len(calls) <= offset:
            calls.extend(BaseCall() for _ in range(offset + 1 - len(calls)))
        calls[offset] = call

    def get_calls(self, node):
        return self._calls.get(node, [])

    def get_call(self, node, offset):
        calls = self.get_calls(node)
        if offset < len(calls):
            return calls[offset]
        return _empty_call

    def presence_summary(self, node):
        """
        Returns (fully present, partly present, max number of alts) over the called bases of a node.
        A node without calls is fully but not partly present.
        """
        calls = self.get_calls(node)
        present = np.array([call.graph_base_present for call in calls], dtype=bool)
        max_alts = max([0] + [call.n_alts for call in calls])
        return bool(np.all(present)), bool(np.any(present)), max_alts

    @classmethod
    def from_lines(cls, lines):
        table = cls()
        n_calls = 0
        for line_number, line in enumerate(lines, 1):
            tokens = line.split()
            if len(tokens) == 0:
                continue

            if len(tokens) < 4:
                raise CallFileError("Expected node id, offset, graph base and calls, got: %s" % line.strip(), line_number)

            try:
                node = int(tokens[0])
                offset = int(tokens[1]) - 1
            except ValueError:
                raise CallFileError("Node id and offset must be integers: %s" % line.strip(), line_number)

            if offset < 0:
                raise CallFileError("Offsets are 1-based, got %d" % (offset + 1), line_number)

            call_tokens = sorted(set(tokens[3].split(",")))
            try:
                call = BaseCall(call_tokens)
            except BaseCallError as e:
                raise CallFileError(str(e), line_number) from e

            table.set_call(node, offset, call)
            n_calls += 1
            logging.debug("Node %d base %d status: %s" % (node, offset, "Present" if call.graph_base_present else "Absent"))

        logging.info("Read %d base calls on %d nodes" % (n_calls, len(table)))
        return table

    @classmethod
    def from_file(cls, file_name):
        try:
            with open(file_name) as f:
                return cls.from_lines(f)
        except OSError as e:
            raise CallFileError("Could not read %s: %s" % (file_name, e))
