class Glenn2VcfError(Exception):
    """Fatal error. The run cannot produce a correct VCF and is aborted."""


class GraphFormatError(Glenn2VcfError):
    pass


class ReferencePathError(Glenn2VcfError):
    pass


class CallFileError(Glenn2VcfError):
    def __init__(self, message, line_number=None):
        if line_number is not None:
            message = "Line %d: %s" % (line_number, message)
        super().__init__(message)
        self.line_number = line_number


class BaseCallError(Glenn2VcfError):
    pass


class VariantError(Glenn2VcfError):
    pass


class SkippedNode(Exception):
    """A non-reference node that cannot be represented as a variant. Only that node is skipped."""

    def __init__(self, node, reason):
        super().__init__("Node %d %s" % (node, reason))
        self.node = node
        self.reason = reason


class VcfWriteError(Glenn2VcfError):
    pass
