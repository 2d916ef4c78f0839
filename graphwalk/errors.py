class GraphWalkError(Exception):
    pass


class InvalidEdgeError(GraphWalkError):
    def __init__(self, source, target):
        super().__init__("edge ({}, {}) references a node outside the graph".format(source, target))
        self.source = source
        self.target = target


class UnknownNodeError(GraphWalkError):
    def __init__(self, node):
        super().__init__("unknown node: {}".format(node))
        self.node = node


class SelectionRequiredError(GraphWalkError):
    pass
