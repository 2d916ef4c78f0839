from .errors import GraphWalkError, InvalidEdgeError, SelectionRequiredError, UnknownNodeError
from .graph_store import GraphStore
from .session import GraphSession
from .traversal import TraversalEngine, TraversalFrame
from .viewport import ViewportTransform

__all__ = [
    "GraphSession",
    "GraphStore",
    "GraphWalkError",
    "InvalidEdgeError",
    "SelectionRequiredError",
    "TraversalEngine",
    "TraversalFrame",
    "UnknownNodeError",
    "ViewportTransform",
]
