import pytest
from hypothesis import strategies as st

from graphwalk.graph_store import GraphStore
from graphwalk.session import GraphSession

SMALL_NODES = tuple(range(1, 9))

small_edges = st.lists(
    st.tuples(st.sampled_from(SMALL_NODES), st.sampled_from(SMALL_NODES)),
    max_size=30,
)


@pytest.fixture
def store():
    from graphwalk import sample_graph

    return GraphStore(sample_graph.NODES, sample_graph.EDGES)


@pytest.fixture
def session():
    return GraphSession(width=1100, height=720)


def to_networkx(nodes, edges):
    import networkx as nx

    graph = nx.DiGraph()
    graph.add_nodes_from(nodes)
    graph.add_edges_from(edges)
    return graph
