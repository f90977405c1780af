"""
networkx views of mesh connectivity.
"""

from typing import List

import networkx as nx

from topology.adjacency import EDGE_SLOTS
from topology.half_edge import HalfEdgeTopology


def vertex_graph(topology: HalfEdgeTopology) -> nx.Graph:
    """Graph with one node per vertex and one edge per distinct mesh edge."""
    graph = nx.Graph()
    graph.add_nodes_from(range(topology.vertex_count))
    for face in range(topology.face_count):
        for slot in range(EDGE_SLOTS):
            v1, v2 = topology.edge_vertices(face, slot)
            if v1 != v2:
                graph.add_edge(v1, v2)
    return graph


def face_graph(topology: HalfEdgeTopology) -> nx.Graph:
    """Graph with one node per face, joining faces that are siblings across an edge."""
    graph = nx.Graph()
    graph.add_nodes_from(range(topology.face_count))
    for half_edge, sibling in topology.adjacency:
        if sibling is not None:
            graph.add_edge(half_edge.face, sibling.face)
    return graph


def face_components(topology: HalfEdgeTopology) -> List[List[int]]:
    """Faces of each edge-connected patch, sorted, patches ordered by their first face."""
    components = [sorted(c) for c in nx.connected_components(face_graph(topology))]
    return sorted(components, key=lambda c: c[0])
