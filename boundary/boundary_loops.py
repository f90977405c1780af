import networkx as nx

from topology.half_edge import HalfEdgeTopology


def get_connected_components(edges):
    """
    Helper function to get connected components of a graph.
    Returns the number of connected components and a list of 2-element tuples of vertex indices in each edge in each connected component
    """
    graph = nx.Graph()
    graph.add_edges_from(edges)

    # Sort by smallest vertex so the component order does not depend on set iteration
    connected_components = sorted(nx.connected_components(graph), key=min)

    component_edges = []
    for component in connected_components:
        component_edges.append(sorted(tuple(sorted(edge)) for edge in graph.subgraph(component).edges()))

    return len(connected_components), component_edges


def boundary_edges(topology: HalfEdgeTopology):
    """
    Return the boundary half-edges of the mesh as (face, slot) pairs.
    """
    return topology.adjacency.boundary_half_edges()


def count_boundary_loops(topology: HalfEdgeTopology):
    """
    Given a topology, return the boundary loops of its mesh.
    Returns the number of boundary loops and, for each loop, the list of its edges as sorted vertex index pairs.
    A closed mesh has no boundary loops.
    """
    edges = [topology.edge_vertices(face, slot) for face, slot in boundary_edges(topology)]
    if not edges:
        return 0, []
    return get_connected_components(edges)
