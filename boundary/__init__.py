from .boundary_loops import boundary_edges, count_boundary_loops, get_connected_components
