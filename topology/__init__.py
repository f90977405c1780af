from .adjacency import EDGE_SLOTS, AdjacencyTable, HalfEdge, build_adjacency
from .errors import IndexOutOfRange, InvalidMeshError, MeshTopologyError
from .half_edge import HalfEdgeTopology, create_topology
