import argparse
import logging
import os
import sys

import trimesh

from boundary import boundary_edges, count_boundary_loops
from data_types import MeshSnapshot
from graphs import face_components, vertex_graph
from topology import MeshTopologyError, create_topology

SUPPORTED_EXTENSIONS = ('.stl', '.obj', '.ply', '.off', '.glb', '.gltf')


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description='Report the half-edge topology of a triangle mesh.')
    parser.add_argument('load_filepath', type=str, help='Path to the mesh file to load')
    parser.add_argument('--path', type=int, nargs=2, metavar=('START', 'END'),
                        help='Print the shortest vertex path between two vertices')
    parser.add_argument('--walk', type=int, metavar='VERTEX',
                        help='Print the faces around a vertex in connectivity order')
    parser.add_argument('--match-positions', action='store_true',
                        help='Match edges by vertex position instead of vertex index')
    parser.add_argument('--progress', action='store_true', help='Show a progress bar while building adjacency')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def load_mesh(load_filepath):
    """Load a mesh file into a trimesh object, exiting on failure."""
    if not load_filepath.lower().endswith(SUPPORTED_EXTENSIONS):
        print(f"Error: Unsupported mesh extension. Got: {load_filepath}")
        sys.exit(1)

    if not os.path.isfile(load_filepath):
        print(f"Error: The file {load_filepath} does not exist.")
        sys.exit(1)

    try:
        return trimesh.load(load_filepath, force='mesh')
    except Exception as e:
        print(f"Error loading the mesh file: {e}")
        sys.exit(1)


def print_topology_report(topology):
    graph = vertex_graph(topology)
    degrees = [degree for _, degree in graph.degree()]
    num_loops, _ = count_boundary_loops(topology)

    print(f"Vertices: {topology.vertex_count}")
    print(f"Faces: {topology.face_count}")
    print(f"Boundary edges: {len(boundary_edges(topology))}")
    print(f"Boundary loops: {num_loops}")
    print(f"Non-manifold edges: {topology.adjacency.non_manifold_edge_count}")
    if degrees:
        print(f"Valence: min {min(degrees)}, max {max(degrees)}")
    print(f"Face components: {len(face_components(topology))}")


def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger("mesh_topology").setLevel(logging.DEBUG)

    mesh = load_mesh(args.load_filepath)
    snapshot = MeshSnapshot.from_trimesh(mesh)

    try:
        topology = create_topology(snapshot, match_positions=args.match_positions, show_progress=args.progress)
        print_topology_report(topology)

        if args.path is not None:
            start, end = args.path
            path = topology.find_shortest_path(start, end)
            if path is None:
                print(f"No path between {start} and {end}")
            else:
                print(f"Shortest path {start} -> {end}: {' '.join(str(v) for v in path)}")

        if args.walk is not None:
            faces = topology.walk_around_vertex(args.walk)
            print(f"Faces around vertex {args.walk}: {' '.join(str(f) for f in faces)}")
    except MeshTopologyError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
