from .mesh_snapshot import MeshSnapshot
