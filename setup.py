from setuptools import setup, find_packages

setup(
    name="mesh-topology",
    version="0.1.0",
    description="Half-edge topology queries and traversals for indexed triangle meshes",
    author="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["mesh_topology"],
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "trimesh",
        "networkx",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["mesh-topology=mesh_topology:main"],
    },
)
