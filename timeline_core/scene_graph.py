"""
Export of a reduced timeline as a graph for external tools.
"""

from __future__ import annotations

import networkx as nx

from .container import Container


def to_networkx(container: Container) -> "nx.DiGraph":
    """
    Convert a container's reconstructed tree to a NetworkX DiGraph.

    Nodes are the container itself and every instance it created. CHILD
    edges run from the container to each content child with the child's
    declaration index as ``order``; MASK edges run from a mask to its target
    with ``start`` and ``duration`` (-1 for open intervals).

    Returns:
        NetworkX DiGraph of the declaration tree
    """
    G = nx.DiGraph()

    G.add_node(container.name, kind="CONTAINER", local_name="this", renderable=True, first_frame=0)

    for instance in container.instances_map.values():
        G.add_node(
            instance.local_name,
            kind=str(instance.asset.type.name),
            local_name=instance.local_name,
            renderable=bool(instance.renderable),
            first_frame=instance.first_frame,
        )

    for order, child in enumerate(container.children):
        G.add_edge(container.name, child.local_name, type="CHILD", order=order)

    for interval in container.masks:
        G.add_edge(
            interval.mask.local_name,
            interval.instance.local_name,
            type="MASK",
            start=interval.frame,
            duration=-1 if interval.duration is None else interval.duration,
        )

    return G


def export_graphml(container: Container, filepath: str) -> None:
    """
    Export the container's tree to GraphML.

    Args:
        container: Built container to export
        filepath: Path where to save the GraphML file
    """
    nx.write_graphml(to_networkx(container), filepath)
