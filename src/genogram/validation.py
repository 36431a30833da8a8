"""Consistency checks for genogram documents."""

import networkx as nx

from genogram.graph import build_union_layout_graph, person_nodes, union_nodes
from genogram.models import Person, Union


def descent_graph(H: nx.DiGraph) -> nx.DiGraph:
    """Parent -> child graph derived from a union layout graph."""
    D = nx.DiGraph()
    D.add_nodes_from(person_nodes(H))
    for u in union_nodes(H):
        parents = [p for p in (H.nodes[u]["anchor"], H.nodes[u]["partner"]) if p is not None]
        for child in H.successors(u):
            for parent in parents:
                D.add_edge(parent, child)
    return D


def validate_document(members: list[Person], unions: list[Union]) -> list[str]:
    """
    Check a genogram for:
    - Cycles in parent-child relationships
    - Children not exactly one generation below their parents
    - Impossible ages (child born before parent, parent younger than 12)
    - More than one person marked as self

    These do not stop the layout; they explain why it may look wrong.

    Returns a list of warning messages.
    """
    warnings: list[str] = []
    H = build_union_layout_graph(members, unions)
    D = descent_graph(H)

    try:
        cycle = nx.find_cycle(D, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for u in union_nodes(H):
        generation = H.nodes[u]["generation"]
        for child in H.successors(u):
            child_gen = H.nodes[child]["generation"]
            if child_gen != generation + 1:
                warnings.append(
                    f"Generation mismatch: {child} (generation {child_gen}) is a child of "
                    f"union {u} (generation {generation})"
                )

    for parent, child in D.edges():
        parent_data = H.nodes[parent]["person"]
        child_data = H.nodes[child]["person"]
        if parent_data.birth_year is None or child_data.birth_year is None:
            continue
        if child_data.birth_year < parent_data.birth_year:
            warnings.append(
                f"Impossible: {child_data.name} born before parent {parent_data.name}"
            )
        elif child_data.birth_year - parent_data.birth_year < 12:
            warnings.append(
                f"Suspicious: {parent_data.name} was less than 12 years old "
                f"when {child_data.name} was born"
            )

    selves = [n for n in person_nodes(H) if H.nodes[n]["person"].is_self]
    if len(selves) > 1:
        warnings.append(f"More than one person is marked as self: {selves}")

    return warnings
