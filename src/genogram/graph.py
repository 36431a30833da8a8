"""NetworkX graph building for the person/union layout model."""

import logging

import networkx as nx

from genogram.errors import LayoutWarning, MalformedGenerationWarning, UnresolvedUnionWarning
from genogram.models import Person, Union

logger = logging.getLogger(__name__)


def is_person(H: nx.DiGraph, node) -> bool:
    return node in H and H.nodes[node].get("node_type") == "person"


def union_nodes(H: nx.DiGraph) -> list[str]:
    return [n for n, data in H.nodes(data=True) if data.get("node_type") == "union"]


def person_nodes(H: nx.DiGraph) -> list[str]:
    return [n for n, data in H.nodes(data=True) if data.get("node_type") == "person"]


def free_union_id(H: nx.DiGraph, reserved: set[str], base: str) -> str:
    """First of base, base-2, base-3, ... not used by a node or a reserved id."""
    candidate = base
    suffix = 1
    while candidate in H or candidate in reserved:
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate


def build_union_layout_graph(
    members: list[Person],
    unions: list[Union],
    diagnostics: list[LayoutWarning] | None = None,
) -> nx.DiGraph:
    """
    Build the bipartite layout graph of people and union (marriage) nodes.

    - Each distinct person id becomes one "person" node; a repeated id keeps
      its first record.
    - Each union with at least one known partner becomes one "union" node,
      with the partners pointing into it and the union pointing to its children.
    - The anchor partner is partner A when it is a known person, otherwise
      partner B. Its generation decides which band the union is laid out in.

    A union without an id of its own gets a generated one that avoids every
    person id and every explicit union id. Only an explicit id that is already
    taken causes a union to be dropped.

    Records that cannot be attached (unknown ids, unions without partners,
    a child listed twice) are left out and reported into `diagnostics`.

    Args:
        members: Person records in input order
        unions: Union records in input order
        diagnostics: Optional list that receives LayoutWarning instances

    Returns:
        A DiGraph with node_type / edge_type attributes
    """
    if diagnostics is None:
        diagnostics = []

    H = nx.DiGraph()

    for order, person in enumerate(members):
        if person.id in H:
            logger.debug("Duplicate person id %s, keeping first occurrence", person.id)
            continue
        H.add_node(
            person.id,
            node_type="person",
            person=person,
            generation=person.generation,
            order=order,
        )

    explicit_ids = {u.id for u in unions if u.id_given}

    for union in unions:
        union_id = union.id
        if not union.id_given:
            union_id = free_union_id(H, explicit_ids, union.id)
        elif union_id in H:
            diagnostics.append(
                UnresolvedUnionWarning(
                    f"Union id {union_id} is already used by another node", union_id=union_id
                )
            )
            continue

        # Resolve partner references
        resolved = []
        for ref in (union.partner_a, union.partner_b):
            if ref is None:
                continue
            if is_person(H, ref):
                if ref not in resolved:
                    resolved.append(ref)
            else:
                diagnostics.append(
                    UnresolvedUnionWarning(
                        f"Union {union_id} references unknown partner {ref}",
                        union_id=union_id,
                        ref=ref,
                    )
                )

        if not resolved:
            diagnostics.append(
                UnresolvedUnionWarning(
                    f"Union {union_id} has no resolvable partner and cannot be positioned",
                    union_id=union_id,
                )
            )
            continue

        anchor = resolved[0]
        partner = resolved[1] if len(resolved) > 1 else None

        if partner is not None:
            anchor_gen = H.nodes[anchor]["generation"]
            partner_gen = H.nodes[partner]["generation"]
            if anchor_gen != partner_gen:
                diagnostics.append(
                    MalformedGenerationWarning(
                        f"Union {union_id}: partners {anchor} (generation {anchor_gen}) and "
                        f"{partner} (generation {partner_gen}) disagree; "
                        f"using {anchor}'s band",
                        union_id=union_id,
                        ref=partner,
                    )
                )

        H.add_node(
            union_id,
            node_type="union",
            union=union,
            anchor=anchor,
            partner=partner,
            generation=H.nodes[anchor]["generation"],
        )
        H.add_edge(anchor, union_id, edge_type="partner_to_union")
        if partner is not None:
            H.add_edge(partner, union_id, edge_type="partner_to_union")

        for child in union.children:
            if not is_person(H, child):
                diagnostics.append(
                    UnresolvedUnionWarning(
                        f"Union {union_id} references unknown child {child}",
                        union_id=union_id,
                        ref=child,
                    )
                )
                continue
            if H.has_edge(union_id, child):
                diagnostics.append(
                    UnresolvedUnionWarning(
                        f"Union {union_id} lists child {child} more than once",
                        union_id=union_id,
                        ref=child,
                    )
                )
                continue
            H.add_edge(union_id, child, edge_type="union_to_child")

    return H
