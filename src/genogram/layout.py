"""Generation-banded layout of the person/union graph."""

import logging

import networkx as nx

from genogram.config import DEFAULT_LAYOUT, LayoutConfig
from genogram.errors import LayoutWarning
from genogram.graph import build_union_layout_graph, person_nodes, union_nodes
from genogram.models import (
    Edge,
    EdgeStyle,
    LayoutResult,
    NodeKind,
    Person,
    PositionedNode,
    Union,
)
from genogram.parsing import parse_document

logger = logging.getLogger(__name__)


def connector_sides(first_x: float, second_x: float) -> tuple[str, str]:
    """
    Pick the connector side each partner uses to reach their union.

    The partner further left leaves from its right side and the other from its
    left side, so both partner lines run toward the union without crossing
    either body. Ties go to the second partner being on the left.
    """
    if first_x < second_x:
        return "right", "left"
    return "left", "right"


def assign_positions(H: nx.DiGraph, config: LayoutConfig = DEFAULT_LAYOUT) -> None:
    """
    Write x/y attributes onto every node of a union layout graph.

    People are grouped into one horizontal band per generation present, most
    senior first. Inside a band, couples are placed before singles: for each
    union anchored in the band the anchor goes at the cursor and the other
    partner right next to it. Remaining people follow in input order.
    Unions sit at the midpoint of their partners, level with the anchor.
    """
    bands: dict[int, list[str]] = {}
    for n in person_nodes(H):
        bands.setdefault(H.nodes[n]["generation"], []).append(n)

    unions = union_nodes(H)
    placed: dict[str, tuple[float, float]] = {}

    for band_index, generation in enumerate(sorted(bands)):
        y = config.base_y + band_index * config.band_spacing
        cursor = config.base_x + band_index * config.band_stagger

        # Couples first
        for u in unions:
            anchor = H.nodes[u]["anchor"]
            if H.nodes[anchor]["generation"] != generation:
                continue
            if anchor not in placed:
                placed[anchor] = (cursor, y)
                cursor += config.slot_width

            partner = H.nodes[u]["partner"]
            if (
                partner is not None
                and partner not in placed
                and H.nodes[partner]["generation"] == generation
            ):
                placed[partner] = (cursor, y)
                cursor += config.slot_width

        # Then everyone else in the band
        for n in bands[generation]:
            if n not in placed:
                placed[n] = (cursor, y)
                cursor += config.slot_width

    for n, (x, y) in placed.items():
        H.nodes[n]["x"] = x
        H.nodes[n]["y"] = y

    for u in unions:
        data = H.nodes[u]
        anchor_x, anchor_y = placed[data["anchor"]]
        if data["partner"] is not None:
            data["x"] = (anchor_x + placed[data["partner"]][0]) / 2
        else:
            data["x"] = anchor_x + config.half_slot
        data["y"] = anchor_y


def emit_nodes(H: nx.DiGraph) -> list[PositionedNode]:
    nodes = []
    for n in person_nodes(H):
        data = H.nodes[n]
        nodes.append(
            PositionedNode(n, NodeKind.PERSON, data["x"], data["y"], data["person"].to_dict())
        )
    for u in union_nodes(H):
        data = H.nodes[u]
        if "x" not in data:
            logger.warning("Union %s has no position, skipping", u)
            continue
        nodes.append(
            PositionedNode(u, NodeKind.UNION, data["x"], data["y"], {"status": data["union"].status.value})
        )
    return nodes


def emit_edges(H: nx.DiGraph) -> list[Edge]:
    edges = []
    for u in union_nodes(H):
        data = H.nodes[u]
        if "x" not in data:
            continue
        anchor = data["anchor"]
        partner = data["partner"]

        if partner is None:
            # A lone partner always sits left of the union
            edges.append(Edge(f"edge-{anchor}-{u}", anchor, u, "right", "left", EdgeStyle.STRAIGHT))
        else:
            anchor_side, partner_side = connector_sides(H.nodes[anchor]["x"], H.nodes[partner]["x"])
            edges.append(
                Edge(f"edge-{anchor}-{u}", anchor, u, anchor_side, partner_side, EdgeStyle.STRAIGHT)
            )
            edges.append(
                Edge(f"edge-{partner}-{u}", partner, u, partner_side, anchor_side, EdgeStyle.STRAIGHT)
            )

        for i, child in enumerate(H.successors(u)):
            edges.append(Edge(f"child-{u}-{i}", u, child, "bottom", "top", EdgeStyle.STEP))
    return edges


def compute_layout(
    members: list[Person],
    unions: list[Union],
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> LayoutResult:
    """
    Lay out a genogram and return positioned nodes, edges and diagnostics.

    Deterministic: the same records always produce the same result. Records
    that cannot be positioned are omitted and reported as diagnostics rather
    than raised.
    """
    diagnostics: list[LayoutWarning] = []
    H = build_union_layout_graph(members, unions, diagnostics)
    assign_positions(H, config)

    result = LayoutResult(emit_nodes(H), emit_edges(H), diagnostics)
    logger.debug(
        "Laid out %d nodes and %d edges (%d diagnostics)",
        len(result.nodes),
        len(result.edges),
        len(diagnostics),
    )
    return result


def layout_document(doc, config: LayoutConfig = DEFAULT_LAYOUT) -> LayoutResult:
    """
    Parse a raw {members, marriages} document and lay it out.

    Raises:
        InvalidInputError: if the document is not shaped as expected
    """
    members, unions = parse_document(doc)
    return compute_layout(members, unions, config)
