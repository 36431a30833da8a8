"""Editable on-canvas state and the manual connect gesture."""

from dataclasses import dataclass, replace
import logging

from genogram.layout import connector_sides
from genogram.models import Edge, EdgeStyle, LayoutResult, NodeKind, PositionedNode, UnionStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Canvas:
    """Snapshot of the nodes and edges shown in the editor."""

    nodes: tuple[PositionedNode, ...] = ()
    edges: tuple[Edge, ...] = ()

    def node(self, node_id: str) -> PositionedNode:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def has_node(self, node_id: str) -> bool:
        return any(n.id == node_id for n in self.nodes)

    def has_edge(self, edge_id: str) -> bool:
        return any(e.id == edge_id for e in self.edges)

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


def canvas_from_layout(result: LayoutResult) -> Canvas:
    return Canvas(
        nodes=tuple(replace(n, payload=dict(n.payload)) for n in result.nodes),
        edges=tuple(result.edges),
    )


def move_node(canvas: Canvas, node_id: str, x: float, y: float) -> Canvas:
    """Drag a node to a new position. Edges and their connector sides are left as they are."""
    canvas.node(node_id)
    nodes = tuple(replace(n, x=x, y=y) if n.id == node_id else n for n in canvas.nodes)
    return replace(canvas, nodes=nodes)


def _free_id(canvas: Canvas, base: str) -> str:
    candidate = base
    suffix = 1
    while canvas.has_node(candidate) or canvas.has_edge(candidate):
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate


def connect_nodes(
    canvas: Canvas,
    source_id: str,
    target_id: str,
    union_id: str | None = None,
    status: UnionStatus = UnionStatus.MARRIED,
) -> Canvas:
    """
    Apply a user-drawn connection from `source_id` to `target_id`.

    Connecting two people inserts a union between them:
    - the union sits at the source's height, halfway between the two people
    - the target is moved to the source's height
    - the person further left connects from its right side, the other from
      its left side; this is fixed now and not revisited when nodes move

    Any other connection (e.g. union to child) becomes a plain descent edge.

    Returns a new Canvas; the input canvas is not modified.
    """
    if source_id == target_id:
        raise ValueError(f"Cannot connect {source_id} to itself")
    source = canvas.node(source_id)
    target = canvas.node(target_id)

    if source.kind is not NodeKind.PERSON or target.kind is not NodeKind.PERSON:
        edge_id = f"edge-{source_id}-{target_id}"
        if canvas.has_edge(edge_id):
            return canvas
        edge = Edge(edge_id, source_id, target_id, "bottom", "top", EdgeStyle.STEP)
        return replace(canvas, edges=canvas.edges + (edge,))

    if union_id is not None and canvas.has_node(union_id):
        raise ValueError(f"Node id {union_id} is already on the canvas")

    align_y = source.y
    union_id = union_id or _free_id(canvas, f"marriage-{source_id}-{target_id}")
    union = PositionedNode(
        union_id,
        NodeKind.UNION,
        (source.x + target.x) / 2,
        align_y,
        {"status": status.value},
    )

    source_side, target_side = connector_sides(source.x, target.x)
    new_edges = (
        Edge(f"edge-{source_id}-{union_id}", source_id, union_id, source_side, target_side, EdgeStyle.STRAIGHT),
        Edge(f"edge-{target_id}-{union_id}", target_id, union_id, target_side, source_side, EdgeStyle.STRAIGHT),
    )

    nodes = tuple(
        replace(n, y=align_y) if n.id in (source_id, target_id) else n for n in canvas.nodes
    )
    logger.debug("Inserted union %s between %s and %s", union_id, source_id, target_id)
    return Canvas(nodes=nodes + (union,), edges=canvas.edges + new_edges)
