"""Visualization of laid-out genograms."""

import logging
from pathlib import Path

from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Polygon, Rectangle
import matplotlib.pyplot as plt
import pydot

from genogram.models import Edge, EdgeStyle, LayoutResult, NodeKind, PositionedNode

logger = logging.getLogger(__name__)

PERSON_SIZE = 50.0
UNION_SIZE = 6.0

FILL_COLORS = {"M": "lightblue", "F": "lightpink", "U": "lightgray"}
DECEASED_COLOR = "#d1d5db"
SELF_COLOR = "#2563eb"


def person_label(payload: dict) -> str:
    label = payload.get("name", "")
    if payload.get("birthYear"):
        label += f"\n{payload['birthYear']}"
    return label


# ============================================================================
# Graphviz (pydot)
# ============================================================================


def to_dot(result: LayoutResult) -> pydot.Dot:
    """
    Build a Graphviz graph with every node pinned at its computed position.

    Render with `neato -n` (or `P.write(path, prog="neato")`) to keep the
    positions; Graphviz's y axis points up, so y is negated.
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "ortho")  # Orthogonal edges for cleaner tree look
    P.set("outputorder", "edgesfirst")

    for node in result.nodes:
        pos = f"{node.x:g},{-node.y:g}!"
        if node.kind is NodeKind.PERSON:
            gender = node.payload.get("gender", "U")
            shape = {"M": "box", "F": "ellipse"}.get(gender, "diamond")
            fill = DECEASED_COLOR if node.payload.get("isDeceased") else FILL_COLORS.get(gender, "lightgray")
            P.add_node(
                pydot.Node(
                    node.id,
                    label=person_label(node.payload),
                    shape=shape,
                    style="filled",
                    fillcolor=fill,
                    peripheries="2" if node.payload.get("isSelf") else "1",
                    fontsize="10",
                    pos=pos,
                )
            )
        elif node.kind is NodeKind.UNION:
            # Union nodes are small connector points
            P.add_node(
                pydot.Node(
                    node.id,
                    shape="point",
                    width="0.1",
                    height="0.1",
                    label="",
                    pos=pos,
                )
            )
        else:
            raise ValueError(f"Unknown node kind: {node.kind}")

    for edge in result.edges:
        if edge.style is EdgeStyle.STRAIGHT:
            P.add_edge(pydot.Edge(edge.source, edge.target, dir="none", color="darkgray"))
        elif edge.style is EdgeStyle.STEP:
            P.add_edge(pydot.Edge(edge.source, edge.target, color="darkgray"))
        else:
            raise ValueError(f"Unknown edge style: {edge.style}")

    return P


# ============================================================================
# Matplotlib
# ============================================================================


def _draw_person(ax, node: PositionedNode):
    payload = node.payload
    gender = payload.get("gender", "U")
    half = PERSON_SIZE / 2
    fill = DECEASED_COLOR if payload.get("isDeceased") else FILL_COLORS.get(gender, "lightgray")
    edge_color = SELF_COLOR if payload.get("isSelf") else "black"
    line_width = 3.0 if payload.get("isSelf") else 1.5

    if gender == "M":
        shape = Rectangle((node.x - half, node.y - half), PERSON_SIZE, PERSON_SIZE)
    elif gender == "F":
        shape = Circle((node.x, node.y), half)
    else:
        shape = Polygon(
            [(node.x, node.y - half), (node.x + half, node.y), (node.x, node.y + half), (node.x - half, node.y)]
        )
    shape.set_facecolor(fill)
    shape.set_edgecolor(edge_color)
    shape.set_linewidth(line_width)
    ax.add_patch(shape)

    if payload.get("isDeceased"):
        ax.add_line(Line2D([node.x - half, node.x + half], [node.y - half, node.y + half], color="black"))
        ax.add_line(Line2D([node.x - half, node.x + half], [node.y + half, node.y - half], color="black"))
    if payload.get("isKeyPerson"):
        ax.text(node.x + half, node.y - half, "*", ha="left", va="bottom", fontsize=10)

    ax.text(node.x, node.y + half + 4, person_label(payload), ha="center", va="top", fontsize=8)


def _draw_union(ax, node: PositionedNode):
    ax.add_patch(Circle((node.x, node.y), UNION_SIZE / 2, color="black"))

    # Divorce is two slashes across the partner line, separation one
    status = node.payload.get("status")
    slashes = {"divorced": (-6.0, 6.0), "separated": (0.0,)}.get(status, ())
    for dx in slashes:
        ax.add_line(
            Line2D([node.x + dx - 4, node.x + dx + 4], [node.y + 10, node.y - 10], color="black")
        )


def _edge_points(edge: Edge, positions: dict[str, tuple[float, float]]):
    (x1, y1), (x2, y2) = positions[edge.source], positions[edge.target]
    if edge.style is EdgeStyle.STRAIGHT:
        return [x1, x2], [y1, y2]
    if edge.style is EdgeStyle.STEP:
        mid = (y1 + y2) / 2
        return [x1, x1, x2, x2], [y1, mid, mid, y2]
    raise ValueError(f"Unknown edge style: {edge.style}")


def plot_layout(result: LayoutResult, output_path: Path | None = None):
    """
    Draw a laid-out genogram.

    - Males as squares, females as circles, unknown as diamonds
    - Deceased people crossed out, the self person with a heavy blue border
    - Partner lines dashed for cohabitation, union points marked for divorce
      and separation
    - Child lines drawn as orthogonal steps

    Args:
        result: Output of compute_layout()
        output_path: Path to save the image (PNG/SVG/PDF). If None, displays interactively.
    """
    positions = {n.id: (n.x, n.y) for n in result.nodes}
    union_status = {n.id: n.payload.get("status") for n in result.nodes if n.kind is NodeKind.UNION}

    fig, ax = plt.subplots(figsize=(12, 9))

    for edge in result.edges:
        if edge.source not in positions or edge.target not in positions:
            logger.debug("Edge %s points at a node that is not drawn", edge.id)
            continue
        xs, ys = _edge_points(edge, positions)
        linestyle = "--" if union_status.get(edge.target) == "cohabitation" else "-"
        ax.plot(xs, ys, color="#333333", linewidth=1.5, linestyle=linestyle, zorder=1)

    for node in result.nodes:
        if node.kind is NodeKind.PERSON:
            _draw_person(ax, node)
        elif node.kind is NodeKind.UNION:
            _draw_union(ax, node)
        else:
            raise ValueError(f"Unknown node kind: {node.kind}")

    if positions:
        xs = [p[0] for p in positions.values()]
        ys = [p[1] for p in positions.values()]
        margin = PERSON_SIZE * 1.5
        ax.set_xlim(min(xs) - margin, max(xs) + margin)
        ax.set_ylim(max(ys) + margin, min(ys) - margin)  # canvas y grows downward
    ax.set_aspect("equal")
    ax.axis("off")
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        logger.info("Genogram saved to %s", output_path)
    else:
        plt.show()
