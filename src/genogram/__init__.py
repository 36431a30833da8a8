"""Genogram layout engine and editor collaborators."""

from genogram.canvas import Canvas, canvas_from_layout, connect_nodes, move_node
from genogram.config import AppConfig, LayoutConfig
from genogram.errors import (
    DocumentNotFoundError,
    GenerationError,
    GenogramError,
    InvalidInputError,
    LayoutWarning,
    MalformedGenerationWarning,
    StoreError,
    UnresolvedUnionWarning,
)
from genogram.history import History
from genogram.layout import compute_layout, layout_document
from genogram.models import Edge, LayoutResult, NodeKind, Person, PositionedNode, Union
from genogram.parsing import parse_document
