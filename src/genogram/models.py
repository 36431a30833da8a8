"""Data classes for genogram entities and layout output."""

from dataclasses import dataclass, field
from enum import Enum

from genogram.errors import LayoutWarning


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"


class UnionStatus(str, Enum):
    MARRIED = "married"
    DIVORCED = "divorced"
    SEPARATED = "separated"
    COHABITATION = "cohabitation"


class NodeKind(str, Enum):
    PERSON = "person"
    UNION = "union"


class EdgeStyle(str, Enum):
    STRAIGHT = "straight"
    STEP = "step"


@dataclass
class Person:
    id: str
    name: str
    gender: Gender = Gender.UNKNOWN
    birth_year: int | None = None
    is_deceased: bool = False
    is_self: bool = False
    is_key_person: bool = False
    generation: int = 0
    note: str | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "gender": self.gender.value,
            "isDeceased": self.is_deceased,
            "isSelf": self.is_self,
            "isKeyPerson": self.is_key_person,
            "generation": self.generation,
        }
        if self.birth_year is not None:
            data["birthYear"] = self.birth_year
        if self.note:
            data["note"] = self.note
        return data


@dataclass
class Union:
    id: str
    partner_a: str | None  # input key "husband"; placed on the left
    partner_b: str | None  # input key "wife"
    status: UnionStatus = UnionStatus.MARRIED
    children: list[str] = field(default_factory=list)
    id_given: bool = True  # False when the id was generated from the record's position


@dataclass
class PositionedNode:
    id: str
    kind: NodeKind
    x: float
    y: float
    payload: dict

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "x": self.x,
            "y": self.y,
            "payload": self.payload,
        }


@dataclass
class Edge:
    id: str
    source: str
    target: str
    source_side: str
    target_side: str
    style: EdgeStyle

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "from": self.source,
            "to": self.target,
            "fromSide": self.source_side,
            "toSide": self.target_side,
            "style": self.style.value,
        }


@dataclass
class LayoutResult:
    nodes: list[PositionedNode]
    edges: list[Edge]
    diagnostics: list[LayoutWarning] = field(default_factory=list)

    def node(self, node_id: str) -> PositionedNode:
        for n in self.nodes:
            if n.id == node_id:
                return n
        raise KeyError(node_id)

    def nodes_of_kind(self, kind: NodeKind) -> list[PositionedNode]:
        return [n for n in self.nodes if n.kind is kind]

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
