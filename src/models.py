"""Data classes for family tree entities and layout results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> Gender | None:
        """Map a stored gender tag (or GEDCOM SEX value) to a Gender."""
        if not value:
            return None
        value = value.strip().lower()
        if value in ("male", "m"):
            return cls.MALE
        if value in ("female", "f"):
            return cls.FEMALE
        if value in ("", "u", "unknown"):
            return None
        return cls.OTHER


@dataclass
class Person:
    id: str
    first_name: str
    last_name: str | None = None
    birth_date: date | None = None
    death_date: date | None = None
    gender: Gender | None = None
    notes: str | None = None

    @property
    def display_name(self) -> str:
        return " ".join(p for p in [self.first_name, self.last_name] if p)


@dataclass
class Relationship:
    id: str
    parent_id: str
    child_id: str


@dataclass
class TreeNode:
    person: Person
    children: list[TreeNode] = field(default_factory=list)


@dataclass
class Forest:
    """Ordered root trees plus the ids placed as detached singletons."""

    trees: list[TreeNode] = field(default_factory=list)
    # Children of some valid edge that no root reached (cycle members)
    detached_ids: set[str] = field(default_factory=set)

    def __len__(self) -> int:
        return len(self.trees)


@dataclass
class NodePosition:
    node: TreeNode
    x: float  # box centre
    y: float  # box top

    @property
    def person(self) -> Person:
        return self.node.person


@dataclass
class Connector:
    parent_id: str
    child_id: str
    x1: float
    y1: float
    x2: float
    y2: float

    def control_points(self, v_gap: float) -> tuple[tuple[float, float], tuple[float, float]]:
        """Bezier control points, pulled vertically by half the vertical gap."""
        return (self.x1, self.y1 + v_gap / 2), (self.x2, self.y2 - v_gap / 2)


@dataclass
class ForestLayout:
    positions: list[NodePosition] = field(default_factory=list)
    connectors: list[Connector] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.positions
