from dataclasses import dataclass, field
from typing import Dict, List

from eventflow.ir.topology import Node, Side


@dataclass
class Point:
    x: float
    y: float


@dataclass
class BezierPath:
    start: Point
    cp1: Point
    cp2: Point
    end: Point


@dataclass
class LayoutNode:
    node: Node
    x: float
    y: float
    level: int = 0

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def type(self):
        return self.node.type


@dataclass
class LayoutEdge:
    source: str
    target: str
    from_point: Point
    to_point: Point
    path: BezierPath
    from_side: Side = Side.RIGHT
    to_side: Side = Side.LEFT
    offset_index: int = 0


@dataclass
class Layout:
    nodes: Dict[str, LayoutNode] = field(default_factory=dict)
    edges: List[LayoutEdge] = field(default_factory=list)

    def get_node(self, node_id: str):
        return self.nodes.get(node_id)

    def outgoing(self, node_id: str) -> List[int]:
        """Indices of edges leaving ``node_id``, in edge order."""
        return [i for i, e in enumerate(self.edges) if e.source == node_id]

    def find_edge(self, source: str, target: str) -> int:
        """Index of the first edge source -> target, or -1."""
        for i, e in enumerate(self.edges):
            if e.source == source and e.target == target:
                return i
        return -1
