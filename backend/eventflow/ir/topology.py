from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import ParseError


class NodeType(str, Enum):
    SERVICE = "service"
    TOPIC = "topic"
    DB = "db"
    PROCESSOR = "processor"
    EXTERNAL = "external"


class EventShape(str, Enum):
    # Geometric
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    SQUARE = "square"
    DIAMOND = "diamond"
    # Icon-based
    MESSAGE = "message"
    DOCUMENT = "document"
    ALERT = "alert"
    LIGHTNING = "lightning"
    PACKAGE = "package"
    PULSE = "pulse"
    KEY = "key"

    @property
    def is_icon(self) -> bool:
        return self not in GEOMETRIC_SHAPES


GEOMETRIC_SHAPES = frozenset(
    {EventShape.CIRCLE, EventShape.TRIANGLE, EventShape.SQUARE, EventShape.DIAMOND}
)


class Side(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


NODE_TYPES = [t.value for t in NodeType]
EVENT_SHAPES = [s.value for s in EventShape]
SIDES = [s.value for s in Side]

DEFAULT_EVENT_COLOR = "#6366f1"
DEFAULT_EVENT_RATE = 2.0
DEFAULT_EVENT_SIZE = 1.0


# ---- Nodes & edges ----

@dataclass
class NodeAttributes:
    """Recognised node keys plus a pass-through bag for everything else."""
    label: Optional[str] = None
    delay: Optional[float] = None
    partitions: Optional[int] = None
    x: Optional[float] = None
    y: Optional[float] = None
    subsystem: Optional[str] = None
    transformation: Optional[str] = None
    transform: Optional[EventShape] = None      # deprecated, use transformation
    transform_color: Optional[str] = None       # deprecated, use transformation
    extra: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        if key == "transformColor":
            key = "transform_color"
        if key != "extra" and hasattr(self, key):
            value = getattr(self, key)
            return default if value is None else value
        return self.extra.get(key, default)


@dataclass
class Node:
    id: str
    type: NodeType = NodeType.SERVICE
    attributes: NodeAttributes = field(default_factory=NodeAttributes)
    line: Optional[int] = None       # first source line, for editors
    implicit: bool = False           # created by an edge, not declared

    @property
    def label(self) -> str:
        return self.attributes.label or self.id


@dataclass
class Edge:
    source: str
    target: str
    from_side: Side = Side.RIGHT
    to_side: Side = Side.LEFT


# ---- Events ----

@dataclass
class PathStep:
    node_id: str
    attributes: Optional[Dict[str, str]] = None


@dataclass
class FlowEvent:
    name: str
    label: Optional[str] = None
    color: str = DEFAULT_EVENT_COLOR
    shape: EventShape = EventShape.CIRCLE
    size: float = DEFAULT_EVENT_SIZE
    source: Optional[str] = None     # None = pick a graph source at spawn time
    rate: float = DEFAULT_EVENT_RATE  # events per second
    path: Optional[List[PathStep]] = None
    event_type: Optional[str] = None  # declared event a flow is based on
    line: Optional[int] = None


@dataclass
class Transformation:
    name: str
    input: str = ""
    output: str = ""
    label: Optional[str] = None
    delay: float = 0.0
    output_rate: float = 1.0  # declared only, fan-out/fan-in is not executed


@dataclass
class Subsystem:
    name: str
    nodes: List[str] = field(default_factory=list)
    color: Optional[str] = None

    def add_node(self, node_id: str):
        if node_id not in self.nodes:
            self.nodes.append(node_id)


# ---- Root ----

@dataclass
class Topology:
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    events: List[FlowEvent] = field(default_factory=list)
    transformations: List[Transformation] = field(default_factory=list)
    subsystems: List[Subsystem] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    event_types: List[FlowEvent] = field(default_factory=list)

    def node_map(self) -> Dict[str, Node]:
        return {n.id: n for n in self.nodes}

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_transformation(self, name: str) -> Optional[Transformation]:
        for t in self.transformations:
            if t.name == name:
                return t
        return None

    def find_event_type(self, name: str) -> Optional[FlowEvent]:
        """Look up an event by name, declared event types first."""
        for event in self.event_types:
            if event.name == name:
                return event
        for event in self.events:
            if event.name == name:
                return event
        return None

    def source_nodes(self) -> List[str]:
        """Nodes with no incoming edge, in node order."""
        has_incoming = {e.target for e in self.edges}
        return [n.id for n in self.nodes if n.id not in has_incoming]
