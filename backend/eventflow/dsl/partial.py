from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from eventflow.ir.errors import ParseError
from eventflow.ir.topology import (
    DEFAULT_EVENT_COLOR,
    DEFAULT_EVENT_RATE,
    DEFAULT_EVENT_SIZE,
    Edge,
    EventShape,
    FlowEvent,
    Node,
    PathStep,
    Subsystem,
    Transformation,
)


@dataclass
class EventSpec:
    """An event as written: only the keys the author set are filled in.

    Flows are resolved against their declared event type at merge time,
    so the event block may appear after the flow that uses it.
    """
    name: str
    line: Optional[int] = None
    event_type: Optional[str] = None
    label: Optional[str] = None
    color: Optional[str] = None
    shape: Optional[EventShape] = None
    size: Optional[float] = None
    source: Optional[str] = None
    rate: Optional[float] = None
    path: Optional[List[PathStep]] = None

    def build(self, base: Optional[FlowEvent] = None) -> FlowEvent:
        def pick(own, inherited, default):
            if own is not None:
                return own
            if base is not None and inherited is not None:
                return inherited
            return default

        return FlowEvent(
            name=self.name,
            label=pick(self.label, base.label if base else None, None),
            color=pick(self.color, base.color if base else None, DEFAULT_EVENT_COLOR),
            shape=pick(self.shape, base.shape if base else None, EventShape.CIRCLE),
            size=pick(self.size, base.size if base else None, DEFAULT_EVENT_SIZE),
            source=pick(self.source, base.source if base else None, None),
            rate=pick(self.rate, base.rate if base else None, DEFAULT_EVENT_RATE),
            path=self.path,
            event_type=self.event_type,
            line=self.line,
        )


@dataclass
class PartialTopology:
    """What one grammar pass found, before the two passes are merged."""
    nodes: List[Node] = field(default_factory=list)          # in definition order
    edges: List[Edge] = field(default_factory=list)
    event_types: Dict[str, EventSpec] = field(default_factory=dict)
    transformations: Dict[str, Transformation] = field(default_factory=dict)
    subsystems: Dict[str, Subsystem] = field(default_factory=dict)
    flows: List[EventSpec] = field(default_factory=list)
    legacy_events: List[EventSpec] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)

    # Legacy pass only: lines it consumed
    claimed_lines: Set[int] = field(default_factory=set)

    def report(self, line: Optional[int], message: str):
        self.errors.append(ParseError(line=line, message=message))

    def subsystem(self, name: str) -> Subsystem:
        if name not in self.subsystems:
            self.subsystems[name] = Subsystem(name=name)
        return self.subsystems[name]

    def add_node(self, node: Node):
        self.nodes.append(node)
        if node.attributes.subsystem:
            self.subsystem(node.attributes.subsystem).add_node(node.id)
