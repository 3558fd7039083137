from eventflow.ir.errors import DSLSyntaxError, ParseError
from eventflow.ir.topology import (
    DEFAULT_EVENT_COLOR,
    DEFAULT_EVENT_RATE,
    DEFAULT_EVENT_SIZE,
    EVENT_SHAPES,
    NODE_TYPES,
    SIDES,
    Edge,
    EventShape,
    FlowEvent,
    Node,
    NodeAttributes,
    NodeType,
    PathStep,
    Side,
    Subsystem,
    Topology,
    Transformation,
)
from eventflow.ir.validation import ValidationResult

__all__ = [
    "DEFAULT_EVENT_COLOR",
    "DEFAULT_EVENT_RATE",
    "DEFAULT_EVENT_SIZE",
    "EVENT_SHAPES",
    "NODE_TYPES",
    "SIDES",
    "DSLSyntaxError",
    "Edge",
    "EventShape",
    "FlowEvent",
    "Node",
    "NodeAttributes",
    "NodeType",
    "ParseError",
    "PathStep",
    "Side",
    "Subsystem",
    "Topology",
    "Transformation",
    "ValidationResult",
]
