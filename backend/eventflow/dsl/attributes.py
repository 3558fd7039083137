"""
Value coercion shared by both grammars.

Each helper takes a ``report(line, message)`` callback and falls back to
the documented default when a value is malformed, so a bad attribute
never stops the parse.
"""

import re
from typing import Any, Callable, Optional

from eventflow.ir.topology import (
    DEFAULT_EVENT_SIZE,
    EVENT_SHAPES,
    NODE_TYPES,
    EventShape,
    Node,
    NodeAttributes,
    NodeType,
)

Reporter = Callable[[Optional[int], str], None]

SIZE_PRESETS = {
    "small": 0.6,
    "medium": 1.0,
    "large": 1.5,
}
MIN_EVENT_SIZE = 0.3
MAX_EVENT_SIZE = 3.0

_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)$")


def strip_quotes(value: Any) -> str:
    return str(value).strip().strip("\"'")


def coerce_scalar(raw: str) -> Any:
    """"12" -> 12, "1.5" -> 1.5, anything else stays a string."""
    text = raw.strip()
    if _NUMBER_RE.match(text):
        if "." in text:
            return float(text)
        return int(text)
    return strip_quotes(text)


def to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and _NUMBER_RE.match(value.strip()):
        return float(value.strip())
    return None


def strip_comment(text: str) -> str:
    """Cut a trailing ``# comment`` that sits outside brackets.

    A '#' only opens a comment after whitespace, so ``#3b82f6`` colours
    and ``color=#fff`` survive.
    """
    depth = 0
    for i, ch in enumerate(text):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth = max(0, depth - 1)
        elif ch == "#" and depth == 0 and i > 0 and text[i - 1].isspace():
            return text[:i].rstrip()
    return text


# ---------- typed values ----------

def parse_shape(
    value: Any,
    line: Optional[int],
    report: Reporter,
    default: Optional[EventShape] = EventShape.CIRCLE,
) -> Optional[EventShape]:
    name = strip_quotes(value)
    if name in EVENT_SHAPES:
        return EventShape(name)
    report(line, f'Invalid shape "{name}". Use: {", ".join(EVENT_SHAPES)}')
    return default


def parse_size(
    value: Any,
    line: Optional[int],
    report: Reporter,
    default: Optional[float] = DEFAULT_EVENT_SIZE,
) -> Optional[float]:
    if isinstance(value, str) and strip_quotes(value) in SIZE_PRESETS:
        return SIZE_PRESETS[strip_quotes(value)]
    number = to_number(value)
    if number is not None and number > 0:
        return max(MIN_EVENT_SIZE, min(MAX_EVENT_SIZE, number))
    report(line, f'Invalid size "{strip_quotes(value)}". Use small, medium, large or a positive number')
    return default


def parse_rate(value: Any, line: Optional[int], report: Reporter) -> Optional[float]:
    number = to_number(value)
    if number is not None and number > 0:
        return number
    report(line, f'Invalid rate "{strip_quotes(value)}". Rate must be a positive number')
    return None


def parse_delay(value: Any, line: Optional[int], report: Reporter) -> Optional[float]:
    number = to_number(value)
    if number is None:
        report(line, f'Invalid delay "{strip_quotes(value)}"')
        return None
    if number < 0:
        report(line, f"Delay must not be negative, got {value}")
        return 0.0
    return number


def parse_node_type(
    value: Any,
    node_id: str,
    line: Optional[int],
    report: Reporter,
) -> NodeType:
    name = strip_quotes(value)
    if name in NODE_TYPES:
        return NodeType(name)
    report(
        line,
        f'Unknown node type "{name}" for node "{node_id}". Use: {", ".join(NODE_TYPES)}',
    )
    return NodeType.SERVICE


# ---------- node attributes ----------

def apply_node_attribute(
    attrs: NodeAttributes,
    key: str,
    value: Any,
    line: Optional[int],
    report: Reporter,
):
    """Set one recognised attribute, or keep it in ``extra``."""
    if key in ("label", "subsystem", "transformation"):
        setattr(attrs, key, strip_quotes(value))
    elif key == "transformColor":
        attrs.transform_color = strip_quotes(value)
    elif key == "transform":
        attrs.transform = parse_shape(value, line, report, default=None)
    elif key == "delay":
        attrs.delay = parse_delay(value, line, report)
    elif key in ("x", "y"):
        number = to_number(value)
        if number is None:
            report(line, f'Invalid coordinate {key}="{strip_quotes(value)}"')
        else:
            setattr(attrs, key, number)
    elif key == "position":
        if isinstance(value, tuple) and len(value) == 2:
            attrs.x, attrs.y = value
    elif key == "partitions":
        number = to_number(value)
        if number is None or number < 1:
            report(line, f'Invalid partitions "{strip_quotes(value)}"')
        else:
            attrs.partitions = int(number)
    else:
        attrs.extra[key] = coerce_scalar(value) if isinstance(value, str) else value


def build_line_node(
    name: str,
    definition: str,
    line: Optional[int],
    report: Reporter,
    subsystem: Optional[str] = None,
) -> Node:
    """Build a node from ``type, key=value, ...`` (the text after ``name:``)."""
    parts = [p.strip() for p in definition.split(",")]
    node_type = parse_node_type(parts[0], name, line, report)

    attrs = NodeAttributes(subsystem=subsystem)
    for part in parts[1:]:
        if not part:
            continue
        key, sep, value = part.partition("=")
        key = key.strip()
        value = value.strip()
        if not sep or not key or not value:
            report(line, f'Invalid node attribute "{part}" for node "{name}"')
            continue
        apply_node_attribute(attrs, key, value, line, report)

    return Node(id=name, type=node_type, attributes=attrs, line=line)
