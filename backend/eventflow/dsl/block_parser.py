"""
Block grammar.

    event Name { label: "..."; color: "..."; shape: ...; size: ...; }
    transformation Name { input: Event; output: Event; delay: 500; }
    node Name { label: "..."; type: service; position: (X, Y); }
    subsystem "Name" { nodes: [A, B]; color: "..."; }
    flow Name { event: E; source: N; rate: 1.5; path: A -> B[T] -> C; }
    A -> B:top -> C               (edge shorthand)
    Name: type, key=value, ...    (single-line node definition)

Recursive descent over a Scanner. Lines already consumed by the legacy
line grammar are skipped so the two passes never read the same text.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from eventflow.dsl.attributes import (
    apply_node_attribute,
    build_line_node,
    coerce_scalar,
    parse_delay,
    parse_node_type,
    parse_rate,
    parse_shape,
    parse_size,
    strip_comment,
    strip_quotes,
    to_number,
)
from eventflow.dsl.partial import EventSpec, PartialTopology
from eventflow.dsl.paths import parse_edge_line, parse_path
from eventflow.dsl.scanner import QUOTES, Scanner
from eventflow.ir.errors import DSLSyntaxError
from eventflow.ir.topology import Node, NodeAttributes, Subsystem, Transformation

# Looks past `Name` for `:side`, `[attrs]` and then an arrow
_EDGE_AHEAD_RE = re.compile(r"[ \t]*(?::[A-Za-z]*)?[ \t]*(?:\[[^\]\n]*\])?[ \t]*->")

_VALUE_STOPS = ";}\n"

EVENT_KEYS = {"label", "color", "shape", "size", "rate", "source"}
TRANSFORMATION_KEYS = {"label", "input", "output", "delay", "outputRate"}
SUBSYSTEM_KEYS = {"nodes", "color", "label"}
FLOW_KEYS = {"label", "event", "source", "rate", "path", "color", "shape", "size"}


@dataclass
class Block:
    """Key/value pairs of one ``{ ... }`` body, with the line of each key."""
    what: str
    values: Dict[str, Any] = field(default_factory=dict)
    lines: Dict[str, int] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def line_of(self, key: str) -> Optional[int]:
        return self.lines.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self.values


class BlockParser:
    def __init__(self, text: str, claimed_lines: FrozenSet[int] = frozenset()):
        self.result = PartialTopology()
        self.scanner = Scanner(text, self.result.errors)
        self.claimed_lines = claimed_lines

        self._keywords: Dict[str, Callable[[int], None]] = {
            "event": self._event,
            "transformation": self._transformation,
            "node": self._node,
            "subsystem": self._subsystem,
            "flow": self._flow,
        }

    def report(self, line: Optional[int], message: str):
        self.result.report(line, message)

    # ============================================================
    # Top level
    # ============================================================

    def parse(self) -> PartialTopology:
        s = self.scanner

        while True:
            s.skip_whitespace()
            if s.at_end:
                break

            if s.line in self.claimed_lines:
                s.skip_line()
                continue

            start = s.pos
            start_line = s.line
            try:
                self._statement(start_line)
            except DSLSyntaxError as e:
                self.report(e.line or start_line, e.message)
                self._skip_statement()
            s.ensure_progress(start)

        return self.result

    def _statement(self, line: int):
        s = self.scanner
        keyword = s.identifier()

        if not keyword:
            ch = s.advance()
            raise DSLSyntaxError(f'Unexpected character "{ch}"', line)

        if s.match(_EDGE_AHEAD_RE):
            self._edge_line(keyword, line)
            return

        s.skip_inline_space()
        if s.peek() == ":":
            s.advance()
            self._node_line(keyword, line)
            return

        handler = self._keywords.get(keyword)
        if handler is None:
            self._unrecognized(keyword, line)
            return
        handler(line)

    def _edge_line(self, first: str, line: int):
        text = strip_comment(first + self.scanner.rest_of_line())
        edges = parse_edge_line(text, line, self.report)

        for edge in edges:
            self.result.edges.append(edge)
            for node_id in (edge.source, edge.target):
                self.result.add_node(Node(id=node_id, line=line, implicit=True))

    def _node_line(self, name: str, line: int):
        definition = strip_comment(self.scanner.rest_of_line()).strip()
        self.result.add_node(build_line_node(name, definition, line, self.report))

    def _unrecognized(self, keyword: str, line: int):
        self.report(line, f'Unrecognized statement "{keyword}"')
        self._skip_statement()

    def _skip_statement(self):
        """Drop the rest of the line, or a whole { ... } body if one opens on it."""
        s = self.scanner
        s.read_until("{\n")
        if s.peek() == "{":
            self._skip_braces()

    def _skip_braces(self):
        s = self.scanner
        depth = 0
        while not s.at_end:
            ch = s.advance()
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return

    # ============================================================
    # Blocks
    # ============================================================

    def _name(self, keyword: str, line: int) -> str:
        name = self.scanner.identifier()
        if not name:
            raise DSLSyntaxError(f'Expected a name after "{keyword}"', line)
        return name

    def _block(self, what: str, line: int) -> Block:
        s = self.scanner
        block = Block(what=what)

        mark = (s.pos, s.line)
        s.skip_whitespace()
        if s.peek() != "{":
            # Recovery resumes where the header ended, not on the next statement
            s.pos, s.line = mark
            raise DSLSyntaxError(f'Expected "{{" after {what}', line)
        s.advance()

        while True:
            s.skip_whitespace()
            if s.at_end:
                self.report(line, f"Unterminated block for {what}")
                return block
            if s.peek() == "}":
                s.advance()
                return block

            start = s.pos
            key_line = s.line
            key = s.identifier()

            if not key:
                ch = s.advance()
                if ch not in (";", ","):
                    self.report(key_line, f'Unexpected character "{ch}" in {what}')
                continue

            s.skip_inline_space()
            if s.peek() == ":":
                s.advance()
            s.skip_inline_space()

            if key == "path":
                value = self._raw_value()
            else:
                value = self._value(what)

            block.values[key] = value
            block.lines[key] = key_line

            s.skip_inline_space()
            if s.peek() == ";":
                s.advance()
            s.ensure_progress(start)

    def _value(self, what: str) -> Any:
        s = self.scanner
        ch = s.peek()

        if ch == "[":
            return self._array(what)
        if ch == "(":
            return self._position()
        if ch and ch in QUOTES:
            return s.string()

        return coerce_scalar(self._raw_value())

    def _raw_value(self) -> str:
        return strip_comment(self.scanner.read_until(_VALUE_STOPS)).strip()

    def _array(self, what: str) -> list:
        s = self.scanner
        open_line = s.line
        s.advance()  # [
        items = []

        while True:
            s.skip_whitespace()
            ch = s.peek()
            if s.at_end or ch == "}":
                # Leave '}' for the enclosing block
                self.report(open_line, f"Unterminated array in {what}")
                return items
            if ch == "]":
                s.advance()
                return items

            start = s.pos
            if ch in QUOTES:
                item = s.string()
            else:
                item = s.identifier()

            if item:
                items.append(item)
            elif ch == ",":
                s.advance()
            else:
                char_line = s.line
                s.advance()
                self.report(char_line, f'Unexpected character "{ch}" in array')
            s.ensure_progress(start)

    def _position(self) -> Optional[Tuple[float, float]]:
        s = self.scanner
        line = s.line
        s.advance()  # (
        raw = s.read_until(")" + _VALUE_STOPS)
        if s.peek() == ")":
            s.advance()
        else:
            self.report(line, "Unterminated position, expected ')'")

        parts = [p.strip() for p in raw.split(",")]
        numbers = [to_number(p) for p in parts]
        if len(numbers) != 2 or any(n is None for n in numbers):
            self.report(line, f'Invalid position "({raw})", expected (x, y)')
            return None
        return numbers[0], numbers[1]

    def _check_keys(self, block: Block, allowed: set, line: int):
        for key in block.values:
            if key not in allowed:
                self.report(block.line_of(key) or line, f'Unknown property "{key}" in {block.what}')

    # ============================================================
    # Keywords
    # ============================================================

    def _event_spec(self, name: str, block: Block, line: int) -> EventSpec:
        spec = EventSpec(name=name, line=line)

        if "label" in block:
            spec.label = strip_quotes(block.get("label"))
        if "color" in block:
            spec.color = strip_quotes(block.get("color"))
        if "shape" in block:
            # Left unset on error so a flow keeps its event type's value
            spec.shape = parse_shape(block.get("shape"), block.line_of("shape"), self.report, default=None)
        if "size" in block:
            spec.size = parse_size(block.get("size"), block.line_of("size"), self.report, default=None)
        if "rate" in block:
            spec.rate = parse_rate(block.get("rate"), block.line_of("rate"), self.report)
        if "source" in block:
            spec.source = strip_quotes(block.get("source")) or None
        return spec

    def _event(self, line: int):
        name = self._name("event", line)
        block = self._block(f'event "{name}"', line)
        self._check_keys(block, EVENT_KEYS, line)
        self.result.event_types[name] = self._event_spec(name, block, line)

    def _transformation(self, line: int):
        name = self._name("transformation", line)
        block = self._block(f'transformation "{name}"', line)
        self._check_keys(block, TRANSFORMATION_KEYS, line)

        delay = 0.0
        if "delay" in block:
            delay = parse_delay(block.get("delay"), block.line_of("delay"), self.report) or 0.0

        output_rate = 1.0
        if "outputRate" in block:
            number = to_number(block.get("outputRate"))
            if number is None or number <= 0:
                self.report(block.line_of("outputRate"), f'Invalid outputRate for transformation "{name}"')
            else:
                output_rate = number

        self.result.transformations[name] = Transformation(
            name=name,
            label=strip_quotes(block.get("label")) if "label" in block else None,
            input=strip_quotes(block.get("input", "")),
            output=strip_quotes(block.get("output", "")),
            delay=delay,
            output_rate=output_rate,
        )

    def _node(self, line: int):
        name = self._name("node", line)
        block = self._block(f'node "{name}"', line)

        node_type = parse_node_type(block.get("type", "service"), name, block.line_of("type") or line, self.report)
        attrs = NodeAttributes()
        for key, value in block.values.items():
            if key == "type":
                continue
            apply_node_attribute(attrs, key, value, block.line_of(key), self.report)

        self.result.add_node(Node(id=name, type=node_type, attributes=attrs, line=line))

    def _subsystem(self, line: int):
        s = self.scanner
        s.skip_whitespace()
        ch = s.peek()
        name = s.string() if ch and ch in QUOTES else s.identifier()
        if not name:
            raise DSLSyntaxError('Expected a name after "subsystem"', line)

        block = self._block(f'subsystem "{name}"', line)
        self._check_keys(block, SUBSYSTEM_KEYS, line)

        subsystem: Subsystem = self.result.subsystem(name)
        members = block.get("nodes", [])
        if isinstance(members, str):
            members = [m.strip() for m in members.split(",") if m.strip()]
        elif not isinstance(members, list):
            members = [str(members)]
        for node_id in members:
            subsystem.add_node(node_id)
        if "color" in block:
            subsystem.color = strip_quotes(block.get("color")) or None

    def _flow(self, line: int):
        name = self._name("flow", line)
        block = self._block(f'flow "{name}"', line)
        self._check_keys(block, FLOW_KEYS, line)

        spec = self._event_spec(name, block, line)
        if "event" in block:
            spec.event_type = strip_quotes(block.get("event")) or None
        if "path" in block:
            spec.path = parse_path(str(block.get("path")), block.line_of("path"), self.report)

        self.result.flows.append(spec)


def parse_blocks(text: str, claimed_lines: FrozenSet[int] = frozenset()) -> PartialTopology:
    return BlockParser(text, claimed_lines).parse()
