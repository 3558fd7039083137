"""
Legacy line grammar.

    subsystem "Core":
      gateway: service, label="API Gateway"
      color: "#1e293b"

    events:
      - name: order
        color: "#22c55e"
        shape: square
        path: gateway -> orders -> db

Indentation delimits both blocks. Every line consumed here is recorded in
``claimed_lines`` so the block grammar skips it.
"""

import re
from typing import Optional

from eventflow.dsl.attributes import (
    build_line_node,
    parse_rate,
    parse_shape,
    parse_size,
    strip_comment,
    strip_quotes,
)
from eventflow.dsl.partial import EventSpec, PartialTopology
from eventflow.dsl.paths import ARROW, parse_path

_SUBSYSTEM_HEADER_RE = re.compile(r"""^subsystem\s+["'](.+)["']\s*:$""")
_EVENT_ITEM_RE = re.compile(r"^-\s*name\s*:(.*)$")
_PROPERTY_RE = re.compile(r"^([A-Za-z_]+)\s*:(.*)$")

EVENT_PROPERTIES = ("label", "color", "shape", "size", "source", "rate", "path")


def _indented(line: str) -> bool:
    return line.startswith("  ") or line.startswith("\t")


class LegacyParser:
    def __init__(self, text: str):
        self.lines = text.split("\n")
        self.result = PartialTopology()

        self._subsystem: Optional[str] = None
        self._in_events = False
        self._event: Optional[EventSpec] = None

    def report(self, line: Optional[int], message: str):
        self.result.report(line, message)

    def claim(self, line: int):
        self.result.claimed_lines.add(line)

    def parse(self) -> PartialTopology:
        for index, raw in enumerate(self.lines):
            line = index + 1
            trimmed = raw.strip()
            if not trimmed or trimmed.startswith("#"):
                continue

            header = _SUBSYSTEM_HEADER_RE.match(strip_comment(trimmed))
            if header:
                self._close_events()
                self._subsystem = header.group(1)
                self.result.subsystem(self._subsystem)
                self.claim(line)
                continue

            if strip_comment(trimmed) == "events:":
                self._close_events()
                self._subsystem = None
                self._in_events = True
                self.claim(line)
                continue

            if self._subsystem is not None:
                if _indented(raw):
                    self._subsystem_line(trimmed, line)
                    continue
                self._subsystem = None

            if self._in_events:
                if _indented(raw) or trimmed.startswith("-"):
                    self._events_line(trimmed, line)
                    continue
                # A top-level line closes the block and belongs to the other grammar
                self._close_events()

        self._close_events()
        return self.result

    # ---------- subsystem "Name": ----------

    def _subsystem_line(self, trimmed: str, line: int):
        if trimmed.startswith("color:"):
            color = strip_comment(trimmed[len("color:"):].strip())
            self.result.subsystem(self._subsystem).color = strip_quotes(color) or None
            self.claim(line)
            return

        # Edge lines inside the block are left to the block grammar
        text = strip_comment(trimmed)
        name, sep, definition = text.partition(":")
        if not sep or not name.strip() or ARROW in text:
            return

        node = build_line_node(name.strip(), definition.strip(), line, self.report, subsystem=self._subsystem)
        self.result.add_node(node)
        self.claim(line)

    # ---------- events: ----------

    def _events_line(self, trimmed: str, line: int):
        self.claim(line)

        item = _EVENT_ITEM_RE.match(trimmed)
        if item:
            self._close_event()
            name = strip_quotes(strip_comment(item.group(1).strip()))
            if not name:
                self.report(line, "Event name cannot be empty")
                return
            self._event = EventSpec(name=name, line=line)
            return

        if self._event is None:
            self.report(line, f'Expected "- name:" in events block, got "{trimmed}"')
            return

        prop = _PROPERTY_RE.match(trimmed.lstrip("- "))
        if not prop:
            self.report(line, f'Invalid event property "{trimmed}"')
            return

        key, value = prop.group(1), strip_comment(prop.group(2).strip())
        event = self._event

        if key not in EVENT_PROPERTIES:
            self.report(line, f'Unknown property "{key}" for event "{event.name}"')
        elif key == "label":
            event.label = strip_quotes(value)
        elif key == "color":
            event.color = strip_quotes(value)
        elif key == "shape":
            event.shape = parse_shape(value, line, self.report)
        elif key == "size":
            event.size = parse_size(value, line, self.report)
        elif key == "source":
            event.source = strip_quotes(value) or None
        elif key == "rate":
            event.rate = parse_rate(value, line, self.report)
        elif key == "path":
            event.path = parse_path(value, line, self.report)

    def _close_event(self):
        if self._event is not None:
            self.result.legacy_events.append(self._event)
            self._event = None

    def _close_events(self):
        self._close_event()
        self._in_events = False


def parse_legacy(text: str) -> PartialTopology:
    return LegacyParser(text).parse()
