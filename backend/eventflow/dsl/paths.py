"""
Arrow syntax shared by both grammars.

  - edge shorthand:  A -> B:top -> C[attr=1]
  - itineraries:     A -> B[shape=square, color=#fff] -> C[Transform] -> D
"""

import re
from typing import Dict, List, Optional, Tuple

from eventflow.dsl.attributes import Reporter, parse_shape, strip_quotes
from eventflow.ir.topology import SIDES, Edge, PathStep, Side

ARROW = "->"

_NAME_RE = re.compile(r"^[A-Za-z0-9_\-]+$")
_SEGMENT_RE = re.compile(r"^([A-Za-z0-9_\-]+)(?::([A-Za-z]+))?\s*(?:\[(.*)\])?$")


def split_arrows(text: str) -> List[str]:
    return [part.strip() for part in text.split(ARROW)]


# ============================================================
# Itineraries
# ============================================================

def parse_step_attributes(
    text: str,
    line: Optional[int],
    report: Reporter,
) -> Dict[str, str]:
    """``shape=square, color=#fff`` -> dict; a bare name is a transformation."""
    attributes: Dict[str, str] = {}
    for pair in text.split(","):
        key, sep, value = pair.partition("=")
        key = key.strip()
        value = strip_quotes(value)
        if not key:
            continue
        if not sep:
            attributes["transformation"] = key
        elif value:
            if key == "shape" and parse_shape(value, line, report, default=None) is None:
                continue
            attributes[key] = value
        else:
            report(line, f'Missing value for path attribute "{key}"')
    return attributes


def parse_path(
    text: str,
    line: Optional[int],
    report: Reporter,
) -> Optional[List[PathStep]]:
    """Parse an itinerary string. Paths shorter than two steps are dropped."""
    steps: List[PathStep] = []

    for segment in split_arrows(text):
        if not segment:
            continue

        m = _SEGMENT_RE.match(segment)
        if not m:
            report(line, f'Invalid path segment "{segment}"')
            continue

        node_id, _side, attr_text = m.groups()
        attributes = parse_step_attributes(attr_text, line, report) if attr_text else {}
        steps.append(PathStep(node_id=node_id, attributes=attributes or None))

    if len(steps) <= 1:
        return None
    return steps


# ============================================================
# Edge shorthand
# ============================================================

def _parse_endpoint(
    text: str,
    line: Optional[int],
    report: Reporter,
) -> Tuple[str, Optional[Side]]:
    # Trailing [attr=value] is display-only on edges
    name = text.split("[", 1)[0].strip()
    side: Optional[Side] = None

    if ":" in name:
        name, _, side_text = name.partition(":")
        name = name.strip()
        side_text = side_text.strip()
        if side_text in SIDES:
            side = Side(side_text)
        else:
            report(line, f'Invalid side "{side_text}" for "{name}". Use: {", ".join(SIDES)}')

    return name, side


def parse_edge_line(
    text: str,
    line: Optional[int],
    report: Reporter,
) -> List[Edge]:
    """Expand ``A -> B -> C`` into consecutive edges."""
    endpoints = [_parse_endpoint(part, line, report) for part in split_arrows(text)]
    edges: List[Edge] = []

    for (source, from_side), (target, to_side) in zip(endpoints, endpoints[1:]):
        if not source or not target:
            report(line, "Invalid flow connection syntax")
            continue
        if not _NAME_RE.match(source) or not _NAME_RE.match(target):
            bad = source if not _NAME_RE.match(source) else target
            report(line, f'Invalid node name "{bad}" in flow connection')
            continue

        edges.append(
            Edge(
                source=source,
                target=target,
                from_side=from_side or Side.RIGHT,
                to_side=to_side or Side.LEFT,
            )
        )

    return edges
