"""
DSL entry point.

Both grammars run over the same text and are merged:

  1. The legacy line pass runs first and claims the lines it consumes.
  2. The block pass scans everything else.
  3. Nodes from both passes are replayed in line order. An explicit
     definition replaces any earlier one; an edge-created node is only
     added when the id is still unknown.
  4. Events: flow blocks followed by legacy ``events:`` items; when
     neither exists, the ``event {}`` declarations; else one default event.
"""

import logging
from typing import Dict, List

from eventflow.dsl.block_parser import parse_blocks
from eventflow.dsl.legacy_parser import parse_legacy
from eventflow.dsl.partial import PartialTopology
from eventflow.ir.errors import ParseError
from eventflow.ir.topology import (
    DEFAULT_EVENT_COLOR,
    DEFAULT_EVENT_RATE,
    DEFAULT_EVENT_SIZE,
    EventShape,
    FlowEvent,
    Node,
    Subsystem,
    Topology,
)

logger = logging.getLogger(__name__)

DEFAULT_EVENT_NAME = "event"


def default_event() -> FlowEvent:
    return FlowEvent(
        name=DEFAULT_EVENT_NAME,
        color=DEFAULT_EVENT_COLOR,
        shape=EventShape.CIRCLE,
        size=DEFAULT_EVENT_SIZE,
        source=None,
        rate=DEFAULT_EVENT_RATE,
    )


def parse_dsl(text: str) -> Topology:
    """Parse DSL text into a Topology. Never raises."""
    if not text or not text.strip():
        return Topology()

    legacy = parse_legacy(text)
    blocks = parse_blocks(text, frozenset(legacy.claimed_lines))

    topology = _merge(legacy, blocks)

    logger.debug(
        "Parsed DSL: %d nodes, %d edges, %d events, %d errors",
        len(topology.nodes),
        len(topology.edges),
        len(topology.events),
        len(topology.errors),
    )
    return topology


# ============================================================
# Merge
# ============================================================

def _merge(legacy: PartialTopology, blocks: PartialTopology) -> Topology:
    errors: List[ParseError] = legacy.errors + blocks.errors

    event_types = [spec.build() for spec in blocks.event_types.values()]
    events = _merge_events(legacy, blocks, event_types)

    errors.sort(key=lambda e: (e.line is None, e.line or 0))

    return Topology(
        nodes=_merge_nodes(legacy.nodes + blocks.nodes),
        edges=legacy.edges + blocks.edges,
        events=events,
        transformations=list(blocks.transformations.values()),
        subsystems=_merge_subsystems(legacy, blocks),
        errors=errors,
        event_types=event_types,
    )


def _merge_nodes(nodes: List[Node]) -> List[Node]:
    merged: Dict[str, Node] = {}

    # sorted() is stable, so definitions on the same line keep pass order
    for node in sorted(nodes, key=lambda n: n.line or 0):
        if node.implicit:
            merged.setdefault(node.id, node)
        else:
            merged[node.id] = node

    return list(merged.values())


def _merge_subsystems(legacy: PartialTopology, blocks: PartialTopology) -> List[Subsystem]:
    merged: Dict[str, Subsystem] = {}

    for partial in (legacy, blocks):
        for subsystem in partial.subsystems.values():
            target = merged.setdefault(subsystem.name, Subsystem(name=subsystem.name))
            for node_id in subsystem.nodes:
                target.add_node(node_id)
            if subsystem.color:
                target.color = subsystem.color

    return list(merged.values())


def _merge_events(
    legacy: PartialTopology,
    blocks: PartialTopology,
    event_types: List[FlowEvent],
) -> List[FlowEvent]:
    by_name = {e.name: e for e in event_types}
    flows = [spec.build(by_name.get(spec.event_type)) for spec in blocks.flows]
    flows += [spec.build() for spec in legacy.legacy_events]

    if flows:
        if blocks.flows and legacy.legacy_events:
            logger.debug(
                "Combining %d flow blocks with %d legacy events",
                len(blocks.flows),
                len(legacy.legacy_events),
            )
        return flows

    if event_types:
        return list(event_types)

    return [default_event()]
