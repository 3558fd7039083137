# backend/eventflow/compiler/render_mermaid.py

import re

from eventflow.ir.topology import NodeType, Topology

_UNSAFE_ID_RE = re.compile(r"[^A-Za-z0-9_]")

# Mermaid shape brackets per node type
NODE_SHAPES = {
    NodeType.SERVICE: ('["', '"]'),
    NodeType.TOPIC: ('[/"', '"/]'),
    NodeType.DB: ('[("', '")]'),
    NodeType.PROCESSOR: ('{{"', '"}}'),
    NodeType.EXTERNAL: ('(["', '"])'),
}


def mermaid_id(node_id: str) -> str:
    return _UNSAFE_ID_RE.sub("_", node_id)


def _node_line(node) -> str:
    opening, closing = NODE_SHAPES.get(node.type, NODE_SHAPES[NodeType.SERVICE])
    label = node.label.replace('"', "'")
    return f"{mermaid_id(node.id)}{opening}{label}{closing}"


def render_mermaid(topology: Topology) -> str:
    lines = ["flowchart LR"]
    node_map = topology.node_map()
    placed = set()

    # -------------------------
    # Subsystems
    # -------------------------
    for index, subsystem in enumerate(topology.subsystems):
        members = [node_map[n] for n in subsystem.nodes if n in node_map and n not in placed]
        if not members:
            continue

        lines.append(f'subgraph sub_{index}["{subsystem.name}"]')
        for node in members:
            lines.append(f"  {_node_line(node)}")
            placed.add(node.id)
        lines.append("end")

    # -------------------------
    # Standalone nodes
    # -------------------------
    for node in topology.nodes:
        if node.id not in placed:
            lines.append(_node_line(node))

    # -------------------------
    # Edges
    # -------------------------
    for edge in topology.edges:
        lines.append(f"{mermaid_id(edge.source)} --> {mermaid_id(edge.target)}")

    return "\n".join(lines)
