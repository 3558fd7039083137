"""
Left-to-right layered layout.

Levels come from an iterative depth-first walk started at every node with
no incoming edge (in node order). Edges that close a cycle are set aside,
and the remaining edges, which form a DAG, push each target at least one
level past its source. Manual ``x``/``y`` attributes override the
computed position.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Set, Tuple

from eventflow.compiler.edges import connection_point, route_edge
from eventflow.compiler.types import Layout, LayoutEdge, LayoutNode
from eventflow.ir.topology import Topology

logger = logging.getLogger(__name__)

HORIZONTAL_SPACING = 220
VERTICAL_SPACING = 120

_UNSEEN, _ACTIVE, _DONE = 0, 1, 2


def _walk(
    root: str,
    outgoing: Dict[str, List[str]],
    state: Dict[str, int],
    visit_order: List[str],
    finish_order: List[str],
    back_edges: Set[Tuple[str, str]],
):
    state[root] = _ACTIVE
    visit_order.append(root)
    stack = [(root, iter(outgoing[root]))]

    while stack:
        node, successors = stack[-1]
        nxt = next(successors, None)

        if nxt is None:
            state[node] = _DONE
            finish_order.append(node)
            stack.pop()
            continue

        seen = state.get(nxt, _UNSEEN)
        if seen == _ACTIVE:
            back_edges.add((node, nxt))
        elif seen == _UNSEEN:
            state[nxt] = _ACTIVE
            visit_order.append(nxt)
            stack.append((nxt, iter(outgoing[nxt])))


def assign_levels(
    node_ids: List[str],
    edges: Iterable[Tuple[str, str]],
) -> Tuple[Dict[str, int], List[str]]:
    """Return ``(levels, visit_order)`` for the given graph.

    Edges whose endpoints are not in ``node_ids`` are ignored.
    """
    outgoing: Dict[str, List[str]] = {n: [] for n in node_ids}
    in_degree: Dict[str, int] = {n: 0 for n in node_ids}

    for source, target in edges:
        if source in outgoing and target in outgoing:
            outgoing[source].append(target)
            in_degree[target] += 1

    roots = [n for n in node_ids if in_degree[n] == 0]
    if not roots and node_ids:
        roots = [node_ids[0]]

    state: Dict[str, int] = {}
    visit_order: List[str] = []
    finish_order: List[str] = []
    back_edges: Set[Tuple[str, str]] = set()

    # Roots first, then anything only reachable through a cycle
    for node_id in roots + node_ids:
        if node_id not in state:
            _walk(node_id, outgoing, state, visit_order, finish_order, back_edges)

    # Reverse finish order is a topological order once back edges are removed
    levels = {n: 0 for n in node_ids}
    for node_id in reversed(finish_order):
        for target in outgoing[node_id]:
            if (node_id, target) in back_edges:
                continue
            levels[target] = max(levels[target], levels[node_id] + 1)

    return levels, visit_order


def compute_layout(topology: Topology) -> Layout:
    layout = Layout()
    if not topology.nodes:
        return layout

    node_map = topology.node_map()
    node_ids = list(node_map)
    levels, visit_order = assign_levels(node_ids, ((e.source, e.target) for e in topology.edges))

    # ---- nodes ----
    level_groups: Dict[int, List[str]] = defaultdict(list)
    for node_id in visit_order:
        level_groups[levels[node_id]].append(node_id)

    for level in sorted(level_groups):
        group = level_groups[level]
        start_y = -(len(group) - 1) * VERTICAL_SPACING / 2

        for index, node_id in enumerate(group):
            node = node_map[node_id]
            x = level * HORIZONTAL_SPACING
            y = start_y + index * VERTICAL_SPACING

            if node.attributes.x is not None:
                x = node.attributes.x
            if node.attributes.y is not None:
                y = node.attributes.y

            layout.nodes[node_id] = LayoutNode(node=node, x=x, y=y, level=level)

    # ---- edges ----
    pair_counts: Dict[Tuple[str, str], int] = defaultdict(int)

    for edge in topology.edges:
        source = layout.nodes.get(edge.source)
        target = layout.nodes.get(edge.target)
        if source is None or target is None:
            continue

        offset_index = pair_counts[(edge.source, edge.target)]
        pair_counts[(edge.source, edge.target)] += 1

        from_point = connection_point(source, edge.from_side)
        to_point = connection_point(target, edge.to_side)

        layout.edges.append(
            LayoutEdge(
                source=edge.source,
                target=edge.target,
                from_point=from_point,
                to_point=to_point,
                path=route_edge(from_point, to_point, offset_index, edge.from_side, edge.to_side),
                from_side=edge.from_side,
                to_side=edge.to_side,
                offset_index=offset_index,
            )
        )

    logger.debug(
        "Layout: %d nodes on %d levels, %d edges",
        len(layout.nodes),
        len(level_groups),
        len(layout.edges),
    )
    return layout
