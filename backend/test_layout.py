"""Tests for level assignment and node placement."""

import random

from eventflow.compiler.layout import (
    HORIZONTAL_SPACING,
    VERTICAL_SPACING,
    assign_levels,
    compute_layout,
)
from eventflow.dsl.parser import parse_dsl
from eventflow.ir.topology import Edge, Node, Topology


def levels_of(dsl):
    layout = compute_layout(parse_dsl(dsl))
    return {node_id: n.level for node_id, n in layout.nodes.items()}


def test_chain_levels_and_positions(scenario_topology):
    layout = compute_layout(scenario_topology)

    a, b = layout.nodes["A"], layout.nodes["B"]
    assert (a.level, b.level) == (0, 1)
    assert (a.x, a.y) == (0, 0)
    assert (b.x, b.y) == (HORIZONTAL_SPACING, 0)


def test_longest_path_wins():
    assert levels_of("A -> B -> C\nA -> C") == {"A": 0, "B": 1, "C": 2}


def test_level_centred_around_zero():
    layout = compute_layout(parse_dsl("A -> B\nA -> C\nA -> D"))
    ys = [layout.nodes[n].y for n in ("B", "C", "D")]

    assert ys == [-VERTICAL_SPACING, 0, VERTICAL_SPACING]
    assert all(layout.nodes[n].x == HORIZONTAL_SPACING for n in ("B", "C", "D"))


def test_cycle_terminates():
    levels = levels_of("S -> A -> B -> C -> A")

    assert levels["S"] == 0
    assert levels["A"] < levels["B"] < levels["C"]


def test_pure_cycle_seeds_first_node():
    levels = levels_of("A -> B -> C -> A")
    assert levels == {"A": 0, "B": 1, "C": 2}


def test_self_loop():
    assert levels_of("A -> A\nA -> B") == {"A": 0, "B": 1}


def test_disconnected_nodes_sit_at_level_zero():
    levels = levels_of("A -> B\nlonely: db\nX -> Y")
    assert levels["lonely"] == 0
    assert levels["X"] == 0


def test_acyclic_levels_respect_edges():
    rng = random.Random(99)

    for _ in range(50):
        count = rng.randint(2, 12)
        node_ids = [f"n{i}" for i in range(count)]
        edges = [
            (node_ids[i], node_ids[j])
            for i in range(count)
            for j in range(i + 1, count)
            if rng.random() < 0.3
        ]
        rng.shuffle(edges)
        rng.shuffle(node_ids)

        levels, visit_order = assign_levels(node_ids, edges)
        targets = {t for _, t in edges}

        assert sorted(visit_order) == sorted(node_ids)
        for source, target in edges:
            assert levels[source] < levels[target]
        for node_id in node_ids:
            if node_id not in targets:
                assert levels[node_id] == 0


def test_manual_placement_wins():
    layout = compute_layout(parse_dsl("A -> B -> C\nC: service, x=-75, y=333"))
    c = layout.nodes["C"]

    assert (c.x, c.y) == (-75, 333)
    assert c.level == 2


def test_position_tuple_sets_both_coordinates():
    layout = compute_layout(parse_dsl("node A { position: (10, 20) }"))
    assert (layout.nodes["A"].x, layout.nodes["A"].y) == (10, 20)


def test_single_axis_override():
    layout = compute_layout(parse_dsl("A -> B\nB: service, y=50"))
    assert (layout.nodes["B"].x, layout.nodes["B"].y) == (HORIZONTAL_SPACING, 50)


def test_parallel_edges_get_increasing_offsets():
    layout = compute_layout(parse_dsl("A -> B\nA -> B\nB -> C\nA -> B"))
    assert [e.offset_index for e in layout.edges] == [0, 1, 0, 2]


def test_edges_with_missing_endpoints_are_dropped():
    topology = Topology(nodes=[Node(id="A")], edges=[Edge(source="A", target="Ghost")])
    layout = compute_layout(topology)

    assert list(layout.nodes) == ["A"]
    assert layout.edges == []


def test_empty_topology():
    layout = compute_layout(Topology())
    assert layout.nodes == {} and layout.edges == []


def test_layout_is_deterministic():
    dsl = "A -> B -> D\nA -> C -> D\nD -> A\nE: topic"
    assert compute_layout(parse_dsl(dsl)) == compute_layout(parse_dsl(dsl))


def test_layout_lookups():
    layout = compute_layout(parse_dsl("A -> B\nA -> C\nB -> C"))

    assert layout.outgoing("A") == [0, 1]
    assert layout.outgoing("C") == []
    assert layout.find_edge("B", "C") == 2
    assert layout.find_edge("C", "A") == -1
    assert layout.get_node("B").id == "B"
    assert layout.get_node("missing") is None
