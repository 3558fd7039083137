"""Every bundled example parses, validates and animates cleanly."""

import pytest

from eventflow.dsl.parser import parse_dsl
from eventflow.samples import DEFAULT_EXAMPLE, EXAMPLES, get_example, list_examples
from eventflow.simulation.engine import AnimationEngine
from eventflow.validation import validate_topology


@pytest.mark.parametrize("name", list_examples())
def test_example_is_clean(name):
    topology = parse_dsl(EXAMPLES[name])
    result = validate_topology(topology)

    assert topology.errors == []
    assert result.errors == []
    assert topology.nodes and topology.edges and topology.events


@pytest.mark.parametrize("name", list_examples())
def test_example_animates(name):
    engine = AnimationEngine(parse_dsl(EXAMPLES[name]), seed=4)
    engine.run(6000, frame_ms=50)

    assert engine.spawned_count > 0
    assert engine.spawned_count >= engine.completed_count


def test_lookup():
    assert get_example(DEFAULT_EXAMPLE) == EXAMPLES["payment"]
    assert get_example("missing") is None


def test_payment_structure():
    t = parse_dsl(get_example("payment"))

    assert [e.name for e in t.events] == ["OrderFlow"]
    assert [e.name for e in t.event_types] == ["OrderCreated", "PaymentProcessed", "Notification"]
    assert t.get_node("PaymentSvc").attributes.transformation == "ProcessPayment"
    assert t.subsystems[0].nodes == ["PaymentSvc", "NotifySvc", "OrdersDB"]


def test_legacy_mapic_matches_block_version():
    legacy = parse_dsl(get_example("legacy_mapic"))
    blocks = parse_dsl(get_example("mapic"))

    legacy_edges = [(e.source, e.target, e.from_side, e.to_side) for e in legacy.edges]
    block_edges = [(e.source, e.target, e.from_side, e.to_side) for e in blocks.edges]

    assert legacy_edges == block_edges[: len(legacy_edges)]
    assert [e.name for e in legacy.events] == ["sorting", "nes"]
    assert legacy.get_node("sorting").attributes.x == -200
