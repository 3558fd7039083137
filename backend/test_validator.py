"""Tests for referential integrity validation."""

from eventflow.dsl.parser import parse_dsl
from eventflow.ir.topology import Edge, FlowEvent, Node, Subsystem, Topology, Transformation
from eventflow.validation import TopologyValidator, validate_topology

CLEAN_DSL = """\
event Order { color: "#3b82f6" }
event Payment { shape: package }
transformation Pay { input: Order; output: Payment; delay: 100 }
node Api { type: service }
node Billing { type: service; transformation: Pay }
subsystem "Core" { nodes: [Api, Billing] }
Api -> Billing
flow Checkout { event: Order; source: Api; path: Api -> Billing }
"""


def test_clean_document_is_valid():
    t = parse_dsl(CLEAN_DSL)
    result = validate_topology(t)

    assert t.errors == []
    assert result.valid is True
    assert result.errors == []


def test_unknown_subsystem_member():
    result = validate_topology(parse_dsl('subsystem "X" { nodes: [Y] }'))

    assert result.valid is False
    assert result.errors == ['Subsystem "X" references unknown node: Y']


def test_unknown_edge_endpoints():
    topology = Topology(
        nodes=[Node(id="A")],
        edges=[Edge(source="A", target="Ghost"), Edge(source="Phantom", target="A")],
    )

    assert validate_topology(topology).errors == [
        "Edge references unknown node: Ghost",
        "Edge references unknown node: Phantom",
    ]


def test_unknown_event_source_reported_once():
    result = validate_topology(parse_dsl("A -> B\nevent E { source: Nowhere }"))

    # E is both an event type and the event list entry
    assert result.errors == ['Event "E" references unknown source: Nowhere']


def test_unknown_flow_event_type():
    result = validate_topology(parse_dsl("A -> B\nflow F { event: Missing; path: A -> B }"))
    assert result.errors == ['Flow "F" references unknown event: Missing']


def test_unknown_transformation_events():
    result = validate_topology(parse_dsl("transformation T { input: In; output: Out }"))

    assert result.errors == [
        'Transformation "T" references unknown input event: In',
        'Transformation "T" references unknown output event: Out',
    ]


def test_unknown_node_transformation():
    result = validate_topology(parse_dsl("node A { transformation: Nope }"))
    assert result.errors == ['Node "A" references unknown transformation: Nope']


def test_every_violation_is_reported():
    topology = Topology(
        nodes=[Node(id="A")],
        edges=[Edge(source="A", target="B")],
        events=[FlowEvent(name="e", source="C")],
        transformations=[Transformation(name="T", input="x", output="e")],
        subsystems=[Subsystem(name="S", nodes=["A", "D"])],
    )

    result = TopologyValidator().validate(topology)

    assert result.valid is False
    assert result.errors == [
        "Edge references unknown node: B",
        'Event "e" references unknown source: C',
        'Transformation "T" references unknown input event: x',
        'Subsystem "S" references unknown node: D',
    ]


def test_empty_topology_is_valid():
    assert validate_topology(Topology()).valid is True
