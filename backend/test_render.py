"""Tests for the Mermaid export and the SVG snapshot renderer."""

from eventflow.compiler import compile_to_mermaid
from eventflow.compiler.layout import compute_layout
from eventflow.compiler.render_mermaid import mermaid_id, render_mermaid
from eventflow.dsl.parser import parse_dsl
from eventflow.ir.topology import EventShape
from eventflow.renderer import SvgRenderer, SymbolCache, render_svg
from eventflow.simulation.engine import AnimationEngine


class TestMermaid:
    def test_scenario(self, scenario_topology):
        assert render_mermaid(scenario_topology).splitlines() == [
            "flowchart LR",
            'A["A"]',
            'B["B"]',
            "A --> B",
        ]

    def test_subsystems_and_shapes(self):
        text = compile_to_mermaid(
            'node web-gateway { label: "Web GW"; type: external }\n'
            "orders: topic\n"
            'subsystem "Edge" { nodes: [web-gateway] }\n'
            "web-gateway -> orders -> store\n"
            "store: db\n"
        )
        lines = text.splitlines()

        assert lines[0] == "flowchart LR"
        assert lines[1] == 'subgraph sub_0["Edge"]'
        assert lines[2] == '  web_gateway(["Web GW"])'
        assert lines[3] == "end"
        assert 'orders[/"orders"/]' in lines
        assert 'store[("store")]' in lines
        assert "web_gateway --> orders" in lines
        assert "orders --> store" in lines

    def test_mermaid_id(self):
        assert mermaid_id("order-api.v2") == "order_api_v2"


class TestSymbolCache:
    def test_builds_each_symbol_once(self):
        cache = SymbolCache()

        first = cache.get(EventShape.KEY, "#f2f542")
        second = cache.get(EventShape.KEY, "#f2f542")

        assert first == second == "icon-key-f2f542"
        assert (cache.misses, cache.hits) == (1, 1)
        assert len(cache) == 1

    def test_geometric_shapes_have_no_symbol(self):
        cache = SymbolCache()

        assert cache.get(EventShape.CIRCLE, "#000000") is None
        assert len(cache) == 0

    def test_defs_only_for_used_symbols(self):
        cache = SymbolCache()
        used = cache.get(EventShape.MESSAGE, "#111111")
        cache.get(EventShape.ALERT, "#222222")

        defs = cache.defs([used])

        assert len(defs) == 1
        assert f'id="{used}"' in defs[0]

    def test_clear(self):
        cache = SymbolCache()
        cache.get(EventShape.PULSE, "#333333")

        cache.clear()

        assert len(cache) == 0
        assert (cache.hits, cache.misses) == (0, 0)


class TestSvgRenderer:
    DSL = (
        'event Doc { shape: document; color: "#3b82f6" }\n'
        'subsystem "Core" { nodes: [A, B] }\n'
        "A -> B -> C\n"
        "B: processor, delay=5000\n"
    )

    def test_layout_only(self):
        topology = parse_dsl(self.DSL)
        svg = render_svg(topology, compute_layout(topology))

        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        for node_id in ("A", "B", "C"):
            assert f'data-id="{node_id}"' in svg
        assert svg.count("marker-end=") == 2
        assert ">Core</text>" in svg
        assert "<use" not in svg

    def test_particles_and_parked_particles(self):
        topology = parse_dsl(self.DSL)
        engine = AnimationEngine(topology, seed=2)
        engine.run(2600)
        cache = SymbolCache()

        svg = SvgRenderer(cache).render(topology, engine.layout, engine.particles, engine.delayed)

        assert engine.delayed
        assert svg.count("<use ") == len(engine.particles) + len(engine.delayed)
        assert svg.count("<symbol ") == 1
        assert cache.misses == 1

    def test_labels_are_escaped(self):
        topology = parse_dsl('node A { label: "R&D <core>" }')
        svg = render_svg(topology, compute_layout(topology))

        assert "R&amp;D &lt;core&gt;" in svg

    def test_empty_topology(self):
        topology = parse_dsl("")
        svg = render_svg(topology, compute_layout(topology))
        assert svg.startswith("<svg")
