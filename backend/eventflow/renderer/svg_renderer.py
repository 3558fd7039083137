from html import escape
from typing import Iterable, List, Optional

from eventflow.compiler.types import Layout, LayoutNode
from eventflow.ir.topology import EventShape, FlowEvent, Topology
from eventflow.renderer.symbols import SymbolCache
from eventflow.simulation.particles import DelayedParticle, Particle
from eventflow.visual.visual_style import (
    BACKGROUND_COLOR,
    EDGE_COLOR,
    node_size,
    node_style,
)

PADDING = 60
SUBSYSTEM_PADDING = 30
SUBSYSTEM_LABEL_HEIGHT = 24
PARTICLE_SIZE = 10
SUBSYSTEM_COLORS = ["#6366f1", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#06b6d4"]


def _fmt(value: float) -> str:
    return f"{value:.1f}".rstrip("0").rstrip(".")


class SvgRenderer:
    """
    Draws a layout snapshot, optionally with particles, as one SVG document.

    The symbol cache is owned by the renderer instance (or passed in to be
    shared between renderers); nothing is cached globally.
    """

    def __init__(self, symbols: Optional[SymbolCache] = None):
        self.symbols = symbols if symbols is not None else SymbolCache()

    def render(
        self,
        topology: Topology,
        layout: Layout,
        particles: Iterable[Particle] = (),
        delayed: Iterable[DelayedParticle] = (),
    ) -> str:
        min_x, min_y, max_x, max_y = self._bounds(layout)
        width = max_x - min_x + 2 * PADDING
        height = max_y - min_y + 2 * PADDING

        body: List[str] = []
        used_symbols: List[str] = []

        body.extend(self._subsystems(topology, layout))

        for edge in layout.edges:
            p = edge.path
            body.append(
                f'<path d="M {_fmt(p.start.x)} {_fmt(p.start.y)} '
                f'C {_fmt(p.cp1.x)} {_fmt(p.cp1.y)}, {_fmt(p.cp2.x)} {_fmt(p.cp2.y)}, '
                f'{_fmt(p.end.x)} {_fmt(p.end.y)}" '
                f'fill="none" stroke="{EDGE_COLOR}" stroke-width="3" marker-end="url(#arrow)"/>'
            )

        for particle in particles:
            body.append(self._particle(particle.event, particle.x, particle.y, 1.0, used_symbols))

        for parked in delayed:
            node = layout.get_node(parked.node_id)
            if node is None:
                continue
            scale = 0.8 + 0.3 * parked.elapsed_fraction
            body.append(self._particle(parked.particle.event, node.x, node.y, scale, used_symbols))

        for node in layout.nodes.values():
            body.append(self._node(node))

        svg = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(width)}" height="{_fmt(height)}" '
            f'viewBox="{_fmt(min_x - PADDING)} {_fmt(min_y - PADDING)} {_fmt(width)} {_fmt(height)}">',
            "<defs>",
            f'<marker id="arrow" markerWidth="12" markerHeight="12" refX="10" refY="6" orient="auto">'
            f'<path d="M0,0 L12,6 L0,12 z" fill="{EDGE_COLOR}"/></marker>',
            *self.symbols.defs(used_symbols),
            "</defs>",
            f'<rect x="{_fmt(min_x - PADDING)}" y="{_fmt(min_y - PADDING)}" '
            f'width="{_fmt(width)}" height="{_fmt(height)}" fill="{BACKGROUND_COLOR}"/>',
            *body,
            "</svg>",
        ]
        return "\n".join(svg)

    # ---------- pieces ----------

    def _bounds(self, layout: Layout):
        if not layout.nodes:
            return 0.0, 0.0, 0.0, 0.0

        xs, ys = [], []
        for node in layout.nodes.values():
            w, h = node_size(node.type)
            xs.extend([node.x - w / 2, node.x + w / 2])
            ys.extend([node.y - h / 2, node.y + h / 2])

        # Room for subsystem frames around the outermost nodes
        return (
            min(xs) - SUBSYSTEM_PADDING,
            min(ys) - SUBSYSTEM_PADDING - SUBSYSTEM_LABEL_HEIGHT,
            max(xs) + SUBSYSTEM_PADDING,
            max(ys) + SUBSYSTEM_PADDING,
        )

    def _subsystems(self, topology: Topology, layout: Layout) -> List[str]:
        out = []
        for index, subsystem in enumerate(topology.subsystems):
            members = [layout.nodes[n] for n in subsystem.nodes if n in layout.nodes]
            if not members:
                continue

            min_x = min(n.x - node_size(n.type)[0] / 2 for n in members) - SUBSYSTEM_PADDING
            max_x = max(n.x + node_size(n.type)[0] / 2 for n in members) + SUBSYSTEM_PADDING
            min_y = min(n.y - node_size(n.type)[1] / 2 for n in members) - SUBSYSTEM_PADDING - SUBSYSTEM_LABEL_HEIGHT
            max_y = max(n.y + node_size(n.type)[1] / 2 for n in members) + SUBSYSTEM_PADDING
            color = subsystem.color or SUBSYSTEM_COLORS[index % len(SUBSYSTEM_COLORS)]

            out.append(
                f'<g class="subsystem"><rect x="{_fmt(min_x)}" y="{_fmt(min_y)}" '
                f'width="{_fmt(max_x - min_x)}" height="{_fmt(max_y - min_y)}" rx="12" '
                f'fill="{color}" fill-opacity="0.08" stroke="{color}" stroke-width="2" stroke-dasharray="8 4"/>'
                f'<text x="{_fmt(min_x + 18)}" y="{_fmt(min_y + 20)}" font-family="Inter, sans-serif" '
                f'font-size="12" font-weight="600" fill="{color}">{escape(subsystem.name)}</text></g>'
            )
        return out

    def _node(self, node: LayoutNode) -> str:
        style = node_style(node.type)
        w, h = style["width"], style["height"]
        x, y = node.x - w / 2, node.y - h / 2
        fill, stroke = style["fill"], style["stroke"]
        kind = style["shape"]

        if kind == "cylinder":
            shape = (
                f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{w}" height="{h}" rx="{w / 2}" ry="10" '
                f'fill="{fill}" stroke="{stroke}" stroke-width="2"/>'
            )
        elif kind == "hexagon":
            q = w / 4
            points = [
                (x + q, y), (x + w - q, y), (x + w, node.y),
                (x + w - q, y + h), (x + q, y + h), (x, node.y),
            ]
            shape = (
                f'<polygon points="{" ".join(f"{_fmt(px)},{_fmt(py)}" for px, py in points)}" '
                f'fill="{fill}" stroke="{stroke}" stroke-width="2"/>'
            )
        elif kind == "pipe":
            shape = (
                f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{w}" height="{h}" rx="{h / 2}" '
                f'fill="{fill}" stroke="{stroke}" stroke-width="2"/>'
            )
        else:
            rx = 20 if kind == "cloud" else 8
            shape = (
                f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{w}" height="{h}" rx="{rx}" '
                f'fill="{fill}" stroke="{stroke}" stroke-width="2"/>'
            )

        label = escape(node.node.label)
        return (
            f'<g class="node node-{node.type.value}" data-id="{escape(node.id)}">{shape}'
            f'<text x="{_fmt(node.x)}" y="{_fmt(node.y)}" text-anchor="middle" dominant-baseline="middle" '
            f'font-family="Inter, sans-serif" font-size="12" fill="{style["text"]}">{label}</text></g>'
        )

    def _particle(self, event: FlowEvent, x: float, y: float, scale: float, used: List[str]) -> str:
        size = PARTICLE_SIZE * (event.size or 1) * scale
        half = size / 2
        color = event.color

        if event.shape.is_icon:
            symbol = self.symbols.get(event.shape, color)
            if symbol is not None:
                if symbol not in used:
                    used.append(symbol)
                icon = size * 1.6
                return (
                    f'<use href="#{symbol}" x="{_fmt(x - icon / 2)}" y="{_fmt(y - icon / 2)}" '
                    f'width="{_fmt(icon)}" height="{_fmt(icon)}"/>'
                )

        if event.shape == EventShape.SQUARE:
            return f'<rect x="{_fmt(x - half)}" y="{_fmt(y - half)}" width="{_fmt(size)}" height="{_fmt(size)}" fill="{color}"/>'
        if event.shape == EventShape.TRIANGLE:
            return (
                f'<polygon points="{_fmt(x)},{_fmt(y - half)} {_fmt(x + half)},{_fmt(y + half)} '
                f'{_fmt(x - half)},{_fmt(y + half)}" fill="{color}"/>'
            )
        if event.shape == EventShape.DIAMOND:
            return (
                f'<polygon points="{_fmt(x)},{_fmt(y - half)} {_fmt(x + half)},{_fmt(y)} '
                f'{_fmt(x)},{_fmt(y + half)} {_fmt(x - half)},{_fmt(y)}" fill="{color}"/>'
            )
        return f'<circle cx="{_fmt(x)}" cy="{_fmt(y)}" r="{_fmt(half)}" fill="{color}"/>'


def render_svg(
    topology: Topology,
    layout: Layout,
    particles: Iterable[Particle] = (),
    delayed: Iterable[DelayedParticle] = (),
    symbols: Optional[SymbolCache] = None,
) -> str:
    return SvgRenderer(symbols).render(topology, layout, particles, delayed)
