from eventflow.compiler.edges import bezier_point, connection_point, route_edge
from eventflow.compiler.layout import assign_levels, compute_layout
from eventflow.compiler.render_mermaid import render_mermaid
from eventflow.compiler.types import BezierPath, Layout, LayoutEdge, LayoutNode, Point
from eventflow.dsl import parse_dsl


def compile_to_mermaid(text: str) -> str:
    return render_mermaid(parse_dsl(text))


__all__ = [
    "BezierPath",
    "Layout",
    "LayoutEdge",
    "LayoutNode",
    "Point",
    "assign_levels",
    "bezier_point",
    "compile_to_mermaid",
    "compute_layout",
    "connection_point",
    "render_mermaid",
    "route_edge",
]
