# Node styles shared by the layout anchors and the SVG renderer

from eventflow.visual.visual_style import VISUAL_STYLE, node_size, node_style

__all__ = [
    "VISUAL_STYLE",
    "node_size",
    "node_style",
]
