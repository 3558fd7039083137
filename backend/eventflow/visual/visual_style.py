from eventflow.ir.topology import NodeType

VISUAL_STYLE = {
    NodeType.SERVICE: {
        "shape": "rounded_rect",
        "width": 120,
        "height": 50,
        "fill": "#6366f1",
        "stroke": "#4f46e5",
        "text": "#ffffff",
    },
    NodeType.TOPIC: {
        "shape": "pipe",
        "width": 140,
        "height": 40,
        "fill": "#06b6d4",
        "stroke": "#0891b2",
        "text": "#ffffff",
    },
    NodeType.DB: {
        "shape": "cylinder",
        "width": 80,
        "height": 70,
        "fill": "#8b5cf6",
        "stroke": "#7c3aed",
        "text": "#ffffff",
    },
    NodeType.PROCESSOR: {
        "shape": "hexagon",
        "width": 100,
        "height": 60,
        "fill": "#f59e0b",
        "stroke": "#d97706",
        "text": "#ffffff",
    },
    NodeType.EXTERNAL: {
        "shape": "cloud",
        "width": 120,
        "height": 50,
        "fill": "#64748b",
        "stroke": "#475569",
        "text": "#ffffff",
    },
}

EDGE_COLOR = "#94a3b8"
BACKGROUND_COLOR = "#f8fafc"


def node_style(node_type) -> dict:
    return VISUAL_STYLE.get(node_type, VISUAL_STYLE[NodeType.SERVICE])


def node_size(node_type):
    """(width, height) of a node type."""
    style = node_style(node_type)
    return style["width"], style["height"]
