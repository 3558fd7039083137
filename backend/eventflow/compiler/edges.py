"""
Edge geometry: anchors on node sides, cubic routes between them, and
points along a route.
"""

import math

from eventflow.compiler.types import BezierPath, LayoutNode, Point
from eventflow.ir.topology import Side
from eventflow.visual.visual_style import node_size

MIN_CONTROL_DIST = 40
MAX_CONTROL_DIST = 150
BACKWARD_THRESHOLD = 20      # target this far left of the source loops around
BACKWARD_MIN_DIST = 100
PARALLEL_OFFSET = 20

_SIDE_VECTORS = {
    Side.LEFT: (-1, 0),
    Side.RIGHT: (1, 0),
    Side.TOP: (0, -1),
    Side.BOTTOM: (0, 1),
}


def connection_point(node: LayoutNode, side: Side) -> Point:
    width, height = node_size(node.type)

    if side == Side.TOP:
        return Point(node.x, node.y - height / 2)
    if side == Side.BOTTOM:
        return Point(node.x, node.y + height / 2)
    if side == Side.LEFT:
        return Point(node.x - width / 2, node.y)
    return Point(node.x + width / 2, node.y)


def route_edge(
    start: Point,
    end: Point,
    offset_index: int = 0,
    from_side: Side = Side.RIGHT,
    to_side: Side = Side.LEFT,
) -> BezierPath:
    dx = end.x - start.x
    dy = end.y - start.y
    dist = math.hypot(dx, dy)

    control_dist = max(MIN_CONTROL_DIST, min(dist * 0.5, MAX_CONTROL_DIST))

    # Right-to-left connection with the target behind the source
    if from_side == Side.RIGHT and to_side == Side.LEFT and dx < -BACKWARD_THRESHOLD:
        control_dist = max(abs(dy) * 0.5 + 50, BACKWARD_MIN_DIST)

    if offset_index > 0:
        control_dist += offset_index * PARALLEL_OFFSET

    sx, sy = _SIDE_VECTORS.get(from_side, (1, 0))
    ex, ey = _SIDE_VECTORS.get(to_side, (-1, 0))

    return BezierPath(
        start=start,
        cp1=Point(start.x + sx * control_dist, start.y + sy * control_dist),
        cp2=Point(end.x + ex * control_dist, end.y + ey * control_dist),
        end=end,
    )


def bezier_point(path: BezierPath, t: float) -> Point:
    mt = 1 - t
    a = mt * mt * mt
    b = 3 * mt * mt * t
    c = 3 * mt * t * t
    d = t * t * t

    return Point(
        a * path.start.x + b * path.cp1.x + c * path.cp2.x + d * path.end.x,
        a * path.start.y + b * path.cp1.y + c * path.cp2.y + d * path.end.y,
    )
