"""Tests for edge anchors, routing and cubic interpolation."""

import pytest

from eventflow.compiler.edges import (
    BACKWARD_MIN_DIST,
    MAX_CONTROL_DIST,
    MIN_CONTROL_DIST,
    PARALLEL_OFFSET,
    bezier_point,
    connection_point,
    route_edge,
)
from eventflow.compiler.types import LayoutNode, Point
from eventflow.ir.topology import Node, NodeType, Side


def service_at(x, y):
    return LayoutNode(node=Node(id="svc", type=NodeType.SERVICE), x=x, y=y)


class TestConnectionPoint:
    @pytest.mark.parametrize(
        "side, expected",
        [
            (Side.RIGHT, Point(160, 50)),
            (Side.LEFT, Point(40, 50)),
            (Side.TOP, Point(100, 25)),
            (Side.BOTTOM, Point(100, 75)),
        ],
    )
    def test_service_anchor(self, side, expected):
        # service nodes are 120 x 50
        assert connection_point(service_at(100, 50), side) == expected

    def test_db_anchor_uses_db_size(self):
        db = LayoutNode(node=Node(id="db", type=NodeType.DB), x=0, y=0)
        assert connection_point(db, Side.BOTTOM) == Point(0, 35)


class TestRouteEdge:
    def test_forward_edge_uses_half_distance(self):
        path = route_edge(Point(0, 0), Point(200, 0))

        assert path.start == Point(0, 0)
        assert path.end == Point(200, 0)
        assert path.cp1 == Point(100, 0)
        assert path.cp2 == Point(100, 0)

    def test_control_distance_clamped_low(self):
        path = route_edge(Point(0, 0), Point(50, 0))

        assert path.cp1 == Point(MIN_CONTROL_DIST, 0)
        assert path.cp2 == Point(50 - MIN_CONTROL_DIST, 0)

    def test_control_distance_clamped_high(self):
        path = route_edge(Point(0, 0), Point(1000, 0))

        assert path.cp1 == Point(MAX_CONTROL_DIST, 0)
        assert path.cp2 == Point(1000 - MAX_CONTROL_DIST, 0)

    def test_backward_edge_loops_by_vertical_gap(self):
        path = route_edge(Point(0, 0), Point(-200, 300))

        # 300 * 0.5 + 50
        assert path.cp1 == Point(200, 0)
        assert path.cp2 == Point(-400, 300)

    def test_backward_edge_minimum_loop(self):
        path = route_edge(Point(0, 0), Point(-200, 0))
        assert path.cp1 == Point(BACKWARD_MIN_DIST, 0)

    def test_small_backward_step_is_not_a_loop(self):
        path = route_edge(Point(0, 0), Point(-10, 0))
        assert path.cp1 == Point(MIN_CONTROL_DIST, 0)

    def test_parallel_offset(self):
        base = route_edge(Point(0, 0), Point(200, 0), offset_index=0)
        second = route_edge(Point(0, 0), Point(200, 0), offset_index=2)

        assert second.cp1.x - base.cp1.x == 2 * PARALLEL_OFFSET
        assert base.cp2.x - second.cp2.x == 2 * PARALLEL_OFFSET

    def test_sides_set_control_directions(self):
        path = route_edge(Point(0, 0), Point(0, 200), from_side=Side.BOTTOM, to_side=Side.TOP)

        assert path.cp1 == Point(0, 100)
        assert path.cp2 == Point(0, 100)

    def test_pure_function(self):
        a = route_edge(Point(3, 4), Point(250, -80), 1, Side.TOP, Side.LEFT)
        route_edge(Point(0, 0), Point(1, 1))
        b = route_edge(Point(3, 4), Point(250, -80), 1, Side.TOP, Side.LEFT)
        assert a == b


class TestBezierPoint:
    def test_endpoints(self):
        path = route_edge(Point(0, 0), Point(200, 100))

        assert bezier_point(path, 0) == path.start
        assert bezier_point(path, 1) == path.end

    def test_midpoint_of_straight_line(self):
        path = route_edge(Point(0, 0), Point(200, 0))
        mid = bezier_point(path, 0.5)

        assert mid.x == pytest.approx(100)
        assert mid.y == pytest.approx(0)
