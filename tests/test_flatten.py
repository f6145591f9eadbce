"""Tests for geometry flattening."""

import math

import pytest

from conftest import make_box_solid, make_cylinder_cap
from view2svg.config import ExportConfig
from view2svg.geometry.flatten import (
    GeometryDepthError, UnsupportedGeometryError, flatten_element, flatten_node,
)
from view2svg.models import (
    Arc, Bezier, Edge, Face, GeometryElement, Instance, Line, Polyline, Solid,
)


def flatten(*nodes, config=None):
    out = []
    for node in nodes:
        flatten_node(node, out, config)
    return out


class TestStraightGeometry:
    """Lines and polylines flatten without approximation."""

    def test_line(self):
        """Test a line node gives one segment."""
        segments = flatten(Line(start=(0, 0, 0), end=(3, 4, 0)))

        assert len(segments) == 1
        assert segments[0].length == pytest.approx(5.0)

    def test_polyline_gives_n_minus_one(self):
        """Test a polyline of n points gives n - 1 segments."""
        poly = Polyline(points=[(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0, 0, 0)])

        assert len(flatten(poly)) == 4

    def test_completeness_count(self):
        """Test straight geometry contributes every segment."""
        nodes = [
            Line(start=(0, 0, 0), end=(1, 0, 0)),
            Line(start=(0, 0, 0), end=(0, 1, 0)),
            Polyline(points=[(0, 0, 0), (1, 0, 0), (2, 1, 0)]),
            Polyline(points=[(5, 5, 0), (6, 5, 0), (7, 5, 0), (8, 6, 0), (9, 9, 0)]),
        ]

        assert len(flatten(*nodes)) == 1 + 1 + 2 + 4

    def test_degenerate_line_dropped(self):
        """Test a zero-length line node is dropped."""
        assert flatten(Line(start=(1, 1, 1), end=(1, 1, 1))) == []

    def test_unbound_line_skipped(self):
        """Test an unbound line node is skipped."""
        assert flatten(Line(start=(0, 0, 0), end=(1, 0, 0), bound=False)) == []

    def test_short_polyline(self):
        """Test a single-point polyline gives no segments."""
        assert flatten(Polyline(points=[(0, 0, 0)])) == []


class TestCurveNodes:
    """Curves met as geometry nodes use fixed subdivision."""

    def test_arc_yields_ten_segments(self):
        """Test a partial arc node gives ten segments."""
        arc = Arc(center=(0, 0, 0), radius=2.0, start_parameter=0.0, end_parameter=math.pi / 3)

        assert len(flatten(arc)) == 10

    def test_full_circle_yields_ten_segments(self):
        """Test a full circle node gives ten segments."""
        assert len(flatten(Arc(center=(0, 0, 0), radius=1.0))) == 10

    def test_configured_segment_count(self, default_config):
        """Test the fixed segment count follows the config."""
        default_config.tessellation.arc_segments = 4
        arc = Arc(center=(0, 0, 0), radius=1.0)

        assert len(flatten(arc, config=default_config)) == 4

    def test_bezier_node_uses_fixed_subdivision(self):
        """Test a Bezier node uses fixed subdivision."""
        bez = Bezier(control_points=[(0, 0, 0), (0, 1, 0), (1, 1, 0), (1, 0, 0)])

        assert len(flatten(bez)) == 10

    def test_unbound_arc_skipped(self):
        """Test an unbound arc node is skipped."""
        assert flatten(Arc(center=(0, 0, 0), radius=1.0, bound=False)) == []


class TestSolids:
    """Solids are flattened edge by edge."""

    def test_box_edges(self):
        """Test a box solid gives one segment per face edge."""
        # 6 faces x 4 edges, shared edges appear once per face
        assert len(flatten(make_box_solid())) == 24

    def test_curved_edge_uses_native_sampling(self, default_config):
        """Test curved solid edges use native sampling."""
        default_config.tessellation.max_angle_degrees = 30.0
        default_config.tessellation.chord_tolerance = 0.5

        segments = flatten(make_cylinder_cap(radius=1.0), config=default_config)

        assert len(segments) == 12

    def test_unbound_edge_skipped(self):
        """Test unbound solid edges are skipped."""
        solid = Solid(faces=[Face(edge_loops=[[
            Edge(curve=Line(start=(0, 0, 0), end=(1, 0, 0))),
            Edge(curve=Line(start=(1, 0, 0), end=(2, 0, 0), bound=False)),
        ]])])

        assert len(flatten(solid)) == 1

    def test_malformed_edge_raises(self):
        """Test an edge without a curve raises."""
        bad_edge = Edge.model_construct(curve=None)
        solid = Solid.model_construct(kind="solid", faces=[Face.model_construct(edge_loops=[[bad_edge]])])

        with pytest.raises(UnsupportedGeometryError):
            flatten(solid)


class TestInstances:
    """Instances are traversed recursively without applying transforms."""

    def test_children_flattened(self):
        """Test instance children are flattened in model coordinates."""
        inst = Instance(
            transform=[(5, 5, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)],
            children=[
                Line(start=(0, 0, 0), end=(1, 0, 0)),
                Polyline(points=[(0, 0, 0), (0, 1, 0), (1, 1, 0)]),
            ],
        )

        segments = flatten(inst)

        assert len(segments) == 3
        # Children are already in model coordinates
        assert segments[0].p0 == (0.0, 0.0, 0.0)

    def test_nested_instances(self):
        """Test nested instances are flattened recursively."""
        inner = Instance(children=[make_box_solid()])
        outer = Instance(children=[inner, Line(start=(0, 0, 0), end=(1, 0, 0))])

        assert len(flatten(outer)) == 25

    def test_depth_limit(self):
        """Test instance nesting beyond the depth limit raises."""
        node = Line(start=(0, 0, 0), end=(1, 0, 0))
        for _ in range(40):
            node = Instance(children=[node])

        with pytest.raises(GeometryDepthError):
            flatten(node)

        config = ExportConfig()
        config.geometry.max_instance_depth = 64
        assert len(flatten(node, config=config)) == 1


class TestElements:
    """Element level flattening."""

    def test_none_geometry(self):
        """Test an element without geometry gives no segments."""
        assert flatten_element(GeometryElement(element_id="empty")) == []

    def test_unknown_node_raises(self):
        """Test an unknown node type raises."""
        element = GeometryElement.model_construct(element_id="x", category="", geometry=["not geometry"])

        with pytest.raises(UnsupportedGeometryError):
            flatten_element(element)

    def test_mixed_element(self, mixed_elements):
        """Test per-element segment counts for mixed geometry."""
        counts = [len(flatten_element(e)) for e in mixed_elements]

        assert counts == [2, 10, 24, 0]
