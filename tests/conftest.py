"""Pytest fixtures for view2svg tests."""

import json
import math
import os
import tempfile

import pytest

from view2svg.models import (
    Arc, Edge, Face, GeometryElement, Line, Solid, ViewFrame, ViewScene,
)


def make_box_solid(size=1.0, origin=(0.0, 0.0, 0.0)):
    """Axis-aligned box with six faces of four line edges each."""
    ox, oy, oz = origin
    s = size
    corners = {
        (i, j, k): (ox + i * s, oy + j * s, oz + k * s)
        for i in (0, 1) for j in (0, 1) for k in (0, 1)
    }
    face_keys = [
        [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)],
        [(0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1)],
        [(0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1)],
        [(0, 1, 0), (1, 1, 0), (1, 1, 1), (0, 1, 1)],
        [(0, 0, 0), (0, 1, 0), (0, 1, 1), (0, 0, 1)],
        [(1, 0, 0), (1, 1, 0), (1, 1, 1), (1, 0, 1)],
    ]
    faces = []
    for keys in face_keys:
        loop = [
            Edge(curve=Line(start=corners[keys[i]], end=corners[keys[(i + 1) % 4]]))
            for i in range(4)
        ]
        faces.append(Face(edge_loops=[loop]))
    return Solid(faces=faces)


def make_cylinder_cap(radius=1.0, z=0.0):
    """Solid with one circular face."""
    circle = Arc(center=(0.0, 0.0, z), radius=radius)
    return Solid(faces=[Face(edge_loops=[[Edge(curve=circle)]])])


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_config():
    """Create default export configuration."""
    from view2svg.config import ExportConfig
    return ExportConfig()


@pytest.fixture
def plan_frame():
    """Plan view frame looking down the z axis."""
    return ViewFrame(origin=(0.0, 0.0, 0.0), right=(1.0, 0.0, 0.0), up=(0.0, 1.0, 0.0))


@pytest.fixture
def horizontal_line_element():
    """A single 10 unit horizontal line."""
    return GeometryElement(
        element_id="wall_1",
        category="Walls",
        geometry=[Line(start=(0.0, 0.0, 0.0), end=(10.0, 0.0, 0.0))],
    )


@pytest.fixture
def mixed_elements():
    """Elements covering every geometry node kind."""
    return [
        GeometryElement(
            element_id="lines",
            geometry=[
                Line(start=(0.0, 0.0, 0.0), end=(4.0, 0.0, 0.0)),
                Line(start=(4.0, 0.0, 0.0), end=(4.0, 3.0, 0.0)),
            ],
        ),
        GeometryElement(
            element_id="door_swing",
            geometry=[Arc(center=(2.0, 2.0, 0.0), radius=1.0, start_parameter=0.0, end_parameter=math.pi / 2)],
        ),
        GeometryElement(element_id="column", geometry=[make_box_solid(0.5, origin=(1.0, 1.0, 0.0))]),
        GeometryElement(element_id="no_geometry", geometry=None),
    ]


@pytest.fixture
def scene_file(temp_dir, horizontal_line_element):
    """A scene JSON file with a single horizontal line."""
    scene = ViewScene(
        view_id="level_1",
        name="Level 1",
        elements=[horizontal_line_element],
    )
    path = os.path.join(temp_dir, "scene.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(scene.model_dump(mode="json"), f)
    return path
