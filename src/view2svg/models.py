"""
Pydantic data models for view2svg.

The geometry graph read from a view is a closed, tagged union of node kinds.
Everything downstream of flattening works on plain segments and the
projection products derived from them.
"""

import math
from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


Point3 = Tuple[float, float, float]


class ViewKind(str, Enum):
    """Kinds of view a scene can come from."""
    FLOOR_PLAN = "floor_plan"
    CEILING_PLAN = "ceiling_plan"
    AREA_PLAN = "area_plan"
    STRUCTURAL_PLAN = "structural_plan"
    SECTION = "section"
    ELEVATION = "elevation"
    DRAFTING = "drafting"
    THREE_D = "three_d"
    LEGEND = "legend"
    SCHEDULE = "schedule"


PLAN_VIEW_KINDS = frozenset({
    ViewKind.FLOOR_PLAN,
    ViewKind.CEILING_PLAN,
    ViewKind.AREA_PLAN,
    ViewKind.STRUCTURAL_PLAN,
})


class PipelineState(str, Enum):
    """Stages of a single export run."""
    COLLECTING = "collecting"
    PROJECTING = "projecting"
    BOUNDING = "bounding"
    EMITTING = "emitting"
    DONE = "done"
    ABORTED = "aborted"


class ExportStatus(str, Enum):
    """Terminal outcome of an export run."""
    EXPORTED = "exported"
    NO_CONTENT = "no_content"
    VIEW_NOT_SUPPORTED = "view_not_supported"


# Geometry graph

class Line(BaseModel):
    """A straight segment between two points."""
    kind: Literal["line"] = "line"
    start: Point3
    end: Point3
    bound: bool = True

    model_config = ConfigDict(extra="forbid")


class Arc(BaseModel):
    """
    A circular or elliptical arc.

    Parametrized as center + radius*cos(t)*x_direction + y_radius*sin(t)*y_direction
    for t in [start_parameter, end_parameter]; circular when y_radius is unset.
    """
    kind: Literal["arc"] = "arc"
    center: Point3
    radius: float = Field(..., gt=0)
    y_radius: Optional[float] = Field(default=None, gt=0)
    x_direction: Point3 = (1.0, 0.0, 0.0)
    y_direction: Point3 = (0.0, 1.0, 0.0)
    start_parameter: float = 0.0
    end_parameter: float = 2 * math.pi
    bound: bool = True

    model_config = ConfigDict(extra="forbid")

    @property
    def is_elliptical(self):
        return self.y_radius is not None and self.y_radius != self.radius


class Bezier(BaseModel):
    """A Bezier curve of any degree on parameter range [0, 1]."""
    kind: Literal["bezier"] = "bezier"
    control_points: List[Point3] = Field(..., min_length=2)
    bound: bool = True

    model_config = ConfigDict(extra="forbid")


class Polyline(BaseModel):
    """An ordered chain of points."""
    kind: Literal["polyline"] = "polyline"
    points: List[Point3] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


Curve = Annotated[Union[Line, Arc, Bezier], Field(discriminator="kind")]


class Edge(BaseModel):
    """A solid edge backed by a single curve."""
    curve: Curve

    model_config = ConfigDict(extra="forbid")


class Face(BaseModel):
    """A solid face bounded by one or more closed edge loops."""
    edge_loops: List[List[Edge]] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class Solid(BaseModel):
    """Boundary representation of a solid."""
    kind: Literal["solid"] = "solid"
    faces: List[Face] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class Instance(BaseModel):
    """
    A placed instance of shared geometry.

    Children are already expressed in model coordinates; `transform` (four
    rows: origin, basis x, basis y, basis z) records the placement only.
    """
    kind: Literal["instance"] = "instance"
    transform: Optional[List[Point3]] = None
    children: List["GeometryNode"] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


GeometryNode = Annotated[
    Union[Line, Polyline, Arc, Bezier, Solid, Instance],
    Field(discriminator="kind"),
]

Instance.model_rebuild()


class GeometryElement(BaseModel):
    """One element visible in the view and its geometry, if it has any."""
    element_id: str
    category: str = ""
    geometry: Optional[List[GeometryNode]] = None

    model_config = ConfigDict(extra="forbid")


class ViewFrame(BaseModel):
    """Orthonormal frame of a view: origin plus right and up unit axes."""
    origin: Point3 = (0.0, 0.0, 0.0)
    right: Point3 = (1.0, 0.0, 0.0)
    up: Point3 = (0.0, 1.0, 0.0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class ViewScene(BaseModel):
    """A single view as delivered by the host document."""
    view_id: str
    name: str = ""
    kind: ViewKind = ViewKind.FLOOR_PLAN
    is_template: bool = False
    is_valid: bool = True
    frame: ViewFrame = Field(default_factory=ViewFrame)
    elements: List[GeometryElement] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


# Pipeline products

class Segment3D(BaseModel):
    """A non-degenerate straight segment in model space."""
    p0: Point3
    p1: Point3

    model_config = ConfigDict(frozen=True)

    @property
    def length(self):
        return math.dist(self.p0, self.p1)


class Bounds2D(BaseModel):
    """Axis-aligned extent of projected points in view coordinates."""
    min_u: float
    max_u: float
    min_v: float
    max_v: float

    model_config = ConfigDict(frozen=True)

    @property
    def width(self):
        return self.max_u - self.min_u

    @property
    def height(self):
        return self.max_v - self.min_v

    def contains(self, u, v):
        return self.min_u <= u <= self.max_u and self.min_v <= v <= self.max_v


class Canvas(BaseModel):
    """Output canvas size derived from bounds and a fixed scale."""
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)
    scale: float = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)


class RenderSegment(BaseModel):
    """A segment in canvas space with y growing downwards."""
    x1: float
    y1: float
    x2: float
    y2: float

    model_config = ConfigDict(frozen=True)


class SkippedElement(BaseModel):
    """An element whose geometry could not be flattened."""
    element_id: str
    error_type: str
    message: str = ""


class ExportResult(BaseModel):
    """Outcome of one export run."""
    view_id: str = ""
    status: ExportStatus
    final_state: PipelineState
    svg: Optional[str] = None
    canvas: Optional[Canvas] = None
    bounds: Optional[Bounds2D] = None
    element_count: int = 0
    segment_count: int = 0
    skipped_elements: List[SkippedElement] = Field(default_factory=list)
    output_path: Optional[str] = None
    report_path: Optional[str] = None
    message: str = ""

    @property
    def has_document(self):
        return self.status == ExportStatus.EXPORTED and self.svg is not None
