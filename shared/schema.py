"""Wire schemas for the editor document and the submission payload."""
from typing import Annotated

from pydantic import BaseModel, Field

from .geometry import Polygon2, Segment2, Shape, GeometryError
from .types import Point2


class PointModel(BaseModel):
    """A pixel coordinate on the floorplan image."""

    x: float
    y: float

    @classmethod
    def of(cls, p: Point2) -> "PointModel":
        return cls(x=p.x, y=p.y)

    def to_point(self) -> Point2:
        return Point2(self.x, self.y)


# Closing point is implicit and never repeated
Ring = Annotated[list[PointModel], Field(min_length=3)]
Wall = Annotated[list[PointModel], Field(min_length=2, max_length=2)]


class FloorplanSize(BaseModel):
    """Natural size of the floorplan image in pixels."""

    height: int = Field(..., ge=0)
    width: int = Field(..., ge=0)


class FloorplanDocument(BaseModel):
    """Serialized editor output: closed boundaries and open walls."""

    floorplan: FloorplanSize
    structure: list[Ring] = Field(default_factory=list)
    walls: list[Wall] = Field(default_factory=list)

    @classmethod
    def from_shapes(cls, width: float, height: float, shapes) -> "FloorplanDocument":
        structure, walls = [], []
        for shape in shapes:
            if isinstance(shape, Polygon2):
                structure.append([PointModel.of(p) for p in shape.points])
            elif isinstance(shape, Segment2):
                walls.append([PointModel.of(p) for p in shape.points])
            else:
                raise GeometryError(f"Unknown shape type: {type(shape).__name__}")
        return cls(floorplan=FloorplanSize(height=int(height), width=int(width)),
                   structure=structure, walls=walls)

    def to_shapes(self) -> tuple[Shape, ...]:
        """Polygons first, then walls, each in document order."""
        polygons = [Polygon2(tuple(p.to_point() for p in ring)) for ring in self.structure]
        walls = [Segment2(w[0].to_point(), w[1].to_point()) for w in self.walls]
        return tuple(polygons + walls)


class AnchorRecord(BaseModel):
    """One correspondence: local pixel anchor and its geographic position."""

    x: float
    y: float
    lng: float
    lat: float


class SubmissionFloorplan(FloorplanSize):
    """Image size plus the encoded image itself."""

    data: str = Field(..., description="Image as a data URL")


class Submission(BaseModel):
    """Payload handed to the submission layer."""

    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    floorplan: SubmissionFloorplan
    structure: list[Ring] = Field(default_factory=list)
    walls: list[Wall] = Field(default_factory=list)
    anchors: list[AnchorRecord] = Field(..., min_length=3, max_length=3)
