"""
diagram_generator.py

Figure generation for geometry questions. Figures are rendered with
matplotlib straight to SVG so they stay scalable and can be embedded inline
in the worksheet markup. Every dimension label is drawn from the same numbers
the question's answer was computed from; the renderer never invents values.
"""

from __future__ import annotations

import io
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import matplotlib
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Polygon, Rectangle, RegularPolygon

from core.numeric import format_number


class DiagramType(Enum):
    """Supported diagram types."""
    # Geometry - 2D Shapes
    SQUARE = "square"
    RECTANGLE = "rectangle"
    TRIANGLE = "triangle"
    CIRCLE = "circle"
    PENTAGON = "pentagon"
    HEXAGON = "hexagon"
    L_SHAPE = "l-shape"

    # Geometry - 3D Shapes
    CUBE = "cube"
    RECTANGULAR_PRISM = "rectangular prism"

    @classmethod
    def lookup(cls, name: str) -> Optional["DiagramType"]:
        key = name.strip().lower().replace("_", " ")
        for member in cls:
            if member.value == key:
                return member
        return None


@dataclass
class DiagramSpec:
    """Specification for generating a diagram."""
    diagram_type: DiagramType
    params: Dict[str, Any] = field(default_factory=dict)
    width: float = 3.0  # inches
    height: float = 2.5  # inches
    show_measurements: bool = True
    title: Optional[str] = None


def placeholder(shape: str) -> str:
    """Text stand-in used wherever no vector figure exists for a shape."""
    return f"[A {shape} is shown]"


class DiagramGenerator:
    """
    Generates geometry figures for worksheets.

    Usage:
        generator = DiagramGenerator()
        spec = DiagramSpec(
            diagram_type=DiagramType.RECTANGLE,
            params={"length": 7, "width": 3, "show_area": True},
        )
        svg_markup = generator.generate(spec)
    """

    # Color scheme shared by every figure
    COLORS = {
        "shape_fill": "#e2e8f0",
        "shape_fill_dark": "#d1d5db",
        "shape_fill_side": "#cbd5e1",
        "shape_stroke": "#64748b",
        "text": "#1f2937",
        "accent": "#64748b",
    }

    LABEL_CONFIG = {
        "fontsize": 11,
        "ha": "center",
        "va": "center",
    }

    RC_PARAMS = {
        # Keep labels as <text> so they stay selectable and searchable.
        "svg.fonttype": "none",
        "font.family": "sans-serif",
        "font.size": 10,
    }

    def generate(self, spec: DiagramSpec) -> str:
        """Render `spec` and return standalone `<svg>` markup."""

        # Scoped so hosts that also use matplotlib keep their own rcParams.
        with matplotlib.rc_context(self.RC_PARAMS):
            fig = Figure(figsize=(spec.width, spec.height))
            ax = fig.add_subplot(1, 1, 1)

            draw_method = self._get_draw_method(spec.diagram_type)
            draw_method(ax, spec)

            if spec.title:
                ax.set_title(spec.title, fontsize=11, color=self.COLORS["text"])

            buf = io.StringIO()
            fig.savefig(buf, format="svg", bbox_inches="tight", pad_inches=0.1,
                        facecolor="white", metadata={"Date": None})
        markup = buf.getvalue()
        return markup[markup.index("<svg"):]

    def _get_draw_method(self, diagram_type: DiagramType):
        methods = {
            DiagramType.SQUARE: self._draw_square,
            DiagramType.RECTANGLE: self._draw_rectangle,
            DiagramType.TRIANGLE: self._draw_triangle,
            DiagramType.CIRCLE: self._draw_circle,
            DiagramType.PENTAGON: self._draw_regular_polygon,
            DiagramType.HEXAGON: self._draw_regular_polygon,
            DiagramType.L_SHAPE: self._draw_l_shape,
            DiagramType.CUBE: self._draw_cube,
            DiagramType.RECTANGULAR_PRISM: self._draw_rectangular_prism,
        }
        return methods[diagram_type]

    # =========================================================================
    # 2D GEOMETRY SHAPES
    # =========================================================================

    def _draw_rectangle(self, ax, spec: DiagramSpec):
        """Rectangle with length along the bottom and width up the left side."""
        params = spec.params
        length = params.get("length", 5)
        width = params.get("width", 3)
        padding = max(length, width) * 0.2
        params.setdefault("labelled", "length" in params)

        rect = Rectangle((0, 0), length, width,
                         facecolor=self.COLORS["shape_fill"],
                         edgecolor=self.COLORS["shape_stroke"], linewidth=2)
        ax.add_patch(rect)

        if spec.show_measurements and params.get("labelled", True):
            self._label(ax, f"{format_number(length)} units", length / 2, -padding * 0.6)
            self._label(ax, f"{format_number(width)} units", -padding * 0.6, width / 2, rotation=90)
        if params.get("show_area"):
            self._label(ax, f"Area = {format_number(length * width)}", length / 2, width / 2,
                        color=self.COLORS["accent"])

        self._setup_shape_axes(ax, [(0, 0), (length, 0), (length, width), (0, width)], padding=padding)

    def _draw_square(self, ax, spec: DiagramSpec):
        side = spec.params.get("side", 4)
        spec.params.update({"length": side, "width": side, "labelled": "side" in spec.params})
        self._draw_rectangle(ax, spec)

    def _draw_triangle(self, ax, spec: DiagramSpec):
        """Isosceles triangle with its base and a dashed height marker."""
        params = spec.params
        base = params.get("base", 4)
        height = params.get("height", 4)
        padding = max(base, height) * 0.2

        vertices = [(base / 2, height), (0, 0), (base, 0)]
        ax.add_patch(Polygon(vertices, closed=True,
                             facecolor=self.COLORS["shape_fill"],
                             edgecolor=self.COLORS["shape_stroke"], linewidth=2))

        if spec.show_measurements and "base" in params:
            ax.plot([base, base], [0, height], linestyle="--", linewidth=1,
                    color=self.COLORS["shape_stroke"])
            self._label(ax, f"Base = {format_number(base)} units", base / 2, -padding * 0.6)
            self._label(ax, f"Height = {format_number(height)} units", base + padding * 0.6,
                        height / 2, rotation=-90)

        self._setup_shape_axes(ax, vertices + [(base, height)], padding=padding)

    def _draw_circle(self, ax, spec: DiagramSpec):
        radius = spec.params.get("radius", 3)
        ax.add_patch(Circle((radius, radius), radius,
                            facecolor=self.COLORS["shape_fill"],
                            edgecolor=self.COLORS["shape_stroke"], linewidth=2))
        if spec.show_measurements and "radius" in spec.params:
            ax.plot([radius, 2 * radius], [radius, radius], color=self.COLORS["shape_stroke"], linewidth=1.5)
            self._label(ax, f"r = {format_number(radius)}", radius * 1.5, radius * 1.15)
        self._setup_shape_axes(ax, [(0, 0), (2 * radius, 2 * radius)], padding=radius * 0.15)

    def _draw_regular_polygon(self, ax, spec: DiagramSpec):
        sides = 5 if spec.diagram_type is DiagramType.PENTAGON else 6
        radius = spec.params.get("radius", 3)
        ax.add_patch(RegularPolygon((radius, radius), sides, radius=radius,
                                    facecolor=self.COLORS["shape_fill"],
                                    edgecolor=self.COLORS["shape_stroke"], linewidth=2))
        self._setup_shape_axes(ax, [(0, 0), (2 * radius, 2 * radius)], padding=radius * 0.15)

    def _draw_l_shape(self, ax, spec: DiagramSpec):
        """Rectangle with its top-right corner cut away."""
        params = spec.params
        length = params["length"]
        width = params["width"]
        notch_length = params["notch_length"]
        notch_width = params["notch_width"]
        padding = max(length, width) * 0.2

        vertices = [
            (0, 0), (length, 0), (length, width - notch_width),
            (length - notch_length, width - notch_width), (length - notch_length, width), (0, width),
        ]
        ax.add_patch(Polygon(vertices, closed=True,
                             facecolor=self.COLORS["shape_fill"],
                             edgecolor=self.COLORS["shape_stroke"], linewidth=2))

        if spec.show_measurements:
            self._label(ax, f"{format_number(length)} units", length / 2, -padding * 0.6)
            self._label(ax, f"{format_number(width)} units", -padding * 0.6, width / 2, rotation=90)
            self._label(ax, f"{format_number(notch_length)} units", length - notch_length / 2,
                        width - notch_width - padding * 0.4)
            self._label(ax, f"{format_number(notch_width)} units", length - notch_length - padding * 0.4,
                        width - notch_width / 2, rotation=90)

        self._setup_shape_axes(ax, vertices, padding=padding)

    # =========================================================================
    # 3D GEOMETRY SHAPES
    # =========================================================================

    def _draw_rectangular_prism(self, ax, spec: DiagramSpec):
        """Box in an oblique projection: front, top and right faces."""
        params = spec.params
        length = params.get("length", 5)
        width = params.get("width", 3)
        height = params.get("height", 4)

        # Depth recedes at 30 degrees, foreshortened by half.
        dx = width * math.cos(math.radians(30)) * 0.5
        dy = width * math.sin(math.radians(30)) * 0.5

        front = [(0, 0), (length, 0), (length, height), (0, height)]
        top = [(0, height), (length, height), (length + dx, height + dy), (dx, height + dy)]
        right = [(length, 0), (length + dx, dy), (length + dx, height + dy), (length, height)]

        for face, fill in ((front, "shape_fill_dark"), (top, "shape_fill"), (right, "shape_fill_side")):
            ax.add_patch(Polygon(face, closed=True,
                                 facecolor=self.COLORS[fill],
                                 edgecolor=self.COLORS["shape_stroke"], linewidth=2))

        padding = max(length, width, height) * 0.2
        if spec.show_measurements and params.get("labels"):
            for text, x, y, rotation in self._prism_labels(params, length, width, height, dx, dy, padding):
                self._label(ax, text, x, y, rotation=rotation)

        self._setup_shape_axes(ax, front + top + right, padding=padding)

    @staticmethod
    def _prism_labels(params, length, width, height, dx, dy, padding) -> List[Tuple[str, float, float, float]]:
        if params.get("cube"):
            return [(f"Side length = {format_number(length)} units", length / 2, -padding * 0.6, 0)]
        return [
            (f"Length = {format_number(length)} units", length / 2, -padding * 0.6, 0),
            (f"Height = {format_number(height)} units", -padding * 0.6, height / 2, 90),
            (f"Width = {format_number(width)} units", length + dx / 2 + padding * 0.8, dy / 2, 30),
        ]

    def _draw_cube(self, ax, spec: DiagramSpec):
        side = spec.params.get("side", 4)
        spec.params.update({
            "length": side,
            "width": side,
            "height": side,
            "cube": True,
            "labels": "side" in spec.params,
        })
        self._draw_rectangular_prism(ax, spec)

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _label(self, ax, text: str, x: float, y: float, *, rotation: float = 0,
               color: Optional[str] = None):
        config = {**self.LABEL_CONFIG, "rotation": rotation, "color": color or self.COLORS["text"]}
        ax.annotate(text, (x, y), **config)

    @staticmethod
    def _setup_shape_axes(ax, vertices: Sequence[Tuple[float, float]], padding: float = 0.5):
        xs = [v[0] for v in vertices]
        ys = [v[1] for v in vertices]
        ax.set_xlim(min(xs) - padding, max(xs) + padding)
        ax.set_ylim(min(ys) - padding, max(ys) + padding)
        ax.set_aspect("equal")
        ax.axis("off")


_GENERATOR = DiagramGenerator()


def render_shape(shape: str, **dimensions: Any) -> str:
    """
    Figure for `shape` as SVG markup, labelled with whichever `dimensions`
    are supplied (`length`/`width`, `base`/`height`, `side`, ...). Shapes the
    renderer does not draw come back as a plain-text placeholder.
    """

    diagram_type = DiagramType.lookup(shape)
    if diagram_type is None:
        return placeholder(shape)
    return _GENERATOR.generate(DiagramSpec(diagram_type=diagram_type, params=dict(dimensions)))


def render_rectangle(length: int, width: int, show_area: bool = False) -> str:
    return render_shape("rectangle", length=length, width=width, show_area=show_area)


def render_triangle(base: int, height: int) -> str:
    return render_shape("triangle", base=base, height=height)


def render_cube(side: int) -> str:
    return render_shape("cube", side=side)


def render_rectangular_prism(length: int, width: int, height: int) -> str:
    return render_shape("rectangular prism", length=length, width=width, height=height, labels=True)


def render_l_shape(length: int, width: int, notch_length: int, notch_width: int) -> str:
    return render_shape("l-shape", length=length, width=width,
                        notch_length=notch_length, notch_width=notch_width)
