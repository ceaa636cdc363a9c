"""
geometry.py

Shape recognition, perimeter, area and volume problems. Figures are
optional: when requested, each figure is rendered from the very numbers that
produced the answer, so a label can never disagree with the answer key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from core.difficulty_scaler import DifficultyScaler
from core.grade_progression import SHAPES_2D, SHAPES_3D, SIDE_COUNTS
from core.numeric import RandomSource, check_count, format_number, pick, random_int
from formatting.diagram_generator import (
    placeholder,
    render_cube,
    render_l_shape,
    render_rectangle,
    render_rectangular_prism,
    render_shape,
    render_triangle,
)
from schemas.worksheet import Question


@dataclass(frozen=True)
class FigureOptions:
    include_shapes: bool = False
    include_3d: bool = False


@dataclass
class GeometryProblem:
    question: str
    answer: str
    explanation: str
    figure: Optional[str] = None


def _identify_2d(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    shape = pick(rng, SHAPES_2D)
    return GeometryProblem(
        question="Name this 2D shape.",
        answer=shape,
        explanation=f"The figure shown is a {shape}",
        figure=render_shape(shape) if options.include_shapes else None,
    )


def _identify_3d(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    shape = pick(rng, SHAPES_3D)
    figure = None
    if options.include_3d:
        figure = render_shape(shape) if options.include_shapes else placeholder(shape)
    return GeometryProblem(
        question="Name this 3D figure.",
        answer=shape,
        explanation=f"The figure shown is a {shape}",
        figure=figure,
    )


def _count_sides(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    shape = pick(rng, SHAPES_2D)
    sides = SIDE_COUNTS[shape]
    return GeometryProblem(
        question=f"How many sides does a {shape} have?",
        answer=str(sides),
        explanation=f"A {shape} has {sides} sides",
        figure=render_shape(shape) if options.include_shapes else None,
    )


def _perimeter(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    length = random_int(rng, 2, 10)
    width = random_int(rng, 2, 10)
    perimeter = 2 * (length + width)
    return GeometryProblem(
        question=f"Find the perimeter of a rectangle with length {length} units and width {width} units.",
        answer=f"{perimeter} units",
        explanation=f"Perimeter = 2 × ({length} + {width}) = {perimeter} units",
        figure=render_rectangle(length, width) if options.include_shapes else None,
    )


def _area_rectangle(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    length = random_int(rng, 2, 10)
    width = random_int(rng, 2, 10)
    area = length * width
    return GeometryProblem(
        question=f"Find the area of a rectangle with length {length} units and width {width} units.",
        answer=f"{area} square units",
        explanation=f"Area = {length} × {width} = {area} square units",
        # No area annotation: on the question sheet it would give the answer away.
        figure=render_rectangle(length, width) if options.include_shapes else None,
    )


def _area_triangle(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    base = random_int(rng, 2, 10)
    height = random_int(rng, 2, 10)
    area = format_number(base * height / 2)
    return GeometryProblem(
        question=f"Find the area of a triangle with base {base} units and height {height} units.",
        answer=f"{area} square units",
        explanation=f"Area = {base} × {height} ÷ 2 = {area} square units",
        figure=render_triangle(base, height) if options.include_shapes else None,
    )


def _volume_cube(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    side = random_int(rng, 2, 8)
    volume = side ** 3
    return GeometryProblem(
        question=f"Find the volume of a cube with side length {side} units.",
        answer=f"{volume} cubic units",
        explanation=f"Volume = {side} × {side} × {side} = {volume} cubic units",
        figure=render_cube(side) if options.include_shapes and options.include_3d else None,
    )


def _l_shape_dimensions(rng: RandomSource):
    length = random_int(rng, 6, 14)
    width = random_int(rng, 5, 12)
    notch_length = random_int(rng, 2, length - 2)
    notch_width = random_int(rng, 2, width - 2)
    return length, width, notch_length, notch_width


def _l_shape_prompt(length: int, width: int, notch_length: int, notch_width: int) -> str:
    return (
        f"An L-shaped figure is made by cutting a {notch_length} by {notch_width} unit rectangle "
        f"from one corner of a {length} by {width} unit rectangle."
    )


def _area_complex(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    length, width, notch_length, notch_width = _l_shape_dimensions(rng)
    area = length * width - notch_length * notch_width
    return GeometryProblem(
        question=_l_shape_prompt(length, width, notch_length, notch_width) + " Find its area.",
        answer=f"{area} square units",
        explanation=(
            f"Area = {length} × {width} - {notch_length} × {notch_width} = {area} square units"
        ),
        figure=(
            render_l_shape(length, width, notch_length, notch_width)
            if options.include_shapes else None
        ),
    )


def _perimeter_complex(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    length, width, notch_length, notch_width = _l_shape_dimensions(rng)
    # Cutting a corner moves two edges inward without changing their total length.
    perimeter = 2 * (length + width)
    return GeometryProblem(
        question=_l_shape_prompt(length, width, notch_length, notch_width) + " Find its perimeter.",
        answer=f"{perimeter} units",
        explanation=(
            f"The notch edges replace the missing outer edges, so perimeter = "
            f"2 × ({length} + {width}) = {perimeter} units"
        ),
        figure=(
            render_l_shape(length, width, notch_length, notch_width)
            if options.include_shapes else None
        ),
    )


def _prism_dimensions(rng: RandomSource):
    return random_int(rng, 2, 10), random_int(rng, 2, 8), random_int(rng, 2, 10)


def _prism_prompt(length: int, width: int, height: int) -> str:
    return (
        f"a rectangular prism with length {length} units, width {width} units "
        f"and height {height} units."
    )


def _volume_complex(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    length, width, height = _prism_dimensions(rng)
    volume = length * width * height
    return GeometryProblem(
        question="Find the volume of " + _prism_prompt(length, width, height),
        answer=f"{volume} cubic units",
        explanation=f"Volume = {length} × {width} × {height} = {volume} cubic units",
        figure=(
            render_rectangular_prism(length, width, height)
            if options.include_shapes and options.include_3d else None
        ),
    )


def _surface_area(rng: RandomSource, options: FigureOptions) -> GeometryProblem:
    length, width, height = _prism_dimensions(rng)
    area = 2 * (length * width + length * height + width * height)
    return GeometryProblem(
        question="Find the surface area of " + _prism_prompt(length, width, height),
        answer=f"{area} square units",
        explanation=(
            f"Surface area = 2 × ({length} × {width} + {length} × {height} + {width} × {height}) "
            f"= {area} square units"
        ),
        figure=(
            render_rectangular_prism(length, width, height)
            if options.include_shapes and options.include_3d else None
        ),
    )


GEOMETRY_OPERATIONS: Dict[str, Callable[[RandomSource, FigureOptions], GeometryProblem]] = {
    "identify-2d": _identify_2d,
    "identify-3d": _identify_3d,
    "count-sides": _count_sides,
    "perimeter": _perimeter,
    "area-rectangle": _area_rectangle,
    "area-triangle": _area_triangle,
    "volume-cube": _volume_cube,
    "area-complex": _area_complex,
    "perimeter-complex": _perimeter_complex,
    "volume-complex": _volume_complex,
    "surface-area": _surface_area,
}


def generate_geometry_problems(
    grade: Union[int, str],
    count: int,
    difficulty: str,
    rng: RandomSource,
    include_shapes: bool = False,
    include_3d: bool = False,
) -> List[Question]:
    """
    `include_shapes` attaches rendered figures; `include_3d` both unlocks the
    3D problem types for the grade and allows their figures.
    """

    check_count(count)
    operations = DifficultyScaler(grade, difficulty).operations("geometry", include_3d=include_3d)
    options = FigureOptions(include_shapes=include_shapes, include_3d=include_3d)

    questions: List[Question] = []
    for _ in range(count):
        operation = pick(rng, operations)
        problem = GEOMETRY_OPERATIONS[operation](rng, options)
        questions.append(
            Question(
                question_text=problem.question,
                answer_text=problem.answer,
                explanation=problem.explanation,
                figure=problem.figure if (include_shapes or include_3d) else None,
                topic="geometry",
            )
        )
    return questions
