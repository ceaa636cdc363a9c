import re

import pytest

from core.grade_progression import SHAPES_2D, SIDE_COUNTS
from formatting.diagram_generator import DiagramType, placeholder, render_rectangle, render_shape
from generators.geometry import GEOMETRY_OPERATIONS, FigureOptions, generate_geometry_problems

SHAPES = FigureOptions(include_shapes=True, include_3d=True)
NO_FIGURES = FigureOptions()


def _numbers(text):
    return [int(n) for n in re.findall(r"\d+", text)]


def test_perimeter_and_area_formulas(rng):
    for _ in range(20):
        problem = GEOMETRY_OPERATIONS["perimeter"](rng, NO_FIGURES)
        length, width = _numbers(problem.question)
        assert problem.answer == f"{2 * (length + width)} units"

        problem = GEOMETRY_OPERATIONS["area-rectangle"](rng, NO_FIGURES)
        length, width = _numbers(problem.question)
        assert problem.answer == f"{length * width} square units"

        problem = GEOMETRY_OPERATIONS["volume-cube"](rng, NO_FIGURES)
        (side,) = _numbers(problem.question)
        assert problem.answer == f"{side ** 3} cubic units"


def test_triangle_area_keeps_half_units(scripted):
    # base 3, height 5
    problem = GEOMETRY_OPERATIONS["area-triangle"](scripted([0.12, 0.4]), NO_FIGURES)
    assert _numbers(problem.question) == [3, 5]
    assert problem.answer == "7.5 square units"


def test_count_sides_uses_side_table(rng):
    for _ in range(20):
        problem = GEOMETRY_OPERATIONS["count-sides"](rng, NO_FIGURES)
        shape = re.search(r"does an? (\w+) have", problem.question).group(1)
        assert problem.answer == str(SIDE_COUNTS[shape])


def test_complex_shapes(rng):
    for _ in range(20):
        problem = GEOMETRY_OPERATIONS["area-complex"](rng, NO_FIGURES)
        notch_length, notch_width, length, width = _numbers(problem.question)
        assert problem.answer == f"{length * width - notch_length * notch_width} square units"

        problem = GEOMETRY_OPERATIONS["surface-area"](rng, NO_FIGURES)
        length, width, height = _numbers(problem.question)
        assert problem.answer == f"{2 * (length * width + length * height + width * height)} square units"


def test_rectangle_figure_labels_match_prompt(rng):
    problem = GEOMETRY_OPERATIONS["area-rectangle"](rng, SHAPES)
    length, width = _numbers(problem.question)
    assert problem.figure.startswith("<svg")
    assert f"{length} units" in problem.figure
    assert f"{width} units" in problem.figure
    assert "Area =" not in problem.figure


def test_triangle_and_prism_figures(rng):
    problem = GEOMETRY_OPERATIONS["area-triangle"](rng, SHAPES)
    base, height = _numbers(problem.question)
    assert f"Base = {base} units" in problem.figure
    assert f"Height = {height} units" in problem.figure

    problem = GEOMETRY_OPERATIONS["volume-complex"](rng, SHAPES)
    length, width, height = _numbers(problem.question)
    assert f"Length = {length} units" in problem.figure
    assert f"Width = {width} units" in problem.figure


def test_identify_3d_without_rendering_uses_placeholder(rng):
    problem = GEOMETRY_OPERATIONS["identify-3d"](rng, FigureOptions(include_3d=True))
    assert problem.figure == placeholder(problem.answer)
    assert problem.figure == f"[A {problem.answer} is shown]"


def test_figures_only_when_requested(rng):
    plain = generate_geometry_problems(4, 10, "medium", rng)
    assert all(question.figure is None for question in plain)

    drawn = generate_geometry_problems(2, 10, "medium", rng, include_shapes=True)
    assert all(question.figure for question in drawn)
    assert all(question.answer_text in SHAPES_2D or question.answer_text.isdigit() for question in drawn)


def test_3d_problem_types_need_the_flag(rng):
    flat = generate_geometry_problems(8, 30, "hard", rng)
    assert not any("prism" in question.question_text for question in flat)
    solid = generate_geometry_problems(8, 30, "hard", rng, include_3d=True)
    assert any("prism" in question.question_text for question in solid)


def test_render_shape():
    assert render_shape("sphere") == "[A sphere is shown]"
    assert render_shape("Hexagon").startswith("<svg")
    assert "Area = 12" in render_rectangle(4, 3, show_area=True)
    assert DiagramType.lookup("rectangular prism") is DiagramType.RECTANGULAR_PRISM


@pytest.mark.parametrize("shape", ["square", "triangle", "circle", "pentagon", "cube"])
def test_every_shape_renders(shape):
    assert "</svg>" in render_shape(shape)


def test_rendering_leaves_global_rc_params_alone():
    import matplotlib

    before = (matplotlib.rcParams["svg.fonttype"], matplotlib.rcParams["font.size"])
    figure = render_rectangle(6, 2)
    assert "6 units" in figure
    assert (matplotlib.rcParams["svg.fonttype"], matplotlib.rcParams["font.size"]) == before
