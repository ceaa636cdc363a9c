"""
Schemas shared between the generators, tool wrappers and the web surface.
"""

from .worksheet import (
    GRID_OPERATIONS,
    AnswerCheckRequest,
    GridProblem,
    GridWorksheetOptions,
    MathGenerationOptions,
    Question,
    Worksheet,
    parse_model,
)

__all__ = [
    "GRID_OPERATIONS",
    "AnswerCheckRequest",
    "GridProblem",
    "GridWorksheetOptions",
    "MathGenerationOptions",
    "Question",
    "Worksheet",
    "parse_model",
]
