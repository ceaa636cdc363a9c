from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from loguru import logger
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.difficulty_scaler import normalize_difficulty
from core.errors import InvalidConfiguration
from core.grade_progression import normalize_grade

GRID_OPERATIONS = ("addition", "subtraction", "multiplication", "division")

ModelT = TypeVar("ModelT", bound=BaseModel)


class _Record(BaseModel):
    """Immutable record; snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


# =============================================================================
# GENERATED CONTENT
# =============================================================================

class Question(_Record):
    """One generated problem."""
    question_text: str = Field(..., description="Rendered prompt, operands embedded.")
    answer_text: str = Field(..., description="Canonical answer; may chain equivalent forms.")
    explanation: Optional[str] = Field(None, description="One-line derivation.")
    figure: Optional[str] = Field(None, description="SVG markup or a text placeholder (geometry only).")
    topic: Optional[str] = Field(None, description="Topic identifier that produced the question.")


class Worksheet(_Record):
    title: str
    instructions: str
    special_message: Optional[str] = None
    questions: Tuple[Question, ...] = ()
    grade: Optional[str] = None
    subject: Optional[str] = "Mathematics"
    copyright: Optional[str] = None

    @computed_field(alias="answerKey")
    @property
    def answer_key(self) -> Dict[int, str]:
        """1-based question position -> answer text, always derived from `questions`."""
        return {index: question.answer_text for index, question in enumerate(self.questions, start=1)}

    @property
    def num_questions(self) -> int:
        return len(self.questions)


class GridProblem(_Record):
    question: str
    answer: str


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class MathGenerationOptions(_Record):
    """Defines the inputs the worksheet assembler expects from the UI."""

    grade: int = Field(..., description="Grade level; 'K' or 1-12 accepted, stored as 0-12.")
    difficulty: str = Field("medium", description="easy | medium | hard | mixed")
    topics: Tuple[str, ...] = Field((), description="Topic identifiers in display order.")
    question_count: int = Field(10, ge=0, description="Total questions across all topics.")
    include_geometric_shapes: bool = False
    include_3d_figures: bool = Field(False, alias="include3dFigures")
    copyright: Optional[str] = None
    seed: Optional[int] = Field(None, description="Makes the worksheet reproducible.")

    @field_validator("grade", mode="before")
    @classmethod
    def _normalize_grade(cls, value: Union[int, str]) -> int:
        return normalize_grade(value)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value: str) -> str:
        return normalize_difficulty(value)


class GridWorksheetOptions(_Record):
    num_problems: int = Field(..., ge=0)
    operations: Tuple[str, ...] = Field(..., description="Subset of addition/subtraction/multiplication/division.")
    max_number: int
    min_number: int = 0
    allow_negatives: bool = False
    mixed_operations: bool = True
    seed: Optional[int] = None

    @field_validator("operations", mode="before")
    @classmethod
    def _known_operations(cls, value: Union[str, List[str], Tuple[str, ...]]) -> Tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        known = []
        for operation in value:
            name = str(operation).strip().lower()
            if name not in GRID_OPERATIONS:
                logger.warning("Skipping unknown grid operation '{}'", operation)
                continue
            known.append(name)
        return tuple(known)

    @model_validator(mode="after")
    def _check_ranges(self) -> "GridWorksheetOptions":
        if not self.operations:
            raise ValueError(
                f"At least one operation is required ({', '.join(GRID_OPERATIONS)})."
            )
        if self.min_number > self.max_number:
            raise ValueError(
                f"min_number ({self.min_number}) cannot exceed max_number ({self.max_number})."
            )
        if self.min_number < 0 and not self.allow_negatives:
            raise ValueError("A negative min_number requires allow_negatives.")
        return self


class AnswerCheckRequest(_Record):
    expected: str
    actual: str
    question: Optional[str] = Field(None, description="Prompt the answer belongs to; disambiguates \"a/b = c/d\" keys.")


def parse_model(model_cls: Type[ModelT], data: Union[ModelT, Mapping[str, Any]]) -> ModelT:
    """
    Accepts an already-built model or a raw mapping; validation failures
    surface as `InvalidConfiguration` so callers handle one error type.
    """

    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'request'}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidConfiguration(problems) from exc
