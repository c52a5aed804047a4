from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class QuestionType(str, Enum):
    TEXT = "text"
    NPS = "nps"
    CSAT = "csat"
    CES = "ces"
    STARS = "stars"
    EMOJIS = "emojis"
    HEARTS = "hearts"
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    LIKE_DISLIKE = "like_dislike"
    LIKERT = "likert"
    MATRIX = "matrix"


# ---------------------------------------------------------------------------
# Per-type configuration payloads
#
# The stored scale_config is one open JSON object with camelCase keys. Each
# question kind reads it through its own model below, so fields belonging to
# another type (left over after a type change, for instance) are dropped.
# ---------------------------------------------------------------------------


class BaseScaleConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    is_required: bool | None = Field(None, alias="isRequired")
    placeholder: str | None = None
    help_text: str | None = Field(None, alias="helpText")


class EndpointLabels(BaseModel):
    min: str | None = None
    max: str | None = None


class TextConfig(BaseScaleConfig):
    pass


class NPSConfig(BaseScaleConfig):
    nps_labels: EndpointLabels | None = Field(None, alias="npsLabels")


class CSATConfig(BaseScaleConfig):
    csat_scale: Literal[3, 5, 7] | None = Field(None, alias="csatScale")
    csat_labels: list[str] | None = Field(None, alias="csatLabels")


class CESConfig(BaseScaleConfig):
    ces_scale: Literal[5, 7] | None = Field(None, alias="cesScale")
    ces_labels: EndpointLabels | None = Field(None, alias="cesLabels")


class IconScaleConfig(BaseScaleConfig):
    """Stars and hearts."""

    max_value: int | None = Field(None, alias="maxValue", ge=1, le=20)


class EmojiConfig(BaseScaleConfig):
    emoji_set: list[str] | None = Field(None, alias="emojiSet")


class ChoiceConfig(BaseScaleConfig):
    options: list[str] | None = None


class MultipleChoiceConfig(ChoiceConfig):
    min_selections: int | None = Field(None, alias="minSelections", ge=0)
    max_selections: int | None = Field(None, alias="maxSelections", ge=0)


class LikertConfig(BaseScaleConfig):
    likert_scale: Literal[5, 7] | None = Field(None, alias="likertScale")
    likert_labels: list[str] | None = Field(None, alias="likertLabels")


class MatrixConfig(BaseScaleConfig):
    matrix_rows: list[str] | None = Field(None, alias="matrixRows")
    matrix_columns: list[str] | None = Field(None, alias="matrixColumns")


class LikeDislikeConfig(BaseScaleConfig):
    like_label: str | None = Field(None, alias="likeLabel")
    dislike_label: str | None = Field(None, alias="dislikeLabel")


# ---------------------------------------------------------------------------
# Resolved display parameters
# ---------------------------------------------------------------------------


class ResolvedConfig(BaseModel):
    """Effective display parameters after defaults are applied.

    ``points`` are the selectable answer values for single-value kinds, in
    display order; ``labels`` and ``glyphs`` line up with them positionally
    and hold "" where the author's label array is too short.
    """

    question_type: QuestionType
    points: list[int] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    glyphs: list[str] = Field(default_factory=list)
    min_label: str | None = None
    max_label: str | None = None
    options: list[str] = Field(default_factory=list)
    min_selections: int = 0
    max_selections: int | None = None
    rows: list[str] = Field(default_factory=list)
    columns: list[str] = Field(default_factory=list)
    like_label: str | None = None
    dislike_label: str | None = None
    placeholder: str | None = None
    help_text: str | None = None
    is_required: bool = False


# ---------------------------------------------------------------------------
# Answers and persisted rows
# ---------------------------------------------------------------------------


class QuestionSpec(BaseModel):
    """The subset of a question the engine reads.

    ORM ``Question`` rows satisfy the same attribute contract and can be
    passed to the registry directly.
    """

    model_config = ConfigDict(from_attributes=True)

    id: Any = None
    question_text: str = ""
    question_type: str
    scale_config: dict[str, Any] | None = None
    order_index: int = 0


class SingleChoiceAnswer(BaseModel):
    index: int = Field(..., ge=0)
    text: str


class EncodedResponse(BaseModel):
    """The three-column storage form of one answer."""

    response_text: str | None = None
    response_value: float | None = None
    response_data: Any = None

    @property
    def is_empty(self) -> bool:
        return self.response_text is None and self.response_value is None and self.response_data is None


class DecodedResponse(BaseModel):
    """Human-readable form of a stored response row."""

    question_type: QuestionType
    answered: bool = False
    value: Any = None
    display: str = "—"
    labels: list[str] = Field(default_factory=list)
    band: Literal["Promoter", "Neutral", "Detractor"] | None = None
    filled: list[bool] = Field(default_factory=list)
