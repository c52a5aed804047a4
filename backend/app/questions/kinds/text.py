from typing import Any

from app.questions.base import BaseQuestionKind, read_field
from app.questions.controls import UNCHANGED, Control, ControlEvent, Edit
from app.questions.labels import TEXT_PLACEHOLDER
from app.questions.models import (
    DecodedResponse,
    EncodedResponse,
    QuestionType,
    ResolvedConfig,
    TextConfig,
)


class TextKind(BaseQuestionKind):
    """Free-text answer. Also the fallback for unrecognized type tags."""

    config_model = TextConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.TEXT

    def resolve_config(self, config: TextConfig) -> ResolvedConfig:
        return ResolvedConfig(question_type=self.name, placeholder=TEXT_PLACEHOLDER)

    def paint(self, control: Control) -> None:
        super().paint(control)
        control.text = control.value if isinstance(control.value, str) else ""

    def apply(self, resolved: ResolvedConfig, value: Any, event: ControlEvent) -> Any:
        if isinstance(event, Edit):
            return event.text
        return UNCHANGED

    def coerce(self, value: Any) -> Any:
        if not isinstance(value, str):
            raise self.shape_error(f"expected a text answer, got {value!r}")
        return value

    def encode(self, value: Any) -> EncodedResponse:
        return EncodedResponse(response_text=value)

    def decode(self, row: Any, resolved: ResolvedConfig) -> DecodedResponse:
        text = read_field(row, "response_text")
        if not text:
            return self.unanswered()
        return DecodedResponse(question_type=self.name, answered=True, value=text, display=text)
