from typing import Any

from pydantic import ValidationError

from app.questions.base import BaseQuestionKind, as_int, read_field
from app.questions.controls import UNCHANGED, ControlEvent, ControlOption, Select
from app.questions.labels import PLACEHOLDER, safe_label
from app.questions.models import (
    ChoiceConfig,
    DecodedResponse,
    EncodedResponse,
    MultipleChoiceConfig,
    QuestionType,
    ResolvedConfig,
    SingleChoiceAnswer,
)


class SingleChoiceKind(BaseQuestionKind):
    """Radio group; the answer keeps both the option index and its text."""

    config_model = ChoiceConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.SINGLE_CHOICE

    def default_config(self) -> dict:
        return {"options": []}

    def resolve_config(self, config: ChoiceConfig) -> ResolvedConfig:
        options = list(config.options or [])
        return ResolvedConfig(question_type=self.name, options=options, labels=options)

    def build_options(self, resolved: ResolvedConfig, value: Any) -> list[ControlOption]:
        selected_index = read_field(value, "index") if value is not None else None
        return [
            ControlOption(
                index=i,
                value={"index": i, "text": option},
                label=option,
                selected=selected_index == i,
            )
            for i, option in enumerate(resolved.options)
        ]

    def apply(self, resolved: ResolvedConfig, value: Any, event: ControlEvent) -> Any:
        if isinstance(event, Select) and 0 <= event.index < len(resolved.options):
            return {"index": event.index, "text": resolved.options[event.index]}
        return UNCHANGED

    def coerce(self, value: Any) -> Any:
        if isinstance(value, SingleChoiceAnswer):
            return value.model_dump()
        try:
            return SingleChoiceAnswer.model_validate(value).model_dump()
        except ValidationError as exc:
            raise self.shape_error(f"expected {{index, text}}, got {value!r}") from exc

    def encode(self, value: Any) -> EncodedResponse:
        return EncodedResponse(response_text=value["text"], response_value=value["index"])

    def decode(self, row: Any, resolved: ResolvedConfig) -> DecodedResponse:
        index = as_int(read_field(row, "response_value"))
        text = read_field(row, "response_text")
        if index is None and text is None:
            return self.unanswered()
        # The stored text is what the respondent saw; options may have been edited since.
        label = text if text is not None else safe_label(resolved.options, index, PLACEHOLDER)
        return DecodedResponse(
            question_type=self.name,
            answered=True,
            value={"index": index, "text": label},
            display=label or PLACEHOLDER,
            labels=[label] if label else [],
        )


class MultipleChoiceKind(BaseQuestionKind):
    """Checkboxes; the answer is the list of selected option indices in click order."""

    config_model = MultipleChoiceConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.MULTIPLE_CHOICE

    def default_config(self) -> dict:
        return {"options": [], "minSelections": 0}

    def resolve_config(self, config: MultipleChoiceConfig) -> ResolvedConfig:
        options = list(config.options or [])
        return ResolvedConfig(
            question_type=self.name,
            options=options,
            labels=options,
            min_selections=config.min_selections or 0,
            max_selections=config.max_selections or len(options),
        )

    def helper_text(self, resolved: ResolvedConfig) -> str | None:
        count = len(resolved.options)
        low = resolved.min_selections
        high = resolved.max_selections if resolved.max_selections is not None else count
        if low > 0 and high < count:
            return f"Selecione entre {low} e {high} opções"
        if low > 0:
            return f"Selecione no mínimo {low} opção(ões)"
        if high < count:
            return f"Selecione no máximo {high} opção(ões)"
        return resolved.help_text

    def build_options(self, resolved: ResolvedConfig, value: Any) -> list[ControlOption]:
        selected = set(value or [])
        return [
            ControlOption(index=i, value=i, label=option, selected=i in selected)
            for i, option in enumerate(resolved.options)
        ]

    def apply(self, resolved: ResolvedConfig, value: Any, event: ControlEvent) -> Any:
        if not isinstance(event, Select) or not 0 <= event.index < len(resolved.options):
            return UNCHANGED
        current = list(value or [])
        if event.index in current:
            # Removing is always allowed; minSelections is advisory only.
            return [i for i in current if i != event.index]
        limit = resolved.max_selections if resolved.max_selections is not None else len(resolved.options)
        if len(current) + 1 > limit:
            return UNCHANGED
        return current + [event.index]

    def coerce(self, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            raise self.shape_error(f"expected a list of option indices, got {value!r}")
        indices = [as_int(item) for item in value]
        if any(i is None for i in indices):
            raise self.shape_error(f"option indices must be integers, got {value!r}")
        return indices

    def encode(self, value: Any) -> EncodedResponse:
        return EncodedResponse(response_data=list(value))

    def decode(self, row: Any, resolved: ResolvedConfig) -> DecodedResponse:
        data = read_field(row, "response_data")
        if not isinstance(data, list):
            return self.unanswered()
        indices = [i for i in (as_int(item) for item in data) if i is not None]
        labels = [safe_label(resolved.options, i, PLACEHOLDER) or PLACEHOLDER for i in indices]
        return DecodedResponse(
            question_type=self.name,
            answered=bool(indices),
            value=indices,
            display=", ".join(labels) if labels else PLACEHOLDER,
            labels=labels,
        )
