from typing import Any

from app.questions.base import PointScaleKind
from app.questions.controls import ControlOption
from app.questions.labels import ICON_DEFAULT_MAX
from app.questions.models import DecodedResponse, IconScaleConfig, QuestionType, ResolvedConfig


def fill_states(size: int, value: int | None) -> list[bool]:
    """Icon i is filled when i < value."""
    return [value is not None and i < value for i in range(size)]


class IconScaleKind(PointScaleKind):
    """A row of ``maxValue`` icons; clicking icon i answers i + 1."""

    config_model = IconScaleConfig
    icon: str = ""

    def default_config(self) -> dict:
        return {"maxValue": ICON_DEFAULT_MAX}

    def resolve_config(self, config: IconScaleConfig) -> ResolvedConfig:
        size = config.max_value or ICON_DEFAULT_MAX
        points = list(range(1, size + 1))
        return ResolvedConfig(
            question_type=self.name,
            points=points,
            labels=[str(p) for p in points],
            glyphs=[self.icon] * size,
        )

    def build_options(self, resolved: ResolvedConfig, value: Any) -> list[ControlOption]:
        options = super().build_options(resolved, value)
        filled = fill_states(len(options), value if isinstance(value, int) else None)
        for option, is_filled in zip(options, filled):
            option.filled = is_filled
        return options

    def present(self, value: int, resolved: ResolvedConfig) -> DecodedResponse:
        size = len(resolved.points)
        return DecodedResponse(
            question_type=self.name,
            answered=True,
            value=value,
            display=f"{value}/{size}",
            filled=fill_states(size, value),
        )


class StarsKind(IconScaleKind):
    icon = "★"

    @property
    def name(self) -> QuestionType:
        return QuestionType.STARS


class HeartsKind(IconScaleKind):
    icon = "♥"

    @property
    def name(self) -> QuestionType:
        return QuestionType.HEARTS
