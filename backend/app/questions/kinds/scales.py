"""Numbered agreement/satisfaction/effort scales: CSAT, CES and Likert.

All three present N buttons valued 1..N, where N is the configured scale
size. Label arrays are read positionally, so an array shorter than the
scale leaves the uncovered buttons with a blank label.
"""

from app.questions.base import PointScaleKind
from app.questions.labels import (
    CES_DEFAULT_SCALE,
    CES_MAX_LABEL,
    CES_MIN_LABEL,
    CSAT_DEFAULT_SCALE,
    CSAT_GLYPHS,
    CSAT_LABELS,
    LIKERT_DEFAULT_SCALE,
    LIKERT_LABELS,
    safe_label,
)
from app.questions.models import (
    CESConfig,
    CSATConfig,
    DecodedResponse,
    LikertConfig,
    QuestionType,
    ResolvedConfig,
)


def _one_based(size: int) -> list[int]:
    return list(range(1, size + 1))


class LabelledScaleKind(PointScaleKind):
    def present(self, value: int, resolved: ResolvedConfig) -> DecodedResponse:
        label = safe_label(resolved.labels, value - 1)
        return DecodedResponse(
            question_type=self.name,
            answered=True,
            value=value,
            display=label or str(value),
            labels=[label] if label else [],
        )


class CSATKind(LabelledScaleKind):
    config_model = CSATConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.CSAT

    def default_config(self) -> dict:
        return {"csatScale": CSAT_DEFAULT_SCALE}

    def resolve_config(self, config: CSATConfig) -> ResolvedConfig:
        scale = config.csat_scale or CSAT_DEFAULT_SCALE
        labels = config.csat_labels if config.csat_labels is not None else CSAT_LABELS[scale]
        points = _one_based(scale)
        return ResolvedConfig(
            question_type=self.name,
            points=points,
            labels=[safe_label(labels, i) for i in range(scale)],
            glyphs=list(CSAT_GLYPHS[scale]),
        )


class CESKind(PointScaleKind):
    config_model = CESConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.CES

    def default_config(self) -> dict:
        return {"cesScale": CES_DEFAULT_SCALE, "cesLabels": {"min": CES_MIN_LABEL, "max": CES_MAX_LABEL}}

    def resolve_config(self, config: CESConfig) -> ResolvedConfig:
        scale = config.ces_scale or CES_DEFAULT_SCALE
        labels = config.ces_labels
        points = _one_based(scale)
        return ResolvedConfig(
            question_type=self.name,
            points=points,
            labels=[str(p) for p in points],
            min_label=(labels.min if labels and labels.min else CES_MIN_LABEL),
            max_label=(labels.max if labels and labels.max else CES_MAX_LABEL),
        )

    def present(self, value: int, resolved: ResolvedConfig) -> DecodedResponse:
        return DecodedResponse(
            question_type=self.name,
            answered=True,
            value=value,
            display=f"{value}/{len(resolved.points)}",
        )


class LikertKind(LabelledScaleKind):
    config_model = LikertConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.LIKERT

    def default_config(self) -> dict:
        return {"likertScale": LIKERT_DEFAULT_SCALE}

    def resolve_config(self, config: LikertConfig) -> ResolvedConfig:
        scale = config.likert_scale or LIKERT_DEFAULT_SCALE
        labels = config.likert_labels if config.likert_labels is not None else LIKERT_LABELS[scale]
        return ResolvedConfig(
            question_type=self.name,
            points=_one_based(scale),
            labels=[safe_label(labels, i) for i in range(scale)],
        )
