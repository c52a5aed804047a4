from app.questions.base import PointScaleKind
from app.questions.labels import NPS_MAX_LABEL, NPS_MIN_LABEL
from app.questions.models import DecodedResponse, NPSConfig, QuestionType, ResolvedConfig

NPS_POINTS = list(range(11))
PROMOTER_MIN = 9
NEUTRAL_MIN = 7


def nps_band(value: int) -> str:
    """Classify a 0-10 score. Presentation only, never stored."""
    if value >= PROMOTER_MIN:
        return "Promoter"
    if value >= NEUTRAL_MIN:
        return "Neutral"
    return "Detractor"


class NPSKind(PointScaleKind):
    config_model = NPSConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.NPS

    def default_config(self) -> dict:
        return {"npsLabels": {"min": NPS_MIN_LABEL, "max": NPS_MAX_LABEL}}

    def resolve_config(self, config: NPSConfig) -> ResolvedConfig:
        labels = config.nps_labels
        return ResolvedConfig(
            question_type=self.name,
            points=list(NPS_POINTS),
            labels=[str(p) for p in NPS_POINTS],
            min_label=(labels.min if labels and labels.min else NPS_MIN_LABEL),
            max_label=(labels.max if labels and labels.max else NPS_MAX_LABEL),
        )

    def present(self, value: int, resolved: ResolvedConfig) -> DecodedResponse:
        return DecodedResponse(
            question_type=self.name,
            answered=True,
            value=value,
            display=str(value),
            band=nps_band(value),
        )
