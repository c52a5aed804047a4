from app.questions.base import PointScaleKind
from app.questions.labels import DISLIKE_LABEL, LIKE_LABEL, PLACEHOLDER
from app.questions.models import DecodedResponse, LikeDislikeConfig, QuestionType, ResolvedConfig

LIKE = 1
DISLIKE = 0


class LikeDislikeKind(PointScaleKind):
    """Two exclusive buttons: like answers 1, dislike answers 0.

    0 is a real answer; only None means unanswered.
    """

    config_model = LikeDislikeConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.LIKE_DISLIKE

    def default_config(self) -> dict:
        return {"likeLabel": LIKE_LABEL, "dislikeLabel": DISLIKE_LABEL}

    def resolve_config(self, config: LikeDislikeConfig) -> ResolvedConfig:
        like = config.like_label or LIKE_LABEL
        dislike = config.dislike_label or DISLIKE_LABEL
        return ResolvedConfig(
            question_type=self.name,
            points=[LIKE, DISLIKE],
            labels=[like, dislike],
            glyphs=["👍", "👎"],
            like_label=like,
            dislike_label=dislike,
        )

    def present(self, value: int, resolved: ResolvedConfig) -> DecodedResponse:
        if value == LIKE:
            label = resolved.like_label or LIKE_LABEL
        elif value == DISLIKE:
            label = resolved.dislike_label or DISLIKE_LABEL
        else:
            return DecodedResponse(question_type=self.name, answered=True, value=value, display=PLACEHOLDER)
        return DecodedResponse(question_type=self.name, answered=True, value=value, display=label, labels=[label])
