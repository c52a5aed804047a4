from app.questions.base import PointScaleKind
from app.questions.labels import EMOJI_DEFAULT_SET, EMOJI_SETS, PLACEHOLDER, safe_label
from app.questions.models import DecodedResponse, EmojiConfig, QuestionType, ResolvedConfig


class EmojiKind(PointScaleKind):
    """Glyph at index i answers i + 1."""

    config_model = EmojiConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.EMOJIS

    def default_config(self) -> dict:
        return {"emojiSet": list(EMOJI_SETS[EMOJI_DEFAULT_SET])}

    def resolve_config(self, config: EmojiConfig) -> ResolvedConfig:
        glyphs = config.emoji_set if config.emoji_set is not None else EMOJI_SETS[EMOJI_DEFAULT_SET]
        return ResolvedConfig(
            question_type=self.name,
            points=list(range(1, len(glyphs) + 1)),
            labels=list(glyphs),
            glyphs=list(glyphs),
        )

    def present(self, value: int, resolved: ResolvedConfig) -> DecodedResponse:
        glyph = safe_label(resolved.glyphs, value - 1)
        return DecodedResponse(
            question_type=self.name,
            answered=True,
            value=value,
            display=glyph or PLACEHOLDER,
            labels=[glyph] if glyph else [],
        )
