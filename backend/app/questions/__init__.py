from app.questions.kinds import (
    CESKind,
    CSATKind,
    EmojiKind,
    HeartsKind,
    LikeDislikeKind,
    LikertKind,
    MatrixKind,
    MultipleChoiceKind,
    NPSKind,
    SingleChoiceKind,
    StarsKind,
    TextKind,
)
from app.questions.models import QuestionType
from app.questions.registry import QuestionRegistry

__all__ = [
    "QuestionRegistry",
    "QuestionType",
    "question_registry",
]


def _create_registry() -> QuestionRegistry:
    """Create the default registry with one kind per question type."""
    registry = QuestionRegistry()
    registry.register(TextKind())
    registry.register(NPSKind())
    registry.register(CSATKind())
    registry.register(CESKind())
    registry.register(StarsKind())
    registry.register(EmojiKind())
    registry.register(HeartsKind())
    registry.register(SingleChoiceKind())
    registry.register(MultipleChoiceKind())
    registry.register(LikeDislikeKind())
    registry.register(LikertKind())
    registry.register(MatrixKind())
    missing = {t.value for t in QuestionType} - set(registry.available_types)
    if missing:
        raise RuntimeError(f"No question kind registered for: {sorted(missing)}")
    return registry


question_registry = _create_registry()
