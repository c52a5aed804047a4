from app.questions.kinds.choice import MultipleChoiceKind, SingleChoiceKind
from app.questions.kinds.emojis import EmojiKind
from app.questions.kinds.icons import HeartsKind, StarsKind
from app.questions.kinds.like_dislike import LikeDislikeKind
from app.questions.kinds.matrix import MatrixKind
from app.questions.kinds.nps import NPSKind
from app.questions.kinds.scales import CESKind, CSATKind, LikertKind
from app.questions.kinds.text import TextKind

__all__ = [
    "CESKind",
    "CSATKind",
    "EmojiKind",
    "HeartsKind",
    "LikeDislikeKind",
    "LikertKind",
    "MatrixKind",
    "MultipleChoiceKind",
    "NPSKind",
    "SingleChoiceKind",
    "StarsKind",
    "TextKind",
]
