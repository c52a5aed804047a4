import logging
from collections.abc import Callable, Mapping
from typing import Any

from app.questions.base import BaseQuestionKind, read_field
from app.questions.controls import Control
from app.questions.exceptions import UnknownQuestionTypeError
from app.questions.models import DecodedResponse, EncodedResponse, QuestionType, ResolvedConfig

logger = logging.getLogger(__name__)


def _tag(question_type: QuestionType | str | None) -> str:
    if isinstance(question_type, QuestionType):
        return question_type.value
    return question_type or ""


class QuestionRegistry:
    """Entry point for everything type-specific about questions.

    Maintains one kind per question type tag and dispatches configuration
    defaulting, rendering, encoding and decoding to it. Lookups with an
    unrecognized tag resolve to the fallback kind (free text) so read paths
    never fail on stale or foreign data; ``require`` is the strict variant
    used where new questions are accepted.
    """

    def __init__(self, fallback: QuestionType = QuestionType.TEXT) -> None:
        self._kinds: dict[str, BaseQuestionKind] = {}
        self._fallback = fallback

    def register(self, kind: BaseQuestionKind) -> None:
        self._kinds[kind.name.value] = kind
        logger.debug("Registered question kind: %s", kind.name.value)

    def require(self, question_type: QuestionType | str | None) -> BaseQuestionKind:
        """Strict lookup.

        Raises:
            UnknownQuestionTypeError: If no kind is registered for the tag.
        """
        kind = self._kinds.get(_tag(question_type))
        if kind is None:
            raise UnknownQuestionTypeError(_tag(question_type))
        return kind

    def get(self, question_type: QuestionType | str | None) -> BaseQuestionKind:
        kind = self._kinds.get(_tag(question_type))
        if kind is None:
            logger.debug("Unknown question type %r, using %s", question_type, self._fallback.value)
            return self._kinds[self._fallback.value]
        return kind

    def is_known(self, question_type: QuestionType | str | None) -> bool:
        return _tag(question_type) in self._kinds

    @property
    def available_types(self) -> list[str]:
        return list(self._kinds.keys())

    # ------------------------------------------------------------------
    # Per-question operations
    # ------------------------------------------------------------------

    def default_config(self, question_type: QuestionType | str) -> dict[str, Any]:
        return self.get(question_type).default_config()

    def effective_config(
        self,
        question_type: QuestionType | str | None,
        scale_config: Mapping[str, Any] | None,
    ) -> ResolvedConfig:
        """Display parameters for ``scale_config`` with the type's defaults filled in.

        Pure: the input mapping is never modified.
        """
        return self.get(question_type).resolve(scale_config)

    def render(
        self,
        question: Any,
        value: Any = None,
        on_change: Callable[[Any], None] | None = None,
        disabled: bool = False,
    ) -> Control:
        kind = self.get(read_field(question, "question_type"))
        resolved = kind.resolve(read_field(question, "scale_config"))
        return kind.render(resolved, value, on_change=on_change, disabled=disabled)

    def encode(self, question: Any, value: Any) -> EncodedResponse:
        """Storage columns for one answer; all three are None when unanswered.

        Raises:
            AnswerShapeError: If ``value`` has the wrong shape for the question's type
                or falls outside its scale.
        """
        if value is None:
            return EncodedResponse()
        kind = self.get(read_field(question, "question_type"))
        resolved = kind.resolve(read_field(question, "scale_config"))
        return kind.encode(kind.check_range(kind.coerce(value), resolved))

    def decode(
        self,
        row: Any,
        question_type: QuestionType | str | None,
        scale_config: Mapping[str, Any] | None,
    ) -> DecodedResponse:
        kind = self.get(question_type)
        return kind.decode(row, kind.resolve(scale_config))
