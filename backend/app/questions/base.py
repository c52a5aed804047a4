import abc
import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from pydantic import ValidationError

from app.questions.controls import UNCHANGED, Control, ControlEvent, ControlOption, Select
from app.questions.exceptions import AnswerShapeError
from app.questions.models import (
    BaseScaleConfig,
    DecodedResponse,
    EncodedResponse,
    QuestionType,
    ResolvedConfig,
)

logger = logging.getLogger(__name__)


def read_field(obj: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-style object (ORM row, model)."""
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def as_int(value: Any) -> int | None:
    """Integral view of a stored numeric value; None for anything else."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class BaseQuestionKind(abc.ABC):
    """Abstract base class for question kinds.

    A kind owns everything type-specific about a question: how its
    scale_config is read and defaulted, how its input control is drawn and
    reacts to interaction, and how an answer is stored and read back.
    """

    config_model: ClassVar[type[BaseScaleConfig]] = BaseScaleConfig

    @property
    @abc.abstractmethod
    def name(self) -> QuestionType:
        """Question type tag handled by this kind."""

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def default_config(self) -> dict[str, Any]:
        """Starting scale_config for a newly created question of this kind."""
        return {}

    def parse_config(self, raw: Mapping[str, Any] | None) -> BaseScaleConfig:
        """Read the open scale_config record into this kind's config model.

        Never raises: fields with invalid values are dropped one by one and
        fall back to their defaults.
        """
        data = dict(raw) if isinstance(raw, Mapping) else {}
        for _ in range(len(data) + 1):
            try:
                return self.config_model.model_validate(data)
            except ValidationError as exc:
                bad_keys = {err["loc"][0] for err in exc.errors() if err["loc"]}
                bad_keys &= set(data)
                if not bad_keys:
                    break
                logger.debug("Ignoring invalid %s config fields: %s", self.name.value, sorted(bad_keys))
                for key in bad_keys:
                    data.pop(key)
        return self.config_model()

    def resolve(self, raw: Mapping[str, Any] | None) -> ResolvedConfig:
        config = self.parse_config(raw)
        resolved = self.resolve_config(config)
        resolved.placeholder = config.placeholder if config.placeholder is not None else resolved.placeholder
        resolved.help_text = config.help_text
        resolved.is_required = bool(config.is_required)
        return resolved

    @abc.abstractmethod
    def resolve_config(self, config: Any) -> ResolvedConfig:
        """Apply this kind's defaults to a parsed config."""

    # ------------------------------------------------------------------
    # Rendering and interaction
    # ------------------------------------------------------------------

    def render(
        self,
        resolved: ResolvedConfig,
        value: Any,
        on_change: Callable[[Any], None] | None = None,
        disabled: bool = False,
    ) -> Control:
        control = Control(
            kind=self.name,
            config=resolved,
            value=value,
            disabled=disabled,
            min_label=resolved.min_label,
            max_label=resolved.max_label,
            placeholder=resolved.placeholder,
            _impl=self,
            _on_change=on_change,
        )
        self.paint(control)
        return control

    def paint(self, control: Control) -> None:
        """Refresh the value-dependent parts of ``control``."""
        control.options = self.build_options(control.config, control.value)
        control.helper_text = self.helper_text(control.config)

    def build_options(self, resolved: ResolvedConfig, value: Any) -> list[ControlOption]:
        return []

    def helper_text(self, resolved: ResolvedConfig) -> str | None:
        return resolved.help_text

    def apply(self, resolved: ResolvedConfig, value: Any, event: ControlEvent) -> Any:
        """Return the answer after ``event``, or UNCHANGED when it has no effect."""
        return UNCHANGED

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def coerce(self, value: Any) -> Any:
        """Normalize an incoming answer to its canonical in-memory shape.

        Raises:
            AnswerShapeError: If the value cannot represent an answer of this kind.
        """

    def check_range(self, value: Any, resolved: ResolvedConfig) -> Any:
        """Check a coerced answer against the question's resolved config; returns it unchanged."""
        return value

    @abc.abstractmethod
    def encode(self, value: Any) -> EncodedResponse:
        """Map a canonical (non-None) answer to the three storage columns."""

    @abc.abstractmethod
    def decode(self, row: Any, resolved: ResolvedConfig) -> DecodedResponse:
        """Map a stored row back to a displayable answer."""

    def shape_error(self, message: str) -> AnswerShapeError:
        return AnswerShapeError(self.name.value, message)

    def unanswered(self) -> DecodedResponse:
        return DecodedResponse(question_type=self.name)


class PointScaleKind(BaseQuestionKind):
    """Kinds whose answer is one integer picked from ``resolved.points``."""

    def build_options(self, resolved: ResolvedConfig, value: Any) -> list[ControlOption]:
        return [
            ControlOption(
                index=i,
                value=point,
                label=resolved.labels[i] if i < len(resolved.labels) else str(point),
                glyph=resolved.glyphs[i] if i < len(resolved.glyphs) else None,
                selected=value == point and not isinstance(value, bool),
            )
            for i, point in enumerate(resolved.points)
        ]

    def apply(self, resolved: ResolvedConfig, value: Any, event: ControlEvent) -> Any:
        if isinstance(event, Select) and 0 <= event.index < len(resolved.points):
            return resolved.points[event.index]
        return UNCHANGED

    def coerce(self, value: Any) -> Any:
        number = as_int(value)
        if number is None:
            raise self.shape_error(f"expected an integer answer, got {value!r}")
        return number

    def check_range(self, value: Any, resolved: ResolvedConfig) -> Any:
        if value not in resolved.points:
            raise self.shape_error(f"{value} is not one of the scale points {resolved.points}")
        return value

    def encode(self, value: Any) -> EncodedResponse:
        return EncodedResponse(response_value=value)

    def decode(self, row: Any, resolved: ResolvedConfig) -> DecodedResponse:
        value = as_int(read_field(row, "response_value"))
        if value is None:
            return self.unanswered()
        return self.present(value, resolved)

    def present(self, value: int, resolved: ResolvedConfig) -> DecodedResponse:
        return DecodedResponse(question_type=self.name, answered=True, value=value, display=str(value))
