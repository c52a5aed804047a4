"""Interactive control model returned by the input renderers.

A ``Control`` carries everything needed to draw one question's input
(options with their selected/filled state, endpoint labels, helper text,
matrix grid) plus the interaction entry points a presentation layer wires
to user events. Interactions compute the next canonical answer through the
question kind, update the control in place and report it to ``on_change``.
Disabled controls (preview, read-only display) ignore every interaction.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.questions.models import QuestionType, ResolvedConfig

if TYPE_CHECKING:
    from app.questions.base import BaseQuestionKind


@dataclass(frozen=True)
class Select:
    """Click on the option at ``index`` (button, radio, checkbox, icon)."""

    index: int


@dataclass(frozen=True)
class SelectCell:
    """Pick ``column`` in matrix ``row``."""

    row: int
    column: int


@dataclass(frozen=True)
class Edit:
    """Replace the free-text content."""

    text: str


ControlEvent = Select | SelectCell | Edit


@dataclass
class ControlOption:
    index: int
    value: Any
    label: str = ""
    glyph: str | None = None
    selected: bool = False
    filled: bool = False


@dataclass
class Control:
    kind: QuestionType
    config: ResolvedConfig
    value: Any = None
    disabled: bool = False
    options: list[ControlOption] = field(default_factory=list)
    rows: list[str] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)
    cells: dict[int, int] = field(default_factory=dict)
    text: str = ""
    placeholder: str | None = None
    min_label: str | None = None
    max_label: str | None = None
    helper_text: str | None = None

    _impl: "BaseQuestionKind | None" = field(default=None, repr=False, compare=False)
    _on_change: Callable[[Any], None] | None = field(default=None, repr=False, compare=False)

    def select(self, index: int) -> None:
        self.dispatch(Select(index))

    def select_cell(self, row: int, column: int) -> None:
        self.dispatch(SelectCell(row, column))

    def edit(self, text: str) -> None:
        self.dispatch(Edit(text))

    def dispatch(self, event: ControlEvent) -> None:
        if self.disabled or self._impl is None:
            return
        new_value = self._impl.apply(self.config, self.value, event)
        if new_value is UNCHANGED:
            return
        self.value = new_value
        self._impl.paint(self)
        if self._on_change is not None:
            self._on_change(new_value)

    def to_dict(self) -> dict[str, Any]:
        """Serializable view of the rendered state (for preview payloads)."""
        return {
            "kind": self.kind.value,
            "value": self.value,
            "disabled": self.disabled,
            "options": [
                {
                    "index": o.index,
                    "value": o.value,
                    "label": o.label,
                    "glyph": o.glyph,
                    "selected": o.selected,
                    "filled": o.filled,
                }
                for o in self.options
            ],
            "rows": list(self.rows),
            "columns": list(self.columns),
            "cells": {str(k): v for k, v in self.cells.items()},
            "text": self.text,
            "placeholder": self.placeholder,
            "min_label": self.min_label,
            "max_label": self.max_label,
            "helper_text": self.helper_text,
        }


class _Unchanged:
    def __repr__(self) -> str:
        return "UNCHANGED"


# Returned by BaseQuestionKind.apply when an interaction has no effect.
UNCHANGED: Any = _Unchanged()
