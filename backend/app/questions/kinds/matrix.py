import re
from collections.abc import Mapping
from typing import Any

from app.questions.base import BaseQuestionKind, as_int, read_field
from app.questions.controls import UNCHANGED, Control, ControlEvent, SelectCell
from app.questions.labels import PLACEHOLDER, safe_label
from app.questions.models import (
    DecodedResponse,
    EncodedResponse,
    MatrixConfig,
    QuestionType,
    ResolvedConfig,
)

_INDEX_KEY = re.compile(r"-?[0-9]+")


def _cells(value: Any) -> dict[int, int]:
    """Row -> column map with integer keys; JSON-stored maps arrive with string keys."""
    if not isinstance(value, Mapping):
        return {}
    cells: dict[int, int] = {}
    for key, column in value.items():
        if isinstance(key, str):
            row = int(key) if _INDEX_KEY.fullmatch(key) else None
        else:
            row = as_int(key)
        column = as_int(column)
        if row is not None and column is not None:
            cells[row] = column
    return cells


class MatrixKind(BaseQuestionKind):
    """One independent single choice per row; the answer maps row index to column index."""

    config_model = MatrixConfig

    @property
    def name(self) -> QuestionType:
        return QuestionType.MATRIX

    def default_config(self) -> dict:
        return {"matrixRows": [], "matrixColumns": []}

    def resolve_config(self, config: MatrixConfig) -> ResolvedConfig:
        return ResolvedConfig(
            question_type=self.name,
            rows=list(config.matrix_rows or []),
            columns=list(config.matrix_columns or []),
        )

    def paint(self, control: Control) -> None:
        super().paint(control)
        control.rows = list(control.config.rows)
        control.columns = list(control.config.columns)
        control.cells = _cells(control.value)

    def apply(self, resolved: ResolvedConfig, value: Any, event: ControlEvent) -> Any:
        if not isinstance(event, SelectCell):
            return UNCHANGED
        if not (0 <= event.row < len(resolved.rows) and 0 <= event.column < len(resolved.columns)):
            return UNCHANGED
        return {**_cells(value), event.row: event.column}

    def coerce(self, value: Any) -> Any:
        if not isinstance(value, Mapping):
            raise self.shape_error(f"expected a row -> column mapping, got {value!r}")
        cells = _cells(value)
        if len(cells) != len(value):
            raise self.shape_error(f"row and column indices must be integers, got {value!r}")
        return cells

    def encode(self, value: Any) -> EncodedResponse:
        return EncodedResponse(response_data={str(row): column for row, column in sorted(value.items())})

    def decode(self, row: Any, resolved: ResolvedConfig) -> DecodedResponse:
        data = read_field(row, "response_data")
        if not isinstance(data, Mapping):
            return self.unanswered()
        cells = _cells(data)
        labels = [
            f"{safe_label(resolved.rows, r, PLACEHOLDER) or PLACEHOLDER}: "
            f"{safe_label(resolved.columns, c, PLACEHOLDER) or PLACEHOLDER}"
            for r, c in sorted(cells.items())
        ]
        return DecodedResponse(
            question_type=self.name,
            answered=bool(cells),
            value=cells,
            display="; ".join(labels) if labels else PLACEHOLDER,
            labels=labels,
        )
