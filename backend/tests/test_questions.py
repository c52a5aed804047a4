"""Tests for the question engine — registry, config defaulting, input controls and previews."""

import copy
import random

import pytest

from app.questions import QuestionType, question_registry
from app.questions.exceptions import UnknownQuestionTypeError
from app.questions.labels import CSAT_LABELS, EMOJI_SETS, LIKERT_LABELS, safe_label
from app.questions.models import QuestionSpec
from app.questions.preview import preview


def _question(question_type, **config):
    return QuestionSpec(question_type=question_type, scale_config=config or None)


def _render(question, value=None, disabled=False):
    changes = []
    control = question_registry.render(question, value, on_change=changes.append, disabled=disabled)
    return control, changes


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_every_type_registered(self):
        assert set(question_registry.available_types) == {t.value for t in QuestionType}

    def test_unknown_type_falls_back_to_text(self):
        assert question_registry.get("slider").name == QuestionType.TEXT
        assert question_registry.get(None).name == QuestionType.TEXT

    def test_require_rejects_unknown_type(self):
        with pytest.raises(UnknownQuestionTypeError, match="slider"):
            question_registry.require("slider")

    def test_require_accepts_enum_and_string(self):
        assert question_registry.require(QuestionType.NPS).name == QuestionType.NPS
        assert question_registry.require("matrix").name == QuestionType.MATRIX

    def test_unknown_type_renders_as_text(self):
        control, _ = _render(_question("slider"))
        assert control.kind == QuestionType.TEXT
        assert control.options == []

    def test_default_configs(self):
        assert question_registry.default_config("csat") == {"csatScale": 5}
        assert question_registry.default_config("stars") == {"maxValue": 5}
        assert question_registry.default_config("emojis") == {"emojiSet": EMOJI_SETS["emotions"]}
        assert question_registry.default_config("text") == {}

    def test_default_config_is_a_fresh_copy(self):
        config = question_registry.default_config("emojis")
        config["emojiSet"].append("🤯")
        assert question_registry.default_config("emojis")["emojiSet"] == EMOJI_SETS["emotions"]


# ---------------------------------------------------------------------------
# Config defaulting
# ---------------------------------------------------------------------------


class TestEffectiveConfig:
    def test_csat_defaults_to_five_points(self):
        resolved = question_registry.effective_config("csat", None)
        assert resolved.points == [1, 2, 3, 4, 5]
        assert resolved.labels == CSAT_LABELS[5]
        assert resolved.glyphs == ["😡", "😞", "😐", "🙂", "😄"]

    @pytest.mark.parametrize("scale", [3, 5, 7])
    def test_csat_labels_follow_scale(self, scale):
        config = {"csatScale": scale}
        first = question_registry.effective_config("csat", config)
        second = question_registry.effective_config("csat", config)
        assert len(first.labels) == scale
        assert first.labels == CSAT_LABELS[scale]
        assert first == second

    def test_input_is_not_mutated(self):
        config = {"csatScale": 7, "csatLabels": ["a", "b"], "helpText": "Seja sincero"}
        snapshot = copy.deepcopy(config)
        question_registry.effective_config("csat", config)
        assert config == snapshot

    def test_short_label_array_degrades_to_blank(self):
        resolved = question_registry.effective_config("csat", {"csatScale": 7, "csatLabels": ["1", "2", "3", "4", "5"]})
        assert resolved.points == [1, 2, 3, 4, 5, 6, 7]
        assert resolved.labels == ["1", "2", "3", "4", "5", "", ""]

    def test_likert_seven_point_defaults(self):
        resolved = question_registry.effective_config("likert", {"likertScale": 7})
        assert resolved.labels == LIKERT_LABELS[7]
        assert resolved.labels[2] == "Discordo Parcialmente"

    def test_nps_defaults(self):
        resolved = question_registry.effective_config("nps", None)
        assert resolved.points == list(range(11))
        assert resolved.min_label == "Nada provável"
        assert resolved.max_label == "Extremamente provável"

    def test_nps_custom_labels(self):
        resolved = question_registry.effective_config("nps", {"npsLabels": {"min": "Never", "max": "Surely"}})
        assert (resolved.min_label, resolved.max_label) == ("Never", "Surely")

    def test_ces_defaults(self):
        resolved = question_registry.effective_config("ces", {})
        assert resolved.points == [1, 2, 3, 4, 5, 6, 7]
        assert resolved.min_label == "Muito Fácil"
        assert resolved.max_label == "Muito Difícil"

    def test_icon_scale_size(self):
        assert len(question_registry.effective_config("stars", None).points) == 5
        assert len(question_registry.effective_config("hearts", {"maxValue": 10}).points) == 10

    def test_invalid_fields_fall_back_to_defaults(self):
        assert question_registry.effective_config("csat", {"csatScale": 4}).points == [1, 2, 3, 4, 5]
        assert len(question_registry.effective_config("stars", {"maxValue": "lots"}).points) == 5
        assert question_registry.effective_config("single_choice", {"options": "A,B"}).options == []

    def test_invalid_field_does_not_discard_valid_ones(self):
        resolved = question_registry.effective_config("likert", {"likertScale": 9, "likertLabels": ["x"] * 5})
        assert resolved.labels == ["x"] * 5

    def test_fields_of_other_types_are_ignored(self):
        resolved = question_registry.effective_config("nps", {"csatScale": 7, "options": ["x"], "matrixRows": ["r"]})
        assert resolved.options == []
        assert resolved.rows == []
        assert len(resolved.points) == 11

    def test_generic_fields(self):
        resolved = question_registry.effective_config("text", {"isRequired": True, "helpText": "Opcional"})
        assert resolved.is_required is True
        assert resolved.help_text == "Opcional"
        assert resolved.placeholder == "Digite sua resposta..."

    def test_multiple_choice_max_defaults_to_option_count(self):
        resolved = question_registry.effective_config("multiple_choice", {"options": ["A", "B", "C"]})
        assert resolved.min_selections == 0
        assert resolved.max_selections == 3

    def test_safe_label(self):
        assert safe_label(["a", "b"], 1) == "b"
        assert safe_label(["a", "b"], 2) == ""
        assert safe_label(["a", "b"], -1) == ""
        assert safe_label(None, 0, "—") == "—"


# ---------------------------------------------------------------------------
# Input controls
# ---------------------------------------------------------------------------


class TestScaleControls:
    def test_nps_click_nine(self):
        control, changes = _render(_question("nps"))
        assert [o.label for o in control.options] == [str(i) for i in range(11)]

        control.select([o.label for o in control.options].index("9"))

        assert changes == [9]
        assert control.value == 9
        assert [o.selected for o in control.options].count(True) == 1
        assert control.options[9].selected

    def test_nps_zero_is_selected_state(self):
        control, _ = _render(_question("nps"), value=0)
        assert control.options[0].selected

    def test_csat_values_are_one_based(self):
        control, changes = _render(_question("csat", csatScale=3))
        control.select(2)
        assert changes == [3]
        assert control.options[2].label == "Satisfeito"
        assert control.options[0].glyph == "😞"

    def test_ces_and_likert(self):
        control, changes = _render(_question("ces", cesScale=5))
        assert len(control.options) == 5
        assert control.min_label == "Muito Fácil"
        control.select(0)

        likert, likert_changes = _render(_question("likert"))
        likert.select(4)

        assert changes == [1]
        assert likert_changes == [5]
        assert likert.options[4].label == "Concordo Totalmente"

    def test_stars_click_sets_index_plus_one(self):
        control, changes = _render(_question("stars", maxValue=4))
        control.select(2)
        assert changes == [3]
        assert [o.filled for o in control.options] == [True, True, True, False]

    @pytest.mark.parametrize("question_type", ["stars", "hearts"])
    def test_icons_fill_in_preview(self, question_type):
        control, _ = _render(_question(question_type, maxValue=5), value=3, disabled=True)
        assert [o.filled for o in control.options] == [True, True, True, False, False]

    def test_icons_unfilled_without_value(self):
        control, _ = _render(_question("hearts"), value=None, disabled=True)
        assert not any(o.filled for o in control.options)

    def test_emoji_click(self):
        control, changes = _render(_question("emojis"))
        assert [o.glyph for o in control.options] == EMOJI_SETS["emotions"]
        control.select(4)
        assert changes == [5]

    def test_custom_emoji_set(self):
        control, changes = _render(_question("emojis", emojiSet=EMOJI_SETS["quality"]))
        control.select(0)
        assert control.options[0].glyph == "👎"
        assert changes == [1]

    def test_like_dislike(self):
        control, changes = _render(_question("like_dislike"))
        assert [o.label for o in control.options] == ["Gostei", "Não gostei"]

        control.select(1)
        assert changes == [0]
        assert control.value == 0
        assert control.options[1].selected
        assert not control.options[0].selected

        control.select(0)
        assert changes == [0, 1]

    def test_like_dislike_custom_labels(self):
        control, _ = _render(_question("like_dislike", likeLabel="Sim", dislikeLabel="Não"))
        assert [o.label for o in control.options] == ["Sim", "Não"]

    def test_out_of_range_and_foreign_events_are_ignored(self):
        control, changes = _render(_question("nps"))
        control.select(11)
        control.select(-1)
        control.edit("nine")
        control.select_cell(0, 0)
        assert changes == []
        assert control.value is None


class TestChoiceControls:
    def test_single_choice(self):
        control, changes = _render(_question("single_choice", options=["A", "B", "C"]))
        control.select(1)
        assert changes == [{"index": 1, "text": "B"}]
        assert [o.selected for o in control.options] == [False, True, False]

    def test_multiple_choice_respects_max(self):
        control, changes = _render(_question("multiple_choice", options=["A", "B", "C"], maxSelections=2))

        control.select(0)
        control.select(1)
        assert control.value == [0, 1]

        control.select(2)
        assert control.value == [0, 1]
        assert len(changes) == 2

        control.select(0)
        assert control.value == [1]
        assert changes[-1] == [1]

    @pytest.mark.parametrize("option_count,max_selections", [(3, 1), (5, 2), (6, 4), (4, 4)])
    def test_multiple_choice_never_exceeds_max(self, option_count, max_selections):
        options = [f"Opt {i}" for i in range(option_count)]
        control, _ = _render(_question("multiple_choice", options=options, maxSelections=max_selections))
        rng = random.Random(option_count * 10 + max_selections)
        for _ in range(200):
            control.select(rng.randrange(option_count))
            assert len(control.value or []) <= max_selections
            assert len(set(control.value or [])) == len(control.value or [])

    def test_removal_allowed_below_minimum(self):
        control, _ = _render(_question("multiple_choice", options=["A", "B", "C"], minSelections=2))
        control.select(0)
        control.select(0)
        assert control.value == []

    def test_removal_allowed_when_over_limit(self):
        # Config edited to a lower limit after the answer was given.
        control, _ = _render(
            _question("multiple_choice", options=["A", "B", "C"], maxSelections=1),
            value=[0, 1, 2],
        )
        control.select(2)
        assert control.value == [0, 1]

    @pytest.mark.parametrize(
        "config,expected",
        [
            ({"minSelections": 1, "maxSelections": 2}, "Selecione entre 1 e 2 opções"),
            ({"minSelections": 1}, "Selecione no mínimo 1 opção(ões)"),
            ({"maxSelections": 2}, "Selecione no máximo 2 opção(ões)"),
            ({}, None),
        ],
    )
    def test_multiple_choice_helper_text(self, config, expected):
        control, _ = _render(_question("multiple_choice", options=["A", "B", "C"], **config))
        assert control.helper_text == expected

    def test_matrix_rows_are_independent(self):
        control, changes = _render(
            _question("matrix", matrixRows=["Speed", "Quality"], matrixColumns=["Bad", "OK", "Good"])
        )
        control.select_cell(0, 2)
        assert control.value == {0: 2}

        control.select_cell(1, 1)
        assert control.value == {0: 2, 1: 1}
        assert changes == [{0: 2}, {0: 2, 1: 1}]

        control.select_cell(0, 0)
        assert control.value == {0: 0, 1: 1}

    def test_matrix_out_of_range_ignored(self):
        control, changes = _render(_question("matrix", matrixRows=["Speed"], matrixColumns=["Bad", "Good"]))
        control.select_cell(1, 0)
        control.select_cell(0, 2)
        assert changes == []

    def test_matrix_accepts_stored_string_keys(self):
        control, _ = _render(_question("matrix", matrixRows=["A", "B"], matrixColumns=["x", "y"]), value={"1": 0})
        assert control.cells == {1: 0}

    def test_matrix_ignores_non_ascii_digit_keys(self):
        question = _question("matrix", matrixRows=["A"], matrixColumns=["x", "y"])
        control, _ = _render(question, value={"\u00b2": 0, "0": 1}, disabled=True)
        assert control.cells == {0: 1}


class TestTextAndDisabled:
    def test_text_edit(self):
        control, changes = _render(_question("text"))
        control.edit("Ótimo atendimento")
        control.edit("")
        assert changes == ["Ótimo atendimento", ""]
        assert control.text == ""
        assert control.placeholder == "Digite sua resposta..."

    @pytest.mark.parametrize(
        "question,interact",
        [
            (_question("nps"), lambda c: c.select(5)),
            (_question("multiple_choice", options=["A", "B"]), lambda c: c.select(0)),
            (_question("matrix", matrixRows=["r"], matrixColumns=["c"]), lambda c: c.select_cell(0, 0)),
            (_question("text"), lambda c: c.edit("hi")),
        ],
    )
    def test_disabled_controls_ignore_interaction(self, question, interact):
        control, changes = _render(question, disabled=True)
        interact(control)
        assert changes == []
        assert control.value is None

    def test_control_without_callback_still_tracks_value(self):
        control = question_registry.render(_question("stars"))
        control.select(1)
        assert control.value == 2


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------


class TestPreview:
    def test_preview_is_disabled_and_unanswered(self):
        result = preview(question_registry, _question("stars", maxValue=3), 0)
        assert result.heading == "Pergunta 1"
        assert result.control["disabled"] is True
        assert len(result.control["options"]) == 3
        assert not any(o["filled"] for o in result.control["options"])

    def test_preview_placeholder_text(self):
        result = preview(question_registry, QuestionSpec(question_text="", question_type="nps"), 4)
        assert result.heading == "Pergunta 5"
        assert result.question_text == "Digite o texto da pergunta..."

    def test_preview_unknown_type(self):
        result = preview(question_registry, _question("slider"), 0)
        assert result.known_type is False
        assert result.question_type == "text"
