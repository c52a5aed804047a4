"""Default label tables for the scale-based question kinds.

Label text is Portuguese, matching the public forms shown to respondents.
"""

from collections.abc import Sequence

BLANK = ""
PLACEHOLDER = "—"

NPS_MIN_LABEL = "Nada provável"
NPS_MAX_LABEL = "Extremamente provável"

CSAT_DEFAULT_SCALE = 5
CSAT_LABELS: dict[int, list[str]] = {
    3: ["Insatisfeito", "Neutro", "Satisfeito"],
    5: ["Muito Insatisfeito", "Insatisfeito", "Neutro", "Satisfeito", "Muito Satisfeito"],
    7: [
        "Muito Insatisfeito",
        "Insatisfeito",
        "Pouco Insatisfeito",
        "Neutro",
        "Pouco Satisfeito",
        "Satisfeito",
        "Muito Satisfeito",
    ],
}
CSAT_GLYPHS: dict[int, list[str]] = {
    3: ["😞", "😐", "😄"],
    5: ["😡", "😞", "😐", "🙂", "😄"],
    7: ["😡", "😠", "😞", "😐", "🙂", "😊", "😄"],
}

CES_DEFAULT_SCALE = 7
CES_MIN_LABEL = "Muito Fácil"
CES_MAX_LABEL = "Muito Difícil"

LIKERT_DEFAULT_SCALE = 5
LIKERT_LABELS: dict[int, list[str]] = {
    5: ["Discordo Totalmente", "Discordo", "Neutro", "Concordo", "Concordo Totalmente"],
    7: [
        "Discordo Totalmente",
        "Discordo",
        "Discordo Parcialmente",
        "Neutro",
        "Concordo Parcialmente",
        "Concordo",
        "Concordo Totalmente",
    ],
}

ICON_DEFAULT_MAX = 5

EMOJI_SETS: dict[str, list[str]] = {
    "emotions": ["😡", "😞", "😐", "🙂", "😄"],
    "satisfaction": ["😠", "😕", "😐", "😊", "😍"],
    "quality": ["👎", "😕", "😐", "👍", "⭐"],
}
EMOJI_DEFAULT_SET = "emotions"

LIKE_LABEL = "Gostei"
DISLIKE_LABEL = "Não gostei"

TEXT_PLACEHOLDER = "Digite sua resposta..."


def safe_label(labels: Sequence[str] | None, index: int, default: str = BLANK) -> str:
    """Positional lookup that never raises.

    Label arrays may be shorter than the scale they describe (an author can
    switch a 5-point scale to 7 without editing the labels), and stored
    answers may point at options that were removed since. Both cases read
    as ``default`` instead of an IndexError.
    """
    if labels is None or index < 0 or index >= len(labels):
        return default
    label = labels[index]
    return label if isinstance(label, str) else default
