"""AI summary report — send a project's decoded responses to an LLM for analysis."""

import json
import logging
import re

import httpx
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.models.project import Project
from app.models.response import QuestionResponse
from app.schemas.summary import SummaryMetrics, SummaryReport
from app.services.responses import decode_row

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "Você é um analista de feedback de clientes especializado. Analise os feedbacks fornecidos "
    "e retorne APENAS um JSON válido com a seguinte estrutura:\n"
    "{\n"
    '  "summary": "Resumo geral dos feedbacks em português",\n'
    '  "recommendations": ["recomendação 1", "recomendação 2", "recomendação 3"],\n'
    '  "negativeIssues": ["problema 1", "problema 2", "problema 3"],\n'
    '  "positiveHighlights": ["ponto positivo 1", "ponto positivo 2"],\n'
    '  "metrics": {\n'
    '    "totalResponses": número,\n'
    '    "averageRating": número,\n'
    '    "negativeCount": número,\n'
    '    "positiveCount": número\n'
    "  }\n"
    "}\n\n"
    "IMPORTANTE: Retorne APENAS o JSON, sem markdown ou texto adicional."
)

NO_RESPONSES_SUMMARY = "Nenhuma resposta encontrada para análise."
UNPARSED_SUMMARY = "Não foi possível processar a análise"
UNPARSED_RECOMMENDATION = "Análise parcial: não foi possível extrair recomendações estruturadas"

_CODE_FENCE = re.compile(r"```(?:json)?\n?")


class SummaryError(Exception):
    """Raised when the summary report cannot be produced.

    ``status_code`` carries the HTTP status the API should answer with.
    """

    def __init__(self, message: str, status_code: int = 502) -> None:
        self.status_code = status_code
        super().__init__(message)


def format_responses(rows: list[QuestionResponse]) -> str:
    """Render rows as the plain-text block sent to the model."""
    blocks = []
    for row in rows:
        decoded = decode_row(row, row.question)
        blocks.append(f"Pergunta: {row.question.question_text}\nResposta: {decoded.display}\n---")
    return "\n".join(blocks)


def parse_report(content: str, total_responses: int) -> SummaryReport:
    """Parse the model's reply; unparseable replies degrade to a partial report."""
    text = _CODE_FENCE.sub("", content).strip()
    fallback_metrics = SummaryMetrics(total_responses=total_responses)
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("report is not a JSON object")
    except ValueError:
        logger.warning("Failed to parse summary response as JSON (raw: %.200s)", text)
        return SummaryReport(
            summary=text[:500] or UNPARSED_SUMMARY,
            recommendations=[UNPARSED_RECOMMENDATION],
            metrics=fallback_metrics,
        )

    def _strings(key: str) -> list[str]:
        items = data.get(key)
        return [str(item) for item in items] if isinstance(items, list) else []

    metrics = fallback_metrics
    if isinstance(data.get("metrics"), dict):
        try:
            metrics = SummaryMetrics.model_validate(data["metrics"])
        except ValueError:
            logger.warning("Invalid metrics in summary response, using defaults")

    return SummaryReport(
        summary=str(data.get("summary") or UNPARSED_SUMMARY),
        recommendations=_strings("recommendations"),
        negative_issues=_strings("negativeIssues"),
        positive_highlights=_strings("positiveHighlights"),
        metrics=metrics,
    )


async def request_report(responses_text: str, total_responses: int) -> SummaryReport:
    """Ask the model for a report over ``responses_text``.

    Raises:
        SummaryError: If the summary is not configured or the API call fails.
    """
    api_key = settings.OPENAI_API_KEY
    if not api_key:
        raise SummaryError("OPENAI_API_KEY not configured", status_code=503)

    payload = {
        "model": settings.SUMMARY_MODEL,
        "messages": [
            {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": (
                    f"Analise os seguintes feedbacks de clientes:\n\n{responses_text}\n\n"
                    f"Total de respostas: {total_responses}"
                ),
            },
        ],
        "temperature": 0.2,
    }

    try:
        async with httpx.AsyncClient(timeout=settings.SUMMARY_TIMEOUT_SECONDS) as client:
            response = await client.post(
                settings.SUMMARY_API_URL,
                json=payload,
                headers={
                    "Authorization": f"Bearer {api_key}",
                    "Content-Type": "application/json",
                },
            )
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.error("Summary API returned %d: %s", status, exc.response.text)
        if status == 429:
            raise SummaryError("Limite de taxa excedido. Tente novamente mais tarde.", status_code=429) from exc
        if status == 402:
            raise SummaryError("Créditos insuficientes.", status_code=402) from exc
        raise SummaryError(f"Summary API error: {status}") from exc
    except httpx.RequestError as exc:
        logger.error("Summary API request failed: %s", exc)
        raise SummaryError(f"Summary API request failed: {exc}") from exc

    try:
        content = response.json()["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        logger.error("Invalid summary API response structure: %s", exc)
        raise SummaryError("Invalid summary API response structure") from exc

    return parse_report(content or "", total_responses)


async def summarize_project(db: Session, project: Project) -> SummaryReport:
    """Build the summary report over the project's latest responses.

    Raises:
        SummaryError: If summaries are disabled or the model call fails.
    """
    if not settings.SUMMARY_ENABLED:
        raise SummaryError("Summary reports are disabled", status_code=503)

    rows = (
        db.execute(
            select(QuestionResponse)
            .options(selectinload(QuestionResponse.question))
            .where(QuestionResponse.project_id == project.id)
            .order_by(QuestionResponse.submitted_at.desc())
            .limit(settings.SUMMARY_MAX_RESPONSES)
        )
        .scalars()
        .all()
    )
    if not rows:
        logger.debug("No responses for project %s, skipping summary call", project.id)
        return SummaryReport(summary=NO_RESPONSES_SUMMARY)

    logger.info("Requesting summary for project %s over %d response(s)", project.id, len(rows))
    return await request_report(format_responses(list(rows)), len(rows))
