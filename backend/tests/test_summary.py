"""Tests for the AI summary report — reply parsing, the model call and the summary endpoint."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.core.config import settings
from app.services.responses import submit_session
from app.services.summary import (
    NO_RESPONSES_SUMMARY,
    UNPARSED_RECOMMENDATION,
    SummaryError,
    format_responses,
    parse_report,
    request_report,
    summarize_project,
)

REPORT = {
    "summary": "Clientes satisfeitos com a entrega",
    "recommendations": ["Melhorar embalagem"],
    "negativeIssues": ["Atraso pontual"],
    "positiveHighlights": ["Atendimento rápido"],
    "metrics": {"totalResponses": 2, "averageRating": 8.5, "negativeCount": 0, "positiveCount": 2},
}


def _mock_client(mock_client_cls, content=None, status_code=200):
    mock_client = AsyncMock()
    mock_client_cls.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client_cls.return_value.__aexit__ = AsyncMock(return_value=False)

    mock_resp = MagicMock()
    mock_resp.json.return_value = {"choices": [{"message": {"content": content}}]}
    if status_code >= 400:
        request = httpx.Request("POST", settings.SUMMARY_API_URL)
        error_response = httpx.Response(status_code, request=request, text="error")
        mock_resp.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("error", request=request, response=error_response)
        )
    else:
        mock_resp.raise_for_status = MagicMock()
    mock_client.post.return_value = mock_resp
    return mock_client


@pytest.fixture
def api_key():
    original = settings.OPENAI_API_KEY
    settings.OPENAI_API_KEY = "test-key"
    yield
    settings.OPENAI_API_KEY = original


@pytest.fixture
def answered_project(make_project, db):
    project = make_project(
        [
            {"question_text": "Recomendaria?", "question_type": "nps"},
            {"question_text": "Comentários", "question_type": "text"},
        ]
    )
    nps, text = project.questions
    submit_session(db, project, {nps.id: 10, text.id: "Muito bom"})
    return project


# ---------------------------------------------------------------------------
# parse_report
# ---------------------------------------------------------------------------


class TestParseReport:
    def test_valid_report(self):
        report = parse_report(json.dumps(REPORT), total_responses=2)
        assert report.summary == "Clientes satisfeitos com a entrega"
        assert report.negative_issues == ["Atraso pontual"]
        assert report.metrics.average_rating == 8.5

    def test_code_fences_are_stripped(self):
        report = parse_report(f"```json\n{json.dumps(REPORT)}\n```", total_responses=2)
        assert report.recommendations == ["Melhorar embalagem"]

    def test_unparseable_reply_degrades(self):
        report = parse_report("Os clientes gostaram.", total_responses=4)
        assert report.summary == "Os clientes gostaram."
        assert report.recommendations == [UNPARSED_RECOMMENDATION]
        assert report.metrics.total_responses == 4

    def test_missing_fields_default(self):
        report = parse_report(json.dumps({"summary": "Ok", "recommendations": "nope"}), total_responses=1)
        assert report.recommendations == []
        assert report.positive_highlights == []
        assert report.metrics.total_responses == 1

    def test_serializes_camel_case(self):
        data = parse_report(json.dumps(REPORT), total_responses=2).model_dump(by_alias=True)
        assert "negativeIssues" in data
        assert data["metrics"]["totalResponses"] == 2


# ---------------------------------------------------------------------------
# request_report
# ---------------------------------------------------------------------------


class TestRequestReport:
    @pytest.mark.asyncio
    async def test_no_api_key_raises(self):
        original = settings.OPENAI_API_KEY
        settings.OPENAI_API_KEY = ""
        try:
            with pytest.raises(SummaryError, match="OPENAI_API_KEY not configured") as exc_info:
                await request_report("Pergunta: x", 1)
            assert exc_info.value.status_code == 503
        finally:
            settings.OPENAI_API_KEY = original

    @pytest.mark.asyncio
    async def test_successful_report(self, api_key):
        with patch("app.services.summary.httpx.AsyncClient") as mock_client_cls:
            mock_client = _mock_client(mock_client_cls, json.dumps(REPORT))
            report = await request_report("Pergunta: x\nResposta: y\n---", 2)

        assert report.summary == REPORT["summary"]
        payload = mock_client.post.call_args.kwargs["json"]
        assert payload["model"] == settings.SUMMARY_MODEL
        assert "Total de respostas: 2" in payload["messages"][1]["content"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code,expected", [(429, 429), (402, 402), (500, 502)])
    async def test_api_errors_are_mapped(self, api_key, status_code, expected):
        with patch("app.services.summary.httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, status_code=status_code)
            with pytest.raises(SummaryError) as exc_info:
                await request_report("Pergunta: x", 1)
        assert exc_info.value.status_code == expected

    @pytest.mark.asyncio
    async def test_malformed_api_response(self, api_key):
        with patch("app.services.summary.httpx.AsyncClient") as mock_client_cls:
            mock_client = _mock_client(mock_client_cls)
            mock_client.post.return_value.json.return_value = {"error": "?"}
            with pytest.raises(SummaryError, match="Invalid summary API response"):
                await request_report("Pergunta: x", 1)


# ---------------------------------------------------------------------------
# summarize_project / endpoint
# ---------------------------------------------------------------------------


class TestSummarizeProject:
    def test_format_responses_uses_decoded_display(self, answered_project, db):
        rows = sorted(answered_project.responses, key=lambda r: r.question.order_index)
        text = format_responses(rows)
        assert "Pergunta: Recomendaria?\nResposta: 10" in text
        assert "Resposta: Muito bom" in text

    @pytest.mark.asyncio
    async def test_no_responses(self, make_project, db, api_key):
        project = make_project([{"question_text": "Nota", "question_type": "stars"}])
        with patch("app.services.summary.request_report") as mock_request:
            report = await summarize_project(db, project)
        assert report.summary == NO_RESPONSES_SUMMARY
        mock_request.assert_not_called()

    @pytest.mark.asyncio
    async def test_disabled(self, answered_project, db):
        original = settings.SUMMARY_ENABLED
        settings.SUMMARY_ENABLED = False
        try:
            with pytest.raises(SummaryError) as exc_info:
                await summarize_project(db, answered_project)
            assert exc_info.value.status_code == 503
        finally:
            settings.SUMMARY_ENABLED = original

    def test_summary_endpoint(self, client, answered_project, api_key):
        with patch("app.services.summary.httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, json.dumps(REPORT))
            resp = client.post(f"/api/v1/projects/{answered_project.id}/summary")

        assert resp.status_code == 200
        data = resp.json()
        assert data["positiveHighlights"] == ["Atendimento rápido"]
        assert data["metrics"]["averageRating"] == 8.5

    def test_summary_endpoint_maps_errors(self, client, answered_project, api_key):
        with patch("app.services.summary.httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, status_code=429)
            resp = client.post(f"/api/v1/projects/{answered_project.id}/summary")
        assert resp.status_code == 429
