"""Tests for the Analyzer (analysis gateway)."""

import asyncio
from pathlib import Path

import pytest

from app.analysis.analyzer import Analyzer
from app.analysis.exceptions import (
    AnalysisApiError,
    AnalysisError,
    AnalysisNetworkError,
    MalformedResponseError,
    MissingCredentialsError,
)
from app.processor.models import AnalysisFailed, Analyzed, ErrorKind
from tests.fakes import FakeAnalysisClient


def _analyze(client: FakeAnalysisClient, text: str = "my cv") -> object:
    return asyncio.run(Analyzer(client=client, model="test-model").analyze(text))


class TestAnalyzeSuccess:
    def test_returns_narrative(self) -> None:
        outcome = _analyze(FakeAnalysisClient(response="  ## Great CV\n"))
        assert outcome == Analyzed(narrative="## Great CV")

    def test_embeds_text_in_prompt_once(self) -> None:
        client = FakeAnalysisClient(response="ok")
        _analyze(client, "Jane Doe, data engineer")
        assert len(client.prompts) == 1
        assert "Jane Doe, data engineer" in client.prompts[0]

    def test_prompt_covers_review_sections(self) -> None:
        client = FakeAnalysisClient(response="ok")
        _analyze(client)
        prompt = client.prompts[0].lower()
        for topic in ("structure", "content quality", "ats", "achievements", "skills",
                      "overall impact", "common issues"):
            assert topic in prompt

    def test_text_with_braces_is_kept_verbatim(self) -> None:
        client = FakeAnalysisClient(response="ok")
        _analyze(client, "skills: {python}")
        assert "skills: {python}" in client.prompts[0]

    def test_custom_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("Review: {cv_text}", encoding="utf-8")
        client = FakeAnalysisClient(response="ok")
        analyzer = Analyzer(client=client, model="m", prompt_template_path=template)
        asyncio.run(analyzer.analyze("abc"))
        assert client.prompts == ["Review: abc"]


class TestAnalyzeFailures:
    def test_missing_credentials_checked_before_call(self) -> None:
        client = FakeAnalysisClient(configured=False)
        outcome = _analyze(client)
        assert outcome == AnalysisFailed(
            kind=ErrorKind.MISSING_CREDENTIALS, detail="Missing analysis API key"
        )
        assert client.prompts == []

    def test_ensure_configured_raises(self) -> None:
        analyzer = Analyzer(client=FakeAnalysisClient(configured=False), model="m")
        with pytest.raises(MissingCredentialsError):
            analyzer.ensure_configured()

    def test_api_error_keeps_status(self) -> None:
        outcome = _analyze(FakeAnalysisClient(error=AnalysisApiError(503, "down")))
        assert isinstance(outcome, AnalysisFailed)
        assert outcome.kind is ErrorKind.API_ERROR
        assert outcome.status_code == 503
        assert "503" in outcome.detail

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (AnalysisNetworkError("refused"), ErrorKind.NETWORK_ERROR),
            (MalformedResponseError("garbage"), ErrorKind.MALFORMED_RESPONSE),
            (AnalysisError("other"), ErrorKind.MALFORMED_RESPONSE),
        ],
    )
    def test_errors_map_to_kinds(self, error: AnalysisError, kind: ErrorKind) -> None:
        outcome = _analyze(FakeAnalysisClient(error=error))
        assert isinstance(outcome, AnalysisFailed)
        assert outcome.kind is kind
        assert outcome.status_code is None

    def test_blank_narrative_is_malformed(self) -> None:
        outcome = _analyze(FakeAnalysisClient(response="   "))
        assert isinstance(outcome, AnalysisFailed)
        assert outcome.kind is ErrorKind.MALFORMED_RESPONSE

    def test_single_attempt_on_failure(self) -> None:
        client = FakeAnalysisClient(error=AnalysisNetworkError("refused"))
        _analyze(client)
        assert len(client.prompts) == 1
