"""AI-powered CV feedback gateway."""

from pathlib import Path

from app.analysis.base import BaseAnalyzer
from app.analysis.client_base import BaseAnalysisClient
from app.analysis.exceptions import (
    AnalysisApiError,
    AnalysisError,
    MalformedResponseError,
    MissingCredentialsError,
)
from app.analysis.prompt_loader import load_prompt_template
from app.logging.logger import Log
from app.processor.models import AnalysisFailed, AnalysisOutcome, Analyzed


class Analyzer(BaseAnalyzer):
    """Sends extracted CV text to an AI provider and returns its review."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.7,
        prompt_template_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(2.0, temperature))
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)

    def ensure_configured(self) -> None:
        if not self._client.is_configured:
            raise MissingCredentialsError("Missing analysis API key")

    async def analyze(self, text: str) -> AnalysisOutcome:
        try:
            self.ensure_configured()
            prompt = self._build_prompt(text)
            Log.debug(f"Analysis prompt:\n{prompt}")
            raw_response = await self._client.create_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
            )
            narrative = raw_response.strip()
            if not narrative:
                raise MalformedResponseError("Analysis service returned an empty response")
        except AnalysisError as exc:
            Log.error(f"Analysis failed ({exc.kind.value}): {exc}")
            status_code = exc.status_code if isinstance(exc, AnalysisApiError) else None
            return AnalysisFailed(kind=exc.kind, detail=str(exc), status_code=status_code)

        Log.info(f"Analysis complete: {len(narrative)} chars")
        return Analyzed(narrative=narrative)

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(cv_text=text)
