"""Offline analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

from typing import ClassVar

from app.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Returns a fixed Markdown review without any network call.

    Useful for local development of the upload flow and for tests.
    """

    DEFAULT_RESPONSE: ClassVar[str] = (
        "## Overall Impact\n"
        "This is a placeholder review produced without contacting an AI provider.\n\n"
        "## Suggestions\n"
        "- Configure ANALYSIS_PROVIDER and ANALYSIS_API_KEY for real feedback."
    )

    def __init__(self, response: str | None = None) -> None:
        self._response = response if response is not None else self.DEFAULT_RESPONSE

    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        return self._response
