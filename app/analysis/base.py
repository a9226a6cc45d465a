from abc import ABC, abstractmethod

from app.processor.models import AnalysisOutcome


class BaseAnalyzer(ABC):
    """Contract for the analysis gateway."""

    @abstractmethod
    def ensure_configured(self) -> None:
        """Fail fast when the analyzer cannot make calls.

        Raises:
            MissingCredentialsError: if no API key is configured.
        """

    @abstractmethod
    async def analyze(self, text: str) -> AnalysisOutcome:
        """Request feedback on extracted CV text.

        Makes at most one provider call and never retries.

        Returns:
            Analyzed with the model's narrative, or AnalysisFailed carrying
            MISSING_CREDENTIALS, NETWORK_ERROR, API_ERROR or
            MALFORMED_RESPONSE.
        """
