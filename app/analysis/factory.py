from typing import ClassVar

from app.analysis.analyzer import Analyzer
from app.analysis.base import BaseAnalyzer
from app.analysis.example_client_adapter import ExampleClientAdapter
from app.analysis.openai_client_adapter import OpenAIClientAdapter
from app.config.settings import Settings


class AnalyzerFactory:
    """Creates the configured analysis gateway."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        """Create an analyzer from application settings.

        A blank API key is not an error here; the analyzer reports
        MISSING_CREDENTIALS on use so the service can still start.
        """
        provider = settings.analysis_provider.strip().lower()
        if provider == "example":
            return Analyzer(
                client=ExampleClientAdapter(),
                model="example",
                temperature=settings.analysis_temperature,
            )
        client = OpenAIClientAdapter(
            api_key=settings.analysis_api_key,
            timeout_seconds=settings.analysis_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return Analyzer(
            client=client,
            model=settings.analysis_model_name,
            temperature=settings.analysis_temperature,
        )

    @classmethod
    def supported_providers(cls) -> list[str]:
        return ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.analysis_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "analysis_base_url is required for analysis_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {cls.supported_providers()}"
        )
