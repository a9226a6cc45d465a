import json

import httpx
import openai

from app.analysis.client_base import BaseAnalysisClient
from app.analysis.exceptions import (
    AnalysisApiError,
    AnalysisNetworkError,
    MalformedResponseError,
    MissingCredentialsError,
)

_MAX_ERROR_BODY_CHARS = 500


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client built on the OpenAI-compatible chat completions API.

    Retries are disabled; every call is a single attempt. A timeout of None
    waits for the provider indefinitely.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float | None = None,
        base_url: str | None = None,
    ) -> None:
        self._api_key = api_key.strip()
        self._client: openai.AsyncOpenAI | None = None
        if self._api_key:
            self._client = openai.AsyncOpenAI(
                api_key=self._api_key,
                timeout=timeout_seconds,
                base_url=base_url,
                max_retries=0,
            )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        if self._client is None:
            raise MissingCredentialsError("Missing analysis API key")
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,
            )
        except openai.APIStatusError as exc:
            raise AnalysisApiError(exc.status_code, _error_body(exc)) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"Analysis service unreachable: {exc}") from exc
        except (openai.APIResponseValidationError, json.JSONDecodeError) as exc:
            raise MalformedResponseError(
                f"Analysis service returned a malformed response: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(f"Analysis service call failed: {exc}") from exc

        if not response.choices:
            raise MalformedResponseError("Analysis service returned no choices")
        content = response.choices[0].message.content
        if content is None or not content.strip():
            raise MalformedResponseError("Analysis service returned an empty response")
        return content


def _error_body(exc: openai.APIStatusError) -> str:
    body = exc.response.text or str(exc.body or exc.message)
    return body.strip()[:_MAX_ERROR_BODY_CHARS]
