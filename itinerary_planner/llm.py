"""Chat-completion client helpers for the Groq (OpenAI-compatible) API."""

from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI
from openai.types.chat import ChatCompletion

from .config import get_settings


logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], Optional[str]]

# The SDK refuses to build a client without a key; the provider rejects this one with 401.
_MISSING_KEY = "missing-api-key"


class CompletionError(RuntimeError):
    """A completion call did not produce a usable response."""

    def __init__(self, message: str, *, status: Optional[int] = None, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail


class CompletionTimeout(CompletionError):
    """The transport gave up waiting for the provider."""


class CompletionClient:
    """Thin async wrapper exposing the two calls the planner needs."""

    def __init__(
        self,
        *,
        base_url: str,
        credential_provider: CredentialProvider,
        timeout: float,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._credential_provider = credential_provider
        self._timeout = timeout
        self._http_client = http_client
        self._sdk: Optional[AsyncOpenAI] = None

    def _openai(self) -> AsyncOpenAI:
        if self._sdk is None:
            self._sdk = AsyncOpenAI(
                api_key=self._credential_provider() or _MISSING_KEY,
                base_url=self.base_url,
                timeout=self._timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._sdk

    async def complete(
        self,
        prompt: str,
        *,
        model: str,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        """Return the text of the first choice, or raise ``CompletionError``."""

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        client = self._openai()
        try:
            response = await client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                **kwargs,
            )
        except APIStatusError as exc:
            detail = exc.response.text if exc.response is not None else str(exc)
            raise CompletionError(
                f"completion returned {exc.status_code}", status=exc.status_code, detail=detail
            ) from exc
        except APITimeoutError as exc:
            raise CompletionTimeout("completion timed out", detail=str(exc)) from exc
        except APIConnectionError as exc:
            raise CompletionError(f"completion transport failed: {exc}", detail=str(exc)) from exc

        return _first_choice_text(response)

    async def probe(self) -> bool:
        """Check that the models endpoint answers with the configured credential."""

        headers = {"Authorization": f"Bearer {self._credential_provider() or ''}"}
        url = f"{self.base_url}/models"
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, headers=headers)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Connectivity probe failed: %s", exc)
            return False
        return response.is_success


def _first_choice_text(response: object) -> str:
    """Text of the first choice; any other 200 body counts as empty content."""

    if not isinstance(response, ChatCompletion):
        logger.warning("Completion response was not a chat completion: %.200r", response)
        return ""
    choices = getattr(response, "choices", None) or []
    message = getattr(choices[0], "message", None) if choices else None
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


_client: Optional[CompletionClient] = None


def get_client() -> CompletionClient:
    """Provide a singleton completion client."""

    global _client
    if _client is None:
        settings = get_settings()
        _client = CompletionClient(
            base_url=settings.groq_base_url,
            credential_provider=lambda: get_settings().groq_api_key,
            timeout=settings.request_timeout,
        )
    return _client
