"""AI text-completion collaborator.

The core only needs ``complete(prompt) -> str``.  :class:`OpenAICompletion`
implements it with the OpenAI Responses API; tests and offline setups can pass
any object with the same method.  The SDK reads ``OPENAI_API_KEY`` from the
environment.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from openai import OpenAI, OpenAIError

from . import config
from .logging_setup import get_logger

_logger = get_logger("finance_core.ai")


class ExternalServiceError(RuntimeError):
    """The AI service could not be reached or returned an error."""


class MalformedPayloadError(ValueError):
    """A response could not be parsed into the expected structured data."""


class TextCompletion(Protocol):
    def complete(self, prompt: str) -> str:
        ...


def _response_text(resp: Any) -> str:
    """Extract text from a Responses API result.

    Prefers ``output_text``; falls back to ``output[0].content[0].text``.
    """
    text: Optional[str] = getattr(resp, "output_text", None)
    if text:
        return text
    try:
        return resp.output[0].content[0].text
    except (AttributeError, IndexError, TypeError) as exc:
        raise MalformedPayloadError("AI response did not contain any text") from exc


class OpenAICompletion:
    """``TextCompletion`` backed by the OpenAI Responses API."""

    def __init__(
        self,
        client: Optional[OpenAI] = None,
        *,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._client = client
        self.model = model or config.AI_MODEL
        self.timeout = timeout if timeout is not None else config.AI_TIMEOUT_SECONDS

    @property
    def client(self) -> OpenAI:
        # Created lazily so constructing the collaborator needs no API key.
        if self._client is None:
            self._client = OpenAI(timeout=self.timeout)
        return self._client

    def complete(self, prompt: str) -> str:
        """Send ``prompt`` and return the response text.

        Raises:
            ExternalServiceError: On network, timeout, authentication or API errors
            MalformedPayloadError: If the response carries no text
        """
        _logger.info("Requesting completion model=%s prompt_chars=%d", self.model, len(prompt))
        try:
            resp = self.client.responses.create(model=self.model, input=prompt)
        except OpenAIError as exc:
            raise ExternalServiceError(f"AI request failed: {exc}") from exc
        return _response_text(resp)
