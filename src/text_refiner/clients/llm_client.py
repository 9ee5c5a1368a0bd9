"""Claude API wrapper with async support and optional retries."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from text_refiner.models.result import ErrorKind

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

# Errors worth another attempt when max_attempts > 1
TRANSIENT_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


class MalformedResponseError(ValueError):
    """The API answered but the payload carried no usable text."""


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client.

    ``max_attempts`` of 1 means every ``generate`` call makes exactly one
    request; higher values retry transient failures with exponential backoff.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        max_attempts: int = 1,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.max_attempts = max_attempts

    async def _call_api(self, **kwargs) -> anthropic.types.Message:
        """Make the actual API call under the configured retry policy."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(min=1, max=10),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.8,
        top_p: float | None = None,
        max_tokens: int = 2048,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage."""
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if top_p is not None:
            kwargs["top_p"] = top_p
        if system:
            kwargs["system"] = system

        logger.debug("LLM call: model=%s, prompt=%d chars", model, len(prompt))
        try:
            message = await self._call_api(**kwargs)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)

        if not message.content:
            raise MalformedResponseError("The model returned an empty response.")
        text = getattr(message.content[0], "text", None)
        if not isinstance(text, str):
            raise MalformedResponseError("The model response did not contain text.")

        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception raised by ``LLMClient.generate`` to an ErrorKind."""
    if isinstance(exc, MalformedResponseError):
        return ErrorKind.MALFORMED_RESPONSE
    if isinstance(exc, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
        return ErrorKind.AUTH
    if isinstance(exc, anthropic.RateLimitError):
        return ErrorKind.QUOTA
    # APITimeoutError is a subclass of APIConnectionError
    if isinstance(exc, anthropic.APIConnectionError):
        return ErrorKind.NETWORK
    return ErrorKind.UNKNOWN
