"""LLM utility functions."""
import logging

import httpx

from app.config import settings
from app.core.exceptions import LLMError

logger = logging.getLogger(__name__)


async def call_llm(
    messages: list[dict[str, str]],
    temperature: float | None = None,
    max_tokens: int | None = None,
) -> str:
    """Call LLM API and return response.

    Args:
        messages: List of message dicts with 'role' and 'content'
        temperature: Sampling temperature, settings.llm_temperature if None
        max_tokens: Maximum tokens to generate, provider default if None

    Returns:
        Generated text response (may be empty)

    Raises:
        LLMError: If the API key is missing or the API call fails
    """
    if not settings.llm_api_key:
        raise LLMError("LLM API key is not configured")

    payload = {
        "model": settings.llm_model,
        "messages": messages,
        "temperature": settings.llm_temperature if temperature is None else temperature,
    }
    if max_tokens is not None:
        payload["max_tokens"] = max_tokens

    try:
        async with httpx.AsyncClient(timeout=settings.llm_timeout) as client:
            response = await client.post(
                f"{settings.llm_base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {settings.llm_api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
            )
            response.raise_for_status()
            data = response.json()

    except httpx.TimeoutException as e:
        raise LLMError(f"LLM API call timed out after {settings.llm_timeout}s") from e
    except httpx.HTTPError as e:
        raise LLMError(f"LLM API call failed: {str(e)}") from e

    try:
        return data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as e:
        logger.error(f"Unexpected LLM response shape: {str(data)[:200]}")
        raise LLMError("Unexpected response from the language model") from e
