"""Shared request discipline for all Gemini calls.

Each pipeline issues exactly one request per call through generate_content():
- A fresh client per call (no state shared between concurrent calls)
- The synchronous SDK call runs in a worker thread (asyncio.to_thread)
- Transport-level errors become TransportFailure, original exception chained
- No retries, no timeout and no backoff: that policy belongs to the caller

Cancelling the awaiting task propagates asyncio.CancelledError untouched.
"""

import asyncio
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from fridge_chef.utils.config import config
from fridge_chef.utils.errors import GenerationFailure, TransportFailure
from fridge_chef.utils.logger import log_context, logger


# Errors meaning the request itself could not complete (network, auth, quota, server)
TRANSPORT_ERRORS = (genai_errors.APIError, httpx.HTTPError, ConnectionError, TimeoutError)


def _log_error(operation_name: str, exception: Exception | str, log_level: str = "warning") -> None:
    """Log error with appropriate level.

    Args:
        operation_name: Description for logging
        exception: Exception that occurred, or a short problem description
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
    """
    msg = f"{operation_name}: {exception}"
    extra = log_context(operation_name)
    if log_level == "debug":
        logger.debug(msg, extra=extra)
    elif log_level == "error":
        logger.error(msg, extra=extra)
    else:
        logger.warning(msg, extra=extra)


def create_client() -> genai.Client:
    """Validate configuration and build a Gemini client.

    Raises:
        ValueError: If configuration is invalid (e.g. GEMINI_API_KEY missing).
    """
    config.validate()
    return genai.Client(api_key=config.GEMINI_API_KEY)


async def generate_content(
    operation_name: str,
    *,
    model: str,
    contents: Any,
    generation_config: Optional[types.GenerateContentConfig] = None,
) -> types.GenerateContentResponse:
    """Issue a single generate_content request.

    Args:
        operation_name: Pipeline name used in logs and error messages.
        model: Gemini model identifier.
        contents: Prompt text and/or content parts.
        generation_config: Optional response shaping (JSON schema, image config).

    Returns:
        The raw SDK response.

    Raises:
        TransportFailure: If the request could not complete.
        ValueError: If configuration is invalid.
    """
    client = create_client()
    logger.debug(f"{operation_name}: sending request", extra=log_context(operation_name, model))

    try:
        return await asyncio.to_thread(
            client.models.generate_content,
            model=model,
            contents=contents,
            config=generation_config,
        )
    except TRANSPORT_ERRORS as e:
        _log_error(operation_name, e, log_level="error")
        raise TransportFailure(f"{operation_name} request failed: {e}") from e


def response_text(response: types.GenerateContentResponse, operation_name: str) -> str:
    """Return the response's text output, failing if there is none.

    Raises:
        GenerationFailure: If the response carries no non-blank text.
    """
    text = response.text
    if not text or not text.strip():
        _log_error(operation_name, "empty response text", log_level="warning")
        raise GenerationFailure(f"{operation_name} returned no text")
    return text
