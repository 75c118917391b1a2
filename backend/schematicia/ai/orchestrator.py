"""LLM-powered circuit design.

Uses an OpenAI-compatible client to turn a chat request into a
validated ``CircuitDesignResponse``:
  1. Build prompts from the request, history and format instructions.
  2. Request a completion, retrying transport failures a bounded number
     of times with no delay between attempts.
  3. Parse and validate the completion text.

Parse and schema failures are not retried here; they propagate to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from openai import APIError, AsyncOpenAI

from schematicia.ai.output_parser import circuit_design_parser
from schematicia.ai.prompts import circuit_design_prompts
from schematicia.config import get_settings
from schematicia.schemas.chat import ChatMessage
from schematicia.schemas.circuit import CircuitDesignResponse

logger = logging.getLogger(__name__)

PHASE = "circuit_design"


class EmptyCompletionError(Exception):
    """The provider answered without any text content."""


class CompletionError(Exception):
    """Raised when no completion could be obtained."""

    def __init__(self, message: str, last_error: Exception | None = None):
        self.last_error = last_error
        super().__init__(message)


# ─── Client Factory ───


def create_client() -> AsyncOpenAI:
    """Create an OpenAI-compatible async client.

    SDK-level retries are disabled; ``_llm_call_with_retry`` owns the policy.
    """
    settings = get_settings()
    if not settings.llm_api_key:
        raise CompletionError("An OpenAI API key is required to generate designs.")
    return AsyncOpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url or None,
        timeout=settings.llm_timeout,
        max_retries=0,
    )


# ─── Core LLM Call ───


async def _llm_call(
    client: AsyncOpenAI,
    messages: list[dict[str, str]],
    model: str,
    temperature: float,
) -> str:
    """Make a single LLM call and return the raw text response."""
    response = await client.chat.completions.create(
        model=model,
        messages=messages,
        temperature=temperature,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content if response.choices else None
    if not content or not content.strip():
        raise EmptyCompletionError("Model response contained no text")
    return content.strip()


async def _llm_call_with_retry(
    client: AsyncOpenAI,
    messages: list[dict[str, str]],
    model: str,
    temperature: float,
    max_retries: int,
) -> str:
    attempts = max_retries + 1
    last_error: Exception | None = None

    for attempt in range(attempts):
        try:
            text = await _llm_call(client, messages, model, temperature)
            logger.info("[%s] Completion on attempt %d/%d", PHASE, attempt + 1, attempts)
            return text
        except (APIError, EmptyCompletionError) as e:
            last_error = e
            logger.warning(
                "[%s] Attempt %d/%d failed — %s", PHASE, attempt + 1, attempts, e
            )

    raise CompletionError(
        f"[{PHASE}] Failed after {attempts} attempts. Last error: {last_error}",
        last_error=last_error,
    ) from last_error


# ─── Public API ───


async def generate_circuit_design(
    user_input: str,
    history: Sequence[ChatMessage] = (),
    client: Any | None = None,
    model: str | None = None,
    temperature: float | None = None,
) -> CircuitDesignResponse:
    """Ask the model for a circuit design and validate the answer.

    Args:
        user_input: The new natural language request.
        history: Earlier chat messages, oldest first.
        client: Optional pre-configured client. Creates default if None.
        model: Model override; defaults to ``settings.llm_model``.
        temperature: Temperature override; defaults to ``settings.llm_temperature``.

    Raises:
        CompletionError: no completion after all attempts.
        ParseError: completion is not JSON.
        SchemaError: completion lacks ``response`` or ``circuit``.
    """
    settings = get_settings()
    client = client or create_client()
    model = model or settings.llm_model
    if temperature is None:
        temperature = settings.llm_temperature

    messages = circuit_design_prompts(
        user_input,
        history,
        circuit_design_parser.get_format_instructions(),
    )
    logger.info("[%s] Request: %s...", PHASE, user_input[:80])

    raw_output = await _llm_call_with_retry(
        client, messages, model, temperature, settings.llm_max_retries
    )
    design = circuit_design_parser.parse(raw_output)

    logger.info(
        "[%s] Validated — components=%d, connections=%d",
        PHASE,
        len(design.circuit.components),
        len(design.circuit.connections),
    )
    return design
