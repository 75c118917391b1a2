"""Turns raw completion text into a validated circuit design."""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Generic, TypeVar

from schematicia.ai.llm_schemas import (
    FORMAT_INSTRUCTIONS,
    ParseError,
    SchemaError,
    validate_circuit_design,
)
from schematicia.schemas.circuit import CircuitDesignResponse

T = TypeVar("T")

_LEADING_FENCE = re.compile(r"^```[\w+-]*[ \t]*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence around the payload, if present."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are JavaScript literals, not JSON
    raise ValueError(f"Non-standard JSON constant {name}")


class StructuredOutputParser(Generic[T]):
    def __init__(self, instructions: str, validator: Callable[[Any], T]):
        self._instructions = instructions
        self._validator = validator

    def get_format_instructions(self) -> str:
        return self._instructions

    def parse(self, text: str) -> T:
        """Strip fences, decode JSON, then validate.

        Raises:
            ParseError: the cleaned text is not valid JSON.
            SchemaError: the decoded value fails structural validation.
        """
        cleaned = strip_code_fences(text)
        try:
            data = json.loads(cleaned, parse_constant=_reject_constant)
        except ValueError as e:
            raise ParseError(f"Invalid JSON in model output: {e}", raw_output=text) from e

        try:
            return self._validator(data)
        except SchemaError as e:
            e.raw_output = text
            raise


circuit_design_parser: StructuredOutputParser[CircuitDesignResponse] = (
    StructuredOutputParser(FORMAT_INSTRUCTIONS, validate_circuit_design)
)


def validate(raw_text: str) -> CircuitDesignResponse:
    """Parse a model completion into ``{response, circuit}``."""
    return circuit_design_parser.parse(raw_text)
