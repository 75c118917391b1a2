"""Prompt templates for circuit design.

Returns role/content message dicts so prompt wording stays separate
from orchestration logic.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from schematicia.schemas.chat import ChatMessage, ChatRole

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

NO_HISTORY = "No hay conversación previa."

SPEAKERS = {
    ChatRole.USER: "Usuario",
    ChatRole.ASSISTANT: "Asistente",
    ChatRole.SYSTEM: "Sistema",
}


# ─── Templates ───

SYSTEM_TEMPLATE = """Eres Schematicia, una ingeniera electrónica experta. Tu tarea es interpretar instrucciones del usuario para diseñar circuitos
electrónicos claros y didácticos. Siempre devuelves información estructurada en formato JSON siguiendo estrictamente las instrucciones de formato proporcionadas.

- Prioriza la claridad pedagógica, explica cómo funciona el circuito.
- Antes de generar una respuesta, valida que todas las referencias cruzadas (componentes y conexiones) coinciden.
- Propón valores realistas, orientados a prototipos en protoboard o PCBs sencillas.
- Cuando no puedas atender la solicitud, informa el motivo y sugiere alternativas seguras.

Incluye recomendaciones de pruebas y advertencias si el diseño involucra altos voltajes o corrientes elevadas.
{format_instructions}"""

USER_TEMPLATE = """Contexto previo:
{history}

Nueva petición:
{input}"""


def interpolate(template: str, variables: dict[str, str]) -> str:
    """Fill ``{name}`` placeholders; unknown names are left as-is."""

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        return variables[key] if key in variables else match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


def format_history(messages: Sequence[ChatMessage]) -> str:
    if not messages:
        return NO_HISTORY
    return "\n".join(f"{SPEAKERS[m.role]}: {m.content}" for m in messages)


def circuit_design_prompts(
    user_input: str,
    history: Sequence[ChatMessage],
    format_instructions: str,
) -> list[dict[str, str]]:
    """Return the system and user messages for one design request."""
    variables = {
        "input": user_input,
        "history": format_history(history),
        "format_instructions": format_instructions,
    }
    return [
        {"role": "system", "content": interpolate(SYSTEM_TEMPLATE, variables)},
        {"role": "user", "content": interpolate(USER_TEMPLATE, variables)},
    ]
