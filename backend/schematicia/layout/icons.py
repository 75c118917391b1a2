"""Icon classification for free-text component types.

Best-effort substring matching; unknown vocabulary falls back to
``IconKey.GENERIC``. Rules are checked in order, first match wins.
"""

from __future__ import annotations

from collections.abc import Sequence

from schematicia.schemas.schematic import IconKey

# Spanish and English vocabulary seen in model output
DEFAULT_RULES: tuple[tuple[IconKey, tuple[str, ...]], ...] = (
    (IconKey.SUPPLY, ("fuente", "vcc", "dc")),
    (IconKey.LED, ("led",)),
    (IconKey.TRANSISTOR, ("transistor", "mosfet")),
    (IconKey.SWITCH, ("interruptor", "pulsador", "switch")),
    (IconKey.RESISTOR, ("resist",)),
    (IconKey.GROUND, ("gnd", "tierra", "ground")),
)


class IconClassifier:
    def __init__(self, rules: Sequence[tuple[IconKey, Sequence[str]]] = DEFAULT_RULES):
        self.rules = [(key, tuple(k.lower() for k in keywords)) for key, keywords in rules]

    def classify(self, component_type: str) -> IconKey:
        normalized = component_type.lower()
        for key, keywords in self.rules:
            if any(keyword in normalized for keyword in keywords):
                return key
        return IconKey.GENERIC


default_classifier = IconClassifier()


def resolve_icon_key(component_type: str) -> IconKey:
    return default_classifier.classify(component_type)
