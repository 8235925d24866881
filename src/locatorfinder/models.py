from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class LocatorStrategy(str, Enum):
    CSS = "byCss"
    BINDING = "byBinding"
    ID = "byId"
    BUTTON_TEXT = "byButtonText"
    LINK_TEXT = "byLinkText"
    MODEL = "byModel"


NODE_NAME_KEY = "nodeName"

_SCALAR_FIELDS = (
    ("by_binding", LocatorStrategy.BINDING),
    ("by_id", LocatorStrategy.ID),
    ("by_button_text", LocatorStrategy.BUTTON_TEXT),
    ("by_link_text", LocatorStrategy.LINK_TEXT),
    ("by_model", LocatorStrategy.MODEL),
)


@dataclass(slots=True)
class ElementDescription:
    """Attributes captured from one element, grouped by locator strategy.

    ``by_css`` maps attribute names to values and includes the ``nodeName``
    pseudo-attribute. Its insertion order decides the order of the CSS
    suggestions.
    """

    by_css: dict[str, str] = field(default_factory=dict)
    by_binding: str | None = None
    by_id: str | None = None
    by_button_text: str | None = None
    by_link_text: str | None = None
    by_model: str | None = None

    @property
    def node_name(self) -> str:
        return self.by_css.get(NODE_NAME_KEY, "")

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> ElementDescription:
        if not isinstance(payload, Mapping):
            return cls()

        raw_css = payload.get(LocatorStrategy.CSS.value)
        by_css: dict[str, str] = {}
        if isinstance(raw_css, Mapping):
            for key, value in raw_css.items():
                if isinstance(key, str) and isinstance(value, str):
                    by_css[key] = value

        scalars: dict[str, str | None] = {}
        for attr, strategy in _SCALAR_FIELDS:
            value = payload.get(strategy.value)
            scalars[attr] = value if isinstance(value, str) else None
        return cls(by_css=by_css, **scalars)

    def cleaned(self) -> ElementDescription:
        """Copy with non-string values dropped, as ``from_mapping`` would."""
        payload: dict[str, Any] = {LocatorStrategy.CSS.value: self.by_css}
        for attr, strategy in _SCALAR_FIELDS:
            payload[strategy.value] = getattr(self, attr)
        return ElementDescription.from_mapping(payload)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.by_css:
            payload[LocatorStrategy.CSS.value] = dict(self.by_css)
        for attr, strategy in _SCALAR_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                payload[strategy.value] = value
        return payload


@dataclass(frozen=True, slots=True)
class LocatorSuggestion:
    name: LocatorStrategy
    locator: str
    count_expression: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload = {"name": self.name.value, "locator": self.locator}
        if self.count_expression is not None:
            payload["countExpression"] = self.count_expression
        return payload
