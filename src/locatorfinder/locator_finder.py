from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .models import NODE_NAME_KEY, ElementDescription, LocatorStrategy, LocatorSuggestion
from .selector_rules import (
    attribute_selector,
    class_selector,
    extract_binding_content,
    id_selector,
    significant_classes,
    strip_binding_filter,
)

logger = logging.getLogger(__name__)

CLASS_KEY = "class"
ID_KEY = "id"


def build_locator_list(
    description: ElementDescription | Mapping[str, Any] | None,
) -> list[LocatorSuggestion]:
    """Turn an element description into ordered locator suggestions.

    Sections are emitted in ``SECTION_ORDER``. Missing or malformed fields
    produce no suggestions; this function does not raise.
    """
    if isinstance(description, ElementDescription):
        description = description.cleaned()
    else:
        description = ElementDescription.from_mapping(description)

    suggestions: list[LocatorSuggestion] = []
    seen: set[tuple[LocatorStrategy, str]] = set()
    for section in SECTION_ORDER:
        for suggestion in section(description):
            _add_unique(suggestions, suggestion, seen)

    logger.debug("Built %d locator suggestion(s)", len(suggestions))
    return suggestions


def css_suggestion(selector: str) -> LocatorSuggestion:
    locator = f"by.css('{selector}')"
    return LocatorSuggestion(
        name=LocatorStrategy.CSS,
        locator=locator,
        count_expression=f"element.all({locator}).count()",
    )


def build_css_suggestions(description: ElementDescription) -> list[LocatorSuggestion]:
    node_name = description.node_name
    selectors: list[str] = []
    for key, value in description.by_css.items():
        if key == NODE_NAME_KEY:
            continue
        if key == CLASS_KEY:
            classes = significant_classes(value)
            if classes:
                selectors.append(class_selector(classes, node_name))
                selectors.append(class_selector(classes))
            continue
        if key == ID_KEY:
            if value:
                selectors.append(id_selector(value))
            continue
        selectors.append(attribute_selector(node_name, key, value))
    return [css_suggestion(selector) for selector in selectors]


def build_binding_suggestions(description: ElementDescription) -> list[LocatorSuggestion]:
    expression = description.by_binding
    if not expression:
        return []
    content = extract_binding_content(expression)
    if content is None:
        return []

    values = [expression]
    if content:
        values.append(content)
        without_filter = strip_binding_filter(content)
        if without_filter:
            values.append(without_filter)
    return [_scalar_suggestion(LocatorStrategy.BINDING, "binding", value) for value in values]


def build_id_suggestions(description: ElementDescription) -> list[LocatorSuggestion]:
    return _single(LocatorStrategy.ID, "id", description.by_id)


def build_button_text_suggestions(description: ElementDescription) -> list[LocatorSuggestion]:
    return _single(LocatorStrategy.BUTTON_TEXT, "buttonText", description.by_button_text)


def build_link_text_suggestions(description: ElementDescription) -> list[LocatorSuggestion]:
    text = (description.by_link_text or "").strip()
    return _single(LocatorStrategy.LINK_TEXT, "linkText", text)


def build_model_suggestions(description: ElementDescription) -> list[LocatorSuggestion]:
    return _single(LocatorStrategy.MODEL, "model", description.by_model)


SECTION_ORDER: tuple[Callable[[ElementDescription], list[LocatorSuggestion]], ...] = (
    build_css_suggestions,
    build_binding_suggestions,
    build_id_suggestions,
    build_button_text_suggestions,
    build_link_text_suggestions,
    build_model_suggestions,
)


def _single(strategy: LocatorStrategy, method: str, value: str | None) -> list[LocatorSuggestion]:
    if not value:
        return []
    return [_scalar_suggestion(strategy, method, value)]


def _scalar_suggestion(strategy: LocatorStrategy, method: str, value: str) -> LocatorSuggestion:
    return LocatorSuggestion(name=strategy, locator=f"by.{method}('{value}')")


def _add_unique(
    suggestions: list[LocatorSuggestion],
    suggestion: LocatorSuggestion,
    seen: set[tuple[LocatorStrategy, str]],
) -> None:
    key = (suggestion.name, suggestion.locator)
    if key in seen:
        return
    seen.add(key)
    suggestions.append(suggestion)
