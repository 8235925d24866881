from __future__ import annotations

import re

NG_CLASS_PREFIX = "ng-"

# Interpolation groups are matched lazily so only the first {{ ... }} pair counts.
_BINDING_PATTERN = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_FILTER_MARKER = "|"

# An embedded quote is escaped once for the CSS value and once more for the
# quoted locator expression that wraps it.
ESCAPED_SINGLE_QUOTE = "\\\\'"


def escape_single_quotes(value: str) -> str:
    """Make ``value`` safe inside ``by.css('...')``.

    Every ``'`` becomes ``\\\\'`` (two backslashes then the quote). Nothing
    else is touched, so ``unescape_single_quotes`` recovers the input.
    """
    return value.replace("'", ESCAPED_SINGLE_QUOTE)


def unescape_single_quotes(value: str) -> str:
    return value.replace(ESCAPED_SINGLE_QUOTE, "'")


def split_class_tokens(value: str) -> list[str]:
    return value.split()


def is_ng_class(token: str) -> bool:
    return token.startswith(NG_CLASS_PREFIX)


def significant_classes(value: str) -> list[str]:
    """Class tokens in their original order, without Angular ``ng-`` state classes."""
    return [token for token in split_class_tokens(value) if not is_ng_class(token)]


def class_selector(classes: list[str], node_name: str = "") -> str:
    if not classes:
        return ""
    return node_name + "".join(f".{escape_single_quotes(item)}" for item in classes)


def attribute_selector(node_name: str, attribute: str, value: str) -> str:
    return f'{node_name}[{attribute}="{escape_single_quotes(value)}"]'


def id_selector(value: str) -> str:
    if not value:
        return ""
    return f"#{escape_single_quotes(value)}"


def extract_binding_content(expression: str) -> str | None:
    """Return the text between the first ``{{`` and the following ``}}``.

    ``None`` means the expression has no complete interpolation group.
    """
    match = _BINDING_PATTERN.search(expression)
    if not match:
        return None
    return match.group(1)


def strip_binding_filter(content: str) -> str | None:
    """Drop an Angular filter, keeping whitespace before the ``|`` as it is.

    ``"yourName | uppercase"`` gives ``"yourName "``. Returns ``None`` when
    ``content`` has no filter.
    """
    index = content.find(_FILTER_MARKER)
    if index < 0:
        return None
    return content[:index]
