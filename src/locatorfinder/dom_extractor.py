from __future__ import annotations

import logging
from typing import Any, Mapping

from playwright.sync_api import ElementHandle, Error as PlaywrightError, sync_playwright

from .errors import ElementCaptureError
from .models import NODE_NAME_KEY, ElementDescription

logger = logging.getLogger(__name__)

_MISSING_BROWSER_ERROR_HINTS = (
    "executable doesn't exist",
    "executable does not exist",
    "download new browsers",
    "playwright install",
    "could not find browser",
    "failed to launch chromium because executable",
)

_DESCRIBE_ELEMENT_SCRIPT = """
(el) => {
  const collapse = (value) => (value || '').replace(/\\s+/g, ' ').trim();
  const tag = el.tagName.toLowerCase();

  const byCss = { nodeName: tag };
  for (const attr of Array.from(el.attributes)) {
    byCss[attr.name] = attr.value;
  }

  const text = collapse(el.innerText || el.textContent);
  const classes = Array.from(el.classList || []);
  const inputType = (el.getAttribute('type') || '').toLowerCase();
  const isButton = tag === 'button' || (tag === 'input' && ['button', 'submit', 'reset'].includes(inputType));
  const buttonText = tag === 'input' ? collapse(el.value) : text;

  // Angular debug info, then ng-bind, then an uncompiled template.
  const readBinding = () => {
    if (!classes.includes('ng-binding')) return null;
    if (window.angular) {
      const data = window.angular.element(el).data('$binding');
      const first = Array.isArray(data) ? data[0] : data;
      const exp = (first && first.exp) || first;
      if (typeof exp === 'string' && exp) return exp;
    }
    const ngBind = el.getAttribute('ng-bind') || el.getAttribute('data-ng-bind');
    if (ngBind) return ngBind;
    const raw = el.textContent || '';
    return raw.includes('{{') ? raw : null;
  };

  return {
    byCss,
    byBinding: readBinding(),
    byId: el.id || null,
    byButtonText: isButton ? (buttonText || null) : null,
    byLinkText: tag === 'a' ? (el.textContent || null) : null,
    byModel: el.getAttribute('ng-model') || el.getAttribute('data-ng-model') || null,
  };
}
"""


def is_missing_browser_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(hint in message for hint in _MISSING_BROWSER_ERROR_HINTS)


def binding_expression(raw: str | None) -> str | None:
    """Wrap a bare expression such as ``user.name | uppercase`` as ``{{...}}``.

    Angular records ng-bind and newer text bindings without braces; an
    interpolated template is returned unchanged.
    """
    if raw is None or not raw.strip():
        return None
    if "{{" in raw:
        return raw
    return "{{" + raw + "}}"


def description_from_payload(payload: Mapping[str, Any] | None) -> ElementDescription:
    """Convert the script result into an ``ElementDescription``.

    Blank scalar values are dropped, bare binding expressions are wrapped in
    ``{{ }}`` and ``nodeName`` is kept first in ``by_css`` so attribute order
    follows the document.
    """
    description = ElementDescription.from_mapping(payload)
    node_name = description.by_css.pop(NODE_NAME_KEY, "")
    description.by_css = {NODE_NAME_KEY: node_name.lower(), **description.by_css}
    for attr in ("by_binding", "by_id", "by_button_text", "by_link_text", "by_model"):
        value = getattr(description, attr)
        if value is not None and not value.strip():
            setattr(description, attr, None)
    description.by_binding = binding_expression(description.by_binding)
    return description


def extract_element_description(element: ElementHandle) -> ElementDescription:
    payload = element.evaluate(_DESCRIBE_ELEMENT_SCRIPT)
    if not isinstance(payload, dict):
        raise ElementCaptureError("Element description script returned no data.")
    return description_from_payload(payload)


def capture_element_description(
    url: str,
    selector: str,
    *,
    headless: bool = True,
    timeout_ms: int = 15000,
) -> ElementDescription:
    target = url.strip()
    if not target:
        raise ElementCaptureError("Please enter a URL.")
    if not selector.strip():
        raise ElementCaptureError("Please enter a selector.")

    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=headless)
            try:
                page = browser.new_page()
                logger.info("Navigating to %s", target)
                page.goto(target, wait_until="domcontentloaded", timeout=timeout_ms)
                element = page.wait_for_selector(selector, state="attached", timeout=timeout_ms)
                if element is None:
                    raise ElementCaptureError(f"No element matches selector: {selector}")
                description = extract_element_description(element)
            finally:
                browser.close()
    except PlaywrightError as exc:
        if is_missing_browser_error(exc):
            raise ElementCaptureError(
                "Chromium is not installed for Playwright. Run `playwright install chromium`."
            ) from exc
        raise ElementCaptureError(f"Capture failed: {exc}") from exc

    logger.info("Captured <%s> from %s", description.node_name or "?", target)
    return description
