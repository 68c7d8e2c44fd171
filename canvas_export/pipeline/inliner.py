"""CSS inlining: wrap the main markup with the resolved CSS and inline it.

The transform itself is ``premailer``; ``::before``/``::after`` rules, which
premailer cannot express as ``style`` attributes, are materialised as
``<span>`` children first.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import cssutils
from bs4 import BeautifulSoup
from premailer import Premailer

_PSEUDO_RE = re.compile(r"::?(before|after)\s*$", re.IGNORECASE)
_QUOTED_RE = re.compile(r"""^(["'])(.*)\1$""", re.DOTALL)

_WRAPPER_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<style>{css}</style>
</head>
<body>
{main_html}
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _content_text(value: str) -> Optional[str]:
    """Return the literal text of a CSS ``content`` value, or ``None``.

    Only quoted strings are supported; ``counter()``, ``attr()``, ``none`` and
    friends yield ``None``.
    """
    match = _QUOTED_RE.match(value.strip())
    if not match:
        return None
    return match.group(2).replace('\\"', '"').replace("\\'", "'")


def _parse_sheet(sheet_text: str):
    """Parse *sheet_text* with cssutils logging muted for this call only."""
    previous = cssutils.log.getEffectiveLevel()
    cssutils.log.setLevel(logging.CRITICAL)
    try:
        return cssutils.parseString(sheet_text, validate=False)
    finally:
        cssutils.log.setLevel(previous)


def _cascade(matches: List[Tuple[tuple, int, Any]]) -> Dict[str, str]:
    """Merge matching declaration blocks by specificity, then source order.

    ``!important`` declarations beat normal ones regardless of specificity.
    """
    normal: Dict[str, str] = {}
    important: Dict[str, str] = {}
    for _, _, style in sorted(matches, key=lambda m: (m[0], m[1])):
        for prop in style:
            if prop.priority == "important":
                important[prop.name] = prop.value
            else:
                normal[prop.name] = prop.value
    normal.update(important)
    return normal


def _inline_pseudo_elements(document: str) -> str:
    """Insert one ``<span data-pseudo=...>`` per element ``::before``/``::after``.

    All rules matching the same pseudo-element are cascaded first; a span is
    only emitted when the winning ``content`` is a literal string.
    """
    soup = BeautifulSoup(document, "html.parser")
    root = soup.body or soup
    sheet_text = "\n".join(tag.string or "" for tag in soup.find_all("style"))
    if not sheet_text.strip():
        return document

    sheet = _parse_sheet(sheet_text)

    # (id(element), which) -> (element, which, [(specificity, order, style)])
    pseudo: Dict[Tuple[int, str], Tuple[Any, str, list]] = {}
    order = 0
    for rule in sheet.cssRules:
        if rule.type != rule.STYLE_RULE:
            continue
        for selector in rule.selectorList:
            order += 1
            match = _PSEUDO_RE.search(selector.selectorText)
            if not match:
                continue
            which = match.group(1).lower()
            base = selector.selectorText[: match.start()].strip() or "*"
            try:
                targets = root.select(base)
            except Exception:  # noqa: BLE001  (unsupported by soupsieve)
                continue
            for element in targets:
                entry = pseudo.setdefault((id(element), which), (element, which, []))
                entry[2].append((tuple(selector.specificity), order, rule.style))

    changed = False
    for element, which, matches in pseudo.values():
        declarations = _cascade(matches)
        text = _content_text(declarations.pop("content", ""))
        if text is None:
            continue
        span = soup.new_tag("span", attrs={"data-pseudo": which})
        span.string = text
        if declarations:
            span["style"] = "; ".join(f"{name}: {value}" for name, value in declarations.items())
        if which == "before":
            element.insert(0, span)
        else:
            element.append(span)
        changed = True

    return str(soup) if changed else document


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_wrapped_document(css: str, main_html: str) -> str:
    """Return a minimal HTML document embedding *css* around *main_html*."""
    return _WRAPPER_TEMPLATE.format(css=css, main_html=main_html)


def inline_css(
    document: str,
    preserve_media_queries: bool = True,
    apply_style_tags: bool = True,
    inline_pseudo_elements: bool = True,
) -> str:
    """Move the rules of *document*'s ``<style>`` blocks onto its elements.

    Args:
        document: A full HTML document, usually from :func:`build_wrapped_document`.
        preserve_media_queries: Keep ``@media`` (and other non-inlinable) rules
            in a ``<style>`` block instead of dropping them.
        apply_style_tags: Apply rules found in ``<style>`` tags.  When false
            the tags are left untouched.
        inline_pseudo_elements: Turn ``::before``/``::after`` rules with a
            quoted ``content`` into real ``<span>`` elements.

    Errors raised by the transform propagate unchanged.
    """
    if inline_pseudo_elements:
        document = _inline_pseudo_elements(document)

    if not apply_style_tags:
        soup = BeautifulSoup(document, "html.parser")
        for tag in soup.find_all("style"):
            tag["data-premailer"] = "ignore"
        document = str(soup)

    print("[INLINE] Inlining CSS …")
    return Premailer(
        document,
        keep_style_tags=False,
        strip_important=False,
        disable_validation=True,
        disable_leftover_css=not preserve_media_queries,
        cssutils_logging_level=logging.CRITICAL,
        allow_network=False,
    ).transform()
