"""Markup helpers for MathJax-rendered HTML, SVG and MathML fragments."""
from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

# Selectors tried in order when locating the rendered formula in a page
_ROOT_SELECTORS = (
    'mjx-container',
    '[data-mml-node="math"]',
    'math',
)


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse an HTML/SVG/MathML fragment leniently."""
    # html.parser keeps prefixed attributes such as xlink:href intact
    return BeautifulSoup(markup, "html.parser")


def local_name(node: Tag) -> str:
    """Tag name without any namespace prefix, lower-cased ("m:mfrac" -> "mfrac")."""
    name = node.name or ''
    return name.rsplit(':', 1)[-1].lower()


def find_math_root(document: Tag) -> Optional[Tag]:
    """Return the first rendered formula root in a parsed document, if any."""
    if document is None:
        return None
    for selector in _ROOT_SELECTORS:
        found = document.select_one(selector)
        if found is not None:
            return found
    # Namespaced MathML (<m:math>) is not reachable through CSS selectors
    for tag in document.find_all(True):
        if local_name(tag) == 'math':
            return tag
    return None


def find_assistive_math(node: Tag) -> Optional[Tag]:
    """Return the MathML mirror MathJax stores beside its visual output."""
    if node is None:
        return None
    container = node if node.name == 'mjx-container' else node.find_parent('mjx-container')
    scope = container if container is not None else node
    return scope.select_one('mjx-assistive-mml math')


def aria_label(node: Tag) -> Optional[str]:
    """Spoken form of the formula, taken from the node or its container."""
    current = node
    while isinstance(current, Tag):
        label = current.get('aria-label')
        if label:
            return label
        if current.name == 'mjx-container':
            break
        current = current.parent
    return None


def dump_tree(node, depth: int = 0, max_depth: int = 10) -> List[str]:
    """
    Describe a subtree one line per node, indented by depth.

    Used for debug logging only; descent stops below ``max_depth``.
    """
    lines: List[str] = []
    if depth > max_depth or node is None or isinstance(node, Comment):
        return lines
    indent = "  " * depth
    if isinstance(node, NavigableString):
        text = str(node).strip()
        if text:
            lines.append(f"{indent}#text {text!r}")
        return lines
    details = []
    for name in ('data-mml-node', 'data-c', 'class', 'transform', 'data-semantic-role'):
        value = node.get(name)
        if value:
            if isinstance(value, list):
                value = " ".join(value)
            details.append(f"{name}={value}")
    lines.append(f"{indent}<{node.name}> " + " ".join(details))
    for child in node.children:
        lines.extend(dump_tree(child, depth + 1, max_depth))
    return lines
