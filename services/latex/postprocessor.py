"""Final clean-up passes over a converted LaTeX string."""
from __future__ import annotations

import re

# Already-sized delimiters are matched first so they are left alone
_PAREN_RE = re.compile(r'\\left\(|\\right\)|[()]')


def _size_paren(match: re.Match) -> str:
    token = match.group(0)
    if token == '(':
        return '\\left('
    if token == ')':
        return '\\right)'
    return token


def fix_parentheses(latex: str) -> str:
    """
    Rewrite bare round parentheses as auto-sized ``\\left(`` / ``\\right)``.

    Existing ``\\left(`` and ``\\right)`` tokens are preserved, so applying
    the pass twice gives the same result as applying it once.
    """
    if not latex:
        return latex
    return _PAREN_RE.sub(_size_paren, latex)


def normalize_nbsp(latex: str) -> str:
    """Replace non-breaking spaces with ordinary spaces."""
    return latex.replace('\u00a0', ' ')


def strip_trailing_period(latex: str) -> str:
    """Drop one sentence-ending period; an ellipsis is kept."""
    stripped = latex.rstrip()
    if stripped.endswith('.') and not stripped.endswith('..'):
        return stripped[:-1].rstrip()
    return latex
