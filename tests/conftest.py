"""Pytest configuration for tests."""
from __future__ import annotations

import re
import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
# This allows imports like "from services.latex..." to work
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from utils.markup_utils import find_math_root, parse_markup  # noqa: E402


# ---------------------------------------------------------------------------
# Markup builders
# ---------------------------------------------------------------------------
class SvgMarkup:
    """Builds MathJax SVG output the way the renderer lays it out."""

    @staticmethod
    def leaf(kind: str, *codes: str, step: int = 500) -> str:
        uses = "".join(
            f'<use data-c="{code}" xlink:href="#MJX-TEX-I-{code}" transform="translate({i * step},0)"></use>'
            for i, code in enumerate(codes)
        )
        return f'<g data-mml-node="{kind}">{uses}</g>'

    @staticmethod
    def node(kind: str, *children: str, **attrs: str) -> str:
        extra = "".join(f' {name.replace("_", "-")}="{value}"' for name, value in attrs.items())
        return f'<g data-mml-node="{kind}"{extra}>{"".join(children)}</g>'

    @staticmethod
    def sqrt(*children: str) -> str:
        return (
            '<g data-mml-node="msqrt">'
            f'<g transform="translate(853,0)">{"".join(children)}</g>'
            '<g data-mml-node="mo"><use data-c="221A" xlink:href="#MJX-TEX-LO-221A"></use></g>'
            '<rect width="1000" height="60" x="853" y="700"></rect>'
            '</g>'
        )

    @staticmethod
    def frac(numerator: str, denominator: str) -> str:
        return (
            '<g data-mml-node="mfrac">'
            f'<g transform="translate(220,394)">{numerator}</g>'
            f'<g transform="translate(220,-345)">{denominator}</g>'
            '<rect width="700" height="60" x="120" y="220"></rect>'
            '</g>'
        )

    @staticmethod
    def document(*children: str) -> str:
        return (
            '<mjx-container class="MathJax" jax="SVG">'
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 -750 5000 1000">'
            '<g stroke="currentColor" fill="currentColor" transform="scale(1,-1)">'
            f'<g data-mml-node="math">{"".join(children)}</g>'
            '</g></svg></mjx-container>'
        )


class ChtmlMarkup:
    """Builds MathJax CommonHTML output."""

    @staticmethod
    def leaf(kind: str, *codes: str) -> str:
        glyphs = "".join(f'<mjx-c class="mjx-c{code}"></mjx-c>' for code in codes)
        return f'<mjx-{kind} class="mjx-n">{glyphs}</mjx-{kind}>'

    @staticmethod
    def node(name: str, *children: str) -> str:
        return f'<mjx-{name}>{"".join(children)}</mjx-{name}>'

    @staticmethod
    def sqrt(*children: str) -> str:
        return (
            '<mjx-msqrt><mjx-sqrt>'
            '<mjx-surd><mjx-mo class="mjx-n"><mjx-c class="mjx-c221A"></mjx-c></mjx-mo></mjx-surd>'
            f'<mjx-box style="padding-top: 0.164em;">{"".join(children)}</mjx-box>'
            '</mjx-sqrt></mjx-msqrt>'
        )

    @staticmethod
    def frac(numerator: str, denominator: str) -> str:
        return (
            '<mjx-mfrac><mjx-frac type="d">'
            f'<mjx-num><mjx-nstrut type="d"></mjx-nstrut>{numerator}</mjx-num>'
            '<mjx-dbox><mjx-dtable><mjx-line type="d"></mjx-line><mjx-row>'
            f'<mjx-den><mjx-dstrut type="d"></mjx-dstrut>{denominator}</mjx-den>'
            '</mjx-row></mjx-dtable></mjx-dbox>'
            '</mjx-frac></mjx-mfrac>'
        )

    @staticmethod
    def sup(base: str, script: str) -> str:
        return f'<mjx-msup>{base}<mjx-script style="vertical-align: 0.363em;">{script}</mjx-script></mjx-msup>'

    @staticmethod
    def document(*children: str, mirror: str = "") -> str:
        assistive = ""
        if mirror:
            assistive = (
                '<mjx-assistive-mml unselectable="on" display="inline">'
                f'<math xmlns="http://www.w3.org/1998/Math/MathML">{mirror}</math>'
                '</mjx-assistive-mml>'
            )
        return (
            '<mjx-container class="MathJax CtxtMenu_Attached_0" jax="CHTML">'
            f'<mjx-math class="MJX-TEX" aria-hidden="true">{"".join(children)}</mjx-math>'
            f'{assistive}</mjx-container>'
        )


def _math_root(markup: str):
    root = find_math_root(parse_markup(markup))
    assert root is not None, "fixture markup has no math root"
    return root


def _squash(latex: str) -> str:
    return re.sub(r"\s+", "", latex)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def svg() -> SvgMarkup:
    return SvgMarkup()


@pytest.fixture
def chtml() -> ChtmlMarkup:
    return ChtmlMarkup()


@pytest.fixture
def math_root():
    """Parse markup and return its formula root."""
    return _math_root


@pytest.fixture
def squash():
    """Whitespace-insensitive form of a LaTeX string for comparisons."""
    return _squash
