"""End-to-end tests for MathJax SVG (glyph-layout) output."""
from __future__ import annotations

import pytest

from services.latex.dispatcher import MathJaxToLatex


@pytest.fixture
def converter() -> MathJaxToLatex:
    return MathJaxToLatex(prefer_assistive=False)


def test_arc_length_formula(svg, math_root, squash, converter) -> None:
    """A = 2π ∫₀¹ |f(x)| √(1+f′(x)²) dx"""
    radicand = [
        svg.leaf("mn", "31"),
        svg.leaf("mo", "2B"),
        svg.node("msup", svg.leaf("mi", "1D453"), svg.leaf("mo", "2032")),
        svg.leaf("mo", "28"),
        svg.leaf("mi", "1D465"),
        svg.node("msup", svg.leaf("mo", "29"), svg.leaf("mn", "32")),
    ]
    markup = svg.document(
        svg.leaf("mi", "1D434"),
        svg.leaf("mo", "3D"),
        svg.leaf("mn", "32"),
        svg.leaf("mi", "1D70B"),
        svg.node("msubsup", svg.leaf("mo", "222B"), svg.leaf("mn", "30"), svg.leaf("mn", "31")),
        svg.leaf("mo", "2223"),
        svg.leaf("mi", "1D453"),
        svg.leaf("mo", "28"),
        svg.leaf("mi", "1D465"),
        svg.leaf("mo", "29"),
        svg.leaf("mo", "2223"),
        svg.sqrt(*radicand),
        svg.leaf("mi", "1D451"),
        svg.leaf("mi", "1D465"),
    )
    expected = (
        "A = 2 \\pi \\int _{0 }^{1 }\\mid f \\left( x \\right) \\mid "
        "\\sqrt{1 + f ' \\left( x \\right) ^{2 }}dx"
    )
    assert squash(converter.convert(math_root(markup))) == squash(expected)


def test_scaled_root(svg, math_root, squash, converter) -> None:
    """Test a root over a multi-glyph number."""
    markup = svg.document(svg.leaf("mn", "33"), svg.sqrt(svg.leaf("mn", "31", "34")))
    assert squash(converter.convert(math_root(markup))) == "3\\sqrt{14}"


def test_ordered_triple(svg, math_root, squash, converter) -> None:
    """Test an ordered triple with a negative fraction."""
    markup = svg.document(svg.node(
        "mrow",
        svg.leaf("mo", "28"),
        svg.leaf("mn", "30"),
        svg.leaf("mo", "2C"),
        svg.leaf("mo", "2212"),
        svg.frac(svg.leaf("mn", "31", "31"), svg.leaf("mn", "32")),
        svg.leaf("mo", "2C"),
        svg.leaf("mn", "30"),
        svg.leaf("mo", "29"),
    ))
    latex = converter.convert(math_root(markup))
    assert "\\frac{11 }{2 }" in latex
    assert squash(latex) == squash("\\left( 0, - \\frac{11 }{2 }, 0 \\right)")


def test_fraction_ignores_rule(svg, math_root, converter) -> None:
    """Test that the fraction rule is skipped."""
    markup = svg.document(svg.frac(svg.leaf("mn", "31"), svg.leaf("mn", "32")))
    assert converter.convert(math_root(markup)) == "\\frac{1 }{2 }"


def test_split_function_glyphs(svg, math_root, converter) -> None:
    """Test reassembly of a function name split across glyphs."""
    markup = svg.document(
        svg.leaf("mi", "1D460"),
        svg.leaf("mi", "1D456"),
        svg.leaf("mi", "1D45B"),
        svg.leaf("mi", "1D465"),
    )
    latex = converter.convert(math_root(markup))
    assert latex.startswith("\\sin ")
    assert "s i n" not in latex


def test_squared_and_cubed(svg, math_root, converter) -> None:
    """Test padded exponents."""
    squared = svg.document(svg.node("msup", svg.leaf("mi", "1D465"), svg.leaf("mn", "32")))
    cubed = svg.document(svg.node("msup", svg.leaf("mi", "1D465"), svg.leaf("mn", "33")))
    assert converter.convert(math_root(squared)) == "x ^{2 }"
    assert converter.convert(math_root(cubed)) == "x ^{3 }"


def test_vector_and_overline(svg, math_root, squash, converter) -> None:
    """Test vector and overline marks."""
    vector = svg.document(svg.node("mover", svg.leaf("mi", "1D463"), svg.leaf("mo", "20D7")))
    bar = svg.document(svg.node("mover", svg.leaf("mi", "1D467"), svg.leaf("mo", "AF")))
    assert squash(converter.convert(math_root(vector))) == "\\overrightarrow{v}"
    assert squash(converter.convert(math_root(bar))) == "\\overline{z}"


def test_absolute_value_bars(svg, math_root, squash, converter) -> None:
    """Test sized absolute value bars."""
    markup = svg.document(svg.leaf("mo", "7C"), svg.leaf("mi", "1D465"), svg.leaf("mo", "7C"))
    assert squash(converter.convert(math_root(markup))) == "\\left|x\\right|"


def test_equality_role(svg, math_root, converter) -> None:
    """Test the equality split on glyph trees."""
    markup = svg.document(svg.node(
        "mrow",
        svg.leaf("mi", "1D466"),
        svg.leaf("mo", "3D"),
        svg.leaf("mn", "31"),
        data_semantic_role="equality",
    ))
    assert converter.convert(math_root(markup)) == "y =1 "


def test_invisible_times(svg, math_root, converter) -> None:
    """Test that invisible times is elided."""
    markup = svg.document(svg.leaf("mn", "32"), svg.leaf("mo", "2062"), svg.leaf("mi", "1D465"))
    assert converter.convert(math_root(markup)) == "2 x "


def test_unknown_glyph_does_not_abort(svg, math_root, converter) -> None:
    """Test that an unknown glyph becomes a placeholder."""
    markup = svg.document(svg.leaf("mi", "1D465"), '<g data-mml-node="mi"><use data-c="XYZ"></use></g>')
    assert converter.convert(math_root(markup)) == "x [U+XYZ]"
