"""Tests for shape detection and the conversion boundary."""
from __future__ import annotations

import logging

import pytest

from services.latex import dispatcher
from services.latex.dispatcher import NO_MATH_FOUND, MathJaxToLatex, is_chtml
from services.latex.tree_converter import TreeConverter
from utils.markup_utils import parse_markup


@pytest.fixture
def converter() -> MathJaxToLatex:
    return MathJaxToLatex(prefer_assistive=True)


class TestDetection:
    def test_svg(self, svg, math_root, converter) -> None:
        shape, node = converter.detect(math_root(svg.document(svg.leaf("mi", "78"))))
        assert shape == "SVG"
        assert node.get("data-mml-node") == "math"

    def test_svg_inner_node(self, svg, converter) -> None:
        node = parse_markup(svg.node("mfrac", svg.leaf("mn", "31"), svg.leaf("mn", "32"))).find("g")
        assert converter.detect(node) == ("SVG", node)

    def test_chtml(self, chtml, math_root, converter) -> None:
        root = math_root(chtml.document(chtml.leaf("mi", "78")))
        assert converter.detect(root) == ("CHTML", root)

    def test_chtml_inner_element(self, chtml) -> None:
        document = parse_markup(chtml.document(chtml.frac(chtml.leaf("mn", "31"), chtml.leaf("mn", "32"))))
        assert is_chtml(document.find("mjx-mfrac"))
        assert not is_chtml(parse_markup('<mjx-container jax="SVG"></mjx-container>').find("mjx-container"))

    def test_mathml(self, math_root, converter) -> None:
        root = math_root("<math><mi>x</mi></math>")
        assert converter.detect(root) == ("MathML", root)

    def test_namespaced_mathml(self, converter) -> None:
        document = parse_markup("<div><m:math><m:mi>x</m:mi></m:math></div>")
        shape, node = converter.detect(document)
        assert shape == "MathML"
        assert converter.convert(document) == "x"

    def test_mirror_preferred(self, chtml, math_root, converter) -> None:
        root = math_root(chtml.document(chtml.leaf("mi", "78"), mirror="<mi>x</mi>"))
        shape, node = converter.detect(root)
        assert shape == "MathML"
        assert node.name == "math"

    def test_mirror_ignored_when_disabled(self, chtml, math_root) -> None:
        root = math_root(chtml.document(chtml.leaf("mi", "78"), mirror="<mi>x</mi>"))
        assert MathJaxToLatex(prefer_assistive=False).detect(root)[0] == "CHTML"


class TestBoundary:
    @pytest.mark.parametrize("root", [None, "<math><mi>x</mi></math>", 42])
    def test_non_node_input(self, root, converter) -> None:
        assert converter.convert(root) == NO_MATH_FOUND

    def test_no_math_in_document(self, converter) -> None:
        result = converter.convert_with_status(parse_markup("<div><p>hello</p></div>"))
        assert result.latex == NO_MATH_FOUND
        assert not result.ok

    def test_unexpected_error_becomes_message(self, math_root, converter, monkeypatch, caplog) -> None:
        def explode(self, node, context):
            raise RuntimeError("boom")

        monkeypatch.setattr(TreeConverter, "convert_node", explode)
        with caplog.at_level(logging.ERROR, logger="mathjax_latex"):
            result = converter.convert_with_status(math_root("<math><mi>x</mi></math>"))
        assert result.latex == "Error: boom"
        assert not result.ok
        assert "conversion failed" in caplog.text

    def test_recovers_after_error(self, math_root, converter, monkeypatch) -> None:
        root = math_root("<math><mi>x</mi></math>")
        with monkeypatch.context() as patch:
            patch.setattr(TreeConverter, "convert_node", lambda self, node, context: 1 / 0)
            assert converter.convert(root).startswith("Error: ")
        assert converter.convert(root) == "x"

    def test_progress_logging(self, math_root, converter, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="mathjax_latex"):
            converter.convert(math_root('<math aria-label="x squared"><msup><mi>x</mi><mn>2</mn></msup></math>'))
        assert "Translating MathML format..." in caplog.text
        assert "Converting: x squared" in caplog.text
        assert "MathML to LaTeX conversion completed successfully" in caplog.text
        assert caplog.text.count("Converting:") == 1


def test_module_level_convert(math_root) -> None:
    assert dispatcher.convert(math_root("<math><mfrac><mn>1</mn><mn>2</mn></mfrac></math>")) == "\\frac{1}{2}"
