"""Entry point: detect the tree shape of a MathJax root and convert it."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from bs4 import Tag

from core.config import settings
from core.logger import logger, truncate_for_log
from services.latex.node_adapters import ADAPTERS
from services.latex.symbol_table import DEFAULT_SYMBOLS, SymbolTable
from services.latex.tree_converter import ConversionContext, TreeConverter
from utils.markup_utils import aria_label, dump_tree, find_assistive_math, local_name

NO_MATH_FOUND = "No valid MathML found"

SVG = "SVG"
CHTML = "CHTML"
MATHML = "MathML"


@dataclass
class ConversionResult:
    """Outcome of one conversion; ``ok`` is False for sentinel and error strings."""

    latex: str
    ok: bool
    shape: Optional[str] = None


class MathJaxToLatex:
    """
    Convert a MathJax-rendered node (SVG, CHTML or MathML) to LaTeX.

    Shape detection is structural: callers pass any node and the matching
    converter is chosen by probing for shape-specific tags and attributes.
    When the node carries MathJax's assistive MathML mirror it is preferred,
    since it is more semantically explicit than the visual layout.
    """

    def __init__(
        self,
        symbols: SymbolTable = DEFAULT_SYMBOLS,
        prefer_assistive: Optional[bool] = None,
    ) -> None:
        self.symbols = symbols
        self.prefer_assistive = (
            settings.prefer_assistive_mml if prefer_assistive is None else prefer_assistive
        )
        self._converters = {
            shape: TreeConverter(adapter, symbols) for shape, adapter in ADAPTERS.items()
        }

    def detect(self, root) -> Tuple[Optional[str], Optional[Tag]]:
        """Return (shape, node to convert), or (None, None) when nothing matches."""
        if not isinstance(root, Tag):
            return None, None

        if self.prefer_assistive:
            mirror = find_assistive_math(root)
            if mirror is not None:
                return MATHML, mirror

        if is_chtml(root):
            return CHTML, root
        chtml = root.select_one('mjx-container[jax="CHTML"]') or root.select_one('mjx-math')
        if chtml is not None:
            return CHTML, chtml

        if root.get('data-mml-node'):
            return SVG, root
        svg = root.select_one('[data-mml-node="math"]') or root.select_one('[data-mml-node]')
        if svg is not None:
            return SVG, svg

        if local_name(root) == 'math':
            return MATHML, root
        for tag in root.find_all(True):
            if local_name(tag) == 'math':
                return MATHML, tag
        return None, None

    def convert(self, root) -> str:
        return self.convert_with_status(root).latex

    def convert_with_status(self, root) -> ConversionResult:
        shape, node = self.detect(root)
        if shape is None:
            logger.warning("No recognizable MathJax structure in input")
            return ConversionResult(NO_MATH_FOUND, ok=False)

        context = ConversionContext(shape=shape)
        logger.info("Translating %s format...", shape)
        self._log_input(node, context)
        try:
            latex = self._converters[shape].convert(node, context)
        except Exception as exc:
            logger.exception("%s to LaTeX conversion failed", shape)
            return ConversionResult(f"Error: {exc}", ok=False, shape=shape)

        logger.info("%s to LaTeX conversion completed successfully", shape)
        logger.debug("LaTeX output: %s", truncate_for_log(latex))
        return ConversionResult(latex, ok=True, shape=shape)

    def _log_input(self, node: Tag, context: ConversionContext) -> None:
        if context.input_logged:
            return
        context.input_logged = True
        label = aria_label(node)
        if label:
            logger.info("Converting: %s", truncate_for_log(label))
        elif context.shape == MATHML:
            logger.info("Converting: %s", truncate_for_log(node.get_text(" ", strip=True)))
        if context.shape == SVG and logger.isEnabledFor(logging.DEBUG):
            logger.debug("SVG tree:\n%s", "\n".join(dump_tree(node)))


def is_chtml(node: Tag) -> bool:
    """True for a CHTML container or any mjx-* element inside CHTML output."""
    name = (node.name or '').lower()
    if not name.startswith('mjx-'):
        return False
    if name == 'mjx-container':
        return (node.get('jax') or '').upper() == 'CHTML'
    if name == 'mjx-math':
        return True
    if node.find_parent('mjx-math') is not None:
        return True
    container = node.find_parent('mjx-container')
    return container is not None and (container.get('jax') or '').upper() == 'CHTML'


_default_converter: Optional[MathJaxToLatex] = None


def convert(root) -> str:
    """Convert a MathJax node to LaTeX with the default tables and settings."""
    global _default_converter
    if _default_converter is None:
        _default_converter = MathJaxToLatex()
    return _default_converter.convert(root)
