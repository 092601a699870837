"""Markup-level conversion service: raw MathJax markup in, LaTeX out."""
from __future__ import annotations

from typing import Optional, Tuple

from core.config import settings
from core.logger import logger, truncate_for_log
from services.latex.dispatcher import NO_MATH_FOUND, ConversionResult, MathJaxToLatex
from services.latex.postprocessor import normalize_nbsp, strip_trailing_period
from utils.markup_utils import find_math_root, parse_markup

INVALID_INPUT = "Invalid input provided"


class LatexConversionService:
    """
    Convert rendered MathJax markup (HTML/SVG/MathML text) to LaTeX.

    Remembers the most recent (input, result) pair so repeated requests for
    the same formula skip the tree walk, and applies the text clean-up a
    caller wants before copying LaTeX (non-breaking spaces, a stray
    sentence-ending period).
    """

    def __init__(
        self,
        converter: Optional[MathJaxToLatex] = None,
        cache_enabled: Optional[bool] = None,
    ) -> None:
        self.converter = converter or MathJaxToLatex()
        self.cache_enabled = settings.cache_enabled if cache_enabled is None else cache_enabled
        self._last: Optional[Tuple[str, ConversionResult]] = None

    def convert_markup(self, markup: str) -> str:
        return self.convert_markup_with_status(markup).latex

    def convert_markup_with_status(self, markup: str) -> ConversionResult:
        if not isinstance(markup, str) or not markup.strip():
            logger.warning("Rejected empty or non-string markup")
            return ConversionResult(INVALID_INPUT, ok=False)

        if self.cache_enabled and self._last is not None and self._last[0] == markup:
            logger.debug("Using cached conversion result")
            return self._last[1]

        logger.debug("Converting markup: %s", truncate_for_log(markup))
        document = parse_markup(markup)
        root = find_math_root(document)
        if root is None:
            logger.warning("No math root found in markup")
            result = ConversionResult(NO_MATH_FOUND, ok=False)
        else:
            result = self.convert_node_with_status(root)

        if self.cache_enabled and result.ok:
            self._last = (markup, result)
        return result

    def convert_node_with_status(self, node) -> ConversionResult:
        """Convert an already-parsed node and apply the text clean-up."""
        result = self.converter.convert_with_status(node)
        if result.ok:
            result = ConversionResult(self.clean_text(result.latex), ok=True, shape=result.shape)
        return result

    @staticmethod
    def clean_text(latex: str) -> str:
        if settings.normalize_nbsp:
            latex = normalize_nbsp(latex)
        if settings.strip_trailing_period:
            latex = strip_trailing_period(latex)
        return latex

    def clear_cache(self) -> None:
        self._last = None
        logger.debug("Conversion cache cleared")
