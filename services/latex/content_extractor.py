"""Content extraction for MathJax leaf nodes."""
from __future__ import annotations

import re
from typing import List

from services.latex.node_adapters import NodeAdapter
from services.latex.symbol_table import DEFAULT_SYMBOLS, SymbolTable, function_macro, normalize_code_point

_TRAILING_MACRO_RE = re.compile(r'\\[A-Za-z]+\s*$')


class ContentExtractor:
    """
    Resolve the displayed content of a leaf node.

    Text-bearing leaves return their trimmed text. Glyph-only leaves (SVG
    ``<use data-c>`` references, CHTML ``mjx-cXXXX`` boxes) are resolved code
    point by code point through the symbol table. A result that spells out
    a standard function name becomes its LaTeX macro.
    """

    def __init__(self, adapter: NodeAdapter, symbols: SymbolTable = DEFAULT_SYMBOLS) -> None:
        self.adapter = adapter
        self.symbols = symbols

    def extract(self, node) -> str:
        text = self.adapter.text_of(node)
        if text:
            if self.adapter.maps_text_symbols and len(text) == 1 and ord(text) > 0x7F:
                mapped = self.symbols.char_to_tex(text)
                if mapped is not None:
                    return mapped
            return self._function_or(text)

        codes = self.adapter.glyph_codes(node)
        if not codes:
            return ''
        pieces = [self._glyph_to_tex(code) for code in codes]
        return self._function_or(join_glyphs(pieces))

    def raw_text(self, node) -> str:
        """Literal Unicode content of a leaf, before any symbol lookup."""
        text = self.adapter.text_of(node)
        if text:
            return text
        chars = []
        for code in self.adapter.glyph_codes(node):
            key = normalize_code_point(code)
            if key is None:
                continue
            try:
                chars.append(chr(int(key[2:], 16)))
            except (ValueError, OverflowError):
                continue
        return ''.join(chars)

    def code_points(self, node) -> List[int]:
        """All code points shown by a subtree, glyph codes first."""
        points = []
        for code in self.adapter.glyph_codes(node):
            key = normalize_code_point(code)
            if key is not None:
                points.append(int(key[2:], 16))
        if not points:
            points = [ord(char) for char in self.adapter.text_of(node)]
        return points

    def _glyph_to_tex(self, code: str) -> str:
        if not self.adapter.pads_ascii_glyphs:
            key = normalize_code_point(code)
            if key is not None and int(key[2:], 16) < 0x80:
                return chr(int(key[2:], 16))
        return self.symbols.code_point_to_tex(code)

    def _function_or(self, content: str) -> str:
        if self.symbols.is_function(content.strip()):
            return function_macro(content)
        return content


def join_glyphs(pieces: List[str]) -> str:
    """
    Concatenate per-glyph tokens into one token.

    Padding between glyphs is dropped, except after a control word, where
    removing it would fuse the macro with the next letter.
    """
    joined = []
    last = len(pieces) - 1
    for index, piece in enumerate(pieces):
        if index < last:
            if _TRAILING_MACRO_RE.search(piece):
                piece = piece.rstrip() + ' '
            else:
                piece = piece.rstrip()
        joined.append(piece)
    return ''.join(joined)
