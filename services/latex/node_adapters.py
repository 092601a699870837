"""
Node adapters for the three MathJax tree shapes.

Each adapter maps one shape's native vocabulary onto the shared NodeKind
union so the TreeConverter can walk any of them:

    - SvgAdapter:     glyph-layout tree (``data-mml-node`` groups, ``<use data-c>`` glyphs)
    - ChtmlAdapter:   styled-box tree (``mjx-*`` elements, ``mjx-cXXXX`` glyph classes)
    - MathMLAdapter:  accessibility mirror (plain MathML under ``mjx-assistive-mml``)

Nodes are BeautifulSoup objects and are never modified.
"""
from __future__ import annotations

import re
from collections import deque
from enum import Enum
from typing import Dict, List, Optional

from bs4 import Comment, NavigableString, Tag

from utils.markup_utils import local_name

_TRANSLATE_RE = re.compile(r'translate\(\s*(-?[\d.]+)')
_CHTML_GLYPH_RE = re.compile(r'mjx-c([0-9A-Fa-f]+)\b')


class NodeKind(str, Enum):
    """Closed set of node kinds the converter understands."""

    MATH = "math"
    MROW = "mrow"
    MI = "mi"
    MN = "mn"
    MO = "mo"
    MTEXT = "mtext"
    MSQRT = "msqrt"
    MROOT = "mroot"
    MFRAC = "mfrac"
    MSUP = "msup"
    MSUB = "msub"
    MSUBSUP = "msubsup"
    MUNDER = "munder"
    MUNDEROVER = "munderover"
    MOVER = "mover"
    MSTYLE = "mstyle"
    TEXT = "#text"
    CONTAINER = "container"
    IGNORED = "ignored"


_MML_KINDS: Dict[str, NodeKind] = {
    kind.value: kind
    for kind in NodeKind
    if kind not in (NodeKind.TEXT, NodeKind.CONTAINER, NodeKind.IGNORED)
}


class NodeAdapter:
    """Capability set the generic walker needs from a tree shape."""

    shape = "generic"
    # MathML text leaves carry raw Unicode that still needs symbol lookup
    maps_text_symbols = False
    # SVG glyph codes for ASCII characters go through the table too
    pads_ascii_glyphs = True

    def kind(self, node) -> NodeKind:
        raise NotImplementedError

    def children(self, node) -> List:
        """Structural children in left-to-right order."""
        return self._content_children(node)

    def radicand(self, node) -> List:
        """Children forming the content of a square root."""
        return self.children(node)

    def glyph_codes(self, node) -> List[str]:
        """Raw hex code points of positioned glyphs, sorted left to right."""
        return []

    def text_of(self, node) -> str:
        if isinstance(node, NavigableString):
            return str(node).strip()
        if isinstance(node, Tag):
            return node.get_text().strip()
        return ''

    def attr(self, node, name: str) -> Optional[str]:
        if isinstance(node, Tag):
            value = node.get(name)
            if isinstance(value, list):
                return " ".join(value)
            return value
        return None

    def _content_children(self, node) -> List:
        if not isinstance(node, Tag):
            return []
        result = []
        for child in node.children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString) and not str(child).strip():
                continue
            if self.kind(child) is NodeKind.IGNORED:
                continue
            result.append(child)
        return result

    def _bare_kind(self, node) -> Optional[NodeKind]:
        """Kind for anything that is not an element."""
        if isinstance(node, Comment):
            return NodeKind.IGNORED
        if isinstance(node, NavigableString):
            return NodeKind.TEXT if str(node).strip() else NodeKind.IGNORED
        if not isinstance(node, Tag):
            return NodeKind.IGNORED
        return None


class SvgAdapter(NodeAdapter):
    """Glyph-layout tree produced by MathJax's SVG output."""

    shape = "SVG"

    def kind(self, node) -> NodeKind:
        bare = self._bare_kind(node)
        if bare is not None:
            return bare
        if node.name in ('use', 'rect', 'title', 'defs'):
            return NodeKind.IGNORED
        mml = node.get('data-mml-node')
        if not mml:
            return NodeKind.CONTAINER
        return _MML_KINDS.get(mml.lower(), NodeKind.CONTAINER)

    def radicand(self, node) -> List:
        parts = []
        for child in self.children(node):
            # The radical sign itself is a decorative mo holding U+221A
            if self.kind(child) is NodeKind.MO and self.glyph_codes(child) == ['221A']:
                continue
            parts.append(child)
        return parts

    def glyph_codes(self, node) -> List[str]:
        if not isinstance(node, Tag):
            return []
        uses = [use for use in node.find_all('use') if use.get('data-c')]
        # sorted() is stable: glyphs at the same offset keep document order
        positioned = sorted(uses, key=lambda use: self._offset_x(use, node))
        return [use['data-c'] for use in positioned]

    @staticmethod
    def _offset_x(element: Tag, stop: Tag) -> float:
        """Horizontal position of a glyph relative to the leaf node."""
        total = 0.0
        current = element
        while current is not None and current is not stop:
            if isinstance(current, Tag):
                total += _parse_float(current.get('x'))
                match = _TRANSLATE_RE.search(current.get('transform') or '')
                if match:
                    total += _parse_float(match.group(1))
            current = current.parent
        return total


class ChtmlAdapter(NodeAdapter):
    """Styled-box tree produced by MathJax's CommonHTML output."""

    shape = "CHTML"
    pads_ascii_glyphs = False

    _KINDS: Dict[str, NodeKind] = {
        'mjx-math': NodeKind.MATH,
        'mjx-mrow': NodeKind.MROW,
        'mjx-inferredmrow': NodeKind.MROW,
        'mjx-mi': NodeKind.MI,
        'mjx-mn': NodeKind.MN,
        'mjx-mo': NodeKind.MO,
        'mjx-mtext': NodeKind.MTEXT,
        'mjx-msqrt': NodeKind.MSQRT,
        'mjx-sqrt': NodeKind.MSQRT,
        'mjx-mroot': NodeKind.MROOT,
        'mjx-mfrac': NodeKind.MFRAC,
        'mjx-frac': NodeKind.MFRAC,
        'mjx-msup': NodeKind.MSUP,
        'mjx-msub': NodeKind.MSUB,
        'mjx-msubsup': NodeKind.MSUBSUP,
        'mjx-munder': NodeKind.MUNDER,
        'mjx-munderover': NodeKind.MUNDEROVER,
        'mjx-mover': NodeKind.MOVER,
        'mjx-mstyle': NodeKind.MSTYLE,
    }
    _IGNORED = frozenset({
        'mjx-assistive-mml', 'mjx-c', 'mjx-surd', 'mjx-spacer', 'mjx-nstrut',
        'mjx-dstrut', 'mjx-line', 'mjx-linestrut', 'mjx-mspace',
    })

    def kind(self, node) -> NodeKind:
        bare = self._bare_kind(node)
        if bare is not None:
            return bare
        name = node.name.lower()
        if name in self._IGNORED:
            return NodeKind.IGNORED
        return self._KINDS.get(name, NodeKind.CONTAINER)

    def children(self, node) -> List:
        kind = self.kind(node)
        if kind is NodeKind.MFRAC:
            num = _shallowest(node, 'mjx-num')
            den = _shallowest(node, 'mjx-den')
            if num is not None and den is not None:
                return [num, den]
        elif kind in (NodeKind.MSUP, NodeKind.MSUB):
            elements = self._content_children(node)
            if len(elements) >= 2:
                return elements[:2]
        elif kind is NodeKind.MSUBSUP:
            elements = self._content_children(node)
            if len(elements) >= 2 and elements[1].name == 'mjx-script':
                scripts = self._content_children(elements[1])
                if len(scripts) >= 2:
                    # The script box stacks the superscript above the subscript
                    return [elements[0], scripts[1], scripts[0]]
        elif kind in (NodeKind.MUNDER, NodeKind.MUNDEROVER, NodeKind.MOVER):
            parts = [_shallowest(node, 'mjx-base')]
            if kind is not NodeKind.MOVER:
                parts.append(_shallowest(node, 'mjx-under'))
            if kind is not NodeKind.MUNDER:
                parts.append(_shallowest(node, 'mjx-over'))
            if all(part is not None for part in parts):
                return parts
        elif kind is NodeKind.MROOT:
            index = _shallowest(node, 'mjx-root')
            box = self._radical_box(node)
            if index is not None and box is not None:
                return [box, index]
        return self._content_children(node)

    def radicand(self, node) -> List:
        box = self._radical_box(node)
        if box is not None:
            return self._content_children(box)
        return self._content_children(node)

    def _radical_box(self, node) -> Optional[Tag]:
        sqrt = node if node.name == 'mjx-sqrt' else _shallowest(node, 'mjx-sqrt')
        if sqrt is None:
            return None
        return sqrt.find('mjx-box', recursive=False)

    def glyph_codes(self, node) -> List[str]:
        if not isinstance(node, Tag):
            return []
        codes = []
        for glyph in node.find_all('mjx-c'):
            match = _CHTML_GLYPH_RE.search(" ".join(glyph.get('class') or []))
            if match:
                codes.append(match.group(1))
            else:
                codes.extend(format(ord(char), 'X') for char in glyph.get_text())
        return codes


class MathMLAdapter(NodeAdapter):
    """Plain MathML, as found in MathJax's assistive mirror."""

    shape = "MathML"
    maps_text_symbols = True

    _IGNORED = frozenset({'annotation', 'annotation-xml', 'mspace', 'mphantom', 'none'})

    def kind(self, node) -> NodeKind:
        bare = self._bare_kind(node)
        if bare is not None:
            return bare
        name = local_name(node)
        if name in self._IGNORED:
            return NodeKind.IGNORED
        return _MML_KINDS.get(name, NodeKind.CONTAINER)


def _parse_float(value: Optional[str]) -> float:
    if not value:
        return 0.0
    try:
        return float(value)
    except ValueError:
        return 0.0


def _shallowest(node: Tag, name: str) -> Optional[Tag]:
    """Breadth-first search so an outer part wins over a nested one."""
    queue = deque(child for child in node.children if isinstance(child, Tag))
    while queue:
        current = queue.popleft()
        if current.name == name:
            return current
        queue.extend(child for child in current.children if isinstance(child, Tag))
    return None


SVG_ADAPTER = SvgAdapter()
CHTML_ADAPTER = ChtmlAdapter()
MATHML_ADAPTER = MathMLAdapter()

ADAPTERS: Dict[str, NodeAdapter] = {
    SVG_ADAPTER.shape: SVG_ADAPTER,
    CHTML_ADAPTER.shape: CHTML_ADAPTER,
    MATHML_ADAPTER.shape: MATHML_ADAPTER,
}
