"""
Generic recursive walker turning a MathJax tree into LaTeX.

The walker knows nothing about tag vocabularies: a NodeAdapter classifies
every node into a NodeKind and supplies its structural children, and a
ContentExtractor resolves leaf content. One TreeConverter instance is bound
to one adapter and can be reused across conversions; all per-call state
lives in a ConversionContext.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from core.logger import logger
from services.latex.content_extractor import ContentExtractor
from services.latex.node_adapters import NodeAdapter, NodeKind
from services.latex.postprocessor import fix_parentheses
from services.latex.symbol_table import (
    DEFAULT_SYMBOLS,
    FUNCTION_APPLICATION,
    INVISIBLE_OPERATORS,
    OVERLINE_MARKS,
    PRIME_GLYPHS,
    VECTOR_ARROW_MARKS,
    SymbolTable,
    function_macro,
)

_INTEGRAL_FORMS = frozenset({'∫', '\\int'})


@dataclass
class ConversionContext:
    """State for a single top-level conversion."""

    shape: str
    depth: int = 0
    max_depth: int = 0
    nodes_visited: int = 0
    input_logged: bool = False


class TreeConverter:
    """Convert one tree shape to LaTeX through its adapter."""

    def __init__(
        self,
        adapter: NodeAdapter,
        symbols: SymbolTable = DEFAULT_SYMBOLS,
        extractor: Optional[ContentExtractor] = None,
    ) -> None:
        self.adapter = adapter
        self.symbols = symbols
        self.extractor = extractor or ContentExtractor(adapter, symbols)
        self._handlers: Dict[NodeKind, Callable] = {
            NodeKind.MATH: self._convert_container,
            NodeKind.MROW: self._convert_row,
            NodeKind.MSTYLE: self._convert_container,
            NodeKind.CONTAINER: self._convert_container,
            NodeKind.MI: self._convert_identifier,
            NodeKind.MN: self._convert_number,
            NodeKind.MO: self._convert_operator,
            NodeKind.MTEXT: self._convert_text,
            NodeKind.MSQRT: self._convert_sqrt,
            NodeKind.MROOT: self._convert_root,
            NodeKind.MFRAC: self._convert_fraction,
            NodeKind.MSUP: self._convert_superscript,
            NodeKind.MSUB: self._convert_subscript,
            NodeKind.MSUBSUP: self._convert_subsup,
            NodeKind.MUNDER: self._convert_under,
            NodeKind.MUNDEROVER: self._convert_underover,
            NodeKind.MOVER: self._convert_over,
            NodeKind.TEXT: self._convert_bare_text,
        }

    # ------------------------------------------------------------------ #
    # Entry points
    # ------------------------------------------------------------------ #
    def convert(self, root, context: Optional[ConversionContext] = None) -> str:
        """Convert a whole tree and apply the final parenthesis pass."""
        context = context or ConversionContext(shape=self.adapter.shape)
        latex = self.convert_node(root, context)
        logger.debug(
            "Converted %s tree: %s nodes, depth %s",
            context.shape, context.nodes_visited, context.max_depth,
        )
        return fix_parentheses(latex)

    def convert_node(self, node, context: ConversionContext) -> str:
        """Convert one node without post-processing."""
        if node is None:
            return ''
        kind = self.adapter.kind(node)
        if kind is NodeKind.IGNORED:
            return ''
        context.depth += 1
        context.nodes_visited += 1
        context.max_depth = max(context.max_depth, context.depth)
        try:
            return self._handlers[kind](node, context)
        finally:
            context.depth -= 1

    # ------------------------------------------------------------------ #
    # Rows and containers
    # ------------------------------------------------------------------ #
    def _convert_container(self, node, context: ConversionContext) -> str:
        return self._fold(self.adapter.children(node), context)

    def _convert_row(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if self.adapter.attr(node, 'data-semantic-role') == 'equality':
            equals = [
                index for index, child in enumerate(children)
                if self.adapter.kind(child) is NodeKind.MO and self._operator_key(child) == '='
            ]
            if len(equals) == 1 and equals[0] > 0:
                split = equals[0]
                left = self._fold(children[:split], context)
                right = self._fold(children[split + 1:], context)
                logger.debug("Processed equality")
                return left + '=' + right
        return self._fold(children, context)

    def _fold(self, nodes: Sequence, context: ConversionContext) -> str:
        """Concatenate siblings left to right, applying the sibling-level rules."""
        bars = self._bar_roles(nodes)
        parts: List[str] = []
        previous_kind = None
        index = 0
        while index < len(nodes):
            node = nodes[index]
            kind = self.adapter.kind(node)
            if kind is NodeKind.MI:
                consumed, latex = self._identifier_run(nodes, index, context)
                parts.append(latex)
                index += consumed
                previous_kind = kind
                continue
            if kind is NodeKind.MO and index in bars:
                parts.append(bars[index])
            elif kind is NodeKind.MO and previous_kind is NodeKind.MI and parts and self._is_prime(node):
                parts[-1] = parts[-1].rstrip() + "'"
            else:
                parts.append(self.convert_node(node, context))
            previous_kind = kind
            index += 1
        return ''.join(parts)

    def _bar_roles(self, nodes: Sequence) -> Dict[int, str]:
        """Opening/closing roles for a row holding exactly two bars."""
        positions = [
            index for index, node in enumerate(nodes)
            if self.adapter.kind(node) is NodeKind.MO and self._operator_key(node) == '|'
        ]
        if len(positions) != 2:
            return {}
        return {positions[0]: '\\left|', positions[1]: '\\right|'}

    # ------------------------------------------------------------------ #
    # Identifiers and function application
    # ------------------------------------------------------------------ #
    def _identifier_run(self, nodes: Sequence, start: int, context: ConversionContext) -> Tuple[int, str]:
        """Convert the identifier at ``start`` plus any siblings it absorbs."""
        name_length, name = self._function_name_at(nodes, start)
        if name_length:
            latex = function_macro(name)
            consumed = name_length
            logger.debug("Reassembled function name %s", name)
        else:
            latex = self.convert_node(nodes[start], context)
            consumed = 1

        marker = start + consumed
        if marker >= len(nodes):
            return consumed, latex
        if self._is_function_application(nodes[marker]):
            used, argument = self._function_argument(nodes, marker + 1, context)
            latex += argument
            consumed += 1 + used
        elif self._is_prefix_function(nodes[start]) and self._can_be_argument(nodes[marker]):
            used, argument = self._function_argument(nodes, marker, context)
            latex += argument
            consumed += used
        return consumed, latex

    def _function_name_at(self, nodes: Sequence, start: int) -> Tuple[int, str]:
        """
        Look for a function name spelled by consecutive single-letter identifiers.

        Returns (number of identifiers consumed, name), or (0, "") when the
        letters do not spell a standard function.
        """
        first = self.extractor.extract(nodes[start]).strip()
        if len(first) != 1 or not self.symbols.is_function_prefix(first):
            return 0, ''
        name = first
        best = (0, '')
        index = start + 1
        while index < len(nodes) and self.adapter.kind(nodes[index]) is NodeKind.MI:
            letter = self.extractor.extract(nodes[index]).strip()
            if len(letter) != 1 or not letter.isalpha():
                break
            name += letter
            if not self.symbols.is_function_prefix(name):
                break
            index += 1
            if self.symbols.is_function(name):
                best = (index - start, name)
        return best

    def _is_function_application(self, node) -> bool:
        if self.adapter.kind(node) is not NodeKind.MO:
            return False
        if self.adapter.attr(node, 'data-semantic-role') == 'application':
            return True
        return self.extractor.raw_text(node) == FUNCTION_APPLICATION

    def _is_prefix_function(self, node) -> bool:
        return (
            self.adapter.attr(node, 'data-semantic-role') == 'prefix function'
            or self.adapter.attr(node, 'data-semantic-type') == 'function'
        )

    def _can_be_argument(self, node) -> bool:
        if self.adapter.kind(node) is not NodeKind.MO:
            return True
        return self._is_fence(node, '(')

    def _function_argument(self, nodes: Sequence, start: int, context: ConversionContext) -> Tuple[int, str]:
        """Render the argument following a function-application mark."""
        if start >= len(nodes):
            return 0, ''
        node = nodes[start]
        if self._is_fence(node, '('):
            depth = 0
            for index in range(start, len(nodes)):
                if self._is_fence(nodes[index], '('):
                    depth += 1
                elif self._is_fence(nodes[index], ')'):
                    depth -= 1
                    if depth == 0:
                        return index - start + 1, self._fold(nodes[start:index + 1], context)
            return 0, ''
        if self._is_fence(node, '|'):
            for index in range(start + 1, len(nodes)):
                if self._is_fence(nodes[index], '|'):
                    group = self._fold(nodes[start:index + 1], context).strip()
                    return index - start + 1, '(' + group + ')'
            # A closing bar belongs to a pair opened before the function
            return 0, ''
        if self._is_parenthesized(node):
            return 1, self.convert_node(node, context)
        return 1, '(' + self.convert_node(node, context).strip() + ')'

    # ------------------------------------------------------------------ #
    # Leaves
    # ------------------------------------------------------------------ #
    def _convert_identifier(self, node, context: ConversionContext) -> str:
        content = self.extractor.extract(node)
        stripped = content.strip()
        if self.symbols.is_function(stripped):
            return function_macro(stripped)
        if stripped and self.adapter.attr(node, 'mathvariant') == 'bold':
            return '\\mathbf{' + stripped + '}'
        return content

    def _convert_number(self, node, context: ConversionContext) -> str:
        return self.extractor.extract(node)

    def _convert_operator(self, node, context: ConversionContext) -> str:
        if self.extractor.raw_text(node) in INVISIBLE_OPERATORS:
            return ''
        content = self.extractor.extract(node)
        key = content.strip()
        if not key:
            return ''
        mapped = self.symbols.operator(key)
        return content if mapped is None else mapped

    def _convert_text(self, node, context: ConversionContext) -> str:
        content = self.extractor.extract(node)
        if content.strip() == 'π':
            return '\\pi '
        return content

    def _convert_bare_text(self, node, context: ConversionContext) -> str:
        return self.adapter.text_of(node)

    # ------------------------------------------------------------------ #
    # Layout schemata
    # ------------------------------------------------------------------ #
    def _convert_sqrt(self, node, context: ConversionContext) -> str:
        content = self._fold(self.adapter.radicand(node), context).strip()
        logger.debug("Processed square root")
        return '\\sqrt{' + content + '}'

    def _convert_root(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if len(children) != 2:
            return self._fold(children, context)
        base = self.convert_node(children[0], context).strip()
        index = self.convert_node(children[1], context).strip()
        logger.debug("Processed root")
        return '\\sqrt[' + index + ']{' + base + '}'

    def _convert_fraction(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if len(children) != 2:
            return self._fold(children, context)
        numerator = self.convert_node(children[0], context)
        denominator = self.convert_node(children[1], context)
        logger.debug("Processed fraction")
        return '\\frac{' + numerator + '}{' + denominator + '}'

    def _convert_superscript(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if len(children) != 2:
            return self._fold(children, context)
        base, exponent = children

        if self._is_parenthesized(base):
            inner = self._fold(self.adapter.children(base)[1:-1], context)
            base_latex = '(' + inner + ')'
        else:
            base_latex = self.convert_node(base, context)
            if self._is_compound(base):
                base_latex = '(' + base_latex + ')'

        exponent_latex = self.convert_node(exponent, context)
        if exponent_latex.strip() in PRIME_GLYPHS:
            return base_latex.rstrip() + "'"
        logger.debug("Processed superscript")
        if exponent_latex == '2':
            return base_latex + '^2'
        return base_latex + '^{' + exponent_latex + '}'

    def _convert_subscript(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if len(children) != 2:
            return self._fold(children, context)
        base = self.convert_node(children[0], context)
        subscript = self.convert_node(children[1], context)
        return base + '_{' + subscript + '}'

    def _convert_subsup(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if len(children) != 3:
            return self._fold(children, context)
        return self._limits(children, context)

    def _convert_underover(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if len(children) != 3:
            return self._fold(children, context)
        return self._limits(children, context)

    def _limits(self, children: Sequence, context: ConversionContext) -> str:
        """Operator with a lower and an upper limit, integrals first."""
        operator, lower, upper = children
        lower_latex = self.convert_node(lower, context)
        upper_latex = self.convert_node(upper, context)
        if self._is_integral(operator):
            logger.debug("Processed integral")
            return '\\int_{' + lower_latex + '}^{' + upper_latex + '}'
        return self.convert_node(operator, context) + '_{' + lower_latex + '}^{' + upper_latex + '}'

    def _convert_under(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if len(children) != 2:
            return self._fold(children, context)
        base = self.convert_node(children[0], context)
        under = self.convert_node(children[1], context)
        return base + '_{' + under + '}'

    def _convert_over(self, node, context: ConversionContext) -> str:
        children = self.adapter.children(node)
        if len(children) != 2:
            return self._fold(children, context)
        base, over = children
        base_latex = self.convert_node(base, context)
        marks = set(self.extractor.code_points(over))
        if marks & VECTOR_ARROW_MARKS:
            return '\\overrightarrow{' + base_latex + '}'
        if marks & OVERLINE_MARKS or self.adapter.attr(node, 'data-semantic-type') == 'overscore':
            return '\\overline{' + base_latex + '}'
        over_latex = self.convert_node(over, context)
        if over_latex.strip():
            return base_latex + '^{' + over_latex + '}'
        return base_latex

    # ------------------------------------------------------------------ #
    # Predicates
    # ------------------------------------------------------------------ #
    def _operator_key(self, node) -> str:
        return self.extractor.extract(node).strip()

    def _is_fence(self, node, fence: str) -> bool:
        return self.adapter.kind(node) is NodeKind.MO and self._operator_key(node) == fence

    def _is_prime(self, node) -> bool:
        return self._operator_key(node) in PRIME_GLYPHS

    def _is_integral(self, node) -> bool:
        if self._operator_key(node) in _INTEGRAL_FORMS:
            return True
        return self.extractor.raw_text(node).strip() == '∫'

    def _is_parenthesized(self, node) -> bool:
        """A row whose first and last children are ``(`` and ``)``."""
        if self.adapter.kind(node) not in (NodeKind.MROW, NodeKind.CONTAINER):
            return False
        children = self.adapter.children(node)
        return (
            len(children) >= 2
            and self._is_fence(children[0], '(')
            and self._is_fence(children[-1], ')')
        )

    def _is_compound(self, node) -> bool:
        """A row holding both an opening and a closing parenthesis anywhere."""
        if self.adapter.kind(node) is not NodeKind.MROW:
            return False
        children = self.adapter.children(node)
        return (
            any(self._is_fence(child, '(') for child in children)
            and any(self._is_fence(child, ')') for child in children)
        )
