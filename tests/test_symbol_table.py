"""Tests for the LaTeX symbol tables."""
from __future__ import annotations

import pytest

from services.latex.symbol_table import (
    DEFAULT_SYMBOLS,
    OPERATOR_MAPPINGS,
    UNICODE_TO_TEX,
    SymbolTable,
    function_macro,
    is_combining,
    is_standard_function,
    normalize_code_point,
)


class TestNormalizeCodePoint:
    """Glyph codes arrive in several spellings."""

    @pytest.mark.parametrize("raw, expected", [
        ("1D434", "U+1D434"),
        ("1d434", "U+1D434"),
        ("3C0", "U+03C0"),
        ("U+3c0", "U+03C0"),
        ("0x2212", "U+2212"),
        ("&#x221A;", "U+221A"),
        ("0041", "U+0041"),
    ])
    def test_spellings(self, raw: str, expected: str) -> None:
        assert normalize_code_point(raw) == expected

    def test_unparseable(self) -> None:
        assert normalize_code_point("ZZZ") is None
        assert normalize_code_point("") is None


class TestCodePointToTex:
    def test_table_hit(self) -> None:
        assert DEFAULT_SYMBOLS.code_point_to_tex("3C0") == "\\pi "
        assert DEFAULT_SYMBOLS.code_point_to_tex("222B") == "\\int "

    def test_unknown_code_point_falls_back_to_character(self) -> None:
        assert DEFAULT_SYMBOLS.code_point_to_tex("E000") == "\ue000 "

    def test_unknown_combining_mark_has_no_trailing_space(self) -> None:
        assert DEFAULT_SYMBOLS.code_point_to_tex("0301") == "\u0301"

    def test_invisible_and_combining_marks_resolve_empty(self) -> None:
        for code in ("2061", "2062", "20D7", "0305"):
            assert DEFAULT_SYMBOLS.code_point_to_tex(code) == ""

    def test_garbage_code_is_a_placeholder(self) -> None:
        assert DEFAULT_SYMBOLS.code_point_to_tex("zz") == "[U+ZZ]"

    def test_char_to_tex(self) -> None:
        assert DEFAULT_SYMBOLS.char_to_tex("∂") == "\\partial "
        assert DEFAULT_SYMBOLS.char_to_tex("xy") is None


# ---------------------------------------------------------------------------
# Operators and functions
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("glyph", ["=", "+", "-", "×", "÷", "±", "*", "<", ">", "≤", "≥", "≠", "≈", "→"])
def test_binary_operators_are_spaced(glyph: str) -> None:
    mapped = OPERATOR_MAPPINGS[glyph]
    assert mapped.startswith(" ") and mapped.endswith(" ")


def test_fences() -> None:
    assert OPERATOR_MAPPINGS["("] == "("
    assert OPERATOR_MAPPINGS["]"] == "]"
    assert OPERATOR_MAPPINGS["{"] == "\\{"
    assert OPERATOR_MAPPINGS["}"] == "\\}"


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        OPERATOR_MAPPINGS["="] = "="  # type: ignore[index]
    with pytest.raises(TypeError):
        UNICODE_TO_TEX["U+03C0"] = "pi"  # type: ignore[index]


def test_standard_functions() -> None:
    assert is_standard_function("sin")
    assert is_standard_function("COSH")
    assert not is_standard_function("sine")
    assert function_macro("Log") == "\\log "


def test_function_prefix() -> None:
    assert DEFAULT_SYMBOLS.is_function_prefix("s")
    assert DEFAULT_SYMBOLS.is_function_prefix("arc")
    assert not DEFAULT_SYMBOLS.is_function_prefix("q")


def test_custom_table_injection() -> None:
    symbols = SymbolTable(functions=("erf",))
    assert symbols.is_function("erf")
    assert not symbols.is_function("sin")


def test_combining_ranges() -> None:
    assert is_combining(0x0300)
    assert is_combining(0x20D7)
    assert not is_combining(0x0041)


def test_default_tables_are_shared() -> None:
    """Every table built with defaults points at the module-level tables."""
    symbols = SymbolTable()
    assert symbols.operators is OPERATOR_MAPPINGS
    assert symbols.unicode is UNICODE_TO_TEX
    assert DEFAULT_SYMBOLS.operators is OPERATOR_MAPPINGS
    assert SymbolTable(functions=("erf",)).unicode is UNICODE_TO_TEX
