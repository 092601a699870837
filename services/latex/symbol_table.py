"""
Static LaTeX symbol data used by the MathJax to LaTeX converter.

Three immutable tables:
    - OPERATOR_MAPPINGS: operator glyph -> spaced LaTeX operator
    - UNICODE_TO_TEX: normalized "U+XXXX" code point -> LaTeX token
    - STANDARD_FUNCTIONS: function names emitted as backslash macros

SymbolTable bundles them so a converter receives its tables at construction
instead of reaching for module globals.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# Binary operators carry one leading and one trailing space; fences do not.
OPERATOR_MAPPINGS: Mapping[str, str] = MappingProxyType({
    # Arithmetic
    '=': ' = ',
    '+': ' + ',
    '-': ' - ',
    '−': ' - ',
    '×': ' \\times ',
    '\\times': ' \\times ',
    '÷': ' \\div ',
    '\\div': ' \\div ',
    '±': ' \\pm ',
    '\\pm': ' \\pm ',
    '*': ' * ',

    # Comparison
    '<': ' < ',
    '>': ' > ',
    '≤': ' \\leq ',
    '\\leq': ' \\leq ',
    '≥': ' \\geq ',
    '\\geq': ' \\geq ',
    '≠': ' \\neq ',
    '\\neq': ' \\neq ',
    '≈': ' \\approx ',
    '\\approx': ' \\approx ',

    # Arrows
    '→': ' \\rightarrow ',
    '\\rightarrow': ' \\rightarrow ',

    # Fences
    '(': '(',
    ')': ')',
    '[': '[',
    ']': ']',
    '{': '\\{',
    '}': '\\}',
    '\\{': '\\{',
    '\\}': '\\}',
    '|': '|',

    # Primes
    "'": "'",
    '′': "'",

    # Invisible operators
    '': '',
    '\u2061': '',
    '\u2062': '',
    '\u2063': '',
    '\u2064': '',

    # Combining marks, drawn by the enclosing mover
    '\u20d7': '',
    '\u0305': '',
})

STANDARD_FUNCTIONS: Tuple[str, ...] = (
    'sin', 'cos', 'tan', 'cot', 'sec', 'csc',
    'arcsin', 'arccos', 'arctan', 'arccot', 'arcsec', 'arccsc',
    'sinh', 'cosh', 'tanh', 'coth', 'sech', 'csch',
    'log', 'ln', 'exp', 'lim', 'max', 'min',
    'sup', 'inf', 'det', 'arg', 'deg', 'gcd',
)

FUNCTION_APPLICATION = '\u2061'
INVISIBLE_OPERATORS = frozenset({'\u2061', '\u2062', '\u2063', '\u2064'})
PRIME_GLYPHS = frozenset({"'", '′'})
VECTOR_ARROW_MARKS = frozenset({0x20D7, 0x2192})
OVERLINE_MARKS = frozenset({0x0305, 0x00AF, 0x2015, 0x203E})

_COMBINING_RANGES = ((0x0300, 0x036F), (0x20D0, 0x20FF))
_CODE_POINT_RE = re.compile(r'^(?:U\+|0x|&#x)?([0-9A-F]+);?$', re.IGNORECASE)

UNICODE_TO_TEX: Mapping[str, str] = MappingProxyType({
    # ASCII punctuation, digits and Latin letters
    "U+0020": " ", "U+0021": "! ", "U+0022": "\\textquotedbl{} ", "U+0023": "\\# ",
    "U+0024": "\\$ ", "U+0025": "\\% ", "U+0026": "\\& ", "U+0027": "' ",
    "U+0028": "( ", "U+0029": ") ", "U+002A": "* ", "U+002B": "+ ",
    "U+002C": ", ", "U+002D": "- ", "U+002E": ". ", "U+002F": "/ ",
    "U+0030": "0 ", "U+0031": "1 ", "U+0032": "2 ", "U+0033": "3 ",
    "U+0034": "4 ", "U+0035": "5 ", "U+0036": "6 ", "U+0037": "7 ",
    "U+0038": "8 ", "U+0039": "9 ", "U+003A": ": ", "U+003B": "; ",
    "U+003C": "< ", "U+003D": "= ", "U+003E": "> ", "U+003F": "? ",
    "U+0040": "@ ", "U+0041": "A ", "U+0042": "B ", "U+0043": "C ",
    "U+0044": "D ", "U+0045": "E ", "U+0046": "F ", "U+0047": "G ",
    "U+0048": "H ", "U+0049": "I ", "U+004A": "J ", "U+004B": "K ",
    "U+004C": "L ", "U+004D": "M ", "U+004E": "N ", "U+004F": "O ",
    "U+0050": "P ", "U+0051": "Q ", "U+0052": "R ", "U+0053": "S ",
    "U+0054": "T ", "U+0055": "U ", "U+0056": "V ", "U+0057": "W ",
    "U+0058": "X ", "U+0059": "Y ", "U+005A": "Z ", "U+005B": "[ ",
    "U+005D": "] ", "U+005E": "\\textasciicircum ", "U+005F": "\\_ ", "U+0061": "a ",
    "U+0062": "b ", "U+0063": "c ", "U+0064": "d ", "U+0065": "e ",
    "U+0066": "f ", "U+0067": "g ", "U+0068": "h ", "U+0069": "i ",
    "U+006A": "j ", "U+006B": "k ", "U+006C": "l ", "U+006D": "m ",
    "U+006E": "n ", "U+006F": "o ", "U+0070": "p ", "U+0071": "q ",
    "U+0072": "r ", "U+0073": "s ", "U+0074": "t ", "U+0075": "u ",
    "U+0076": "v ", "U+0077": "w ", "U+0078": "x ", "U+0079": "y ",
    "U+007A": "z ", "U+007B": "\\{ ", "U+007C": "| ", "U+007D": "\\} ",
    "U+007E": "\\textasciitilde ",

    # Latin-1 signs
    "U+00B0": "° ", "U+00B1": "\\pm ", "U+00B2": "^{2} ", "U+00B3": "^{3} ",
    "U+00B9": "^{1} ", "U+00D7": "\\times ", "U+00F7": "\\div ",

    # Combining diacritics (rendered by the enclosing mover)
    "U+0305": "",

    # Greek
    "U+0391": "A ", "U+0392": "B ", "U+0393": "\\Gamma ", "U+0394": "\\Delta ",
    "U+0395": "E ", "U+0396": "Z ", "U+0397": "H ", "U+0398": "\\Theta ",
    "U+0399": "I ", "U+039A": "K ", "U+039B": "\\Lambda ", "U+039C": "M ",
    "U+039D": "N ", "U+039E": "\\Xi ", "U+039F": "O ", "U+03A0": "\\Pi ",
    "U+03A1": "P ", "U+03A3": "\\Sigma ", "U+03A4": "T ", "U+03A5": "\\Upsilon ",
    "U+03A6": "\\Phi ", "U+03A7": "X ", "U+03A8": "\\Psi ", "U+03A9": "\\Omega ",
    "U+03B1": "\\alpha ", "U+03B2": "\\beta ", "U+03B3": "\\gamma ",
    "U+03B4": "\\delta ", "U+03B5": "\\epsilon ", "U+03B6": "\\zeta ",
    "U+03B7": "\\eta ", "U+03B8": "\\theta ", "U+03B9": "\\iota ",
    "U+03BA": "\\kappa ", "U+03BB": "\\lambda ", "U+03BC": "\\mu ", "U+03BD": "\\nu ",
    "U+03BE": "\\xi ", "U+03BF": "o ", "U+03C0": "\\pi ", "U+03C1": "\\rho ",
    "U+03C2": "\\varsigma ", "U+03C3": "\\sigma ", "U+03C4": "\\tau ",
    "U+03C5": "\\upsilon ", "U+03C6": "\\phi ", "U+03C7": "\\chi ", "U+03C8": "\\psi ",
    "U+03C9": "\\omega ", "U+03D1": "\\vartheta ", "U+03D5": "\\varphi ",
    "U+03D6": "\\varpi ", "U+03F0": "\\varkappa ", "U+03F1": "\\varrho ",
    "U+03F4": "\\varsigma ", "U+03F5": "\\varepsilon ",

    # General punctuation and invisible operators
    "U+2026": "\\ldots ", "U+2032": "' ", "U+2061": "", "U+2062": "",
    "U+2063": "", "U+2064": "",

    # Superscript and subscript digits
    "U+2070": "^{0} ", "U+2074": "^{4} ", "U+2075": "^{5} ", "U+2076": "^{6} ",
    "U+2077": "^{7} ", "U+2078": "^{8} ", "U+2079": "^{9} ", "U+2080": "_{0} ",
    "U+2081": "_{1} ", "U+2082": "_{2} ", "U+2083": "_{3} ", "U+2084": "_{4} ",
    "U+2085": "_{5} ", "U+2086": "_{6} ", "U+2087": "_{7} ", "U+2088": "_{8} ",
    "U+2089": "_{9} ",

    # Combining marks for symbols
    "U+20D7": "",

    # Letterlike symbols
    "U+2102": "\\mathbb{C} ", "U+2107": "\\euler ", "U+210B": "\\mathcal{H} ",
    "U+210C": "\\mathfrak{H} ", "U+2110": "\\mathcal{I} ", "U+2111": "\\mathfrak{I} ",
    "U+2112": "\\mathcal{L} ", "U+2115": "\\mathbb{N} ", "U+211A": "\\mathbb{Q} ",
    "U+211B": "\\mathcal{R} ", "U+211C": "\\mathfrak{R} ", "U+211D": "\\mathbb{R} ",
    "U+2124": "\\mathbb{Z} ", "U+2128": "\\mathfrak{Z} ", "U+212C": "\\mathcal{B} ",
    "U+212D": "\\mathfrak{C} ", "U+212F": "{\\mathscr{e}} ", "U+2130": "\\mathcal{E} ",
    "U+2131": "\\mathcal{F} ", "U+2133": "\\mathcal{M} ",

    # Arrows
    "U+2190": "\\leftarrow ", "U+2191": "\\uparrow ", "U+2192": "\\rightarrow ",
    "U+2193": "\\downarrow ", "U+2194": "\\leftrightarrow ",
    "U+2195": "\\updownarrow ", "U+2196": "\\nwarrow ", "U+2197": "\\nearrow ",
    "U+2198": "\\searrow ", "U+2199": "\\swarrow ", "U+219D": "\\rightsquigarrow ",
    "U+21A0": "\\twoheadrightarrow ", "U+21A3": "\\rightarrowtail ",
    "U+21A6": "\\mapsto ", "U+21B0": "\\Lsh ", "U+21B1": "\\Rsh ",
    "U+21CB": "\\leftrightharpoons ", "U+21CC": "\\rightleftharpoons ",
    "U+21D0": "\\Leftarrow ", "U+21D1": "\\Uparrow ", "U+21D2": "\\Rightarrow ",
    "U+21D3": "\\Downarrow ", "U+21D4": "\\Leftrightarrow ",
    "U+21D5": "\\Updownarrow ",

    # Mathematical operators
    "U+2200": "\\forall ", "U+2202": "\\partial ", "U+2203": "\\exists ",
    "U+2205": "\\emptyset ", "U+2207": "\\nabla ", "U+2208": "\\in ",
    "U+2209": "\\notin ", "U+220B": "\\ni ", "U+220C": "\\not\\ni ",
    "U+220F": "\\prod ", "U+2211": "\\sum ", "U+2212": "- ", "U+2213": "\\mp ",
    "U+2216": "\\setminus ", "U+2218": "\\circ ", "U+221A": "", "U+221D": "\\propto ",
    "U+221E": "\\infty ", "U+2220": "\\angle ", "U+2221": "\\measuredangle ",
    "U+2222": "\\sphericalangle ", "U+2223": "\\mid ", "U+2225": "\\parallel ",
    "U+2227": "\\wedge ", "U+2228": "\\vee ", "U+2229": "\\cap ", "U+222A": "\\cup ",
    "U+222B": "\\int ", "U+222C": "\\iint ", "U+222D": "\\iiint ", "U+222E": "\\oint ",
    "U+2231": "\\oiint ", "U+2232": "\\oiiint ", "U+2234": "\\therefore ",
    "U+2235": "\\because ", "U+2236": "\\ratio ", "U+2237": "\\Colon ",
    "U+2238": "\\dotminus ", "U+2239": "\\excess ", "U+223B": "\\homothetic ",
    "U+223D": "\\backsim ", "U+223E": "\\lazysinv ", "U+2240": "\\wr ",
    "U+2241": "\\nsim ", "U+2242": "\\eqsim ", "U+2243": "\\simeq ",
    "U+2245": "\\cong ", "U+2246": "\\approxeq ", "U+2247": "\\ncong ",
    "U+2248": "\\approx ", "U+2249": "\\not\\approx ", "U+224D": "\\asymp ",
    "U+224F": "\\bumpeq ", "U+2250": "\\doteq ", "U+2251": "\\Doteq ",
    "U+2254": "\\coloneq ", "U+2255": "\\eqcolon ", "U+2256": "\\eqcirc ",
    "U+2257": "\\circeq ", "U+2258": "\\qed ", "U+2259": "\\stackrel{?}{=} ",
    "U+225A": "\\stackrel{!}{=} ", "U+225B": "\\stackrel{*}{=} ",
    "U+225C": "\\triangleq ", "U+225E": "\\stackrel{m}{=} ", "U+2260": "\\neq ",
    "U+2261": "\\equiv ", "U+2264": "\\leq ", "U+2265": "\\geq ", "U+2266": "\\leqq ",
    "U+2267": "\\geqq ", "U+226A": "\\ll ", "U+226B": "\\gg ", "U+226C": "\\between ",
    "U+226E": "\\nless ", "U+226F": "\\ngtr ", "U+2270": "\\nleq ",
    "U+2271": "\\ngeq ", "U+2272": "\\lesssim ", "U+2273": "\\gtrsim ",
    "U+2276": "\\lessgtr ", "U+2277": "\\gtrless ", "U+227A": "\\prec ",
    "U+227B": "\\succ ", "U+227C": "\\preceq ", "U+227D": "\\succeq ",
    "U+227E": "\\precsim ", "U+227F": "\\succsim ", "U+2282": "\\subset ",
    "U+2283": "\\supset ", "U+2284": "\\not\\subset ", "U+2285": "\\not\\supset ",
    "U+2286": "\\subseteq ", "U+2287": "\\supseteq ", "U+2288": "\\nsubseteq ",
    "U+2289": "\\nsupseteq ", "U+228A": "\\subsetneq ", "U+228B": "\\supsetneq ",
    "U+2295": "\\oplus ", "U+2296": "\\ominus ", "U+2297": "\\otimes ",
    "U+2298": "\\oslash ", "U+2299": "\\odot ", "U+229A": "\\circledcirc ",
    "U+229B": "\\circledast ", "U+229D": "\\circleddash ", "U+229E": "\\boxplus ",
    "U+229F": "\\boxminus ", "U+22A0": "\\boxtimes ", "U+22A1": "\\boxdot ",
    "U+22A2": "\\vdash ", "U+22A3": "\\dashv ", "U+22A8": "\\models ",
    "U+22A9": "\\vDash ", "U+22AA": "\\Vdash ", "U+22AB": "\\VDash ",
    "U+22B2": "\\triangleleft ", "U+22B3": "\\triangleright ",
    "U+22B4": "\\trianglelefteq ", "U+22B5": "\\trianglerighteq ",
    "U+22B8": "\\multimap ", "U+22C0": "\\bigwedge ", "U+22C1": "\\bigvee ",
    "U+22C2": "\\bigcap ", "U+22C3": "\\bigcup ", "U+22C5": "\\cdot ",
    "U+22C6": "\\star ", "U+22C7": "\\divideontimes ", "U+22C8": "\\bowtie ",
    "U+22C9": "\\ltimes ", "U+22CA": "\\rtimes ", "U+22CB": "\\leftthreetimes ",
    "U+22CC": "\\rightthreetimes ", "U+22CE": "\\curlyvee ", "U+22CF": "\\curlywedge ",
    "U+22D0": "\\Subset ", "U+22D1": "\\Supset ", "U+22D2": "\\Cap ",
    "U+22D3": "\\Cup ", "U+22D8": "\\lll ", "U+22D9": "\\ggg ",
    "U+22DA": "\\lesseqgtr ", "U+22DB": "\\gtreqless ",

    # Miscellaneous technical
    "U+2300": "\\diameter ", "U+2302": "\\house ", "U+2308": "\\lceil ",
    "U+2309": "\\rceil ", "U+230A": "\\lfloor ", "U+230B": "\\rfloor ",
    "U+2310": "\\invnot ", "U+2320": "\\top ", "U+2321": "\\bot ",
    "U+2322": "\\frown ", "U+2323": "\\smile ", "U+2329": "\\langle ",
    "U+232A": "\\rangle ",

    # Mathematical brackets
    "U+2713": "\\checkmark ", "U+27E8": "\\langle ", "U+27E9": "\\rangle ",
    "U+2983": "\\{| ", "U+2984": "|\\} ",

    # Bold letters
    "U+1D400": "\\mathbf{A} ", "U+1D401": "\\mathbf{B} ", "U+1D402": "\\mathbf{C} ",
    "U+1D403": "\\mathbf{D} ", "U+1D404": "\\mathbf{E} ", "U+1D405": "\\mathbf{F} ",
    "U+1D406": "\\mathbf{G} ", "U+1D407": "\\mathbf{H} ", "U+1D408": "\\mathbf{I} ",
    "U+1D409": "\\mathbf{J} ", "U+1D40A": "\\mathbf{K} ", "U+1D40B": "\\mathbf{L} ",
    "U+1D40C": "\\mathbf{M} ", "U+1D40D": "\\mathbf{N} ", "U+1D40E": "\\mathbf{O} ",
    "U+1D40F": "\\mathbf{P} ", "U+1D410": "\\mathbf{Q} ", "U+1D411": "\\mathbf{R} ",
    "U+1D412": "\\mathbf{S} ", "U+1D413": "\\mathbf{T} ", "U+1D414": "\\mathbf{U} ",
    "U+1D415": "\\mathbf{V} ", "U+1D416": "\\mathbf{W} ", "U+1D417": "\\mathbf{X} ",
    "U+1D418": "\\mathbf{Y} ", "U+1D419": "\\mathbf{Z} ", "U+1D422": "{\\mathbf{i}} ",
    "U+1D423": "{\\mathbf{j}} ", "U+1D424": "{\\mathbf{k}} ",

    # Italic letters
    "U+1D434": "A ", "U+1D435": "B ", "U+1D436": "C ", "U+1D437": "D ",
    "U+1D438": "E ", "U+1D439": "F ", "U+1D43A": "G ", "U+1D43B": "H ",
    "U+1D43C": "I ", "U+1D43D": "J ", "U+1D43E": "K ", "U+1D43F": "L ",
    "U+1D440": "M ", "U+1D441": "N ", "U+1D442": "O ", "U+1D443": "P ",
    "U+1D444": "Q ", "U+1D445": "R ", "U+1D446": "S ", "U+1D447": "T ",
    "U+1D448": "U ", "U+1D449": "V ", "U+1D44A": "W ", "U+1D44B": "X ",
    "U+1D44C": "Y ", "U+1D44D": "Z ", "U+1D44E": "a ", "U+1D44F": "b ",
    "U+1D450": "c ", "U+1D451": "d ", "U+1D452": "e ", "U+1D453": "f ",
    "U+1D454": "g ", "U+1D455": "h ", "U+1D456": "i ", "U+1D457": "j ",
    "U+1D458": "k ", "U+1D459": "l ", "U+1D45A": "m ", "U+1D45B": "n ",
    "U+1D45C": "o ", "U+1D45D": "p ", "U+1D45E": "q ", "U+1D45F": "r ",
    "U+1D460": "s ", "U+1D461": "t ", "U+1D462": "u ", "U+1D463": "v ",
    "U+1D464": "w ", "U+1D465": "x ", "U+1D466": "y ", "U+1D467": "z ",

    # Script letters
    "U+1D49C": "\\mathcal{A} ", "U+1D49E": "\\mathcal{C} ", "U+1D49F": "\\mathcal{D} ",
    "U+1D4A2": "\\mathcal{G} ", "U+1D4A5": "\\mathcal{J} ", "U+1D4A6": "\\mathcal{K} ",
    "U+1D4A9": "\\mathcal{N} ", "U+1D4AA": "\\mathcal{O} ", "U+1D4AB": "\\mathcal{P} ",
    "U+1D4AC": "\\mathcal{Q} ", "U+1D4AE": "\\mathcal{S} ", "U+1D4AF": "\\mathcal{T} ",
    "U+1D4B0": "\\mathcal{U} ", "U+1D4B1": "\\mathcal{V} ", "U+1D4B2": "\\mathcal{W} ",
    "U+1D4B3": "\\mathcal{X} ", "U+1D4B4": "\\mathcal{Y} ", "U+1D4B5": "\\mathcal{Z} ",

    # Fraktur letters
    "U+1D504": "\\mathfrak{A} ", "U+1D505": "\\mathfrak{B} ",
    "U+1D507": "\\mathfrak{D} ", "U+1D508": "\\mathfrak{E} ",
    "U+1D509": "\\mathfrak{F} ", "U+1D50A": "\\mathfrak{G} ",
    "U+1D50D": "\\mathfrak{J} ", "U+1D50E": "\\mathfrak{K} ",
    "U+1D50F": "\\mathfrak{L} ", "U+1D510": "\\mathfrak{M} ",
    "U+1D511": "\\mathfrak{N} ", "U+1D512": "\\mathfrak{O} ",
    "U+1D513": "\\mathfrak{P} ", "U+1D514": "\\mathfrak{Q} ",
    "U+1D516": "\\mathfrak{S} ", "U+1D517": "\\mathfrak{T} ",
    "U+1D518": "\\mathfrak{U} ", "U+1D519": "\\mathfrak{V} ",
    "U+1D51A": "\\mathfrak{W} ", "U+1D51B": "\\mathfrak{X} ",
    "U+1D51C": "\\mathfrak{Y} ", "U+1D51E": "\\mathfrak{a} ",
    "U+1D51F": "\\mathfrak{b} ", "U+1D520": "\\mathfrak{c} ",
    "U+1D521": "\\mathfrak{d} ", "U+1D522": "\\mathfrak{e} ",
    "U+1D523": "\\mathfrak{f} ", "U+1D524": "\\mathfrak{g} ",
    "U+1D525": "\\mathfrak{h} ", "U+1D526": "\\mathfrak{i} ",
    "U+1D527": "\\mathfrak{j} ", "U+1D528": "\\mathfrak{k} ",
    "U+1D529": "\\mathfrak{l} ", "U+1D52A": "\\mathfrak{m} ",
    "U+1D52B": "\\mathfrak{n} ", "U+1D52C": "\\mathfrak{o} ",
    "U+1D52D": "\\mathfrak{p} ", "U+1D52E": "\\mathfrak{q} ",
    "U+1D52F": "\\mathfrak{r} ", "U+1D530": "\\mathfrak{s} ",
    "U+1D531": "\\mathfrak{t} ", "U+1D532": "\\mathfrak{u} ",
    "U+1D533": "\\mathfrak{v} ", "U+1D534": "\\mathfrak{w} ",
    "U+1D535": "\\mathfrak{x} ", "U+1D536": "\\mathfrak{y} ",
    "U+1D537": "\\mathfrak{z} ",

    # Double-struck letters
    "U+1D538": "\\mathbb{A} ", "U+1D539": "\\mathbb{B} ", "U+1D53B": "\\mathbb{D} ",
    "U+1D53C": "\\mathbb{E} ", "U+1D53D": "\\mathbb{F} ", "U+1D53E": "\\mathbb{G} ",
    "U+1D540": "\\mathbb{I} ", "U+1D541": "\\mathbb{J} ", "U+1D542": "\\mathbb{K} ",
    "U+1D543": "\\mathbb{L} ", "U+1D544": "\\mathbb{M} ", "U+1D546": "\\mathbb{O} ",
    "U+1D54A": "\\mathbb{S} ", "U+1D54B": "\\mathbb{T} ", "U+1D54C": "\\mathbb{U} ",
    "U+1D54D": "\\mathbb{V} ", "U+1D54E": "\\mathbb{W} ", "U+1D54F": "\\mathbb{X} ",
    "U+1D550": "\\mathbb{Y} ", "U+1D552": "\\mathbb{a} ", "U+1D553": "\\mathbb{b} ",
    "U+1D554": "\\mathbb{c} ", "U+1D555": "\\mathbb{d} ", "U+1D556": "\\mathbb{e} ",
    "U+1D557": "\\mathbb{f} ", "U+1D558": "\\mathbb{g} ", "U+1D559": "\\mathbb{h} ",
    "U+1D55A": "\\mathbb{i} ", "U+1D55B": "\\mathbb{j} ", "U+1D55C": "\\mathbb{k} ",
    "U+1D55D": "\\mathbb{l} ", "U+1D55E": "\\mathbb{m} ", "U+1D55F": "\\mathbb{n} ",
    "U+1D560": "\\mathbb{o} ", "U+1D561": "\\mathbb{p} ", "U+1D562": "\\mathbb{q} ",
    "U+1D563": "\\mathbb{r} ", "U+1D564": "\\mathbb{s} ", "U+1D565": "\\mathbb{t} ",
    "U+1D566": "\\mathbb{u} ", "U+1D567": "\\mathbb{v} ", "U+1D568": "\\mathbb{w} ",
    "U+1D569": "\\mathbb{x} ", "U+1D56A": "\\mathbb{y} ", "U+1D56B": "\\mathbb{z} ",

    # Italic Greek
    "U+1D6E2": "\\mathit{\\Gamma} ", "U+1D6E3": "\\mathit{\\Delta} ",
    "U+1D6E7": "\\mathit{\\Theta} ", "U+1D6EA": "\\mathit{\\Lambda} ",
    "U+1D6EC": "\\mathit{\\Xi} ", "U+1D6ED": "\\mathit{\\Pi} ",
    "U+1D6EF": "\\mathit{\\Sigma} ", "U+1D6F1": "\\mathit{\\Upsilon} ",
    "U+1D6F2": "\\mathit{\\Phi} ", "U+1D6F4": "\\mathit{\\Psi} ",
    "U+1D6F6": "\\mathit{\\Omega} ", "U+1D6FC": "\\alpha ", "U+1D6FD": "\\beta ",
    "U+1D6FE": "\\gamma ", "U+1D6FF": "\\delta ", "U+1D700": "\\epsilon ",
    "U+1D701": "\\zeta ", "U+1D702": "\\eta ", "U+1D703": "\\theta ",
    "U+1D704": "\\iota ", "U+1D705": "\\kappa ", "U+1D706": "\\lambda ",
    "U+1D707": "\\mu ", "U+1D708": "\\nu ", "U+1D709": "\\xi ", "U+1D70A": "o ",
    "U+1D70B": "\\pi ", "U+1D70C": "\\rho ", "U+1D70D": "\\varsigma ",
    "U+1D70E": "\\sigma ", "U+1D70F": "\\tau ", "U+1D710": "\\upsilon ",
    "U+1D712": "\\chi ", "U+1D713": "\\psi ", "U+1D714": "\\omega ",
    "U+1D715": "\\partial ", "U+1D716": "\\vartheta ", "U+1D717": "\\varphi ",
    "U+1D718": "\\varpi ", "U+1D719": "\\phi ", "U+1D71A": "\\varrho ",
    "U+1D71B": "\\varepsilon ",
})


def is_combining(code_point: int) -> bool:
    """Return True for zero-width combining marks."""
    return any(low <= code_point <= high for low, high in _COMBINING_RANGES)


def normalize_code_point(raw: str) -> Optional[str]:
    """
    Normalize a raw glyph code ("1D434", "u+3c0", "0x2212") to "U+XXXX".

    Returns None when the code cannot be parsed as hexadecimal.
    """
    if raw is None:
        return None
    match = _CODE_POINT_RE.match(raw.strip())
    if not match:
        return None
    digits = match.group(1).upper().lstrip('0') or '0'
    return "U+" + digits.rjust(4, '0')


def is_standard_function(name: str) -> bool:
    """Check if the name is a standard mathematical function (case-insensitive)."""
    if not name:
        return False
    return name.strip().lower() in STANDARD_FUNCTIONS


def function_macro(name: str) -> str:
    """Return the LaTeX macro for a standard function name, e.g. "\\sin "."""
    return '\\' + name.strip().lower() + ' '


@dataclass(frozen=True)
class SymbolTable:
    """Immutable bundle of the lookup tables a converter consults."""

    operators: Mapping[str, str] = field(default_factory=lambda: OPERATOR_MAPPINGS)
    unicode: Mapping[str, str] = field(default_factory=lambda: UNICODE_TO_TEX)
    functions: Tuple[str, ...] = field(default=STANDARD_FUNCTIONS)

    def is_function(self, name: str) -> bool:
        if not name:
            return False
        return name.strip().lower() in self.functions

    def is_function_prefix(self, prefix: str) -> bool:
        """True if some standard function name starts with ``prefix``."""
        if not prefix:
            return False
        prefix = prefix.lower()
        return any(name.startswith(prefix) for name in self.functions)

    def operator(self, glyph: str) -> Optional[str]:
        return self.operators.get(glyph)

    def code_point_to_tex(self, raw_code: str) -> str:
        """
        Resolve a glyph code to its LaTeX token.

        Unknown code points fall back to the literal character followed by a
        space (no space for combining marks). Unparseable codes become a
        bracketed placeholder. Never raises.
        """
        key = normalize_code_point(raw_code)
        if key is None:
            return f"[U+{str(raw_code).strip().upper()}]"
        mapped = self.unicode.get(key)
        if mapped is not None:
            return mapped
        code_point = int(key[2:], 16)
        try:
            char = chr(code_point)
        except (ValueError, OverflowError):
            return f"[{key}]"
        if is_combining(code_point):
            return char
        return char + ' '

    def char_to_tex(self, char: str) -> Optional[str]:
        """Return the table entry for a single literal character, if any."""
        if len(char) != 1:
            return None
        return self.unicode.get("U+" + format(ord(char), "04X"))


DEFAULT_SYMBOLS = SymbolTable()
