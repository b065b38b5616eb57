# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Single-byte encodings for the Standard-14 fonts.

Each encoding maps byte codes to Adobe glyph names and to Unicode
characters, in both directions. Text fonts use WinAnsiEncoding; Symbol and
ZapfDingbats use their own built-in encodings.

String escaping for PDF literal strings lives here as well, because it must
run on the bytes produced by an encoding and never on the Unicode text.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from fontTools.agl import AGL2UV

from ..exceptions import UnmappableCharacterError

logger = logging.getLogger(__name__)

# Bytes with special meaning inside a PDF literal string
_LITERAL_METACHARS = frozenset(b"\\()")


@dataclass(frozen=True, eq=False)
class Encoding:
    """An immutable single-byte font encoding.

    Attributes:
        name: Encoding name, e.g. ``WinAnsiEncoding``.
        pdf_name: Name written as the font's /Encoding entry, or None when
            the font's built-in encoding is used.
        code_to_glyph: Byte code to glyph name.
        code_to_unicode: Byte code to Unicode character.
        unicode_to_code: Unicode character to byte code (the inverse).
        fallback: Character substituted for unmappable input, or None if
            unmappable input is an error.
    """

    name: str
    pdf_name: str | None
    code_to_glyph: Mapping[int, str]
    code_to_unicode: Mapping[int, str]
    unicode_to_code: Mapping[str, int]
    fallback: str | None = None

    def glyph_name(self, code: int) -> str | None:
        """Returns the glyph name for a byte code."""
        return self.code_to_glyph.get(code)

    def code_for_glyph(self, glyph: str) -> int | None:
        """Returns the byte code that selects a glyph name.

        Glyph names are case sensitive. If the name is not part of the
        encoding, None is returned.
        """
        return self._glyph_to_code.get(glyph)

    @property
    def _glyph_to_code(self) -> dict[str, int]:
        cached = self.__dict__.get("_glyph_index")
        if cached is None:
            cached = {}
            for code, glyph in sorted(self.code_to_glyph.items()):
                cached.setdefault(glyph, code)
            object.__setattr__(self, "_glyph_index", cached)
        return cached

    def encode_char(self, char: str) -> int | None:
        """Returns the byte code for a single character, or None."""
        return self.unicode_to_code.get(char)

    def encode_with_gaps(
        self, text: str, *, strict: bool = False
    ) -> tuple[bytes, list[str]]:
        """Encodes text and reports the characters that had to be replaced.

        Args:
            text: Unicode text.
            strict: Raise instead of substituting the fallback character.

        Returns:
            Tuple of (encoded bytes, list of unmappable characters in order
            of appearance).

        Raises:
            UnmappableCharacterError: If a character is unmappable and
                either ``strict`` is set or the encoding has no fallback.
        """
        out = bytearray()
        gaps: list[str] = []
        for char in text:
            code = self.unicode_to_code.get(char)
            if code is None:
                if strict or self.fallback is None:
                    raise UnmappableCharacterError(char, self.name)
                gaps.append(char)
                code = self.unicode_to_code[self.fallback]
            out.append(code)
        return bytes(out), gaps

    def encode(self, text: str, *, strict: bool = False) -> bytes:
        """Encodes text, substituting the fallback for unmappable characters.

        Every substitution is logged as a warning.
        """
        data, gaps = self.encode_with_gaps(text, strict=strict)
        if gaps:
            logger.warning(
                "%d character(s) not in %s replaced by %r: %s",
                len(gaps),
                self.name,
                self.fallback,
                "".join(dict.fromkeys(gaps)),
            )
        return data

    def decode(self, data: bytes) -> str:
        """Decodes bytes back to text; unknown codes become U+FFFD."""
        return "".join(self.code_to_unicode.get(b, "�") for b in data)


def encode(text: str, encoding: Encoding, *, strict: bool = False) -> bytes:
    """Encodes text with the given encoding."""
    return encoding.encode(text, strict=strict)


def escape_for_literal(data: bytes) -> bytes:
    """Escapes encoded bytes for use inside a PDF literal string.

    Backslash and both parentheses are each prefixed with a backslash.
    Must be applied to already-encoded bytes.
    """
    out = bytearray()
    for byte in data:
        if byte in _LITERAL_METACHARS:
            out.append(0x5C)
        out.append(byte)
    return bytes(out)


def unescape_literal(data: bytes) -> bytes:
    """Reverses :func:`escape_for_literal`."""
    out = bytearray()
    escaped = False
    for byte in data:
        if not escaped and byte == 0x5C:
            escaped = True
            continue
        escaped = False
        out.append(byte)
    return bytes(out)


def _build(
    name: str,
    pdf_name: str | None,
    entries: list[tuple[int, str, str]],
    fallback: str | None,
) -> Encoding:
    """Builds an Encoding from (code, glyph name, character) entries.

    Every character maps to exactly one code and back, so anything that
    encodes also decodes to itself. Look-alike code points are not
    accepted. Glyphs without a Unicode value get an empty string and are
    reachable by glyph name only.

    Raises:
        ValueError: If two entries claim the same code or character.
    """
    code_to_glyph: dict[int, str] = {}
    code_to_unicode: dict[int, str] = {}
    unicode_to_code: dict[str, int] = {}
    for code, glyph, char in entries:
        if code in code_to_glyph:
            raise ValueError(f"{name}: code {code} defined twice")
        code_to_glyph[code] = glyph
        if not char:
            continue
        if len(char) != 1 or char in unicode_to_code:
            raise ValueError(f"{name}: bad or duplicate character {char!r}")
        code_to_unicode[code] = char
        unicode_to_code[char] = code
    return Encoding(
        name=name,
        pdf_name=pdf_name,
        code_to_glyph=MappingProxyType(code_to_glyph),
        code_to_unicode=MappingProxyType(code_to_unicode),
        unicode_to_code=MappingProxyType(unicode_to_code),
        fallback=fallback,
    )


# ---------------------------------------------------------------------------
# WinAnsiEncoding (ISO 32000-1, Annex D)
# ---------------------------------------------------------------------------


def _block(start: int, names: str) -> dict[int, str]:
    return {start + i: glyph for i, glyph in enumerate(names.split())}


WIN_ANSI_GLYPHS: dict[int, str] = {
    **_block(
        0o40,
        "space exclam quotedbl numbersign dollar percent ampersand quotesingle "
        "parenleft parenright asterisk plus comma hyphen period slash "
        "zero one two three four five six seven eight nine colon semicolon "
        "less equal greater question at A B C D E F G H I J K L M N O P Q R S "
        "T U V W X Y Z bracketleft backslash bracketright asciicircum "
        "underscore grave a b c d e f g h i j k l m n o p q r s t u v w x y z "
        "braceleft bar braceright asciitilde",
    ),
    **_block(
        0o200,
        "Euro - quotesinglbase florin quotedblbase ellipsis dagger daggerdbl "
        "circumflex perthousand Scaron guilsinglleft OE - Zcaron - "
        "- quoteleft quoteright quotedblleft quotedblright bullet endash emdash "
        "tilde trademark scaron guilsinglright oe - zcaron Ydieresis",
    ),
    **_block(
        0o240,
        "space exclamdown cent sterling currency yen brokenbar section "
        "dieresis copyright ordfeminine guillemotleft logicalnot hyphen "
        "registered macron degree plusminus twosuperior threesuperior acute "
        "mu paragraph periodcentered cedilla onesuperior ordmasculine "
        "guillemotright onequarter onehalf threequarters questiondown "
        "Agrave Aacute Acircumflex Atilde Adieresis Aring AE Ccedilla "
        "Egrave Eacute Ecircumflex Edieresis Igrave Iacute Icircumflex "
        "Idieresis Eth Ntilde Ograve Oacute Ocircumflex Otilde Odieresis "
        "multiply Oslash Ugrave Uacute Ucircumflex Udieresis Yacute Thorn "
        "germandbls agrave aacute acircumflex atilde adieresis aring ae "
        "ccedilla egrave eacute ecircumflex edieresis igrave iacute "
        "icircumflex idieresis eth ntilde ograve oacute ocircumflex otilde "
        "odieresis divide oslash ugrave uacute ucircumflex udieresis yacute "
        "thorn ydieresis",
    ),
}
# "-" marks the codes left undefined in WinAnsiEncoding
WIN_ANSI_GLYPHS = {c: g for c, g in WIN_ANSI_GLYPHS.items() if g != "-"}


def _win_ansi_entries() -> list[tuple[int, str, str]]:
    entries = []
    for code, glyph in sorted(WIN_ANSI_GLYPHS.items()):
        if 0x80 <= code <= 0x9F:
            # Windows-1252 block: look the character up by glyph name
            char = chr(AGL2UV[glyph])
        else:
            char = chr(code)
        entries.append((code, glyph, char))
    return entries


WIN_ANSI_ENCODING = _build(
    "WinAnsiEncoding", "WinAnsiEncoding", _win_ansi_entries(), fallback="?"
)


# ---------------------------------------------------------------------------
# Symbol font built-in encoding
# https://unicode.org/Public/MAPPINGS/VENDORS/ADOBE/symbol.txt
# ---------------------------------------------------------------------------

_SYMBOL_ENTRIES: list[tuple[int, str, str]] = [
    (0o040, "space", " "),
    (0o041, "exclam", "!"),
    (0o042, "universal", "∀"),
    (0o043, "numbersign", "#"),
    (0o044, "existential", "∃"),
    (0o045, "percent", "%"),
    (0o046, "ampersand", "&"),
    (0o047, "suchthat", "∋"),
    (0o050, "parenleft", "("),
    (0o051, "parenright", ")"),
    (0o052, "asteriskmath", "∗"),
    (0o053, "plus", "+"),
    (0o054, "comma", ","),
    (0o055, "minus", "−"),
    (0o056, "period", "."),
    (0o057, "slash", "/"),
    (0o060, "zero", "0"),
    (0o061, "one", "1"),
    (0o062, "two", "2"),
    (0o063, "three", "3"),
    (0o064, "four", "4"),
    (0o065, "five", "5"),
    (0o066, "six", "6"),
    (0o067, "seven", "7"),
    (0o070, "eight", "8"),
    (0o071, "nine", "9"),
    (0o072, "colon", ":"),
    (0o073, "semicolon", ";"),
    (0o074, "less", "<"),
    (0o075, "equal", "="),
    (0o076, "greater", ">"),
    (0o077, "question", "?"),
    (0o100, "congruent", "≅"),
    (0o101, "Alpha", "Α"),
    (0o102, "Beta", "Β"),
    (0o103, "Chi", "Χ"),
    (0o104, "Delta", "Δ"),
    (0o105, "Epsilon", "Ε"),
    (0o106, "Phi", "Φ"),
    (0o107, "Gamma", "Γ"),
    (0o110, "Eta", "Η"),
    (0o111, "Iota", "Ι"),
    (0o112, "theta1", "ϑ"),
    (0o113, "Kappa", "Κ"),
    (0o114, "Lambda", "Λ"),
    (0o115, "Mu", "Μ"),
    (0o116, "Nu", "Ν"),
    (0o117, "Omicron", "Ο"),
    (0o120, "Pi", "Π"),
    (0o121, "Theta", "Θ"),
    (0o122, "Rho", "Ρ"),
    (0o123, "Sigma", "Σ"),
    (0o124, "Tau", "Τ"),
    (0o125, "Upsilon", "Υ"),
    (0o126, "sigma1", "ς"),
    (0o127, "Omega", "Ω"),
    (0o130, "Xi", "Ξ"),
    (0o131, "Psi", "Ψ"),
    (0o132, "Zeta", "Ζ"),
    (0o133, "bracketleft", "["),
    (0o134, "therefore", "∴"),
    (0o135, "bracketright", "]"),
    (0o136, "perpendicular", "⊥"),
    (0o137, "underscore", "_"),
    (0o140, "radicalex", ""),
    (0o141, "alpha", "α"),
    (0o142, "beta", "β"),
    (0o143, "chi", "χ"),
    (0o144, "delta", "δ"),
    (0o145, "epsilon", "ε"),
    (0o146, "phi", "φ"),
    (0o147, "gamma", "γ"),
    (0o150, "eta", "η"),
    (0o151, "iota", "ι"),
    (0o152, "phi1", "ϕ"),
    (0o153, "kappa", "κ"),
    (0o154, "lambda", "λ"),
    (0o155, "mu", "μ"),
    (0o156, "nu", "ν"),
    (0o157, "omicron", "ο"),
    (0o160, "pi", "π"),
    (0o161, "theta", "θ"),
    (0o162, "rho", "ρ"),
    (0o163, "sigma", "σ"),
    (0o164, "tau", "τ"),
    (0o165, "upsilon", "υ"),
    (0o166, "omega1", "ϖ"),
    (0o167, "omega", "ω"),
    (0o170, "xi", "ξ"),
    (0o171, "psi", "ψ"),
    (0o172, "zeta", "ζ"),
    (0o173, "braceleft", "{"),
    (0o174, "bar", "|"),
    (0o175, "braceright", "}"),
    (0o176, "similar", "∼"),
    (0o240, "Euro", "€"),
    (0o241, "Upsilon1", "ϒ"),
    (0o242, "minute", "′"),
    (0o243, "lessequal", "≤"),
    (0o244, "fraction", "⁄"),
    (0o245, "infinity", "∞"),
    (0o246, "florin", "ƒ"),
    (0o247, "club", "♣"),
    (0o250, "diamond", "♦"),
    (0o251, "heart", "♥"),
    (0o252, "spade", "♠"),
    (0o253, "arrowboth", "↔"),
    (0o254, "arrowleft", "←"),
    (0o255, "arrowup", "↑"),
    (0o256, "arrowright", "→"),
    (0o257, "arrowdown", "↓"),
    (0o260, "degree", "°"),
    (0o261, "plusminus", "±"),
    (0o262, "second", "″"),
    (0o263, "greaterequal", "≥"),
    (0o264, "multiply", "×"),
    (0o265, "proportional", "∝"),
    (0o266, "partialdiff", "∂"),
    (0o267, "bullet", "•"),
    (0o270, "divide", "÷"),
    (0o271, "notequal", "≠"),
    (0o272, "equivalence", "≡"),
    (0o273, "approxequal", "≈"),
    (0o274, "ellipsis", "…"),
    (0o275, "arrowvertex", "⏐"),
    (0o276, "arrowhorizex", "⎯"),
    (0o277, "carriagereturn", "↵"),
    (0o300, "aleph", "ℵ"),
    (0o301, "Ifraktur", "ℑ"),
    (0o302, "Rfraktur", "ℜ"),
    (0o303, "weierstrass", "℘"),
    (0o304, "circlemultiply", "⊗"),
    (0o305, "circleplus", "⊕"),
    (0o306, "emptyset", "∅"),
    (0o307, "intersection", "∩"),
    (0o310, "union", "∪"),
    (0o311, "propersuperset", "⊃"),
    (0o312, "reflexsuperset", "⊇"),
    (0o313, "notsubset", "⊄"),
    (0o314, "propersubset", "⊂"),
    (0o315, "reflexsubset", "⊆"),
    (0o316, "element", "∈"),
    (0o317, "notelement", "∉"),
    (0o320, "angle", "∠"),
    (0o321, "gradient", "∇"),
    (0o322, "registerserif", "®"),
    (0o323, "copyrightserif", "©"),
    (0o324, "trademarkserif", "™"),
    (0o325, "product", "∏"),
    (0o326, "radical", "√"),
    (0o327, "dotmath", "⋅"),
    (0o330, "logicalnot", "¬"),
    (0o331, "logicaland", "∧"),
    (0o332, "logicalor", "∨"),
    (0o333, "arrowdblboth", "⇔"),
    (0o334, "arrowdblleft", "⇐"),
    (0o335, "arrowdblup", "⇑"),
    (0o336, "arrowdblright", "⇒"),
    (0o337, "arrowdbldown", "⇓"),
    (0o340, "lozenge", "◊"),
    (0o341, "angleleft", "〈"),
    # Sans-serif variants have no Unicode value of their own and are
    # reachable by glyph name only.
    (0o342, "registersans", ""),
    (0o343, "copyrightsans", ""),
    (0o344, "trademarksans", ""),
    (0o345, "summation", "∑"),
    (0o346, "parenlefttp", "⎛"),
    (0o347, "parenleftex", "⎜"),
    (0o350, "parenleftbt", "⎝"),
    (0o351, "bracketlefttp", "⎡"),
    (0o352, "bracketleftex", "⎢"),
    (0o353, "bracketleftbt", "⎣"),
    (0o354, "bracelefttp", "⎧"),
    (0o355, "braceleftmid", "⎨"),
    (0o356, "braceleftbt", "⎩"),
    (0o357, "braceex", "⎪"),
    (0o361, "angleright", "〉"),
    (0o362, "integral", "∫"),
    (0o363, "integraltp", "⌠"),
    (0o364, "integralex", "⎮"),
    (0o365, "integralbt", "⌡"),
    (0o366, "parenrighttp", "⎞"),
    (0o367, "parenrightex", "⎟"),
    (0o370, "parenrightbt", "⎠"),
    (0o371, "bracketrighttp", "⎤"),
    (0o372, "bracketrightex", "⎥"),
    (0o373, "bracketrightbt", "⎦"),
    (0o374, "bracerighttp", "⎫"),
    (0o375, "bracerightmid", "⎬"),
    (0o376, "bracerightbt", "⎭"),
]

SYMBOL_ENCODING = _build("SymbolEncoding", None, _SYMBOL_ENTRIES, fallback="?")


# ---------------------------------------------------------------------------
# ZapfDingbats font built-in encoding
# https://unicode.org/Public/MAPPINGS/VENDORS/ADOBE/zdingbat.txt
# ---------------------------------------------------------------------------

_ZAPFDINGBATS_GLYPHS: list[tuple[int, str, int]] = [
    (0o040, "space", 0x0020),
    (0o041, "a1", 0x2701),
    (0o042, "a2", 0x2702),
    (0o043, "a202", 0x2703),
    (0o044, "a3", 0x2704),
    (0o045, "a4", 0x260E),
    (0o046, "a5", 0x2706),
    (0o047, "a119", 0x2707),
    (0o050, "a118", 0x2708),
    (0o051, "a117", 0x2709),
    (0o052, "a11", 0x261B),
    (0o053, "a12", 0x261E),
    (0o054, "a13", 0x270C),
    (0o055, "a14", 0x270D),
    (0o056, "a15", 0x270E),
    (0o057, "a16", 0x270F),
    (0o060, "a105", 0x2710),
    (0o061, "a17", 0x2711),
    (0o062, "a18", 0x2712),
    (0o063, "a19", 0x2713),
    (0o064, "a20", 0x2714),
    (0o065, "a21", 0x2715),
    (0o066, "a22", 0x2716),
    (0o067, "a23", 0x2717),
    (0o070, "a24", 0x2718),
    (0o071, "a25", 0x2719),
    (0o072, "a26", 0x271A),
    (0o073, "a27", 0x271B),
    (0o074, "a28", 0x271C),
    (0o075, "a6", 0x271D),
    (0o076, "a7", 0x271E),
    (0o077, "a8", 0x271F),
    (0o100, "a9", 0x2720),
    (0o101, "a10", 0x2721),
    (0o102, "a29", 0x2722),
    (0o103, "a30", 0x2723),
    (0o104, "a31", 0x2724),
    (0o105, "a32", 0x2725),
    (0o106, "a33", 0x2726),
    (0o107, "a34", 0x2727),
    (0o110, "a35", 0x2605),
    (0o111, "a36", 0x2729),
    (0o112, "a37", 0x272A),
    (0o113, "a38", 0x272B),
    (0o114, "a39", 0x272C),
    (0o115, "a40", 0x272D),
    (0o116, "a41", 0x272E),
    (0o117, "a42", 0x272F),
    (0o120, "a43", 0x2730),
    (0o121, "a44", 0x2731),
    (0o122, "a45", 0x2732),
    (0o123, "a46", 0x2733),
    (0o124, "a47", 0x2734),
    (0o125, "a48", 0x2735),
    (0o126, "a49", 0x2736),
    (0o127, "a50", 0x2737),
    (0o130, "a51", 0x2738),
    (0o131, "a52", 0x2739),
    (0o132, "a53", 0x273A),
    (0o133, "a54", 0x273B),
    (0o134, "a55", 0x273C),
    (0o135, "a56", 0x273D),
    (0o136, "a57", 0x273E),
    (0o137, "a58", 0x273F),
    (0o140, "a59", 0x2740),
    (0o141, "a60", 0x2741),
    (0o142, "a61", 0x2742),
    (0o143, "a62", 0x2743),
    (0o144, "a63", 0x2744),
    (0o145, "a64", 0x2745),
    (0o146, "a65", 0x2746),
    (0o147, "a66", 0x2747),
    (0o150, "a67", 0x2748),
    (0o151, "a68", 0x2749),
    (0o152, "a69", 0x274A),
    (0o153, "a70", 0x274B),
    (0o154, "a71", 0x25CF),
    (0o155, "a72", 0x274D),
    (0o156, "a73", 0x25A0),
    (0o157, "a74", 0x274F),
    (0o160, "a203", 0x2750),
    (0o161, "a75", 0x2751),
    (0o162, "a204", 0x2752),
    (0o163, "a76", 0x25B2),
    (0o164, "a77", 0x25BC),
    (0o165, "a78", 0x25C6),
    (0o166, "a79", 0x2756),
    (0o167, "a81", 0x25D7),
    (0o170, "a82", 0x2758),
    (0o171, "a83", 0x2759),
    (0o172, "a84", 0x275A),
    (0o173, "a97", 0x275B),
    (0o174, "a98", 0x275C),
    (0o175, "a99", 0x275D),
    (0o176, "a100", 0x275E),
    (0o200, "a89", 0x2768),
    (0o201, "a90", 0x2769),
    (0o202, "a93", 0x276A),
    (0o203, "a94", 0x276B),
    (0o204, "a91", 0x276C),
    (0o205, "a92", 0x276D),
    (0o206, "a205", 0x276E),
    (0o207, "a85", 0x276F),
    (0o210, "a206", 0x2770),
    (0o211, "a86", 0x2771),
    (0o212, "a87", 0x2772),
    (0o213, "a88", 0x2773),
    (0o214, "a95", 0x2774),
    (0o215, "a96", 0x2775),
    (0o241, "a101", 0x2761),
    (0o242, "a102", 0x2762),
    (0o243, "a103", 0x2763),
    (0o244, "a104", 0x2764),
    (0o245, "a106", 0x2765),
    (0o246, "a107", 0x2766),
    (0o247, "a108", 0x2767),
    (0o250, "a112", 0x2663),
    (0o251, "a111", 0x2666),
    (0o252, "a110", 0x2665),
    (0o253, "a109", 0x2660),
    (0o254, "a120", 0x2460),
    (0o255, "a121", 0x2461),
    (0o256, "a122", 0x2462),
    (0o257, "a123", 0x2463),
    (0o260, "a124", 0x2464),
    (0o261, "a125", 0x2465),
    (0o262, "a126", 0x2466),
    (0o263, "a127", 0x2467),
    (0o264, "a128", 0x2468),
    (0o265, "a129", 0x2469),
    (0o266, "a130", 0x2776),
    (0o267, "a131", 0x2777),
    (0o270, "a132", 0x2778),
    (0o271, "a133", 0x2779),
    (0o272, "a134", 0x277A),
    (0o273, "a135", 0x277B),
    (0o274, "a136", 0x277C),
    (0o275, "a137", 0x277D),
    (0o276, "a138", 0x277E),
    (0o277, "a139", 0x277F),
    (0o300, "a140", 0x2780),
    (0o301, "a141", 0x2781),
    (0o302, "a142", 0x2782),
    (0o303, "a143", 0x2783),
    (0o304, "a144", 0x2784),
    (0o305, "a145", 0x2785),
    (0o306, "a146", 0x2786),
    (0o307, "a147", 0x2787),
    (0o310, "a148", 0x2788),
    (0o311, "a149", 0x2789),
    (0o312, "a150", 0x278A),
    (0o313, "a151", 0x278B),
    (0o314, "a152", 0x278C),
    (0o315, "a153", 0x278D),
    (0o316, "a154", 0x278E),
    (0o317, "a155", 0x278F),
    (0o320, "a156", 0x2790),
    (0o321, "a157", 0x2791),
    (0o322, "a158", 0x2792),
    (0o323, "a159", 0x2793),
    (0o324, "a160", 0x2794),
    (0o325, "a161", 0x2192),
    (0o326, "a163", 0x2194),
    (0o327, "a164", 0x2195),
    (0o330, "a196", 0x2798),
    (0o331, "a165", 0x2799),
    (0o332, "a192", 0x279A),
    (0o333, "a166", 0x279B),
    (0o334, "a167", 0x279C),
    (0o335, "a168", 0x279D),
    (0o336, "a169", 0x279E),
    (0o337, "a170", 0x279F),
    (0o340, "a171", 0x27A0),
    (0o341, "a172", 0x27A1),
    (0o342, "a173", 0x27A2),
    (0o343, "a162", 0x27A3),
    (0o344, "a174", 0x27A4),
    (0o345, "a175", 0x27A5),
    (0o346, "a176", 0x27A6),
    (0o347, "a177", 0x27A7),
    (0o350, "a178", 0x27A8),
    (0o351, "a179", 0x27A9),
    (0o352, "a193", 0x27AA),
    (0o353, "a180", 0x27AB),
    (0o354, "a199", 0x27AC),
    (0o355, "a181", 0x27AD),
    (0o356, "a200", 0x27AE),
    (0o357, "a182", 0x27AF),
    (0o361, "a201", 0x27B1),
    (0o362, "a183", 0x27B2),
    (0o363, "a184", 0x27B3),
    (0o364, "a197", 0x27B4),
    (0o365, "a185", 0x27B5),
    (0o366, "a194", 0x27B6),
    (0o367, "a198", 0x27B7),
    (0o370, "a186", 0x27B8),
    (0o371, "a195", 0x27B9),
    (0o372, "a187", 0x27BA),
    (0o373, "a188", 0x27BB),
    (0o374, "a189", 0x27BC),
    (0o375, "a190", 0x27BD),
    (0o376, "a191", 0x27BE),
]

# No glyph in ZapfDingbats is a sensible stand-in, so unmappable input
# is always an error.
ZAPFDINGBATS_ENCODING = _build(
    "ZapfDingbatsEncoding",
    None,
    [(code, glyph, chr(cp)) for code, glyph, cp in _ZAPFDINGBATS_GLYPHS],
    fallback=None,
)

ENCODINGS: dict[str, Encoding] = {
    enc.name: enc
    for enc in (WIN_ANSI_ENCODING, SYMBOL_ENCODING, ZAPFDINGBATS_ENCODING)
}
