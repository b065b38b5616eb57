# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Font constants for the Standard-14 fonts."""

# Standard 14 PDF fonts (not embedded in standard PDFs)
STANDARD_14_FONTS = frozenset(
    {
        "Courier",
        "Courier-Bold",
        "Courier-BoldOblique",
        "Courier-Oblique",
        "Helvetica",
        "Helvetica-Bold",
        "Helvetica-BoldOblique",
        "Helvetica-Oblique",
        "Times-Roman",
        "Times-Bold",
        "Times-BoldItalic",
        "Times-Italic",
        "Symbol",
        "ZapfDingbats",
    }
)

# Symbol fonts (use their built-in encoding instead of WinAnsiEncoding)
SYMBOL_FONTS = frozenset({"Symbol", "ZapfDingbats"})

# Directory searched for <FontName>.afm before the packaged metrics
AFM_PATH_ENV = "PDFCANVAS_AFM_PATH"

# Width used for codes whose glyph has no metrics entry (PDF MissingWidth)
DEFAULT_MISSING_WIDTH = 0

# Glyph space units per text space unit for Type 1 fonts
GLYPH_SPACE_UNITS = 1000
